"""API Dependencies — FastAPI providers for the authenticated user and board services.

Invariants:
    - get_current_user runs before any board route body; failure is a 401 with
      WWW-Authenticate so browsers prompt for credentials
    - The token registry is the one created with the app (app.state.token_registry)
    - get_tracking_manager builds the hasher from Settings; the secret never leaves it

Design Decisions:
    - Every collaborator is a dependency so tests swap it via app.dependency_overrides
    - User store cached per htpasswd path (file is re-read on change by the store)
"""

import logging
from functools import lru_cache
from datetime import timedelta
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from board.config import Settings, get_settings
from board.core.domain_types import UserIdentity
from board.core.integrity_hasher import IntegrityHasher
from board.core.one_time_tokens import OneTimeTokenRegistry
from board.core.tracking_identifier import TrackingIdentifierManager
from board.infrastructure.database import get_db
from board.infrastructure.post_repository import SqlAlchemyPostRepository
from board.infrastructure.user_store import HtpasswdUserStore
from board.services.post_coordinator import PostCoordinator

logger = logging.getLogger(__name__)

security = HTTPBasic(realm=get_settings().auth_realm)


@lru_cache
def _user_store_for(path: str) -> HtpasswdUserStore:
    return HtpasswdUserStore.from_path(path)


def get_user_store(
    settings: Settings = Depends(get_settings),
) -> HtpasswdUserStore:
    return _user_store_for(settings.htpasswd_path)


def get_current_user(
    credentials: HTTPBasicCredentials = Depends(security),
    users: HtpasswdUserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> UserIdentity:
    """Resolve the Basic-auth user or challenge the client again."""
    if not users.check(credentials.username, credentials.password):
        logger.warning(
            "Rejected credentials", extra={"user": credentials.username},
        )
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": f'Basic realm="{settings.auth_realm}"'},
        )
    return UserIdentity(credentials.username)


def get_token_registry(request: Request) -> OneTimeTokenRegistry:
    return request.app.state.token_registry


def get_tracking_manager(
    settings: Settings = Depends(get_settings),
) -> TrackingIdentifierManager:
    hasher = IntegrityHasher(settings.tracking_secret_key.get_secret_value())
    return TrackingIdentifierManager(
        hasher, ttl=timedelta(hours=settings.tracking_cookie_ttl_hours),
    )


def get_post_coordinator(
    db: AsyncSession = Depends(get_db),
    tokens: OneTimeTokenRegistry = Depends(get_token_registry),
    tracking: TrackingIdentifierManager = Depends(get_tracking_manager),
    settings: Settings = Depends(get_settings),
) -> PostCoordinator:
    return PostCoordinator(
        SqlAlchemyPostRepository(db),
        tokens,
        tracking,
        admin_user=settings.admin_user,
        display_tz=ZoneInfo(settings.display_timezone),
    )
