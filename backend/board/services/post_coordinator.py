"""Post Coordinator — authorization checks around listing, creating and deleting posts.

Invariants:
    - ensure_tracking runs before any flow; invalid cookies silently trigger reissue
    - list_posts issues exactly one fresh one-time token per render
    - create_post / delete_post verify the token before touching the repository and
      consume it only after the repository call returned
    - A failed mutation leaves the token registered (the user may retry the same form)
    - Rejections raise MalformedRequestError / UnauthorizedActionError and mutate nothing

Design Decisions:
    - Repository, registry and tracking manager injected: no module-level state
    - verify + mutate + consume run under registry.guard(identity) so a double-submitted
      form executes at most once
    - Unknown post id on delete is MalformedRequestError (nothing to authorize against)
"""

import logging
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from board.core.domain_types import OneTimeToken, UserIdentity
from board.core.errors import (
    ErrorContext, MalformedRequestError, UnauthorizedActionError,
)
from board.core.form_parsing import parse_create_form, parse_delete_form
from board.core.one_time_tokens import OneTimeTokenRegistry
from board.core.post_display import PostView, build_post_view, can_delete
from board.core.repository_protocols import CookieJar, PostLike, PostRepository
from board.core.tracking_identifier import (
    TrackingIdentifier, TrackingIdentifierManager,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingPage:
    """Everything the listing template needs."""
    posts: list[PostView]
    user: UserIdentity
    one_time_token: OneTimeToken
    viewer_is_admin: bool


class PostCoordinator:
    """Runs one board request through tracking, token checks and the repository."""

    def __init__(
        self,
        repository: PostRepository,
        tokens: OneTimeTokenRegistry,
        tracking: TrackingIdentifierManager,
        admin_user: str,
        display_tz: ZoneInfo,
    ):
        self._repository = repository
        self._tokens = tokens
        self._tracking = tracking
        self._admin_user = admin_user
        self._display_tz = display_tz

    def ensure_tracking(
        self, cookies: CookieJar, identity: UserIdentity,
    ) -> TrackingIdentifier:
        return self._tracking.ensure(cookies, identity)

    async def list_posts(self, identity: UserIdentity) -> ListingPage:
        posts = await self._repository.find_all_ordered_by_id_desc()
        views = [
            build_post_view(p, identity, self._admin_user, self._display_tz)
            for p in posts
        ]
        token = self._tokens.issue(identity)
        return ListingPage(
            posts=views, user=identity, one_time_token=token,
            viewer_is_admin=identity == self._admin_user,
        )

    async def create_post(
        self,
        identity: UserIdentity,
        tracking: TrackingIdentifier,
        body: bytes,
    ) -> PostLike:
        form = parse_create_form(body)
        async with self._tokens.guard(identity):
            self._require_token(identity, form.one_time_token)
            post = await self._repository.create(
                content=form.content,
                tracking_cookie=tracking.serialize(),
                posted_by=identity,
            )
            self._tokens.consume(identity)
        logger.info(
            f"Post {post.id} created",
            extra={
                "user": identity, "post_id": post.id,
                "tracking_id": tracking.serialize(),
            },
        )
        return post

    async def delete_post(self, identity: UserIdentity, body: bytes) -> None:
        form = parse_delete_form(body)
        async with self._tokens.guard(identity):
            self._require_token(identity, form.one_time_token)
            post = await self._repository.find_by_id(form.post_id)
            if post is None:
                raise MalformedRequestError(
                    f"Post {form.post_id} does not exist",
                    ErrorContext(user=identity, post_id=form.post_id),
                )
            if not can_delete(identity, post.posted_by, self._admin_user):
                raise UnauthorizedActionError(
                    f"{identity} may not delete post {post.id}",
                    ErrorContext(user=identity, post_id=post.id),
                )
            await self._repository.destroy(post)
            self._tokens.consume(identity)
        logger.info(
            f"Post {form.post_id} deleted",
            extra={"user": identity, "post_id": form.post_id},
        )

    def _require_token(self, identity: UserIdentity, presented: str) -> None:
        if not self._tokens.verify(identity, presented):
            raise UnauthorizedActionError(
                "One-time token mismatch", ErrorContext(user=identity),
            )
