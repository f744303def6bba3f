"""One-Time Token Registry — single-use CSRF tokens, one live token per user.

Invariants:
    - At most one live token per UserIdentity; issue() overwrites (and thereby revokes)
      any unconsumed predecessor
    - verify() never mutates; consume() removes the entry and is idempotent
    - Map updates happen under a lock: concurrent consumes never error or double-delete
    - guard(identity) serializes verify + mutation + consume for a single user
    - A guard entry lives only while some request holds or awaits it

Design Decisions:
    - Owned instance (created with the app, injected via dependency), not a module global
    - In-memory only: tokens live at most as long as the process (single-process deployment)
    - Per-identity asyncio.Lock closes the double-submit race; users never contend
      with each other
"""

import asyncio
import hmac
import secrets
import threading
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from board.core.domain_types import OneTimeToken, UserIdentity

DEFAULT_TOKEN_BYTES = 16


@dataclass
class _Guard:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class OneTimeTokenRegistry:
    """Issues, verifies and consumes per-user one-time tokens."""

    def __init__(self, token_bytes: int = DEFAULT_TOKEN_BYTES):
        if token_bytes < 8:
            raise ValueError("token_bytes must be at least 8")
        self._token_bytes = token_bytes
        self._tokens: dict[UserIdentity, OneTimeToken] = {}
        self._guards: dict[UserIdentity, _Guard] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, identity: object) -> bool:
        return identity in self._tokens

    def issue(self, identity: UserIdentity) -> OneTimeToken:
        token = OneTimeToken(secrets.token_hex(self._token_bytes))
        with self._lock:
            self._tokens[identity] = token
        return token

    def verify(self, identity: UserIdentity, presented: str | None) -> bool:
        """True only if presented equals the identity's current token exactly."""
        current = self._tokens.get(identity)
        if current is None or not presented:
            return False
        return hmac.compare_digest(
            current.encode("utf-8"), presented.encode("utf-8"),
        )

    def consume(self, identity: UserIdentity) -> None:
        with self._lock:
            self._tokens.pop(identity, None)

    @asynccontextmanager
    async def guard(self, identity: UserIdentity) -> AsyncIterator[None]:
        """Hold the identity's mutation lock for the duration of the block."""
        with self._lock:
            guard = self._guards.setdefault(identity, _Guard())
            guard.holders += 1
        try:
            async with guard.lock:
                yield
        finally:
            with self._lock:
                guard.holders -= 1
                if guard.holders == 0:
                    del self._guards[identity]
