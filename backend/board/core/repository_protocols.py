"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in PostRepository: implementations do IO; CookieJar is sync because
      it only reads the parsed request and buffers outgoing headers
"""

from datetime import datetime
from typing import Protocol, Sequence

from board.core.domain_types import PostId, UserIdentity


class PostLike(Protocol):
    """Structural contract for Post objects passed to the coordinator.

    Avoids coupling core display logic to the ORM model.
    """
    id: int
    content: str
    posted_by: str
    tracking_cookie: str | None
    created_at: datetime


class PostRepository(Protocol):
    """Contract for post persistence — implemented by shell."""
    async def find_all_ordered_by_id_desc(self) -> Sequence[PostLike]: ...
    async def find_by_id(self, post_id: PostId) -> PostLike | None: ...
    async def create(
        self, *, content: str, tracking_cookie: str, posted_by: UserIdentity,
    ) -> PostLike: ...
    async def destroy(self, post: PostLike) -> None: ...


class CookieJar(Protocol):
    """Request cookies in, response cookies out."""
    def get(self, name: str) -> str | None: ...
    def set(self, name: str, value: str, expires: datetime) -> None: ...
