"""Post Repository — SQLAlchemy implementation of the PostRepository protocol.

Invariants:
    - Every write commits immediately; a failed commit propagates (get_db rolls back)
    - find_all_ordered_by_id_desc returns newest first
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from board.core.domain_types import PostId, UserIdentity
from board.models.post import Post

logger = logging.getLogger(__name__)


class SqlAlchemyPostRepository:
    """Post persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all_ordered_by_id_desc(self) -> Sequence[Post]:
        result = await self._db.execute(select(Post).order_by(Post.id.desc()))
        return result.scalars().all()

    async def find_by_id(self, post_id: PostId) -> Post | None:
        return await self._db.get(Post, post_id)

    async def create(
        self, *, content: str, tracking_cookie: str, posted_by: UserIdentity,
    ) -> Post:
        post = Post(
            content=content, tracking_cookie=tracking_cookie, posted_by=posted_by,
        )
        self._db.add(post)
        await self._db.commit()
        await self._db.refresh(post)
        return post

    async def destroy(self, post: Post) -> None:
        await self._db.delete(post)
        await self._db.commit()
