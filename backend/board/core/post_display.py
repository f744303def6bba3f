"""Post Display — pure transformations from stored posts to what the listing shows.

Invariants:
    - sanitize_content masks every occurrence of FORBIDDEN_WORD and renders "+" as " "
    - Timestamps shown in the configured zone as YYYY年MM月DD日 HH時mm分ss秒
    - Naive datetimes (SQLite) are treated as UTC
    - Stored posts are never mutated; a PostView is built instead
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from board.core.domain_types import UserIdentity
from board.core.repository_protocols import PostLike
from board.core.tracking_identifier import TrackingIdentifier

FORBIDDEN_WORD = "うんち"
FORBIDDEN_WORD_MASK = "禁句だぞ…"
TIMESTAMP_FORMAT = "%Y年%m月%d日 %H時%M分%S秒"


@dataclass(frozen=True)
class PostView:
    """One row of the listing page."""
    id: int
    content: str
    posted_by: str
    formatted_created_at: str
    poster_id: str
    posted_by_admin: bool
    deletable: bool


def sanitize_content(content: str) -> str:
    return content.replace(FORBIDDEN_WORD, FORBIDDEN_WORD_MASK).replace("+", " ")


def format_created_at(created_at: datetime, tz: ZoneInfo) -> str:
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone(tz).strftime(TIMESTAMP_FORMAT)


def poster_id(tracking_cookie: str | None) -> str:
    """Public pseudo-ID of a post: the original_id half of its tracking cookie."""
    parsed = TrackingIdentifier.parse(tracking_cookie)
    return str(parsed.original_id) if parsed else ""


def can_delete(viewer: UserIdentity, posted_by: str, admin_user: str) -> bool:
    return viewer == posted_by or viewer == admin_user


def build_post_view(
    post: PostLike, viewer: UserIdentity, admin_user: str, tz: ZoneInfo,
) -> PostView:
    return PostView(
        id=post.id,
        content=sanitize_content(post.content),
        posted_by=post.posted_by,
        formatted_created_at=format_created_at(post.created_at, tz),
        poster_id=poster_id(post.tracking_cookie),
        posted_by_admin=post.posted_by == admin_user,
        deletable=can_delete(viewer, post.posted_by, admin_user),
    )
