"""Form Parsing — match URL-encoded write bodies against the board's two form shapes.

Invariants:
    - The whole body is percent-decoded once before matching; "+" is left literal
      (display turns it into a space, see post_display.py)
    - Create bodies match content=<value>&oneTimeToken=<value>
    - Delete bodies match id=<value>&oneTimeToken=<value>, id must be a base-10 integer
    - Any mismatch raises MalformedRequestError; nothing here checks the token itself

Design Decisions:
    - Regex over urllib.parse.parse_qs: content keeps decoded "&" and "=" characters
      the user typed, the greedy content group takes everything up to the final token
    - re.DOTALL: multi-line posts are legal content
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from board.core.domain_types import PostId
from board.core.errors import MalformedRequestError

_CREATE_PATTERN = re.compile(r"content=(.*)&oneTimeToken=(.*)", re.DOTALL)
_DELETE_PATTERN = re.compile(r"id=(.*)&oneTimeToken=(.*)", re.DOTALL)


@dataclass(frozen=True)
class CreatePostForm:
    content: str
    one_time_token: str


@dataclass(frozen=True)
class DeletePostForm:
    post_id: PostId
    one_time_token: str


def decode_body(body: bytes) -> str:
    """Decode raw bytes as UTF-8 and percent-decode (no plus-to-space)."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedRequestError("Request body is not valid UTF-8") from e
    return unquote(text)


def parse_create_form(body: bytes) -> CreatePostForm:
    match = _CREATE_PATTERN.search(decode_body(body))
    if not match:
        raise MalformedRequestError("Create body does not match content/oneTimeToken")
    return CreatePostForm(content=match.group(1), one_time_token=match.group(2))


def parse_delete_form(body: bytes) -> DeletePostForm:
    match = _DELETE_PATTERN.search(decode_body(body))
    if not match:
        raise MalformedRequestError("Delete body does not match id/oneTimeToken")
    raw_id = match.group(1).strip()
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise MalformedRequestError(f"Post id is not an integer: {raw_id!r}")
    return DeletePostForm(post_id=PostId(int(raw_id)), one_time_token=match.group(2))
