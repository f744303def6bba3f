"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserIdentity is opaque: produced by the authentication layer, never by core
    - PostId wraps the integer primary key of a post
    - HTTP methods the board understands are encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums compare equal to the raw method string coming from Starlette
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserIdentity = NewType("UserIdentity", str)
PostId = NewType("PostId", int)
OneTimeToken = NewType("OneTimeToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods routed into the post coordinator."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Every method the board entry points accept at the routing layer.
# Anything other than the flow's own method is rejected as malformed;
# methods outside this list get the same 400 page from the 405 handler.
ROUTED_METHODS: list[str] = [m.value for m in HttpMethod]
