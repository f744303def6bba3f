"""Response Cookie Jar — CookieJar implementation bridging Starlette requests and responses.

Invariants:
    - get() reads only the incoming request cookies
    - set() buffers; nothing reaches the client until apply(response)
    - Cookies are HttpOnly and SameSite=Lax

Design Decisions:
    - Buffer-then-apply: routes build their response (template or redirect) after the
      tracking identifier is ensured, so the jar cannot write into it directly
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

from starlette.responses import Response


@dataclass(frozen=True)
class _PendingCookie:
    name: str
    value: str
    expires: datetime


class ResponseCookieJar:
    """Reads request cookies, collects cookies for the eventual response."""

    def __init__(self, incoming: Mapping[str, str]):
        self._incoming = incoming
        self._pending: list[_PendingCookie] = []

    def get(self, name: str) -> str | None:
        return self._incoming.get(name)

    def set(self, name: str, value: str, expires: datetime) -> None:
        self._pending.append(_PendingCookie(name, value, expires))

    def apply(self, response: Response) -> Response:
        for cookie in self._pending:
            response.set_cookie(
                cookie.name,
                cookie.value,
                expires=cookie.expires,
                httponly=True,
                samesite="lax",
            )
        return response
