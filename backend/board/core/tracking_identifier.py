"""Tracking Identifier — self-verifying cookie value binding a client to a user.

Invariants:
    - Internally always a TrackingIdentifier (original_id, digest); strings exist
      only at the cookie boundary via parse()/serialize()
    - A cookie is accepted only if digest == hasher.digest(original_id, identity)
    - ensure() writes to the cookie jar if and only if a new identifier is issued
    - Issued cookies expire ttl after issuance; the expiry is recomputed on every issue
    - Validation failure is never an error: it always falls through to reissue

Design Decisions:
    - Stateless: nothing stored server-side, the digest is the whole proof
    - original_id from 8 random bytes read as an unsigned big-endian integer
    - CookieJar is a Protocol (repository_protocols.py): core never touches Starlette
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from board.core.domain_types import UserIdentity
from board.core.integrity_hasher import IntegrityHasher
from board.core.repository_protocols import CookieJar

TRACKING_COOKIE_NAME = "tracking_id"
SEPARATOR = "_"
DEFAULT_TTL = timedelta(hours=24)
_ORIGINAL_ID_BYTES = 8


@dataclass(frozen=True)
class TrackingIdentifier:
    """Parsed tracking identifier. Serialized form: "<original_id>_<digest>"."""
    original_id: int
    digest: str

    @classmethod
    def parse(cls, raw: str | None) -> "TrackingIdentifier | None":
        """Parse a cookie value. Returns None for anything malformed."""
        if not raw or SEPARATOR not in raw:
            return None
        id_part, _, digest = raw.partition(SEPARATOR)
        if not (id_part.isascii() and id_part.isdigit()) or not digest:
            return None
        return cls(original_id=int(id_part), digest=digest)

    def serialize(self) -> str:
        return f"{self.original_id}{SEPARATOR}{self.digest}"


class TrackingIdentifierManager:
    """Issues and validates tracking identifiers for authenticated users."""

    def __init__(
        self,
        hasher: IntegrityHasher,
        ttl: timedelta = DEFAULT_TTL,
        cookie_name: str = TRACKING_COOKIE_NAME,
    ):
        self._hasher = hasher
        self.ttl = ttl
        self.cookie_name = cookie_name

    def validate(
        self, raw: str | None, identity: UserIdentity,
    ) -> TrackingIdentifier | None:
        """Return the parsed identifier if its digest holds for identity."""
        parsed = TrackingIdentifier.parse(raw)
        if parsed is None:
            return None
        if not self._hasher.matches(parsed.original_id, identity, parsed.digest):
            return None
        return parsed

    def issue(self, identity: UserIdentity) -> TrackingIdentifier:
        original_id = int.from_bytes(
            secrets.token_bytes(_ORIGINAL_ID_BYTES), "big",
        )
        return TrackingIdentifier(
            original_id=original_id,
            digest=self._hasher.digest(original_id, identity),
        )

    def ensure(
        self,
        cookies: CookieJar,
        identity: UserIdentity,
        now: datetime | None = None,
    ) -> TrackingIdentifier:
        """Return the request's valid identifier, or issue and set a new one."""
        existing = self.validate(cookies.get(self.cookie_name), identity)
        if existing is not None:
            return existing
        issued = self.issue(identity)
        now = now or datetime.now(timezone.utc)
        cookies.set(self.cookie_name, issued.serialize(), now + self.ttl)
        return issued
