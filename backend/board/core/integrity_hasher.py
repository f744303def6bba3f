"""Keyed Integrity Hasher — one-way digest binding a value to a user and a static secret.

Invariants:
    - digest(value, identity) is deterministic for a fixed secret key
    - Input is str(value) + identity + secret_key, SHA-256, lowercase hex
    - The secret key is never derived from request data and never appears in repr()

Design Decisions:
    - Secret passed in at construction (loaded once from Settings), not a module constant
    - matches() uses hmac.compare_digest: no timing side channel on tampered digests
"""

import hashlib
import hmac

from board.core.domain_types import UserIdentity


class IntegrityHasher:
    """Computes and checks keyed digests for tracking identifiers."""

    __slots__ = ("_secret_key",)

    def __init__(self, secret_key: str):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key

    def __repr__(self) -> str:
        return "IntegrityHasher(secret_key=***)"

    def digest(self, value: object, identity: UserIdentity) -> str:
        payload = f"{value}{identity}{self._secret_key}"
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def matches(self, value: object, identity: UserIdentity, digest: str) -> bool:
        expected = self.digest(value, identity)
        return hmac.compare_digest(
            expected.encode("utf-8"), digest.encode("utf-8"),
        )
