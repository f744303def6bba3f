"""User Store — htpasswd-backed credential checks for HTTP Basic authentication.

Invariants:
    - Passwords are only ever compared through passlib (hash-aware, constant time)
    - Unknown users and wrong passwords are indistinguishable to the caller
    - The file is re-read when it changes on disk; a missing file means no users

Design Decisions:
    - Apache htpasswd format: users are managed with the standard `htpasswd` tool
"""

import logging
import os

from passlib.apache import HtpasswdFile

logger = logging.getLogger(__name__)


class HtpasswdUserStore:
    """Verifies username/password pairs against an htpasswd file."""

    def __init__(self, htpasswd: HtpasswdFile):
        self._htpasswd = htpasswd

    @classmethod
    def from_path(cls, path: str) -> "HtpasswdUserStore":
        exists = os.path.exists(path)
        if not exists:
            logger.warning(f"htpasswd file {path} not found, no user can log in")
        return cls(HtpasswdFile(path, new=not exists))

    def check(self, username: str, password: str) -> bool:
        path = self._htpasswd.path
        if path and os.path.exists(path):
            self._htpasswd.load_if_changed()
        # check_password returns None for unknown users
        return bool(self._htpasswd.check_password(username, password))

    def users(self) -> list[str]:
        return self._htpasswd.users()
