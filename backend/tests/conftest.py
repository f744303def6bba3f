"""Root conftest — shared test configuration."""

import os

# Settings are read at import time by board.main; give tests a fixed, fake secret
os.environ.setdefault(
    "TRACKING_SECRET_KEY",
    "test-secret-key-0123456789abcdef0123456789abcdef",
)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("HTPASSWD_PATH", "tests-nonexistent.htpasswd")
os.environ.setdefault("DISPLAY_TIMEZONE", "Asia/Tokyo")
