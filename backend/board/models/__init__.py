"""ORM Models — SQLAlchemy declarative models for all board entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - One file per entity for locality
"""

from board.models.post import Post  # noqa: F401
