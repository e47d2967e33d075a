"""ORM Models — SQLAlchemy declarative models for the database store.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all or
      alembic autogenerate runs
"""

from starfield.models.star import StarRow  # noqa: F401
