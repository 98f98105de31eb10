"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from productos_api.models.producto import Producto  # noqa: F401
