"""Database bootstrap utilities for the sample order service.

Exposes engine/transaction helpers and a migrations runner that applies SQL
files from the local migrations/ directory. The DB layer does not leak ORM
models into route handlers.
"""

from sample_order.db.base import get_engine, reset_engine, transaction
from sample_order.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "reset_engine",
    "transaction",
    "apply_migrations",
]
