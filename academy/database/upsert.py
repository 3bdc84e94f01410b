"""Dialect-aware INSERT constructs supporting ON CONFLICT clauses."""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def insert_for(session: AsyncSession, table: Any) -> Any:
    """Return an ``INSERT`` for ``table`` that supports ``on_conflict_*``.

    Postgres is the production store; SQLite is used for local runs and tests.
    Both dialects share the ``on_conflict_do_update`` / ``on_conflict_do_nothing``
    and ``excluded`` API.
    """
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        return postgresql.insert(table)
    if dialect_name == "sqlite":
        return sqlite.insert(table)
    msg = f"Upserts are not supported for dialect '{dialect_name}'"
    raise NotImplementedError(msg)
