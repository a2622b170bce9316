# src/newslens/db/upsert.py
"""Insert-or-skip helpers guarded by unique constraints."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


def insert_ignore_conflict(
    db: Session,
    model: type[Any],
    values: dict[str, Any],
    index_elements: Sequence[str],
) -> bool:
    """Insert a row unless it collides with the unique key ``index_elements``.

    Returns:
        True if the row was inserted, False if an existing row won.
    """
    dialect = db.get_bind().dialect.name
    if dialect in ("postgresql", "sqlite"):
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = (
            insert(model)
            .values(**values)
            .on_conflict_do_nothing(index_elements=list(index_elements))
        )
        result = db.execute(stmt)
        return result.rowcount == 1

    try:
        with db.begin_nested():
            db.add(model(**values))
    except IntegrityError:
        return False
    return True


__all__ = ["insert_ignore_conflict"]
