"""
Task storage on top of a SQLAlchemy engine.

Schema::

    tasks(
        id          BIGINT PRIMARY KEY,
        title       TEXT NOT NULL,
        is_done     BOOLEAN NOT NULL DEFAULT false,
        created_at  TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    )

Every operation is a single statement; the toggle flips ``is_done`` inside
the database so concurrent toggles never read a stale value.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, MetaData, Table, Text, func, not_, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from backend.core.errors import NotFound, StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)

metadata = MetaData()

tasks_table = Table(
    "tasks",
    metadata,
    # INTEGER on SQLite keeps the column an alias of the rowid.
    Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("is_done", Boolean, nullable=False, server_default=text("false")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

_TASK_COLUMNS = (
    tasks_table.c.id,
    tasks_table.c.title,
    tasks_table.c.is_done,
    tasks_table.c.created_at,
)

# SQLite's CURRENT_TIMESTAMP only has second resolution.
_NOW_QUERIES = {
    "sqlite": "SELECT strftime('%Y-%m-%dT%H:%M:%fZ', 'now') AS now",
}
_DEFAULT_NOW_QUERY = "SELECT NOW() AS now"


def _isoformat(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_task(row) -> Dict[str, Any]:
    """Turn a result row into the JSON shape sent to clients."""
    mapping = row._mapping
    return {
        "id": mapping["id"],
        "title": mapping["title"],
        "is_done": bool(mapping["is_done"]),
        "created_at": _isoformat(mapping["created_at"]),
    }


# Largest id a BIGINT / SQLite INTEGER column can hold.
MAX_TASK_ID = 2**63 - 1


def check_task_id(task_id: int) -> int:
    """Ids no row can have are reported as missing without querying."""
    if not 0 < task_id <= MAX_TASK_ID:
        raise NotFound()
    return task_id


def clean_title(raw: Any) -> str:
    """Trim a submitted title; raise ValidationError if nothing is left."""
    title = raw.strip() if isinstance(raw, str) else ""
    if not title:
        raise ValidationError("Title is required")
    return title


class TaskStore:
    """CRUD operations on the ``tasks`` table plus the database clock."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self) -> None:
        """Create the tasks table if it does not exist yet."""
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            logger.error("Could not create the tasks table", exc_info=True)
            raise StoreUnavailable() from exc

    def dispose(self) -> None:
        self.engine.dispose()

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_time(self) -> str:
        """Return the database's current time as an ISO string."""
        query = _NOW_QUERIES.get(self.engine.dialect.name, _DEFAULT_NOW_QUERY)
        try:
            with self.engine.connect() as conn:
                value = conn.execute(text(query)).scalar_one()
        except SQLAlchemyError as exc:
            logger.error("Error while querying the database time", exc_info=True)
            raise StoreUnavailable() from exc
        return _isoformat(value)

    def list_tasks(self) -> List[Dict[str, Any]]:
        """Return every task, newest first."""
        stmt = tasks_table.select().order_by(tasks_table.c.created_at.desc(), tasks_table.c.id.desc())
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            logger.error("Error while listing tasks", exc_info=True)
            raise StoreUnavailable() from exc
        return [serialize_task(row) for row in rows]

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create_task(self, title: Any) -> Dict[str, Any]:
        """Insert a task with a trimmed title and return the stored row."""
        title = clean_title(title)
        stmt = tasks_table.insert().values(title=title).returning(*_TASK_COLUMNS)
        try:
            with self.engine.begin() as conn:
                row = conn.execute(stmt).one()
        except SQLAlchemyError as exc:
            logger.error("Error while creating a task", exc_info=True)
            raise StoreUnavailable() from exc
        return serialize_task(row)

    def toggle_task(self, task_id: int) -> Dict[str, Any]:
        """Flip ``is_done`` in one UPDATE ... RETURNING statement."""
        check_task_id(task_id)
        stmt = (
            tasks_table.update()
            .where(tasks_table.c.id == task_id)
            .values(is_done=not_(tasks_table.c.is_done))
            .returning(*_TASK_COLUMNS)
        )
        try:
            with self.engine.begin() as conn:
                row = conn.execute(stmt).one_or_none()
        except SQLAlchemyError as exc:
            logger.error(f"Error while toggling task {task_id}", exc_info=True)
            raise StoreUnavailable() from exc
        if row is None:
            raise NotFound()
        return serialize_task(row)

    def delete_task(self, task_id: int) -> None:
        """Remove a task.  Raises NotFound if no row matched."""
        check_task_id(task_id)
        stmt = tasks_table.delete().where(tasks_table.c.id == task_id)
        try:
            with self.engine.begin() as conn:
                deleted = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            logger.error(f"Error while deleting task {task_id}", exc_info=True)
            raise StoreUnavailable() from exc
        if not deleted:
            raise NotFound()
