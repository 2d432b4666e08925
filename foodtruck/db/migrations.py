"""Database migration utilities"""
import logging

from sqlalchemy import Column, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from .database import Base

logger = logging.getLogger(__name__)


def _literal_default(column: Column):
    default = column.default
    if default is None or not default.is_scalar:
        return None
    value = default.arg
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    return "'" + str(value).replace("'", "''") + "'"


def _column_ddl(conn: Connection, column: Column) -> str:
    ddl = f'"{column.name}" {column.type.compile(dialect=conn.dialect)}'
    default = _literal_default(column)
    if default is not None:
        ddl += f" DEFAULT {default}"
        # SQLite only accepts NOT NULL on an added column when it has a default
        if not column.nullable:
            ddl += " NOT NULL"
    return ddl


def _add_missing_columns_sync(conn: Connection) -> list[str]:
    inspector = inspect(conn)
    added: list[str] = []
    for table in Base.metadata.sorted_tables:
        if not inspector.has_table(table.name):
            continue
        existing = {c["name"] for c in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing:
                continue
            if column.primary_key or column.unique:
                logger.warning(
                    "Cannot add key column %s.%s in place; rebuild the table to add it",
                    table.name,
                    column.name,
                )
                continue
            conn.execute(text(f'ALTER TABLE "{table.name}" ADD COLUMN {_column_ddl(conn, column)}'))
            added.append(f"{table.name}.{column.name}")
    return added


async def add_missing_columns(engine: AsyncEngine) -> list[str]:
    """Add model columns that an older database file lacks.

    Runs at every startup. Existing columns are detected with PRAGMA table_info,
    so re-running is a no-op.
    """
    async with engine.begin() as conn:
        added = await conn.run_sync(_add_missing_columns_sync)
    for name in added:
        logger.info("Added column %s", name)
    return added
