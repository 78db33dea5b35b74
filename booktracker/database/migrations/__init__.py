"""Versioned, idempotent schema migrations.

Each step in :data:`MIGRATIONS` runs at most once per database; the applied
versions are recorded in the ``schema_version`` table, so re-running the
migration step at every startup is safe.
"""

from __future__ import annotations

from typing import List, Optional

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Column, Engine, Integer, MetaData, String, Table, func, insert, inspect, select
from sqlalchemy.engine import Connection

from ... import logging_manager as log_mgr
from ..base import UTCDateTime, utcnow
from .versions import MIGRATIONS, Migration

logger = log_mgr.get_logger().getChild("migrations")

_metadata = MetaData()

schema_version_table = Table(
    "schema_version",
    _metadata,
    Column("version", Integer, primary_key=True),
    Column("description", String(255), nullable=False),
    Column("applied_at", UTCDateTime(), nullable=False),
)


def _recorded_version(connection: Connection) -> int:
    value = connection.execute(select(func.max(schema_version_table.c.version))).scalar()
    return int(value or 0)


def current_version(engine: Engine) -> Optional[int]:
    """Return the highest applied version, or ``None`` for an unmanaged database."""

    with engine.connect() as connection:
        if not inspect(connection).has_table(schema_version_table.name):
            return None
        return _recorded_version(connection)


def _apply(connection: Connection, migration: Migration) -> None:
    context = MigrationContext.configure(connection)
    migration.upgrade(Operations(context))
    connection.execute(
        insert(schema_version_table).values(
            version=migration.version,
            description=migration.description,
            applied_at=utcnow(),
        )
    )


def run_migrations(engine: Engine) -> List[int]:
    """Apply every pending migration and return the versions applied."""

    _metadata.create_all(engine, checkfirst=True)

    applied: List[int] = []
    for migration in MIGRATIONS:
        with engine.begin() as connection:
            if migration.version <= _recorded_version(connection):
                continue
            _apply(connection, migration)
        applied.append(migration.version)
        logger.info(
            "Applied schema migration %03d: %s",
            migration.version,
            migration.description,
            extra={"event": "database.migration.applied", "version": migration.version},
        )

    if not applied:
        logger.debug("Schema is up to date", extra={"event": "database.migration.noop"})
    return applied


__all__ = ["MIGRATIONS", "Migration", "current_version", "run_migrations", "schema_version_table"]
