"""Registry of schema migration steps, ordered by version."""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Tuple

from alembic.operations import Operations

from . import v001_initial_schema, v002_reading_progress


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    upgrade: Callable[[Operations], None]


def _from_module(module: ModuleType) -> Migration:
    return Migration(
        version=module.revision,
        description=module.description,
        upgrade=module.upgrade,
    )


MIGRATIONS: Tuple[Migration, ...] = tuple(
    sorted(
        (_from_module(module) for module in (v001_initial_schema, v002_reading_progress)),
        key=lambda migration: migration.version,
    )
)

__all__ = ["MIGRATIONS", "Migration"]
