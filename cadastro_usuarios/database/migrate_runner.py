"""Database migration runner for deploys.

Goal:
- Prefer Alembic migrations for deterministic schema management.
- If the database already has the `users` table but Alembic history is out of
  sync (e.g. it was created by `create_all()`), detect that safely and
  `stamp head`.

Run as a one-off job: `python -m cadastro_usuarios.database.migrate_runner`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import List, Tuple

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from cadastro_usuarios.database.database import DATABASE_URL, build_engine
from cadastro_usuarios.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _alembic_cfg() -> Config:
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
    return cfg


def _required_schema_checks() -> List[Tuple[str, str]]:
    """Return (table, column) pairs required to safely stamp head."""
    return [
        ("users", "id"),
        ("users", "name"),
        ("users", "email"),
        ("users", "age"),
    ]


def _missing_requirements(engine) -> List[str]:
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())
    missing: List[str] = []
    columns_by_table = {}
    for table, column in _required_schema_checks():
        if table not in tables:
            if f"missing table: {table}" not in missing:
                missing.append(f"missing table: {table}")
            continue
        if table not in columns_by_table:
            columns_by_table[table] = {col["name"] for col in inspector.get_columns(table)}
        if column not in columns_by_table[table]:
            missing.append(f"missing column: {table}.{column}")
    return missing


def main() -> int:
    setup_logging()
    engine = build_engine(DATABASE_URL)

    try:
        return _upgrade_or_stamp(engine)
    finally:
        engine.dispose()


def _upgrade_or_stamp(engine) -> int:
    try:
        command.upgrade(_alembic_cfg(), "head")
        return 0
    except SQLAlchemyError as e:
        msg = str(e).lower()
        if "already exists" not in msg and "duplicate" not in msg:
            raise

        # Only stamp head if we can verify the expected schema is present.
        missing = _missing_requirements(engine)
        if missing:
            raise RuntimeError(
                "Alembic upgrade failed and schema is not at expected baseline; refusing to stamp head. "
                + "; ".join(missing)
            ) from e

        logger.warning("Schema already present; stamping Alembic head")
        command.stamp(_alembic_cfg(), "head")
        return 0


if __name__ == "__main__":
    sys.exit(main())
