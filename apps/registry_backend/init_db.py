"""
Creates the state store tables if they don't exist.
Safe to run multiple times - create_all() is idempotent.
"""

from __future__ import annotations

import logging

from sqlalchemy import text

from apps.registry_backend import models  # noqa: F401
from common_core.db import Base, registry_engine

logger = logging.getLogger("assetledger.init_db")


def init_registry_db(engine=None) -> None:
    engine = engine or registry_engine
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    Base.metadata.create_all(bind=engine)
    logger.info("registry_tables_ready", extra={"component": "init_db"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_registry_db()
