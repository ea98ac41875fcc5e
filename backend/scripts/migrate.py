#!/usr/bin/env python3
"""
Apply or roll back the Orquestra schema.

Usage:
    python scripts/migrate.py              # upgrade to head
    python scripts/migrate.py downgrade -1
"""
import logging
import subprocess
import sys
from pathlib import Path

from orquestra.core.logging import configure_logging

BACKEND_DIR = Path(__file__).resolve().parent.parent

logger = logging.getLogger("orquestra.migrate")


def run_migrations(command: str = "upgrade", target: str = "head") -> None:
    logger.info(f"Running alembic {command} {target}")
    try:
        subprocess.run(["alembic", command, target], check=True, cwd=BACKEND_DIR)
    except subprocess.CalledProcessError as e:
        logger.error(f"Migration failed: {e}")
        sys.exit(1)
    except FileNotFoundError:
        logger.error("Alembic not found. Make sure it's installed.")
        sys.exit(1)
    logger.info("Migrations completed successfully")


if __name__ == "__main__":
    configure_logging()
    run_migrations(*sys.argv[1:3])
