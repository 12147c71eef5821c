from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from alembic import command
from alembic.config import Config

from .config import get_settings

logger = logging.getLogger(__name__)
_run_lock = Lock()
_applied_urls: set[str] = set()

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def alembic_config(database_url: str | None = None) -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database_url or get_settings().database_url)
    # Keep the application's logging setup intact.
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations_once(database_url: str | None = None) -> None:
    """Upgrade ``database_url`` to head at most once per process."""
    url = database_url or get_settings().database_url
    if url in _applied_urls:
        return

    with _run_lock:
        if url in _applied_urls:
            return
        logger.info("Applying scheduling migrations...")
        command.upgrade(alembic_config(url), "head")
        _applied_urls.add(url)
        logger.info("Scheduling schema is up to date.")
