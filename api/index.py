"""Serverless entrypoint for the scheduling API."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
	sys.path.append(str(ROOT_DIR))

from shiftdesk.migration_runner import run_migrations_once  # noqa: E402

run_migrations_once()

from shiftdesk.main import app as fastapi_app  # noqa: E402

# expose ASGI app for the Python runtime
app = fastapi_app
