#!/usr/bin/env python
"""Launch the scheduling API for container deployments.

RUN_DB_MIGRATIONS=1 upgrades the schema before uvicorn starts; the app's
own startup hook is then a no-op for this process.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import uvicorn

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from shiftdesk.config import get_settings  # noqa: E402
from shiftdesk.migration_runner import run_migrations_once  # noqa: E402


def _maybe_run_migrations() -> None:
    if os.getenv("RUN_DB_MIGRATIONS") != "1":
        return
    print("[runserver] RUN_DB_MIGRATIONS=1 detected. Applying migrations...", flush=True)
    run_migrations_once()


def main() -> int:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    try:
        _maybe_run_migrations()
    except Exception as exc:
        print(f"[runserver] migrations failed: {exc}", file=sys.stderr)
        return 1
    print(f"[runserver] Starting shiftdesk on {host}:{port}", flush=True)
    uvicorn.run("shiftdesk.main:app", host=host, port=port, log_level=get_settings().log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
