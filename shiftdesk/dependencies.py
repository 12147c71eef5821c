from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .config import get_settings
from .db import get_db
from .services.scheduling import SchedulingService


def require_actor(request: Request) -> int:
    """Opaque actor id placed in the session by the identity layer."""
    user = request.session.get("user")
    if not user or "id" not in user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return int(user["id"])


def get_scheduling_service(request: Request, db: Session = Depends(get_db)) -> SchedulingService:
    state = request.app.state
    return SchedulingService(
        db,
        settings=get_settings(),
        events=getattr(state, "events", None),
        directory=getattr(state, "directory", None),
    )
