from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def publish(
        self,
        action: str,
        entity_type: str,
        entity_id: int,
        actor_id: int | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None: ...


class LoggingEventSink:
    """Default audit sink: one structured log record per scheduling action.

    Deployments with a real audit store pass their own object exposing the
    same ``publish`` signature to :class:`SchedulingService`.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def publish(
        self,
        action: str,
        entity_type: str,
        entity_id: int,
        actor_id: int | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        self.log.info(
            "Audit: %s on %s (ID: %s) by %s",
            action,
            entity_type,
            entity_id,
            actor_id if actor_id is not None else "system",
            extra={"audit_payload": payload or {}},
        )
