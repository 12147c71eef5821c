"""Error taxonomy raised by the scheduling service.

Routers never build these; the exception handler in :mod:`shiftdesk.main`
turns them into ``{"detail": ...}`` responses with ``status_code``.
"""

from __future__ import annotations


class SchedulingError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """Malformed input: bad time strings, missing fields, invalid ranges."""

    status_code = 422


class NotFoundError(SchedulingError):
    status_code = 404


class BadRequestError(SchedulingError):
    """Domain rule violation: capacity, cancelled shift, conflict, duplicate."""

    status_code = 400


class InternalError(SchedulingError):
    status_code = 500
