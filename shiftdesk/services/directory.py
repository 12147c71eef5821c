from __future__ import annotations

from typing import Mapping, Optional


class EmployeeDirectory:
    """Resolve employee ids to display names.

    The identity store lives outside this service; this in-process mapping
    is what tests and the demo seed use.
    """

    def __init__(self, names: Mapping[int, str] | None = None) -> None:
        self._names = dict(names or {})

    def display_name(self, employee_id: int) -> Optional[str]:
        return self._names.get(employee_id)

    def register(self, employee_id: int, name: str) -> None:
        self._names[employee_id] = name
