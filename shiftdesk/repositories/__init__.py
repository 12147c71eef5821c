from .assignments import AssignmentRepository  # noqa: F401
from .shifts import ShiftRepository  # noqa: F401
from .templates import TemplateRepository  # noqa: F401
from .time_off import TimeOffRepository  # noqa: F401
