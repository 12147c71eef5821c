from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .shift import Shift, ShiftAssignment  # noqa: E402,F401
from .template import RecurringShiftTemplate  # noqa: E402,F401
from .time_off import TimeOffRequest  # noqa: E402,F401
