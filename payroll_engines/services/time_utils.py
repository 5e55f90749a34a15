"""
Time Interval Utilities

Conversions between HH:MM clock labels and minute offsets, slot generation
and break membership tests used by the template editor and the hours
aggregator.
"""

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from payroll_engines.exceptions import FormatError, ValidationError

if TYPE_CHECKING:
    from payroll_engines.schemas.schedule import BreakPeriod

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def time_to_minutes(time: str) -> int:
    """
    Parse an ``HH:MM`` string into minutes since midnight.

    ``24:00`` is accepted as an end-of-day close time. Anything else outside
    00:00-23:59 raises FormatError.
    """
    if not isinstance(time, str):
        raise FormatError(time)

    match = _TIME_PATTERN.match(time.strip())
    if match is None:
        raise FormatError(time)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        raise FormatError(time)

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Format minutes since midnight as ``HH:MM``.

    Values of a day or more are not wrapped: 1500 formats as ``25:00``.
    Callers dealing with overnight shifts handle the rollover themselves.
    """
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def generate_time_slots(start: str, end: str, step_minutes: int = 30) -> list[str]:
    """Every slot label in ``[start, end)`` stepped by ``step_minutes``."""
    if step_minutes <= 0:
        raise ValidationError(
            f"Slot step must be positive, got {step_minutes}", field="step_minutes"
        )

    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)

    return [
        minutes_to_time(current)
        for current in range(start_minutes, end_minutes, step_minutes)
    ]


def is_break_time(slot: str, break_periods: Iterable["BreakPeriod"]) -> bool:
    """True if the slot starts inside ``[break.start, break.end)`` of any break."""
    slot_minutes = time_to_minutes(slot)

    return any(
        time_to_minutes(period.start) <= slot_minutes < time_to_minutes(period.end)
        for period in break_periods
    )

