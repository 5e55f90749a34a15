"""
Work-Hours Aggregator

Turns shift entries into regular / overtime / night hour buckets and sums
them into weekly totals for holiday-pay eligibility.

Night hours support two modes (``Settings.night_hours_mode``):

- ``approximate``: a shift whose start or end hour lies inside the night
  window is credited ``min(total, 8)`` night hours. This is the behaviour the
  schedule optimizer was tuned against and stays the default.
- ``exact``: true clock overlap with 22:00-24:00 and the following
  00:00-06:00.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Literal

from payroll_engines.config import get_settings
from payroll_engines.exceptions import ValidationError
from payroll_engines.schemas.payroll import WeeklyHoursResult, WorkHoursResult
from payroll_engines.schemas.schedule import ShiftEntry, WeeklyTemplate, Worker
from payroll_engines.services.rounding import require_non_negative, round_hours
from payroll_engines.services.template_editor import template_to_shifts
from payroll_engines.services.time_utils import MINUTES_PER_DAY, time_to_minutes

ZERO = Decimal("0")
MINUTES_PER_HOUR = Decimal("60")


def _shift_bounds(start_time: str, end_time: str) -> tuple[int, int]:
    """Start and end in minutes, with end pushed past midnight when needed."""
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    if end <= start:
        end += MINUTES_PER_DAY
    return start, end


def _in_night_window(hour: int, night_start: int, night_end: int) -> bool:
    return hour >= night_start or hour < night_end


def calculate_night_hours(
    start_time: str,
    end_time: str,
    total_hours: Decimal,
    mode: Literal["approximate", "exact"] | None = None,
) -> Decimal:
    """Night-window hours for a shift, per the configured mode."""
    settings = get_settings()
    mode = mode or settings.night_hours_mode
    start, end = _shift_bounds(start_time, end_time)

    if mode == "approximate":
        start_hour = start // 60
        end_hour = (end // 60) % 24
        touches_night = _in_night_window(
            start_hour, settings.night_start_hour, settings.night_end_hour
        ) or _in_night_window(end_hour, settings.night_start_hour, settings.night_end_hour)
        if not touches_night:
            return ZERO
        return max(min(total_hours, settings.max_regular_daily_hours), ZERO)

    night_start = settings.night_start_hour * 60
    night_end = settings.night_end_hour * 60

    # Night windows that can intersect a shift spanning at most two days
    windows = [
        (night_start - MINUTES_PER_DAY, night_end),
        (night_start, MINUTES_PER_DAY + night_end),
        (night_start + MINUTES_PER_DAY, 2 * MINUTES_PER_DAY + night_end),
    ]
    minutes = sum(
        max(min(end, window_end) - max(start, window_start), 0)
        for window_start, window_end in windows
    )
    return min(Decimal(minutes) / MINUTES_PER_HOUR, max(total_hours, ZERO))


def calculate_daily_hours(entry: ShiftEntry) -> WorkHoursResult:
    """
    Hour buckets for one shift.

    Elapsed time minus break minutes gives the total; the first 8 hours are
    regular and the rest overtime, so ``regular + overtime == total``. A break
    longer than the elapsed time raises ValidationError.
    """
    settings = get_settings()
    start, end = _shift_bounds(entry.start_time, entry.end_time)

    if entry.break_minutes > end - start:
        raise ValidationError(
            f"Break of {entry.break_minutes} minutes is longer than the "
            f"{entry.start_time}-{entry.end_time} shift",
            field="break_minutes",
        )

    work_minutes = end - start - entry.break_minutes
    total_hours = round_hours(Decimal(work_minutes) / MINUTES_PER_HOUR)

    regular_hours = min(total_hours, settings.max_regular_daily_hours)
    overtime_hours = max(total_hours - settings.max_regular_daily_hours, ZERO)
    night_hours = round_hours(
        calculate_night_hours(entry.start_time, entry.end_time, total_hours)
    )

    return WorkHoursResult(
        total_hours=total_hours,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        night_hours=night_hours,
        is_night_shift=night_hours > 0,
    )


def is_eligible_for_holiday_pay(weekly_hours: Decimal | int | float) -> bool:
    """Weekly holiday pay (주휴수당) is owed from 15 hours a week."""
    hours = require_non_negative(weekly_hours, "weekly_hours")
    return hours >= get_settings().holiday_pay_threshold_hours


def calculate_weekly_hours(entries: Iterable[ShiftEntry]) -> WeeklyHoursResult:
    """Sum daily buckets over a week's shift entries."""
    total = regular = overtime = night = ZERO
    is_night_shift = False
    shift_count = 0

    for entry in entries:
        daily = calculate_daily_hours(entry)
        total += daily.total_hours
        regular += daily.regular_hours
        overtime += daily.overtime_hours
        night += daily.night_hours
        is_night_shift = is_night_shift or daily.is_night_shift
        shift_count += 1

    return WeeklyHoursResult(
        total_hours=total,
        regular_hours=regular,
        overtime_hours=overtime,
        night_hours=night,
        is_night_shift=is_night_shift,
        eligible_for_holiday_pay=is_eligible_for_holiday_pay(total),
        shift_count=shift_count,
    )


def calculate_template_hours(
    template: WeeklyTemplate, workers: Iterable[Worker] | None = None
) -> dict[int, WeeklyHoursResult]:
    """
    Weekly hours per worker straight from a template's slot assignments.

    When a roster is given, every worker on it appears in the result, with
    zero hours if unassigned.
    """
    shifts_by_worker: dict[int, list[ShiftEntry]] = {}
    if workers is not None:
        for worker in workers:
            shifts_by_worker.setdefault(worker.id, [])

    for shift in template_to_shifts(template):
        shifts_by_worker.setdefault(shift.employee_id, []).append(shift)

    return {
        worker_id: calculate_weekly_hours(shifts)
        for worker_id, shifts in sorted(shifts_by_worker.items())
    }
