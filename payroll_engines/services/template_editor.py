"""
Weekly Template Editor

Pure editing operations over WeeklyTemplate values. Every function returns
a new template and leaves its input untouched. Assignments are kept valid
on every edit: a worker is only ever assigned to an on-grid slot inside
operating hours and outside all breaks.
"""

import logging
from collections.abc import Sequence

from payroll_engines.exceptions import ValidationError
from payroll_engines.schemas.schedule import (
    DAY_ORDER,
    BreakPeriod,
    DayOfWeek,
    DaySchedule,
    ShiftEntry,
    WeeklyTemplate,
)
from payroll_engines.services.time_utils import (
    generate_time_slots,
    is_break_time,
    minutes_to_time,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

DEFAULT_LUNCH_BREAK = BreakPeriod(start="12:00", end="13:00", name="점심시간")

WEEKDAYS = (
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
)


def _require_times(*values: str | None) -> None:
    """Raise FormatError for any malformed clock time before a model sees it."""
    for value in values:
        if value is not None:
            time_to_minutes(value)


def _break_period(period: BreakPeriod | dict) -> BreakPeriod:
    if isinstance(period, BreakPeriod):
        return period
    _require_times(period.get("start"), period.get("end"))
    return BreakPeriod.model_validate(period)


def _slot_step(template: WeeklyTemplate, step_minutes: int | None) -> int:
    """The template's slot width; a conflicting explicit step is rejected."""
    if step_minutes is None or step_minutes == template.slot_minutes:
        return template.slot_minutes
    raise ValidationError(
        f"Step {step_minutes} does not match the template's {template.slot_minutes}-minute slots",
        field="step_minutes",
    )


def create_default_day_schedule(
    is_open: bool = True,
    open_time: str | None = "09:00",
    close_time: str | None = "18:00",
    break_periods: Sequence[BreakPeriod] | None = None,
) -> DaySchedule:
    """
    Build a day with no assignments.

    Closed days always come back with null hours and no breaks, whatever was
    passed. Open days default to a 12:00-13:00 lunch break.
    """
    if not is_open:
        return DaySchedule(is_open=False)

    if not open_time or not close_time:
        raise ValidationError("Open days need both open and close times", field="open_time")

    _require_times(open_time, close_time)
    breaks = (
        [DEFAULT_LUNCH_BREAK]
        if break_periods is None
        else [_break_period(period) for period in break_periods]
    )
    return DaySchedule(
        is_open=True,
        open_time=open_time,
        close_time=close_time,
        break_periods=breaks,
        time_slots={},
    )


def create_default_week_template(slot_minutes: int | None = None, **metadata) -> WeeklyTemplate:
    """Monday-Friday 09:00-18:00 with a lunch break, weekends closed."""
    days = {
        day.value: create_default_day_schedule(is_open=day in WEEKDAYS)
        for day in DAY_ORDER
    }
    if slot_minutes is not None:
        days["slot_minutes"] = slot_minutes
    return WeeklyTemplate(**days, **metadata)


def _valid_slots(schedule: DaySchedule, step_minutes: int) -> set[str]:
    """On-grid slot labels inside operating hours and outside every break."""
    if not (schedule.is_open and schedule.open_time and schedule.close_time):
        return set()
    return {
        slot
        for slot in generate_time_slots(schedule.open_time, schedule.close_time, step_minutes)
        if not is_break_time(slot, schedule.break_periods)
    }


def update_day_operating_hours(
    template: WeeklyTemplate,
    day: DayOfWeek | str,
    open_time: str | None,
    close_time: str | None,
    step_minutes: int | None = None,
) -> WeeklyTemplate:
    """
    Set a day's operating hours.

    A missing open or close time closes the day and clears its assignments.
    Otherwise assignments whose slot no longer exists or falls in a break are
    dropped. An explicit ``step_minutes`` must match the template's slot width.
    """
    step = _slot_step(template, step_minutes)
    current = template.get_day(day)
    is_open = bool(open_time and close_time)

    if not is_open:
        updated = current.model_copy(
            update={
                "is_open": False,
                "open_time": None,
                "close_time": None,
                "time_slots": {},
            }
        )
        return template.with_day(day, updated)

    _require_times(open_time, close_time)
    updated = DaySchedule(
        is_open=True,
        open_time=open_time,
        close_time=close_time,
        break_periods=current.break_periods,
    )
    valid = _valid_slots(updated, step)
    kept = {
        slot: list(worker_ids)
        for slot, worker_ids in current.time_slots.items()
        if slot in valid
    }
    dropped = len(current.time_slots) - len(kept)
    if dropped:
        logger.debug(f"Dropped {dropped} slot assignments on {DayOfWeek(day).value}")

    return template.with_day(day, updated.model_copy(update={"time_slots": kept}))


def update_day_break_periods(
    template: WeeklyTemplate,
    day: DayOfWeek | str,
    break_periods: Sequence[BreakPeriod],
) -> WeeklyTemplate:
    """Replace a day's breaks and evict assignments that now fall in one."""
    current = template.get_day(day)
    breaks = [_break_period(period) for period in break_periods]

    kept = {
        slot: list(worker_ids)
        for slot, worker_ids in current.time_slots.items()
        if not is_break_time(slot, breaks)
    }

    updated = current.model_copy(update={"break_periods": breaks, "time_slots": kept})
    return template.with_day(day, updated)


def add_employee_to_time_slot(
    template: WeeklyTemplate,
    day: DayOfWeek | str,
    time_slot: str,
    employee_id: int,
) -> WeeklyTemplate:
    """
    Assign a worker to a slot.

    Returns the input template itself when the day is closed, the slot is a
    break, outside operating hours or off the slot grid, or the worker is
    already assigned.
    """
    current = template.get_day(day)

    if time_slot not in _valid_slots(current, template.slot_minutes):
        logger.debug(
            f"Ignored assignment of employee {employee_id} to "
            f"{DayOfWeek(day).value} {time_slot}"
        )
        return template

    assigned = current.time_slots.get(time_slot, [])
    if employee_id in assigned:
        return template

    time_slots = {slot: list(ids) for slot, ids in current.time_slots.items()}
    time_slots[time_slot] = [*assigned, employee_id]
    return template.with_day(day, current.model_copy(update={"time_slots": time_slots}))


def remove_employee_from_time_slot(
    template: WeeklyTemplate,
    day: DayOfWeek | str,
    time_slot: str,
    employee_id: int,
) -> WeeklyTemplate:
    """Unassign a worker from a slot; slots left empty are removed."""
    current = template.get_day(day)
    assigned = current.time_slots.get(time_slot)
    if not assigned or employee_id not in assigned:
        return template

    time_slots = {slot: list(ids) for slot, ids in current.time_slots.items()}
    remaining = [worker_id for worker_id in assigned if worker_id != employee_id]
    if remaining:
        time_slots[time_slot] = remaining
    else:
        del time_slots[time_slot]

    return template.with_day(day, current.model_copy(update={"time_slots": time_slots}))


def template_to_shifts(
    template: WeeklyTemplate, step_minutes: int | None = None
) -> list[ShiftEntry]:
    """
    Collapse slot assignments into one shift per worker per open day.

    A shift runs from the worker's first assigned slot to the end of their
    last one, and no slot runs past the closing time. Unassigned gaps in
    between, breaks included, are counted as unpaid break minutes. Slots
    starting at or after closing are ignored.
    """
    step = _slot_step(template, step_minutes)
    shifts: list[ShiftEntry] = []

    for day, schedule in template.days():
        if not schedule.is_open:
            continue
        if not schedule.open_time or not schedule.close_time:
            raise ValidationError(
                f"{day.value} is open but has no operating hours", field=day.value
            )

        close = time_to_minutes(schedule.close_time)
        slots_by_worker: dict[int, list[int]] = {}
        for slot, worker_ids in schedule.time_slots.items():
            start = time_to_minutes(slot)
            if start >= close:
                logger.debug(f"Ignored {day.value} slot {slot} at or after closing")
                continue
            for worker_id in worker_ids:
                slots_by_worker.setdefault(worker_id, []).append(start)

        for worker_id in sorted(slots_by_worker):
            starts = sorted(set(slots_by_worker[worker_id]))
            ends = [min(start + step, close) for start in starts]
            first, last = starts[0], max(ends)
            worked = sum(end - start for start, end in zip(starts, ends))
            shifts.append(
                ShiftEntry(
                    employee_id=worker_id,
                    day=day,
                    start_time=minutes_to_time(first),
                    end_time=minutes_to_time(last),
                    break_minutes=(last - first) - worked,
                )
            )

    return shifts
