"""
Schedule Schemas

Weekly template, worker roster and shift entry models. The template mirrors
the ``schedule_data`` JSON blob kept by the template store: one entry per
weekday, each with operating hours, break periods and a slot -> worker-ID
mapping.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payroll_engines.config import get_settings
from payroll_engines.services.time_utils import time_to_minutes


class DayOfWeek(str, Enum):
    """Weekday keys used by the template store."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


DAY_ORDER: tuple[DayOfWeek, ...] = tuple(DayOfWeek)

DAY_NAMES_KO: dict[DayOfWeek, str] = {
    DayOfWeek.MONDAY: "월요일",
    DayOfWeek.TUESDAY: "화요일",
    DayOfWeek.WEDNESDAY: "수요일",
    DayOfWeek.THURSDAY: "목요일",
    DayOfWeek.FRIDAY: "금요일",
    DayOfWeek.SATURDAY: "토요일",
    DayOfWeek.SUNDAY: "일요일",
}


def _check_time(value: str | None) -> str | None:
    if value is not None:
        time_to_minutes(value)
    return value


class BreakPeriod(BaseModel):
    """A named break inside the operating day, e.g. lunch 12:00-13:00."""

    model_config = ConfigDict(frozen=True)

    start: str = Field(..., description="Break start (HH:MM)")
    end: str = Field(..., description="Break end (HH:MM), exclusive")
    name: str = Field(default="", description="Label shown to staff")

    @field_validator("start", "end")
    @classmethod
    def validate_times(cls, value: str) -> str:
        return _check_time(value)


class DaySchedule(BaseModel):
    """
    One weekday of a weekly template.

    Closed days carry no hours, breaks or assignments. Slot labels are the
    start times of fixed-width slots; each maps to the IDs of the workers
    assigned to it.
    """

    model_config = ConfigDict(frozen=True)

    is_open: bool = False
    open_time: str | None = Field(default=None, description="Opening time (HH:MM)")
    close_time: str | None = Field(default=None, description="Closing time (HH:MM)")
    break_periods: list[BreakPeriod] = Field(default_factory=list)
    time_slots: dict[str, list[int]] = Field(default_factory=dict)

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_times(cls, value: str | None) -> str | None:
        return _check_time(value)

    @field_validator("time_slots")
    @classmethod
    def validate_slot_labels(cls, value: dict[str, list[int]]) -> dict[str, list[int]]:
        for label in value:
            time_to_minutes(label)
        return value


class WeeklyTemplate(BaseModel):
    """
    A store's reusable week: per-day hours, breaks and slot assignments.

    Instances are immutable values. The editing functions in
    ``payroll_engines.services.template_editor`` return new templates.
    """

    model_config = ConfigDict(frozen=True)

    template_id: int | None = None
    store_id: int | None = None
    template_name: str | None = None
    slot_minutes: int = Field(
        default_factory=lambda: get_settings().default_slot_minutes,
        gt=0,
        description="Slot width in minutes, uniform across the template",
    )

    monday: DaySchedule = Field(default_factory=DaySchedule)
    tuesday: DaySchedule = Field(default_factory=DaySchedule)
    wednesday: DaySchedule = Field(default_factory=DaySchedule)
    thursday: DaySchedule = Field(default_factory=DaySchedule)
    friday: DaySchedule = Field(default_factory=DaySchedule)
    saturday: DaySchedule = Field(default_factory=DaySchedule)
    sunday: DaySchedule = Field(default_factory=DaySchedule)

    def get_day(self, day: DayOfWeek | str) -> DaySchedule:
        return getattr(self, DayOfWeek(day).value)

    def with_day(self, day: DayOfWeek | str, schedule: DaySchedule) -> "WeeklyTemplate":
        """Return a copy of the template with one weekday replaced."""
        return self.model_copy(update={DayOfWeek(day).value: schedule})

    def days(self) -> list[tuple[DayOfWeek, DaySchedule]]:
        """Weekdays in Monday-first order."""
        return [(day, self.get_day(day)) for day in DAY_ORDER]

    @classmethod
    def from_schedule_data(
        cls, schedule_data: dict[str, Any], slot_minutes: int | None = None, **metadata: Any
    ) -> "WeeklyTemplate":
        """Build a template from the stored ``schedule_data`` blob."""
        payload: dict[str, Any] = {
            day.value: schedule_data[day.value]
            for day in DAY_ORDER
            if day.value in schedule_data
        }
        if slot_minutes is not None:
            payload["slot_minutes"] = slot_minutes
        payload.update(metadata)
        return cls.model_validate(payload)

    def to_schedule_data(self) -> dict[str, Any]:
        """Serialize back to the stored ``schedule_data`` shape."""
        return {day.value: schedule.model_dump() for day, schedule in self.days()}


class Worker(BaseModel):
    """Employee record as supplied by the HR directory."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Employee ID")
    name: str = Field(..., min_length=1)
    hourly_wage: Decimal = Field(..., ge=0, description="Hourly wage (KRW)")
    position: str | None = None
    store_id: int | None = None
    is_active: bool = True


class ShiftEntry(BaseModel):
    """
    One worker's shift on one day.

    ``end_time`` at or before ``start_time`` means the shift runs past
    midnight. ``work_date`` groups entries into ISO weeks; entries without a
    date (such as those derived from a template) belong to a single week.
    """

    model_config = ConfigDict(frozen=True)

    employee_id: int
    start_time: str = Field(..., description="Shift start (HH:MM)")
    end_time: str = Field(..., description="Shift end (HH:MM)")
    break_minutes: int = Field(default=0, ge=0, description="Unpaid break minutes")
    work_date: date | None = None
    day: DayOfWeek | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, value: str) -> str:
        return _check_time(value)

    @property
    def label(self) -> str:
        """Short identifier for the shift's day."""
        if self.work_date is not None:
            return self.work_date.isoformat()
        if self.day is not None:
            return self.day.value
        return f"{self.start_time}-{self.end_time}"
