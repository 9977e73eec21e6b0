"""Weekly operating schedules and their compact textual summary."""

from __future__ import annotations

import datetime
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import groupby

from hotelhub.schemas.schedule import DaySchedule, OperatingSchedule, ScheduleSummaryRead

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_FIELD_ALIASES = {
    "isAvailable": "is_available",
    "startTime": "start_time",
    "endTime": "end_time",
}


def _abbreviation(day: str) -> str:
    return day[:3].capitalize()


def _check_day(day: str) -> str:
    normalized = day.lower()
    if normalized not in WEEKDAYS:
        raise ValueError(f"Unknown weekday: {day}")
    return normalized


def set_day(
    schedule: OperatingSchedule, day: str, field: str, value: object
) -> OperatingSchedule:
    """Return a copy of ``schedule`` with one field of one day replaced."""
    day = _check_day(day)
    field = _FIELD_ALIASES.get(field, field)
    if field not in DaySchedule.model_fields:
        raise ValueError(f"Unknown schedule field: {field}")
    updated = schedule.model_copy(deep=True)
    setattr(getattr(updated, day), field, value)
    return updated


def apply_to_all_days(
    schedule: OperatingSchedule, source_day: str = "monday"
) -> OperatingSchedule:
    """Copy the hours of ``source_day`` onto every weekday."""
    source = getattr(schedule, _check_day(source_day))
    return OperatingSchedule(**{day: source.model_copy() for day in WEEKDAYS})


@dataclass(frozen=True, slots=True)
class ScheduleSegment:
    days: tuple[str, ...]
    start_time: str
    end_time: str

    @property
    def label(self) -> str:
        if len(self.days) == 1:
            return _abbreviation(self.days[0])
        return f"{_abbreviation(self.days[0])}-{_abbreviation(self.days[-1])}"

    def __str__(self) -> str:
        return f"{self.label}: {self.start_time} - {self.end_time}"


class ScheduleSummary:
    """Runs of open days that share the same hours.

    Closed days are dropped before grouping, so open days on either side of
    a closed day join one run when their hours match. Iterating yields
    ``ScheduleSegment`` values and may be repeated.
    """

    def __init__(self, schedule: OperatingSchedule) -> None:
        self.schedule = schedule

    def __iter__(self) -> Iterator[ScheduleSegment]:
        open_days = [
            (day, getattr(self.schedule, day))
            for day in WEEKDAYS
            if getattr(self.schedule, day).is_available
        ]
        for hours, group in groupby(
            open_days, key=lambda item: (item[1].start_time, item[1].end_time)
        ):
            yield ScheduleSegment(tuple(day for day, _ in group), *hours)

    def __str__(self) -> str:
        segments = list(self)
        if not segments:
            return "Closed"
        if len(segments) == 1 and len(segments[0].days) == len(WEEKDAYS):
            only = segments[0]
            return f"Daily: {only.start_time} - {only.end_time}"
        return ", ".join(str(segment) for segment in segments)


def summarize(schedule: OperatingSchedule) -> str:
    return str(ScheduleSummary(schedule))


def is_open_at(schedule: OperatingSchedule, moment: datetime.datetime) -> bool:
    entry: DaySchedule = getattr(schedule, WEEKDAYS[moment.weekday()])
    if not entry.is_available:
        return False
    current = moment.strftime("%H:%M")
    return entry.start_time <= current <= entry.end_time


def inverted_ranges(schedule: OperatingSchedule) -> list[str]:
    """Open days whose start time is not before their end time."""
    return [
        day
        for day in WEEKDAYS
        if getattr(schedule, day).is_available
        and getattr(schedule, day).start_time >= getattr(schedule, day).end_time
    ]


def summary_read(schedule: OperatingSchedule) -> ScheduleSummaryRead:
    summary = ScheduleSummary(schedule)
    return ScheduleSummaryRead(
        summary=str(summary),
        segments=[str(segment) for segment in summary],
        inverted_days=inverted_ranges(schedule),
    )


__all__ = [
    "ScheduleSegment",
    "ScheduleSummary",
    "WEEKDAYS",
    "apply_to_all_days",
    "inverted_ranges",
    "is_open_at",
    "set_day",
    "summarize",
    "summary_read",
]
