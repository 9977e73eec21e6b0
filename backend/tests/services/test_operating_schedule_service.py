from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from hotelhub.schemas.schedule import DaySchedule, OperatingSchedule
from hotelhub.services.operating_schedule_service import (
    WEEKDAYS,
    ScheduleSummary,
    apply_to_all_days,
    inverted_ranges,
    is_open_at,
    set_day,
    summarize,
    summary_read,
)


def _schedule(**days: DaySchedule) -> OperatingSchedule:
    return OperatingSchedule(**days)


def _closed() -> DaySchedule:
    return DaySchedule(is_available=False)


def test_identical_days_summarize_as_daily() -> None:
    schedule = apply_to_all_days(
        _schedule(monday=DaySchedule(start_time="08:00", end_time="22:00"))
    )

    assert summarize(schedule) == "Daily: 08:00 - 22:00"


def test_weekend_closed_summary() -> None:
    schedule = _schedule(saturday=_closed(), sunday=_closed())

    assert summarize(schedule) == "Mon-Fri: 09:00 - 17:00"


def test_all_closed_summary() -> None:
    schedule = OperatingSchedule(**{day: _closed() for day in WEEKDAYS})

    assert summarize(schedule) == "Closed"
    assert list(ScheduleSummary(schedule)) == []


def test_segments_split_on_hours_and_skip_closed_days() -> None:
    schedule = _schedule(
        wednesday=_closed(),
        friday=DaySchedule(start_time="10:00", end_time="14:00"),
        saturday=DaySchedule(start_time="10:00", end_time="14:00"),
    )

    assert summarize(schedule) == (
        "Mon-Thu: 09:00 - 17:00, Fri-Sat: 10:00 - 14:00, Sun: 09:00 - 17:00"
    )


def test_closed_midweek_day_does_not_split_matching_hours() -> None:
    schedule = _schedule(thursday=_closed(), saturday=_closed(), sunday=_closed())

    assert summarize(schedule) == "Mon-Fri: 09:00 - 17:00"
    segments = list(ScheduleSummary(schedule))
    assert len(segments) == 1
    assert segments[0].days == ("monday", "tuesday", "wednesday", "friday")


def test_segments_cover_exactly_the_open_days() -> None:
    schedule = _schedule(
        tuesday=_closed(),
        thursday=DaySchedule(start_time="12:00", end_time="20:00"),
        sunday=_closed(),
    )
    summary = ScheduleSummary(schedule)

    covered = [day for segment in summary for day in segment.days]
    open_days = [day for day in WEEKDAYS if getattr(schedule, day).is_available]
    assert covered == open_days
    # iterating again yields the same segments
    assert [str(segment) for segment in summary] == [str(segment) for segment in summary]


def test_set_day_returns_updated_copy() -> None:
    schedule = OperatingSchedule()

    updated = set_day(schedule, "Tuesday", "startTime", "07:30")

    assert updated.tuesday.start_time == "07:30"
    assert schedule.tuesday.start_time == "09:00"


@pytest.mark.parametrize(
    ("day", "field", "value", "error"),
    [
        ("funday", "start_time", "07:00", ValueError),
        ("monday", "opening", "07:00", ValueError),
        ("monday", "end_time", "25:00", ValidationError),
    ],
)
def test_set_day_rejects_bad_input(day, field, value, error) -> None:
    with pytest.raises(error):
        set_day(OperatingSchedule(), day, field, value)


def test_apply_to_all_copies_source_day() -> None:
    schedule = _schedule(friday=DaySchedule(start_time="06:00", end_time="12:00"))

    updated = apply_to_all_days(schedule, "friday")

    assert {(getattr(updated, day).start_time, getattr(updated, day).end_time) for day in WEEKDAYS} == {
        ("06:00", "12:00")
    }
    updated.monday.start_time = "07:00"
    assert updated.tuesday.start_time == "06:00"


def test_is_open_at_respects_day_and_hours() -> None:
    schedule = _schedule(sunday=_closed())
    # 2026-10-19 is a Monday
    monday_noon = datetime.datetime(2026, 10, 19, 12, 0)
    monday_night = datetime.datetime(2026, 10, 19, 21, 0)
    sunday_noon = datetime.datetime(2026, 10, 18, 12, 0)

    assert is_open_at(schedule, monday_noon) is True
    assert is_open_at(schedule, monday_night) is False
    assert is_open_at(schedule, sunday_noon) is False


def test_inverted_ranges_are_reported() -> None:
    schedule = _schedule(
        monday=DaySchedule(start_time="18:00", end_time="09:00"),
        tuesday=DaySchedule(is_available=False, start_time="18:00", end_time="09:00"),
    )

    assert inverted_ranges(schedule) == ["monday"]
    view = summary_read(schedule)
    assert view.inverted_days == ["monday"]
    assert view.segments[0] == "Mon: 18:00 - 09:00"
