"""Weekly operating schedule schemas."""

from __future__ import annotations

import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class DaySchedule(BaseModel):
    """Availability of a single weekday."""

    is_available: bool = Field(
        default=True, validation_alias=AliasChoices("is_available", "isAvailable")
    )
    start_time: str = Field(
        default="09:00",
        pattern=TIME_PATTERN,
        validation_alias=AliasChoices("start_time", "startTime"),
    )
    end_time: str = Field(
        default="17:00",
        pattern=TIME_PATTERN,
        validation_alias=AliasChoices("end_time", "endTime"),
    )

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)


class OperatingSchedule(BaseModel):
    """Seven-day schedule keyed by weekday name."""

    monday: DaySchedule = Field(default_factory=DaySchedule)
    tuesday: DaySchedule = Field(default_factory=DaySchedule)
    wednesday: DaySchedule = Field(default_factory=DaySchedule)
    thursday: DaySchedule = Field(default_factory=DaySchedule)
    friday: DaySchedule = Field(default_factory=DaySchedule)
    saturday: DaySchedule = Field(default_factory=DaySchedule)
    sunday: DaySchedule = Field(default_factory=DaySchedule)


class ScheduleSummaryRead(BaseModel):
    summary: str
    segments: list[str]
    inverted_days: list[str] = Field(default_factory=list)


class ApplyToAllRequest(BaseModel):
    schedule: OperatingSchedule
    source_day: str = "monday"


class OpenAtRequest(BaseModel):
    schedule: OperatingSchedule
    moment: datetime.datetime


class OpenAtRead(BaseModel):
    day: str
    is_open: bool
