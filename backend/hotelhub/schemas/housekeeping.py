"""Housekeeping service schemas."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from hotelhub.schemas.notice import NoticeRead
from hotelhub.schemas.schedule import OperatingSchedule


class HousekeepingCategory(str, enum.Enum):
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"
    AMENITIES = "amenities"
    LAUNDRY = "laundry"


class ServiceAvailability(BaseModel):
    mode: str = "always"
    schedule: OperatingSchedule = Field(default_factory=OperatingSchedule)

    @model_validator(mode="before")
    @classmethod
    def _accept_mode_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"mode": value}
        return value


class HousekeepingServiceBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    category: HousekeepingCategory = HousekeepingCategory.CLEANING
    estimated_duration: int = Field(
        default=30,
        ge=0,
        validation_alias=AliasChoices("estimated_duration", "estimatedDuration"),
    )
    availability: ServiceAvailability = Field(default_factory=ServiceAvailability)
    requirements: list[str] = Field(default_factory=list)
    instructions: str = ""

    model_config = ConfigDict(populate_by_name=True)


class HousekeepingServiceCreate(HousekeepingServiceBase):
    pass


class HousekeepingServiceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: HousekeepingCategory | None = None
    estimated_duration: int | None = Field(default=None, ge=0)
    availability: ServiceAvailability | None = None
    requirements: list[str] | None = None
    instructions: str | None = None


class HousekeepingService(HousekeepingServiceBase):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    is_active: bool = Field(
        default=True, validation_alias=AliasChoices("is_active", "isActive")
    )


class HousekeepingServiceRead(HousekeepingService):
    schedule_summary: str
    local_only: bool = False


class HousekeepingListRead(BaseModel):
    services: list[HousekeepingServiceRead]
    notices: list[NoticeRead] = Field(default_factory=list)


class HousekeepingMutationRead(BaseModel):
    service: HousekeepingServiceRead | None = None
    notice: NoticeRead | None = None
