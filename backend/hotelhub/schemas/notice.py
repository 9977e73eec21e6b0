"""Schemas for user-facing notices."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


class NoticeLevel(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NoticeRead(BaseModel):
    level: NoticeLevel
    message: str

    model_config = ConfigDict(from_attributes=True)
