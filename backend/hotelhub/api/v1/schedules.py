"""Operating schedule helpers exposed to dashboards."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hotelhub.api import deps
from hotelhub.core.session import SessionContext
from hotelhub.schemas.schedule import (
    ApplyToAllRequest,
    OpenAtRead,
    OpenAtRequest,
    OperatingSchedule,
    ScheduleSummaryRead,
)
from hotelhub.services import operating_schedule_service

router = APIRouter()


@router.post(
    "/summary", response_model=ScheduleSummaryRead, summary="Summarize a weekly schedule"
)
async def summarize_schedule(
    schedule: OperatingSchedule,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
) -> ScheduleSummaryRead:
    return operating_schedule_service.summary_read(schedule)


@router.post(
    "/apply-to-all",
    response_model=OperatingSchedule,
    summary="Copy one day's hours to every day",
)
async def apply_to_all_days(
    payload: ApplyToAllRequest,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
) -> OperatingSchedule:
    try:
        return operating_schedule_service.apply_to_all_days(
            payload.schedule, payload.source_day
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.post("/is-open", response_model=OpenAtRead, summary="Check a moment against a schedule")
async def is_open_at(
    payload: OpenAtRequest,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
) -> OpenAtRead:
    return OpenAtRead(
        day=operating_schedule_service.WEEKDAYS[payload.moment.weekday()],
        is_open=operating_schedule_service.is_open_at(payload.schedule, payload.moment),
    )
