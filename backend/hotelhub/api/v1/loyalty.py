"""Guest loyalty membership endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hotelhub.api import deps
from hotelhub.core.errors import MarketplaceError
from hotelhub.core.session import SessionContext
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.loyalty import MembershipView, TierProgress, TierProgressRequest
from hotelhub.services import loyalty_service

router = APIRouter()


@router.get(
    "/membership", response_model=MembershipView, summary="Current guest membership"
)
async def get_membership(
    hotel_id: str,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    language: str | None = None,
) -> MembershipView:
    try:
        return await loyalty_service.fetch_membership_view(
            client, hotel_id, language=language
        )
    except MarketplaceError as exc:
        raise deps.http_error_for(exc) from exc


@router.post(
    "/progress", response_model=TierProgress, summary="Compute progress to the next tier"
)
async def compute_tier_progress(
    payload: TierProgressRequest,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
) -> TierProgress:
    try:
        if payload.thresholds:
            loyalty_service.validate_thresholds(payload.thresholds)
        return loyalty_service.compute_progress(payload.membership, payload.thresholds)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
