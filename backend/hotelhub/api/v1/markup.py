"""Hotel markup settings endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from hotelhub.api import deps
from hotelhub.core.errors import MarketplaceError, Unauthorized
from hotelhub.core.session import SessionContext
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.markup import (
    MarkupSettingsRead,
    MarkupUpdate,
    PriceQuoteRead,
    PriceQuoteRequest,
)
from hotelhub.schemas.notice import NoticeRead
from hotelhub.security.permissions import HOTEL_ADMIN_ROLES, require_roles
from hotelhub.services.markup_service import MarkupPricingEngine, MarkupRegistry

router = APIRouter()


def _engine_for(session: SessionContext, registry: MarkupRegistry) -> MarkupPricingEngine:
    require_roles(session, HOTEL_ADMIN_ROLES)
    return registry.for_hotel(str(session.user_id))


@router.get("", response_model=MarkupSettingsRead, summary="Load markup settings")
async def get_markup_settings(
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[MarkupRegistry, Depends(deps.get_markup_registry)],
    refresh: bool = True,
) -> MarkupSettingsRead:
    engine = _engine_for(session, registry)
    notices = []
    if refresh and not engine.dirty:
        try:
            notices = await engine.load(client)
        except Unauthorized as exc:
            raise deps.http_error_for(exc) from exc
    return engine.read(notices)


@router.put(
    "/{category_id}",
    response_model=MarkupSettingsRead,
    summary="Set a category default markup",
)
async def set_category_markup(
    category_id: str,
    payload: MarkupUpdate,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    registry: Annotated[MarkupRegistry, Depends(deps.get_markup_registry)],
) -> MarkupSettingsRead:
    engine = _engine_for(session, registry)
    engine.set_default_markup(category_id, payload.percent)
    return engine.read()


@router.put(
    "/{category_id}/providers/{provider_id}",
    response_model=MarkupSettingsRead,
    summary="Set or clear a provider markup override",
)
async def set_provider_markup(
    category_id: str,
    provider_id: str,
    payload: MarkupUpdate,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    registry: Annotated[MarkupRegistry, Depends(deps.get_markup_registry)],
) -> MarkupSettingsRead:
    engine = _engine_for(session, registry)
    engine.set_provider_override(category_id, provider_id, payload.percent)
    return engine.read()


@router.post("/save", response_model=NoticeRead, summary="Save all markup settings")
async def save_markup_settings(
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[MarkupRegistry, Depends(deps.get_markup_registry)],
) -> NoticeRead:
    engine = _engine_for(session, registry)
    try:
        notice = await engine.save_all(client)
    except MarketplaceError as exc:
        raise deps.http_error_for(exc) from exc
    return notice.to_read()


@router.post("/quote", response_model=PriceQuoteRead, summary="Quote a guest price")
async def quote_price(
    payload: PriceQuoteRequest,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    registry: Annotated[MarkupRegistry, Depends(deps.get_markup_registry)],
    language: str | None = None,
) -> PriceQuoteRead:
    engine = _engine_for(session, registry)
    return engine.quote(
        payload.base_price,
        payload.category_id,
        payload.provider_id,
        language=language,
    )
