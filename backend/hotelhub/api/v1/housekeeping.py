"""Housekeeping service management endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from hotelhub.api import deps
from hotelhub.core.errors import Unauthorized
from hotelhub.core.session import SessionContext
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.housekeeping import (
    HousekeepingListRead,
    HousekeepingMutationRead,
    HousekeepingServiceCreate,
    HousekeepingServiceUpdate,
)
from hotelhub.schemas.notice import NoticeRead
from hotelhub.security.permissions import PROVIDER_ROLES, require_roles
from hotelhub.services.housekeeping_service import HousekeepingManager, HousekeepingRegistry

router = APIRouter()


async def _manager_for(
    session: SessionContext,
    client: MarketplaceClient,
    registry: HousekeepingRegistry,
) -> HousekeepingManager:
    require_roles(session, PROVIDER_ROLES)
    manager = registry.for_provider(str(session.user_id))
    if not manager.loaded:
        await manager.load(client)
    return manager


def _not_found(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("", response_model=HousekeepingListRead, summary="List housekeeping services")
async def list_housekeeping_services(
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[HousekeepingRegistry, Depends(deps.get_housekeeping_registry)],
) -> HousekeepingListRead:
    require_roles(session, PROVIDER_ROLES)
    manager = registry.for_provider(str(session.user_id))
    try:
        notices = await manager.load(client)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    return HousekeepingListRead(
        services=manager.list_services(),
        notices=[notice.to_read() for notice in notices],
    )


@router.post(
    "",
    response_model=HousekeepingMutationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a housekeeping service",
)
async def create_housekeeping_service(
    payload: HousekeepingServiceCreate,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[HousekeepingRegistry, Depends(deps.get_housekeeping_registry)],
) -> HousekeepingMutationRead:
    try:
        manager = await _manager_for(session, client, registry)
        service, notice = await manager.create(client, payload)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    return HousekeepingMutationRead(
        service=service, notice=notice.to_read() if notice else None
    )


@router.put(
    "/{service_id}",
    response_model=HousekeepingMutationRead,
    summary="Update a housekeeping service",
)
async def update_housekeeping_service(
    service_id: str,
    payload: HousekeepingServiceUpdate,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[HousekeepingRegistry, Depends(deps.get_housekeeping_registry)],
) -> HousekeepingMutationRead:
    try:
        manager = await _manager_for(session, client, registry)
        service, notice = await manager.update(client, service_id, payload)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    except ValueError as exc:
        raise _not_found(exc) from exc
    return HousekeepingMutationRead(
        service=service, notice=notice.to_read() if notice else None
    )


@router.delete(
    "/{service_id}",
    response_model=NoticeRead | None,
    summary="Delete a housekeeping service",
)
async def delete_housekeeping_service(
    service_id: str,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[HousekeepingRegistry, Depends(deps.get_housekeeping_registry)],
) -> NoticeRead | None:
    try:
        manager = await _manager_for(session, client, registry)
        notice = await manager.delete(client, service_id)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    except ValueError as exc:
        raise _not_found(exc) from exc
    return notice.to_read() if notice else None


@router.post(
    "/{service_id}/toggle",
    response_model=HousekeepingMutationRead,
    summary="Activate or deactivate a housekeeping service",
)
async def toggle_housekeeping_service(
    service_id: str,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[HousekeepingRegistry, Depends(deps.get_housekeeping_registry)],
) -> HousekeepingMutationRead:
    try:
        manager = await _manager_for(session, client, registry)
        service, notice = await manager.toggle(client, service_id)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    except ValueError as exc:
        raise _not_found(exc) from exc
    return HousekeepingMutationRead(
        service=service, notice=notice.to_read() if notice else None
    )
