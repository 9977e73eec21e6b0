"""Service category activation endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hotelhub.api import deps
from hotelhub.core.errors import CategoryUnavailable, Unauthorized
from hotelhub.core.session import SessionContext
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.models.pending_activation import CategoryScope
from hotelhub.schemas.category import (
    ActivationResultRead,
    CategoryListingRead,
    ReconcileResultRead,
    ServiceCategory,
)
from hotelhub.security.permissions import PROVIDER_ROLES, require_roles
from hotelhub.services import category_catalog
from hotelhub.services.category_activation_service import (
    ActivationRegistry,
    CategoryActivationState,
)

router = APIRouter()

ScopeQuery = Annotated[CategoryScope, Query()]


async def _state_for(
    session: SessionContext, registry: ActivationRegistry, scope: CategoryScope
) -> CategoryActivationState:
    require_roles(session, PROVIDER_ROLES)
    return await registry.for_provider(str(session.user_id), scope)


@router.get("", response_model=CategoryListingRead, summary="List service categories")
async def list_categories(
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[ActivationRegistry, Depends(deps.get_activation_registry)],
    scope: ScopeQuery = CategoryScope.OUTSIDE,
) -> CategoryListingRead:
    state = await _state_for(session, registry, scope)
    try:
        notices = await state.load(client)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    return state.listing(notices)


@router.post(
    "/reconcile",
    response_model=ReconcileResultRead,
    summary="Replay activations recorded offline",
)
async def reconcile_categories(
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[ActivationRegistry, Depends(deps.get_activation_registry)],
    scope: ScopeQuery = CategoryScope.OUTSIDE,
) -> ReconcileResultRead:
    state = await _state_for(session, registry, scope)
    try:
        outcomes = await state.reconcile(client)
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    return ReconcileResultRead(
        results=[state.result_for(outcome) for outcome in outcomes],
        pending=sorted(state.pending_intents),
    )


@router.get(
    "/{category_key}",
    response_model=ServiceCategory,
    summary="Show a catalog category",
)
async def get_category(
    category_key: str,
    _: Annotated[SessionContext, Depends(deps.get_session_context)],
) -> ServiceCategory:
    category = category_catalog.get_category(category_key)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    return category


async def _toggle(
    *,
    activate: bool,
    category_key: str,
    session: SessionContext,
    client: MarketplaceClient,
    registry: ActivationRegistry,
    scope: CategoryScope,
) -> ActivationResultRead:
    state = await _state_for(session, registry, scope)
    try:
        if activate:
            outcome = await state.activate(client, category_key)
        else:
            outcome = await state.deactivate(client, category_key)
    except CategoryUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    except Unauthorized as exc:
        raise deps.http_error_for(exc) from exc
    return state.result_for(outcome)


@router.post(
    "/{category_key}/activate",
    response_model=ActivationResultRead,
    summary="Activate a category",
)
async def activate_category(
    category_key: str,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[ActivationRegistry, Depends(deps.get_activation_registry)],
    scope: ScopeQuery = CategoryScope.OUTSIDE,
) -> ActivationResultRead:
    return await _toggle(
        activate=True,
        category_key=category_key,
        session=session,
        client=client,
        registry=registry,
        scope=scope,
    )


@router.post(
    "/{category_key}/deactivate",
    response_model=ActivationResultRead,
    summary="Deactivate a category",
)
async def deactivate_category(
    category_key: str,
    session: Annotated[SessionContext, Depends(deps.get_session_context)],
    client: Annotated[MarketplaceClient, Depends(deps.get_marketplace_client)],
    registry: Annotated[ActivationRegistry, Depends(deps.get_activation_registry)],
    scope: ScopeQuery = CategoryScope.OUTSIDE,
) -> ActivationResultRead:
    return await _toggle(
        activate=False,
        category_key=category_key,
        session=session,
        client=client,
        registry=registry,
        scope=scope,
    )
