"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from hotelhub.core.errors import (
    Forbidden,
    MarketplaceError,
    MarketplaceValidationError,
    Unauthorized,
)
from hotelhub.core.security import build_session_context
from hotelhub.core.session import SessionContext
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.services.category_activation_service import ActivationRegistry
from hotelhub.services.housekeeping_service import HousekeepingRegistry
from hotelhub.services.markup_service import MarkupRegistry

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> SessionContext:
    """Build the caller's session from the forwarded marketplace token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        return build_session_context(credentials.credentials)
    except JWTError as exc:
        raise credentials_exception from exc


def get_marketplace_transport() -> httpx.AsyncBaseTransport | None:
    """Transport used for marketplace calls; ``None`` selects the network."""
    return None


async def get_marketplace_client(
    session: Annotated[SessionContext, Depends(get_session_context)],
    transport: Annotated[httpx.AsyncBaseTransport | None, Depends(get_marketplace_transport)],
) -> AsyncGenerator[MarketplaceClient, None]:
    async with MarketplaceClient(session, transport=transport) as client:
        yield client


def get_activation_registry(request: Request) -> ActivationRegistry:
    return request.app.state.activation_registry


def get_markup_registry(request: Request) -> MarkupRegistry:
    return request.app.state.markup_registry


def get_housekeeping_registry(request: Request) -> HousekeepingRegistry:
    return request.app.state.housekeeping_registry


def http_error_for(exc: MarketplaceError) -> HTTPException:
    """Map a marketplace failure that must reach the caller to an HTTP error."""
    if isinstance(exc, Unauthorized):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, Forbidden):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
    if isinstance(exc, MarketplaceValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
