"""Test fixtures for the hotel services marketplace BFF."""
from __future__ import annotations

import inspect
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("MARKETPLACE_API_BASE_URL", "http://marketplace.test/api")

from hotelhub.api import deps
from hotelhub.core.config import get_settings
from hotelhub.core.session import SessionContext, UserRole
from hotelhub.db.base import Base
from hotelhub.db.session import dispose_engine
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.main import app
from hotelhub.services.activation_store import ActivationStore, reset_schema_cache

import hotelhub.models  # noqa: F401

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class MarketplaceStub:
    """Programmable stand-in for the marketplace REST API.

    Routes are matched on method and path below ``/api``. Unknown routes
    answer 404 like a backend without that endpoint.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Handler] = {}
        self.calls: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        error: type[httpx.TransportError] | None = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:
            if error is not None:
                def handler(request: httpx.Request) -> httpx.Response:
                    raise error("marketplace unreachable", request=request)
            else:
                def handler(request: httpx.Request) -> httpx.Response:
                    return httpx.Response(status_code, json=json)
        self._routes[(method.upper(), path)] = handler

    def paths(self) -> list[str]:
        return [f"{request.method} {self._path(request)}" for request in self.calls]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/api"):] if path.startswith("/api/") else path

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self._routes.get((request.method, self._path(request)))
        if handler is None:
            return httpx.Response(404, json={"message": "Route not found"})
        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response


def make_token(user_id: str = "provider-1", role: UserRole = UserRole.SERVICE) -> str:
    return jwt.encode({"id": user_id, "role": role.value}, "test-secret", algorithm="HS256")


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    reset_schema_cache()
    app.state.activation_registry.clear()
    app.state.markup_registry.clear()
    app.state.housekeeping_registry.clear()
    yield
    await dispose_engine(db_url)


@pytest.fixture()
def store(reset_database: None, db_url: str) -> ActivationStore:
    return ActivationStore(db_url)


@pytest.fixture()
def stub() -> MarketplaceStub:
    return MarketplaceStub()


@pytest_asyncio.fixture()
async def marketplace(stub: MarketplaceStub) -> AsyncIterator[MarketplaceClient]:
    """Marketplace client for a service provider, wired to the stub."""
    session = SessionContext(token=make_token(), user_id="provider-1", role=UserRole.SERVICE)
    async with MarketplaceClient(
        session,
        base_url="http://marketplace.test/api",
        transport=httpx.MockTransport(stub),
    ) as client:
        yield client


@pytest_asyncio.fixture()
async def api_client(
    reset_database: None, stub: MarketplaceStub
) -> AsyncIterator[AsyncClient]:
    """HTTP client for the BFF with marketplace calls routed to the stub."""
    app.dependency_overrides[deps.get_marketplace_transport] = lambda: httpx.MockTransport(stub)
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(deps.get_marketplace_transport, None)


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build bearer headers for a caller with the given id and role."""

    def _headers(
        user_id: str = "provider-1", role: UserRole = UserRole.SERVICE
    ) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, role)}"}

    return _headers
