"""Engines and sessions for the local pending-activation store."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hotelhub.core.config import get_settings

# One engine and sessionmaker per database URL; tests switch URLs at runtime.
_engines: dict[str, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def resolve_database_url(override: str | None = None) -> str:
    return override or get_settings().database_url


def _engine_for(url: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    entry = _engines.get(url)
    if entry is None:
        engine = create_async_engine(url, future=True)
        entry = (engine, async_sessionmaker(engine, expire_on_commit=False))
        _engines[url] = entry
    return entry


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the cached sessionmaker for ``database_url`` (default: settings)."""
    return _engine_for(resolve_database_url(database_url))[1]


async def create_schema(database_url: str | None = None) -> None:
    """Create the store tables if they do not exist yet."""
    from hotelhub.db.base import Base
    import hotelhub.models  # noqa: F401

    engine, _ = _engine_for(resolve_database_url(database_url))
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


async def dispose_engine(database_url: str | None = None) -> None:
    """Close the pooled connections of one database and forget its engine."""
    entry = _engines.pop(resolve_database_url(database_url), None)
    if entry is not None:
        await entry[0].dispose()
