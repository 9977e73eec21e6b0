"""Persistence of activation intents recorded while the marketplace was offline."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from sqlalchemy import Select, delete, select

from hotelhub.db.session import create_schema, get_sessionmaker, resolve_database_url
from hotelhub.models.pending_activation import (
    ActivationIntent,
    CategoryScope,
    PendingActivation,
)

logger = logging.getLogger(__name__)

_schema_ready: set[str] = set()


class ActivationStore:
    """Pending activation intents keyed by provider, scope and category."""

    def __init__(self, database_url: str | None = None) -> None:
        self._override_url = database_url
        self._schema_lock = asyncio.Lock()

    @property
    def database_url(self) -> str:
        return resolve_database_url(self._override_url)

    async def _ensure_schema(self) -> None:
        url = self.database_url
        if url in _schema_ready:
            return
        async with self._schema_lock:
            if url not in _schema_ready:
                await create_schema(url)
                _schema_ready.add(url)

    async def list_pending(
        self,
        *,
        provider_id: str | None = None,
        scope: CategoryScope | None = None,
    ) -> Sequence[PendingActivation]:
        await self._ensure_schema()
        stmt: Select[tuple[PendingActivation]] = select(PendingActivation)
        if provider_id is not None:
            stmt = stmt.where(PendingActivation.provider_id == provider_id)
        if scope is not None:
            stmt = stmt.where(PendingActivation.scope == scope)
        stmt = stmt.order_by(PendingActivation.created_at)
        async with get_sessionmaker(self.database_url)() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    async def record(
        self,
        *,
        provider_id: str,
        scope: CategoryScope,
        category_key: str,
        intent: ActivationIntent,
    ) -> PendingActivation:
        """Store the latest intent for a key, replacing any earlier one."""
        await self._ensure_schema()
        async with get_sessionmaker(self.database_url)() as session:
            stmt = select(PendingActivation).where(
                PendingActivation.provider_id == provider_id,
                PendingActivation.scope == scope,
                PendingActivation.category_key == category_key,
            )
            pending = (await session.execute(stmt)).scalar_one_or_none()
            if pending is None:
                pending = PendingActivation(
                    provider_id=provider_id,
                    scope=scope,
                    category_key=category_key,
                    intent=intent,
                )
                session.add(pending)
            else:
                pending.intent = intent
            await session.commit()
            await session.refresh(pending)
        logger.info(
            "Recorded pending %s of %s/%s for provider %s",
            intent.value,
            scope.value,
            category_key,
            provider_id,
        )
        return pending

    async def clear(
        self,
        *,
        provider_id: str,
        scope: CategoryScope,
        category_key: str,
    ) -> bool:
        """Drop the pending intent for a key. Returns whether one existed."""
        await self._ensure_schema()
        async with get_sessionmaker(self.database_url)() as session:
            result = await session.execute(
                delete(PendingActivation).where(
                    PendingActivation.provider_id == provider_id,
                    PendingActivation.scope == scope,
                    PendingActivation.category_key == category_key,
                )
            )
            await session.commit()
        return bool(result.rowcount)


def reset_schema_cache() -> None:
    """Forget which databases already have the schema (used after disposal)."""
    _schema_ready.clear()


__all__ = ["ActivationStore", "reset_schema_cache"]
