"""Per-provider category activation state with offline fallback and reconciliation."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any

from hotelhub.core.errors import (
    ActivationInFlight,
    CategoryUnavailable,
    Forbidden,
    MarketplaceError,
    NotFoundOrUnreachable,
    Unauthorized,
)
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.models.pending_activation import ActivationIntent, CategoryScope
from hotelhub.schemas.category import (
    ActivationResultRead,
    CategoryListingRead,
    CategoryView,
    ServiceCategory,
)
from hotelhub.services import category_catalog
from hotelhub.services.activation_store import ActivationStore
from hotelhub.services.notice_service import Notice, notice_for_error

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = (
    "You are not authorized to {action} this service category. "
    "Please contact your hotel admin."
)
OFFLINE_LOAD_MESSAGE = "Unable to reach the marketplace. Working in offline mode."


class ActivationState(str, enum.Enum):
    INACTIVE = "inactive"
    ACTIVATING = "activating"
    ACTIVE = "active"
    DEACTIVATING = "deactivating"


class ActivationOrigin(str, enum.Enum):
    """Whether an active entry was confirmed by the backend or applied offline."""

    SERVER = "server"
    LOCAL_PENDING = "local-pending"


@dataclass(slots=True)
class ActivationOutcome:
    category_key: str
    state: ActivationState
    changed: bool
    origin: ActivationOrigin | None = None
    notice: Notice | None = None


class CategoryActivationState:
    """Active category set of one provider within one scope.

    Each key moves ``inactive -> activating -> active`` and
    ``active -> deactivating -> inactive``. While a key is in flight further
    toggles of that key are no-ops; other keys stay operable. Offline
    fallbacks are tagged ``local-pending`` and kept in the store until
    ``reconcile`` replays them.
    """

    def __init__(
        self,
        provider_id: str,
        scope: CategoryScope,
        *,
        store: ActivationStore,
    ) -> None:
        self.provider_id = provider_id
        self.scope = scope
        self._store = store
        self._categories: dict[str, ServiceCategory] = {
            category.key: category
            for category in category_catalog.list_categories(scope)
        }
        self._active: dict[str, ActivationOrigin] = {}
        self._pending: dict[str, ActivationIntent] = {}
        self._busy: dict[str, ActivationState] = {}

    # Read side

    @property
    def categories(self) -> dict[str, ServiceCategory]:
        return dict(self._categories)

    @property
    def active_categories(self) -> list[str]:
        return list(self._active)

    @property
    def pending_intents(self) -> dict[str, ActivationIntent]:
        return dict(self._pending)

    def origin_of(self, key: str) -> ActivationOrigin | None:
        return self._active.get(key)

    def state_of(self, key: str) -> ActivationState:
        if key in self._busy:
            return self._busy[key]
        return ActivationState.ACTIVE if key in self._active else ActivationState.INACTIVE

    def is_busy(self, key: str) -> bool:
        return key in self._busy

    def can_toggle(self, key: str) -> bool:
        category = self._categories.get(key)
        return category is not None and not category.coming_soon and key not in self._busy

    def snapshot(self) -> list[CategoryView]:
        views: list[CategoryView] = []
        for key, category in self._categories.items():
            origin = self._active.get(key)
            views.append(
                CategoryView(
                    key=key,
                    name=category.name,
                    description=category.description,
                    coming_soon=category.coming_soon,
                    is_active=origin is not None,
                    is_busy=key in self._busy,
                    can_toggle=self.can_toggle(key),
                    origin=origin.value if origin is not None else None,
                    sample_items=list(category.sample_items),
                )
            )
        return views

    def listing(self, notices: list[Notice] | None = None) -> CategoryListingRead:
        return CategoryListingRead(
            scope=self.scope,
            categories=self.snapshot(),
            active_categories=self.active_categories,
            notices=[notice.to_read() for notice in notices or []],
        )

    def result_for(self, outcome: ActivationOutcome) -> ActivationResultRead:
        return ActivationResultRead(
            category_key=outcome.category_key,
            state=outcome.state.value,
            changed=outcome.changed,
            origin=outcome.origin.value if outcome.origin is not None else None,
            notice=outcome.notice.to_read() if outcome.notice is not None else None,
            active_categories=self.active_categories,
        )

    # Persistence

    async def restore(self) -> None:
        """Re-apply intents that were recorded offline in an earlier session."""
        for pending in await self._store.list_pending(
            provider_id=self.provider_id, scope=self.scope
        ):
            self._pending[pending.category_key] = pending.intent
            if pending.intent is ActivationIntent.ACTIVATE:
                self._active[pending.category_key] = ActivationOrigin.LOCAL_PENDING
            else:
                self._active.pop(pending.category_key, None)

    async def _remember(self, key: str, intent: ActivationIntent) -> None:
        self._pending[key] = intent
        await self._store.record(
            provider_id=self.provider_id,
            scope=self.scope,
            category_key=key,
            intent=intent,
        )

    async def _forget(self, key: str) -> None:
        self._pending.pop(key, None)
        await self._store.clear(
            provider_id=self.provider_id, scope=self.scope, category_key=key
        )

    # Loading

    async def load(self, client: MarketplaceClient) -> list[Notice]:
        """Refresh categories and the server-confirmed active set."""
        try:
            if self.scope is CategoryScope.OUTSIDE:
                served, server_active, message = await self._fetch_outside(client)
            else:
                served, server_active, message = await self._fetch_inside(client)
        except Unauthorized:
            raise
        except Forbidden as exc:
            logger.warning(
                "Provider %s may not list %s categories", self.provider_id, self.scope.value
            )
            self._categories = {}
            self._keep_local_only()
            return [
                Notice.error(exc.detail or "Access denied. Please contact your hotel admin.")
            ]
        except MarketplaceError as exc:
            logger.warning(
                "Falling back to offline categories for %s: %s", self.provider_id, exc.message
            )
            self._keep_local_only()
            self._categories = {
                **category_catalog.fallback_categories(self.scope),
                **{
                    key: self._categories[key]
                    for key in self._active
                    if key in self._categories
                },
            }
            return [Notice.warning(OFFLINE_LOAD_MESSAGE)]

        self._categories = category_catalog.merge_served(served, self.scope)
        self._keep_local_only()
        for key in server_active:
            intent = self._pending.get(key)
            if intent is ActivationIntent.DEACTIVATE:
                continue
            if intent is ActivationIntent.ACTIVATE:
                await self._forget(key)
            self._active[key] = ActivationOrigin.SERVER
        for key, intent in list(self._pending.items()):
            if intent is ActivationIntent.DEACTIVATE and key not in server_active:
                await self._forget(key)
        return [Notice.info(message)] if message else []

    def _keep_local_only(self) -> None:
        self._active = {
            key: origin
            for key, origin in self._active.items()
            if origin is ActivationOrigin.LOCAL_PENDING
        }

    async def _fetch_outside(
        self, client: MarketplaceClient
    ) -> tuple[dict[str, Any], list[str], str | None]:
        data = await client.list_categories()
        served = data.get("availableCategories") or {}
        if isinstance(served, list):
            served = {str(key): {} for key in served}
        active = [str(key) for key in data.get("activeCategories") or []]
        message = data.get("message")
        return served, active, message if isinstance(message, str) else None

    async def _fetch_inside(
        self, client: MarketplaceClient
    ) -> tuple[list[dict[str, Any]], list[str], str | None]:
        services, message = await client.list_inside_services()
        served = [service for service in services if isinstance(service, dict)]
        active = [
            str(service.get("id") or service.get("key"))
            for service in served
            if service.get("isActive")
        ]
        return served, active, message

    # Toggling

    def _require_toggleable(self, key: str) -> ServiceCategory:
        category = self._categories.get(key)
        if category is None:
            raise CategoryUnavailable(f"Unknown category: {key}")
        if category.coming_soon:
            raise CategoryUnavailable(f"{category.name} is coming soon")
        return category

    def _mark_busy(self, key: str, state: ActivationState) -> None:
        if key in self._busy:
            raise ActivationInFlight(key)
        self._busy[key] = state

    async def _send(
        self, client: MarketplaceClient, key: str, intent: ActivationIntent
    ) -> str:
        if self.scope is CategoryScope.OUTSIDE:
            call = (
                client.activate_category(key)
                if intent is ActivationIntent.ACTIVATE
                else client.deactivate_category(key)
            )
        else:
            call = (
                client.activate_inside_service(key)
                if intent is ActivationIntent.ACTIVATE
                else client.deactivate_inside_service(key)
            )
        try:
            return await asyncio.wait_for(call, timeout=client.timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("Toggle of %s timed out after %ss", key, client.timeout)
            raise NotFoundOrUnreachable(
                "The marketplace did not respond in time", network=True
            ) from exc

    async def activate(self, client: MarketplaceClient, key: str) -> ActivationOutcome:
        category = self._require_toggleable(key)
        try:
            self._mark_busy(key, ActivationState.ACTIVATING)
        except ActivationInFlight:
            return ActivationOutcome(key, self.state_of(key), False, self._active.get(key))
        try:
            if key in self._active:
                return ActivationOutcome(
                    key, ActivationState.ACTIVE, False, self._active[key]
                )
            try:
                message = await self._send(client, key, ActivationIntent.ACTIVATE)
            except Unauthorized:
                raise
            except Forbidden as exc:
                notice = Notice.error(exc.detail or FORBIDDEN_MESSAGE.format(action="activate"))
                return ActivationOutcome(key, ActivationState.INACTIVE, False, None, notice)
            except NotFoundOrUnreachable:
                self._active[key] = ActivationOrigin.LOCAL_PENDING
                await self._remember(key, ActivationIntent.ACTIVATE)
                return ActivationOutcome(
                    key,
                    ActivationState.ACTIVE,
                    True,
                    ActivationOrigin.LOCAL_PENDING,
                    Notice.success(f"{category.name} activated locally (offline mode)"),
                )
            except MarketplaceError as exc:
                return ActivationOutcome(
                    key,
                    ActivationState.INACTIVE,
                    False,
                    None,
                    notice_for_error(exc, "activate category"),
                )

            self._active[key] = ActivationOrigin.SERVER
            if key in self._pending:
                await self._forget(key)
            logger.info("Provider %s activated %s", self.provider_id, key)
            return ActivationOutcome(
                key, ActivationState.ACTIVE, True, ActivationOrigin.SERVER, Notice.success(message)
            )
        finally:
            self._busy.pop(key, None)

    async def deactivate(self, client: MarketplaceClient, key: str) -> ActivationOutcome:
        category = self._require_toggleable(key)
        try:
            self._mark_busy(key, ActivationState.DEACTIVATING)
        except ActivationInFlight:
            return ActivationOutcome(key, self.state_of(key), False, self._active.get(key))
        try:
            origin = self._active.get(key)
            if origin is None:
                return ActivationOutcome(key, ActivationState.INACTIVE, False)
            if origin is ActivationOrigin.LOCAL_PENDING and (
                self._pending.get(key) is ActivationIntent.ACTIVATE
            ):
                # The backend never saw the activation.
                del self._active[key]
                await self._forget(key)
                return ActivationOutcome(
                    key,
                    ActivationState.INACTIVE,
                    True,
                    None,
                    Notice.success(f"{category.name} deactivated locally (offline mode)"),
                )
            try:
                message = await self._send(client, key, ActivationIntent.DEACTIVATE)
            except Unauthorized:
                raise
            except Forbidden as exc:
                notice = Notice.error(
                    exc.detail or FORBIDDEN_MESSAGE.format(action="deactivate")
                )
                return ActivationOutcome(key, ActivationState.ACTIVE, False, origin, notice)
            except NotFoundOrUnreachable:
                del self._active[key]
                await self._remember(key, ActivationIntent.DEACTIVATE)
                return ActivationOutcome(
                    key,
                    ActivationState.INACTIVE,
                    True,
                    None,
                    Notice.success(f"{category.name} deactivated locally (offline mode)"),
                )
            except MarketplaceError as exc:
                return ActivationOutcome(
                    key,
                    ActivationState.ACTIVE,
                    False,
                    origin,
                    notice_for_error(exc, "deactivate category"),
                )

            del self._active[key]
            if key in self._pending:
                await self._forget(key)
            logger.info("Provider %s deactivated %s", self.provider_id, key)
            return ActivationOutcome(
                key, ActivationState.INACTIVE, True, None, Notice.success(message)
            )
        finally:
            self._busy.pop(key, None)

    # Reconciliation

    async def reconcile(self, client: MarketplaceClient) -> list[ActivationOutcome]:
        """Replay offline intents against the backend.

        Replays stop at the first network failure; remaining intents stay
        pending for the next attempt. An intent the backend rejects for any
        other reason stays pending and the replay moves on to the next one.
        """
        outcomes: list[ActivationOutcome] = []
        for key, intent in list(self._pending.items()):
            if key in self._busy:
                continue
            self._busy[key] = (
                ActivationState.ACTIVATING
                if intent is ActivationIntent.ACTIVATE
                else ActivationState.DEACTIVATING
            )
            unreachable = False
            try:
                outcome = await self._replay(client, key, intent)
            except NotFoundOrUnreachable as exc:
                logger.info("Replay of %s for %s deferred: %s", intent.value, key, exc.message)
                unreachable = True
            finally:
                self._busy.pop(key, None)
            if unreachable:
                outcomes.append(
                    ActivationOutcome(key, self.state_of(key), False, self._active.get(key))
                )
                break
            outcomes.append(outcome)
        return outcomes

    async def _replay(
        self, client: MarketplaceClient, key: str, intent: ActivationIntent
    ) -> ActivationOutcome:
        name = self._categories[key].name if key in self._categories else key
        try:
            await self._send(client, key, intent)
        except Unauthorized:
            raise
        except Forbidden as exc:
            # The backend refuses the change for good; undo the local fallback.
            await self._forget(key)
            if intent is ActivationIntent.ACTIVATE:
                self._active.pop(key, None)
                state = ActivationState.INACTIVE
            else:
                self._active[key] = ActivationOrigin.SERVER
                state = ActivationState.ACTIVE
            action = intent.value
            return ActivationOutcome(
                key,
                state,
                True,
                self._active.get(key),
                Notice.error(exc.detail or FORBIDDEN_MESSAGE.format(action=action)),
            )
        except NotFoundOrUnreachable:
            raise
        except MarketplaceError as exc:
            logger.warning("Replay of %s for %s rejected: %s", intent.value, key, exc.message)
            return ActivationOutcome(
                key,
                ActivationState.ACTIVE if key in self._active else ActivationState.INACTIVE,
                False,
                self._active.get(key),
                notice_for_error(exc, f"{intent.value} {name}"),
            )

        await self._forget(key)
        if intent is ActivationIntent.ACTIVATE:
            self._active[key] = ActivationOrigin.SERVER
            notice = Notice.success(f"{name} activation synced with the marketplace")
            state = ActivationState.ACTIVE
        else:
            self._active.pop(key, None)
            notice = Notice.success(f"{name} deactivation synced with the marketplace")
            state = ActivationState.INACTIVE
        return ActivationOutcome(key, state, True, self._active.get(key), notice)


class ActivationRegistry:
    """Holds one activation state per provider and scope."""

    def __init__(self, store: ActivationStore) -> None:
        self._store = store
        self._states: dict[tuple[str, CategoryScope], CategoryActivationState] = {}
        self._lock = asyncio.Lock()

    @property
    def store(self) -> ActivationStore:
        return self._store

    async def for_provider(
        self, provider_id: str, scope: CategoryScope
    ) -> CategoryActivationState:
        """Return the provider's state, creating an empty one on first sight."""
        key = (provider_id, scope)
        state = self._states.get(key)
        if state is not None:
            return state
        async with self._lock:
            state = self._states.get(key)
            if state is None:
                state = CategoryActivationState(provider_id, scope, store=self._store)
                await state.restore()
                self._states[key] = state
        return state

    def clear(self) -> None:
        self._states.clear()


__all__ = [
    "ActivationOrigin",
    "ActivationOutcome",
    "ActivationRegistry",
    "ActivationState",
    "CategoryActivationState",
    "FORBIDDEN_MESSAGE",
    "OFFLINE_LOAD_MESSAGE",
]
