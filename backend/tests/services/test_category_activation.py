"""Service-level tests for provider category activation."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from hotelhub.core.errors import CategoryUnavailable, Unauthorized
from hotelhub.core.session import SessionContext, UserRole
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.models.pending_activation import ActivationIntent, CategoryScope
from hotelhub.schemas.notice import NoticeLevel
from hotelhub.services.category_activation_service import (
    ActivationOrigin,
    ActivationRegistry,
    ActivationState,
    CategoryActivationState,
    OFFLINE_LOAD_MESSAGE,
)

pytestmark = pytest.mark.asyncio

CATEGORIES_PATH = "/service/categories"


def _listing(active: list[str] | None = None, **extra: object) -> dict[str, object]:
    data: dict[str, object] = {
        "availableCategories": {
            "laundry": {"name": "Laundry Services"},
            "transportation": {"name": "Transportation Services"},
            "spa": {"name": "Spa & Wellness", "comingSoon": True},
        },
        "activeCategories": active or [],
    }
    data.update(extra)
    return {"success": True, "data": data}


@pytest.fixture()
def state(store) -> CategoryActivationState:
    return CategoryActivationState("provider-1", CategoryScope.OUTSIDE, store=store)


async def test_activate_then_deactivate_updates_active_list(state, stub, marketplace) -> None:
    stub.add("GET", CATEGORIES_PATH, json=_listing())
    stub.add(
        "POST",
        "/service/categories/laundry/activate",
        json={"message": "Laundry activated"},
    )
    stub.add(
        "POST",
        "/service/categories/laundry/deactivate",
        json={"message": "Laundry deactivated"},
    )

    await state.load(marketplace)
    assert state.active_categories == []

    activated = await state.activate(marketplace, "laundry")
    assert activated.changed is True
    assert activated.origin is ActivationOrigin.SERVER
    assert activated.notice is not None
    assert activated.notice.message == "Laundry activated"
    assert state.active_categories == ["laundry"]
    view = {entry.key: entry for entry in state.snapshot()}
    assert view["laundry"].is_active is True

    deactivated = await state.deactivate(marketplace, "laundry")
    assert deactivated.changed is True
    assert deactivated.state is ActivationState.INACTIVE
    assert state.active_categories == []


async def test_coming_soon_category_is_rejected_without_network_call(
    state, stub, marketplace
) -> None:
    stub.add("GET", CATEGORIES_PATH, json=_listing())
    await state.load(marketplace)
    calls_before = len(stub.calls)

    with pytest.raises(CategoryUnavailable):
        await state.activate(marketplace, "spa")

    assert len(stub.calls) == calls_before
    assert state.active_categories == []


async def test_unknown_category_is_rejected_without_network_call(
    state, stub, marketplace
) -> None:
    with pytest.raises(CategoryUnavailable):
        await state.activate(marketplace, "karaoke")
    assert stub.calls == []


async def test_forbidden_activation_keeps_state_and_reports_authorization(
    state, stub, marketplace
) -> None:
    stub.add("POST", "/service/categories/laundry/activate", status_code=403, json={})

    outcome = await state.activate(marketplace, "laundry")

    assert outcome.changed is False
    assert state.active_categories == []
    assert outcome.notice is not None
    assert outcome.notice.level is NoticeLevel.ERROR
    assert "not authorized" in outcome.notice.message
    assert "hotel admin" in outcome.notice.message
    assert "Failed to" not in outcome.notice.message


async def test_forbidden_activation_prefers_server_message(state, stub, marketplace) -> None:
    stub.add(
        "POST",
        "/service/categories/laundry/activate",
        status_code=403,
        json={"message": "Laundry is not enabled for your hotel"},
    )

    outcome = await state.activate(marketplace, "laundry")

    assert outcome.notice is not None
    assert outcome.notice.message == "Laundry is not enabled for your hotel"


async def test_missing_route_activates_locally(state, stub, store, marketplace) -> None:
    outcome = await state.activate(marketplace, "laundry")

    assert outcome.changed is True
    assert outcome.origin is ActivationOrigin.LOCAL_PENDING
    assert state.active_categories == ["laundry"]
    assert outcome.notice is not None
    assert outcome.notice.message == "Laundry Services activated locally (offline mode)"

    pending = await store.list_pending(provider_id="provider-1")
    assert [(row.category_key, row.intent) for row in pending] == [
        ("laundry", ActivationIntent.ACTIVATE)
    ]


async def test_network_failure_activates_locally(state, stub, marketplace) -> None:
    stub.add("POST", "/service/categories/transportation/activate", error=httpx.ConnectError)

    outcome = await state.activate(marketplace, "transportation")

    assert state.active_categories == ["transportation"]
    assert state.origin_of("transportation") is ActivationOrigin.LOCAL_PENDING
    assert outcome.notice is not None
    assert "offline mode" in outcome.notice.message


async def test_server_error_leaves_state_unchanged(state, stub, marketplace) -> None:
    stub.add("POST", "/service/categories/laundry/activate", status_code=500, json={})

    outcome = await state.activate(marketplace, "laundry")

    assert outcome.changed is False
    assert state.active_categories == []
    assert outcome.notice is not None
    assert outcome.notice.message == "Server error. Please try again later."


async def test_validation_error_uses_generic_message(state, stub, marketplace) -> None:
    stub.add("POST", "/service/categories/laundry/activate", status_code=422, json={})

    outcome = await state.activate(marketplace, "laundry")

    assert outcome.notice is not None
    assert outcome.notice.message == "Failed to activate category. Please try again."
    assert state.active_categories == []


async def test_unauthorized_propagates_and_clears_session(state, stub, marketplace) -> None:
    stub.add("POST", "/service/categories/laundry/activate", status_code=401, json={})

    with pytest.raises(Unauthorized):
        await state.activate(marketplace, "laundry")

    assert marketplace.session.is_authenticated is False
    assert state.is_busy("laundry") is False


async def test_second_toggle_while_in_flight_is_a_noop(state, stub, marketplace) -> None:
    release = asyncio.Event()

    async def slow_activate(request: httpx.Request) -> httpx.Response:
        await release.wait()
        return httpx.Response(200, json={"message": "Laundry activated"})

    stub.add("POST", "/service/categories/laundry/activate", handler=slow_activate)
    stub.add(
        "POST",
        "/service/categories/transportation/activate",
        json={"message": "Transportation activated"},
    )

    first = asyncio.create_task(state.activate(marketplace, "laundry"))
    await asyncio.sleep(0)
    assert state.is_busy("laundry") is True
    assert state.can_toggle("laundry") is False

    repeated = await state.activate(marketplace, "laundry")
    assert repeated.changed is False
    assert repeated.state is ActivationState.ACTIVATING

    other = await state.activate(marketplace, "transportation")
    assert other.changed is True

    release.set()
    result = await first
    assert result.changed is True
    assert state.is_busy("laundry") is False
    assert sorted(state.active_categories) == ["laundry", "transportation"]
    activate_calls = [
        path for path in stub.paths() if path.endswith("/laundry/activate")
    ]
    assert len(activate_calls) == 1


async def test_hung_request_times_out_into_offline_mode(store, stub) -> None:
    async def never_answers(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={})

    stub.add("POST", "/service/categories/laundry/activate", handler=never_answers)
    session = SessionContext(token="token", user_id="provider-1", role=UserRole.SERVICE)
    state = CategoryActivationState("provider-1", CategoryScope.OUTSIDE, store=store)

    async with MarketplaceClient(
        session,
        base_url="http://marketplace.test/api",
        timeout=0.05,
        transport=httpx.MockTransport(stub),
    ) as client:
        outcome = await state.activate(client, "laundry")

    assert outcome.origin is ActivationOrigin.LOCAL_PENDING
    assert state.is_busy("laundry") is False


async def test_activate_already_active_is_noop(state, stub, marketplace) -> None:
    stub.add("GET", CATEGORIES_PATH, json=_listing(active=["laundry"]))
    await state.load(marketplace)
    calls_before = len(stub.calls)

    outcome = await state.activate(marketplace, "laundry")

    assert outcome.changed is False
    assert outcome.state is ActivationState.ACTIVE
    assert len(stub.calls) == calls_before


async def test_offline_deactivate_records_intent(state, stub, store, marketplace) -> None:
    stub.add("GET", CATEGORIES_PATH, json=_listing(active=["laundry"]))
    await state.load(marketplace)

    outcome = await state.deactivate(marketplace, "laundry")

    assert outcome.changed is True
    assert state.active_categories == []
    assert outcome.notice is not None
    assert "deactivated locally" in outcome.notice.message
    pending = await store.list_pending(provider_id="provider-1")
    assert [row.intent for row in pending] == [ActivationIntent.DEACTIVATE]


async def test_deactivating_local_only_entry_drops_pending_intent(
    state, stub, store, marketplace
) -> None:
    await state.activate(marketplace, "laundry")
    calls_before = len(stub.calls)

    outcome = await state.deactivate(marketplace, "laundry")

    assert outcome.changed is True
    assert state.active_categories == []
    assert len(stub.calls) == calls_before
    assert await store.list_pending(provider_id="provider-1") == []


async def test_load_surfaces_backend_message(state, stub, marketplace) -> None:
    stub.add(
        "GET",
        CATEGORIES_PATH,
        json=_listing(active=["laundry"], message="Your hotel enabled 2 categories"),
    )

    notices = await state.load(marketplace)

    assert [notice.message for notice in notices] == ["Your hotel enabled 2 categories"]
    assert notices[0].level is NoticeLevel.INFO
    assert state.active_categories == ["laundry"]
    view = {entry.key: entry for entry in state.snapshot()}
    assert view["spa"].coming_soon is True
    assert view["spa"].can_toggle is False


async def test_load_failure_falls_back_and_keeps_local_entries(
    state, stub, marketplace
) -> None:
    await state.activate(marketplace, "tours")
    stub.add("GET", CATEGORIES_PATH, error=httpx.ConnectError)

    notices = await state.load(marketplace)

    assert [notice.message for notice in notices] == [OFFLINE_LOAD_MESSAGE]
    assert notices[0].level is NoticeLevel.WARNING
    assert set(state.categories) == {"laundry", "transportation", "tours"}
    assert state.active_categories == ["tours"]


async def test_load_forbidden_shows_no_categories(state, stub, marketplace) -> None:
    stub.add("GET", CATEGORIES_PATH, status_code=403, json={})

    notices = await state.load(marketplace)

    assert state.categories == {}
    assert notices[0].level is NoticeLevel.ERROR


async def test_forbidden_load_keeps_local_pending_entries(state, stub, marketplace) -> None:
    await state.activate(marketplace, "laundry")
    stub.add("GET", CATEGORIES_PATH, status_code=403, json={})

    await state.load(marketplace)
    assert state.active_categories == ["laundry"]

    stub.add("GET", CATEGORIES_PATH, json=_listing([]))
    await state.load(marketplace)

    assert state.active_categories == ["laundry"]
    assert state.origin_of("laundry") is ActivationOrigin.LOCAL_PENDING
    assert state.pending_intents == {"laundry": ActivationIntent.ACTIVATE}


async def test_reconcile_promotes_local_entries(state, stub, store, marketplace) -> None:
    await state.activate(marketplace, "laundry")
    assert state.origin_of("laundry") is ActivationOrigin.LOCAL_PENDING

    stub.add(
        "POST",
        "/service/categories/laundry/activate",
        json={"message": "Laundry activated"},
    )
    outcomes = await state.reconcile(marketplace)

    assert [outcome.changed for outcome in outcomes] == [True]
    assert state.origin_of("laundry") is ActivationOrigin.SERVER
    assert state.pending_intents == {}
    assert await store.list_pending(provider_id="provider-1") == []


async def test_reconcile_reverts_forbidden_activation(state, stub, marketplace) -> None:
    await state.activate(marketplace, "laundry")
    stub.add("POST", "/service/categories/laundry/activate", status_code=403, json={})

    outcomes = await state.reconcile(marketplace)

    assert outcomes[0].state is ActivationState.INACTIVE
    assert state.active_categories == []
    assert state.pending_intents == {}


async def test_reconcile_keeps_intents_while_offline(state, stub, marketplace) -> None:
    await state.activate(marketplace, "laundry")

    outcomes = await state.reconcile(marketplace)

    assert [outcome.changed for outcome in outcomes] == [False]
    assert state.pending_intents == {"laundry": ActivationIntent.ACTIVATE}
    assert state.origin_of("laundry") is ActivationOrigin.LOCAL_PENDING


async def test_reconcile_skips_rejected_intent_and_continues(state, stub, marketplace) -> None:
    await state.activate(marketplace, "laundry")
    await state.activate(marketplace, "transportation")
    stub.add("POST", "/service/categories/laundry/activate", status_code=500, json={})
    stub.add(
        "POST",
        "/service/categories/transportation/activate",
        json={"message": "Transportation activated"},
    )

    outcomes = await state.reconcile(marketplace)

    assert [(outcome.category_key, outcome.changed) for outcome in outcomes] == [
        ("laundry", False),
        ("transportation", True),
    ]
    assert outcomes[0].state is ActivationState.ACTIVE
    assert outcomes[0].notice is not None
    assert outcomes[0].notice.message == "Server error. Please try again later."
    assert state.pending_intents == {"laundry": ActivationIntent.ACTIVATE}
    assert state.origin_of("laundry") is ActivationOrigin.LOCAL_PENDING
    assert state.origin_of("transportation") is ActivationOrigin.SERVER


async def test_registry_creates_empty_state_and_restores_pending(
    store, stub, marketplace
) -> None:
    registry = ActivationRegistry(store)
    state = await registry.for_provider("provider-1", CategoryScope.OUTSIDE)
    assert state.active_categories == []
    await state.activate(marketplace, "laundry")
    assert await registry.for_provider("provider-1", CategoryScope.OUTSIDE) is state

    restarted = ActivationRegistry(store)
    restored = await restarted.for_provider("provider-1", CategoryScope.OUTSIDE)
    assert restored.active_categories == ["laundry"]
    assert restored.origin_of("laundry") is ActivationOrigin.LOCAL_PENDING

    other = await restarted.for_provider("provider-2", CategoryScope.OUTSIDE)
    assert other.active_categories == []


async def test_inside_scope_uses_inside_service_routes(store, stub, marketplace) -> None:
    stub.add(
        "GET",
        "/service/inside-services",
        json={
            "data": [
                {"id": "room-service", "name": "Room Service", "isActive": True},
                {"id": "concierge-services", "name": "Concierge", "isActive": False},
            ],
            "message": "Inside services loaded",
        },
    )
    stub.add(
        "POST",
        "/service/inside-services/concierge-services/activate",
        json={"message": "Service activated successfully"},
    )
    state = CategoryActivationState("provider-1", CategoryScope.INSIDE, store=store)

    notices = await state.load(marketplace)
    outcome = await state.activate(marketplace, "concierge-services")

    assert [notice.message for notice in notices] == ["Inside services loaded"]
    assert outcome.origin is ActivationOrigin.SERVER
    assert sorted(state.active_categories) == ["concierge-services", "room-service"]
