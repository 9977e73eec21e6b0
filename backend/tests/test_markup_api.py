"""API tests for hotel markup settings."""

from __future__ import annotations

import json

import pytest

from hotelhub.core.session import UserRole

pytestmark = pytest.mark.asyncio


@pytest.fixture()
def hotel_headers(auth_headers) -> dict[str, str]:
    return auth_headers("hotel-1", UserRole.HOTEL)


async def test_load_edit_quote_and_save(api_client, stub, hotel_headers) -> None:
    stub.add(
        "GET",
        "/hotel/markup-settings",
        json={
            "success": True,
            "data": [
                {
                    "categoryId": "laundry",
                    "name": "Laundry",
                    "markupPercentage": 10,
                    "providers": [{"_id": "p1", "name": "Clean Co", "customMarkup": None}],
                }
            ],
        },
    )
    stub.add("POST", "/hotel/markup-settings", json={"success": True})

    loaded = await api_client.get("/api/v1/markup-settings", headers=hotel_headers)
    assert loaded.status_code == 200
    laundry = next(row for row in loaded.json()["settings"] if row["category_id"] == "laundry")
    assert laundry["markup_percentage"] == 10
    assert laundry["providers"][0]["effective_markup"] == 10

    edited = await api_client.put(
        "/api/v1/markup-settings/laundry/providers/p1",
        json={"percent": 140},
        headers=hotel_headers,
    )
    assert edited.json()["dirty"] is True
    laundry = next(row for row in edited.json()["settings"] if row["category_id"] == "laundry")
    assert laundry["providers"][0]["custom_markup"] == 100

    quote = await api_client.post(
        "/api/v1/markup-settings/quote",
        json={"base_price": "50", "category_id": "laundry", "provider_id": "p1"},
        headers=hotel_headers,
    )
    assert quote.status_code == 200
    assert quote.json()["final_price"] == "100.00"
    assert quote.json()["formatted_final_price"] == "EGP 100.00"

    saved = await api_client.post("/api/v1/markup-settings/save", headers=hotel_headers)
    assert saved.status_code == 200
    assert saved.json()["message"] == "Markup settings saved successfully"
    body = json.loads(stub.calls[-1].content)
    laundry_row = next(row for row in body if row["categoryId"] == "laundry")
    assert laundry_row["providers"] == [{"providerId": "p1", "customMarkup": 100.0}]


async def test_dirty_edits_survive_refresh(api_client, stub, hotel_headers) -> None:
    stub.add("GET", "/hotel/markup-settings", json={"data": []})

    await api_client.put(
        "/api/v1/markup-settings/transportation",
        json={"percent": "22.5"},
        headers=hotel_headers,
    )
    refreshed = await api_client.get("/api/v1/markup-settings", headers=hotel_headers)

    row = next(
        entry for entry in refreshed.json()["settings"] if entry["category_id"] == "transportation"
    )
    assert row["markup_percentage"] == 22.5
    assert stub.calls == []


async def test_failed_save_returns_bad_gateway(api_client, stub, hotel_headers) -> None:
    stub.add("POST", "/hotel/markup-settings", status_code=500, json={})

    await api_client.put(
        "/api/v1/markup-settings/laundry", json={"percent": 12}, headers=hotel_headers
    )
    response = await api_client.post("/api/v1/markup-settings/save", headers=hotel_headers)

    assert response.status_code == 502
    settings = await api_client.get(
        "/api/v1/markup-settings", params={"refresh": "false"}, headers=hotel_headers
    )
    assert settings.json()["dirty"] is True


async def test_load_failure_is_reported_as_notice(api_client, stub, hotel_headers) -> None:
    stub.add("GET", "/hotel/markup-settings", status_code=500, json={})

    response = await api_client.get("/api/v1/markup-settings", headers=hotel_headers)

    assert response.status_code == 200
    assert response.json()["notices"][0]["message"] == "Failed to load markup settings"


async def test_providers_cannot_edit_markup(api_client, auth_headers) -> None:
    response = await api_client.put(
        "/api/v1/markup-settings/laundry",
        json={"percent": 12},
        headers=auth_headers("provider-1", UserRole.SERVICE),
    )

    assert response.status_code == 403
