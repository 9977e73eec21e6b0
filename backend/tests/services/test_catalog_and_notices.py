from __future__ import annotations

from decimal import Decimal

from hotelhub.core.errors import (
    Forbidden,
    MarketplaceValidationError,
    NotFoundOrUnreachable,
    ServerError,
    Unauthorized,
    classify_response,
)
from hotelhub.models.pending_activation import CategoryScope
from hotelhub.schemas.notice import NoticeLevel
from hotelhub.services import category_catalog
from hotelhub.services.currency import format_price, to_money
from hotelhub.services.notice_service import notice_for_error


def test_catalog_scopes_are_disjoint() -> None:
    outside = {category.key for category in category_catalog.list_categories(CategoryScope.OUTSIDE)}
    inside = {category.key for category in category_catalog.list_categories(CategoryScope.INSIDE)}

    assert {"laundry", "transportation", "tours"} <= outside
    assert "room-service" in inside
    assert outside.isdisjoint(inside)


def test_catalog_returns_copies() -> None:
    laundry = category_catalog.get_category("laundry")
    laundry.sample_items.clear()

    assert category_catalog.get_category("laundry").sample_items


def test_fallback_lists_laundry_and_transportation() -> None:
    assert list(category_catalog.fallback_categories(CategoryScope.OUTSIDE)) == [
        "laundry",
        "transportation",
    ]


def test_merge_served_prefers_server_fields() -> None:
    merged = category_catalog.merge_served(
        {
            "laundry": {
                "name": "Express Laundry",
                "items": [{"name": "Kimono", "category": "traditional"}],
            },
            "yachts": {"name": "Yacht Charter", "comingSoon": True},
        },
        CategoryScope.OUTSIDE,
    )

    assert merged["laundry"].name == "Express Laundry"
    assert merged["laundry"].description == "Professional laundry and dry cleaning services"
    assert [item.name for item in merged["laundry"].sample_items] == ["Kimono"]
    assert merged["yachts"].coming_soon is True


def test_classify_response_maps_status_codes() -> None:
    assert isinstance(classify_response(401), Unauthorized)
    assert isinstance(classify_response(403, {"message": "nope"}), Forbidden)
    assert isinstance(classify_response(404), NotFoundOrUnreachable)
    assert isinstance(classify_response(503), ServerError)
    rejected = classify_response(409, {"detail": "Duplicate"})
    assert isinstance(rejected, MarketplaceValidationError)
    assert rejected.detail == "Duplicate"


def test_unauthorized_produces_no_notice() -> None:
    assert notice_for_error(Unauthorized()) is None


def test_network_failure_notice_uses_client_message() -> None:
    notice = notice_for_error(NotFoundOrUnreachable("Network error.", network=True))

    assert notice.level is NoticeLevel.ERROR
    assert notice.message == "Network error."


def test_forbidden_notice_defaults_to_access_denied() -> None:
    notice = notice_for_error(Forbidden("Access denied", status_code=403))

    assert notice.message.startswith("Access denied.")


def test_to_money_rounds_half_up() -> None:
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(Decimal("2.344")) == Decimal("2.34")


def test_format_price_by_language() -> None:
    assert format_price(Decimal("1234.5"), "en") == "EGP 1,234.50"
    assert format_price(Decimal("1234.5"), "ar") == "1,234.50 ج.م"
    assert format_price(None, "en") == "Not specified"
    assert format_price("abc", "ar") == "غير محدد"
