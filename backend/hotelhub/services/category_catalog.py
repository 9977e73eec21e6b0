"""Static catalog of service categories offered on the marketplace."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from hotelhub.models.pending_activation import CategoryScope
from hotelhub.schemas.category import SampleItem, ServiceCategory


def _items(*pairs: tuple[str, str]) -> list[SampleItem]:
    return [SampleItem(name=name, category=category) for name, category in pairs]


_OUTSIDE_CATEGORIES: tuple[ServiceCategory, ...] = (
    ServiceCategory(
        key="laundry",
        name="Laundry Services",
        description="Professional laundry and dry cleaning services",
        icon="washing-machine",
        sample_items=_items(
            ("T-Shirt", "clothing"),
            ("Dress Shirt", "clothing"),
            ("Pants/Trousers", "clothing"),
            ("Formal Suit", "formal"),
            ("Jacket", "outerwear"),
            ("Thobe", "traditional"),
            ("Abaya", "traditional"),
            ("Bedsheet (double)", "linens"),
            ("Towel", "linens"),
        ),
        details={
            "service_types": [
                {"id": "wash_only", "name": "Wash Only", "duration_hours": 24},
                {"id": "iron_only", "name": "Iron Only", "duration_hours": 12},
                {"id": "wash_iron", "name": "Wash + Iron", "duration_hours": 24, "is_popular": True},
                {"id": "dry_cleaning", "name": "Dry Cleaning", "duration_hours": 48},
            ],
        },
    ),
    ServiceCategory(
        key="transportation",
        name="Transportation Services",
        description="Vehicle rental and transportation services",
        icon="car",
        details={
            "vehicle_types": [
                {"id": "sedan", "name": "Sedan", "capacity": 4},
                {"id": "suv", "name": "SUV", "capacity": 7, "is_popular": True},
                {"id": "luxury", "name": "Luxury Car", "capacity": 4},
                {"id": "van", "name": "Van/Minibus", "capacity": 12},
            ],
            "service_types": [
                {"id": "hourly", "name": "Hourly Rental", "pricing_type": "per-hour"},
                {"id": "daily", "name": "Daily Rental", "pricing_type": "per-day"},
                {"id": "airport", "name": "Airport Transfer", "pricing_type": "fixed"},
                {"id": "city_tour", "name": "City Tour", "pricing_type": "fixed"},
            ],
        },
    ),
    ServiceCategory(
        key="tours",
        name="Tours & Activities",
        description="Guided tours and recreational activities",
        icon="map",
        details={
            "tour_types": [
                {"id": "city_tour", "name": "City Sightseeing", "duration": "4-6 hours"},
                {"id": "cultural", "name": "Cultural Heritage", "duration": "6-8 hours", "is_popular": True},
                {"id": "adventure", "name": "Adventure Activities", "duration": "Full Day"},
                {"id": "food", "name": "Food & Culinary", "duration": "3-4 hours"},
                {"id": "nature", "name": "Nature & Wildlife", "duration": "6-8 hours"},
            ],
        },
    ),
    ServiceCategory(
        key="spa",
        name="Spa & Wellness",
        description="Relaxation and wellness services",
        icon="spa",
        details={
            "treatments": [
                {"id": "massage", "name": "Therapeutic Massage", "durations": [30, 60, 90]},
                {"id": "facial", "name": "Facial Treatment", "durations": [45, 60, 75]},
                {"id": "body_treatment", "name": "Body Treatment", "durations": [60, 90]},
            ],
        },
    ),
    ServiceCategory(
        key="dining",
        name="Dining Services",
        description="Food delivery and catering services",
        icon="restaurant",
        details={
            "cuisine_types": [
                {"id": "local", "name": "Local Cuisine", "is_popular": True},
                {"id": "italian", "name": "Italian"},
                {"id": "indian", "name": "Indian"},
                {"id": "mediterranean", "name": "Mediterranean"},
            ],
            "meal_types": [
                {"id": "breakfast", "name": "Breakfast", "time_range": "06:00-11:00"},
                {"id": "lunch", "name": "Lunch", "time_range": "11:00-16:00"},
                {"id": "dinner", "name": "Dinner", "time_range": "18:00-23:00"},
            ],
        },
    ),
    ServiceCategory(
        key="entertainment",
        name="Entertainment",
        description="Entertainment and event services",
        icon="music",
        details={
            "event_types": [
                {"id": "live_music", "name": "Live Music Performance"},
                {"id": "dj", "name": "DJ Services", "is_popular": True},
                {"id": "cultural_show", "name": "Cultural Show"},
            ],
        },
    ),
    ServiceCategory(
        key="shopping",
        name="Shopping Services",
        description="Personal shopping and delivery services",
        icon="shopping-bag",
        details={
            "store_types": [
                {"id": "grocery", "name": "Grocery & Essentials"},
                {"id": "pharmacy", "name": "Pharmacy"},
                {"id": "souvenirs", "name": "Souvenirs & Gifts", "is_popular": True},
            ],
        },
    ),
    ServiceCategory(
        key="fitness",
        name="Fitness & Sports",
        description="Fitness training and sports activities",
        icon="dumbbell",
        details={
            "activities": [
                {"id": "personal_training", "name": "Personal Training"},
                {"id": "yoga", "name": "Yoga Session", "is_popular": True},
                {"id": "swimming", "name": "Swimming Instruction"},
            ],
        },
    ),
)

_INSIDE_CATEGORIES: tuple[ServiceCategory, ...] = (
    ServiceCategory(
        key="room-service",
        name="Room Service",
        description="In-room dining and service requests",
        scope=CategoryScope.INSIDE,
        sample_items=_items(
            ("Breakfast in bed", "dining"),
            ("Late night snacks", "dining"),
            ("Mini bar restocking", "service"),
        ),
    ),
    ServiceCategory(
        key="hotel-restaurant",
        name="Hotel Restaurant",
        description="Main dining facilities and reservations",
        scope=CategoryScope.INSIDE,
        sample_items=_items(
            ("Table reservations", "booking"),
            ("Private dining", "special"),
            ("Event catering", "events"),
            ("Wine selection", "beverage"),
        ),
    ),
    ServiceCategory(
        key="concierge-services",
        name="Concierge Services",
        description="Guest assistance and recommendations",
        scope=CategoryScope.INSIDE,
        sample_items=_items(
            ("Local recommendations", "guidance"),
            ("Booking assistance", "booking"),
            ("Special requests", "service"),
        ),
    ),
    ServiceCategory(
        key="housekeeping-requests",
        name="Housekeeping Services",
        description="Room cleaning and maintenance requests",
        scope=CategoryScope.INSIDE,
        sample_items=_items(
            ("Extra cleaning", "cleaning"),
            ("Amenity requests", "amenities"),
            ("Maintenance issues", "maintenance"),
            ("Linen change", "cleaning"),
        ),
    ),
)

_CATALOG: dict[str, ServiceCategory] = {
    category.key: category for category in _OUTSIDE_CATEGORIES + _INSIDE_CATEGORIES
}

OFFLINE_FALLBACK_KEYS: dict[CategoryScope, tuple[str, ...]] = {
    CategoryScope.OUTSIDE: ("laundry", "transportation"),
    CategoryScope.INSIDE: (),
}


def get_category(key: str) -> ServiceCategory | None:
    category = _CATALOG.get(key)
    return category.model_copy(deep=True) if category is not None else None


def list_categories(scope: CategoryScope | None = None) -> list[ServiceCategory]:
    """Return catalog categories in catalog order, optionally for one scope."""
    return [
        category.model_copy(deep=True)
        for category in _CATALOG.values()
        if scope is None or category.scope == scope
    ]


def fallback_categories(scope: CategoryScope) -> dict[str, ServiceCategory]:
    """Categories shown when the marketplace listing cannot be fetched."""
    return {
        key: _CATALOG[key].model_copy(deep=True)
        for key in OFFLINE_FALLBACK_KEYS[scope]
    }


def _served_items(definition: Mapping[str, Any]) -> list[SampleItem] | None:
    raw_items = definition.get("items") or definition.get("sampleItems")
    if not isinstance(raw_items, list):
        return None
    items: list[SampleItem] = []
    for raw in raw_items:
        if isinstance(raw, Mapping) and raw.get("name"):
            items.append(
                SampleItem(name=str(raw["name"]), category=str(raw.get("category", "")))
            )
    return items


def merge_served(
    served: Mapping[str, Mapping[str, Any]] | Iterable[Mapping[str, Any]],
    scope: CategoryScope,
) -> dict[str, ServiceCategory]:
    """Overlay server-delivered definitions on the static catalog.

    ``served`` is either a mapping of key to definition or a list of
    definitions carrying an ``id``/``key``. Server fields win; keys unknown
    to the catalog are accepted with whatever the server sent.
    """

    if isinstance(served, Mapping):
        entries = [(str(key), definition) for key, definition in served.items()]
    else:
        entries = [
            (str(definition.get("id") or definition.get("key")), definition)
            for definition in served
            if definition.get("id") or definition.get("key")
        ]

    merged: dict[str, ServiceCategory] = {}
    for key, definition in entries:
        base = _CATALOG.get(key)
        category = (
            base.model_copy(deep=True)
            if base is not None
            else ServiceCategory(key=key, name=key, scope=scope)
        )
        updates: dict[str, Any] = {}
        for field in ("name", "description", "icon"):
            value = definition.get(field)
            if isinstance(value, str) and value:
                updates[field] = value
        if "comingSoon" in definition or "coming_soon" in definition:
            updates["coming_soon"] = bool(
                definition.get("comingSoon", definition.get("coming_soon"))
            )
        items = _served_items(definition)
        if items:
            updates["sample_items"] = items
        merged[key] = category.model_copy(update=updates)
    return merged


__all__ = [
    "OFFLINE_FALLBACK_KEYS",
    "fallback_categories",
    "get_category",
    "list_categories",
    "merge_served",
]
