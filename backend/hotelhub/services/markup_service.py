"""Markup settings and guest price computation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from hotelhub.core.config import get_settings
from hotelhub.core.errors import MarketplaceError, Unauthorized
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.markup import (
    MarkupSettingRead,
    MarkupSettingsRead,
    PriceQuoteRead,
    ProviderMarkupRead,
)
from hotelhub.services.currency import format_price, to_money
from hotelhub.services.notice_service import Notice

logger = logging.getLogger(__name__)

DEFAULT_MARKUP_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("laundry", "Laundry"),
    ("transportation", "Transportation"),
    ("tourism", "Tourism & Travel"),
)


def clamp_percent(value: Any) -> float:
    """Coerce raw input to a percentage in [0, 100]; unparseable input is 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return min(100.0, max(0.0, number))


def _to_decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


@dataclass(slots=True)
class ProviderMarkup:
    provider_id: str
    name: str | None = None
    custom_markup: float | None = None
    base_price: Decimal | None = None


@dataclass(slots=True)
class CategoryMarkup:
    category_id: str
    name: str
    markup_percentage: float | None = None
    providers: dict[str, ProviderMarkup] = field(default_factory=dict)


class MarkupPricingEngine:
    """Category defaults plus provider overrides for one hotel.

    Edits are local until ``save_all`` pushes the whole table in one request.
    """

    def __init__(self, *, default_markup: float | None = None) -> None:
        if default_markup is None:
            default_markup = get_settings().default_markup_percent
        self.default_markup = clamp_percent(default_markup)
        self._categories: dict[str, CategoryMarkup] = {
            category_id: CategoryMarkup(category_id=category_id, name=name)
            for category_id, name in DEFAULT_MARKUP_CATEGORIES
        }
        self.dirty = False

    @property
    def categories(self) -> list[CategoryMarkup]:
        return list(self._categories.values())

    def _category(self, category_id: str) -> CategoryMarkup:
        category = self._categories.get(category_id)
        if category is None:
            category = CategoryMarkup(
                category_id=category_id, name=category_id.replace("-", " ").title()
            )
            self._categories[category_id] = category
        return category

    def set_default_markup(self, category_id: str, percent: Any) -> float:
        value = clamp_percent(percent)
        self._category(category_id).markup_percentage = value
        self.dirty = True
        return value

    def set_provider_override(
        self, category_id: str, provider_id: str, percent: Any
    ) -> float | None:
        """Store a provider override; ``None`` removes it so the default applies."""
        category = self._category(category_id)
        provider = category.providers.setdefault(
            provider_id, ProviderMarkup(provider_id=provider_id)
        )
        provider.custom_markup = None if percent is None else clamp_percent(percent)
        self.dirty = True
        return provider.custom_markup

    def category_markup(self, category_id: str) -> float:
        category = self._categories.get(category_id)
        if category is None or category.markup_percentage is None:
            return self.default_markup
        return category.markup_percentage

    def effective_markup(self, category_id: str, provider_id: str | None = None) -> float:
        category = self._categories.get(category_id)
        if category is not None and provider_id is not None:
            provider = category.providers.get(provider_id)
            if provider is not None and provider.custom_markup is not None:
                return provider.custom_markup
        return self.category_markup(category_id)

    def compute_final_price(
        self,
        base_price: Decimal | float | int | str,
        category_id: str,
        provider_id: str | None = None,
    ) -> Decimal:
        base = Decimal(str(base_price))
        markup = Decimal(str(self.effective_markup(category_id, provider_id)))
        return base * (1 + markup / 100)

    def quote(
        self,
        base_price: Decimal | float | int | str,
        category_id: str,
        provider_id: str | None = None,
        *,
        language: str | None = None,
    ) -> PriceQuoteRead:
        base = Decimal(str(base_price))
        final_price = to_money(self.compute_final_price(base, category_id, provider_id))
        return PriceQuoteRead(
            category_id=category_id,
            provider_id=provider_id,
            base_price=to_money(base),
            markup_percentage=self.effective_markup(category_id, provider_id),
            markup_amount=final_price - to_money(base),
            final_price=final_price,
            formatted_final_price=format_price(final_price, language),
        )

    def read(self, notices: list[Notice] | None = None) -> MarkupSettingsRead:
        settings: list[MarkupSettingRead] = []
        for category in self._categories.values():
            providers = []
            for provider in category.providers.values():
                final_price = None
                if provider.base_price is not None:
                    final_price = to_money(
                        self.compute_final_price(
                            provider.base_price, category.category_id, provider.provider_id
                        )
                    )
                providers.append(
                    ProviderMarkupRead(
                        provider_id=provider.provider_id,
                        name=provider.name,
                        custom_markup=provider.custom_markup,
                        effective_markup=self.effective_markup(
                            category.category_id, provider.provider_id
                        ),
                        base_price=provider.base_price,
                        final_price=final_price,
                    )
                )
            settings.append(
                MarkupSettingRead(
                    category_id=category.category_id,
                    name=category.name,
                    markup_percentage=self.category_markup(category.category_id),
                    providers=providers,
                )
            )
        return MarkupSettingsRead(
            settings=settings,
            dirty=self.dirty,
            notices=[notice.to_read() for notice in notices or []],
        )

    def to_payload(self) -> list[dict[str, Any]]:
        """Body of the bulk save request."""
        return [
            {
                "categoryId": category.category_id,
                "markupPercentage": self.category_markup(category.category_id),
                "providers": [
                    {
                        "providerId": provider.provider_id,
                        "customMarkup": self.effective_markup(
                            category.category_id, provider.provider_id
                        ),
                    }
                    for provider in category.providers.values()
                ],
            }
            for category in self._categories.values()
        ]

    def apply_server_settings(self, rows: list[dict[str, Any]]) -> None:
        for row in rows:
            category_id = row.get("categoryId") or row.get("category_id")
            if not category_id:
                continue
            category = self._category(str(category_id))
            if row.get("name"):
                category.name = str(row["name"])
            if row.get("markupPercentage") is not None:
                category.markup_percentage = clamp_percent(row["markupPercentage"])
            providers: dict[str, ProviderMarkup] = {}
            for raw in row.get("providers") or []:
                provider_id = raw.get("_id") or raw.get("providerId")
                if not provider_id:
                    continue
                custom = raw.get("customMarkup")
                providers[str(provider_id)] = ProviderMarkup(
                    provider_id=str(provider_id),
                    name=raw.get("name"),
                    custom_markup=None if custom is None else clamp_percent(custom),
                    base_price=_to_decimal(raw.get("basePrice")),
                )
            category.providers = providers
        self.dirty = False

    async def load(self, client: MarketplaceClient) -> list[Notice]:
        try:
            rows = await client.get_markup_settings()
        except Unauthorized:
            raise
        except MarketplaceError as exc:
            logger.warning("Failed to load markup settings: %s", exc.message)
            return [Notice.error("Failed to load markup settings")]
        self.apply_server_settings(rows)
        return []

    async def save_all(self, client: MarketplaceClient) -> Notice:
        """Persist every category and override at once.

        Raises the marketplace error unchanged on failure; local edits are
        kept and the engine stays dirty.
        """
        payload = self.to_payload()
        try:
            await client.save_markup_settings(payload)
        except MarketplaceError:
            logger.warning("Saving %d markup categories failed", len(payload))
            raise
        self.dirty = False
        logger.info("Saved %d markup categories", len(payload))
        return Notice.success("Markup settings saved successfully")


class MarkupRegistry:
    """One pricing engine per hotel."""

    def __init__(self) -> None:
        self._engines: dict[str, MarkupPricingEngine] = {}

    def for_hotel(self, hotel_id: str) -> MarkupPricingEngine:
        engine = self._engines.get(hotel_id)
        if engine is None:
            engine = self._engines[hotel_id] = MarkupPricingEngine()
        return engine

    def clear(self) -> None:
        self._engines.clear()


__all__ = [
    "CategoryMarkup",
    "DEFAULT_MARKUP_CATEGORIES",
    "MarkupPricingEngine",
    "MarkupRegistry",
    "ProviderMarkup",
    "clamp_percent",
]
