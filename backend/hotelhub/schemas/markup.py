"""Markup settings and price quote schemas."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from hotelhub.schemas.notice import NoticeRead


class ProviderMarkupRead(BaseModel):
    provider_id: str
    name: str | None = None
    custom_markup: float | None = None
    effective_markup: float
    base_price: Decimal | None = None
    final_price: Decimal | None = None


class MarkupSettingRead(BaseModel):
    category_id: str
    name: str
    markup_percentage: float
    providers: list[ProviderMarkupRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MarkupSettingsRead(BaseModel):
    settings: list[MarkupSettingRead]
    dirty: bool
    notices: list[NoticeRead] = Field(default_factory=list)


class MarkupUpdate(BaseModel):
    """Raw percentage input; out-of-range values are clamped, not rejected."""

    percent: float | str | None = None


class PriceQuoteRequest(BaseModel):
    base_price: Decimal = Field(ge=0)
    category_id: str
    provider_id: str | None = None


class PriceQuoteRead(BaseModel):
    category_id: str
    provider_id: str | None = None
    base_price: Decimal
    markup_percentage: float
    markup_amount: Decimal
    final_price: Decimal
    formatted_final_price: str
