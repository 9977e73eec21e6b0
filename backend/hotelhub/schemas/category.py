"""Schemas for service categories and their activation state."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hotelhub.models.pending_activation import CategoryScope
from hotelhub.schemas.notice import NoticeRead


class SampleItem(BaseModel):
    """Illustrative item offered under a category."""

    name: str
    category: str

    model_config = ConfigDict(frozen=True)


class ServiceCategory(BaseModel):
    """Definition of a category a provider can offer."""

    key: str
    name: str
    description: str = ""
    scope: CategoryScope = CategoryScope.OUTSIDE
    icon: str | None = None
    sample_items: list[SampleItem] = Field(default_factory=list)
    coming_soon: bool = False
    details: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)


class CategoryView(BaseModel):
    """Category as rendered on a provider dashboard."""

    key: str
    name: str
    description: str
    coming_soon: bool
    is_active: bool
    is_busy: bool
    can_toggle: bool
    origin: str | None = None
    sample_items: list[SampleItem] = Field(default_factory=list)


class CategoryListingRead(BaseModel):
    scope: CategoryScope
    categories: list[CategoryView]
    active_categories: list[str]
    notices: list[NoticeRead] = Field(default_factory=list)


class ActivationResultRead(BaseModel):
    category_key: str
    state: str
    changed: bool
    origin: str | None = None
    notice: NoticeRead | None = None
    active_categories: list[str]


class ReconcileResultRead(BaseModel):
    results: list[ActivationResultRead]
    pending: list[str]
