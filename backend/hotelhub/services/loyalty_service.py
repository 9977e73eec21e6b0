"""Loyalty tier progression and redemption values."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from hotelhub.core.config import get_settings
from hotelhub.integrations.marketplace_client import MarketplaceClient
from hotelhub.schemas.loyalty import (
    LoyaltyMembership,
    LoyaltyTier,
    MembershipView,
    RedemptionRules,
    TierProgress,
    TierThreshold,
)
from hotelhub.services.currency import format_price, to_money

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS: tuple[TierThreshold, ...] = (
    TierThreshold(
        name=LoyaltyTier.BRONZE,
        min_points=0,
        max_points=999,
        discount_percentage=5,
        benefits=["Priority email support", "Birthday bonus points"],
    ),
    TierThreshold(
        name=LoyaltyTier.SILVER,
        min_points=1000,
        max_points=2999,
        discount_percentage=10,
        benefits=["10% discount on all services", "Priority phone support", "Welcome bonus"],
    ),
    TierThreshold(
        name=LoyaltyTier.GOLD,
        min_points=3000,
        max_points=5999,
        discount_percentage=15,
        benefits=[
            "15% discount on all services",
            "Free room upgrade",
            "Priority support",
            "Complimentary breakfast",
        ],
    ),
    TierThreshold(
        name=LoyaltyTier.PLATINUM,
        min_points=6000,
        max_points=None,
        discount_percentage=20,
        benefits=[
            "20% discount on all services",
            "Free room upgrade",
            "VIP support",
            "Complimentary spa access",
            "Late checkout",
        ],
    ),
)


def _ordered(thresholds: Sequence[TierThreshold] | None) -> list[TierThreshold]:
    return sorted(thresholds or DEFAULT_THRESHOLDS, key=lambda tier: tier.min_points)


def validate_thresholds(thresholds: Sequence[TierThreshold]) -> None:
    """Raise ``ValueError`` when consecutive tier ranges overlap."""
    ordered = _ordered(thresholds)
    for current, following in zip(ordered, ordered[1:]):
        if current.max_points is not None and current.max_points >= following.min_points:
            raise ValueError("Tier point ranges must not overlap")


def tier_for_points(
    points: int, thresholds: Sequence[TierThreshold] | None = None
) -> LoyaltyTier:
    tier = _ordered(thresholds)[0].name
    for threshold in _ordered(thresholds):
        if points >= threshold.min_points:
            tier = threshold.name
    return tier


def tier_details(
    tier: LoyaltyTier, thresholds: Sequence[TierThreshold] | None = None
) -> TierThreshold | None:
    for threshold in _ordered(thresholds):
        if threshold.name == tier:
            return threshold
    return None


def compute_progress(
    membership: LoyaltyMembership,
    thresholds: Sequence[TierThreshold] | None = None,
) -> TierProgress:
    """Progress from the current tier floor towards the next tier floor."""
    ordered = _ordered(thresholds)
    index = next(
        (i for i, threshold in enumerate(ordered) if threshold.name == membership.current_tier),
        None,
    )
    if index is None:
        current_tier = tier_for_points(membership.tier_points, ordered)
        index = next(i for i, threshold in enumerate(ordered) if threshold.name == current_tier)

    if index == len(ordered) - 1:
        return TierProgress(next_tier=None, points_to_next_tier=0, progress_percentage=100.0)

    floor = ordered[index].min_points
    following = ordered[index + 1]
    span = following.min_points - floor
    if span <= 0:
        percentage = 100.0
    else:
        percentage = 100 * (membership.tier_points - floor) / span
    return TierProgress(
        next_tier=following.name,
        points_to_next_tier=max(0, following.min_points - membership.tier_points),
        progress_percentage=round(min(100.0, max(0.0, percentage)), 2),
    )


def redeemable_value(membership: LoyaltyMembership, points_to_money_ratio: int) -> Decimal:
    if points_to_money_ratio < 1:
        raise ValueError("points_to_money_ratio must be at least 1")
    return to_money(Decimal(membership.available_points) / Decimal(points_to_money_ratio))


def can_redeem(
    membership: LoyaltyMembership,
    rules: RedemptionRules,
    points: int | None = None,
) -> bool:
    """Whether ``points`` (default: the full balance) may be redeemed now."""
    requested = membership.available_points if points is None else points
    if requested <= 0 or requested > membership.available_points:
        return False
    if requested < rules.minimum_redemption:
        return False
    if rules.maximum_redemption is not None and requested > rules.maximum_redemption:
        return False
    return True


def build_view(
    membership: LoyaltyMembership,
    *,
    thresholds: Sequence[TierThreshold] | None = None,
    rules: RedemptionRules | None = None,
    language: str | None = None,
) -> MembershipView:
    rules = rules or RedemptionRules(
        points_to_money_ratio=get_settings().points_to_money_ratio
    )
    value = redeemable_value(membership, rules.points_to_money_ratio)
    return MembershipView(
        membership=membership,
        tier_details=tier_details(membership.current_tier, thresholds),
        tier_progress=compute_progress(membership, thresholds),
        redeemable_value=value,
        formatted_redeemable_value=format_price(value, language),
        can_redeem=can_redeem(membership, rules),
    )


def _parse_thresholds(raw: Any) -> list[TierThreshold] | None:
    if not isinstance(raw, list) or not raw:
        return None
    known = {tier.value for tier in LoyaltyTier}
    parsed = [
        TierThreshold.model_validate(entry)
        for entry in raw
        if isinstance(entry, dict) and entry.get("name") in known
    ]
    return parsed or None


async def fetch_membership_view(
    client: MarketplaceClient,
    hotel_id: str,
    *,
    language: str | None = None,
) -> MembershipView:
    """Load the caller's membership at ``hotel_id`` and derive the dashboard view."""
    data = await client.get_my_membership(hotel_id)
    membership = LoyaltyMembership.model_validate(data.get("membership") or data)
    program = data.get("program") if isinstance(data.get("program"), dict) else {}
    raw_rules = program.get("redemptionRules")
    rules = RedemptionRules.model_validate(raw_rules) if raw_rules else None
    thresholds = _parse_thresholds(program.get("tierConfiguration"))
    logger.debug("Loaded %s membership for hotel %s", membership.current_tier.value, hotel_id)
    return build_view(membership, thresholds=thresholds, rules=rules, language=language)


__all__ = [
    "DEFAULT_THRESHOLDS",
    "build_view",
    "can_redeem",
    "compute_progress",
    "fetch_membership_view",
    "redeemable_value",
    "tier_details",
    "tier_for_points",
    "validate_thresholds",
]
