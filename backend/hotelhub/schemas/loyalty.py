"""Loyalty membership and tier schemas."""

from __future__ import annotations

import enum
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LoyaltyTier(str, enum.Enum):
    """Membership tiers in ascending order."""

    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


class TierThreshold(BaseModel):
    name: LoyaltyTier
    min_points: int = Field(ge=0, validation_alias=AliasChoices("min_points", "minPoints"))
    max_points: int | None = Field(
        default=None, validation_alias=AliasChoices("max_points", "maxPoints")
    )
    discount_percentage: float = Field(
        default=0,
        ge=0,
        le=100,
        validation_alias=AliasChoices("discount_percentage", "discountPercentage"),
    )
    benefits: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class TierProgress(BaseModel):
    next_tier: LoyaltyTier | None
    points_to_next_tier: int
    progress_percentage: float


class LoyaltyMembership(BaseModel):
    """Guest membership as delivered by the loyalty program."""

    current_tier: LoyaltyTier = Field(
        default=LoyaltyTier.BRONZE,
        validation_alias=AliasChoices("current_tier", "currentTier"),
    )
    tier_points: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("tier_points", "tierPoints", "totalPoints"),
    )
    available_points: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("available_points", "availablePoints"),
    )

    model_config = ConfigDict(populate_by_name=True)


class RedemptionRules(BaseModel):
    points_to_money_ratio: int = Field(
        default=100,
        ge=1,
        validation_alias=AliasChoices("points_to_money_ratio", "pointsToMoneyRatio"),
    )
    minimum_redemption: int = Field(
        default=500,
        ge=0,
        validation_alias=AliasChoices("minimum_redemption", "minimumRedemption"),
    )
    maximum_redemption: int | None = Field(
        default=None,
        validation_alias=AliasChoices("maximum_redemption", "maximumRedemption"),
    )

    model_config = ConfigDict(populate_by_name=True)


class TierProgressRequest(BaseModel):
    membership: LoyaltyMembership
    thresholds: list[TierThreshold] | None = None


class MembershipView(BaseModel):
    membership: LoyaltyMembership
    tier_details: TierThreshold | None = None
    tier_progress: TierProgress
    redeemable_value: Decimal
    formatted_redeemable_value: str
    can_redeem: bool
