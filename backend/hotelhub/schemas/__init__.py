"""Schema exports."""

from hotelhub.schemas.category import (
    ActivationResultRead,
    CategoryListingRead,
    CategoryView,
    ReconcileResultRead,
    SampleItem,
    ServiceCategory,
)
from hotelhub.schemas.housekeeping import (
    HousekeepingCategory,
    HousekeepingListRead,
    HousekeepingMutationRead,
    HousekeepingService,
    HousekeepingServiceCreate,
    HousekeepingServiceRead,
    HousekeepingServiceUpdate,
    ServiceAvailability,
)
from hotelhub.schemas.loyalty import (
    LoyaltyMembership,
    LoyaltyTier,
    MembershipView,
    RedemptionRules,
    TierProgress,
    TierProgressRequest,
    TierThreshold,
)
from hotelhub.schemas.markup import (
    MarkupSettingRead,
    MarkupSettingsRead,
    MarkupUpdate,
    PriceQuoteRead,
    PriceQuoteRequest,
    ProviderMarkupRead,
)
from hotelhub.schemas.notice import NoticeLevel, NoticeRead
from hotelhub.schemas.schedule import (
    ApplyToAllRequest,
    DaySchedule,
    OpenAtRead,
    OpenAtRequest,
    OperatingSchedule,
    ScheduleSummaryRead,
)

__all__ = [
    "ActivationResultRead",
    "ApplyToAllRequest",
    "CategoryListingRead",
    "CategoryView",
    "DaySchedule",
    "HousekeepingCategory",
    "HousekeepingListRead",
    "HousekeepingMutationRead",
    "HousekeepingService",
    "HousekeepingServiceCreate",
    "HousekeepingServiceRead",
    "HousekeepingServiceUpdate",
    "LoyaltyMembership",
    "LoyaltyTier",
    "MarkupSettingRead",
    "MarkupSettingsRead",
    "MarkupUpdate",
    "MembershipView",
    "NoticeLevel",
    "NoticeRead",
    "OpenAtRead",
    "OpenAtRequest",
    "OperatingSchedule",
    "PriceQuoteRead",
    "PriceQuoteRequest",
    "ProviderMarkupRead",
    "ReconcileResultRead",
    "RedemptionRules",
    "SampleItem",
    "ScheduleSummaryRead",
    "ServiceAvailability",
    "ServiceCategory",
    "TierProgress",
    "TierProgressRequest",
    "TierThreshold",
]
