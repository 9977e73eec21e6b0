"""Service layer exports."""
from hotelhub.services import (
    activation_store,
    category_activation_service,
    category_catalog,
    currency,
    housekeeping_service,
    loyalty_service,
    markup_service,
    notice_service,
    operating_schedule_service,
)

__all__ = [
    "activation_store",
    "category_activation_service",
    "category_catalog",
    "currency",
    "housekeeping_service",
    "loyalty_service",
    "markup_service",
    "notice_service",
    "operating_schedule_service",
]
