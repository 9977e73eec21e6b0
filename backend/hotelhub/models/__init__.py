"""ORM models package export."""

from hotelhub.models.pending_activation import (
    ActivationIntent,
    CategoryScope,
    PendingActivation,
)

__all__ = [
    "ActivationIntent",
    "CategoryScope",
    "PendingActivation",
]
