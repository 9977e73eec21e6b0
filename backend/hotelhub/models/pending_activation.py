"""Activation intents applied locally while the marketplace was unreachable."""
from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from hotelhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CategoryScope(str, enum.Enum):
    """Which category family an activation belongs to."""

    OUTSIDE = "outside"
    INSIDE = "inside"


class ActivationIntent(str, enum.Enum):
    """Target state recorded for a later sync."""

    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"


class PendingActivation(Base):
    """A category toggle that still has to be replayed against the backend.

    Only the newest intent per provider, scope and key is kept; replays run
    in ``created_at`` order.
    """

    __tablename__ = "pending_activations"
    __table_args__ = (
        UniqueConstraint(
            "provider_id", "scope", "category_key", name="uq_pending_activation_key"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    provider_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    scope: Mapped[CategoryScope] = mapped_column(Enum(CategoryScope), nullable=False)
    category_key: Mapped[str] = mapped_column(String(64), nullable=False)
    intent: Mapped[ActivationIntent] = mapped_column(
        Enum(ActivationIntent), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )
