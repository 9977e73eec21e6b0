"""Pending activation intents.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

category_scope = sa.Enum("OUTSIDE", "INSIDE", name="categoryscope")
activation_intent = sa.Enum("ACTIVATE", "DEACTIVATE", name="activationintent")


def upgrade() -> None:
    op.create_table(
        "pending_activations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("provider_id", sa.String(length=64), nullable=False),
        sa.Column("scope", category_scope, nullable=False),
        sa.Column("category_key", sa.String(length=64), nullable=False),
        sa.Column("intent", activation_intent, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "provider_id", "scope", "category_key", name="uq_pending_activation_key"
        ),
    )
    op.create_index(
        "ix_pending_activations_provider_id",
        "pending_activations",
        ["provider_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_pending_activations_provider_id", table_name="pending_activations")
    op.drop_table("pending_activations")
    category_scope.drop(op.get_bind(), checkfirst=True)
    activation_intent.drop(op.get_bind(), checkfirst=True)
