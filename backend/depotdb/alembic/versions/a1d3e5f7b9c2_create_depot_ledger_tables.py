"""create depot stock, fuel, dispatch and audit tables

Revision ID: a1d3e5f7b9c2
Revises:
Create Date: 2026-10-12 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a1d3e5f7b9c2"
down_revision = None
branch_labels = None
depends_on = None


STOCK_CATEGORY = sa.Enum("OIL", "CHEMICAL", "PART", name="stock_category_enum")
AUDIT_ACTION = sa.Enum(
    "ADD",
    "MODIFY",
    "DELETE",
    "CONSUMPTION",
    "STOCK_ADJUSTMENT",
    "DISPATCH",
    name="audit_action_enum",
)
FUEL_EVENT_KIND = sa.Enum("CONSUMPTION", "MANUAL_ADJUSTMENT", name="fuel_event_kind_enum")
FUEL_SHIFT = sa.Enum("DAY", "NIGHT", name="fuel_shift_enum")


def upgrade() -> None:
    op.create_table(
        "stock_items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("category", STOCK_CATEGORY, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(14, 3), nullable=False),
        sa.Column("unit", sa.String(length=16), nullable=False),
        sa.Column("alert_threshold", sa.Numeric(14, 3), nullable=False),
        sa.Column("family", sa.String(length=128), nullable=True),
        sa.Column("location", sa.String(length=128), nullable=True),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_modified_by", sa.String(length=128), nullable=False),
        sa.CheckConstraint("quantity >= 0", name="ck_stock_items_quantity_non_negative"),
        sa.CheckConstraint("alert_threshold >= 0", name="ck_stock_items_threshold_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stock_items_id", "stock_items", ["id"])
    op.create_index("ix_stock_items_category", "stock_items", ["category"])
    op.create_index("ix_stock_items_category_created", "stock_items", ["category", "created_at"])

    op.create_table(
        "fuel_tanks",
        sa.Column("id", sa.String(length=16), nullable=False),
        sa.Column("total_liters", sa.Numeric(14, 3), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(length=128), nullable=True),
        sa.CheckConstraint("total_liters >= 0", name="ck_fuel_tanks_total_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "fuel_events",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("kind", FUEL_EVENT_KIND, nullable=False),
        sa.Column("amount", sa.Numeric(14, 3), nullable=False),
        sa.Column("balance_before", sa.Numeric(14, 3), nullable=False),
        sa.Column("balance_after", sa.Numeric(14, 3), nullable=False),
        sa.Column("actor", sa.String(length=128), nullable=False),
        sa.Column("machine", sa.String(length=128), nullable=True),
        sa.Column("shift", FUEL_SHIFT, nullable=True),
        sa.Column("idempotency_key", sa.String(length=128), nullable=True),
        sa.Column("payload_hash", sa.String(length=128), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("idempotency_key"),
    )
    op.create_index("ix_fuel_events_id", "fuel_events", ["id"])
    op.create_index("ix_fuel_events_kind", "fuel_events", ["kind"])
    op.create_index("ix_fuel_events_occurred_at", "fuel_events", ["occurred_at"])
    op.create_index("ix_fuel_events_time_desc", "fuel_events", [sa.text("occurred_at DESC")])

    op.create_table(
        "dispatch_records",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(14, 3), nullable=False),
        sa.Column("destination", sa.String(length=255), nullable=False),
        sa.Column("recipient", sa.String(length=255), nullable=False),
        sa.Column("actor", sa.String(length=128), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_dispatch_records_quantity_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dispatch_records_id", "dispatch_records", ["id"])
    op.create_index("ix_dispatch_records_occurred_at", "dispatch_records", ["occurred_at"])

    op.create_table(
        "audit_entries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("action", AUDIT_ACTION, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("actor", sa.String(length=128), nullable=False),
        sa.Column("entity_type", sa.String(length=64), nullable=True),
        sa.Column("entity_id", sa.String(length=64), nullable=True),
        sa.Column("before", sa.JSON(), nullable=True),
        sa.Column("after", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_entries_id", "audit_entries", ["id"])
    op.create_index("ix_audit_entries_action", "audit_entries", ["action"])
    op.create_index("ix_audit_entries_actor", "audit_entries", ["actor"])
    op.create_index("ix_audit_entries_entity_type", "audit_entries", ["entity_type"])
    op.create_index("ix_audit_entries_occurred_at", "audit_entries", ["occurred_at"])
    op.create_index("ix_audit_entries_entity", "audit_entries", ["entity_type", "entity_id"])
    op.create_index("ix_audit_entries_time_desc", "audit_entries", [sa.text("occurred_at DESC")])


def downgrade() -> None:
    op.drop_table("audit_entries")
    op.drop_table("dispatch_records")
    op.drop_table("fuel_events")
    op.drop_table("fuel_tanks")
    op.drop_table("stock_items")

    bind = op.get_bind()
    for enum_type in (FUEL_SHIFT, FUEL_EVENT_KIND, AUDIT_ACTION, STOCK_CATEGORY):
        enum_type.drop(bind, checkfirst=True)
