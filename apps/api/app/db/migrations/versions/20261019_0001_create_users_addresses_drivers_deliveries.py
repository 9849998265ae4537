"""create users, addresses, drivers, deliveries

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

vehicle_type = sa.Enum("van", "car", "bike", name="vehicle_type", native_enum=False)
delivery_type = sa.Enum("package", "letter", "express", name="delivery_type", native_enum=False)
delivery_status = sa.Enum(
    "pending",
    "assigned",
    "picked_up",
    "in_transit",
    "delivered",
    "cancelled",
    name="delivery_status",
    native_enum=False,
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "addresses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("label", sa.String(length=100), nullable=False),
        sa.Column("street", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=255), nullable=False),
        sa.Column("postal_code", sa.String(length=20), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_addresses_user_id"), "addresses", ["user_id"], unique=False)

    op.create_table(
        "drivers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("rating", sa.Numeric(2, 1), nullable=True),
        sa.Column("vehicle", sa.String(length=255), nullable=False),
        sa.Column("vehicle_type", vehicle_type, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("current_latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("current_longitude", sa.Numeric(11, 8), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "deliveries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("driver_id", sa.Integer(), nullable=True),
        sa.Column("order_number", sa.String(length=32), nullable=True),
        sa.Column("type", delivery_type, nullable=False),
        sa.Column("status", delivery_status, nullable=False),
        sa.Column("pickup_address_id", sa.Integer(), nullable=True),
        sa.Column("pickup_street", sa.String(length=255), nullable=False),
        sa.Column("pickup_city", sa.String(length=255), nullable=False),
        sa.Column("pickup_postal_code", sa.String(length=20), nullable=False),
        sa.Column("pickup_latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("pickup_longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("delivery_address_id", sa.Integer(), nullable=True),
        sa.Column("delivery_street", sa.String(length=255), nullable=False),
        sa.Column("delivery_city", sa.String(length=255), nullable=False),
        sa.Column("delivery_postal_code", sa.String(length=20), nullable=False),
        sa.Column("delivery_latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("delivery_longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("estimated_price", sa.Numeric(8, 2), nullable=False),
        sa.Column("final_price", sa.Numeric(8, 2), nullable=True),
        sa.Column("estimated_delivery_time", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("picked_up_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["driver_id"], ["drivers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["pickup_address_id"], ["addresses.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["delivery_address_id"], ["addresses.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("order_number"),
    )
    op.create_index(op.f("ix_deliveries_user_id"), "deliveries", ["user_id"], unique=False)
    op.create_index(op.f("ix_deliveries_driver_id"), "deliveries", ["driver_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_deliveries_driver_id"), table_name="deliveries")
    op.drop_index(op.f("ix_deliveries_user_id"), table_name="deliveries")
    op.drop_table("deliveries")
    op.drop_table("drivers")
    op.drop_index(op.f("ix_addresses_user_id"), table_name="addresses")
    op.drop_table("addresses")
    op.drop_table("users")
