import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.driver import Driver


class DeliveryType(str, enum.Enum):
    PACKAGE = "package"
    LETTER = "letter"
    EXPRESS = "express"


class DeliveryStatus(str, enum.Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


def _enum_values(members) -> list[str]:
    return [member.value for member in members]


class Delivery(Base):
    __tablename__ = "deliveries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    driver_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("drivers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    order_number: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    type: Mapped[DeliveryType] = mapped_column(
        Enum(
            DeliveryType,
            name="delivery_type",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    status: Mapped[DeliveryStatus] = mapped_column(
        Enum(
            DeliveryStatus,
            name="delivery_status",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=DeliveryStatus.PENDING,
    )

    pickup_address_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    pickup_street: Mapped[str] = mapped_column(String(255), nullable=False)
    pickup_city: Mapped[str] = mapped_column(String(255), nullable=False)
    pickup_postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    pickup_latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 8), nullable=True)
    pickup_longitude: Mapped[Decimal | None] = mapped_column(Numeric(11, 8), nullable=True)

    delivery_address_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True
    )
    delivery_street: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_city: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    delivery_latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 8), nullable=True)
    delivery_longitude: Mapped[Decimal | None] = mapped_column(Numeric(11, 8), nullable=True)

    estimated_price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    final_price: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    estimated_delivery_time: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    picked_up_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    driver: Mapped[Driver | None] = relationship(Driver, lazy="joined")
