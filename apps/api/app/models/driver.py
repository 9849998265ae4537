import enum
from decimal import Decimal

from sqlalchemy import Boolean, Enum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class VehicleType(str, enum.Enum):
    VAN = "van"
    CAR = "car"
    BIKE = "bike"


class Driver(Base):
    __tablename__ = "drivers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[Decimal | None] = mapped_column(
        Numeric(2, 1), nullable=True, default=Decimal("5.0")
    )
    vehicle: Mapped[str] = mapped_column(String(255), nullable=False)
    vehicle_type: Mapped[VehicleType] = mapped_column(
        Enum(
            VehicleType,
            name="vehicle_type",
            native_enum=False,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    current_latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 8), nullable=True)
    current_longitude: Mapped[Decimal | None] = mapped_column(Numeric(11, 8), nullable=True)
