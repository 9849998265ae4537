from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.address import Address
from app.models.driver import Driver, VehicleType
from app.models.user import User
from app.observability import log_event

DEMO_USER_ID = 1
DEMO_DRIVER_ID = 1


def seed_data(db: Session) -> None:
    """Insert the demo customer, their saved addresses and one active driver."""
    if db.scalar(select(User.id).limit(1)) is not None:
        return

    db.add(
        User(
            id=DEMO_USER_ID,
            username="testuser",
            password="password",
            full_name="Jan Smit",
            email="jan@example.com",
            phone="+31612345678",
        )
    )
    db.flush()
    db.add_all(
        [
            Address(
                user_id=DEMO_USER_ID,
                label="Thuis",
                street="Keizersgracht 123",
                city="Amsterdam",
                postal_code="1015 CJ",
                country="Netherlands",
                latitude=Decimal("52.3676"),
                longitude=Decimal("4.9041"),
            ),
            Address(
                user_id=DEMO_USER_ID,
                label="Kantoor",
                street="Vondelpark 45",
                city="Amsterdam",
                postal_code="1071 AA",
                country="Netherlands",
                latitude=Decimal("52.3580"),
                longitude=Decimal("4.8690"),
            ),
            Driver(
                id=DEMO_DRIVER_ID,
                name="Marco van der Berg",
                phone="+31687654321",
                email="marco@spoedpakketjes.nl",
                rating=Decimal("4.8"),
                vehicle="Toyota Hiace",
                vehicle_type=VehicleType.VAN,
                is_active=True,
                current_latitude=Decimal("52.3702"),
                current_longitude=Decimal("4.8952"),
            ),
        ]
    )
    db.commit()
    log_event("demo_data_seeded", driver_id=DEMO_DRIVER_ID)
