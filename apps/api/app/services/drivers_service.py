from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.delivery import Delivery
from app.models.driver import Driver
from app.observability import log_event


def get_driver(db: Session, driver_id: int) -> Driver:
    driver = db.get(Driver, driver_id)
    if not driver:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Driver not found")
    return driver


def list_available_drivers(db: Session) -> list[Driver]:
    query = select(Driver).where(Driver.is_active.is_(True)).order_by(Driver.id.asc())
    return list(db.scalars(query))


def first_available_driver(db: Session) -> Driver | None:
    drivers = list_available_drivers(db)
    return drivers[0] if drivers else None


def update_driver_location(
    db: Session,
    driver_id: int,
    latitude: float | None,
    longitude: float | None,
) -> Driver:
    if latitude is None or longitude is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Latitude and longitude are required",
        )

    driver = get_driver(db, driver_id)
    driver.current_latitude = Decimal(str(latitude))
    driver.current_longitude = Decimal(str(longitude))
    db.commit()
    db.refresh(driver)
    log_event("driver_location_updated", driver_id=driver.id)
    return driver


def list_driver_deliveries(db: Session, driver_id: int) -> list[Delivery]:
    query = select(Delivery).where(Delivery.driver_id == driver_id).order_by(Delivery.id.asc())
    return list(db.scalars(query).unique())
