from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.db.session import get_db
from app.schemas.delivery import DeliveryResponse
from app.schemas.driver import DriverLocationReport, DriverLocationUpdate, DriverResponse
from app.services.drivers_service import (
    get_driver,
    list_available_drivers,
    list_driver_deliveries,
    update_driver_location,
)

router = APIRouter(prefix="/api/drivers", tags=["drivers"])


@router.get("", response_model=list[DriverResponse], summary="Available drivers")
def list_drivers_endpoint(db: Session = Depends(get_db)) -> list[DriverResponse]:
    return [DriverResponse.model_validate(driver) for driver in list_available_drivers(db)]


@router.post("/location", response_model=DriverResponse, summary="Report driver location")
def report_location_endpoint(
    payload: DriverLocationReport,
    db: Session = Depends(get_db),
) -> DriverResponse:
    driver_id = payload.driver_id if payload.driver_id is not None else settings.default_driver_id
    driver = update_driver_location(db, driver_id, payload.latitude, payload.longitude)
    return DriverResponse.model_validate(driver)


@router.get("/{driver_id}", response_model=DriverResponse, summary="Driver detail")
def get_driver_endpoint(driver_id: int, db: Session = Depends(get_db)) -> DriverResponse:
    return DriverResponse.model_validate(get_driver(db, driver_id))


@router.put("/{driver_id}/location", response_model=DriverResponse, summary="Update location")
def update_location_endpoint(
    driver_id: int,
    payload: DriverLocationUpdate,
    db: Session = Depends(get_db),
) -> DriverResponse:
    driver = update_driver_location(db, driver_id, payload.latitude, payload.longitude)
    return DriverResponse.model_validate(driver)


@router.get(
    "/{driver_id}/deliveries",
    response_model=list[DeliveryResponse],
    summary="Deliveries assigned to a driver",
)
def driver_deliveries_endpoint(
    driver_id: int,
    db: Session = Depends(get_db),
) -> list[DeliveryResponse]:
    get_driver(db, driver_id)
    return [DeliveryResponse.model_validate(item) for item in list_driver_deliveries(db, driver_id)]
