from app.schemas.address import AddressResponse
from app.schemas.config import PublicConfigResponse
from app.schemas.delivery import (
    DeliveryAcceptRequest,
    DeliveryCreate,
    DeliveryDetailResponse,
    DeliveryResponse,
    DeliveryStatusUpdate,
    EstimateRequest,
    EstimateResponse,
)
from app.schemas.driver import DriverLocationReport, DriverLocationUpdate, DriverResponse
from app.schemas.payment import CardDetails, PaymentRequest, PaymentResponse

__all__ = [
    "AddressResponse",
    "CardDetails",
    "DeliveryAcceptRequest",
    "DeliveryCreate",
    "DeliveryDetailResponse",
    "DeliveryResponse",
    "DeliveryStatusUpdate",
    "DriverLocationReport",
    "DriverLocationUpdate",
    "DriverResponse",
    "EstimateRequest",
    "EstimateResponse",
    "PaymentRequest",
    "PaymentResponse",
    "PublicConfigResponse",
]
