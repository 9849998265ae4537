from fastapi import APIRouter, Body, Depends, Header, Response
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.observability import observe_timing
from app.schemas.delivery import (
    DeliveryAcceptRequest,
    DeliveryCreate,
    DeliveryDetailResponse,
    DeliveryResponse,
    DeliveryStatusUpdate,
    EstimateRequest,
    EstimateResponse,
)
from app.schemas.payment import PaymentRequest, PaymentResponse
from app.services.deliveries_service import (
    accept_delivery,
    create_delivery,
    delivery_detail_payload,
    estimate_delivery,
    get_delivery,
    list_deliveries,
    list_user_deliveries,
    update_delivery_status,
)
from app.services.payment_service import simulate_payment
from app.services.tracking_cache import DELIVERY_CACHE_CONTROL_VALUE, build_etag, etag_matches

router = APIRouter(prefix="/api", tags=["deliveries"])

ETAG_RESPONSE_HEADER = {
    "ETag": {
        "description": "Entity tag representing the current delivery payload",
        "schema": {"type": "string"},
    }
}

CACHE_CONTROL_RESPONSE_HEADER = {
    "Cache-Control": {
        "description": "Caching policy for conditional delivery polling",
        "schema": {"type": "string"},
    }
}


@router.post("/deliveries", response_model=DeliveryDetailResponse, summary="Create delivery")
def create_delivery_endpoint(
    payload: DeliveryCreate,
    db: Session = Depends(get_db),
) -> DeliveryDetailResponse:
    with observe_timing("delivery_create_seconds"):
        delivery = create_delivery(db, payload)
    return DeliveryDetailResponse.model_validate(delivery)


@router.get("/deliveries", response_model=list[DeliveryResponse], summary="All deliveries")
def list_deliveries_endpoint(db: Session = Depends(get_db)) -> list[DeliveryResponse]:
    return [DeliveryResponse.model_validate(item) for item in list_deliveries(db)]


@router.get(
    "/deliveries/user/{user_id}",
    response_model=list[DeliveryResponse],
    summary="Deliveries of a user",
)
def list_user_deliveries_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
) -> list[DeliveryResponse]:
    return [DeliveryResponse.model_validate(item) for item in list_user_deliveries(db, user_id)]


@router.get(
    "/deliveries/{delivery_id}",
    response_model=DeliveryDetailResponse,
    summary="Delivery with driver",
    responses={
        200: {"headers": {**ETAG_RESPONSE_HEADER, **CACHE_CONTROL_RESPONSE_HEADER}},
        304: {
            "description": "Not Modified",
            "headers": {**ETAG_RESPONSE_HEADER, **CACHE_CONTROL_RESPONSE_HEADER},
        },
        404: {"description": "Delivery not found"},
    },
)
def get_delivery_endpoint(
    delivery_id: int,
    response: Response,
    db: Session = Depends(get_db),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
) -> DeliveryDetailResponse | Response:
    delivery = get_delivery(db, delivery_id)
    etag = build_etag(delivery_detail_payload(delivery))
    response.headers["ETag"] = etag
    response.headers["Cache-Control"] = DELIVERY_CACHE_CONTROL_VALUE

    if etag_matches(if_none_match, etag):
        response.status_code = 304
        return response

    return DeliveryDetailResponse.model_validate(delivery)


@router.post(
    "/deliveries/{delivery_id}/accept",
    response_model=DeliveryDetailResponse,
    summary="Accept delivery as driver",
)
def accept_delivery_endpoint(
    delivery_id: int,
    payload: DeliveryAcceptRequest | None = Body(default=None),
    db: Session = Depends(get_db),
) -> DeliveryDetailResponse:
    driver_id = payload.driver_id if payload is not None else None
    return DeliveryDetailResponse.model_validate(accept_delivery(db, delivery_id, driver_id))


@router.api_route(
    "/deliveries/{delivery_id}/status",
    methods=["PATCH", "POST"],
    response_model=DeliveryDetailResponse,
    summary="Update delivery status",
)
def update_status_endpoint(
    delivery_id: int,
    payload: DeliveryStatusUpdate,
    db: Session = Depends(get_db),
) -> DeliveryDetailResponse:
    delivery = update_delivery_status(db, delivery_id, payload.status, payload.driver_id)
    return DeliveryDetailResponse.model_validate(delivery)


@router.post(
    "/deliveries/{delivery_id}/payment",
    response_model=PaymentResponse,
    summary="Simulated payment",
    responses={404: {"description": "Delivery not found"}, 409: {"description": "Not payable"}},
)
def payment_endpoint(
    delivery_id: int,
    payload: PaymentRequest,
    db: Session = Depends(get_db),
) -> PaymentResponse:
    return simulate_payment(db, delivery_id, payload)


@router.post("/estimate", response_model=EstimateResponse, summary="Price estimate")
def estimate_endpoint(payload: EstimateRequest) -> EstimateResponse:
    price, minutes = estimate_delivery(payload)
    return EstimateResponse(estimated_price=price, estimated_time=minutes)
