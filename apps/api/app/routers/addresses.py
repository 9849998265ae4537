from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.address import AddressResponse
from app.services.addresses_service import list_user_addresses

router = APIRouter(prefix="/api/addresses", tags=["addresses"])


@router.get("/{user_id}", response_model=list[AddressResponse], summary="Saved addresses")
def list_addresses_endpoint(user_id: int, db: Session = Depends(get_db)) -> list[AddressResponse]:
    return [AddressResponse.model_validate(address) for address in list_user_addresses(db, user_id)]
