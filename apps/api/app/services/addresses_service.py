from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.address import Address


def list_user_addresses(db: Session, user_id: int) -> list[Address]:
    query = select(Address).where(Address.user_id == user_id).order_by(Address.id.asc())
    return list(db.scalars(query))
