# Import SQLAlchemy models so they register on Base.metadata
from app.models.address import Address  # noqa: F401
from app.models.delivery import Delivery, DeliveryStatus, DeliveryType  # noqa: F401
from app.models.driver import Driver, VehicleType  # noqa: F401
from app.models.user import User  # noqa: F401
