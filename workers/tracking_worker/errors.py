from dataclasses import dataclass

SERVICE_NAME = "delivery_store"


@dataclass
class DeliveryStoreError(Exception):
    service: str
    code: str
    message: str
    retryable: bool = False

    def __str__(self) -> str:
        return f"{self.service}:{self.code}:{self.message}"


class DeliveryStoreTimeoutError(DeliveryStoreError):
    def __init__(self, message: str = "Delivery store timeout") -> None:
        super().__init__(service=SERVICE_NAME, code="TIMEOUT", message=message, retryable=True)


class DeliveryStoreUnavailableError(DeliveryStoreError):
    def __init__(self, message: str = "Delivery store unavailable") -> None:
        super().__init__(service=SERVICE_NAME, code="UNAVAILABLE", message=message, retryable=True)


class DeliveryStoreBadResponseError(DeliveryStoreError):
    def __init__(self, message: str = "Unexpected delivery store response") -> None:
        super().__init__(
            service=SERVICE_NAME, code="BAD_RESPONSE", message=message, retryable=False
        )


class DeliveryNotFoundError(DeliveryStoreError):
    def __init__(self, message: str = "Delivery not found") -> None:
        super().__init__(service=SERVICE_NAME, code="NOT_FOUND", message=message, retryable=False)


class PaymentRejectedError(DeliveryStoreError):
    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(
            service=SERVICE_NAME,
            code="PAYMENT_REJECTED",
            message=message or "",
            retryable=False,
        )
        self.status_code = status_code
