from typing import Any

import httpx
from pydantic import ValidationError

from workers.tracking_worker.errors import (
    DeliveryNotFoundError,
    DeliveryStoreBadResponseError,
    DeliveryStoreTimeoutError,
    DeliveryStoreUnavailableError,
    PaymentRejectedError,
)
from workers.tracking_worker.models import (
    AddressRecord,
    DeliveryFetch,
    DeliverySnapshot,
    PublicConfig,
)


def _server_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if not isinstance(body, dict):
        return None

    detail = body.get("detail", body.get("error"))
    if isinstance(detail, str):
        return detail
    if isinstance(detail, dict) and isinstance(detail.get("message"), str):
        return detail["message"]
    if isinstance(detail, list) and detail and isinstance(detail[0], dict):
        return detail[0].get("msg")
    return None


class DeliveryStoreClient:
    """Typed async access to the delivery store REST API."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "DeliveryStoreClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as err:
            raise DeliveryStoreTimeoutError() from err
        except (httpx.DecodingError, httpx.TooManyRedirects) as err:
            raise DeliveryStoreBadResponseError(str(err)) from err
        except httpx.RequestError as err:
            raise DeliveryStoreUnavailableError(str(err)) from err

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code == 404:
            raise DeliveryNotFoundError(_server_message(response) or "Delivery not found")
        if response.status_code >= 500:
            raise DeliveryStoreUnavailableError(
                f"Delivery store returned {response.status_code}"
            )
        if response.status_code >= 400:
            raise DeliveryStoreBadResponseError(
                f"Delivery store returned {response.status_code}"
            )

    async def fetch_delivery(self, delivery_id: int, etag: str | None = None) -> DeliveryFetch:
        headers = {"If-None-Match": etag} if etag else {}
        response = await self._request("GET", f"/api/deliveries/{delivery_id}", headers=headers)

        if response.status_code == 304:
            return DeliveryFetch(delivery=None, etag=etag, not_modified=True)
        self._raise_for_status(response)

        try:
            delivery = DeliverySnapshot.model_validate(response.json())
        except (ValueError, ValidationError) as err:
            raise DeliveryStoreBadResponseError("Malformed delivery payload") from err
        return DeliveryFetch(delivery=delivery, etag=response.headers.get("ETag"))

    async def fetch_addresses(self, user_id: int) -> list[AddressRecord]:
        response = await self._request("GET", f"/api/addresses/{user_id}")
        self._raise_for_status(response)

        try:
            payload = response.json()
        except ValueError as err:
            raise DeliveryStoreBadResponseError("Malformed address payload") from err
        if not isinstance(payload, list):
            raise DeliveryStoreBadResponseError("Malformed address payload")
        try:
            return [AddressRecord.model_validate(item) for item in payload]
        except ValidationError as err:
            raise DeliveryStoreBadResponseError("Malformed address payload") from err

    async def fetch_public_config(self) -> PublicConfig:
        response = await self._request("GET", "/api/config")
        self._raise_for_status(response)
        try:
            return PublicConfig.model_validate(response.json())
        except (ValueError, ValidationError) as err:
            raise DeliveryStoreBadResponseError("Malformed config payload") from err

    async def submit_payment(self, delivery_id: int, body: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST", f"/api/deliveries/{delivery_id}/payment", json=body
        )
        if not response.is_success:
            raise PaymentRejectedError(response.status_code, _server_message(response))
        try:
            return response.json()
        except ValueError:
            return {}
