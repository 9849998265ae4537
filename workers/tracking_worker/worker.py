"""Tracking worker: polls one delivery and prints the tracking view as it changes."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from dataclasses import dataclass

from workers.tracking_worker.api_client import DeliveryStoreClient
from workers.tracking_worker.app_state import AppState, JsonFileRoleStore, MemoryRoleStore
from workers.tracking_worker.errors import DeliveryStoreError
from workers.tracking_worker.maps import MapRenderer, OpenStreetMapRenderer, select_map_renderer
from workers.tracking_worker.observability import configure_logging, log_event
from workers.tracking_worker.poller import TrackingPoller
from workers.tracking_worker.view import TrackingView, render_tracking_view


@dataclass(frozen=True)
class TrackingWorkerSettings:
    api_base_url: str
    delivery_id: int
    interval_s: float
    timeout_s: float
    role_state_path: str | None


def _parse_number(source, key: str, default: str, parse: Callable[[str], float]):
    value = source.get(key, default).strip()
    try:
        return parse(value)
    except ValueError as err:
        raise ValueError(f"{key} must be a number, got {value!r}") from err


def load_settings(env: dict[str, str] | None = None) -> TrackingWorkerSettings:
    source = env if env is not None else os.environ
    api_base_url = source.get(
        "SPOEDPAKKET_TRACKING_API_BASE_URL", "http://localhost:8000"
    ).strip()
    delivery_id_value = source.get("SPOEDPAKKET_TRACKING_DELIVERY_ID", "").strip()
    interval_s = _parse_number(source, "SPOEDPAKKET_TRACKING_INTERVAL_S", "5", float)
    timeout_s = _parse_number(source, "SPOEDPAKKET_TRACKING_TIMEOUT_S", "5", float)
    role_state_path = source.get("SPOEDPAKKET_TRACKING_ROLE_STATE_PATH") or None

    if not api_base_url:
        raise ValueError("SPOEDPAKKET_TRACKING_API_BASE_URL must not be empty")
    if not delivery_id_value:
        raise ValueError("SPOEDPAKKET_TRACKING_DELIVERY_ID is required")
    delivery_id = _parse_number(source, "SPOEDPAKKET_TRACKING_DELIVERY_ID", "", int)
    if delivery_id < 1:
        raise ValueError("SPOEDPAKKET_TRACKING_DELIVERY_ID must be >= 1")
    if interval_s <= 0:
        raise ValueError("SPOEDPAKKET_TRACKING_INTERVAL_S must be > 0")
    if timeout_s <= 0:
        raise ValueError("SPOEDPAKKET_TRACKING_TIMEOUT_S must be > 0")

    return TrackingWorkerSettings(
        api_base_url=api_base_url.rstrip("/"),
        delivery_id=delivery_id,
        interval_s=interval_s,
        timeout_s=timeout_s,
        role_state_path=role_state_path,
    )


def load_app_state(settings: TrackingWorkerSettings) -> AppState:
    if settings.role_state_path:
        return AppState.from_store(JsonFileRoleStore(settings.role_state_path))
    return AppState.from_store(MemoryRoleStore())


async def choose_renderer(client: DeliveryStoreClient) -> MapRenderer:
    try:
        config = await client.fetch_public_config()
    except DeliveryStoreError as err:
        log_event("map_config_unavailable", status=err.code)
        return OpenStreetMapRenderer()
    return select_map_renderer(config)


async def run_tracking(
    settings: TrackingWorkerSettings,
    *,
    client: DeliveryStoreClient | None = None,
    stop_event: asyncio.Event | None = None,
    emit: Callable[[str], None] = print,
) -> TrackingView:
    """Track until the delivery is terminal, not found or ``stop_event`` is set."""
    owns_client = client is None
    if client is None:
        client = DeliveryStoreClient(settings.api_base_url, timeout_s=settings.timeout_s)

    app_state = load_app_state(settings)
    emit(f"Role: {app_state.profile.name}")

    try:
        renderer = await choose_renderer(client)

        def on_change(view: TrackingView) -> None:
            for line in render_tracking_view(view, renderer):
                emit(line)

        poller = TrackingPoller(client.fetch_delivery, on_change, interval_s=settings.interval_s)
        poller.start(settings.delivery_id)

        waiters = [asyncio.create_task(poller.wait_finished())]
        if stop_event is not None:
            waiters.append(asyncio.create_task(stop_event.wait()))
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()
            poller.stop()
        return poller.view
    finally:
        if owns_client:
            await client.aclose()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(run_tracking(load_settings()))
