"""Fixed-rate polling of one delivery, feeding the tracking view.

Every fetch runs as its own task and carries a sequence number taken when it
was issued. A completed fetch only reaches the view when it is newer than the
last applied one, still targets the tracked delivery and the poller is still
running, so a slow response can never overwrite a fresher one.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from workers.tracking_worker.errors import DeliveryNotFoundError, DeliveryStoreError
from workers.tracking_worker.models import DeliveryFetch
from workers.tracking_worker.observability import log_event
from workers.tracking_worker.status_projector import is_terminal
from workers.tracking_worker.view import (
    TrackingView,
    build_tracking_view,
    loading_view,
    not_found_view,
)

DEFAULT_INTERVAL_S = 5.0

FetchDelivery = Callable[[int, str | None], Awaitable[DeliveryFetch]]
OnChange = Callable[[TrackingView], None]


class TrackingPoller:
    def __init__(
        self,
        fetch: FetchDelivery,
        on_change: OnChange,
        interval_s: float = DEFAULT_INTERVAL_S,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._fetch = fetch
        self._on_change = on_change
        self.interval_s = interval_s

        self._delivery_id: int | None = None
        self._view = loading_view()
        self._etag: str | None = None
        self._sequence = 0
        self._applied_sequence = 0
        self._stopped = False
        self._finished = False
        self._finished_event = asyncio.Event()
        self._schedule_task: asyncio.Task | None = None
        self._requests: set[asyncio.Task] = set()

    @property
    def view(self) -> TrackingView:
        return self._view

    @property
    def delivery_id(self) -> int | None:
        return self._delivery_id

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def applied_sequence(self) -> int:
        return self._applied_sequence

    @property
    def running(self) -> bool:
        return self._schedule_task is not None and not self._schedule_task.done()

    @property
    def finished(self) -> bool:
        return self._finished

    def start(self, delivery_id: int) -> None:
        """Begin tracking ``delivery_id``; the first fetch is issued at once."""
        self._stopped = False
        self._switch(delivery_id)

    def track(self, delivery_id: int) -> None:
        if self._stopped:
            raise RuntimeError("poller has been stopped")
        if delivery_id == self._delivery_id and self.running:
            return
        self._switch(delivery_id)

    def _switch(self, delivery_id: int) -> None:
        self._cancel_tasks()
        self._delivery_id = delivery_id
        self._etag = None
        self._finished = False
        self._finished_event.clear()
        self._set_view(loading_view(delivery_id))

        self.refresh()
        self._schedule_task = asyncio.get_running_loop().create_task(self._run_schedule())

    def refresh(self) -> asyncio.Task | None:
        """Issue one fetch now. Returns ``None`` when nothing is being tracked."""
        if self._stopped or self._finished or self._delivery_id is None:
            return None
        self._sequence += 1
        task = asyncio.get_running_loop().create_task(
            self._poll(self._sequence, self._delivery_id, self._etag)
        )
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)
        return task

    def stop(self) -> None:
        self._stopped = True
        self._cancel_tasks()
        self._finished_event.set()
        log_event("tracking_poller_stopped", delivery_id=self._delivery_id)

    async def wait_finished(self) -> None:
        await self._finished_event.wait()

    async def _run_schedule(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            next_tick += self.interval_s
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self.refresh()

    async def _poll(self, sequence: int, delivery_id: int, etag: str | None) -> None:
        try:
            result = await self._fetch(delivery_id, etag)
        except DeliveryNotFoundError:
            if not self._accepts(sequence, delivery_id):
                self._log_discarded(sequence, delivery_id)
                return
            self._applied_sequence = sequence
            self._set_view(not_found_view(delivery_id))
            self._finish("not_found")
            return
        except DeliveryStoreError as err:
            # last good view stays on screen; the next tick retries
            log_event(
                "tracking_poll_failed",
                delivery_id=delivery_id,
                sequence=sequence,
                status=err.code,
                level=logging.WARNING,
            )
            return

        if not self._accepts(sequence, delivery_id):
            self._log_discarded(sequence, delivery_id)
            return
        self._applied_sequence = sequence

        if result.not_modified or result.delivery is None:
            log_event("tracking_poll_not_modified", delivery_id=delivery_id, sequence=sequence)
            return

        self._etag = result.etag
        delivery = result.delivery
        self._set_view(build_tracking_view(delivery))
        log_event(
            "tracking_poll_applied",
            delivery_id=delivery_id,
            sequence=sequence,
            status=delivery.status,
        )
        if is_terminal(delivery.status):
            self._finish(delivery.status)

    def _accepts(self, sequence: int, delivery_id: int) -> bool:
        return (
            not self._stopped
            and not self._finished
            and delivery_id == self._delivery_id
            and sequence > self._applied_sequence
        )

    def _log_discarded(self, sequence: int, delivery_id: int) -> None:
        log_event("tracking_poll_stale_discarded", delivery_id=delivery_id, sequence=sequence)

    def _set_view(self, view: TrackingView) -> None:
        if view == self._view:
            return
        self._view = view
        self._on_change(view)

    def _finish(self, status: str) -> None:
        self._finished = True
        self._cancel_tasks()
        self._finished_event.set()
        log_event("tracking_poller_finished", delivery_id=self._delivery_id, status=status)

    def _cancel_tasks(self) -> None:
        current = asyncio.current_task()
        if self._schedule_task is not None and self._schedule_task is not current:
            self._schedule_task.cancel()
        self._schedule_task = None
        for task in list(self._requests):
            if task is not current:
                task.cancel()
        self._requests.clear()
