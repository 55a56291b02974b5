"""Realtime monitor polling with subscriber fan-out.

A RealtimePoller owns a set of watched stop groups (DIVA numbers), a timer
task and the latest validated MonitorResponse. Each timer tick runs one fetch
cycle: request the monitor endpoint, validate the body, then replace the
snapshot and notify subscribers. A failed cycle (transport, JSON decode or
schema) is logged and skipped; subscribers simply hear nothing for that tick.

Ticks do not wait for the previous cycle. If a round-trip outlives the
period, cycles overlap and may publish out of request order. stop_polling()
only cancels the timer: cycles already in flight still complete and publish.
"""

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime

import httpx

from wl_transit.data.config import MonitorConfig, get_monitor_config
from wl_transit.data.monitor_client import MonitorClient
from wl_transit.data.subscribers import SubscriberRegistry
from wl_transit.errors import DecodeError, SchemaValidationError, TransportError
from wl_transit.models.realtime import MonitorResponse, validate_monitor_response

logger = logging.getLogger(__name__)

Subscriber = Callable[[MonitorResponse], None]


class RealtimePoller:
    """Polls the monitor endpoint for watched stop groups.

    All methods must be called from the event loop the poller runs on;
    there is no locking.

    Usage:
        poller = RealtimePoller(config)
        poller.watch(60200179)
        unsubscribe = poller.subscribe(print)
        poller.start_polling(30)
    """

    def __init__(
        self,
        config: MonitorConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize an idle poller.

        Args:
            config: Monitor configuration. Defaults to get_monitor_config().
            transport: Optional httpx transport passed to each MonitorClient.
        """
        self._config = config if config is not None else get_monitor_config()
        self._transport = transport

        self._watched: set[int] = set()
        self._subscribers: SubscriberRegistry[MonitorResponse] = SubscriberRegistry()
        self._snapshot: MonitorResponse | None = None
        self._last_updated: datetime | None = None

        self._timer: asyncio.Task | None = None
        self._period: float | None = None
        self._pending: set[asyncio.Task] = set()

    @property
    def is_polling(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def period(self) -> float | None:
        """Polling period in seconds, or None when idle."""
        return self._period if self.is_polling else None

    @property
    def watched(self) -> frozenset[int]:
        return frozenset(self._watched)

    @property
    def snapshot(self) -> MonitorResponse | None:
        """The latest validated response, or None before the first success."""
        return self._snapshot

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def pending_cycles(self) -> int:
        """Number of fetch cycles currently in flight."""
        return len(self._pending)

    def watch(self, diva: int) -> None:
        """Add a stop group to the next fetch cycles."""
        self._watched.add(diva)

    def unwatch(self, diva: int) -> None:
        """Remove a stop group. Unknown ids are ignored."""
        self._watched.discard(diva)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every new snapshot.

        If a snapshot already exists, the callback is invoked with it once
        before this method returns.

        Args:
            callback: Called with the MonitorResponse. Exceptions it raises
                are logged and never reach the poller or other subscribers.

        Returns:
            A function that removes the subscription. Calling it more than
            once has no further effect.
        """
        handle = self._subscribers.add(callback)
        if self._snapshot is not None:
            self._subscribers.notify(callback, self._snapshot)

        def unsubscribe() -> None:
            self._subscribers.remove(handle)

        return unsubscribe

    def start_polling(self, period_seconds: float | None = None) -> None:
        """Start the polling timer; the first cycle runs immediately.

        Does nothing if already polling (the running timer and its period
        are kept).

        Args:
            period_seconds: Seconds between cycles. Defaults to
                config.poll_interval_seconds. Values below
                config.min_poll_interval_seconds are allowed but logged.

        Raises:
            ValueError: If period_seconds is not a positive finite number.
            RuntimeError: If called without a running event loop.
        """
        if self.is_polling:
            logger.debug(f"Already polling every {self._period}s, ignoring start_polling()")
            return

        period = self._config.poll_interval_seconds if period_seconds is None else period_seconds
        if not math.isfinite(period) or period <= 0:
            raise ValueError(f"Polling period must be a positive number, got {period}")
        if period < self._config.min_poll_interval_seconds:
            logger.warning(
                f"Polling period {period}s is below the recommended minimum of "
                f"{self._config.min_poll_interval_seconds}s"
            )

        loop = asyncio.get_running_loop()
        self._period = period
        self._timer = loop.create_task(self._run_timer(period), name="wl-monitor-timer")
        logger.info(f"Started polling {len(self._watched)} stop groups every {period}s")

    def stop_polling(self) -> None:
        """Cancel the polling timer. Does nothing if idle.

        Cycles already in flight are not cancelled and will still publish.
        """
        if self._timer is None:
            logger.debug("Not polling, ignoring stop_polling()")
            return

        self._timer.cancel()
        self._timer = None
        self._period = None
        logger.info("Stopped polling")

    async def poll_once(self) -> MonitorResponse | None:
        """Run one fetch cycle for the currently watched stop groups.

        Returns:
            The new snapshot, or None if the cycle was skipped.
        """
        divas = sorted(self._watched)

        try:
            async with MonitorClient(self._config, transport=self._transport) as client:
                payload = await client.fetch_monitor(divas)
            response = validate_monitor_response(payload)
        except TransportError as e:
            logger.warning(f"Skipping monitor cycle, transport failed: {e}")
            return None
        except DecodeError as e:
            logger.warning(f"Skipping monitor cycle, undecodable body: {e}")
            return None
        except SchemaValidationError as e:
            logger.warning(f"Skipping monitor cycle, {len(e.issues)} schema issues: {e}")
            return None

        self._snapshot = response
        self._last_updated = datetime.now(UTC)
        delivered = self._subscribers.publish(response)
        logger.debug(
            f"Fetched {len(response.data.monitors)} monitors for {len(divas)} stop groups, "
            f"notified {delivered}/{len(self._subscribers)} subscribers"
        )
        return response

    async def wait_for_pending(self) -> None:
        """Wait for the fetch cycles currently in flight to finish."""
        pending = list(self._pending)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Stop polling and let in-flight cycles finish."""
        self.stop_polling()
        await self.wait_for_pending()

    async def _run_timer(self, period: float) -> None:
        while True:
            self._spawn_cycle()
            await asyncio.sleep(period)

    def _spawn_cycle(self) -> None:
        task = asyncio.create_task(self.poll_once())
        self._pending.add(task)
        task.add_done_callback(self._on_cycle_done)

    def _on_cycle_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Monitor cycle failed unexpectedly", exc_info=exc)
