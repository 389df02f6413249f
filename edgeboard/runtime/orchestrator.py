"""Refresh orchestration.

Drives two independent timers on one event loop:

- a data refresh (fetch -> derive -> summarize -> publish), every
  ``refresh_interval`` seconds
- a notification poll, every ``notification_interval`` seconds

Each refresh publishes a new immutable ``DashboardSnapshot`` by swapping a
single reference, so readers never see predictions without the matching
performance summary. A failed refresh keeps the previous snapshot visible.

Usage:
    import asyncio
    from edgeboard.config import Config
    from edgeboard.runtime.orchestrator import RefreshOrchestrator

    async def main():
        orchestrator = RefreshOrchestrator.from_config(Config.from_env())
        await orchestrator.refresh()
        print(orchestrator.view())

    asyncio.run(main())
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple
import asyncio
import logging
import time

from edgeboard.config import Config
from edgeboard.exceptions import NotificationError
from edgeboard.ingestion.fetcher import SourceFetcher
from edgeboard.models.bands import BandTable, load_edge_bands
from edgeboard.models.derivation import CanonicalPrediction, derive_predictions
from edgeboard.models.performance import PerformanceSummary, summarize_performance
from edgeboard.notifications import NotificationChannel, NotificationRecord
from edgeboard.ops.metrics import MetricsRecorder, get_metrics_recorder

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the consumer sees for one successful refresh."""
    predictions: Tuple[CanonicalPrediction, ...]
    performance: PerformanceSummary
    last_updated: str
    real_time: bool
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictions": [prediction.to_dict() for prediction in self.predictions],
            "performance": self.performance.to_dict(),
            "lastUpdated": self.last_updated,
            "realTime": self.real_time,
            "source": self.source,
        }


class RefreshOrchestrator:
    """
    Owns the authoritative snapshot and the two polling loops.

    Attributes:
        state: Current ``RefreshState``
        last_error: Message of the most recent failed refresh (None after success)
        pending_notification: Latest notification seen by the poller
    """

    def __init__(
        self,
        fetcher: SourceFetcher,
        channel: NotificationChannel,
        bands: BandTable,
        refresh_interval: float = 30.0,
        notification_interval: float = 10.0,
        on_update: Optional[Callable[[DashboardSnapshot], None]] = None,
        metrics: Optional[MetricsRecorder] = None,
    ):
        self._fetcher = fetcher
        self._channel = channel
        self._bands = bands
        self.refresh_interval = refresh_interval
        self.notification_interval = notification_interval
        self._on_update = on_update
        self._metrics = metrics or get_metrics_recorder()

        self._snapshot: Optional[DashboardSnapshot] = None
        self._inflight: Optional[asyncio.Task] = None
        self._tasks: Tuple[asyncio.Task, ...] = ()
        self.state = RefreshState.IDLE
        self.last_error: Optional[str] = None
        self.pending_notification: Optional[NotificationRecord] = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        on_update: Optional[Callable[[DashboardSnapshot], None]] = None,
    ) -> "RefreshOrchestrator":
        return cls(
            fetcher=SourceFetcher.from_config(config),
            channel=NotificationChannel(config.notifications_dir),
            bands=load_edge_bands(config.edge_band_table, config.edge_bands_path),
            refresh_interval=config.refresh_interval,
            notification_interval=config.notification_interval,
            on_update=on_update,
        )

    # =========================================================================
    # Consumer queries
    # =========================================================================

    @property
    def bands(self) -> BandTable:
        return self._bands

    def current(self) -> Optional[DashboardSnapshot]:
        """Latest published snapshot (None before the first success)."""
        return self._snapshot

    def view(self) -> Dict[str, Any]:
        """Consumer payload: the snapshot plus refresh state and error."""
        snapshot = self._snapshot
        if snapshot is None:
            payload = {
                "predictions": [],
                "performance": PerformanceSummary().to_dict(),
                "lastUpdated": None,
                "realTime": False,
                "source": None,
            }
        else:
            payload = snapshot.to_dict()
        payload["state"] = self.state.value
        payload["error"] = self.last_error
        return payload

    # =========================================================================
    # Data refresh
    # =========================================================================

    async def refresh(self) -> Optional[DashboardSnapshot]:
        """
        Run one refresh cycle.

        A call made while another refresh is in flight joins that refresh
        instead of starting a second one.

        Returns:
            The newly published snapshot, or None if the cycle failed
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._run_cycle())
        return await asyncio.shield(self._inflight)

    async def _run_cycle(self) -> Optional[DashboardSnapshot]:
        self.state = RefreshState.FETCHING
        start = time.monotonic()
        try:
            result = await self._fetcher.fetch_result()
            if not result.ok:
                return self._fail(result.error or "fetch failed")

            payload = result.payload
            predictions = derive_predictions(payload.predictions, self._bands)
            performance = summarize_performance(payload.outcomes, len(predictions))
            snapshot = DashboardSnapshot(
                predictions=tuple(predictions),
                performance=performance,
                last_updated=payload.generated_at,
                real_time=payload.real_time,
                source=payload.source,
            )
        except asyncio.CancelledError:
            self.state = RefreshState.IDLE if self._snapshot is None else RefreshState.READY
            raise
        except Exception as e:
            logger.exception("Unexpected error during refresh")
            return self._fail(f"unexpected error: {e}")
        finally:
            self._metrics.timing("refresh.duration", (time.monotonic() - start) * 1000)

        self._snapshot = snapshot
        self.state = RefreshState.READY
        self.last_error = None
        self._metrics.increment("refresh.success")
        self._metrics.increment(f"refresh.source.{snapshot.source}")
        self._metrics.gauge("snapshot.predictions", len(snapshot.predictions))
        logger.info(
            "Published %d predictions from %s (win rate %.1f%% over %d bets)",
            len(snapshot.predictions),
            snapshot.source,
            snapshot.performance.win_rate,
            snapshot.performance.total_bets,
        )

        if self._on_update is not None:
            try:
                self._on_update(snapshot)
            except Exception:
                logger.exception("Snapshot update callback failed")
        return snapshot

    def _fail(self, reason: str) -> Optional[DashboardSnapshot]:
        self.state = RefreshState.ERROR
        self.last_error = reason
        self._metrics.increment("refresh.error")
        if self._snapshot is not None:
            logger.warning("Refresh failed, keeping data from %s: %s", self._snapshot.last_updated, reason)
        else:
            logger.warning("Refresh failed: %s", reason)
        return None

    # =========================================================================
    # Notifications
    # =========================================================================

    async def check_notifications(self) -> Optional[NotificationRecord]:
        """Poll the notification slot; IO failures are logged and swallowed."""
        loop = asyncio.get_running_loop()
        try:
            record = await loop.run_in_executor(None, self._channel.poll)
        except NotificationError as e:
            logger.info("Notification check failed: %s", e)
            return self.pending_notification
        if record is not None:
            if record != self.pending_notification:
                logger.info("Notification received: %s", record.subject)
            self.pending_notification = record
        return self.pending_notification

    async def dismiss_notification(self) -> bool:
        """Acknowledge the outstanding notification.

        Returns:
            True if the slot was cleared, False if clearing failed
        """
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._channel.acknowledge)
        except NotificationError as e:
            logger.error("Failed to dismiss notification: %s", e)
            return False
        self.pending_notification = None
        return True

    # =========================================================================
    # Timers
    # =========================================================================

    async def _refresh_loop(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.refresh_interval)

    async def _notification_loop(self) -> None:
        while True:
            await asyncio.sleep(self.notification_interval)
            await self.check_notifications()

    def start(self) -> None:
        """Start both timers on the running loop."""
        if self.running:
            return
        self._tasks = (
            asyncio.ensure_future(self._refresh_loop()),
            asyncio.ensure_future(self._notification_loop()),
        )

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def stop(self) -> None:
        """Cancel both timers and any in-flight refresh."""
        tasks = list(self._tasks)
        if self._inflight is not None and not self._inflight.done():
            tasks.append(self._inflight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks = ()

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Run both timers until ``stop_event`` is set (or forever)."""
        self.start()
        try:
            if stop_event is None:
                await asyncio.gather(*self._tasks)
            else:
                await stop_event.wait()
        finally:
            await self.stop()
