"""In-process counters, gauges and timings for the refresh loop.

Keys used by the orchestrator:

- ``refresh.success`` / ``refresh.error``: cycle outcomes
- ``refresh.source.<tag>``: which source served each successful cycle
- ``refresh.duration``: wall time of each cycle (ms)
- ``snapshot.predictions``: size of the last published snapshot
"""

from collections import Counter, deque
from typing import Any, Deque, Dict
import threading

# Timings keep a bounded window so a long-running watch does not grow forever
_TIMING_WINDOW = 500


class MetricsRecorder:
    def increment(self, key: str, value: int = 1) -> None:
        raise NotImplementedError

    def gauge(self, key: str, value: float) -> None:
        raise NotImplementedError

    def timing(self, key: str, value_ms: float) -> None:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        raise NotImplementedError


class InMemoryMetricsRecorder(MetricsRecorder):
    def __init__(self, window: int = _TIMING_WINDOW) -> None:
        self._window = window
        self._counters: Counter = Counter()
        self._gauges: Dict[str, float] = {}
        self._timings: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def increment(self, key: str, value: int = 1) -> None:
        with self._lock:
            self._counters[key] += int(value)

    def gauge(self, key: str, value: float) -> None:
        with self._lock:
            self._gauges[key] = float(value)

    def timing(self, key: str, value_ms: float) -> None:
        with self._lock:
            if key not in self._timings:
                self._timings[key] = deque(maxlen=self._window)
            self._timings[key].append(float(value_ms))

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            timings = {
                key: {
                    "count": len(values),
                    "avg_ms": sum(values) / len(values),
                    "last_ms": values[-1],
                    "max_ms": max(values),
                }
                for key, values in self._timings.items()
                if values
            }
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
                "timings": timings,
            }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._timings.clear()


_DEFAULT_RECORDER = InMemoryMetricsRecorder()


def get_metrics_recorder() -> MetricsRecorder:
    return _DEFAULT_RECORDER
