"""Unit tests for the in-memory metrics recorder."""

from edgeboard.ops.metrics import InMemoryMetricsRecorder


class TestInMemoryMetricsRecorder:

    def test_counters_and_gauges(self):
        metrics = InMemoryMetricsRecorder()
        metrics.increment("refresh.success")
        metrics.increment("refresh.success", 2)
        metrics.gauge("snapshot.predictions", 12)
        metrics.gauge("snapshot.predictions", 9)

        snapshot = metrics.snapshot()

        assert snapshot["counters"] == {"refresh.success": 3}
        assert snapshot["gauges"] == {"snapshot.predictions": 9.0}

    def test_timings_window(self):
        metrics = InMemoryMetricsRecorder(window=2)
        for value in (10.0, 20.0, 40.0):
            metrics.timing("refresh.duration", value)

        timing = metrics.snapshot()["timings"]["refresh.duration"]

        assert timing["count"] == 2
        assert timing["avg_ms"] == 30.0
        assert timing["last_ms"] == 40.0
        assert timing["max_ms"] == 40.0

    def test_reset(self):
        metrics = InMemoryMetricsRecorder()
        metrics.increment("refresh.error")
        metrics.reset()

        assert metrics.snapshot() == {"counters": {}, "gauges": {}, "timings": {}}
