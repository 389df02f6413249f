"""Unit tests for the notification channel."""

import json

import pytest

from edgeboard.exceptions import NotificationError
from edgeboard.notifications import NotificationChannel, NotificationRecord


def _write(channel, payload):
    channel.path.parent.mkdir(parents=True, exist_ok=True)
    channel.path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload)


@pytest.fixture
def channel(tmp_path):
    return NotificationChannel(tmp_path / "notifications")


class TestNotificationChannel:
    """Tests for poll and acknowledge."""

    def test_poll_without_record(self, channel):
        assert channel.poll() is None

    def test_poll_returns_record(self, channel):
        _write(channel, {
            "timestamp": "2025-01-05T12:00:00Z",
            "subject": "Lines updated",
            "body": "Three new games",
            "type": "info",
        })

        record = channel.poll()

        assert record == NotificationRecord(
            timestamp="2025-01-05T12:00:00Z",
            subject="Lines updated",
            body="Three new games",
            type="info",
        )

    def test_poll_does_not_consume(self, channel):
        _write(channel, {"subject": "Still here"})

        assert channel.poll().subject == "Still here"
        assert channel.poll().subject == "Still here"

    def test_missing_fields_become_empty(self, channel):
        _write(channel, {"subject": "Only a subject"})

        record = channel.poll()

        assert record.body == ""
        assert record.type == ""

    def test_last_write_wins(self, channel):
        _write(channel, {"subject": "first"})
        _write(channel, {"subject": "second"})

        assert channel.poll().subject == "second"

    def test_acknowledge_clears(self, channel):
        _write(channel, {"subject": "x"})

        channel.acknowledge()

        assert channel.poll() is None
        assert not channel.path.exists()

    def test_acknowledge_is_idempotent(self, channel):
        channel.acknowledge()
        channel.acknowledge()

        assert channel.poll() is None

    def test_malformed_json(self, channel):
        _write(channel, "{not json")

        with pytest.raises(NotificationError) as exc_info:
            channel.poll()
        assert exc_info.value.path == str(channel.path)

    def test_non_object_json(self, channel):
        _write(channel, [1, 2, 3])

        with pytest.raises(NotificationError):
            channel.poll()

    def test_record_round_trip(self):
        payload = {"timestamp": "t", "subject": "s", "body": "b", "type": "alert"}

        assert NotificationRecord.from_dict(payload).to_dict() == payload
