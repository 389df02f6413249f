"""Single-slot notification channel.

An external producer writes one JSON record to ``<directory>/latest.json``.
This module only reads and deletes it. A new write before acknowledgment
replaces the previous record (last write wins, no queue).

Usage:
    from edgeboard.notifications import NotificationChannel

    channel = NotificationChannel("notifications")
    record = channel.poll()
    if record:
        print(record.subject)
        channel.acknowledge()
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from edgeboard.constants import NOTIFICATION_FILENAME
from edgeboard.exceptions import NotificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationRecord:
    """Out-of-band system message."""
    timestamp: str
    subject: str
    body: str
    type: str

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "NotificationRecord":
        return cls(
            timestamp=str(payload.get("timestamp") or ""),
            subject=str(payload.get("subject") or ""),
            body=str(payload.get("body") or ""),
            type=str(payload.get("type") or ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "timestamp": self.timestamp,
            "subject": self.subject,
            "body": self.body,
            "type": self.type,
        }


class NotificationChannel:
    def __init__(self, directory: Union[str, Path]) -> None:
        self._path = Path(directory) / NOTIFICATION_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def poll(self) -> Optional[NotificationRecord]:
        """Return the outstanding notification, or None when there is none.

        Raises:
            NotificationError: If the record exists but cannot be read or parsed
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise NotificationError(str(self._path), "read failed", e)

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise NotificationError(str(self._path), "malformed JSON", e)
        if not isinstance(payload, dict):
            raise NotificationError(str(self._path), "expected a JSON object")

        return NotificationRecord.from_dict(payload)

    def acknowledge(self) -> None:
        """Delete the outstanding notification; a no-op when there is none.

        Raises:
            NotificationError: If the record exists but cannot be deleted
        """
        try:
            self._path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise NotificationError(str(self._path), "delete failed", e)
        logger.info("Notification cleared")
