"""System status probe for the live feed.

One-shot, blocking check used by the CLI: probe the health endpoint with a
short timeout and, when it is up, attach the server's performance summary.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

import requests

from edgeboard.constants import HEALTH_PATH, PERFORMANCE_SUMMARY_PATH

logger = logging.getLogger(__name__)

ONLINE = "online"
OFFLINE = "offline"


@dataclass(frozen=True)
class SystemStatus:
    api_server: str
    dashboard: str
    last_checked: str
    system: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiServer": self.api_server,
            "dashboard": self.dashboard,
            "lastChecked": self.last_checked,
            "system": self.system,
        }


def check_system_status(
    base_url: str,
    timeout: float = 3.0,
    session: Optional[requests.Session] = None,
) -> SystemStatus:
    """Probe the live feed; never raises for network trouble."""
    http = session or requests.Session()
    base_url = base_url.rstrip("/")
    api_server = OFFLINE
    system = None

    try:
        health = http.get(f"{base_url}{HEALTH_PATH}", timeout=timeout)
        if health.ok:
            api_server = ONLINE
            # The summary endpoint is optional on the server side
            try:
                summary = http.get(f"{base_url}{PERFORMANCE_SUMMARY_PATH}", timeout=timeout)
                if summary.ok:
                    system = summary.json()
            except (requests.RequestException, ValueError) as e:
                logger.debug("Performance summary unavailable: %s", e)
    except requests.RequestException as e:
        logger.debug("Live feed health check failed: %s", e)
    finally:
        if session is None:
            http.close()

    return SystemStatus(
        api_server=api_server,
        dashboard=ONLINE,
        last_checked=datetime.now(timezone.utc).isoformat(),
        system=system,
    )
