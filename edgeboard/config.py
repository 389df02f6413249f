"""Configuration for the prediction dashboard core."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional
import json
import os

from edgeboard.constants import DEFAULT_EDGE_BAND_TABLE


_DEFAULT_API_SERVER_URL = "http://localhost:8001"
_DEFAULT_LIVE_TIMEOUT = 5.0
_DEFAULT_STATUS_TIMEOUT = 3.0
_DEFAULT_SERVICE_ACCOUNT_PATH = "service_account.json"
_DEFAULT_PREDICTIONS_RANGE = "Predictions!A:Z"
_DEFAULT_COVER_ANALYSIS_RANGE = "Cover Analysis!A:Z"
_DEFAULT_RESULTS_RANGE = "Results!A:Z"

# Polling cadences (seconds)
_DEFAULT_REFRESH_INTERVAL = 30.0
_DEFAULT_NOTIFICATION_INTERVAL = 10.0

_DEFAULT_NOTIFICATIONS_DIR = "notifications"

# Edges at or above this count as value bets in the band breakdown
_DEFAULT_VALUE_BET_THRESHOLD = 0.1


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_positive_float(value: Optional[str], default: float) -> float:
    parsed = _coerce_float(value, default)
    return parsed if parsed > 0 else default


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        return {str(k): str(v) for k, v in payload.items()}
    return _parse_env_file(path)


@dataclass
class Config:
    # Live feed
    api_server_url: str
    live_timeout: float
    status_timeout: float

    # Fallback spreadsheet
    sheet_id: str
    service_account_path: str
    google_client_email: str
    google_private_key: str
    google_project_id: str
    predictions_range: str
    cover_analysis_range: str
    results_range: str

    # Refresh cadence
    refresh_interval: float
    notification_interval: float
    notifications_dir: str

    # Derivation
    edge_band_table: str
    edge_bands_path: str
    value_bet_threshold: float

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "Config":
        return cls(
            api_server_url=(values.get("API_SERVER_URL") or _DEFAULT_API_SERVER_URL).rstrip("/"),
            live_timeout=_coerce_positive_float(values.get("LIVE_FEED_TIMEOUT"), _DEFAULT_LIVE_TIMEOUT),
            status_timeout=_coerce_positive_float(values.get("STATUS_TIMEOUT"), _DEFAULT_STATUS_TIMEOUT),
            sheet_id=values.get("GOOGLE_SHEET_ID", ""),
            service_account_path=values.get(
                "GOOGLE_SERVICE_ACCOUNT_FILE",
                _DEFAULT_SERVICE_ACCOUNT_PATH,
            ),
            google_client_email=values.get("GOOGLE_CLIENT_EMAIL", ""),
            google_private_key=values.get("GOOGLE_PRIVATE_KEY", ""),
            google_project_id=values.get("GOOGLE_PROJECT_ID", ""),
            predictions_range=values.get("PREDICTIONS_RANGE") or _DEFAULT_PREDICTIONS_RANGE,
            cover_analysis_range=values.get("COVER_ANALYSIS_RANGE") or _DEFAULT_COVER_ANALYSIS_RANGE,
            results_range=values.get("RESULTS_RANGE") or _DEFAULT_RESULTS_RANGE,
            refresh_interval=_coerce_positive_float(
                values.get("REFRESH_INTERVAL_SECONDS"),
                _DEFAULT_REFRESH_INTERVAL,
            ),
            notification_interval=_coerce_positive_float(
                values.get("NOTIFICATION_INTERVAL_SECONDS"),
                _DEFAULT_NOTIFICATION_INTERVAL,
            ),
            notifications_dir=values.get("NOTIFICATIONS_DIR") or _DEFAULT_NOTIFICATIONS_DIR,
            edge_band_table=values.get("EDGE_BAND_TABLE") or DEFAULT_EDGE_BAND_TABLE,
            edge_bands_path=values.get("EDGE_BANDS_PATH", ""),
            value_bet_threshold=_coerce_float(
                values.get("VALUE_BET_THRESHOLD"),
                _DEFAULT_VALUE_BET_THRESHOLD,
            ),
        )

    @classmethod
    def from_env(cls) -> "Config":
        return cls.from_values(os.environ)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        if not config_path:
            return cls.from_env()

        # File values win over the environment
        file_data = _load_config_data(Path(config_path))
        merged = dict(os.environ)
        merged.update(file_data)
        return cls.from_values(merged)
