"""Google Sheets fallback source.

Reads row-major value grids through the Sheets v4 API with a read-only
service account. Credentials come from one of two places:

1. ``GOOGLE_CLIENT_EMAIL`` + ``GOOGLE_PRIVATE_KEY`` supplied directly
2. A local service account JSON file

Calls are blocking; async callers run them in an executor.
"""

from typing import Any, Callable, List, Optional
import logging
import threading

from google.auth.exceptions import GoogleAuthError, RefreshError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError

from edgeboard.constants import SHEETS_SCOPES, SOURCE_SHEETS
from edgeboard.exceptions import ConfigurationError, CredentialError, DataFetchError

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _default_service_factory(credentials: Credentials) -> Any:
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


class SheetsClient:
    """Read-only client for the prediction spreadsheet."""

    def __init__(
        self,
        sheet_id: str,
        service_account_path: str = "",
        client_email: str = "",
        private_key: str = "",
        project_id: str = "",
        service_factory: Optional[Callable[[Credentials], Any]] = None,
    ):
        self.sheet_id = sheet_id
        self.service_account_path = service_account_path
        self.client_email = client_email
        self.private_key = private_key
        self.project_id = project_id
        self._service_factory = service_factory or _default_service_factory
        self._service = None
        self._lock = threading.Lock()

    @property
    def uses_env_credentials(self) -> bool:
        return bool(self.client_email and self.private_key)

    def load_credentials(self) -> Credentials:
        """Resolve service account credentials.

        Raises:
            CredentialError: If the selected credential path fails
        """
        if self.uses_env_credentials:
            info = {
                "type": "service_account",
                "project_id": self.project_id,
                "client_email": self.client_email,
                # Environment variables carry the PEM with escaped newlines
                "private_key": self.private_key.replace("\\n", "\n"),
                "token_uri": _TOKEN_URI,
            }
            try:
                return Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
            except (ValueError, KeyError) as e:
                raise CredentialError("environment credentials rejected", e)

        if not self.service_account_path:
            raise CredentialError("no environment credentials and no service account file configured")
        try:
            return Credentials.from_service_account_file(self.service_account_path, scopes=SHEETS_SCOPES)
        except (OSError, ValueError, KeyError) as e:
            raise CredentialError(f"could not load service account file {self.service_account_path}", e)

    def _get_service(self) -> Any:
        with self._lock:
            if self._service is None:
                credentials = self.load_credentials()
                try:
                    self._service = self._service_factory(credentials)
                except (GoogleApiError, GoogleAuthError) as e:
                    raise DataFetchError(SOURCE_SHEETS, "could not build Sheets service", e)
                logger.debug("Sheets service ready (env credentials: %s)", self.uses_env_credentials)
            return self._service

    def get_values(self, range_name: str) -> List[List[Any]]:
        """
        Fetch the value grid of one range.

        Args:
            range_name: A1 range, e.g. ``Predictions!A:Z``

        Returns:
            Row-major list of rows (empty when the range has no values)

        Raises:
            ConfigurationError: If no sheet id is configured
            CredentialError: If credentials cannot be resolved or refreshed
            DataFetchError: If the query fails
        """
        if not self.sheet_id:
            raise ConfigurationError("GOOGLE_SHEET_ID", "sheet id is required for the fallback source")

        service = self._get_service()
        try:
            response = (
                service.spreadsheets()
                .values()
                .get(spreadsheetId=self.sheet_id, range=range_name)
                .execute()
            )
        except RefreshError as e:
            raise CredentialError("service account token refresh failed", e)
        except (GoogleApiError, GoogleAuthError, OSError) as e:
            raise DataFetchError(SOURCE_SHEETS, f"range '{range_name}' query failed", e)

        values = response.get("values") if isinstance(response, dict) else None
        return values or []
