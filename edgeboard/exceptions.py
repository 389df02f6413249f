"""
Custom exceptions for the edgeboard prediction pipeline.

Provides a hierarchy of exceptions so each failure class can be
recovered (or surfaced) at the right layer.

Usage:
    from edgeboard.exceptions import CredentialError, DataFetchError

    try:
        payload = await fetcher.fetch()
    except CredentialError as e:
        print(f"Fallback credentials unavailable: {e}")
    except DataFetchError as e:
        print(f"Data fetch failed: {e}")
"""


class EdgeboardError(Exception):
    """
    Base exception for all edgeboard errors.

    All custom exceptions inherit from this, allowing:
        except EdgeboardError:
            # Catch any system error
    """
    pass


# =============================================================================
# DATA ERRORS
# =============================================================================

class DataFetchError(EdgeboardError):
    """
    Error fetching data from a source.

    Raised when:
    - A spreadsheet range query fails
    - A source returns an unusable payload
    """

    def __init__(self, source: str, message: str = None, original_error: Exception = None):
        self.source = source
        self.original_error = original_error
        msg = f"Error fetching from {source}"
        if message:
            msg += f": {message}"
        if original_error:
            msg += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(msg)


class LiveFeedError(DataFetchError):
    """
    The live prediction feed could not be used.

    Raised when:
    - The request times out or the connection fails
    - The server answers with a non-2xx status
    - The body is not JSON or lacks the expected envelope

    The source fetcher always recovers from this by falling back.
    """

    def __init__(self, message: str, status_code: int = None, original_error: Exception = None):
        self.status_code = status_code
        if status_code:
            message = f"{message} (status: {status_code})"
        super().__init__("live_feed", message, original_error)


class CredentialError(DataFetchError):
    """
    Fallback spreadsheet credentials could not be resolved.

    Raised when:
    - Environment credentials are present but rejected
    - The local service account file is missing or malformed
    """

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__("google_sheets", message, original_error)


# =============================================================================
# NOTIFICATION ERRORS
# =============================================================================

class NotificationError(EdgeboardError):
    """
    Reading or clearing the notification slot failed.

    Non-critical: callers log it and retry on the next poll.
    """

    def __init__(self, path: str, message: str, original_error: Exception = None):
        self.path = path
        self.original_error = original_error
        msg = f"Notification store error at {path}: {message}"
        if original_error:
            msg += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(msg)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(EdgeboardError):
    """
    Configuration or setup error.

    Raised when:
    - A required setting (e.g. the sheet id) is missing
    - An edge band table is malformed
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Configuration error ({setting}): {message}")
