"""Error taxonomy for the Launchpad API.

Services and the analysis pipeline raise these; the handlers registered in
``app.main`` turn them into ``{"error": message}`` JSON responses with the
matching status code. ``message`` is always safe to show to the client;
anything internal goes in ``__cause__`` and is only exposed in debug runs.
"""

from __future__ import annotations

from typing import Optional


class LaunchpadError(Exception):
    """Base class for every error the API maps to an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class RequestValidationError(LaunchpadError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Invalid request"


class InvalidKeyError(LaunchpadError):
    """The submitted access code does not match any provisioned key."""

    status_code = 401
    default_message = "Invalid key"


class OwnershipError(LaunchpadError):
    """The analysis exists but belongs to a different key."""

    status_code = 403
    default_message = "Not allowed to modify this analysis"


class AnalysisNotFoundError(LaunchpadError):
    status_code = 404
    default_message = "Analysis not found"


class MethodNotAllowedError(LaunchpadError):
    status_code = 405
    default_message = "Method not allowed"


class UpstreamError(LaunchpadError):
    """The generation endpoint was unreachable, timed out, or returned non-2xx."""

    status_code = 500
    default_message = "Failed to generate analysis"


class UpstreamEmptyResponse(UpstreamError):
    """The generation endpoint answered but produced no candidate."""

    default_message = "No response from AI model"


class ParseError(LaunchpadError):
    """Model output was not a complete JSON object.

    The client always sees ``default_message``. ``reason`` and ``raw_text``
    are for server-side diagnostics only.
    """

    status_code = 500
    default_message = "Failed to parse AI response"

    def __init__(self, reason: Optional[str] = None, raw_text: str = "") -> None:
        super().__init__()
        self.reason = reason or self.default_message
        self.raw_text = raw_text


class StoreError(LaunchpadError):
    """Document store read or write failed."""

    status_code = 500
    default_message = "Storage error"
