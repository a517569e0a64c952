"""Error types surfaced by the relay and their HTTP status codes."""
from __future__ import annotations


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """A required request field is missing or empty."""
    status_code = 400


class ConfigurationError(RelayError):
    """Server configuration does not allow serving the request."""
    status_code = 400


class UpstreamError(RelayError):
    """Gemini answered with a non-2xx status or could not be reached.

    ``status`` is None for transport failures.
    """
    status_code = 502

    def __init__(self, status: int | None, body: str) -> None:
        self.status = status
        self.body = body
        label = status if status is not None else "transport"
        super().__init__(f"Gemini API error {label}: {body}")

MISSING_KEY_MESSAGE = (
    "Server is configured to use Gemini for explanations but GEMINI_API_KEY is not set. "
    "Please add GEMINI_API_KEY to the server environment."
)
