"""Failure kinds for a weather lookup.

All of them collapse to GENERIC_ERROR_MESSAGE at the page boundary; the
subclasses exist so logs and tests can tell them apart.
"""

GENERIC_ERROR_MESSAGE = "Error fetching weather data. Please try again."


class WeatherLookupError(Exception):
    """Base class for anything that stops a lookup from producing a result."""
    kind = "lookup_error"


class NetworkFailure(WeatherLookupError):
    """The provider could not be reached (DNS, connect, timeout, reset)."""
    kind = "network_failure"


class ProviderRejected(WeatherLookupError):
    """The provider answered with a non-2xx status, or the query was blank."""
    kind = "provider_rejected"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(WeatherLookupError):
    """The provider answered 2xx but the body is not the expected shape."""
    kind = "malformed_response"
