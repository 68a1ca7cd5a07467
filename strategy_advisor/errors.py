"""
Exception hierarchy for the advisor client.

Every failure the invocation pipeline can surface derives from AdvisorError,
so the view controller has a single type to report on.
"""

from typing import Optional


class AdvisorError(Exception):
    """Base class for advisor client failures."""


class ConfigError(AdvisorError):
    """A required configuration value is missing or malformed."""


class AuthenticationError(AdvisorError):
    """The identity provider rejected a sign-in, sign-up or refresh."""


class MissingCredentials(AdvisorError):
    """The credential provider returned no usable access key."""

    def __init__(self, message: str = "No AWS credentials received from Cognito."):
        super().__init__(message)


class NetworkError(AdvisorError):
    """Transport-level failure before a response was received."""


class HttpError(AdvisorError):
    """The agent endpoint answered with a non-2xx status."""

    def __init__(self, status: int, body: Optional[str] = None):
        self.status = status
        self.body = body or ""
        super().__init__(f"HTTP {status}: {self.body}")


class StreamReadError(AdvisorError):
    """The response body was absent or could not be read."""
