"""
Error types raised while delivering Measurement Protocol events.
"""

from typing import Optional


class AnalyticsError(Exception):
    """Base class for event delivery failures."""


class TransportError(AnalyticsError):
    """The request never produced an HTTP response (connection, DNS, timeout)."""


class UnexpectedStatusError(AnalyticsError):
    """The collector answered with something other than 204 No Content."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body or ""
        super().__init__(f"GA4 request failed. HTTP {status_code}: {self.body}")


class SerializationError(AnalyticsError):
    """The event payload could not be encoded as JSON."""
