"""
Data Models for Measurement Protocol Events

Defines the request context read by the identity resolver, the payload
envelope sent to the collector and the internal delivery result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import AnalyticsError


@dataclass
class RequestContext:
    """Inbound request state the sender needs: cookies and client IP."""

    cookies: Mapping[str, str] = field(default_factory=dict)
    remote_addr: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> 'RequestContext':
        """Build a context from any request object exposing ``cookies`` and ``remote_addr``."""
        return cls(
            cookies=dict(request.cookies),
            remote_addr=request.remote_addr
        )


@dataclass
class EventPayload:
    """Measurement Protocol request body for a single event."""

    client_id: str
    ip_override: Optional[str]
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "client_id": self.client_id,
            "ip_override": self.ip_override,
            "events": self.events
        }


@dataclass
class SendResult:
    """Outcome of one delivery attempt."""

    ok: bool
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[AnalyticsError] = None
