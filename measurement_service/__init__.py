# Measurement service package for forwarding events to GA4

from .errors import (
    AnalyticsError,
    TransportError,
    UnexpectedStatusError,
    SerializationError,
)
from .models import RequestContext, EventPayload, SendResult
from .identity import (
    IdentityResolver,
    resolve_client_id,
    resolve_session_id,
)
from .payload_builder import PayloadBuilder, build_post_data
from .event_sender import EventSender, send_event
from .logging_config import (
    setup_logging,
    stop_logging,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "AnalyticsError",
    "TransportError",
    "UnexpectedStatusError",
    "SerializationError",
    "RequestContext",
    "EventPayload",
    "SendResult",
    "IdentityResolver",
    "resolve_client_id",
    "resolve_session_id",
    "PayloadBuilder",
    "build_post_data",
    "EventSender",
    "send_event",
    "setup_logging",
    "stop_logging",
    "ThreadSafeLoggingConfig",
]
