"""
Payload Builder Module

Combines caller event parameters with the fields the Measurement Protocol
requires and encodes the request body.
"""

import json
from typing import Any, Mapping, Optional

from .errors import SerializationError
from .models import EventPayload

# Events without a non-zero engagement time are not counted as active users.
DEFAULT_ENGAGEMENT_TIME_MSEC = 100


class PayloadBuilder:
    """Build Measurement Protocol request bodies."""

    def __init__(self, engagement_time_msec: int = DEFAULT_ENGAGEMENT_TIME_MSEC):
        self.engagement_time_msec = engagement_time_msec

    def build_payload(
        self,
        name: str,
        params: Mapping[str, Any],
        client_id: str,
        session_id: str,
        remote_ip: Optional[str]
    ) -> EventPayload:
        """Build the payload envelope for one event.

        ``session_id`` and ``engagement_time_msec`` are written over any
        caller-supplied keys of the same name.
        """
        event_params = dict(params)
        event_params["session_id"] = session_id
        event_params["engagement_time_msec"] = self.engagement_time_msec

        return EventPayload(
            client_id=client_id,
            ip_override=remote_ip,
            events=[{"name": name, "params": event_params}]
        )

    def build_post_data(
        self,
        name: str,
        params: Mapping[str, Any],
        client_id: str,
        session_id: str,
        remote_ip: Optional[str]
    ) -> str:
        """Build the JSON-encoded request body for one event.

        Args:
            name: GA4 event name
            params: Custom event parameters
            client_id: Visitor client ID
            session_id: Visitor session ID
            remote_ip: Visitor IP, sent as ``ip_override``

        Returns:
            JSON document

        Raises:
            SerializationError: If a parameter value cannot be encoded
        """
        payload = self.build_payload(name, params, client_id, session_id, remote_ip)
        try:
            return json.dumps(payload.to_dict(), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot encode event '{name}': {e}") from e


def build_post_data(
    name: str,
    params: Mapping[str, Any],
    client_id: str,
    session_id: str,
    remote_ip: Optional[str],
    engagement_time_msec: int = DEFAULT_ENGAGEMENT_TIME_MSEC
) -> str:
    """Build the JSON-encoded request body for one event."""
    builder = PayloadBuilder(engagement_time_msec)
    return builder.build_post_data(name, params, client_id, session_id, remote_ip)
