"""
Event Sender Module

Sends a single GA4 event to the Measurement Protocol collector. Delivery is
fire-and-forget: network and status failures are logged, never raised.
"""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote_plus

import requests

from config_manager import AnalyticsConfig
from .errors import TransportError, UnexpectedStatusError
from .identity import IdentityResolver
from .models import RequestContext, SendResult
from .payload_builder import PayloadBuilder

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 204


class EventSender:
    """Forward events for one visitor to Google Analytics."""

    def __init__(
        self,
        config: AnalyticsConfig,
        context: RequestContext,
        session: Optional[requests.Session] = None,
        resolver: Optional[IdentityResolver] = None,
        log: Optional[logging.Logger] = None
    ):
        """Initialize the sender and resolve the visitor identifiers.

        Args:
            config: Collector endpoint, credentials and timeouts
            context: Cookies and client IP of the inbound request
            session: HTTP session to send with (created if not given)
            resolver: Identity resolver (default clock and random source if not given)
            log: Logger receiving delivery failures
        """
        self.config = config
        self.context = context
        self.session = session or requests.Session()
        self._owns_session = session is None
        self.log = log or logger
        self.builder = PayloadBuilder(config.engagement_time_msec)

        resolver = resolver or IdentityResolver()
        self.client_id = resolver.resolve_client_id(context.cookies)
        self.session_id = resolver.resolve_session_id(context.cookies, config.measurement_id)

    def build_url(self) -> str:
        """Collector URL with the API secret and measurement ID query parameters."""
        return "%s?api_secret=%s&measurement_id=%s" % (
            self.config.endpoint,
            quote_plus(self.config.api_secret),
            quote_plus(self.config.measurement_id),
        )

    def build_post_data(self, name: str, params: Mapping[str, Any]) -> str:
        """JSON request body for an event from this visitor."""
        return self.builder.build_post_data(
            name, params, self.client_id, self.session_id, self.context.remote_addr
        )

    def deliver(self, post_data: str) -> SendResult:
        """POST an encoded payload to the collector.

        Returns:
            SendResult; ``ok`` only for HTTP 204, otherwise ``error`` is set
        """
        try:
            response = self.session.post(
                self.build_url(),
                data=post_data.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            return SendResult(ok=False, error=TransportError(f"Request error: {e}"))
        except ValueError as e:
            # urllib3 rejects invalid timeouts before connecting
            return SendResult(ok=False, error=TransportError(f"Invalid request settings: {e}"))

        try:
            status_code = response.status_code
            body = response.text
        finally:
            response.close()

        if status_code != SUCCESS_STATUS:
            return SendResult(
                ok=False,
                status_code=status_code,
                body=body,
                error=UnexpectedStatusError(status_code, body),
            )
        return SendResult(ok=True, status_code=status_code, body=body)

    def send_event(self, name: str, params: Mapping[str, Any]) -> None:
        """Send one event, logging (not raising) delivery failures.

        Args:
            name: GA4 event name
            params: Custom event parameters

        Raises:
            SerializationError: If ``params`` cannot be encoded as JSON
        """
        if not self.config.is_configured():
            self.log.warning("GoogleAnalytics not configured, dropping event '%s'", name)
            return

        post_data = self.build_post_data(name, params)
        result = self.deliver(post_data)
        if not result.ok:
            self.log.error("GoogleAnalytics error: %s", result.error)
            return

        self.log.debug("Sent GA4 event '%s' for client %s", name, self.client_id)

    def close(self) -> None:
        """Close the HTTP session if this sender created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> 'EventSender':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def send_event(
    config: AnalyticsConfig,
    context: RequestContext,
    name: str,
    params: Mapping[str, Any]
) -> None:
    """Send one event for the visitor in ``context`` with a short-lived sender."""
    with EventSender(config, context) as sender:
        sender.send_event(name, params)
