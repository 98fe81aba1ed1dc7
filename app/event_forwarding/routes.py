"""
Event Forwarding Routes

Flask routes that relay frontend events to the GA4 Measurement Protocol.
"""

import json
import logging
from typing import Callable

from flask import Blueprint, request, jsonify

from config_manager import AnalyticsConfig
from measurement_service.errors import SerializationError
from measurement_service.event_sender import EventSender
from measurement_service.models import RequestContext

from .models import ForwardedEvent

logger = logging.getLogger(__name__)


def create_event_forwarding_blueprint(
    analytics_config: AnalyticsConfig,
    sender_factory: Callable[..., EventSender] = EventSender
) -> Blueprint:
    """Create a Flask blueprint for event forwarding routes.

    Args:
        analytics_config: Measurement Protocol configuration
        sender_factory: Builds an EventSender from (config, context)

    Returns:
        Flask blueprint with event forwarding routes
    """
    bp = Blueprint('event_forwarding', __name__)

    @bp.route("/event", methods=["POST"])
    def forward_event():
        """Forward one event for the calling visitor."""
        payload_data = request.get_json(silent=True)
        if payload_data is None:
            raw = request.get_data(as_text=True) or "{}"
            try:
                payload_data = json.loads(raw)
            except json.JSONDecodeError:
                return jsonify({"error": "invalid-json"}), 400

        if not isinstance(payload_data, dict):
            return jsonify({"error": "invalid-body"}), 400

        event = ForwardedEvent.from_dict(payload_data)
        if not event.validate():
            return jsonify({"error": "invalid-event"}), 400

        context = RequestContext.from_request(request)
        with sender_factory(analytics_config, context) as sender:
            try:
                sender.send_event(event.name, event.params)
            except SerializationError as exc:
                logger.warning("Rejected event '%s': %s", event.name, exc)
                return jsonify({"error": str(exc)}), 400

        return jsonify({"status": "ok"})

    return bp
