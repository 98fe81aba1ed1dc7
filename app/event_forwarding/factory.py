"""
Factory for creating event forwarding module.
"""
from typing import Callable, Optional

from config_manager import AnalyticsConfig
from measurement_service.event_sender import EventSender
from .routes import create_event_forwarding_blueprint


def create_event_forwarding_module(
    analytics_config: AnalyticsConfig,
    sender_factory: Optional[Callable[..., EventSender]] = None
) -> dict:
    """Create event forwarding module with config and routes.

    Args:
        analytics_config: Measurement Protocol configuration
        sender_factory: Optional replacement for EventSender (used in tests)

    Returns:
        Dictionary containing the config and blueprint
    """
    blueprint = create_event_forwarding_blueprint(
        analytics_config=analytics_config,
        sender_factory=sender_factory or EventSender
    )

    return {
        "config": analytics_config,
        "blueprint": blueprint
    }
