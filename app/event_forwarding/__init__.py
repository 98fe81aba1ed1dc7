"""
Event Forwarding Subsystem

Relays frontend events to Google Analytics through the Measurement Protocol.
"""

from .factory import create_event_forwarding_module
from .models import ForwardedEvent

__all__ = ['create_event_forwarding_module', 'ForwardedEvent']
