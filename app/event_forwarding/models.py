"""
Data Models for Event Forwarding

Defines the body accepted by the /event endpoint.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict

# GA4 event names: start with a letter, letters/digits/underscores only.
EVENT_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
MAX_EVENT_NAME_LENGTH = 40


@dataclass
class ForwardedEvent:
    """Event posted by the frontend for forwarding to GA4."""

    name: str
    params: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> bool:
        """Validate the event structure."""
        return (
            isinstance(self.name, str) and
            len(self.name) <= MAX_EVENT_NAME_LENGTH and
            EVENT_NAME_PATTERN.match(self.name) is not None and
            isinstance(self.params, dict)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ForwardedEvent':
        """Create ForwardedEvent from a decoded JSON body."""
        name = data.get("name", "")
        return cls(
            name=name.strip() if isinstance(name, str) else name,
            params=data.get("params") if data.get("params") is not None else {}
        )
