"""
Identity Resolver Module

Derives the Google Analytics client ID and session ID for a visitor from
the cookies set by the gtag.js snippet, synthesizing values when the
cookies are missing (blocked cookies, bots, first hit).
"""

import random
import time
from typing import Callable, Mapping, Optional

GA_COOKIE_NAME = "_ga"
SESSION_COOKIE_PREFIX = "_ga_"
CLIENT_ID_MIN = 1000000000
CLIENT_ID_MAX = 9999999999

# "GA1.1.<client id>"
CLIENT_ID_OFFSET = 6
# "GS2.1.s<session start>$o1$g0$t..."
SESSION_ID_OFFSET = 7
SESSION_ID_LENGTH = 10
MEASUREMENT_ID_PREFIX_LENGTH = 2


class IdentityResolver:
    """Resolve visitor identifiers from cookie data."""

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None
    ):
        """Initialize the resolver.

        Args:
            clock: Returns the current unix time in seconds
            rng: Random source used to synthesize client IDs
        """
        self.clock = clock
        self.rng = rng or random.Random()

    def _now(self) -> int:
        return int(self.clock())

    def resolve_client_id(self, cookies: Mapping[str, str]) -> str:
        """Extract the client ID from the ``_ga`` cookie or generate one.

        The ``_ga`` cookie looks like ``GA1.1.1234567890.1234567890``; the
        client ID starts at the sixth character. Without it a random ID is
        generated, so events still arrive but look like a new user each time.

        Args:
            cookies: Inbound request cookies

        Returns:
            Client ID string
        """
        value = cookies.get(GA_COOKIE_NAME)
        if value:
            return value[CLIENT_ID_OFFSET:]
        return f"{self.rng.randint(CLIENT_ID_MIN, CLIENT_ID_MAX)}.{self._now()}"

    def session_cookie_name(self, measurement_id: str) -> str:
        """Name of the session cookie for a measurement ID.

        ``G-ABCDE12FGH`` maps to ``_ga_ABCDE12FGH``.
        """
        return SESSION_COOKIE_PREFIX + measurement_id[MEASUREMENT_ID_PREFIX_LENGTH:]

    def resolve_session_id(self, cookies: Mapping[str, str], measurement_id: str) -> str:
        """Extract the session ID from the stream's session cookie or generate one.

        The session ID is the session start timestamp, embedded at the
        seventh character of a value like ``GS2.1.s1234567890$o1$g0$t...``.
        Without the cookie the current timestamp is used.

        Args:
            cookies: Inbound request cookies
            measurement_id: GA4 data stream measurement ID

        Returns:
            Session ID string
        """
        value = cookies.get(self.session_cookie_name(measurement_id))
        if value:
            return value[SESSION_ID_OFFSET:SESSION_ID_OFFSET + SESSION_ID_LENGTH]
        return str(self._now())


_default_resolver = IdentityResolver()


def resolve_client_id(cookies: Mapping[str, str]) -> str:
    """Resolve a client ID with the default resolver."""
    return _default_resolver.resolve_client_id(cookies)


def resolve_session_id(cookies: Mapping[str, str], measurement_id: str) -> str:
    """Resolve a session ID with the default resolver."""
    return _default_resolver.resolve_session_id(cookies, measurement_id)
