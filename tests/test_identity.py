"""
Tests for visitor identity resolution from GA cookies.
"""

import random
import re

import pytest

from measurement_service.identity import (
    IdentityResolver,
    CLIENT_ID_MIN,
    CLIENT_ID_MAX,
    resolve_client_id,
    resolve_session_id,
)

MEASUREMENT_ID = "G-ABCDE12FGH"
NOW = 1712345999.75


@pytest.fixture
def resolver():
    """Resolver with a fixed clock and seeded random source."""
    return IdentityResolver(clock=lambda: NOW, rng=random.Random(42))


class TestClientId:
    """Test client ID extraction and generation."""

    def test_extracts_client_id_from_ga_cookie(self, resolver):
        cookies = {"_ga": "GA1.1.1234567890.1712340000"}
        assert resolver.resolve_client_id(cookies) == "1234567890.1712340000"

    def test_returns_everything_after_prefix(self, resolver):
        """Whatever follows the six character prefix is the client ID."""
        for client_id in ["0123456789", "9876543210", "1111111111"]:
            cookies = {"_ga": f"GA1.2.{client_id}"}
            assert resolver.resolve_client_id(cookies) == client_id

    def test_generates_client_id_without_cookie(self, resolver):
        client_id = resolver.resolve_client_id({})

        assert re.match(r"^\d{10}\.\d+$", client_id)
        random_part, timestamp = client_id.split(".")
        assert CLIENT_ID_MIN <= int(random_part) <= CLIENT_ID_MAX
        assert timestamp == "1712345999"

    def test_empty_cookie_is_treated_as_missing(self, resolver):
        client_id = resolver.resolve_client_id({"_ga": ""})
        assert re.match(r"^\d{10}\.\d+$", client_id)

    def test_generated_ids_differ_between_visitors(self, resolver):
        ids = {resolver.resolve_client_id({}) for _ in range(20)}
        assert len(ids) > 1

    def test_module_level_helper(self):
        assert resolve_client_id({"_ga": "GA1.1.42.7"}) == "42.7"
        assert re.match(r"^\d{10}\.\d+$", resolve_client_id({}))


class TestSessionId:
    """Test session ID extraction and generation."""

    def test_session_cookie_name(self, resolver):
        assert resolver.session_cookie_name(MEASUREMENT_ID) == "_ga_ABCDE12FGH"

    def test_extracts_session_start_from_cookie(self, resolver):
        cookies = {"_ga_ABCDE12FGH": "GS2.1.s1712345678$o3$g1$t1712345999$j60$l0$h0"}
        assert resolver.resolve_session_id(cookies, MEASUREMENT_ID) == "1712345678"

    def test_generates_timestamp_without_cookie(self, resolver):
        session_id = resolver.resolve_session_id({}, MEASUREMENT_ID)
        assert session_id == "1712345999"
        assert session_id.isdigit()

    def test_empty_cookie_is_treated_as_missing(self, resolver):
        cookies = {"_ga_ABCDE12FGH": ""}
        assert resolver.resolve_session_id(cookies, MEASUREMENT_ID) == "1712345999"

    def test_cookie_for_other_stream_is_ignored(self, resolver):
        cookies = {"_ga_ZZZZZZZZZZ": "GS2.1.s1600000000$o1$g0$t1600000001"}
        assert resolver.resolve_session_id(cookies, MEASUREMENT_ID) == "1712345999"

    def test_config_style_cookie_key_is_not_used(self, resolver):
        """Only the plain ``_ga_<stream>`` cookie name is read."""
        cookies = {"COOKIE._ga_ABCDE12FGH": "GS2.1.s1600000000$o1$g0$t1600000001"}
        assert resolver.resolve_session_id(cookies, MEASUREMENT_ID) == "1712345999"

    def test_module_level_helper(self):
        cookies = {"_ga_ABCDE12FGH": "GS2.1.s1712345678$o3"}
        assert resolve_session_id(cookies, MEASUREMENT_ID) == "1712345678"
        assert resolve_session_id({}, MEASUREMENT_ID).isdigit()
