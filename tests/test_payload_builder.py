"""
Tests for Measurement Protocol payload construction.
"""

import json

import pytest

from measurement_service.errors import SerializationError
from measurement_service.payload_builder import PayloadBuilder, build_post_data


def _decode(post_data: str) -> dict:
    return json.loads(post_data)


class TestBuildPostData:
    """Test the encoded request body."""

    def test_envelope_fields(self):
        body = _decode(build_post_data(
            "purchase", {"value": 10}, "1234567890.1712340000", "1712345678", "203.0.113.7"
        ))

        assert body["client_id"] == "1234567890.1712340000"
        assert body["ip_override"] == "203.0.113.7"
        assert len(body["events"]) == 1
        event = body["events"][0]
        assert event["name"] == "purchase"
        assert event["params"]["value"] == 10
        assert event["params"]["session_id"] == "1712345678"
        assert event["params"]["engagement_time_msec"] == 100

    def test_injected_fields_overwrite_caller_values(self):
        params = {"session_id": "caller-session", "engagement_time_msec": 5, "page": "/"}
        body = _decode(build_post_data("page_view", params, "1.2", "1712345678", "127.0.0.1"))

        event_params = body["events"][0]["params"]
        assert event_params["session_id"] == "1712345678"
        assert event_params["engagement_time_msec"] == 100
        assert event_params["page"] == "/"

    def test_caller_params_are_not_mutated(self):
        params = {"value": 10}
        build_post_data("purchase", params, "1.2", "3", "127.0.0.1")
        assert params == {"value": 10}

    def test_custom_engagement_time(self):
        builder = PayloadBuilder(engagement_time_msec=250)
        body = _decode(builder.build_post_data("login", {}, "1.2", "3", "127.0.0.1"))
        assert body["events"][0]["params"]["engagement_time_msec"] == 250

    def test_non_ascii_params_survive(self):
        body = _decode(build_post_data("search", {"term": "café"}, "1.2", "3", None))
        assert body["events"][0]["params"]["term"] == "café"
        assert body["ip_override"] is None

    def test_unserializable_value_raises(self):
        with pytest.raises(SerializationError):
            build_post_data("purchase", {"value": object()}, "1.2", "3", "127.0.0.1")

    def test_nan_is_rejected(self):
        with pytest.raises(SerializationError):
            build_post_data("purchase", {"value": float("nan")}, "1.2", "3", "127.0.0.1")


class TestBuildPayload:
    """Test the payload model before encoding."""

    def test_payload_to_dict(self):
        payload = PayloadBuilder().build_payload("login", {"method": "email"}, "1.2", "3", "10.0.0.1")

        assert payload.to_dict() == {
            "client_id": "1.2",
            "ip_override": "10.0.0.1",
            "events": [{
                "name": "login",
                "params": {"method": "email", "session_id": "3", "engagement_time_msec": 100}
            }]
        }
