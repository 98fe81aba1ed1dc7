import argparse
import logging
import sys
from pathlib import Path

# Import configuration management
sys.path.append(str(Path(__file__).parent.parent))
from config_manager import ConfigManager

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

_LOG = logging.getLogger("app")


def configure_proxy(flask_app: Flask, proxy_hops: int) -> None:
    """Trust X-Forwarded-* headers from ``proxy_hops`` reverse proxies.

    The visitor IP becomes ``ip_override``, so with no proxy in front
    (``proxy_hops`` 0) forwarded headers are ignored.
    """
    if proxy_hops <= 0:
        _LOG.info("No reverse proxy configured, ignoring X-Forwarded-* headers")
        return
    flask_app.wsgi_app = ProxyFix(
            flask_app.wsgi_app,
            x_for   = proxy_hops,     # X-Forwarded-For (visitor IP)
            x_proto = proxy_hops,     # X-Forwarded-Proto
            x_host  = proxy_hops)     # X-Forwarded-Host


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

config_manager = ConfigManager()
app_config = config_manager.get_app_config()
analytics_config = config_manager.get_analytics_config()

for problem in analytics_config.validate():
    _LOG.warning("Analytics configuration problem: %s", problem)

app = Flask(__name__)
configure_proxy(app, app_config.proxy_hops)

# -----------------------------------------------------------------------------
# Modules
# -----------------------------------------------------------------------------

from app.event_forwarding.factory import create_event_forwarding_module

event_forwarding_module = create_event_forwarding_module(analytics_config)
app.register_blueprint(event_forwarding_module["blueprint"])


@app.get("/actuator/health")
def actuator_health():
    """Health check endpoint for monitoring tools and cloud platforms."""
    return jsonify({
        "status": "UP",
        "service": "ga4-event-relay",
        "analytics": "configured" if analytics_config.is_configured() else "misconfigured"
    }), 200

# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="GA4 Measurement Protocol event relay")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    from measurement_service.logging_config import setup_logging
    setup_logging(app_config.debug)

    print(f"📋 Configuration loaded:")
    print(f"   - Endpoint: {analytics_config.endpoint}")
    print(f"   - Measurement ID: {analytics_config.measurement_id or '(unset)'}")
    print(f"   - Server: {app_config.host}:{app_config.port}")
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
