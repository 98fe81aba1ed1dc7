"""
Configuration management for the GA4 event relay.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass


DEFAULT_COLLECT_ENDPOINT = "https://region1.google-analytics.com/mp/collect"
DEFAULT_TIMEOUT = 5.0


@dataclass
class AnalyticsConfig:
    """Measurement Protocol configuration settings."""
    endpoint: str
    api_secret: str
    measurement_id: str
    engagement_time_msec: int = 100
    timeout: float = DEFAULT_TIMEOUT

    def is_configured(self) -> bool:
        """Whether both credentials needed by the collector are present."""
        return bool(self.api_secret) and bool(self.measurement_id)

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)."""
        problems = []
        if not self.api_secret:
            problems.append("missing_api_secret")
        if not self.measurement_id:
            problems.append("missing_measurement_id")
        elif not self.measurement_id.startswith("G-"):
            problems.append("invalid_measurement_id_format")
        if self.timeout <= 0:
            problems.append("invalid_timeout")
        return problems


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool
    proxy_hops: int = 1


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "analytics_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "analytics": {
                "endpoint": DEFAULT_COLLECT_ENDPOINT,
                "api_secret": "",
                "measurement_id": "",
                "engagement_time_msec": 100,
                "timeout": DEFAULT_TIMEOUT
            },
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False,
                "proxy_hops": 1
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Analytics settings
        if os.getenv("GA4_ENDPOINT"):
            self._config["analytics"]["endpoint"] = os.getenv("GA4_ENDPOINT")

        if os.getenv("GA4_API_SECRET"):
            self._config["analytics"]["api_secret"] = os.getenv("GA4_API_SECRET")

        if os.getenv("GA4_MEASUREMENT_ID"):
            self._config["analytics"]["measurement_id"] = os.getenv("GA4_MEASUREMENT_ID")

        if os.getenv("GA4_ENGAGEMENT_TIME_MSEC"):
            self._config["analytics"]["engagement_time_msec"] = int(os.getenv("GA4_ENGAGEMENT_TIME_MSEC"))

        if os.getenv("GA4_TIMEOUT"):
            self._config["analytics"]["timeout"] = float(os.getenv("GA4_TIMEOUT"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("APP_PROXY_HOPS"):
            self._config["app"]["proxy_hops"] = int(os.getenv("APP_PROXY_HOPS"))

    def get_analytics_config(self) -> AnalyticsConfig:
        """Get Measurement Protocol configuration."""
        analytics_config = self._config["analytics"]
        timeout = float(analytics_config["timeout"])
        if timeout <= 0:
            # requests refuses non-positive timeouts
            timeout = DEFAULT_TIMEOUT
        return AnalyticsConfig(
            endpoint=analytics_config["endpoint"],
            api_secret=analytics_config["api_secret"],
            measurement_id=analytics_config["measurement_id"],
            engagement_time_msec=int(analytics_config["engagement_time_msec"]),
            timeout=timeout
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            proxy_hops=int(app_config.get("proxy_hops", 1))
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_analytics_config() -> AnalyticsConfig:
    """Get Measurement Protocol configuration."""
    return config_manager.get_analytics_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
