# =============================================================================
# FOREX JOURNAL FEEDS - CONFIG LOADER
# =============================================================================
#
# Reads feed settings from config/feeds.yaml, with environment overrides
# loaded from the project .env file.
#
# USAGE:
#   from shared.config_loader import get_feeds_config
#
#   config = get_feeds_config()
#   print(config.calendar.ttl_ms, config.signals.max_calls_per_day)
#
# FAILURE MODES:
# - Missing YAML file     -> built-in defaults, logged as a warning
# - Unparsable YAML       -> ConfigurationError
# - Invalid option values -> ConfigurationError
#
# =============================================================================

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from acquisition.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Base directory
BASE_DIR = Path(__file__).parent.parent
CONFIG_PATH = BASE_DIR / "config" / "feeds.yaml"
ENV_PATH = BASE_DIR / ".env"

# Environment overrides
CALENDAR_BASE_URL_ENV_VAR: str = "CALENDAR_API_BASE_URL"
CALENDAR_UPSTREAM_ENV_VAR: str = "CALENDAR_UPSTREAM"
CALENDAR_MAX_CALLS_ENV_VAR: str = "CALENDAR_MAX_CALLS_PER_DAY"
SIGNALS_MAX_CALLS_ENV_VAR: str = "SIGNALS_MAX_CALLS_PER_DAY"

UPSTREAM_KINDS = ("http", "demo")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CalendarSettings:
    """Economic calendar feed settings."""
    ttl_ms: int = 5 * 60 * 1000
    max_calls_per_day: int = 100
    upstream: str = "demo"
    base_url: str = "http://localhost:3000"
    endpoint: str = "/api/forex-factory"
    timeout_seconds: float = 10.0


@dataclass
class SignalSettings:
    """Trading signal feed settings."""
    ttl_ms: int = 10 * 60 * 1000
    max_calls_per_day: int = 200


def _to_int(value: Any, option: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{option} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{option} must be an integer, got {value!r}")


def _to_float(value: Any, option: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{option} must be a number, got {value!r}")


class FeedsConfig:
    """
    Feed configuration manager.

    READ-ONLY access: changes require editing config/feeds.yaml or .env.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        env_path: Optional[Path] = None,
    ):
        """
        Initialize feed configuration.

        Args:
            config_path: Path to feeds.yaml. Defaults to config/feeds.yaml
            env_path: Path to .env. Defaults to the project .env
        """
        self.config_path = Path(config_path) if config_path else CONFIG_PATH
        self.env_path = Path(env_path) if env_path else ENV_PATH
        self._raw: Dict[str, Any] = {}
        self.calendar = CalendarSettings()
        self.signals = SignalSettings()
        self._load_config()

    def _load_config(self) -> None:
        if self.env_path.exists():
            load_dotenv(self.env_path, override=False)

        self._raw = self._read_yaml()

        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"global.log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

        calendar_raw = self._section("calendar")
        signals_raw = self._section("signals")

        self.calendar = self._build_calendar(calendar_raw)
        self.signals = self._build_signals(signals_raw)

        logger.info(
            f"Loaded feed config: calendar(ttl_ms={self.calendar.ttl_ms}, "
            f"max_calls={self.calendar.max_calls_per_day}, upstream={self.calendar.upstream}) "
            f"signals(ttl_ms={self.signals.ttl_ms}, max_calls={self.signals.max_calls_per_day})"
        )

    def _read_yaml(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}, using defaults")
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.config_path} must contain a mapping, got {type(data).__name__}"
            )
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._raw.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section '{name}' must be a mapping")

        known = {f.name for f in fields(CalendarSettings if name == "calendar" else SignalSettings)}
        unknown = set(section) - known
        if unknown:
            logger.warning(f"Ignoring unknown {name} options: {', '.join(sorted(unknown))}")
        return {k: v for k, v in section.items() if k in known}

    def _build_calendar(self, raw: Dict[str, Any]) -> CalendarSettings:
        defaults = CalendarSettings()

        max_calls = os.getenv(CALENDAR_MAX_CALLS_ENV_VAR) or raw.get("max_calls_per_day", defaults.max_calls_per_day)
        upstream = os.getenv(CALENDAR_UPSTREAM_ENV_VAR) or raw.get("upstream", defaults.upstream)
        base_url = os.getenv(CALENDAR_BASE_URL_ENV_VAR) or raw.get("base_url", defaults.base_url)

        settings = CalendarSettings(
            ttl_ms=_to_int(raw.get("ttl_ms", defaults.ttl_ms), "calendar.ttl_ms"),
            max_calls_per_day=_to_int(max_calls, "calendar.max_calls_per_day"),
            upstream=str(upstream).strip().lower(),
            base_url=str(base_url).rstrip("/"),
            endpoint=str(raw.get("endpoint", defaults.endpoint)),
            timeout_seconds=_to_float(raw.get("timeout_seconds", defaults.timeout_seconds), "calendar.timeout_seconds"),
        )

        if settings.upstream not in UPSTREAM_KINDS:
            raise ConfigurationError(
                f"calendar.upstream must be one of {', '.join(UPSTREAM_KINDS)}, got {settings.upstream!r}"
            )
        if settings.timeout_seconds <= 0:
            raise ConfigurationError(
                f"calendar.timeout_seconds must be positive, got {settings.timeout_seconds}"
            )
        if settings.upstream == "http" and not settings.base_url:
            raise ConfigurationError("calendar.base_url is required for the http upstream")
        return settings

    def _build_signals(self, raw: Dict[str, Any]) -> SignalSettings:
        defaults = SignalSettings()
        max_calls = os.getenv(SIGNALS_MAX_CALLS_ENV_VAR) or raw.get("max_calls_per_day", defaults.max_calls_per_day)
        return SignalSettings(
            ttl_ms=_to_int(raw.get("ttl_ms", defaults.ttl_ms), "signals.ttl_ms"),
            max_calls_per_day=_to_int(max_calls, "signals.max_calls_per_day"),
        )

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @property
    def log_level(self) -> str:
        """Get configured log level."""
        global_config = self._raw.get("global") or {}
        if not isinstance(global_config, dict):
            raise ConfigurationError("Section 'global' must be a mapping")
        return str(global_config.get("log_level", "INFO")).upper()


# =============================================================================
# MODULE-LEVEL CONFIG
# =============================================================================

_feeds_config: Optional[FeedsConfig] = None


def get_feeds_config() -> FeedsConfig:
    """Get the global feed configuration instance."""
    global _feeds_config
    if _feeds_config is None:
        _feeds_config = FeedsConfig()
    return _feeds_config
