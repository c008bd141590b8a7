"""
UNIT TESTS - FEED CONFIG LOADER
================================
Tests fuer shared/config_loader.py: YAML, .env overrides, validation.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from acquisition.exceptions import ConfigurationError
from shared.config_loader import CalendarSettings, FeedsConfig, SignalSettings, get_feeds_config


VALID_CONFIG_YAML = """
global:
  log_level: debug

calendar:
  ttl_ms: 60000
  max_calls_per_day: 25
  upstream: http
  base_url: "https://journal.example.com/"
  endpoint: "/api/forex-factory"
  timeout_seconds: 5

signals:
  ttl_ms: 120000
  max_calls_per_day: 40
"""


@pytest.fixture
def write_config(tmp_path):
    def _write(content: str) -> Path:
        path = tmp_path / "feeds.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def no_env(tmp_path):
    return tmp_path / "missing.env"


class TestFeedsConfigLoading:

    def test_valid_file(self, write_config, no_env):
        config = FeedsConfig(config_path=write_config(VALID_CONFIG_YAML), env_path=no_env)

        assert config.calendar.ttl_ms == 60000
        assert config.calendar.max_calls_per_day == 25
        assert config.calendar.upstream == "http"
        assert config.calendar.base_url == "https://journal.example.com"
        assert config.calendar.timeout_seconds == 5.0
        assert config.signals.ttl_ms == 120000
        assert config.signals.max_calls_per_day == 40
        assert config.log_level == "DEBUG"

    def test_missing_file_uses_defaults(self, tmp_path, no_env):
        config = FeedsConfig(config_path=tmp_path / "nope.yaml", env_path=no_env)

        assert config.calendar == CalendarSettings()
        assert config.signals == SignalSettings()
        assert config.calendar.ttl_ms == 300_000
        assert config.signals.ttl_ms == 600_000

    def test_partial_file_fills_defaults(self, write_config, no_env):
        config = FeedsConfig(config_path=write_config("signals:\n  max_calls_per_day: 7\n"), env_path=no_env)

        assert config.signals.max_calls_per_day == 7
        assert config.signals.ttl_ms == SignalSettings().ttl_ms
        assert config.calendar == CalendarSettings()

    def test_unknown_options_ignored(self, write_config, no_env):
        config = FeedsConfig(
            config_path=write_config("calendar:\n  ttl_ms: 1000\n  colour: blue\n"),
            env_path=no_env,
        )
        assert config.calendar.ttl_ms == 1000

    def test_reload_picks_up_changes(self, write_config, no_env):
        path = write_config("calendar:\n  max_calls_per_day: 3\n")
        config = FeedsConfig(config_path=path, env_path=no_env)
        path.write_text("calendar:\n  max_calls_per_day: 9\n", encoding="utf-8")

        config.reload()

        assert config.calendar.max_calls_per_day == 9


class TestFeedsConfigErrors:

    def test_unknown_log_level(self, write_config, no_env):
        with pytest.raises(ConfigurationError) as exc_info:
            FeedsConfig(config_path=write_config("global:\n  log_level: chatty\n"), env_path=no_env)
        assert "global.log_level" in str(exc_info.value)

    def test_unparsable_yaml(self, write_config, no_env):
        with pytest.raises(ConfigurationError) as exc_info:
            FeedsConfig(config_path=write_config("calendar: [unclosed\n"), env_path=no_env)
        assert "Failed to parse" in str(exc_info.value)

    def test_top_level_must_be_mapping(self, write_config, no_env):
        with pytest.raises(ConfigurationError):
            FeedsConfig(config_path=write_config("- a\n- b\n"), env_path=no_env)

    def test_non_integer_quota(self, write_config, no_env):
        with pytest.raises(ConfigurationError) as exc_info:
            FeedsConfig(config_path=write_config("signals:\n  max_calls_per_day: lots\n"), env_path=no_env)
        assert "signals.max_calls_per_day" in str(exc_info.value)

    def test_unknown_upstream(self, write_config, no_env):
        with pytest.raises(ConfigurationError) as exc_info:
            FeedsConfig(config_path=write_config("calendar:\n  upstream: ftp\n"), env_path=no_env)
        assert "calendar.upstream" in str(exc_info.value)

    def test_non_positive_timeout(self, write_config, no_env):
        with pytest.raises(ConfigurationError):
            FeedsConfig(config_path=write_config("calendar:\n  timeout_seconds: 0\n"), env_path=no_env)


class TestEnvironmentOverrides:

    def test_env_vars_override_yaml(self, write_config, no_env, monkeypatch):
        monkeypatch.setenv("CALENDAR_API_BASE_URL", "http://10.0.0.5:3000")
        monkeypatch.setenv("CALENDAR_MAX_CALLS_PER_DAY", "12")
        monkeypatch.setenv("SIGNALS_MAX_CALLS_PER_DAY", "3")

        config = FeedsConfig(config_path=write_config(VALID_CONFIG_YAML), env_path=no_env)

        assert config.calendar.base_url == "http://10.0.0.5:3000"
        assert config.calendar.max_calls_per_day == 12
        assert config.signals.max_calls_per_day == 3

    def test_dotenv_file_loaded(self, write_config, tmp_path, monkeypatch):
        # Register the variable with monkeypatch so the value dotenv sets is undone
        monkeypatch.setenv("CALENDAR_UPSTREAM", "unset")
        monkeypatch.delenv("CALENDAR_UPSTREAM")

        env_file = tmp_path / ".env"
        env_file.write_text("CALENDAR_UPSTREAM=http\n", encoding="utf-8")

        config = FeedsConfig(config_path=write_config("calendar:\n  upstream: demo\n"), env_path=env_file)

        assert config.calendar.upstream == "http"


class TestGlobalConfig:

    def test_singleton(self):
        assert get_feeds_config() is get_feeds_config()
