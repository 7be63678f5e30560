from importlib import reload

import pytest

from scribe_relay import config as config_module


@pytest.fixture
def reload_config(monkeypatch):
    """Reload settings after the test has changed the environment, then restore."""
    yield lambda: reload(config_module)
    monkeypatch.undo()
    reload(config_module)


def test_settings_from_env(monkeypatch, reload_config):
    monkeypatch.setenv("ASSEMBLYAI_API_KEY", "secret")
    monkeypatch.setenv("ASSEMBLYAI_BASE_URL", "http://mock-assemblyai:8080/v2")
    monkeypatch.setenv("ASSEMBLYAI_WEBHOOK_URL", "https://example.com/hook")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("TRANSCRIPT_REFRESH_SECONDS", "1")
    reload_config()

    settings = config_module.settings
    assert settings.ASSEMBLYAI_API_KEY == "secret"
    assert settings.ASSEMBLYAI_BASE_URL == "http://mock-assemblyai:8080/v2"
    assert settings.ASSEMBLYAI_WEBHOOK_URL == "https://example.com/hook"
    assert settings.POLL_INTERVAL_SECONDS == 0.5
    assert settings.TRANSCRIPT_REFRESH_SECONDS == 1


def test_empty_values_fall_back_to_defaults(monkeypatch, reload_config):
    monkeypatch.setenv("ASSEMBLYAI_BASE_URL", "")
    monkeypatch.setenv("ASSEMBLYAI_WEBHOOK_URL", "")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "")
    monkeypatch.setenv("TRANSCRIPT_REFRESH_SECONDS", "")
    reload_config()

    settings = config_module.settings
    assert settings.ASSEMBLYAI_BASE_URL == "https://api.assemblyai.com/v2"
    assert settings.ASSEMBLYAI_WEBHOOK_URL is None
    assert settings.POLL_INTERVAL_SECONDS == 3
    assert settings.TRANSCRIPT_REFRESH_SECONDS == 3


def test_zero_poll_timeout_means_unbounded(monkeypatch, reload_config):
    monkeypatch.setenv("POLL_TIMEOUT_SECONDS", "0")
    reload_config()
    assert config_module.settings.poll_timeout is None

    monkeypatch.setenv("POLL_TIMEOUT_SECONDS", "90")
    reload_config()
    assert config_module.settings.poll_timeout == 90
