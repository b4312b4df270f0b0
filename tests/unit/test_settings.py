import pytest

from loadpulse.config.constants import RunLimits, TimeDefaults
from loadpulse.config.settings import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure that default settings are applied correctly.

    Without any environment variable the service listens on port 5000 and
    uses the fixed request timeout and the default run limits.
    """
    for name in ("PORT", "REQUEST_TIMEOUT_S", "UPDATE_INTERVAL_MS", "MAX_ACTORS"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()
    assert s.port == 5000
    assert s.request_timeout_s == TimeDefaults.REQUEST_TIMEOUT_S
    # updates are throttled out of the box
    assert s.update_interval_ms == 250
    assert s.update_interval_s == pytest.approx(0.25)
    assert s.max_actors == RunLimits.MAX_ACTORS


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Upper-case aliases are read from the environment."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("PORT", "6001")
    monkeypatch.setenv("UPDATE_INTERVAL_MS", "100")
    monkeypatch.setenv("TARGET_BASE_URL", "http://localhost:9000/q")

    s = Settings()
    assert s.environment == "test"
    assert s.port == 6001
    assert s.update_interval_s == pytest.approx(0.1)
    assert s.target_base_url == "http://localhost:9000/q"


def test_settings_keyword_arguments_override() -> None:
    """Explicit values win over defaults (field names are accepted)."""
    s = Settings(environment="staging", request_timeout_s=2.5, max_actors=4)
    assert s.environment == "staging"
    assert s.request_timeout_s == 2.5
    assert s.max_actors == 4
