"""Tests for settings module."""

from lighthouse_ci_trigger.models.config import Runner
from lighthouse_ci_trigger.settings import DEFAULT_CI_HOST, ServiceSettings


class TestFromEnv:
    """Tests for ServiceSettings.from_env."""

    def test_defaults(self) -> None:
        """Uses the hosted service and no API key by default."""
        settings = ServiceSettings.from_env({})

        assert settings.ci_host == DEFAULT_CI_HOST
        assert settings.api_key is None
        assert settings.uses_deprecated_api_key is False

    def test_reads_ci_host(self) -> None:
        """CI_HOST overrides the endpoint base without trailing slash."""
        settings = ServiceSettings.from_env({"CI_HOST": "http://localhost:8080/"})

        assert settings.ci_host == "http://localhost:8080"

    def test_reads_lighthouse_api_key(self) -> None:
        """LIGHTHOUSE_API_KEY is the preferred key variable."""
        settings = ServiceSettings.from_env({"LIGHTHOUSE_API_KEY": "secret"})

        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "secret"
        assert settings.uses_deprecated_api_key is False

    def test_accepts_deprecated_api_key(self) -> None:
        """API_KEY is still accepted but flagged as deprecated."""
        settings = ServiceSettings.from_env({"API_KEY": "legacy"})

        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "legacy"
        assert settings.uses_deprecated_api_key is True

    def test_prefers_lighthouse_api_key(self) -> None:
        """LIGHTHOUSE_API_KEY wins over API_KEY."""
        settings = ServiceSettings.from_env(
            {"LIGHTHOUSE_API_KEY": "new", "API_KEY": "legacy"}
        )

        assert settings.api_key is not None
        assert settings.api_key.get_secret_value() == "new"
        assert settings.uses_deprecated_api_key is True

    def test_empty_values_are_unset(self) -> None:
        """Empty variables fall back to defaults."""
        settings = ServiceSettings.from_env(
            {"CI_HOST": "", "LIGHTHOUSE_API_KEY": "", "API_KEY": ""}
        )

        assert settings.ci_host == DEFAULT_CI_HOST
        assert settings.api_key is None
        assert settings.uses_deprecated_api_key is False


def test_endpoint_url() -> None:
    """Endpoint path depends on the runner."""
    settings = ServiceSettings(ci_host="http://ci.test")

    assert settings.endpoint_url(Runner.CHROME) == "http://ci.test/run_on_chrome"
    assert settings.endpoint_url(Runner.WPT) == "http://ci.test/run_on_wpt"
