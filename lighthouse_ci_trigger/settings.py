"""Lighthouse CI service settings read from the environment."""

from collections.abc import Mapping

from pydantic import SecretStr

from lighthouse_ci_trigger.models.base import Model
from lighthouse_ci_trigger.models.config import Runner

DEFAULT_CI_HOST = "https://lighthouse-ci.appspot.com"

ENDPOINT_PATHS: Mapping[Runner, str] = {
    Runner.CHROME: "/run_on_chrome",
    Runner.WPT: "/run_on_wpt",
}


class ServiceSettings(Model):
    """Connection settings for the Lighthouse CI service."""

    ci_host: str = DEFAULT_CI_HOST
    api_key: SecretStr | None = None
    # API_KEY was the original variable name, LIGHTHOUSE_API_KEY replaces it
    uses_deprecated_api_key: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "ServiceSettings":
        """Build settings from environment variables.

        Empty values are treated as unset. LIGHTHOUSE_API_KEY takes precedence
        over the deprecated API_KEY.
        """
        ci_host = env.get("CI_HOST") or DEFAULT_CI_HOST
        api_key = env.get("LIGHTHOUSE_API_KEY") or env.get("API_KEY")
        return cls(
            ci_host=ci_host.rstrip("/"),
            api_key=SecretStr(api_key) if api_key else None,
            uses_deprecated_api_key=bool(env.get("API_KEY")),
        )

    def endpoint_url(self, runner: Runner) -> str:
        """Return the submission endpoint for the given runner."""
        return f"{self.ci_host}{ENDPOINT_PATHS[runner]}"
