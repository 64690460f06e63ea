"""Application settings for hoops-live."""

import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hoops_live.runtime_config import DEFAULT_BASE_URL, DEFAULT_SEASON, current_runtime_config

# Build-time name first, then the runtime names, then the prefixed one.
API_KEY_ENV_NAMES: tuple[str, ...] = (
    "VITE_BASKETBALL_API_KEY",
    "BASKETBALL_API_KEY",
    "REACT_APP_BASKETBALL_API_KEY",
    "HOOPS_BASKETBALL_API_KEY",
)


def resolve_api_key(fallback_key: str = "") -> str:
    """Return the first non-empty credential from the environment, else the fallback."""
    for name in API_KEY_ENV_NAMES:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return fallback_key.strip()


class Settings(BaseSettings):
    """Runtime settings for external service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOOPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    basketball_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(*API_KEY_ENV_NAMES),
    )
    basketball_api_base_url: str = DEFAULT_BASE_URL
    basketball_api_timeout_s: float = 10.0
    basketball_api_season: str = DEFAULT_SEASON
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "HOOPS_OPENAI_API_KEY"),
    )
    openai_model: str = "gpt-5-mini"
    openai_timeout_s: float = 60.0
    polling_interval_s: float = 60.0
    state_dir: str = "data/state"

    @property
    def has_api_key(self) -> bool:
        return bool(self.basketball_api_key.strip())

    @classmethod
    def from_runtime(cls) -> "Settings":
        """Construct settings from runtime config + direct secret env fallback."""
        runtime = current_runtime_config()
        direct_openai_key = (
            os.environ.get("OPENAI_API_KEY", "").strip()
            or os.environ.get("HOOPS_OPENAI_API_KEY", "").strip()
        )
        return cls(
            basketball_api_key=resolve_api_key(runtime.basketball_api_fallback_key),
            basketball_api_base_url=runtime.basketball_api_base_url,
            basketball_api_timeout_s=runtime.basketball_api_timeout_s,
            basketball_api_season=runtime.basketball_api_season,
            openai_api_key=direct_openai_key,
            openai_model=runtime.openai_model,
            openai_timeout_s=runtime.openai_timeout_s,
            polling_interval_s=runtime.polling_interval_s,
            state_dir=str(runtime.state_dir),
        )
