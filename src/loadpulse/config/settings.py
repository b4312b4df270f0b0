"""Application settings and configuration."""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from loadpulse.config.constants import RunLimits, TimeDefaults

env_path = Path(__file__).resolve().parents[3] / "docker" / ".env.dev"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "loadpulse"

    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Runtime environment",
        alias="ENVIRONMENT",
    )

    host: str = Field(default="0.0.0.0", alias="HOST")  # noqa: S104
    port: int = Field(default=5000, ge=1, le=65_535, alias="PORT")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    request_timeout_s: float = Field(
        default=float(TimeDefaults.REQUEST_TIMEOUT_S),
        gt=0,
        description="Fixed timeout applied to every outbound request.",
        alias="REQUEST_TIMEOUT_S",
    )
    update_interval_ms: int = Field(
        default=TimeDefaults.UPDATE_INTERVAL_MS,
        ge=0,
        description="Minimum gap between two published updates (0 = every outcome).",
        alias="UPDATE_INTERVAL_MS",
    )
    max_actors: int = Field(
        default=RunLimits.MAX_ACTORS,
        ge=RunLimits.MIN_ACTORS,
        alias="MAX_ACTORS",
    )
    max_requests_per_actor: int = Field(
        default=RunLimits.MAX_REQUESTS_PER_ACTOR,
        ge=RunLimits.MIN_REQUESTS_PER_ACTOR,
        alias="MAX_REQUESTS_PER_ACTOR",
    )
    target_base_url: str = Field(
        default="https://www.bing.com/search",
        description="Endpoint hit by the default search target selector.",
        alias="TARGET_BASE_URL",
    )

    @property
    def update_interval_s(self) -> float:
        """Publish throttle expressed in seconds."""
        return self.update_interval_ms / 1000


settings = Settings()
