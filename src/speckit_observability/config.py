"""Runtime settings for the observability core.

Values come from ``SPECKIT_OBS_*`` environment variables, e.g.
``SPECKIT_OBS_ENVIRONMENT=development`` or ``SPECKIT_OBS_LOG_LEVEL=warn``.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from speckit_observability.core.models import LogLevel

ENVIRONMENTS = frozenset({"development", "staging", "production"})


class ObservabilitySettings(BaseSettings):
    """Startup configuration for the process-wide logger and monitor."""

    model_config = SettingsConfigDict(
        env_prefix="SPECKIT_OBS_", case_sensitive=False, extra="ignore"
    )

    environment: str = Field("production", description="development, staging or production")
    log_level: LogLevel | None = Field(None, description="Overrides the environment default")
    max_logs: int = Field(1000, gt=0)
    slow_threshold_ms: float = Field(1000.0, gt=0)
    console_logger_name: str = Field("speckit_observability.console")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {sorted(ENVIRONMENTS)}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: object) -> LogLevel | None:
        if v is None or v == "":
            return None
        return LogLevel.parse(v)  # type: ignore[arg-type]

    def is_development(self) -> bool:
        return self.environment == "development"

    def default_log_level(self) -> LogLevel:
        """Explicit override if set, else DEBUG in development and INFO otherwise."""
        if self.log_level is not None:
            return self.log_level
        return LogLevel.DEBUG if self.is_development() else LogLevel.INFO


@lru_cache
def get_settings() -> ObservabilitySettings:
    """Get cached settings instance."""
    return ObservabilitySettings()
