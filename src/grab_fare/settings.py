from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FareSettings(BaseSettings):
    """Global pricing constants applied to every vehicle class."""

    peak_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        le=5.0,
        description="Surcharge factor applied to the distance cost during peak hours",
    )
    minimum_fare: float = Field(default=5.00, ge=0.0)
    currency: str = "RM"

    model_config = SettingsConfigDict(env_prefix="FARE_")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Currency label must not be blank")
        return v


class ShellSettings(BaseSettings):
    """Sanity ceilings for interactive trip input."""

    max_distance_km: float = Field(default=200.0, gt=0.0)
    max_duration_min: float = Field(default=1000.0, gt=0.0)

    model_config = SettingsConfigDict(env_prefix="SHELL_")


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    fare: FareSettings = Field(default_factory=FareSettings)
    shell: ShellSettings = Field(default_factory=ShellSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Prefixed so the nested fields never read unrelated variables such as SHELL.
    model_config = SettingsConfigDict(
        env_prefix="GRAB_FARE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
