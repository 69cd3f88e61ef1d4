"""Configuration management for the Intune tuning core.

Loads and validates environment variables using Pydantic settings.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IntuneConfig(BaseSettings):
    """Intune configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INTUNE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["development", "production", "test"] = Field(default="development")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    # Pitch reference
    concert_a_hz: float = Field(default=440.0, ge=400.0, le=480.0)
    octave_margin_hz: float = Field(default=8.0, ge=0.0, le=32.0)

    # Starting intonation
    default_intonation: str = Field(default="diatonic")
    default_key: str = Field(default="C")

    # Modulation to the 2nd degree of a minor key has no sound rule
    allow_suspect_modulations: bool = Field(default=False)

    # Lookup latency and counters
    metrics_enabled: bool = Field(default=True)

    @field_validator("default_key")
    @classmethod
    def validate_default_key(cls, v: str) -> str:
        """Validate that the default key name parses and is supported."""
        # Local import: key_table pulls in the note model
        from tuning.exceptions import IntuneError
        from tuning.key_table import parse_key_name

        try:
            parse_key_name(v)
        except IntuneError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("default_intonation")
    @classmethod
    def validate_default_intonation(cls, v: str) -> str:
        """Validate that the default intonation name is non-empty."""
        if not v.strip():
            raise ValueError("default_intonation must not be empty")
        return v.strip().lower()

    @property
    def middle_c_hz(self) -> float:
        """Just middle C (a major sixth below concert A)."""
        return self.concert_a_hz * 3.0 / 5.0


# Singleton configuration instance
_config: IntuneConfig | None = None


def get_config() -> IntuneConfig:
    """Get the global configuration instance.

    Returns:
        IntuneConfig: Configuration singleton
    """
    global _config
    if _config is None:
        _config = IntuneConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
