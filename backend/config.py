from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clock import DEFAULT_TIMEZONE, get_timezone
from errors import ConfigurationError
from policies import DEFAULT_PROFILE, NormalizationPolicy, get_policy

PLACEHOLDER_API_KEY = "your-api-key-here"
DEFAULT_MODEL = "claude-sonnet-4-5"


class Settings(BaseSettings):
    """Process-wide configuration, built once at start-up and never mutated.

    Values come from CLARH_* environment variables (and .env); the API key
    keeps the provider's usual ANTHROPIC_API_KEY name.
    """

    anthropic_api_key: str = Field("", validation_alias="ANTHROPIC_API_KEY", validate_default=True)
    model: str = DEFAULT_MODEL
    temperature: float = 0.1
    max_tokens: int = 512
    timeout: float = 30.0  # seconds, per completion call
    timezone: str = DEFAULT_TIMEZONE
    profile: str = DEFAULT_PROFILE
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CLARH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("anthropic_api_key")
    @classmethod
    def validate_api_key(cls, v):
        v = v.strip()
        if not v or v == PLACEHOLDER_API_KEY:
            raise ValueError("ANTHROPIC_API_KEY is not configured")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        try:
            get_timezone(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v):
        try:
            return get_policy(v).name
        except ConfigurationError as e:
            raise ValueError(str(e)) from e

    @property
    def policy(self) -> NormalizationPolicy:
        return get_policy(self.profile)


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Build settings, turning validation failures into ConfigurationError."""
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
