"""Configuration management for validator resolution.

Supports configuration via:
1. Environment variables
2. Dependency Injection (constructor parameters)
3. Default values

Environment Variables:
    VALIDATOR_CLI_STATE_ID: State to query validators at (default: head)
    VALIDATOR_CLI_TIMEOUT_SECONDS: Overall resolution timeout (default: 30)
    VALIDATOR_CLI_STRICT_PUBLIC_KEY_LENGTH: Reject public keys that are not 48 bytes (default: true)
    VALIDATOR_CLI_REJECT_INVERTED_RANGES: Reject ranges whose start exceeds their end (default: false)
    VALIDATOR_CLI_LOG_FORMAT: Log format - 'json' or 'text' (default: json)
    VALIDATOR_CLI_LOG_LEVEL: Log level (default: INFO)
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, field: str, value, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for '{field}': {message} (got: {value})")


class ResolverSettings(BaseSettings):
    """Resolver configuration with environment variable support.

    Settings are loaded from environment variables with VALIDATOR_CLI_ prefix.
    """

    state_id: str = Field(
        default="head",
        min_length=1,
        description="State identifier passed to validator lookups (head, finalized, slot, root)"
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=3600,
        description="Upper bound on a whole resolution call, in seconds"
    )
    strict_public_key_length: bool = Field(
        default=True,
        description="Reject decoded public keys that are not exactly 48 bytes"
    )
    reject_inverted_ranges: bool = Field(
        default=False,
        description="Reject 'low-high' ranges where low > high instead of resolving nothing"
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log format: 'json' for structured, 'text' for human-readable"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = {
        "env_prefix": "VALIDATOR_CLI_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("state_id")
    @classmethod
    def validate_state_id(cls, v: str) -> str:
        """State identifiers are opaque, but must not be blank."""
        if not v.strip():
            raise ValueError("State identifier must not be blank")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        """Create settings from environment variables."""
        return cls()

    def with_overrides(
        self,
        state_id: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        strict_public_key_length: Optional[bool] = None,
        reject_inverted_ranges: Optional[bool] = None,
        log_format: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "ResolverSettings":
        """Create new settings with overridden values (DI pattern)."""
        return ResolverSettings(
            state_id=state_id if state_id is not None else self.state_id,
            timeout_seconds=(
                timeout_seconds if timeout_seconds is not None
                else self.timeout_seconds
            ),
            strict_public_key_length=(
                strict_public_key_length if strict_public_key_length is not None
                else self.strict_public_key_length
            ),
            reject_inverted_ranges=(
                reject_inverted_ranges if reject_inverted_ranges is not None
                else self.reject_inverted_ranges
            ),
            log_format=log_format or self.log_format,
            log_level=log_level or self.log_level,
        )


# Global default settings instance (can be overridden)
_settings: Optional[ResolverSettings] = None


def get_settings() -> ResolverSettings:
    """Get current settings (lazy initialization from env)."""
    global _settings
    if _settings is None:
        _settings = ResolverSettings.from_env()
    return _settings


def configure(settings: ResolverSettings) -> None:
    """Configure global settings (useful for testing or DI)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to reload from environment (useful for testing)."""
    global _settings
    _settings = None
