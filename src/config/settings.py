"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.entities.inventory import DEFAULT_GST_RATE, DEFAULT_REORDER_LEVEL
from src.core.exceptions import ConfigurationError


class InventorySettings(BaseSettings):
    """Inventory ledger configuration."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    default_reorder_level: int = Field(default=DEFAULT_REORDER_LEVEL, ge=0)
    default_gst_rate: float = Field(default=DEFAULT_GST_RATE, ge=0, le=100)

    # Window used by the "expiring soon" dashboard figure
    expiring_soon_days: int = Field(default=90, ge=0)


class OrderSettings(BaseSettings):
    """Order lifecycle configuration."""

    model_config = SettingsConfigDict(env_prefix="ORDER_")

    id_prefix: str = "ORD"
    amount_precision: int = Field(default=2, ge=0, le=6)


class QueueSettings(BaseSettings):
    """Patient queue configuration."""

    model_config = SettingsConfigDict(env_prefix="QUEUE_")

    id_prefix: str = "Q"

    # Hour of day (0-23) at which token numbering restarts
    day_boundary_hour: int = 0

    @field_validator("day_boundary_hour")
    @classmethod
    def check_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError("day_boundary_hour must be between 0 and 23")
        return v


class StatsSettings(BaseSettings):
    """Dashboard statistics configuration."""

    model_config = SettingsConfigDict(env_prefix="STATS_")

    cache_enabled: bool = True

    # Upper bound on memoized figures between writes
    cache_max_entries: int = Field(default=64, ge=1)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PharmaDesk Engine"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    orders: OrderSettings = Field(default_factory=OrderSettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)
    stats: StatsSettings = Field(default_factory=StatsSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create global settings instance.

    Raises:
        ConfigurationError: an environment variable holds an invalid value.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except PydanticValidationError as e:
            errors = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            raise ConfigurationError(
                f"Invalid settings: {e.error_count()} error(s)", errors=errors
            ) from e
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
