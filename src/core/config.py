"""Configuration management for the household rule engine."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.pantry import PantryNotificationOptions


class Settings(BaseSettings):
    """Caller-side settings loaded from environment variables.

    The engine functions never read these directly; jobs that invoke the
    engine build explicit options from them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment reported to Logfire")

    # Pantry Notification Configuration
    pantry_low_stock_threshold: float = Field(
        default=1, description="Quantity at or below which a pantry item counts as low stock"
    )
    pantry_near_expiry_days: float = Field(
        default=3, description="Lookahead window (in days) for near-expiry alerts"
    )
    pantry_notification_cooldown_hours: float = Field(
        default=36, description="Minimum hours between two notifications of the same kind for one item"
    )

    def pantry_options(self) -> PantryNotificationOptions:
        """Build evaluator options from the configured pantry values.

        Raises:
            InvalidArgumentError: If any configured value is negative
        """
        return PantryNotificationOptions.build(
            low_stock_threshold=self.pantry_low_stock_threshold,
            near_expiry_days=self.pantry_near_expiry_days,
            cooldown_hours=self.pantry_notification_cooldown_hours,
        )


# Application Constants
class Constants:
    """Application-wide constants."""

    HOURS_PER_DAY: int = 24
    DAYS_PER_WEEK: int = 7

    # Notification metadata understood by the dispatch layer
    NOTIFICATION_CATEGORY_PANTRY: str = "PANTRY"
    NOTIFICATION_LEVEL_MEDIUM: str = "MEDIUM"

    SERVICE_NAME: str = "hearth-rules"
    SERVICE_VERSION: str = "0.1.0"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
