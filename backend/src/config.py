"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from typing import Optional
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from domain.checkout.models import is_known_timezone


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.

    Environment Variables:
        DEFAULT_SHIPPING_ID: Store id marking a ship-to-address shipment
        LIMITED_STOCK_THRESHOLD: Store quantity always treated as out of stock
        IGNORE_MAX_QUANTITY: Skip per-product maximum order quantities
        INVENTORY_STRATEGY: STORE_LOOKUP or BASKET_VALIDATOR
        INVENTORY_SERVICE_URL: Store inventory lookup endpoint
        INVENTORY_LOOKUP_TIMEOUT_SECONDS: Deadline for the inventory lookup
        CLASS_CUTOFF_HOURS: Enrollment cutoff before a scheduled class starts
        CLASS_DATE_FORMAT: strptime format of scheduled class dates
        CLASS_TIMEZONE: Timezone class dates are expressed in
        DEBUG: Enable debug mode (default False)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    # Checkout rules
    DEFAULT_SHIPPING_ID: str = "me"
    LIMITED_STOCK_THRESHOLD: int = 1
    IGNORE_MAX_QUANTITY: bool = False
    CLASS_CUTOFF_HOURS: int = 48
    CLASS_DATE_FORMAT: str = "%m/%d/%Y %I:%M %p"
    CLASS_TIMEZONE: str = "UTC"

    # Store inventory
    INVENTORY_STRATEGY: str = "STORE_LOOKUP"
    INVENTORY_SERVICE_URL: Optional[str] = "http://localhost:8081/inventory/stores"
    INVENTORY_LOOKUP_TIMEOUT_SECONDS: float = 5.0

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    ENVIRONMENT: str = "development"

    @field_validator("CLASS_TIMEZONE")
    @classmethod
    def check_class_timezone(cls, value: str) -> str:
        # Fail at startup instead of on the first class line item
        if not is_known_timezone(value):
            raise ValueError(f"Unknown timezone: '{value}'")
        return value

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
