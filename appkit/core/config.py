"""
Core configuration module for appkit.

This module handles all configuration settings using Pydantic Settings
with support for environment variables and a local .env file.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    APPKIT_ prefix (e.g., APPKIT_LOG_LEVEL=DEBUG).
    """

    # Application metadata
    VERSION: str = "0.1.0"
    DEBUG: bool = Field(default=False, description="Enable debug mode")

    # Logging
    LOG_LEVEL: str = Field(default="WARNING", description="Logging level")
    LOG_FORMAT: str = Field(default="text", description="Log output format (text or json)")

    # Outbound HTTP used by app clients
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, description="Request timeout for app clients in seconds")
    HTTP_MAX_REDIRECTS: int = Field(default=5, description="Maximum number of redirects app clients follow")

    # App directory layout
    APP_MODULE_FILE: str = Field(default="app.py", description="File holding the app descriptor")
    APP_ATTRIBUTE: str = Field(default="app", description="Module attribute the descriptor is exported as")
    METADATA_FILE: str = Field(default="metadata.json", description="Metadata document next to the app module")

    # Contract enumerations
    ALLOWED_CATEGORIES: List[str] = Field(
        default=["messaging", "e-commerce", "cms", "custom-tool"],
        description="Categories an app may declare"
    )
    ALLOWED_FEATURES: List[str] = Field(
        default=["toolkit", "channel"],
        description="Features an app may declare"
    )

    model_config = {
        "env_prefix": "APPKIT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    def use_json_logs(self) -> bool:
        """Check if logs should be emitted as JSON."""
        return self.LOG_FORMAT.lower() == "json"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching.

    The @lru_cache decorator ensures that this function returns the same
    Settings instance for the lifetime of the process.
    """
    return Settings()
