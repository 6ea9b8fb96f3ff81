"""
Record Search Configuration

Environment-driven settings for the search engine and its HTTP surface.
"""

import os
from enum import Enum


class Environment(str, Enum):
    """Application environment"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TEST = "test"


def _get_environment() -> Environment:
    """Get and validate ENVIRONMENT variable."""
    env_value = os.getenv("ENVIRONMENT")
    if env_value is None:
        raise RuntimeError(
            "ENVIRONMENT is required. Set to 'production', 'development', or 'test'."
        )
    try:
        return Environment(env_value.lower())
    except ValueError:
        raise RuntimeError(
            f"Invalid ENVIRONMENT value: '{env_value}'. "
            "Must be 'production', 'development', or 'test'."
        )


class Settings:
    """Search service configuration"""

    # Environment
    ENVIRONMENT: Environment = _get_environment()

    # Search Settings
    SEARCH_MIN_QUERY_LEN: int = int(os.getenv("SEARCH_MIN_QUERY_LEN", "2"))
    SEARCH_MAX_QUERY_LEN: int = int(os.getenv("SEARCH_MAX_QUERY_LEN", "200"))
    SEARCH_SNIPPET_LENGTH: int = int(os.getenv("SEARCH_SNIPPET_LENGTH", "150"))
    SEARCH_HIGHLIGHT_TAG: str = os.getenv("SEARCH_HIGHLIGHT_TAG", "mark")

    # Pagination
    SEARCH_DEFAULT_PER_PAGE: int = int(os.getenv("SEARCH_DEFAULT_PER_PAGE", "20"))
    SEARCH_MAX_PER_PAGE: int = int(os.getenv("SEARCH_MAX_PER_PAGE", "100"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Security
    ALLOWED_HOSTS: list[str] = os.getenv(
        "ALLOWED_HOSTS", "localhost,127.0.0.1,testclient,testserver"
    ).split(",")
    CORS_ORIGINS: list[str] = (
        os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []
    )

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"


settings = Settings()
