"""
Configuration service for runtime system settings.
"""
import os

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_PAGE_SIZE = 10
_MAX_PAGE_SIZE = 100
_DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_app_env() -> str:
    return os.getenv("APP_ENV", "development").strip().lower()


def is_production() -> bool:
    """Production mode hides internal error messages from API responses."""
    return get_app_env() == "production"


def get_log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


def get_default_page_size() -> int:
    env_value = os.getenv("DEFAULT_PAGE_SIZE")
    if env_value:
        try:
            return max(1, int(env_value))
        except ValueError:
            return _DEFAULT_PAGE_SIZE
    return _DEFAULT_PAGE_SIZE


def get_max_page_size() -> int:
    """Return the upper bound for shipment list page sizes."""
    env_value = os.getenv("MAX_PAGE_SIZE")
    if env_value:
        try:
            return max(1, int(env_value))
        except ValueError:
            return _MAX_PAGE_SIZE
    return _MAX_PAGE_SIZE


def get_cors_origins() -> list[str]:
    env_value = os.getenv("FRONTEND_URL")
    if not env_value:
        return _DEFAULT_CORS_ORIGINS

    values = [item.strip() for item in env_value.split(",") if item.strip()]
    return values or _DEFAULT_CORS_ORIGINS
