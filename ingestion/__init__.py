"""News ingestion and article store package bootstrap."""

from .categories import CONCRETE_CATEGORIES, Category  # noqa: F401
from .settings import Settings, get_settings, reset_settings_cache  # noqa: F401

__all__ = [
    "CONCRETE_CATEGORIES",
    "Category",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
