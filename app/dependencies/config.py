"""
FastAPI dependency exposing the application settings.
"""

from functools import lru_cache

from fastapi import Depends

from app.core.config import AppSettings, get_settings


@lru_cache()
def _settings_singleton() -> AppSettings:
    return get_settings()


def get_app_settings() -> AppSettings:
    """Settings for route handlers; tests replace it via dependency overrides."""
    return _settings_singleton()


SettingsDependency = Depends(get_app_settings)

__all__ = ["SettingsDependency", "get_app_settings"]
