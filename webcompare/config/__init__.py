"""Configuration package."""

from .settings import (
    BrowserSettings,
    EngineSettings,
    LoggingSettings,
    Settings,
    settings,
)

__all__ = [
    "BrowserSettings",
    "EngineSettings",
    "LoggingSettings",
    "Settings",
    "settings",
]
