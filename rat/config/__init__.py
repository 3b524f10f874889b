"""
Configuration Module

Centralized configuration management for the RAT server.
Handles settings and credentials loaded from the environment.
"""

from rat.config.settings import (
    AnthropicSettings,
    ContextSettings,
    LoggingSettings,
    OpenRouterSettings,
    ReasoningSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AnthropicSettings",
    "ContextSettings",
    "LoggingSettings",
    "OpenRouterSettings",
    "ReasoningSettings",
    "Settings",
    "get_settings",
]
