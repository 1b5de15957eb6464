"""Configuration package."""

from .settings import (
    AuditSettings,
    ContextSettings,
    EngineSettings,
    GovernanceSettings,
    ObservabilitySettings,
    Settings,
    get_settings,
)

__all__ = [
    "AuditSettings",
    "ContextSettings",
    "EngineSettings",
    "GovernanceSettings",
    "ObservabilitySettings",
    "Settings",
    "get_settings",
]
