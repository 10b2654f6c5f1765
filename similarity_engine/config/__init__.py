"""Configuration package for similarity_engine."""

from similarity_engine.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
