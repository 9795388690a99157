"""Configuration components for the Catpoint security system."""

from .defaults import (
    DEFAULT_CONFIG,
    SYSTEM_CONSTANTS,
    PREFERENCE_KEYS,
    DEFAULT_PATHS,
    CASCADE_SETTINGS
)

__all__ = [
    'DEFAULT_CONFIG',
    'SYSTEM_CONSTANTS',
    'PREFERENCE_KEYS',
    'DEFAULT_PATHS',
    'CASCADE_SETTINGS'
]
