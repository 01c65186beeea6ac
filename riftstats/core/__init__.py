"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .logging import setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Logging
    "setup_logging",
]
