"""
Configuration module for the layout instruction stream.
"""
from .constants import *
from .logging_config import setup_logger
from .settings import Settings, settings

__all__ = [
    # Logging
    'setup_logger',
    # Settings
    'Settings',
    'settings',
    # Constants (all exported via *)
]
