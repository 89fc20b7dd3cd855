"""
TempoGraph utilities: settings and logging setup.
"""

from .config import Settings, SETTINGS
from .logging_config import setup_logging

__all__ = [
    'Settings',
    'SETTINGS',
    'setup_logging',
]
