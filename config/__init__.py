"""
Configuration package for PageFlow.

constants      - fixed numbers of the pipeline (page sizes, unit factors, defaults)
settings       - runtime settings overridable through PAGEFLOW_* variables
logging_config - shared console + rotating file logging
"""
from .constants import *
from .logging_config import setup_logger, get_logger, logger
from .settings import Settings, settings

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    'logger',
    # Settings
    'Settings',
    'settings',
    # Constants (all exported via *)
]
