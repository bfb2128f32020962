"""
Configuration package for the SmartMess service.

Contains environment settings and logging configuration.
"""

from smartmess.config.logging import configure_logging, get_logger
from smartmess.config.settings import Settings, get_settings

__all__ = ['Settings', 'get_settings', 'configure_logging', 'get_logger']
