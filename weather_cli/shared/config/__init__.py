"""Shared configuration"""
from .settings import Settings
from .logger_config import get_logger, logger, resolve_log_level, set_log_level

__all__ = ['Settings', 'get_logger', 'logger', 'set_log_level', 'resolve_log_level']
