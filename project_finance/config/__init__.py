"""
Configuration module for the project finance tracker.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import (
    FinanceTrackerConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'FinanceTrackerConfig',
    'LoggingConfig',
    'configure_logging',
    'get_config',
    'load_config',
    'reload_config',
    'reset_logging'
]
