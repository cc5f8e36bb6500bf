# re2dfa/utils/__init__.py

from .logging_config import (
    setup_logging, get_logger, get_performance_logger, PerformanceTimer, init_default_logging
)

__all__ = [
    'setup_logging',
    'init_default_logging',
    'get_logger',
    'get_performance_logger',
    'PerformanceTimer'
]
