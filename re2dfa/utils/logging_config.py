# re2dfa/utils/logging_config.py

import logging
import logging.config
import os
import time
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "re2dfa"
PERFORMANCE_LOGGER = "re2dfa.performance"

FORMATTERS = {
    'detailed': {
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        'datefmt': '%Y-%m-%d %H:%M:%S'
    },
    'simple': {
        'format': '%(levelname)s - %(name)s - %(message)s'
    },
    'performance': {
        'format': '%(asctime)s - PERF - %(name)s - %(message)s',
        'datefmt': '%Y-%m-%d %H:%M:%S'
    }
}


def performance_log_path(log_file: str) -> str:
    """Timing log written beside log_file: ``run.log`` -> ``run_performance.log``."""
    path = Path(log_file)
    return str(path.with_name(f"{path.stem}_performance{path.suffix or '.log'}"))


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console: bool = True,
    enable_performance: bool = False
) -> None:
    """
    Configure the ``re2dfa`` logger tree.

    Only loggers below ``re2dfa`` are configured; the root logger keeps its
    level and handlers. This is meant to be called by scripts and
    applications, the package itself never calls it on import.

    Args:
        log_level: Logging level for the package (DEBUG, INFO, WARNING, ...)
        log_file: Optional path to a rotating log file
        enable_console: Whether package records go to stderr
        enable_performance: Log conversion timings at DEBUG; with log_file they
            also go to a separate ``*_performance.log`` file
    """
    handlers = {'null': {'class': 'logging.NullHandler'}}
    package_handlers = []

    if enable_console:
        handlers['console'] = {
            'class': 'logging.StreamHandler',
            'level': log_level,
            'formatter': 'simple',
            'stream': 'ext://sys.stderr'
        }
        package_handlers.append('console')

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': log_file,
            'maxBytes': 10485760,  # 10MB
            'backupCount': 5,
            'encoding': 'utf8'
        }
        package_handlers.append('file')

    performance = {
        'level': 'DEBUG' if enable_performance else 'INFO',
        'handlers': [],
        'propagate': True
    }
    if enable_performance and log_file:
        handlers['performance'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'DEBUG',
            'formatter': 'performance',
            'filename': performance_log_path(log_file),
            'maxBytes': 10485760,
            'backupCount': 3,
            'encoding': 'utf8'
        }
        performance['handlers'] = ['performance']
        performance['propagate'] = False

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': FORMATTERS,
        'handlers': handlers,
        'loggers': {
            PACKAGE_LOGGER: {
                'level': log_level,
                'handlers': package_handlers or ['null'],
                # Package records stay out of the root handlers once handled here
                'propagate': not package_handlers
            },
            PERFORMANCE_LOGGER: performance
        }
    })


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Module names already inside the package (``re2dfa.parser.regex_parser``)
    are used as-is; anything else is nested under ``re2dfa``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def get_performance_logger() -> logging.Logger:
    """Get the logger used for conversion timings."""
    return logging.getLogger(PERFORMANCE_LOGGER)


class PerformanceTimer:
    """Context manager for timing operations and logging performance metrics."""

    def __init__(self, operation_name: str, logger: Optional[logging.Logger] = None):
        self.operation_name = operation_name
        self.logger = logger or get_performance_logger()
        self.start_time = None
        self.duration = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time

        if exc_type is None:
            self.logger.info(f"{self.operation_name} completed in {self.duration:.4f}s")
        else:
            self.logger.warning(f"{self.operation_name} failed after {self.duration:.4f}s: {exc_val}")


def init_default_logging():
    """
    Library defaults applied on import.

    The package logger gets a NullHandler so that records only show up where
    the host application configured logging. Setting ``RE2DFA_LOG_LEVEL`` or
    ``RE2DFA_ENABLE_PERFORMANCE_LOGGING=true`` opts into stderr logging for the
    package tree.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())

    log_level = os.getenv('RE2DFA_LOG_LEVEL')
    enable_perf = os.getenv('RE2DFA_ENABLE_PERFORMANCE_LOGGING', 'false').lower() == 'true'
    if log_level or enable_perf:
        setup_logging(
            log_level=(log_level or 'WARNING').upper(),
            enable_console=True,
            enable_performance=enable_perf
        )


init_default_logging()
