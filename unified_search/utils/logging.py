"""
Logging configuration and utilities for unified search.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional, Any, List

import structlog
from structlog import processors


class UnifiedSearchLogger:
    """Logger for the package with structured logging support."""

    def __init__(
        self,
        name: str = "unified_search",
        log_level: str = "INFO",
        log_format: str = "console",
        log_file: Optional[str] = None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.log_format = log_format
        self.log_file = log_file
        self._setup_logging()

    def _setup_logging(self):
        """Set up structured logging with a console handler and an optional file handler."""
        level = getattr(logging, self.log_level, logging.INFO)

        renderer = (
            processors.JSONRenderer()
            if self.log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        structlog.configure(
            processors=[
                processors.TimeStamper(fmt="ISO"),
                processors.add_log_level,
                structlog.stdlib.add_logger_name,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(level),
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )

        logger = logging.getLogger(self.name)
        logger.setLevel(level)

        # Remove existing handlers
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # stdout carries search results, so logs go to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(console_handler)

        if self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
            ))
            logger.addHandler(file_handler)

        self.logger = logger
        self.struct_logger = structlog.get_logger(self.name)

    def get_logger(self) -> logging.Logger:
        """Get the standard logger instance."""
        return self.logger

    def get_struct_logger(self):
        """Get the structured logger instance."""
        return self.struct_logger


class SearchMetrics:
    """Track per-engine search counts, durations and errors."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("unified_search.metrics")
        self.search_count = 0
        self.engine_usage: Dict[str, int] = {}
        self.error_count: Dict[str, int] = {}
        self.response_times: Dict[str, List[float]] = {}

    def record_search(self, engine: str, duration: float) -> None:
        """Record one finished search call."""
        self.search_count += 1
        self.engine_usage[engine] = self.engine_usage.get(engine, 0) + 1
        self.response_times.setdefault(engine, []).append(duration)
        self.logger.debug(f"Search recorded - Engine: {engine}, Duration: {duration:.3f}s")

    def record_error(self, engine: str, error_type: str) -> None:
        """Record an error for a specific engine."""
        error_key = f"{engine}_{error_type}"
        self.error_count[error_key] = self.error_count.get(error_key, 0) + 1
        self.logger.warning(f"Error recorded - Engine: {engine}, Type: {error_type}")

    @property
    def total_time(self) -> float:
        return sum(sum(times) for times in self.response_times.values())

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of search metrics."""
        avg_response_times = {
            engine: sum(times) / len(times) if times else 0.0
            for engine, times in self.response_times.items()
        }
        return {
            "total_searches": self.search_count,
            "total_time": self.total_time,
            "average_time": self.total_time / self.search_count if self.search_count else 0.0,
            "engine_usage": dict(self.engine_usage),
            "error_count": dict(self.error_count),
            "average_response_times": avg_response_times,
        }


_main_logger: Optional[UnifiedSearchLogger] = None


def get_logger(name: str = "unified_search") -> logging.Logger:
    """Get a stdlib logger under the package namespace."""
    return logging.getLogger(name)


def get_struct_logger(name: str = "unified_search"):
    """Get a structured logger; falls back to structlog defaults before setup_logging() runs."""
    if _main_logger is not None and name == _main_logger.name:
        return _main_logger.get_struct_logger()
    return structlog.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    name: str = "unified_search",
    log_format: str = "console",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Set up logging for the entire application."""
    global _main_logger

    _main_logger = UnifiedSearchLogger(name, log_level, log_format, log_file)
    logger = _main_logger.get_logger()
    logger.debug(f"Logging initialized with level: {log_level}")
    return logger
