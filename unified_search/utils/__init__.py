"""
Utility functions and classes for unified search.
"""

from .config import Config, get_config, load_config, reset_config
from .logging import (
    setup_logging,
    get_logger,
    get_struct_logger,
    UnifiedSearchLogger,
    SearchMetrics,
)

__all__ = [
    "Config",
    "get_config",
    "load_config",
    "reset_config",
    "setup_logging",
    "get_logger",
    "get_struct_logger",
    "UnifiedSearchLogger",
    "SearchMetrics",
]
