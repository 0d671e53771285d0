"""
Utility helpers shared across mgm packages.
"""

from .logging import configure_logging, get_logger, time_call
from .naming import normalize_collection_name

__all__ = ["configure_logging", "get_logger", "normalize_collection_name", "time_call"]
