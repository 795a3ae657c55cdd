"""Core module - logging, exceptions, and application infrastructure."""

from bidsmart.core.logging import setup_logging, get_logger
from bidsmart.core.exceptions import (
    BidSmartError,
    ConfigurationError,
    UpstreamError,
    AIProcessingError,
    ParsingError,
    StorageError,
    NotFoundError,
    StatusTransitionError,
    TriageError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "BidSmartError",
    "ConfigurationError",
    "UpstreamError",
    "AIProcessingError",
    "ParsingError",
    "StorageError",
    "NotFoundError",
    "StatusTransitionError",
    "TriageError",
]
