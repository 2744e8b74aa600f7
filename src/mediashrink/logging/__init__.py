"""Structured logging module for mediashrink.

Provides configurable logging with JSON format support and file rotation.
"""

from mediashrink.logging.config import configure_logging
from mediashrink.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
