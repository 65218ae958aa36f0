"""Core infrastructure: settings, logging, exceptions, data helpers."""

from .config import Settings, get_settings, settings
from .exceptions import (
    AppException,
    ExternalServiceError,
    PredictionStateError,
    RateLimitError,
    ValidationError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "AppException",
    "ExternalServiceError",
    "PredictionStateError",
    "RateLimitError",
    "Settings",
    "ValidationError",
    "get_logger",
    "get_settings",
    "settings",
    "setup_logging",
]
