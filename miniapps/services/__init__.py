"""Service layer for data access and its supporting infrastructure."""

from .config import ConfigurationService, ValidationResult
from .data_access import DataAccessService
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    StorageError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .logging import LoggingService, setup_logging
from .storage import FileStorage, KeyValueStore, MemoryStorage

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "DataAccessService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileStorage",
    "HttpClientService",
    "KeyValueStore",
    "LoggingService",
    "MemoryStorage",
    "NetworkError",
    "StorageError",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "get_error_service",
    "handle_error",
    "setup_logging",
]
