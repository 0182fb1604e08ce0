"""
API middleware module.
"""
from proworker.api.middleware.error_handler import (
    AppException,
    NotFoundException,
    BadRequestException,
    RateLimitException,
    ServiceUnavailableException,
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from proworker.api.middleware.correlation import CorrelationIdMiddleware

__all__ = [
    "AppException",
    "NotFoundException",
    "BadRequestException",
    "RateLimitException",
    "ServiceUnavailableException",
    "CorrelationIdMiddleware",
    "app_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "unhandled_exception_handler",
]
