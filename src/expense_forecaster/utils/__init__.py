"""Utility modules."""
from .logger import get_logger, setup_logging, set_source_context
from .exceptions import (
    ExpenseForecasterError,
    ConfigError,
    FormatError,
    AnalysisError,
    InvalidDateError,
    NetworkError,
    LLMError,
    RetryableError,
    RetryableNetworkError,
    RetryableLLMError
)
from .retry import retry_with_backoff

__all__ = [
    "get_logger",
    "setup_logging",
    "set_source_context",
    "ExpenseForecasterError",
    "ConfigError",
    "FormatError",
    "AnalysisError",
    "InvalidDateError",
    "NetworkError",
    "LLMError",
    "RetryableError",
    "RetryableNetworkError",
    "RetryableLLMError",
    "retry_with_backoff"
]
