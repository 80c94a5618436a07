"""Custom exception classes for Expense Forecaster."""


class ExpenseForecasterError(Exception):
    """Base exception for Expense Forecaster."""
    pass


class ConfigError(ExpenseForecasterError):
    """Configuration-related errors."""
    pass


class FormatError(ExpenseForecasterError):
    """Ledger header is missing required columns."""
    pass


class AnalysisError(ExpenseForecasterError):
    """Ledger cannot be analyzed (no data, bad dates)."""
    pass


class InvalidDateError(AnalysisError):
    """Transaction date could not be parsed into a calendar date."""
    pass


class NetworkError(ExpenseForecasterError):
    """Network and API-related errors."""
    pass


class LLMError(ExpenseForecasterError):
    """LLM processing errors."""
    pass


# Retryable errors
class RetryableError(ExpenseForecasterError):
    """Base class for errors that should trigger retry."""
    pass


class RetryableNetworkError(RetryableError, NetworkError):
    """Network errors that can be retried."""
    pass


class RetryableLLMError(RetryableError, LLMError):
    """LLM errors that can be retried."""
    pass
