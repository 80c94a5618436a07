"""Expense Forecaster: monthly expense and cash flow forecasting from a ledger."""
from .ledger import (
    TransactionRecord,
    MonthlyStatistics,
    CategoryDelta,
    ForecastResult,
    TransactionParser,
    Forecaster,
)

__version__ = "1.0.0"

__all__ = [
    "TransactionRecord",
    "MonthlyStatistics",
    "CategoryDelta",
    "ForecastResult",
    "TransactionParser",
    "Forecaster",
]
