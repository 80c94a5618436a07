"""Ledger parsing and forecasting."""
from .models import TransactionRecord, MonthlyStatistics, CategoryDelta, ForecastResult
from .parser import TransactionParser
from .forecaster import Forecaster
from .sample_data import SAMPLE_CSV_DATA

__all__ = [
    "TransactionRecord",
    "MonthlyStatistics",
    "CategoryDelta",
    "ForecastResult",
    "TransactionParser",
    "Forecaster",
    "SAMPLE_CSV_DATA",
]
