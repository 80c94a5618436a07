"""Data models for ledger analysis."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List


@dataclass(frozen=True)
class TransactionRecord:
    """Single ledger row."""
    date: str
    category: str
    amount: Decimal


@dataclass
class MonthlyStatistics:
    """Totals for one calendar month."""
    month: str  # YYYY-MM
    total_expenses: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    category_breakdown: Dict[str, Decimal] = field(default_factory=dict)  # category -> expense

    @property
    def cash_flow(self) -> Decimal:
        return self.total_income - self.total_expenses


@dataclass(frozen=True)
class CategoryDelta:
    """Month-over-month change for one expense category."""
    category: str
    previous_amount: Decimal
    current_amount: Decimal
    percentage_change: Decimal


@dataclass
class ForecastResult:
    """Next-month forecast and the statistics it was derived from."""
    predicted_next_month_expenses: Decimal
    predicted_next_month_cash_flow: Decimal
    monthly_statistics: List[MonthlyStatistics]
    significant_changes: List[CategoryDelta]
    last_month_statistics: MonthlyStatistics
