"""Monthly aggregation, trailing-average forecast and category change ranking."""
from datetime import date, datetime
from decimal import Decimal, Overflow, localcontext
from typing import Dict, List, Optional, Sequence

from .models import TransactionRecord, MonthlyStatistics, CategoryDelta, ForecastResult
from ..utils.logger import get_logger
from ..utils.exceptions import AnalysisError, InvalidDateError

logger = get_logger()

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m",
    "%d %b %Y",
    "%b %d %Y",
    "%b %d, %Y",
]

HUNDRED = Decimal("100")


def parse_date(value: str) -> Optional[date]:
    """Parse a ledger date string, None if no known format matches."""
    value = value.strip()
    if not value:
        return None
    
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    
    # ISO timestamps such as 2024-03-05T10:30:00
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def month_key(value: str) -> str:
    """Return the YYYY-MM bucket for a ledger date."""
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidDateError(f"Unrecognized transaction date: {value!r}")
    return f"{parsed.year:04d}-{parsed.month:02d}"


class Forecaster:
    """Aggregates records by month and forecasts next month's expenses."""
    
    def __init__(self, window_months: int = 3, top_changes: int = 3, income_category: str = "income"):
        """
        Initialize forecaster.
        
        Args:
            window_months: Trailing months averaged for the expense forecast
            top_changes: Number of category changes kept after ranking
            income_category: Category label (any case) counted as income
        """
        if window_months < 1:
            raise ValueError("window_months must be at least 1")
        self.window_months = window_months
        self.top_changes = top_changes
        self.income_category = income_category.lower()
    
    def analyze(self, records: Sequence[TransactionRecord]) -> ForecastResult:
        """
        Build the forecast for a ledger.
        
        Args:
            records: Parsed transaction records
            
        Returns:
            ForecastResult object
            
        Raises:
            AnalysisError: If there are no records, a date cannot be parsed
                or the amounts overflow decimal arithmetic
        """
        if not records:
            raise AnalysisError("No data found to analyze.")
        
        with localcontext() as ctx:
            ctx.traps[Overflow] = True
            try:
                months = self._aggregate_by_month(records)
                last_month = months[-1]
                
                window = months[-self.window_months:]
                predicted_expenses = sum((m.total_expenses for m in window), Decimal("0")) / len(window)
                
                # Only the latest observed income is carried forward
                predicted_cash_flow = last_month.total_income - predicted_expenses
                
                changes = self._rank_changes(months)

                # Cash flow is derived on access; evaluate it here so rendering cannot overflow
                for stats in months:
                    stats.cash_flow
            except Overflow:
                raise AnalysisError("Transaction amounts are too large to analyze.")
        
        logger.info(
            f"Analyzed {len(records)} transactions over {len(months)} months; "
            f"predicted expenses {predicted_expenses:.2f}, cash flow {predicted_cash_flow:.2f}"
        )
        
        return ForecastResult(
            predicted_next_month_expenses=predicted_expenses,
            predicted_next_month_cash_flow=predicted_cash_flow,
            monthly_statistics=months,
            significant_changes=changes,
            last_month_statistics=last_month
        )
    
    def _aggregate_by_month(self, records: Sequence[TransactionRecord]) -> List[MonthlyStatistics]:
        """Bucket records into months, sorted ascending by month key."""
        stats_by_month: Dict[str, MonthlyStatistics] = {}
        
        for record in records:
            key = month_key(record.date)
            stats = stats_by_month.get(key)
            if stats is None:
                stats = stats_by_month[key] = MonthlyStatistics(month=key)
            
            if record.category.lower() == self.income_category:
                stats.total_income += record.amount
            else:
                stats.total_expenses += record.amount
                breakdown = stats.category_breakdown
                breakdown[record.category] = breakdown.get(record.category, Decimal("0")) + record.amount
        
        return sorted(stats_by_month.values(), key=lambda m: m.month)
    
    def _rank_changes(self, months: List[MonthlyStatistics]) -> List[CategoryDelta]:
        """Compare the two latest months and keep the largest relative changes."""
        if len(months) < 2:
            return []
        
        previous, current = months[-2], months[-1]
        deltas = []
        for category, current_amount in current.category_breakdown.items():
            previous_amount = previous.category_breakdown.get(category, Decimal("0"))
            deltas.append(CategoryDelta(
                category=category,
                previous_amount=previous_amount,
                current_amount=current_amount,
                percentage_change=self._percentage_change(previous_amount, current_amount)
            ))
        
        # sorted() is stable, so ties keep first-occurrence order
        deltas = sorted(deltas, key=lambda d: abs(d.percentage_change), reverse=True)
        return deltas[:self.top_changes]
    
    @staticmethod
    def _percentage_change(previous: Decimal, current: Decimal) -> Decimal:
        if previous == 0:
            return HUNDRED if current > 0 else Decimal("0")
        return (current - previous) / previous * HUNDRED
