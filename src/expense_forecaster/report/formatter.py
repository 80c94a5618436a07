"""Text and JSON rendering of forecast results."""
from decimal import Decimal
from typing import Dict, List, Optional

from ..ledger.models import ForecastResult, MonthlyStatistics, CategoryDelta

NO_CHANGES_MESSAGE = "No significant changes detected vs last month."
NO_EXPLANATION_MESSAGE = "AI explanation unavailable."


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _percent(value: Decimal) -> str:
    return f"{'+' if value > 0 else ''}{value:.1f}%"


def render_report(forecast: ForecastResult, explanation: Optional[str] = None, window_months: int = 3) -> str:
    """
    Render a forecast as a plain-text report.
    
    Args:
        forecast: Forecast to render
        explanation: AI explanation text, if any
        window_months: Averaging window shown in the caption
        
    Returns:
        Multi-line report string
    """
    lines = [
        "Predicted Next Month Expenses",
        f"  {_money(forecast.predicted_next_month_expenses)}  (Based on {window_months}-month average)",
        "Predicted Net Cash Flow",
        f"  {_money(forecast.predicted_next_month_cash_flow)}  (Estimated Income - Predicted Expenses)",
        "",
        f"{'Month':<10} {'Income':>14} {'Expenses':>14} {'Cash Flow':>14}",
        "-" * 55,
    ]
    for stats in forecast.monthly_statistics:
        lines.append(
            f"{stats.month:<10} {_money(stats.total_income):>14} "
            f"{_money(stats.total_expenses):>14} {_money(stats.cash_flow):>14}"
        )
    
    lines += ["", "Biggest Changes"]
    if forecast.significant_changes:
        for change in forecast.significant_changes:
            lines.append(
                f"  {change.category:<20} {_percent(change.percentage_change):>9}  "
                f"(was {_money(change.previous_amount)}, now {_money(change.current_amount)})"
            )
    else:
        lines.append(f"  {NO_CHANGES_MESSAGE}")
    
    lines += ["", "AI Financial Insight", f"  {explanation or NO_EXPLANATION_MESSAGE}"]
    return "\n".join(lines)


def _month_to_dict(stats: MonthlyStatistics) -> Dict:
    return {
        "month": stats.month,
        "totalExpenses": str(stats.total_expenses),
        "totalIncome": str(stats.total_income),
        "cashFlow": str(stats.cash_flow),
        "categoryBreakdown": {k: str(v) for k, v in stats.category_breakdown.items()},
    }


def _change_to_dict(change: CategoryDelta) -> Dict:
    return {
        "category": change.category,
        "previousAmount": str(change.previous_amount),
        "currentAmount": str(change.current_amount),
        "percentageChange": str(change.percentage_change),
    }


def forecast_to_dict(forecast: ForecastResult) -> Dict:
    """Convert a forecast to a JSON-serializable dict (Decimals as strings)."""
    months: List[Dict] = [_month_to_dict(m) for m in forecast.monthly_statistics]
    return {
        "predictedNextMonthExpenses": str(forecast.predicted_next_month_expenses),
        "predictedNextMonthCashFlow": str(forecast.predicted_next_month_cash_flow),
        "recentMonthsStats": months,
        "significantChanges": [_change_to_dict(c) for c in forecast.significant_changes],
        "lastMonthStats": _month_to_dict(forecast.last_month_statistics),
    }
