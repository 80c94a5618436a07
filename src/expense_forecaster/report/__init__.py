"""Forecast report rendering."""
from .formatter import render_report, forecast_to_dict

__all__ = ["render_report", "forecast_to_dict"]
