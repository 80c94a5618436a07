"""Orchestration module."""
from .processor import AnalysisOrchestrator, AnalysisOutcome

__all__ = ["AnalysisOrchestrator", "AnalysisOutcome"]
