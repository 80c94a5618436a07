"""Analysis orchestrator for the parse, forecast and explain workflow."""
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Config, AppSettings
from ..ledger import TransactionParser, Forecaster, ForecastResult, SAMPLE_CSV_DATA
from ..llm import InsightGenerator
from ..utils.logger import get_logger, set_source_context
from ..utils.exceptions import AnalysisError

logger = get_logger()


@dataclass
class AnalysisOutcome:
    """Result of one analysis run."""
    forecast: ForecastResult
    explanation: Optional[str]
    records_parsed: int
    duration_seconds: float


class AnalysisOrchestrator:
    """Orchestrates parsing, forecasting and the AI explanation."""
    
    def __init__(self, config: Config, settings: AppSettings):
        """
        Initialize orchestrator.
        
        Args:
            config: User configuration (API key, model)
            settings: Application settings
        """
        self.config = config
        self.settings = settings
        
        self.parser = TransactionParser(delimiter=settings.delimiter)
        self.forecaster = Forecaster(
            window_months=settings.forecast_window_months,
            top_changes=settings.top_changes,
            income_category=settings.income_category
        )
        self.insight_generator = InsightGenerator(
            api_key=config.gemini_api_key,
            model_name=config.model_name,
            timeout_seconds=settings.llm_timeout_seconds,
            max_retries=settings.llm_max_retries,
            initial_delay=settings.llm_initial_delay_seconds,
            backoff_factor=settings.llm_backoff_factor
        )
    
    def process(self, csv_text: str, source: str = "upload", include_insight: bool = True) -> AnalysisOutcome:
        """
        Run the full pipeline on ledger text.
        
        Args:
            csv_text: Raw ledger text
            source: Name of the input, used as log context
            include_insight: Whether to request an AI explanation
            
        Returns:
            AnalysisOutcome object
            
        Raises:
            FormatError: If the header is invalid
            AnalysisError: If no valid rows remain or a date is unparseable
        """
        start_time = time.time()
        set_source_context(source)
        
        try:
            records = self.parser.parse(csv_text)
            if not records:
                raise AnalysisError("No valid rows found in CSV.")
            
            forecast = self.forecaster.analyze(records)
            
            explanation = None
            if include_insight:
                explanation = self.insight_generator.generate(forecast)
            
            duration = time.time() - start_time
            logger.info(f"Analysis of {source} complete in {duration:.2f}s")
            
            return AnalysisOutcome(
                forecast=forecast,
                explanation=explanation,
                records_parsed=len(records),
                duration_seconds=duration
            )
        finally:
            set_source_context(None)
    
    def process_file(self, path: Path, include_insight: bool = True) -> AnalysisOutcome:
        """Run the pipeline on a ledger file."""
        path = Path(path)
        logger.info(f"Reading ledger file: {path}")
        csv_text = path.read_text(encoding="utf-8-sig")
        return self.process(csv_text, source=path.name, include_insight=include_insight)
    
    def process_sample(self, include_insight: bool = True) -> AnalysisOutcome:
        """Run the pipeline on the built-in sample ledger."""
        return self.process(SAMPLE_CSV_DATA, source="sample", include_insight=include_insight)
