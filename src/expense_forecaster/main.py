"""Command line entry point."""
import sys
import json
import argparse
from pathlib import Path

from .config import Config, ConfigManager, get_settings
from .config.manager import VALID_LOG_LEVELS
from .orchestrator import AnalysisOrchestrator
from .report import render_report, forecast_to_dict
from .utils.logger import get_logger, setup_logging
from .utils.exceptions import ExpenseForecasterError

logger = get_logger()


def _load_and_validate_config(settings) -> Config:
    """Load user configuration on top of application settings."""
    config_manager = ConfigManager()
    defaults = Config(model_name=settings.llm_model_name, log_level=settings.log_level)
    config = config_manager.load_config(defaults)
    
    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        raise ExpenseForecasterError(f"Invalid configuration: {message}")
    
    logger.debug(message)
    return config


def _print_outcome(outcome, as_json: bool, window_months: int) -> None:
    """Print an analysis outcome to stdout."""
    if as_json:
        payload = forecast_to_dict(outcome.forecast)
        payload["explanation"] = outcome.explanation
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(render_report(outcome.forecast, outcome.explanation, window_months))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expense-forecaster",
        description="Forecast next month's expenses and cash flow from a transaction ledger"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    analyze = subparsers.add_parser("analyze", help="Analyze a CSV ledger file")
    analyze.add_argument("file", type=Path, help="CSV file with date, category and amount columns")
    
    sample = subparsers.add_parser("sample", help="Analyze the built-in sample ledger")
    
    for sub in (analyze, sample):
        sub.add_argument("--json", action="store_true", help="Print the forecast as JSON")
        sub.add_argument("--no-insight", action="store_true", help="Skip the AI explanation")
        sub.add_argument(
            "--log-level",
            type=str.upper,
            choices=VALID_LOG_LEVELS,
            help="Override the configured log level"
        )
    
    return parser


def main(argv=None) -> int:
    """Main entry point for Expense Forecaster."""
    args = build_parser().parse_args(argv)
    
    try:
        settings = get_settings()
        config = _load_and_validate_config(settings)
        
        setup_logging(
            args.log_level or config.log_level,
            settings.log_file,
            settings.log_max_file_size_mb,
            settings.log_backup_count
        )
        
        orchestrator = AnalysisOrchestrator(config, settings)
        include_insight = not args.no_insight
        
        if args.command == "analyze":
            outcome = orchestrator.process_file(args.file, include_insight=include_insight)
        else:
            outcome = orchestrator.process_sample(include_insight=include_insight)
    except (ExpenseForecasterError, OSError) as e:
        logger.error(f"Analysis failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    _print_outcome(outcome, args.json, settings.forecast_window_months)
    return 0


if __name__ == "__main__":
    sys.exit(main())
