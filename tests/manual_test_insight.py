"""Manual check of the Gemini explanation against the live API."""
import sys
from pathlib import Path

# Add src directory to path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from expense_forecaster.ledger import TransactionParser, Forecaster, SAMPLE_CSV_DATA
from expense_forecaster.llm import InsightGenerator, build_prompt
from expense_forecaster.utils.logger import setup_logging


def run_insight(api_key: str, csv_path: str = None):
    """Generate an explanation for a ledger (sample data when no path is given)."""
    setup_logging("DEBUG")
    
    if csv_path:
        csv_file = Path(csv_path)
        if not csv_file.exists():
            print(f"Error: File not found: {csv_path}")
            return
        text = csv_file.read_text(encoding="utf-8-sig")
    else:
        text = SAMPLE_CSV_DATA
    
    forecast = Forecaster().analyze(TransactionParser().parse(text))
    
    print(f"\n{'='*60}")
    print("Prompt:")
    print(f"{'='*60}\n")
    print(build_prompt(forecast))
    
    explanation = InsightGenerator(api_key).generate(forecast)
    
    print(f"\n{'='*60}")
    print("Explanation:")
    print(f"{'='*60}\n")
    print(explanation)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python manual_test_insight.py <google_api_key> [path_to_csv]")
        sys.exit(1)
    
    run_insight(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)
