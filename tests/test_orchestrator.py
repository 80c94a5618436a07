"""Tests for the analysis orchestrator and CLI."""
import contextlib
import io
import json
import os
import shutil
import tempfile
import unittest
from decimal import Decimal
from pathlib import Path
from unittest import mock

from expense_forecaster.config import AppSettings, Config
from expense_forecaster.llm import insight_generator
from expense_forecaster.main import main
from expense_forecaster.orchestrator import AnalysisOrchestrator
from expense_forecaster.utils.exceptions import AnalysisError, FormatError


class TestAnalysisOrchestrator(unittest.TestCase):
    """Test AnalysisOrchestrator functionality."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.settings = AppSettings.load()
        self.orchestrator = AnalysisOrchestrator(Config(), self.settings)
    
    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)
    
    def test_process_text(self):
        """Test the full pipeline without an API key."""
        outcome = self.orchestrator.process(
            "date,category,amount\n2024-01-15,Food,100\n2024-02-10,Food,150\n"
        )
        
        self.assertEqual(outcome.records_parsed, 2)
        self.assertEqual(outcome.forecast.predicted_next_month_expenses, Decimal("125"))
        self.assertEqual(outcome.explanation, insight_generator.MISSING_KEY_MESSAGE)
    
    def test_process_without_insight(self):
        """Test skipping the explanation."""
        outcome = self.orchestrator.process_sample(include_insight=False)
        
        self.assertIsNone(outcome.explanation)
        self.assertEqual(outcome.forecast.last_month_statistics.month, "2024-04")
    
    def test_process_file(self):
        """Test reading a ledger file with a byte order mark."""
        path = self.test_dir / "ledger.csv"
        path.write_text("\ufeffdate,category,amount\n2024-03-01,Rent,900\n", encoding="utf-8")
        
        outcome = self.orchestrator.process_file(path, include_insight=False)
        
        self.assertEqual(outcome.forecast.predicted_next_month_expenses, Decimal("900"))
    
    def test_no_valid_rows_raises(self):
        """Test that a ledger with only bad rows is an analysis error."""
        with self.assertRaises(AnalysisError):
            self.orchestrator.process("date,category,amount\n2024-01-01,Food,abc\n")
    
    def test_bad_header_raises(self):
        """Test that header errors propagate."""
        with self.assertRaises(FormatError):
            self.orchestrator.process("date,category\n2024-01-01,Food\n")


class TestMain(unittest.TestCase):
    """Test the command line entry point."""
    
    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        patcher = mock.patch.dict(
            os.environ, {"EXPENSE_FORECASTER_HOME": str(self.test_dir)}, clear=True
        )
        patcher.start()
        self.addCleanup(patcher.stop)
    
    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)
    
    def test_sample_json(self):
        """Test JSON output for the sample ledger."""
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main(["sample", "--json", "--no-insight"])
        
        self.assertEqual(code, 0)
        data = json.loads(stdout.getvalue())
        self.assertEqual(len(data["recentMonthsStats"]), 4)
        self.assertIsNone(data["explanation"])
    
    def test_analyze_text_report(self):
        """Test the text report for a ledger file."""
        path = self.test_dir / "ledger.csv"
        path.write_text("date,category,amount\n2024-01-15,Food,100\n", encoding="utf-8")
        
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main(["analyze", str(path)])
        
        self.assertEqual(code, 0)
        self.assertIn("Predicted Next Month Expenses", stdout.getvalue())
        self.assertIn(insight_generator.MISSING_KEY_MESSAGE, stdout.getvalue())
    
    def test_analyze_bad_header_exits_with_error(self):
        """Test that structural errors produce exit code 1."""
        path = self.test_dir / "bad.csv"
        path.write_text("date,category\n2024-01-15,Food\n", encoding="utf-8")
        
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = main(["analyze", str(path), "--no-insight"])
        
        self.assertEqual(code, 1)
        self.assertIn("Required columns", stderr.getvalue())
    
    def test_analyze_missing_file(self):
        """Test that a missing file produces exit code 1."""
        with contextlib.redirect_stderr(io.StringIO()):
            code = main(["analyze", str(self.test_dir / "absent.csv")])
        
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
