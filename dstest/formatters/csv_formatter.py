"""CSV export of per-test-case verdicts."""

import csv
import io
from pathlib import Path
from typing import Any, Dict, Optional

from dstest.core.models import TestCase, TestRun

from .base import BaseFormatter
from .report import verdict_for


class CSVResultFormatter(BaseFormatter):
    """Formats a test run as CSV, one row per test case."""
    
    # CSV column headers in order
    CSV_HEADERS = [
        "test_case_id",
        "test_case_name",
        "url_pattern",
        "verdict",
        "expected_status",
        "observed_status",
        "transaction_id",
        "transaction_url",
        "matched_at",
    ]
    
    def __init__(self, output_path: Optional[Path] = None, delimiter: str = ","):
        """Initialize CSV formatter.
        
        Args:
            output_path: Output file path
            delimiter: CSV delimiter (default: comma)
        """
        super().__init__(output_path)
        self.delimiter = delimiter
    
    def format(self, test_run: TestRun) -> str:
        output = io.StringIO()
        output.write(f"# Test Run: {test_run.name} ({test_run.id})\n")
        output.write(f"# Test Suite: {test_run.test_suite.name}\n")
        output.write(f"# Status: {test_run.status.name}\n")
        
        writer = csv.DictWriter(
            output,
            fieldnames=self.CSV_HEADERS,
            delimiter=self.delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n"
        )
        writer.writeheader()
        
        for test_case in test_run.test_suite.test_cases:
            writer.writerow(self.format_row(test_run, test_case))
        
        return output.getvalue()
    
    def format_row(self, test_run: TestRun, test_case: TestCase) -> Dict[str, Any]:
        """Build the CSV row for one test case."""
        result = test_run.result_for(test_case)
        row = {
            "test_case_id": test_case.id,
            "test_case_name": test_case.name,
            "url_pattern": test_case.url,
            "verdict": verdict_for(test_run, test_case),
            "expected_status": test_case.expected_status,
            "observed_status": "",
            "transaction_id": "",
            "transaction_url": "",
            "matched_at": "",
        }
        if result is not None:
            row.update({
                "observed_status": result.transaction.status,
                "transaction_id": result.transaction.id,
                "transaction_url": result.transaction.url,
                "matched_at": result.timestamp.isoformat(),
            })
        return row
