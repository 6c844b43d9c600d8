"""Output formatters for test runs and test suites."""

from .base import BaseFormatter
from .report import RunReportFormatter, RunSummary, summarize, verdict_for
from .suite import SuiteFormatter
from .csv_formatter import CSVResultFormatter

__all__ = [
    "BaseFormatter",
    "RunReportFormatter",
    "RunSummary",
    "summarize",
    "verdict_for",
    "SuiteFormatter",
    "CSVResultFormatter",
]
