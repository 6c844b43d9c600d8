"""Plain text report for a collected test run."""

from dataclasses import dataclass
from typing import List, Optional

from dstest.constants import VERDICT_FAILURE, VERDICT_NOT_FOUND, VERDICT_SUCCESS
from dstest.core.models import TestCase, TestRun, TestRunStatus, TestStatus

from .base import BaseFormatter


@dataclass
class RunSummary:
    """Counts over a run's results."""
    
    total: int
    attempted: int
    succeeded: int
    status: TestRunStatus
    
    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded
    
    @property
    def not_found(self) -> int:
        return self.total - self.attempted


def verdict_for(test_run: TestRun, test_case: TestCase) -> str:
    """One of ``success``, ``failure`` or ``no transaction found``."""
    result = test_run.result_for(test_case)
    if result is None:
        return VERDICT_NOT_FOUND
    if result.status == TestStatus.SUCCESS:
        return VERDICT_SUCCESS
    return VERDICT_FAILURE


def summarize(test_run: TestRun) -> RunSummary:
    """Count attempted and successful test cases of a run."""
    attempted = 0
    succeeded = 0
    for test_case in test_run.test_suite.test_cases:
        result = test_run.result_for(test_case)
        if result is not None:
            attempted += 1
            if result.status == TestStatus.SUCCESS:
                succeeded += 1
    
    return RunSummary(
        total=len(test_run.test_suite.test_cases),
        attempted=attempted,
        succeeded=succeeded,
        status=test_run.status
    )


class RunReportFormatter(BaseFormatter):
    """Formats a test run as a text report, one verdict per test case."""
    
    def format(self, test_run: TestRun) -> str:
        lines: List[str] = [f"Report for Test Run> {test_run.name}"]
        
        for test_case in test_run.test_suite.test_cases:
            lines.append(
                f"\tResult for Test Case `{test_case.name}`: {verdict_for(test_run, test_case)}"
            )
        
        summary = summarize(test_run)
        lines.append(f"\tNumber of tests attempted: {summary.attempted} of total {summary.total}")
        lines.append(
            f"\tNumber of tests successfully completed: {summary.succeeded} of total {summary.total}"
        )
        lines.append(f"\tStatus of test run: {summary.status.name}")
        
        return "\n".join(lines) + "\n"
