"""Human readable rendering of test suites.

Example output for one test case::

    Test Case Name: Test Case 1
    URL: /ch/payments/v1/charges
    Expected Status Code: 201
    Criteria:
        amount.total == 300 AND
        source.sourceType == PaymentTrack
"""

from typing import List

from dstest.core.models import TestCase, TestSuite

from .base import BaseFormatter


class SuiteFormatter(BaseFormatter):
    """Formats a test suite and its test cases for reading."""
    
    def __init__(self, output_path=None, indent: str = "\t"):
        super().__init__(output_path)
        self.indent = indent
    
    def format(self, suite: TestSuite) -> str:
        parts = [f"Test Suite Name: {suite.name}\n\n"]
        for test_case in suite.test_cases:
            parts.append(self.format_test_case(test_case))
            parts.append("\n")
        return "".join(parts)
    
    def format_test_case(self, test_case: TestCase) -> str:
        lines: List[str] = [
            f"Test Case Name: {test_case.name}",
            f"URL: {test_case.url}",
            f"Expected Status Code: {test_case.expected_status}",
            "Criteria:",
        ]
        
        criteria = [
            f"{self.indent}{predicate.attribute} == {predicate.expected_value}"
            for predicate in test_case.predicates
        ]
        if criteria:
            lines.append(" AND\n".join(criteria))
        
        return "\n".join(lines) + "\n"
