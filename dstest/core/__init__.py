"""Core data models for record-and-replay verification."""

from .models import (
    Transaction,
    TestCasePredicate,
    TestCase,
    TestSuite,
    TestRunStatus,
    TestStatus,
    TestResult,
    TestRun,
)

__all__ = [
    "Transaction",
    "TestCasePredicate",
    "TestCase",
    "TestSuite",
    "TestRunStatus",
    "TestStatus",
    "TestResult",
    "TestRun",
]
