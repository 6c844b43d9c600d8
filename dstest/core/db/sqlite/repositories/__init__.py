"""SQLite repository implementations."""

from .transaction import TransactionRepository
from .test_run import TestRunRepository
from .test_suite import TestSuiteRepository

__all__ = [
    "TransactionRepository",
    "TestRunRepository",
    "TestSuiteRepository",
]
