"""SQLite-based persistence for DSTest."""

from .connection import SQLiteConnection
from .database import SQLiteDatabase
from .repositories.transaction import TransactionRepository
from .repositories.test_run import TestRunRepository
from .repositories.test_suite import TestSuiteRepository

__all__ = [
    "SQLiteConnection",
    "SQLiteDatabase",
    "TransactionRepository",
    "TestRunRepository",
    "TestSuiteRepository",
]
