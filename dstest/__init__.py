"""
DSTest - Record-and-replay verification for HTTP integration tests.

This package correlates recorded HTTP transactions against declarative
test suites and produces a verdict per test case and an aggregate run status.
"""

from dstest._version import __version__, __version_info__
from dstest.config import settings
from dstest.logger import logger

__all__ = [
    "settings",
    "logger",
    "__version__",
    "__version_info__",
]
