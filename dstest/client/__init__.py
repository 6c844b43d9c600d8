"""Clients for the DSTest configuration service."""

from .run_client import TestRunClient, fetch_test_run

__all__ = ["TestRunClient", "fetch_test_run"]
