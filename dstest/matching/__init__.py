"""Matching engine: assigns recorded transactions to test cases."""

from .predicates import match_predicate, resolve_raw_value, validate_predicates
from .paths import compile_pattern, extract_params, url_matches
from .selector import Selection, classify, select_transaction
from .run_matcher import match_transactions_to_test_run

__all__ = [
    "match_predicate",
    "resolve_raw_value",
    "validate_predicates",
    "compile_pattern",
    "extract_params",
    "url_matches",
    "Selection",
    "classify",
    "select_transaction",
    "match_transactions_to_test_run",
]
