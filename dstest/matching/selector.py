"""
Candidate selection for a single test case.

The transaction pool is scanned in the order given, which callers supply
most-recent-first. The first transaction whose URL and predicates all match
is the candidate, and scanning stops there: a more recent matching attempt
wins over an older one even when only the older one has the expected status
code. The candidate is then classified against the expected status code.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from dstest.core.models import TestCase, TestStatus, Transaction
from dstest.logger import get_logger
from dstest.matching.paths import url_matches
from dstest.matching.predicates import validate_predicates

logger = get_logger(__name__)


@dataclass(frozen=True)
class Selection:
    """Outcome of searching the pool for one test case."""
    
    transaction: Optional[Transaction] = None
    status: TestStatus = TestStatus.UNDEFINED
    
    @property
    def found(self) -> bool:
        return self.status != TestStatus.UNDEFINED


def classify(test_case: TestCase, transaction: Transaction) -> TestStatus:
    """Success when the observed status code is the expected one."""
    if transaction.status == test_case.expected_status:
        return TestStatus.SUCCESS
    return TestStatus.FAILURE


def select_transaction(test_case: TestCase, transactions: Iterable[Transaction]) -> Selection:
    """
    Find the most recent transaction that matches a test case.
    
    Args:
        test_case: Test case providing the URL pattern, predicates and expected status
        transactions: Candidate pool, ordered most-recent-first
        
    Returns:
        Selection: the chosen transaction with its verdict, or an empty
        selection (``found`` is False) when nothing matched
    """
    for transaction in transactions:
        if not url_matches(transaction.url, test_case.url):
            continue
        
        if validate_predicates(test_case.predicates, transaction):
            status = classify(test_case, transaction)
            logger.debug(
                f"Transaction {transaction.id} matches test case '{test_case.name}' "
                f"(status={transaction.status}, expected={test_case.expected_status}, verdict={status.name})"
            )
            return Selection(transaction=transaction, status=status)
    
    return Selection()
