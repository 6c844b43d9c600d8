"""
Run-level matching.

Drives candidate selection once per test case, in suite order, and records
a result for every case that found a transaction. The run is complete only
when every case has a result, whatever the individual verdicts are.
"""

from typing import Sequence

from dstest.core.models import TestResult, TestRun, TestRunStatus, Transaction
from dstest.logger import get_logger
from dstest.matching.selector import select_transaction
from dstest.utils.helpers import utcnow

logger = get_logger(__name__)


def match_transactions_to_test_run(
    test_run: TestRun,
    transactions: Sequence[Transaction],
    reset_results: bool = True
) -> TestRun:
    """
    Match a transaction pool against every test case of a run.
    
    The run is updated in place: one ``TestResult`` is appended per test case
    that found a candidate and ``status`` is set to ``COMPLETE`` or
    ``IN_PROGRESS``. The suite is never modified.
    
    Args:
        test_run: Hydrated test run to populate
        transactions: Transactions for the run's header id, most-recent-first
        reset_results: Clear results left by a previous collection first.
            Without it, matching a populated run appends duplicate results.
        
    Returns:
        TestRun: The same run instance, populated
    """
    if reset_results and test_run.test_results:
        logger.info(
            f"Clearing {len(test_run.test_results)} previous results for test run '{test_run.name}'"
        )
        test_run.test_results = []
    
    run_status = TestRunStatus.COMPLETE
    
    for test_case in test_run.test_suite.test_cases:
        logger.info(f"Searching for transactions to match test case '{test_case.name}'")
        selection = select_transaction(test_case, transactions)
        
        if selection.found:
            logger.info(
                f"Found matching transaction {selection.transaction.id} "
                f"for test case '{test_case.name}': {selection.status.name.lower()}"
            )
            test_run.test_results.append(
                TestResult(
                    test_case=test_case,
                    transaction=selection.transaction,
                    status=selection.status,
                    timestamp=utcnow()
                )
            )
        else:
            logger.warning(f"Did not find a matching transaction for test case '{test_case.name}'")
            run_status = TestRunStatus.IN_PROGRESS
    
    test_run.status = run_status
    
    logger.info(
        f"Matched test run '{test_run.name}': {len(test_run.test_results)} of "
        f"{len(test_run.test_suite.test_cases)} test cases resolved, status={run_status.name}"
    )
    return test_run
