"""
Collection workflow for a test run.

Fetches a hydrated run from the configuration service, loads the transaction
pool recorded under the run's header id, matches the two and persists the
populated run. A failed fetch stops the workflow before any matching.
"""

from typing import Optional

from dstest.client.run_client import TestRunClient
from dstest.config import settings
from dstest.core.db.sqlite import SQLiteDatabase, TestRunRepository, TransactionRepository
from dstest.core.models import TestRun
from dstest.exceptions import CollectorError, DSTestError, UpstreamFetchError
from dstest.logger import get_logger
from dstest.matching.run_matcher import match_transactions_to_test_run

logger = get_logger(__name__)


class TestRunCollector:
    """
    Coordinates fetch, match and persist for test runs.
    
    All collaborators are passed in; the collector owns none of them.
    """
    
    def __init__(
        self,
        run_client: TestRunClient,
        transactions: TransactionRepository,
        test_runs: TestRunRepository,
        reset_results: Optional[bool] = None
    ):
        """
        Initialize the collector.
        
        Args:
            run_client: Open client for the configuration service
            transactions: Source of the transaction pool
            test_runs: Destination for the populated run
            reset_results: Clear previous results before matching (defaults to settings)
        """
        self.run_client = run_client
        self.transactions = transactions
        self.test_runs = test_runs
        self.reset_results = settings.reset_results if reset_results is None else reset_results
    
    async def collect(self, run_id: str) -> TestRun:
        """
        Collect results for one test run.
        
        Args:
            run_id: Identifier of the run in the configuration service
            
        Returns:
            TestRun: The populated and persisted run
            
        Raises:
            UpstreamFetchError: If the run or its transactions cannot be fetched
            CollectorError: If persisting the run fails
        """
        logger.info(f"Collecting test run {run_id}")
        
        test_run = await self.run_client.get_test_run(run_id)
        
        try:
            pool = await self.transactions.find_for_test_run(test_run)
        except DSTestError as e:
            raise UpstreamFetchError(f"Cannot load transactions for test run {run_id}: {e}") from e
        
        match_transactions_to_test_run(test_run, pool, reset_results=self.reset_results)
        
        try:
            await self.test_runs.save(test_run)
        except DSTestError as e:
            raise CollectorError(f"Cannot persist test run {run_id}: {e}") from e
        
        return test_run


async def collect_test_run(run_id: str, db_path: Optional[str] = None) -> TestRun:
    """
    Collect a test run with the default collaborators.
    
    Args:
        run_id: Identifier of the test run
        db_path: SQLite database path (defaults to settings)
        
    Returns:
        TestRun: The populated run
    """
    database = SQLiteDatabase(db_path or settings.db_path)
    try:
        await database.initialize()
        async with TestRunClient() as run_client:
            collector = TestRunCollector(
                run_client=run_client,
                transactions=TransactionRepository(
                    database.connection,
                    filter_by_api_key=settings.filter_by_api_key
                ),
                test_runs=TestRunRepository(database.connection)
            )
            return await collector.collect(run_id)
    finally:
        await database.close()
