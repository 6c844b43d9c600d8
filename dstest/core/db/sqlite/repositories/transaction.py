"""Transaction repository: the recorded traffic pool."""

from datetime import datetime, timezone
from typing import Iterable, List

from dstest.exceptions import DatabaseError
from dstest.logger import get_logger

from ..connection import SQLiteConnection
from ....models import TestRun, Transaction

logger = get_logger(__name__)


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime as sortable UTC ISO text (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class TransactionRepository:
    """
    Repository for recorded transactions.
    
    Transactions are written by the capture side and only read during
    collection.
    """
    
    def __init__(self, connection: SQLiteConnection, filter_by_api_key: bool = False):
        """
        Initialize transaction repository.
        
        Args:
            connection: SQLite database connection
            filter_by_api_key: Also require the transaction's API key to equal the run's
        """
        self.connection = connection
        self.filter_by_api_key = filter_by_api_key
    
    async def add(self, transaction: Transaction) -> None:
        """Record a single transaction."""
        await self.add_many([transaction])
    
    async def add_many(self, transactions: Iterable[Transaction]) -> int:
        """
        Record transactions in insertion order.
        
        Args:
            transactions: Transactions to store
            
        Returns:
            int: Number of transactions stored
        """
        rows = [
            (
                tx.id, tx.api_key, tx.run_header_id, tx.status, tx.url,
                tx.headers, tx.request, tx.response, to_db_timestamp(tx.timestamp)
            )
            for tx in transactions
        ]
        try:
            async with self.connection.transaction() as conn:
                await conn.executemany("""
                    INSERT INTO transactions (
                        id, apikey, testrunid, status, url,
                        headers, request, response, timestamp
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, rows)
        except Exception as e:
            logger.error(f"Failed to store transactions: {e}")
            raise DatabaseError(f"Failed to store transactions: {e}") from e
        
        logger.debug(f"Stored {len(rows)} transactions")
        return len(rows)
    
    async def find_for_test_run(self, test_run: TestRun) -> List[Transaction]:
        """
        Return the transaction pool for a test run.
        
        Args:
            test_run: Run whose header id correlates the transactions
            
        Returns:
            List[Transaction]: Transactions in descending chronological order,
            ties broken by most recent insertion
        """
        query = "SELECT * FROM transactions WHERE testrunid = ?"
        parameters: tuple = (test_run.header_id,)
        
        if self.filter_by_api_key:
            query += " AND apikey = ?"
            parameters += (test_run.api_key,)
        
        query += " ORDER BY timestamp DESC, rowid DESC"
        
        try:
            cursor = await self.connection.execute(query, parameters)
            rows = await cursor.fetchall()
        except Exception as e:
            logger.error(f"Failed to load transactions: {e} (header_id={test_run.header_id})")
            raise DatabaseError(f"Failed to load transactions for {test_run.header_id}: {e}") from e
        
        transactions = [self._row_to_transaction(row) for row in rows]
        logger.info(f"Loaded {len(transactions)} transactions (header_id={test_run.header_id})")
        return transactions
    
    def _row_to_transaction(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            api_key=row["apikey"],
            run_header_id=row["testrunid"],
            status=row["status"],
            url=row["url"],
            headers=row["headers"],
            request=row["request"],
            response=row["response"],
            timestamp=datetime.fromisoformat(row["timestamp"])
        )
