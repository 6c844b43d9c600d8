"""SQLite connection management with aiosqlite."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from dstest.exceptions import DatabaseError
from dstest.logger import get_logger

logger = get_logger(__name__)


class SQLiteConnection:
    """
    Manages a single SQLite database connection with async support.
    
    Repositories receive an instance of this class through their
    constructor; nothing in DSTest keeps a module level connection.
    """
    
    def __init__(self, db_path: str, **kwargs):
        """
        Initialize connection parameters.
        
        Args:
            db_path: Path to SQLite database file
            **kwargs: Additional aiosqlite.connect parameters
        """
        self.db_path = Path(db_path)
        self.connection_params = kwargs
        self._connection: Optional[aiosqlite.Connection] = None
        
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
    
    async def connect(self) -> aiosqlite.Connection:
        """
        Establish database connection with optimized settings.
        
        Returns:
            aiosqlite.Connection: Active database connection
            
        Raises:
            DatabaseError: If the database cannot be opened
        """
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(self.db_path, **self.connection_params)
            except Exception as e:
                raise DatabaseError(f"Cannot open database {self.db_path}: {e}") from e
            self._connection.row_factory = aiosqlite.Row
            
            await self._set_pragmas()
            
            logger.info(f"Connected to SQLite database (db_path={self.db_path})")
        
        return self._connection
    
    async def _set_pragmas(self) -> None:
        """Set SQLite pragmas."""
        pragmas = [
            "PRAGMA journal_mode = WAL",
            "PRAGMA foreign_keys = ON",
            "PRAGMA synchronous = NORMAL",
        ]
        
        for pragma in pragmas:
            await self._connection.execute(pragma)
            logger.debug(f"Set pragma: {pragma}")
    
    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("Closed SQLite connection")
    
    async def execute(self, query: str, parameters: tuple = ()) -> aiosqlite.Cursor:
        """
        Execute a single query.
        
        Args:
            query: SQL query to execute
            parameters: Query parameters
            
        Returns:
            aiosqlite.Cursor: Query cursor
        """
        conn = await self.connect()
        return await conn.execute(query, parameters)
    
    async def executescript(self, script: str) -> None:
        """Execute a SQL script."""
        conn = await self.connect()
        await conn.executescript(script)
    
    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._connection:
            await self._connection.commit()
    
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._connection:
            await self._connection.rollback()
    
    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Context manager for database transactions.
        
        Usage:
            async with connection.transaction():
                await connection.execute(...)
                await connection.execute(...)
                # Commits on success, rolls back on error
        """
        conn = await self.connect()
        try:
            await conn.execute("BEGIN")
            yield conn
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
    
    async def __aenter__(self) -> "SQLiteConnection":
        await self.connect()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
