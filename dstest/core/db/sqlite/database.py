"""SQLite database initialization and management."""

from pathlib import Path
from typing import Any, Dict

import aiofiles

from dstest.constants import DEFAULT_DB_PATH
from dstest.logger import get_logger

from .connection import SQLiteConnection

logger = get_logger(__name__)


class SQLiteDatabase:
    """
    Main database interface for DSTest.
    
    Handles:
    - Schema creation
    - Version management
    - Health checks
    """
    
    SCHEMA_VERSION = 1
    
    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """
        Initialize database manager.
        
        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.connection = SQLiteConnection(str(self.db_path))
        self._initialized = False
    
    async def initialize(self) -> None:
        """Initialize database with schema."""
        if self._initialized:
            return
        
        logger.info(f"Initializing SQLite database (db_path={self.db_path})")
        
        await self._create_schema()
        await self._check_version()
        
        self._initialized = True
        logger.info("Database initialized successfully")
    
    async def _create_schema(self) -> None:
        """Create database schema from SQL file."""
        schema_file = Path(__file__).parent / "schema.sql"
        
        async with aiofiles.open(schema_file, "r") as f:
            schema_sql = await f.read()
        
        await self.connection.executescript(schema_sql)
        logger.debug("Database schema created")
    
    async def _check_version(self) -> None:
        """Record the schema version on first initialization."""
        await self.connection.execute("""
            CREATE TABLE IF NOT EXISTS db_version (
                version INTEGER PRIMARY KEY,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                description TEXT
            )
        """)
        
        cursor = await self.connection.execute("SELECT MAX(version) FROM db_version")
        row = await cursor.fetchone()
        current_version = row[0] if row[0] is not None else 0
        
        if current_version < self.SCHEMA_VERSION:
            logger.info(f"Recording schema version {self.SCHEMA_VERSION} (was {current_version})")
            await self.connection.execute(
                "INSERT INTO db_version (version, description) VALUES (?, ?)",
                (self.SCHEMA_VERSION, f"Initial schema version {self.SCHEMA_VERSION}")
            )
            await self.connection.commit()
    
    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.
        
        Returns:
            dict: Health status information
        """
        try:
            cursor = await self.connection.execute("""
                SELECT
                    (SELECT COUNT(*) FROM transactions) AS transactions,
                    (SELECT COUNT(*) FROM test_suites) AS test_suites,
                    (SELECT COUNT(*) FROM test_runs) AS test_runs
            """)
            row = await cursor.fetchone()
            
            db_size = self.db_path.stat().st_size if self.db_path.exists() else 0
            
            return {
                "status": "healthy",
                "database_path": str(self.db_path),
                "database_size_mb": round(db_size / (1024 * 1024), 2),
                "transactions": row[0],
                "test_suites": row[1],
                "test_runs": row[2],
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "database_path": str(self.db_path),
                "error": str(e),
            }
    
    async def close(self) -> None:
        """Close database connection."""
        await self.connection.close()
