# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Database connectivity and statement execution for schema operations
# CREATED: 19 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides database connectivity for comment and schema operations:
- Connection string built lazily from POSTGRES_* settings
- Context managers for safe resource management
- Multi-statement execution in a single transaction

Usage:
    repo = PostgreSQLRepository()
    repo.execute_statements([
        sql.SQL("CREATE TABLE foo (id integer)"),
        sql.SQL("COMMENT ON TABLE foo IS 'Ohai!'"),
    ])
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Optional, Union

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from pgcomment.config import DatabaseDefaults, get_defaults
from pgcomment.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.INFRASTRUCTURE)

Query = Union[str, sql.Composable]


# ============================================================================
# POSTGRESQL REPOSITORY BASE
# ============================================================================

class PostgreSQLRepository:
    """
    Base repository for PostgreSQL database operations.

    Usage:
        repo = PostgreSQLRepository()
        with repo.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        settings: Optional[DatabaseDefaults] = None,
    ):
        """
        Initialize PostgreSQL repository.

        Args:
            connection_string: Optional explicit connection string
            settings: Connection settings (default: from environment)
        """
        self._settings = settings
        self._conn_string = connection_string
        self._conn_string_lock = threading.Lock()

    @property
    def conn_string(self) -> str:
        """Get or build connection string (lazy, thread-safe)."""
        if self._conn_string is None:
            with self._conn_string_lock:
                if self._conn_string is None:
                    self._conn_string = self._build_connection_string()
        return self._conn_string

    def _build_connection_string(self) -> str:
        settings = self._settings or get_defaults().database
        conn_str = settings.conninfo()
        logger.debug(f"Connection string built for {settings.database}")
        return conn_str

    @contextmanager
    def get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Yields:
            psycopg connection with dict_row factory
        """
        conn = None
        try:
            logger.debug("Connecting to PostgreSQL...")
            conn = psycopg.connect(self.conn_string, row_factory=dict_row)
            logger.debug("PostgreSQL connection established")
            yield conn

        except psycopg.Error as e:
            logger.error(f"PostgreSQL error: {e}")
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, conn=None):
        """
        Context manager for PostgreSQL cursors.

        Args:
            conn: Optional existing connection (for transactions)

        Yields:
            psycopg cursor
        """
        if conn:
            # Use existing connection - caller controls transaction
            with conn.cursor() as cursor:
                yield cursor
        else:
            # Create new connection with auto-commit
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    yield cursor
                    conn.commit()

    def execute_statements(self, statements: Iterable[Query]) -> int:
        """
        Execute statements in order in one transaction.

        Any failure rolls the whole transaction back.

        Returns:
            Number of statements executed
        """
        count = 0
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                for statement in statements:
                    cur.execute(statement)
                    count += 1
            conn.commit()
        logger.debug(f"Executed {count} statements")
        return count

    def fetch_one(self, query: Query, params: tuple = None) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one result."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_repo: Optional[PostgreSQLRepository] = None
_repo_lock = threading.Lock()


def get_postgres_repository() -> PostgreSQLRepository:
    """Get shared PostgreSQL repository instance."""
    global _default_repo
    if _default_repo is None:
        with _repo_lock:
            if _default_repo is None:
                _default_repo = PostgreSQLRepository()
    return _default_repo


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgreSQLRepository",
    "get_postgres_repository",
]
