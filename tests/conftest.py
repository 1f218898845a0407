# ============================================================================
# TEST FIXTURES
# ============================================================================
# STATUS: Tests - Shared fixtures
# PURPOSE: Recording statement executor and clean configuration per test
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shared fixtures.

No database is needed: RecordingExecutor stands in for PostgreSQLRepository,
rendering every statement it receives and serving scripted rows to lookups.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from psycopg import sql

from pgcomment.config import CommentDefaults, reset_defaults
from pgcomment.infrastructure import CommentRepository


def render(statement) -> str:
    if isinstance(statement, sql.Composable):
        return statement.as_string(None)
    return statement


class RecordingExecutor:
    """Records statement batches and lookup queries instead of running them."""

    def __init__(self):
        self.batches: List[List[str]] = []
        self.queries: List[Tuple[str, Any]] = []
        self.rows: List[Optional[Dict[str, Any]]] = []

    @property
    def statements(self) -> List[str]:
        return [stmt for batch in self.batches for stmt in batch]

    def execute_statements(self, statements) -> int:
        batch = [render(s) for s in statements]
        self.batches.append(batch)
        return len(batch)

    def fetch_one(self, query, params=None) -> Optional[Dict[str, Any]]:
        self.queries.append((render(query), params))
        if self.rows:
            return self.rows.pop(0)
        return None


PGCOMMENT_ENV = (
    "PGCOMMENT_NORMALIZE",
    "PGCOMMENT_SEPARATOR",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_SSLMODE",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    """Each test starts from built-in defaults."""
    for name in PGCOMMENT_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def repo(executor):
    return CommentRepository(executor=executor, defaults=CommentDefaults())
