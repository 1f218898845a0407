# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database operations
# PURPOSE: PostgreSQL connectivity and commented schema operations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for pgcomment.

Provides:
- PostgreSQLRepository: Connection handling and statement execution
- CommentRepository: Schema operations with comments, comment lookup

Usage:
    from pgcomment.infrastructure import CommentRepository

    repo = CommentRepository()
    repo.comment_on("table", "foo", "Ohai!")
    repo.comment_for("foo")
"""

from pgcomment.infrastructure.postgresql import (
    PostgreSQLRepository,
    get_postgres_repository,
)
from pgcomment.infrastructure.comment_repository import (
    CommentRepository,
    StatementExecutor,
)

__all__ = [
    # Connection
    "PostgreSQLRepository",
    "get_postgres_repository",
    # Comments
    "CommentRepository",
    "StatementExecutor",
]
