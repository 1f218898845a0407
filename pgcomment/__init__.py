# ============================================================================
# PGCOMMENT PACKAGE
# ============================================================================
# STATUS: Package initialization
# PURPOSE: Export the comment generators, normalizer and repository
# CREATED: 19 OCT 2026
# ============================================================================

from pgcomment.__version__ import __version__
from pgcomment.contracts import Name, ObjectType, Raw
from pgcomment.errors import (
    CommentError,
    InvalidIdentifierTypeError,
    MissingTableNameError,
    UnrecognizedTypeError,
    UnsupportedCommentTargetError,
)
from pgcomment.normalize import normalize_comment
from pgcomment.schema import (
    AlterTableGenerator,
    CreateTableGenerator,
    PendingComments,
    PrefixSqlGenerator,
    SqlGenerator,
    TableObjectSqlGenerator,
)
from pgcomment.infrastructure import CommentRepository, PostgreSQLRepository

__all__ = [
    "__version__",
    # Identifiers
    "Name",
    "Raw",
    "ObjectType",
    # Errors
    "CommentError",
    "InvalidIdentifierTypeError",
    "MissingTableNameError",
    "UnrecognizedTypeError",
    "UnsupportedCommentTargetError",
    # Generators
    "normalize_comment",
    "SqlGenerator",
    "TableObjectSqlGenerator",
    "PrefixSqlGenerator",
    "PendingComments",
    "CreateTableGenerator",
    "AlterTableGenerator",
    # Repositories
    "CommentRepository",
    "PostgreSQLRepository",
]
