# ============================================================================
# COMMENT ERRORS
# ============================================================================
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Errors raised while generating or applying object comments
# CREATED: 19 OCT 2026
# EXPORTS: CommentError, UnrecognizedTypeError, MissingTableNameError,
#          UnsupportedCommentTargetError, InvalidIdentifierTypeError
# ============================================================================
"""
Comment Errors

Every error carries the object type and object name it was raised for (when
known) so callers can report which schema operation failed.

None of these are recoverable: they signal a bad argument or a programming
error in the calling migration, and always propagate to the caller.
"""

from typing import Any, Optional


class CommentError(Exception):
    """Base exception for comment generation and application."""

    def __init__(
        self,
        message: str,
        object_type: Optional[str] = None,
        object_name: Any = None,
    ):
        self.object_type = object_type
        self.object_name = object_name
        super().__init__(message)


class UnrecognizedTypeError(CommentError, ValueError):
    """Raised when an object type tag is not a known PostgreSQL object kind."""


class MissingTableNameError(CommentError):
    """Raised when a table-relative statement is rendered before its table is bound."""


class UnsupportedCommentTargetError(CommentError):
    """Raised when a comment is requested on an object with no deterministic name."""


class InvalidIdentifierTypeError(CommentError, TypeError):
    """Raised when an identifier is neither a name nor a raw SQL string."""


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CommentError",
    "UnrecognizedTypeError",
    "MissingTableNameError",
    "UnsupportedCommentTargetError",
    "InvalidIdentifierTypeError",
]
