# ============================================================================
# TABLE DEFINITION MODELS
# ============================================================================
# STATUS: Core - Pydantic models for table block definitions
# PURPOSE: Columns, constraints and indexes declared in create/alter table blocks
# CREATED: 19 OCT 2026
# EXPORTS: ColumnDefinition, ConstraintKind, ConstraintDefinition, IndexDefinition
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table definition models.

These are the records collected by the table generators while a
``create_table`` or ``alter_table`` block runs. DDL is rendered from them once
the block completes and the table name is known.

Names are plain strings (quoted on output). SQL fragments such as check
expressions, partial index predicates and view queries are raw SQL and are
never quoted.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConstraintKind(str, Enum):
    """Table-level constraint kinds."""
    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    CHECK = "check"


class ColumnDefinition(BaseModel):
    """A column declared in a table block."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="PostgreSQL type name")
    null: bool = True
    default: Optional[Any] = Field(
        default=None,
        description="Literal default value, or Raw for a SQL expression",
    )
    primary_key: bool = False
    unique: bool = False
    references: Optional[str] = Field(default=None, description="Referenced table")
    on_delete: Optional[str] = None
    comment: Optional[str] = None


class ConstraintDefinition(BaseModel):
    """A table-level constraint declared in a table block."""

    kind: ConstraintKind
    name: Optional[str] = None
    columns: List[str] = Field(default_factory=list)
    references: Optional[str] = None
    referenced_columns: List[str] = Field(default_factory=list)
    on_delete: Optional[str] = None
    check: Optional[str] = Field(default=None, description="Raw SQL check expression")
    comment: Optional[str] = None

    @field_validator("columns", "referenced_columns", mode="before")
    @classmethod
    def _listify(cls, value):
        if isinstance(value, str):
            return [value]
        return list(value) if value is not None else []


class IndexDefinition(BaseModel):
    """An index declared in a table block."""

    columns: List[str] = Field(..., min_length=1)
    name: Optional[str] = None
    unique: bool = False
    using: Optional[str] = Field(default=None, description="Index method, e.g. gin")
    where: Optional[str] = Field(default=None, description="Raw SQL partial index predicate")
    comment: Optional[str] = None

    @field_validator("columns", mode="before")
    @classmethod
    def _listify(cls, value):
        if isinstance(value, str):
            return [value]
        return list(value)


__all__ = [
    "ColumnDefinition",
    "ConstraintKind",
    "ConstraintDefinition",
    "IndexDefinition",
]
