# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - SQL DDL builders for commented schema objects
# PURPOSE: Naming conventions, table/index/view builders, comment lookup queries
# CREATED: 19 OCT 2026
# EXPORTS: NamingConvention, ColumnBuilder, ConstraintBuilder, TableBuilder,
#          IndexBuilder, ViewBuilder, CommentQueryBuilder, TYPE_MAP
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects for safe execution.
No string concatenation - full SQL composition for injection safety.

Usage:
    from pgcomment.schema.ddl_utils import IndexBuilder, NamingConvention

    idx = IndexDefinition(columns=["name", "dob"])
    cursor.execute(IndexBuilder.create("people", idx))
    # CREATE INDEX "people_name_dob_index" ON "people" ("name", "dob")
"""

import datetime
import decimal
import uuid
from typing import Any, List, Optional, Sequence, Tuple, Union

from psycopg import sql

from pgcomment.contracts import IdentifierLike, Raw, as_identifier
from pgcomment.models import (
    ColumnDefinition,
    ConstraintDefinition,
    ConstraintKind,
    IndexDefinition,
)


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP = {
    # Python native types
    str: "VARCHAR",
    int: "INTEGER",
    float: "DOUBLE PRECISION",
    bool: "BOOLEAN",
    dict: "JSONB",
    list: "JSONB",
    bytes: "BYTEA",
    decimal.Decimal: "NUMERIC",
    datetime.datetime: "TIMESTAMPTZ",
    datetime.date: "DATE",
    datetime.time: "TIME",
    uuid.UUID: "UUID",

    # String representations
    'str': 'VARCHAR',
    'string': 'TEXT',
    'int': 'INTEGER',
    'int64': 'BIGINT',
    'float': 'DOUBLE PRECISION',
    'bool': 'BOOLEAN',
    'boolean': 'BOOLEAN',
    'datetime': 'TIMESTAMPTZ',
    'date': 'DATE',
}

FOREIGN_KEY_ACTIONS = frozenset({"CASCADE", "RESTRICT", "SET NULL", "SET DEFAULT", "NO ACTION"})


def get_postgres_type(column_type: Union[type, str]) -> str:
    """
    Map a column type to a PostgreSQL type name.

    Args:
        column_type: Python type, short alias, or PostgreSQL type string

    Returns:
        PostgreSQL type string. Unknown strings pass through unchanged
        (e.g. "varchar(255)", "numeric(10, 2)").

    Raises:
        ValueError: for a Python type with no mapping
    """
    if column_type in TYPE_MAP:
        return TYPE_MAP[column_type]
    if isinstance(column_type, str):
        return column_type
    raise ValueError(f"No PostgreSQL type mapping for {column_type!r}")


def _relation_name(table: IdentifierLike) -> str:
    """Unqualified relation name of a table identifier."""
    identifier = as_identifier(table)
    return identifier.text if isinstance(identifier, Raw) else identifier.name


def _raw_or_composed(query: Union[str, sql.Composable]) -> sql.Composable:
    return sql.SQL(query) if isinstance(query, str) else query


# ============================================================================
# NAMING CONVENTION
# ============================================================================

class NamingConvention:
    """
    Names given to constraints and indexes that were declared without one.

    The suffixes are appended to the table name:
        primary key  -> <table>_pkey
        foreign key  -> <table>_<first column>_fkey
        index        -> <table>_<col1>_<col2>_index
        unique       -> <table>_<col1>_<col2>_key
    """

    @staticmethod
    def _columns(columns: Union[str, Sequence[str]]) -> List[str]:
        """Convert single column or sequence to list."""
        if isinstance(columns, str):
            return [columns]
        return [str(c) for c in columns]

    @staticmethod
    def primary_key_suffix() -> str:
        return "_pkey"

    @staticmethod
    def foreign_key_suffix(columns: Union[str, Sequence[str]]) -> str:
        return f"_{NamingConvention._columns(columns)[0]}_fkey"

    @staticmethod
    def index_suffix(columns: Union[str, Sequence[str]]) -> str:
        return "_" + "_".join(NamingConvention._columns(columns)) + "_index"

    @staticmethod
    def unique_suffix(columns: Union[str, Sequence[str]]) -> str:
        return "_" + "_".join(NamingConvention._columns(columns)) + "_key"

    @staticmethod
    def name_for(table: IdentifierLike, suffix: str) -> str:
        """Full object name for ``table`` and ``suffix``, without schema."""
        return _relation_name(table) + suffix


# ============================================================================
# COLUMN AND CONSTRAINT BUILDERS
# ============================================================================

class ColumnBuilder:
    """Builder for column definitions inside CREATE/ALTER TABLE."""

    @staticmethod
    def on_delete(action: Optional[str]) -> sql.Composable:
        if action is None:
            return sql.SQL("")
        action = action.upper().replace("_", " ")
        if action not in FOREIGN_KEY_ACTIONS:
            raise ValueError(f"Unsupported ON DELETE action: {action!r}")
        return sql.SQL(" ON DELETE {}").format(sql.SQL(action))

    @staticmethod
    def definition(column: ColumnDefinition) -> sql.Composed:
        """
        Build a column definition.

        Example:
            "bar_id" INTEGER NOT NULL REFERENCES "bar" ON DELETE CASCADE
        """
        parts: List[sql.Composable] = [
            sql.Identifier(column.name),
            sql.SQL(" "),
            sql.SQL(column.type),
        ]

        if column.primary_key:
            parts.append(sql.SQL(" PRIMARY KEY"))
        elif not column.null:
            parts.append(sql.SQL(" NOT NULL"))

        if column.unique:
            parts.append(sql.SQL(" UNIQUE"))

        if column.default is not None:
            if isinstance(column.default, Raw):
                default = column.default.to_sql()
            else:
                default = sql.Literal(column.default)
            parts.extend([sql.SQL(" DEFAULT "), default])

        if column.references:
            parts.extend([
                sql.SQL(" REFERENCES "),
                as_identifier(column.references).to_sql(),
                ColumnBuilder.on_delete(column.on_delete),
            ])

        return sql.Composed(parts)


class ConstraintBuilder:
    """Builder for table-level constraints."""

    @staticmethod
    def resolved_name(table: IdentifierLike, constraint: ConstraintDefinition) -> Optional[str]:
        """
        Name the constraint will carry in the database.

        Unnamed check constraints have no predictable name and return None.
        """
        if constraint.name:
            return constraint.name
        if constraint.kind == ConstraintKind.PRIMARY_KEY:
            suffix = NamingConvention.primary_key_suffix()
        elif constraint.kind == ConstraintKind.FOREIGN_KEY:
            suffix = NamingConvention.foreign_key_suffix(constraint.columns)
        elif constraint.kind == ConstraintKind.UNIQUE:
            suffix = NamingConvention.unique_suffix(constraint.columns)
        else:
            return None
        return NamingConvention.name_for(table, suffix)

    @staticmethod
    def definition(table: IdentifierLike, constraint: ConstraintDefinition) -> sql.Composed:
        """
        Build a table constraint.

        Example:
            CONSTRAINT "foo_name_fkey" FOREIGN KEY ("name", "dob") REFERENCES "bar"
        """
        columns = sql.SQL(", ").join(sql.Identifier(c) for c in constraint.columns)

        if constraint.kind == ConstraintKind.PRIMARY_KEY:
            body = sql.SQL("PRIMARY KEY ({})").format(columns)
        elif constraint.kind == ConstraintKind.UNIQUE:
            body = sql.SQL("UNIQUE ({})").format(columns)
        elif constraint.kind == ConstraintKind.FOREIGN_KEY:
            body = sql.SQL("FOREIGN KEY ({}) REFERENCES {}").format(
                columns,
                as_identifier(constraint.references).to_sql(),
            )
            if constraint.referenced_columns:
                body = sql.SQL("{} ({})").format(
                    body,
                    sql.SQL(", ").join(sql.Identifier(c) for c in constraint.referenced_columns),
                )
            body = sql.Composed([body, ColumnBuilder.on_delete(constraint.on_delete)])
        else:
            body = sql.SQL("CHECK ({})").format(sql.SQL(constraint.check))

        name = ConstraintBuilder.resolved_name(table, constraint)
        if name is None:
            return sql.Composed([body])
        return sql.SQL("CONSTRAINT {} {}").format(sql.Identifier(name), body)


# ============================================================================
# TABLE, INDEX AND VIEW BUILDERS
# ============================================================================

class TableBuilder:
    """Builder for CREATE TABLE statements."""

    @staticmethod
    def create_table(
        table: IdentifierLike,
        columns: Sequence[ColumnDefinition],
        constraints: Sequence[ConstraintDefinition] = (),
        if_not_exists: bool = False,
    ) -> sql.Composed:
        """
        Create table from column and constraint definitions.

        Returns:
            sql.Composed CREATE TABLE statement
        """
        parts = [ColumnBuilder.definition(c) for c in columns]
        parts.extend(ConstraintBuilder.definition(table, c) for c in constraints)

        return sql.SQL("CREATE TABLE {exists}{table} ({parts})").format(
            exists=sql.SQL("IF NOT EXISTS " if if_not_exists else ""),
            table=as_identifier(table).to_sql(),
            parts=sql.SQL(", ").join(parts),
        )

    @staticmethod
    def create_table_as(
        table: IdentifierLike,
        query: Union[str, sql.Composable],
    ) -> sql.Composed:
        """Create table from a query (raw SQL or composed)."""
        return sql.SQL("CREATE TABLE {} AS {}").format(
            as_identifier(table).to_sql(),
            _raw_or_composed(query),
        )


class IndexBuilder:
    """
    Builder for PostgreSQL index DDL statements.

    All methods are static and return sql.Composed objects.
    """

    @staticmethod
    def resolved_name(table: IdentifierLike, index: IndexDefinition) -> str:
        return index.name or NamingConvention.name_for(
            table, NamingConvention.index_suffix(index.columns)
        )

    @staticmethod
    def create(table: IdentifierLike, index: IndexDefinition) -> sql.Composed:
        """
        Create index.

        Args:
            table: Table identifier (may be schema-qualified)
            index: Index definition

        Returns:
            sql.Composed CREATE INDEX statement
        """
        stmt = sql.SQL("CREATE {unique}INDEX {name} ON {table}{using} ({columns})").format(
            unique=sql.SQL("UNIQUE " if index.unique else ""),
            name=sql.Identifier(IndexBuilder.resolved_name(table, index)),
            table=as_identifier(table).to_sql(),
            using=sql.SQL(" USING {}").format(sql.SQL(index.using)) if index.using else sql.SQL(""),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in index.columns),
        )

        if index.where:
            stmt = sql.SQL("{} WHERE {}").format(stmt, sql.SQL(index.where))

        return stmt


class ViewBuilder:
    """Builder for CREATE VIEW statements."""

    @staticmethod
    def create_view(
        name: IdentifierLike,
        query: Union[str, sql.Composable],
        materialized: bool = False,
        replace: bool = False,
    ) -> sql.Composed:
        if materialized and replace:
            raise ValueError("Materialized views cannot be created with OR REPLACE")

        return sql.SQL("CREATE {replace}{kind} {name} AS {query}").format(
            replace=sql.SQL("OR REPLACE " if replace else ""),
            kind=sql.SQL("MATERIALIZED VIEW" if materialized else "VIEW"),
            name=as_identifier(name).to_sql(),
            query=_raw_or_composed(query),
        )


# ============================================================================
# COMMENT LOOKUP QUERIES
# ============================================================================

class CommentQueryBuilder:
    """
    Queries that read comments back from the system catalogs.

    Both queries resolve the relation through a regclass cast, so names
    follow the search_path and may be schema-qualified.
    """

    OBJECT_COMMENT = sql.SQL(
        "SELECT obj_description(CAST(%s AS regclass), 'pg_class') AS comment"
    )

    COLUMN_COMMENT = sql.SQL(
        "SELECT col_description(c.oid, a.attnum) AS comment "
        "FROM pg_class c "
        "JOIN pg_attribute a ON (c.oid = a.attrelid) "
        "WHERE c.oid = CAST(%s AS regclass) AND a.attname = %s"
    )

    @staticmethod
    def regclass_text(relation: IdentifierLike) -> str:
        """Text to cast to regclass: quoted for names, verbatim for raw SQL."""
        identifier = as_identifier(relation)
        if isinstance(identifier, Raw):
            return identifier.text
        return identifier.to_sql().as_string(None)

    @staticmethod
    def object_comment(relation: IdentifierLike) -> Tuple[sql.SQL, Tuple[Any, ...]]:
        """Query and params for a table/view/index/sequence comment."""
        return CommentQueryBuilder.OBJECT_COMMENT, (CommentQueryBuilder.regclass_text(relation),)

    @staticmethod
    def column_comment(
        table: IdentifierLike,
        column: IdentifierLike,
    ) -> Tuple[sql.SQL, Tuple[Any, ...]]:
        """Query and params for a column comment."""
        return CommentQueryBuilder.COLUMN_COMMENT, (
            CommentQueryBuilder.regclass_text(table),
            _relation_name(column),
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'TYPE_MAP',
    'FOREIGN_KEY_ACTIONS',
    'get_postgres_type',
    'NamingConvention',
    'ColumnBuilder',
    'ConstraintBuilder',
    'TableBuilder',
    'IndexBuilder',
    'ViewBuilder',
    'CommentQueryBuilder',
]
