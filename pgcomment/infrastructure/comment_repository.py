# ============================================================================
# COMMENT REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Commented schema operations
# PURPOSE: Apply and read object comments alongside schema definition calls
# CREATED: 19 OCT 2026
# EXPORTS: CommentRepository, StatementExecutor
# DEPENDENCIES: psycopg
# ============================================================================
"""
Comment Repository

Schema operations that accept a ``comment=`` and set it in the same
transaction as the DDL, plus comment lookup.

Usage:
    repo = CommentRepository()

    with repo.create_table("people", comment="Everyone we know") as t:
        t.primary_key("id", comment="Surrogate key")
        t.column("name", str, null=False, comment="Display name")
        t.index("name", comment="Lookup by name")

    repo.comment_on("table", "people", "Everyone we know, and then some")
    repo.comment_for("people__name")
    # 'Display name'

Statements run through a StatementExecutor. By default that is the shared
PostgreSQLRepository; tests pass a recording executor instead.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, Union

from psycopg import sql

from pgcomment.config import CommentDefaults, get_defaults
from pgcomment.contracts import (
    IdentifierLike,
    ObjectType,
    as_identifier,
    split_composite,
)
from pgcomment.errors import InvalidIdentifierTypeError
from pgcomment.logging import ComponentType, get_logger, log_context
from pgcomment.normalize import normalize_comment
from pgcomment.schema.ddl_utils import CommentQueryBuilder, TableBuilder, ViewBuilder
from pgcomment.schema.sql_generator import SqlGenerator
from pgcomment.schema.table_generator import AlterTableGenerator, CreateTableGenerator

logger = get_logger(__name__, ComponentType.REPOSITORY)

Query = Union[str, sql.Composable]


class StatementExecutor(Protocol):
    """Anything that can run a batch of statements and fetch a single row."""

    def execute_statements(self, statements: Sequence[Query]) -> Any:
        ...

    def fetch_one(self, query: Query, params: tuple = None) -> Optional[Dict[str, Any]]:
        ...


class CommentRepository:
    """
    Schema operations with comments, and comment retrieval.

    Every operation builds all of its statements first and hands them to the
    executor as one batch, so a failing definition or comment leaves the
    database untouched.
    """

    def __init__(
        self,
        executor: Optional[StatementExecutor] = None,
        defaults: Optional[CommentDefaults] = None,
        dry_run: bool = False,
    ):
        """
        Args:
            executor: Statement sink (default: shared PostgreSQLRepository)
            defaults: Comment settings (default: from environment)
            dry_run: Log statements instead of executing them
        """
        self._executor = executor
        self.defaults = defaults or get_defaults().comments
        self.dry_run = dry_run

    @property
    def executor(self) -> StatementExecutor:
        if self._executor is None:
            from pgcomment.infrastructure.postgresql import get_postgres_repository
            self._executor = get_postgres_repository()
        return self._executor

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @contextmanager
    def _error_context(self, operation: str, entity: Any = None):
        """Log a failed operation with context, then re-raise unchanged."""
        try:
            yield
        except Exception as e:
            error_msg = f"{operation} failed"
            if entity is not None:
                error_msg += f" for {entity}"
            logger.error(f"{error_msg}: {e}")
            raise

    def _prepare(self, comment: Any) -> str:
        text = "" if comment is None else str(comment)
        return normalize_comment(text) if self.defaults.normalize else text

    def _run(self, statements: List[Query], operation: str) -> List[str]:
        """Execute ``statements`` as one batch; return them rendered."""
        rendered = [
            s.as_string(None) if isinstance(s, sql.Composable) else s
            for s in statements
        ]

        if self.dry_run:
            for stmt in rendered:
                logger.info(f"[DRY RUN] {stmt[:100]}...")
            return rendered

        with self._error_context(operation):
            self.executor.execute_statements(statements)
        logger.info(f"{operation}: executed {len(statements)} statements")
        return rendered

    def _table_comment(
        self,
        object_type: ObjectType,
        name: IdentifierLike,
        comment: Any,
    ) -> sql.Composed:
        return SqlGenerator.create(object_type, name, self._prepare(comment)).compose()

    def _fetch_comment(self, query: sql.SQL, params: Tuple[Any, ...]) -> Optional[str]:
        with self._error_context("comment lookup", params[0]):
            row = self.executor.fetch_one(query, params)
        if row is None:
            return None
        return row["comment"]

    # =========================================================================
    # COMMENTS
    # =========================================================================

    def comment_on(self, object_type: Union[str, ObjectType], object_name: Any, comment: Any) -> str:
        """
        Set the comment on any commentable object.

        Args:
            object_type: Object type tag, e.g. "table", "event_trigger"
            object_name: Identifier; for columns, constraints, rules and
                triggers a "table__object" token or (table, object) pair
            comment: Comment text

        Returns:
            The executed COMMENT ON statement

        Raises:
            UnrecognizedTypeError: unknown object type
            MissingTableNameError: table-relative object without a table
        """
        generator = SqlGenerator.create(
            object_type,
            object_name,
            self._prepare(comment),
            separator=self.defaults.separator,
        )
        with log_context(operation="comment_on", object_type=generator.object_type):
            return self._run([generator.compose()], "comment_on")[0]

    def comment_for(self, object_ref: Any) -> Optional[str]:
        """
        Read the comment on a relation or column.

        Args:
            object_ref: Table, view, index or sequence name; or a column as a
                "table__column" token or (table, column) pair

        Returns:
            The comment, or None when there is none
        """
        if isinstance(object_ref, (tuple, list)):
            if len(object_ref) != 2:
                raise InvalidIdentifierTypeError(
                    "Column reference must be a (table, column) pair",
                    object_type=ObjectType.COLUMN.value,
                    object_name=object_ref,
                )
            return self.comment_for_column(*object_ref)

        column_ref = split_composite(object_ref, self.defaults.separator)
        if column_ref is not None:
            return self.comment_for_column(*column_ref)

        return self.table_comment(object_ref)

    def table_comment(self, table: IdentifierLike) -> Optional[str]:
        """Comment on a table (or any pg_class relation)."""
        return self._fetch_comment(*CommentQueryBuilder.object_comment(table))

    def comment_for_column(self, table: IdentifierLike, column: IdentifierLike) -> Optional[str]:
        """Comment on ``column`` of ``table``."""
        return self._fetch_comment(*CommentQueryBuilder.column_comment(table, column))

    # =========================================================================
    # SCHEMA OPERATIONS
    # =========================================================================

    @contextmanager
    def create_table(
        self,
        name: IdentifierLike,
        *,
        comment: Any = None,
        if_not_exists: bool = False,
    ) -> Iterator[CreateTableGenerator]:
        """
        Create a table from the definitions made in the block.

        Nothing runs if the block raises.

        Example:
            with repo.create_table("foo", comment="Ohai!") as t:
                t.primary_key("id")
                t.column("name", "text", comment="Name")
        """
        generator = CreateTableGenerator(normalize=self.defaults.normalize)
        yield generator

        with log_context(operation="create_table", table=str(as_identifier(name))):
            statements: List[Query] = list(generator.create_statements(name, if_not_exists))
            statements.extend(s.compose() for s in generator.comment_statements(name))
            if comment is not None:
                statements.append(self._table_comment(ObjectType.TABLE, name, comment))
            self._run(statements, "create_table")

    def create_table_as(self, name: IdentifierLike, query: Query, *, comment: Any = None) -> List[str]:
        """Create a table from a query."""
        with log_context(operation="create_table_as", table=str(as_identifier(name))):
            statements: List[Query] = [TableBuilder.create_table_as(name, query)]
            if comment is not None:
                statements.append(self._table_comment(ObjectType.TABLE, name, comment))
            return self._run(statements, "create_table_as")

    def create_view(
        self,
        name: IdentifierLike,
        query: Query,
        *,
        materialized: bool = False,
        replace: bool = False,
        comment: Any = None,
    ) -> List[str]:
        """Create a view (or materialized view), commented as such."""
        object_type = ObjectType.MATERIALIZED_VIEW if materialized else ObjectType.VIEW
        with log_context(
            operation="create_view",
            table=str(as_identifier(name)),
            object_type=object_type.value,
        ):
            statements: List[Query] = [
                ViewBuilder.create_view(name, query, materialized=materialized, replace=replace)
            ]
            if comment is not None:
                statements.append(self._table_comment(object_type, name, comment))
            return self._run(statements, "create_view")

    def create_join_table(
        self,
        columns: Dict[str, str],
        *,
        name: Optional[IdentifierLike] = None,
        comment: Any = None,
    ) -> List[str]:
        """
        Create a many-to-many join table.

        Args:
            columns: Mapping of column name to referenced table
            name: Table name (default: referenced tables sorted, joined by "_")
            comment: Table comment

        Example:
            repo.create_join_table({"cat_id": "cats", "dog_id": "dogs"})
            # CREATE TABLE "cats_dogs" ("cat_id" INTEGER NOT NULL REFERENCES "cats", ...)
        """
        if len(columns) < 2:
            raise ValueError("A join table needs at least two columns")
        if name is None:
            name = "_".join(sorted(columns.values()))

        generator = CreateTableGenerator(normalize=self.defaults.normalize)
        for column, table in columns.items():
            generator.foreign_key(column, table, null=False)
        generator.primary_key(list(columns))

        with log_context(operation="create_join_table", table=str(as_identifier(name))):
            statements: List[Query] = list(generator.create_statements(name))
            if comment is not None:
                statements.append(self._table_comment(ObjectType.TABLE, name, comment))
            return self._run(statements, "create_join_table")

    @contextmanager
    def alter_table(self, name: IdentifierLike) -> Iterator[AlterTableGenerator]:
        """
        Alter a table with the operations made in the block.

        Example:
            with repo.alter_table("foo") as t:
                t.add_column("dob", "date", comment="Date of birth")
        """
        generator = AlterTableGenerator(normalize=self.defaults.normalize)
        yield generator

        with log_context(operation="alter_table", table=str(as_identifier(name))):
            statements: List[Query] = list(generator.alter_statements(name))
            statements.extend(s.compose() for s in generator.comment_statements(name))
            if statements:
                self._run(statements, "alter_table")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CommentRepository",
    "StatementExecutor",
]
