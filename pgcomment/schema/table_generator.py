# ============================================================================
# TABLE GENERATORS
# ============================================================================
# STATUS: Core - create_table / alter_table block definitions
# PURPOSE: Collect table DDL and queue comments until the table name is bound
# CREATED: 19 OCT 2026
# EXPORTS: PendingComments, CreateTableGenerator, AlterTableGenerator
# DEPENDENCIES: psycopg, pydantic
# ============================================================================
"""
Table Generators.

A table generator is what the body of a ``create_table`` or ``alter_table``
block talks to. Each definition method records a column, constraint or index
and, when given ``comment=``, queues a comment statement in the generator's
``PendingComments``. The statements are table-relative or name-prefixed and
stay unbound until the repository calls ``comment_statements(table)`` after
all structural DDL for the block has run.

Usage:
    generator = CreateTableGenerator()
    generator.primary_key("id", comment="Surrogate key")
    generator.column("name", str, null=False, comment="Display name")
    generator.index(["name"], comment="Lookup by name")

    generator.create_statements("people")   # CREATE TABLE, CREATE INDEX
    generator.comment_statements("people")  # bound COMMENT ON statements
"""

from typing import Any, Callable, Iterator, List, Optional, Sequence, Union

from psycopg import sql

from pgcomment.contracts import IdentifierLike, ObjectType, as_identifier
from pgcomment.errors import UnsupportedCommentTargetError
from pgcomment.logging import ComponentType, get_logger
from pgcomment.models import (
    ColumnDefinition,
    ConstraintDefinition,
    ConstraintKind,
    IndexDefinition,
)
from pgcomment.normalize import normalize_comment
from pgcomment.schema.ddl_utils import (
    ColumnBuilder,
    ConstraintBuilder,
    IndexBuilder,
    NamingConvention,
    TableBuilder,
    get_postgres_type,
)
from pgcomment.schema.sql_generator import PrefixSqlGenerator, SqlGenerator

logger = get_logger(__name__, ComponentType.GENERATOR)

Columns = Union[str, Sequence[str]]


def _is_composite(columns: Any) -> bool:
    return isinstance(columns, (list, tuple))


class PendingComments:
    """
    Comment statements queued inside a table block, in declaration order.

    Statements are held unbound; ``bind`` returns bound copies and leaves the
    queue untouched.
    """

    def __init__(self):
        self._statements: List[SqlGenerator] = []

    def add(self, statement: SqlGenerator) -> SqlGenerator:
        self._statements.append(statement)
        return statement

    def bind(self, table_name: IdentifierLike) -> List[SqlGenerator]:
        """Bind every queued statement to ``table_name``."""
        return [statement.bind(table_name) for statement in self._statements]

    def __iter__(self) -> Iterator[SqlGenerator]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)


class _TableGenerator:
    """Comment handling shared by the create and alter table generators."""

    def __init__(
        self,
        comments: Optional[PendingComments] = None,
        normalize: bool = False,
    ):
        self.comments = comments if comments is not None else PendingComments()
        self._prepare: Callable[[str], str] = normalize_comment if normalize else str

    def _comment(self, object_type: ObjectType, name: Any, comment: str) -> None:
        self.comments.add(SqlGenerator.create(object_type, name, self._prepare(comment)))

    def _column_comment(self, column: str, comment: Optional[str]) -> None:
        if comment is not None:
            # Explicit pair: column names containing "__" are never split
            self._comment(ObjectType.COLUMN, (None, column), comment)

    def _prefixed_comment(self, object_type: ObjectType, suffix: str, comment: str) -> None:
        self.comments.add(PrefixSqlGenerator(object_type, suffix, self._prepare(comment)))

    def _index_comment(self, name: Optional[str], suffix: str, comment: Optional[str]) -> None:
        if comment is None:
            return
        if name:
            self._comment(ObjectType.INDEX, name, comment)
        else:
            self._prefixed_comment(ObjectType.INDEX, suffix, comment)

    def _constraint_comment(self, name: Optional[str], suffix: str, comment: Optional[str]) -> None:
        if comment is None:
            return
        if name:
            self._comment(ObjectType.CONSTRAINT, (None, name), comment)
        else:
            self._prefixed_comment(ObjectType.CONSTRAINT, suffix, comment)

    def comment_statements(self, table: IdentifierLike) -> List[SqlGenerator]:
        """Queued comment statements, bound to ``table``."""
        return self.comments.bind(table)


# ============================================================================
# CREATE TABLE
# ============================================================================

class CreateTableGenerator(_TableGenerator):
    """
    Definitions collected inside a ``create_table`` block.

    Primary keys, foreign keys and unique constraints declared over several
    columns become table constraints; their comments go on the backing index
    (primary key, unique) or on the constraint (foreign key).
    """

    def __init__(
        self,
        comments: Optional[PendingComments] = None,
        normalize: bool = False,
    ):
        super().__init__(comments, normalize)
        self.columns: List[ColumnDefinition] = []
        self.constraints: List[ConstraintDefinition] = []
        self.indexes: List[IndexDefinition] = []

    def column(
        self,
        name: str,
        column_type: Any,
        *,
        null: bool = True,
        default: Any = None,
        primary_key: bool = False,
        unique: bool = False,
        references: Optional[str] = None,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ColumnDefinition:
        """Define a column; ``comment`` goes on the column."""
        definition = ColumnDefinition(
            name=name,
            type=get_postgres_type(column_type),
            null=null,
            default=default,
            primary_key=primary_key,
            unique=unique,
            references=references,
            on_delete=on_delete,
            comment=comment,
        )
        self.columns.append(definition)
        self._column_comment(name, comment)
        return definition

    def primary_key(
        self,
        column: Columns,
        column_type: Any = "SERIAL",
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ):
        """
        Define the primary key.

        A single column name adds a key column (commented on the column).
        A list of columns adds a composite key constraint (commented on its
        index, ``name`` or ``<table>_pkey``).
        """
        if _is_composite(column):
            return self.composite_primary_key(column, name=name, comment=comment)
        return self.column(column, column_type, primary_key=True, comment=comment)

    def composite_primary_key(
        self,
        columns: Sequence[str],
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        definition = ConstraintDefinition(
            kind=ConstraintKind.PRIMARY_KEY, name=name, columns=columns, comment=comment
        )
        self.constraints.append(definition)
        self._index_comment(name, NamingConvention.primary_key_suffix(), comment)
        return definition

    def foreign_key(
        self,
        column: Columns,
        table: str,
        column_type: Any = "INTEGER",
        *,
        name: Optional[str] = None,
        null: bool = True,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ):
        """
        Define a foreign key.

        A single column adds a referencing column (commented on the column).
        A list of columns adds a constraint (commented on the constraint,
        ``name`` or ``<table>_<first column>_fkey``).
        """
        if _is_composite(column):
            return self.composite_foreign_key(
                column, table, name=name, on_delete=on_delete, comment=comment
            )
        return self.column(
            column,
            column_type,
            null=null,
            references=table,
            on_delete=on_delete,
            comment=comment,
        )

    def composite_foreign_key(
        self,
        columns: Sequence[str],
        table: str,
        *,
        referenced_columns: Optional[Sequence[str]] = None,
        name: Optional[str] = None,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        definition = ConstraintDefinition(
            kind=ConstraintKind.FOREIGN_KEY,
            name=name,
            columns=columns,
            references=table,
            referenced_columns=referenced_columns or [],
            on_delete=on_delete,
            comment=comment,
        )
        self.constraints.append(definition)
        self._constraint_comment(name, NamingConvention.foreign_key_suffix(columns), comment)
        return definition

    def index(
        self,
        columns: Columns,
        *,
        name: Optional[str] = None,
        unique: bool = False,
        using: Optional[str] = None,
        where: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> IndexDefinition:
        """Define an index; ``comment`` goes on ``name`` or ``<table>_<cols>_index``."""
        definition = IndexDefinition(
            columns=columns, name=name, unique=unique, using=using, where=where, comment=comment
        )
        self.indexes.append(definition)
        self._index_comment(name, NamingConvention.index_suffix(definition.columns), comment)
        return definition

    def unique(
        self,
        columns: Columns,
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        """Define a unique constraint; ``comment`` goes on its index."""
        definition = ConstraintDefinition(
            kind=ConstraintKind.UNIQUE, name=name, columns=columns, comment=comment
        )
        self.constraints.append(definition)
        self._index_comment(name, NamingConvention.unique_suffix(definition.columns), comment)
        return definition

    def constraint(
        self,
        name: Optional[str],
        check: str,
        *,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        """
        Define a named check constraint.

        Raises:
            UnsupportedCommentTargetError: if ``comment`` is given without a name
        """
        if comment is not None and not name:
            raise UnsupportedCommentTargetError(
                "Setting comments on unnamed or check constraints is not supported",
                object_type=ObjectType.CONSTRAINT.value,
            )
        definition = ConstraintDefinition(
            kind=ConstraintKind.CHECK, name=name, check=check, comment=comment
        )
        self.constraints.append(definition)
        if comment is not None:
            self._comment(ObjectType.CONSTRAINT, (None, name), comment)
        return definition

    def check(self, expression: str, *, comment: Optional[str] = None) -> ConstraintDefinition:
        """
        Define an unnamed check constraint.

        Raises:
            UnsupportedCommentTargetError: if ``comment`` is given
        """
        return self.constraint(None, expression, comment=comment)

    def create_statements(
        self,
        table: IdentifierLike,
        if_not_exists: bool = False,
    ) -> List[sql.Composed]:
        """CREATE TABLE followed by CREATE INDEX statements."""
        statements = [
            TableBuilder.create_table(table, self.columns, self.constraints, if_not_exists)
        ]
        statements.extend(IndexBuilder.create(table, index) for index in self.indexes)
        return statements


# ============================================================================
# ALTER TABLE
# ============================================================================

class AlterTableGenerator(_TableGenerator):
    """
    Operations collected inside an ``alter_table`` block.

    Table alterations are rendered as a single ALTER TABLE statement; indexes
    are created separately afterwards.
    """

    def __init__(
        self,
        comments: Optional[PendingComments] = None,
        normalize: bool = False,
    ):
        super().__init__(comments, normalize)
        self.operations: List[Any] = []
        self.indexes: List[IndexDefinition] = []

    def add_column(
        self,
        name: str,
        column_type: Any,
        *,
        null: bool = True,
        default: Any = None,
        primary_key: bool = False,
        unique: bool = False,
        references: Optional[str] = None,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ColumnDefinition:
        """Add a column; ``comment`` goes on the column."""
        definition = ColumnDefinition(
            name=name,
            type=get_postgres_type(column_type),
            null=null,
            default=default,
            primary_key=primary_key,
            unique=unique,
            references=references,
            on_delete=on_delete,
            comment=comment,
        )
        self.operations.append(definition)
        self._column_comment(name, comment)
        return definition

    def add_primary_key(
        self,
        column: Columns,
        column_type: Any = "SERIAL",
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ):
        """Add a key column, or a composite key constraint for a list of columns."""
        if _is_composite(column):
            return self.add_composite_primary_key(column, name=name, comment=comment)
        return self.add_column(column, column_type, primary_key=True, comment=comment)

    def add_composite_primary_key(
        self,
        columns: Sequence[str],
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        definition = ConstraintDefinition(
            kind=ConstraintKind.PRIMARY_KEY, name=name, columns=columns, comment=comment
        )
        self.operations.append(definition)
        self._index_comment(name, NamingConvention.primary_key_suffix(), comment)
        return definition

    def add_foreign_key(
        self,
        column: Columns,
        table: str,
        column_type: Any = "INTEGER",
        *,
        name: Optional[str] = None,
        null: bool = True,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ):
        """Add a referencing column, or a constraint for a list of columns."""
        if _is_composite(column):
            return self.add_composite_foreign_key(
                column, table, name=name, on_delete=on_delete, comment=comment
            )
        return self.add_column(
            column,
            column_type,
            null=null,
            references=table,
            on_delete=on_delete,
            comment=comment,
        )

    def add_composite_foreign_key(
        self,
        columns: Sequence[str],
        table: str,
        *,
        referenced_columns: Optional[Sequence[str]] = None,
        name: Optional[str] = None,
        on_delete: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        definition = ConstraintDefinition(
            kind=ConstraintKind.FOREIGN_KEY,
            name=name,
            columns=columns,
            references=table,
            referenced_columns=referenced_columns or [],
            on_delete=on_delete,
            comment=comment,
        )
        self.operations.append(definition)
        self._constraint_comment(name, NamingConvention.foreign_key_suffix(columns), comment)
        return definition

    def add_index(
        self,
        columns: Columns,
        *,
        name: Optional[str] = None,
        unique: bool = False,
        using: Optional[str] = None,
        where: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> IndexDefinition:
        definition = IndexDefinition(
            columns=columns, name=name, unique=unique, using=using, where=where, comment=comment
        )
        self.indexes.append(definition)
        self._index_comment(name, NamingConvention.index_suffix(definition.columns), comment)
        return definition

    def add_constraint(
        self,
        name: Optional[str],
        check: str,
        *,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        """
        Add a check constraint.

        Raises:
            UnsupportedCommentTargetError: if ``comment`` is given without a name
        """
        if comment is not None and not name:
            raise UnsupportedCommentTargetError(
                "Setting comments on unnamed or check constraints is not supported",
                object_type=ObjectType.CONSTRAINT.value,
            )
        definition = ConstraintDefinition(
            kind=ConstraintKind.CHECK, name=name, check=check, comment=comment
        )
        self.operations.append(definition)
        if comment is not None:
            self._comment(ObjectType.CONSTRAINT, (None, name), comment)
        return definition

    def add_unique_constraint(
        self,
        columns: Columns,
        *,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> ConstraintDefinition:
        """Add a unique constraint; ``comment`` goes on its index."""
        definition = ConstraintDefinition(
            kind=ConstraintKind.UNIQUE, name=name, columns=columns, comment=comment
        )
        self.operations.append(definition)
        self._index_comment(name, NamingConvention.unique_suffix(definition.columns), comment)
        return definition

    def alter_statements(self, table: IdentifierLike) -> List[sql.Composed]:
        """ALTER TABLE (when there are table operations) then CREATE INDEX statements."""
        statements: List[sql.Composed] = []

        actions = []
        for operation in self.operations:
            if isinstance(operation, ColumnDefinition):
                actions.append(
                    sql.SQL("ADD COLUMN {}").format(ColumnBuilder.definition(operation))
                )
            else:
                actions.append(
                    sql.SQL("ADD {}").format(ConstraintBuilder.definition(table, operation))
                )

        if actions:
            statements.append(
                sql.SQL("ALTER TABLE {} {}").format(
                    as_identifier(table).to_sql(),
                    sql.SQL(", ").join(actions),
                )
            )

        statements.extend(IndexBuilder.create(table, index) for index in self.indexes)
        logger.debug(f"Built {len(statements)} ALTER statements for {table}")
        return statements


__all__ = [
    "PendingComments",
    "CreateTableGenerator",
    "AlterTableGenerator",
]
