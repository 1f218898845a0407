# ============================================================================
# COMMENT SQL GENERATOR
# ============================================================================
# STATUS: Core - COMMENT ON statement generation
# PURPOSE: Map (object type, identifier, comment) to the exact COMMENT ON statement
# CREATED: 19 OCT 2026
# EXPORTS: SqlGenerator, TableObjectSqlGenerator, PrefixSqlGenerator, GENERATORS, quote_literal
# DEPENDENCIES: psycopg
# ============================================================================
"""
Comment SQL Generator.

Builds ``COMMENT ON <TYPE> <name>[ ON <table>] IS <literal>`` statements.

Three generators cover every commentable object:

- ``SqlGenerator``: standalone objects named by a single identifier
  (tables, views, indexes, functions, ...).
- ``TableObjectSqlGenerator``: objects that live inside a table (columns,
  constraints, rules, triggers). These can be created before the table name
  is known and bound to it later.
- ``PrefixSqlGenerator``: objects named ``<table><suffix>`` by convention,
  such as the ``<table>_pkey`` index behind a primary key.

Usage:
    gen = SqlGenerator.create("table", "foo", "Ohai!")
    gen.generate()
    # COMMENT ON TABLE "foo" IS 'Ohai!'

    gen = SqlGenerator.create("column", (None, "bar_id"), "Over there!")
    gen.bind("foo").generate()
    # COMMENT ON COLUMN "foo"."bar_id" IS 'Over there!'
"""

import copy
from typing import Any, FrozenSet, Optional, Tuple, Type, Union

from psycopg import sql

from pgcomment.contracts import (
    CONTAINED_TYPES,
    STANDALONE_TYPES,
    TABLE_SEPARATOR,
    Identifier,
    IdentifierLike,
    Name,
    ObjectType,
    Raw,
    as_identifier,
    canonical_type,
    join_identifier,
    split_composite,
)
from pgcomment.errors import (
    InvalidIdentifierTypeError,
    MissingTableNameError,
    UnrecognizedTypeError,
)
from pgcomment.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.GENERATOR)


def quote_literal(text: Any) -> sql.SQL:
    """
    Quote comment text as a standard-conforming string literal.

    Quotes are doubled and backslashes kept as is, so the statement renders
    the same with or without a connection. None is the empty comment.
    """
    text = "" if text is None else str(text)
    return sql.SQL("'" + text.replace("'", "''") + "'")


class SqlGenerator:
    """
    Generate SQL to set a comment on a standalone object.

    Use ``SqlGenerator.create`` rather than instantiating directly, so that
    table-relative object types get the right generator.
    """

    OBJECT_TYPES: FrozenSet[str] = STANDALONE_TYPES

    def __init__(
        self,
        object_type: Union[str, ObjectType],
        object_name: Any,
        comment: Any,
    ):
        self.object_type = canonical_type(object_type)
        self.object_name = object_name
        self.comment = comment

    # =========================================================================
    # DISPATCH
    # =========================================================================

    @classmethod
    def handles(cls, object_type: Union[str, ObjectType]) -> bool:
        """Check if this generator class supports ``object_type``."""
        return canonical_type(object_type) in cls.OBJECT_TYPES

    @staticmethod
    def create(
        object_type: Union[str, ObjectType],
        object_name: Any,
        comment: Any,
        separator: str = TABLE_SEPARATOR,
    ) -> "SqlGenerator":
        """
        Find the generator class for ``object_type`` and instantiate it.

        Args:
            object_type: PostgreSQL object type, any case, underscores or spaces
            object_name: str/Name (quoted) or Raw (verbatim). Table-relative
                types also accept a "table__object" token or a (table, object)
                pair, where the table may be None to bind later.
            comment: The comment text
            separator: Token separator for table-relative types

        Returns:
            A SqlGenerator (or subclass) instance

        Raises:
            UnrecognizedTypeError: if ``object_type`` is not a known type
        """
        for generator_class in GENERATORS:
            if generator_class.handles(object_type):
                if generator_class is TableObjectSqlGenerator:
                    return TableObjectSqlGenerator(
                        object_type, object_name, comment, separator=separator
                    )
                return generator_class(object_type, object_name, comment)

        raise UnrecognizedTypeError(
            f"Unrecognised object type {object_type!r}",
            object_type=str(object_type),
            object_name=object_name,
        )

    # =========================================================================
    # BINDING
    # =========================================================================

    @property
    def needs_table(self) -> bool:
        """True while the statement still waits for its table name."""
        return False

    def bind(self, table_name: IdentifierLike) -> "SqlGenerator":
        """
        Return a statement bound to ``table_name``.

        Standalone objects do not depend on a table, so this is the
        generator itself.
        """
        return self

    # =========================================================================
    # RENDERING
    # =========================================================================

    def compose(self) -> sql.Composed:
        """Build the COMMENT ON statement as a psycopg Composed object."""
        return self._comment_on(as_identifier(self.object_name).to_sql())

    def generate(self, context=None) -> str:
        """
        Render the statement as a SQL string.

        Args:
            context: Optional psycopg connection/cursor used for quoting

        Returns:
            The SQL needed to set the comment
        """
        statement = self.compose().as_string(context)
        logger.debug(f"Generated comment SQL: {statement}")
        return statement

    def _comment_on(self, target: sql.Composable) -> sql.Composed:
        return sql.SQL("COMMENT ON {type} {target} IS {comment}").format(
            type=sql.SQL(self.object_type),
            target=target,
            comment=quote_literal(self.comment),
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.object_type!r}, "
            f"{self.object_name!r}, {self.comment!r})"
        )


class _TableBinding:
    """Deferred ``table_name`` shared by the table-relative generators."""

    _table_name: Optional[Identifier] = None

    @property
    def table_name(self) -> Optional[Identifier]:
        """The owning table, or None while unbound."""
        return self._table_name

    @table_name.setter
    def table_name(self, value: Optional[IdentifierLike]) -> None:
        self._table_name = as_identifier(value) if value is not None else None

    @property
    def needs_table(self) -> bool:
        return self._table_name is None

    def bind(self, table_name: IdentifierLike):
        """Return a copy of this generator bound to ``table_name``."""
        bound = copy.copy(self)
        bound.table_name = table_name
        return bound

    def _require_table(self) -> Identifier:
        if self._table_name is None:
            raise MissingTableNameError(
                f"Cannot generate SQL for {self.object_type} {self.object_name} "
                f"without a table_name",
                object_type=self.object_type,
                object_name=self.object_name,
            )
        return self._table_name


class TableObjectSqlGenerator(_TableBinding, SqlGenerator):
    """
    Generator for objects addressed relative to a table.

    Columns, constraints, rules and triggers can be declared inside a
    ``create_table`` or ``alter_table`` block before the table name is known.
    The generator records what it does know and gets its ``table_name`` bound
    once the block completes.
    """

    OBJECT_TYPES: FrozenSet[str] = CONTAINED_TYPES

    def __init__(
        self,
        object_type: Union[str, ObjectType],
        object_name: Any,
        comment: Any,
        separator: str = TABLE_SEPARATOR,
    ):
        super().__init__(object_type, object_name, comment)

        if isinstance(object_name, (tuple, list)):
            self._table_name, self.object_name = self._split_pair(object_name)
        else:
            composite = split_composite(object_name, separator)
            if composite is not None:
                self._table_name, self.object_name = composite
            else:
                self.object_name = as_identifier(object_name)

    def _split_pair(self, pair) -> Tuple[Optional[Identifier], Identifier]:
        if len(pair) != 2:
            raise InvalidIdentifierTypeError(
                f"Invalid ID for {self.object_type}: must be a (table, object) pair",
                object_type=self.object_type,
                object_name=pair,
            )
        table, local = pair
        return (
            as_identifier(table) if table is not None else None,
            as_identifier(local),
        )

    def compose(self) -> sql.Composed:
        table = self._require_table().to_sql()
        local = self.object_name.to_sql()

        if self.object_type == ObjectType.COLUMN.value:
            target = sql.SQL("{}.{}").format(table, local)
        else:
            target = sql.SQL("{} ON {}").format(local, table)

        return self._comment_on(target)


class PrefixSqlGenerator(_TableBinding, SqlGenerator):
    """
    Generator for objects named ``<table><suffix>``.

    PostgreSQL (and the table generators) name some objects after their table:
    ``foo_pkey`` for the primary key index of ``foo``, ``foo_name_key`` for a
    unique constraint on ``foo.name``. Inside a table block only the suffix is
    known, so this generator is constructed directly with the suffix and bound
    to the table later.

    Dispatch never selects this class; it handles no types of its own.
    """

    OBJECT_TYPES: FrozenSet[str] = frozenset()

    def __init__(
        self,
        object_type: Union[str, ObjectType],
        suffix: IdentifierLike,
        comment: Any,
        table_name: Optional[IdentifierLike] = None,
    ):
        super().__init__(object_type, suffix, comment)
        if self.object_type not in STANDALONE_TYPES | CONTAINED_TYPES:
            raise UnrecognizedTypeError(
                f"Unrecognised object type {object_type!r}",
                object_type=str(object_type),
                object_name=suffix,
            )
        self.table_name = table_name

    @property
    def suffix(self) -> IdentifierLike:
        return self.object_name

    def resolve(self) -> SqlGenerator:
        """
        Build the generator for the resolved ``<table><suffix>`` name.

        Raises:
            MissingTableNameError: if no table name has been bound
            UnrecognizedTypeError: if the object type is unknown
        """
        table = self._require_table()
        prefixed = join_identifier(table, self.object_name)

        if TableObjectSqlGenerator.handles(self.object_type):
            # Constraint names are unqualified; the schema stays on the table.
            # Passing a pair also keeps the name from being re-split.
            local = prefixed if isinstance(prefixed, Raw) else Name(prefixed.name)
            return SqlGenerator.create(self.object_type, (table, local), self.comment)

        return SqlGenerator.create(self.object_type, prefixed, self.comment)

    def compose(self) -> sql.Composed:
        return self.resolve().compose()


# Ordered dispatch table: first match wins
GENERATORS: Tuple[Type[SqlGenerator], ...] = (
    TableObjectSqlGenerator,
    SqlGenerator,
)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SqlGenerator",
    "TableObjectSqlGenerator",
    "PrefixSqlGenerator",
    "GENERATORS",
    "quote_literal",
]
