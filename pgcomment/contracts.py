# ============================================================================
# OBJECT TYPE CONTRACTS
# ============================================================================
# STATUS: Foundation - Object kinds and identifier types
# PURPOSE: Closed catalogue of commentable PostgreSQL objects, Name/Raw identifiers
# CREATED: 19 OCT 2026
# EXPORTS: ObjectType, STANDALONE_TYPES, CONTAINED_TYPES, Name, Raw,
#          as_identifier, split_composite, join_identifier, canonical_type
# DEPENDENCIES: enum, psycopg
# ============================================================================
"""
Object type and identifier contracts.

Object types are the PostgreSQL names used after ``COMMENT ON``. Tags are
accepted in any case, with underscores in place of spaces, so ``"event_trigger"``,
``"EVENT TRIGGER"`` and ``ObjectType.EVENT_TRIGGER`` all mean the same thing.

Identifiers come in two flavours:

- ``Name``: quoted through ``psycopg.sql.Identifier``. A plain ``str`` is a
  one-part ``Name``.
- ``Raw``: already-quoted SQL, used verbatim. Needed for objects that cannot be
  described by a plain name, such as ``FUNCTION foo(integer, text)``.
"""

from enum import Enum
from typing import Any, Optional, Tuple, Union

from psycopg import sql

from pgcomment.errors import InvalidIdentifierTypeError


# Separates table and object in composite tokens such as "foo__bar_id"
TABLE_SEPARATOR = "__"


# ============================================================================
# OBJECT TYPES
# ============================================================================

class ObjectType(str, Enum):
    """
    PostgreSQL object kinds that accept ``COMMENT ON``.

    Values are the canonical upper-case, space-separated type names.
    """
    AGGREGATE = "AGGREGATE"
    CAST = "CAST"
    COLLATION = "COLLATION"
    CONVERSION = "CONVERSION"
    DATABASE = "DATABASE"
    DOMAIN = "DOMAIN"
    EVENT_TRIGGER = "EVENT TRIGGER"
    EXTENSION = "EXTENSION"
    FOREIGN_DATA_WRAPPER = "FOREIGN DATA WRAPPER"
    FOREIGN_TABLE = "FOREIGN TABLE"
    FUNCTION = "FUNCTION"
    INDEX = "INDEX"
    LARGE_OBJECT = "LARGE OBJECT"
    MATERIALIZED_VIEW = "MATERIALIZED VIEW"
    OPERATOR = "OPERATOR"
    OPERATOR_CLASS = "OPERATOR CLASS"
    OPERATOR_FAMILY = "OPERATOR FAMILY"
    PROCEDURAL_LANGUAGE = "PROCEDURAL LANGUAGE"
    LANGUAGE = "LANGUAGE"
    ROLE = "ROLE"
    SCHEMA = "SCHEMA"
    SEQUENCE = "SEQUENCE"
    SERVER = "SERVER"
    TABLE = "TABLE"
    TABLESPACE = "TABLESPACE"
    TEXT_SEARCH_CONFIGURATION = "TEXT SEARCH CONFIGURATION"
    TEXT_SEARCH_DICTIONARY = "TEXT SEARCH DICTIONARY"
    TEXT_SEARCH_PARSER = "TEXT SEARCH PARSER"
    TEXT_SEARCH_TEMPLATE = "TEXT SEARCH TEMPLATE"
    TYPE = "TYPE"
    VIEW = "VIEW"

    # Addressed relative to their owning table
    COLUMN = "COLUMN"
    CONSTRAINT = "CONSTRAINT"
    RULE = "RULE"
    TRIGGER = "TRIGGER"

    def is_contained(self) -> bool:
        """Check if objects of this kind live inside a table."""
        return self.value in CONTAINED_TYPES


CONTAINED_TYPES = frozenset({"COLUMN", "CONSTRAINT", "RULE", "TRIGGER"})

STANDALONE_TYPES = frozenset(
    member.value for member in ObjectType if member.value not in CONTAINED_TYPES
)


def canonical_type(object_type: Union[str, ObjectType]) -> str:
    """
    Canonicalize an object type tag.

    Uppercases, turns underscores into spaces and trims. The result is not
    checked against the known types; see ``SqlGenerator.create`` for that.
    """
    if isinstance(object_type, ObjectType):
        return object_type.value
    return str(object_type).upper().replace("_", " ").strip()


# ============================================================================
# IDENTIFIERS
# ============================================================================

class Name:
    """
    An identifier that is always quoted, optionally schema-qualified.

    Example:
        Name("foo")            -> "foo"
        Name("public", "foo")  -> "public"."foo"
    """

    __slots__ = ("parts",)

    def __init__(self, *parts: str):
        if not parts or not all(isinstance(p, str) and p for p in parts):
            raise InvalidIdentifierTypeError(
                f"Name parts must be non-empty strings, got {parts!r}",
                object_name=parts,
            )
        self.parts: Tuple[str, ...] = tuple(parts)

    @property
    def name(self) -> str:
        """The unqualified object name (last part)."""
        return self.parts[-1]

    @property
    def schema(self) -> Optional[str]:
        """The qualifying part(s) joined by dots, or None."""
        if len(self.parts) == 1:
            return None
        return ".".join(self.parts[:-1])

    def with_suffix(self, suffix: str) -> "Name":
        """Append ``suffix`` to the object name, keeping any qualification."""
        return Name(*self.parts[:-1], self.parts[-1] + suffix)

    def to_sql(self) -> sql.Identifier:
        return sql.Identifier(*self.parts)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Name) and other.parts == self.parts

    def __hash__(self) -> int:
        return hash(("name", self.parts))

    def __repr__(self) -> str:
        return f"Name({', '.join(repr(p) for p in self.parts)})"

    def __str__(self) -> str:
        return ".".join(self.parts)


class Raw:
    """Already-quoted SQL text, used exactly as given."""

    __slots__ = ("text",)

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise InvalidIdentifierTypeError(
                f"Raw identifier must be a string, got {type(text).__name__}",
                object_name=text,
            )
        self.text = text

    def with_suffix(self, suffix: str) -> "Raw":
        return Raw(self.text + suffix)

    def to_sql(self) -> sql.SQL:
        return sql.SQL(self.text)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Raw) and other.text == self.text

    def __hash__(self) -> int:
        return hash(("raw", self.text))

    def __repr__(self) -> str:
        return f"Raw({self.text!r})"

    def __str__(self) -> str:
        return self.text


Identifier = Union[Name, Raw]
IdentifierLike = Union[str, Name, Raw]


def as_identifier(value: Any) -> Identifier:
    """
    Coerce a caller-supplied identifier into ``Name`` or ``Raw``.

    Raises:
        InvalidIdentifierTypeError: if ``value`` is not a str, Name or Raw
    """
    if isinstance(value, (Name, Raw)):
        return value
    if isinstance(value, str):
        return Name(value)
    raise InvalidIdentifierTypeError(
        f"Invalid identifier {value!r}: must be a str, Name or Raw",
        object_name=value,
    )


def split_composite(
    value: Any,
    separator: str = TABLE_SEPARATOR,
) -> Optional[Tuple[Name, Name]]:
    """
    Split a ``table__object`` token into (table, object) names.

    Only names are split; ``Raw`` text is never inspected. A qualified name
    keeps its schema on the table side: ``Name("s", "t__c")`` gives
    ``(Name("s", "t"), Name("c"))``.

    Returns:
        (table, object) tuple, or None if ``value`` has no separator
    """
    if isinstance(value, str):
        value = Name(value)
    if not isinstance(value, Name):
        return None

    table, sep, local = value.name.partition(separator)
    if not sep or not table or not local:
        return None
    return Name(*value.parts[:-1], table), Name(local)


def join_identifier(table: IdentifierLike, suffix: IdentifierLike) -> Identifier:
    """
    Build ``<table><suffix>`` keeping the quoted/raw nature of the inputs.

    The result is raw only when both sides are raw; otherwise it is a ``Name``
    whose object part carries the suffix.
    """
    table_id = as_identifier(table)
    suffix_id = as_identifier(suffix)

    if isinstance(table_id, Raw) and isinstance(suffix_id, Raw):
        return Raw(table_id.text + suffix_id.text)

    suffix_text = suffix_id.text if isinstance(suffix_id, Raw) else suffix_id.name
    if isinstance(table_id, Raw):
        return Name(table_id.text + suffix_text)
    return table_id.with_suffix(suffix_text)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TABLE_SEPARATOR",
    "ObjectType",
    "CONTAINED_TYPES",
    "STANDALONE_TYPES",
    "canonical_type",
    "Name",
    "Raw",
    "Identifier",
    "IdentifierLike",
    "as_identifier",
    "split_composite",
    "join_identifier",
]
