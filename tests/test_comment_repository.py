# ============================================================================
# COMMENT REPOSITORY TESTS
# ============================================================================
# STATUS: Tests - Commented schema operations and comment lookup
# PURPOSE: Verify statement batches produced by each repository operation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Comment Repository Tests

Unit tests for CommentRepository against a recording executor:
- comment_on / comment_for / table_comment / comment_for_column
- create_table blocks, create_table_as, create_view, create_join_table
- alter_table blocks
- dry run and failure behaviour

Run with:
    pytest tests/test_comment_repository.py -v
"""

import pytest

from pgcomment.config import CommentDefaults
from pgcomment.contracts import Name, Raw
from pgcomment.errors import (
    InvalidIdentifierTypeError,
    MissingTableNameError,
    UnrecognizedTypeError,
    UnsupportedCommentTargetError,
)
from pgcomment.infrastructure import CommentRepository
from pgcomment.schema.ddl_utils import CommentQueryBuilder


OBJECT_QUERY = CommentQueryBuilder.OBJECT_COMMENT.as_string(None)
COLUMN_QUERY = CommentQueryBuilder.COLUMN_COMMENT.as_string(None)


# ============================================================================
# COMMENT ON
# ============================================================================


class TestCommentOn:
    def test_table(self, repo, executor):
        result = repo.comment_on("table", "foo", "Ohai!")
        assert result == "COMMENT ON TABLE \"foo\" IS 'Ohai!'"
        assert executor.batches == [[result]]

    def test_column_token(self, repo, executor):
        repo.comment_on("column", "foo__bar_id", "Ohai, column!")
        assert executor.statements == [
            "COMMENT ON COLUMN \"foo\".\"bar_id\" IS 'Ohai, column!'",
        ]

    def test_backslash_kept_verbatim(self, repo, executor):
        repo.comment_on("table", "foo", "Files live in C:\\data")
        assert executor.statements == ["COMMENT ON TABLE \"foo\" IS 'Files live in C:\\data'"]

    def test_none_comment_is_empty(self, repo, executor):
        repo.comment_on("table", "foo", None)
        assert executor.statements == ["COMMENT ON TABLE \"foo\" IS ''"]

    def test_normalized_by_default(self, repo, executor):
        repo.comment_on("table", "foo", "\n  Ohai\n  there\n")
        assert executor.statements == ["COMMENT ON TABLE \"foo\" IS 'Ohai\nthere'"]

    def test_normalize_disabled(self, executor):
        repo = CommentRepository(executor=executor, defaults=CommentDefaults(normalize=False))
        repo.comment_on("table", "foo", "  Ohai")
        assert executor.statements == ["COMMENT ON TABLE \"foo\" IS '  Ohai'"]

    def test_custom_separator(self, executor):
        repo = CommentRepository(executor=executor, defaults=CommentDefaults(separator="."))
        repo.comment_on("column", "foo.bar", "x")
        assert executor.statements == ["COMMENT ON COLUMN \"foo\".\"bar\" IS 'x'"]

    def test_unknown_type(self, repo, executor):
        with pytest.raises(UnrecognizedTypeError):
            repo.comment_on("tabel", "foo", "x")
        assert executor.batches == []

    def test_column_without_table(self, repo, executor):
        with pytest.raises(MissingTableNameError):
            repo.comment_on("column", "bar_id", "x")
        assert executor.batches == []

    def test_dry_run(self, executor):
        repo = CommentRepository(executor=executor, defaults=CommentDefaults(), dry_run=True)
        assert repo.comment_on("table", "foo", "x") == "COMMENT ON TABLE \"foo\" IS 'x'"
        assert executor.batches == []

    def test_executor_errors_propagate(self, executor):
        class Boom(Exception):
            pass

        def fail(statements):
            raise Boom("connection lost")

        executor.execute_statements = fail
        repo = CommentRepository(executor=executor, defaults=CommentDefaults())
        with pytest.raises(Boom):
            repo.comment_on("table", "foo", "x")


# ============================================================================
# COMMENT LOOKUP
# ============================================================================


class TestCommentFor:
    def test_table(self, repo, executor):
        executor.rows.append({"comment": "Ohai!"})
        assert repo.comment_for("foo") == "Ohai!"
        assert executor.queries == [(OBJECT_QUERY, ('"foo"',))]

    def test_column_token(self, repo, executor):
        executor.rows.append({"comment": "Ohai, column!"})
        assert repo.comment_for("foo__bar") == "Ohai, column!"
        assert executor.queries == [(COLUMN_QUERY, ('"foo"', "bar"))]

    def test_column_pair(self, repo, executor):
        repo.comment_for(("foo", "bar"))
        assert executor.queries == [(COLUMN_QUERY, ('"foo"', "bar"))]

    def test_schema_qualified(self, repo, executor):
        repo.comment_for(Name("public", "foo"))
        assert executor.queries == [(OBJECT_QUERY, ('"public"."foo"',))]

    def test_raw_relation(self, repo, executor):
        repo.comment_for(Raw("public.foo__bar"))
        assert executor.queries == [(OBJECT_QUERY, ("public.foo__bar",))]

    def test_no_row(self, repo, executor):
        assert repo.comment_for("foo") is None

    def test_null_description(self, repo, executor):
        executor.rows.append({"comment": None})
        assert repo.comment_for("foo") is None

    def test_empty_comment(self, repo, executor):
        executor.rows.append({"comment": ""})
        assert repo.comment_for("foo") == ""

    def test_bad_pair(self, repo):
        with pytest.raises(InvalidIdentifierTypeError):
            repo.comment_for(("a", "b", "c"))

    def test_table_comment(self, repo, executor):
        executor.rows.append({"comment": "t"})
        assert repo.table_comment("foo__bar") == "t"
        assert executor.queries == [(OBJECT_QUERY, ('"foo__bar"',))]

    def test_comment_for_column(self, repo, executor):
        executor.rows.append({"comment": "c"})
        assert repo.comment_for_column("foo", "bar") == "c"
        assert executor.queries == [(COLUMN_QUERY, ('"foo"', "bar"))]


# ============================================================================
# CREATE TABLE
# ============================================================================


class TestCreateTable:
    def test_full_block(self, repo, executor):
        with repo.create_table("foo", comment="Ohai!") as t:
            t.primary_key("id", comment="Identifier")
            t.column("name", "text", null=False, comment="Name")
            t.index("name", comment="Lookup")

        assert executor.batches == [[
            'CREATE TABLE "foo" ("id" SERIAL PRIMARY KEY, "name" text NOT NULL)',
            'CREATE INDEX "foo_name_index" ON "foo" ("name")',
            "COMMENT ON COLUMN \"foo\".\"id\" IS 'Identifier'",
            "COMMENT ON COLUMN \"foo\".\"name\" IS 'Name'",
            "COMMENT ON INDEX \"foo_name_index\" IS 'Lookup'",
            "COMMENT ON TABLE \"foo\" IS 'Ohai!'",
        ]]

    def test_table_comment_only(self, repo, executor):
        with repo.create_table("foo", comment="Ohai!") as t:
            t.column("id", int)
        assert executor.statements == [
            'CREATE TABLE "foo" ("id" INTEGER)',
            "COMMENT ON TABLE \"foo\" IS 'Ohai!'",
        ]

    def test_composite_primary_key(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("a", int)
            t.column("b", int)
            t.primary_key(["a", "b"], comment="Composite")
        assert executor.statements[-1] == "COMMENT ON INDEX \"foo_pkey\" IS 'Composite'"

    def test_named_composite_primary_key(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("a", int)
            t.column("b", int)
            t.composite_primary_key(["a", "b"], name="foo_ab", comment="Composite")
        assert 'CONSTRAINT "foo_ab" PRIMARY KEY ("a", "b")' in executor.statements[0]
        assert executor.statements[-1] == "COMMENT ON INDEX \"foo_ab\" IS 'Composite'"

    def test_foreign_key_column(self, repo, executor):
        with repo.create_table("foo") as t:
            t.foreign_key("bar_id", "bar", on_delete="cascade", comment="Over there!")
        assert executor.statements == [
            'CREATE TABLE "foo" ("bar_id" INTEGER REFERENCES "bar" ON DELETE CASCADE)',
            "COMMENT ON COLUMN \"foo\".\"bar_id\" IS 'Over there!'",
        ]

    def test_composite_foreign_key(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("name", "text")
            t.column("dob", "date")
            t.foreign_key(["name", "dob"], "bar", comment="Over there!")
        assert executor.statements == [
            'CREATE TABLE "foo" ("name" text, "dob" date, '
            'CONSTRAINT "foo_name_fkey" FOREIGN KEY ("name", "dob") REFERENCES "bar")',
            "COMMENT ON CONSTRAINT \"foo_name_fkey\" ON \"foo\" IS 'Over there!'",
        ]

    def test_named_composite_foreign_key(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("name", "text")
            t.column("dob", "date")
            t.composite_foreign_key(
                ["name", "dob"], "bar", name="not_for_you", comment="Over there!"
            )
        assert executor.statements[-1] == (
            "COMMENT ON CONSTRAINT \"not_for_you\" ON \"foo\" IS 'Over there!'"
        )

    def test_unique(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("name", "text")
            t.column("dob", "date")
            t.unique(["name", "dob"], comment="One each")
        assert 'CONSTRAINT "foo_name_dob_key" UNIQUE ("name", "dob")' in executor.statements[0]
        assert executor.statements[-1] == "COMMENT ON INDEX \"foo_name_dob_key\" IS 'One each'"

    def test_named_index(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("name", "text")
            t.index("name", name="by_name", comment="Lookup")
        assert executor.statements == [
            'CREATE TABLE "foo" ("name" text)',
            'CREATE INDEX "by_name" ON "foo" ("name")',
            "COMMENT ON INDEX \"by_name\" IS 'Lookup'",
        ]

    def test_named_check_constraint(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("id", int)
            t.constraint("positive", "id > 0", comment="Positive")
        assert executor.statements == [
            'CREATE TABLE "foo" ("id" INTEGER, CONSTRAINT "positive" CHECK (id > 0))',
            "COMMENT ON CONSTRAINT \"positive\" ON \"foo\" IS 'Positive'",
        ]

    def test_unnamed_constraint_comment(self, repo, executor):
        with pytest.raises(UnsupportedCommentTargetError, match="not supported"):
            with repo.create_table("foo") as t:
                t.column("id", int)
                t.constraint(None, "id > 0", comment="Nope")
        assert executor.batches == []

    def test_check_comment(self, repo, executor):
        with pytest.raises(UnsupportedCommentTargetError, match="not supported"):
            with repo.create_table("foo") as t:
                t.check("id > 0", comment="Nope")
        assert executor.batches == []

    def test_block_error_runs_nothing(self, repo, executor):
        with pytest.raises(RuntimeError):
            with repo.create_table("foo", comment="Ohai!") as t:
                t.column("id", int, comment="x")
                raise RuntimeError("changed my mind")
        assert executor.batches == []

    def test_schema_qualified_table(self, repo, executor):
        with repo.create_table(Name("s", "foo")) as t:
            t.column("name", "text", comment="Name")
            t.index("name", comment="Lookup")
        assert executor.statements == [
            'CREATE TABLE "s"."foo" ("name" text)',
            'CREATE INDEX "foo_name_index" ON "s"."foo" ("name")',
            "COMMENT ON COLUMN \"s\".\"foo\".\"name\" IS 'Name'",
            "COMMENT ON INDEX \"s\".\"foo_name_index\" IS 'Lookup'",
        ]

    def test_column_name_with_separator(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("bar__baz", "text", comment="Not split")
        assert executor.statements[-1] == "COMMENT ON COLUMN \"foo\".\"bar__baz\" IS 'Not split'"

    def test_block_comments_normalized(self, repo, executor):
        with repo.create_table("foo", comment="\n    Table\n    text\n") as t:
            t.column("id", int, comment="\n    Column\n      text\n")
        assert executor.statements[1:] == [
            "COMMENT ON COLUMN \"foo\".\"id\" IS 'Column\n  text'",
            "COMMENT ON TABLE \"foo\" IS 'Table\ntext'",
        ]

    def test_raw_default(self, repo, executor):
        with repo.create_table("foo") as t:
            t.column("created_at", "timestamptz", null=False, default=Raw("now()"))
        assert executor.statements == [
            'CREATE TABLE "foo" ("created_at" timestamptz NOT NULL DEFAULT now())',
        ]

    def test_if_not_exists(self, repo, executor):
        with repo.create_table("foo", if_not_exists=True) as t:
            t.column("id", int)
        assert executor.statements == ['CREATE TABLE IF NOT EXISTS "foo" ("id" INTEGER)']


class TestCreateTableAs:
    def test_with_comment(self, repo, executor):
        repo.create_table_as("foo", "SELECT 1 AS a", comment="Copied")
        assert executor.batches == [[
            'CREATE TABLE "foo" AS SELECT 1 AS a',
            "COMMENT ON TABLE \"foo\" IS 'Copied'",
        ]]

    def test_without_comment(self, repo, executor):
        repo.create_table_as("foo", "SELECT 1 AS a")
        assert executor.statements == ['CREATE TABLE "foo" AS SELECT 1 AS a']


class TestCreateView:
    def test_view(self, repo, executor):
        repo.create_view("v", "SELECT 1", comment="Ohai, view!")
        assert executor.statements == [
            'CREATE VIEW "v" AS SELECT 1',
            "COMMENT ON VIEW \"v\" IS 'Ohai, view!'",
        ]

    def test_materialized_view(self, repo, executor):
        repo.create_view("v", "SELECT 1", materialized=True, comment="Ohai, view!")
        assert executor.statements == [
            'CREATE MATERIALIZED VIEW "v" AS SELECT 1',
            "COMMENT ON MATERIALIZED VIEW \"v\" IS 'Ohai, view!'",
        ]

    def test_replace(self, repo, executor):
        repo.create_view("v", "SELECT 2", replace=True)
        assert executor.statements == ['CREATE OR REPLACE VIEW "v" AS SELECT 2']


class TestCreateJoinTable:
    def test_default_name(self, repo, executor):
        repo.create_join_table({"dog_id": "dogs", "cat_id": "cats"}, comment="Friends")
        assert executor.statements == [
            'CREATE TABLE "cats_dogs" ('
            '"dog_id" INTEGER NOT NULL REFERENCES "dogs", '
            '"cat_id" INTEGER NOT NULL REFERENCES "cats", '
            'CONSTRAINT "cats_dogs_pkey" PRIMARY KEY ("dog_id", "cat_id"))',
            "COMMENT ON TABLE \"cats_dogs\" IS 'Friends'",
        ]

    def test_explicit_name(self, repo, executor):
        repo.create_join_table({"a_id": "a", "b_id": "b"}, name="links", comment="x")
        assert executor.statements[-1] == "COMMENT ON TABLE \"links\" IS 'x'"

    def test_needs_two_columns(self, repo):
        with pytest.raises(ValueError):
            repo.create_join_table({"a_id": "a"})


# ============================================================================
# ALTER TABLE
# ============================================================================


class TestAlterTable:
    def test_add_column(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_column("dob", "date", comment="Birthday")
        assert executor.batches == [[
            'ALTER TABLE "foo" ADD COLUMN "dob" date',
            "COMMENT ON COLUMN \"foo\".\"dob\" IS 'Birthday'",
        ]]

    def test_add_primary_key_column(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_primary_key("id", comment="Identifier")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD COLUMN "id" SERIAL PRIMARY KEY',
            "COMMENT ON COLUMN \"foo\".\"id\" IS 'Identifier'",
        ]

    def test_add_composite_primary_key(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_primary_key(["a", "b"], comment="Composite")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD CONSTRAINT "foo_pkey" PRIMARY KEY ("a", "b")',
            "COMMENT ON INDEX \"foo_pkey\" IS 'Composite'",
        ]

    def test_add_foreign_key_column(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_foreign_key("bar_id", "bar", comment="Over there!")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD COLUMN "bar_id" INTEGER REFERENCES "bar"',
            "COMMENT ON COLUMN \"foo\".\"bar_id\" IS 'Over there!'",
        ]

    def test_add_composite_foreign_key(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_foreign_key(["name"], "bar", comment="Over there!")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD CONSTRAINT "foo_name_fkey" FOREIGN KEY ("name") REFERENCES "bar"',
            "COMMENT ON CONSTRAINT \"foo_name_fkey\" ON \"foo\" IS 'Over there!'",
        ]

    def test_add_named_composite_foreign_key(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_foreign_key(["name"], "bar", name="not_for_you", comment="x")
        assert executor.statements[-1] == (
            "COMMENT ON CONSTRAINT \"not_for_you\" ON \"foo\" IS 'x'"
        )

    def test_add_index(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_index(["name", "dob"], comment="Lookup")
        assert executor.statements == [
            'CREATE INDEX "foo_name_dob_index" ON "foo" ("name", "dob")',
            "COMMENT ON INDEX \"foo_name_dob_index\" IS 'Lookup'",
        ]

    def test_add_constraint(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_constraint("positive", "id > 0", comment="Positive")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD CONSTRAINT "positive" CHECK (id > 0)',
            "COMMENT ON CONSTRAINT \"positive\" ON \"foo\" IS 'Positive'",
        ]

    def test_add_unique_constraint(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_unique_constraint(["name", "dob"], comment="One each")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD CONSTRAINT "foo_name_dob_key" UNIQUE ("name", "dob")',
            "COMMENT ON INDEX \"foo_name_dob_key\" IS 'One each'",
        ]

    def test_add_named_unique_constraint(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_unique_constraint("name", name="uq_name", comment="x")
        assert executor.statements[-1] == "COMMENT ON INDEX \"uq_name\" IS 'x'"

    def test_structure_before_comments(self, repo, executor):
        with repo.alter_table("foo") as t:
            t.add_index("name", comment="Lookup")
            t.add_column("name", "text", comment="Name")
        assert executor.statements == [
            'ALTER TABLE "foo" ADD COLUMN "name" text',
            'CREATE INDEX "foo_name_index" ON "foo" ("name")',
            "COMMENT ON INDEX \"foo_name_index\" IS 'Lookup'",
            "COMMENT ON COLUMN \"foo\".\"name\" IS 'Name'",
        ]

    def test_empty_block_runs_nothing(self, repo, executor):
        with repo.alter_table("foo"):
            pass
        assert executor.batches == []

    def test_block_error_runs_nothing(self, repo, executor):
        with pytest.raises(UnsupportedCommentTargetError):
            with repo.alter_table("foo") as t:
                t.add_column("a", "text", comment="x")
                t.add_constraint(None, "a <> ''", comment="Nope")
        assert executor.batches == []
