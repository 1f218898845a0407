# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Comment and DDL statement generation
# PURPOSE: COMMENT ON generators, table block generators and DDL builders
# CREATED: 19 OCT 2026
# ============================================================================

from pgcomment.schema.sql_generator import (
    GENERATORS,
    PrefixSqlGenerator,
    SqlGenerator,
    TableObjectSqlGenerator,
)
from pgcomment.schema.table_generator import (
    AlterTableGenerator,
    CreateTableGenerator,
    PendingComments,
)
from pgcomment.schema.ddl_utils import (
    CommentQueryBuilder,
    IndexBuilder,
    NamingConvention,
    TableBuilder,
    ViewBuilder,
    TYPE_MAP,
    get_postgres_type,
)

__all__ = [
    # Comment generators
    "SqlGenerator",
    "TableObjectSqlGenerator",
    "PrefixSqlGenerator",
    "GENERATORS",
    # Table blocks
    "PendingComments",
    "CreateTableGenerator",
    "AlterTableGenerator",
    # Utilities
    "CommentQueryBuilder",
    "IndexBuilder",
    "NamingConvention",
    "TableBuilder",
    "ViewBuilder",
    "TYPE_MAP",
    "get_postgres_type",
]
