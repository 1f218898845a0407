# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for comment handling, database and logging
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Defaults for comment handling, the database connection and logging.
Every value can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from psycopg.conninfo import make_conninfo

from pgcomment.contracts import TABLE_SEPARATOR


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CommentDefaults:
    """
    Defaults for comment generation.

    normalize: run normalize_comment() on comment text before it is applied
    separator: splits "table__column" tokens for columns, constraints etc.
    """
    normalize: bool = True
    separator: str = TABLE_SEPARATOR

    @classmethod
    def from_env(cls) -> "CommentDefaults":
        """Create from environment variables."""
        return cls(
            normalize=_env_flag("PGCOMMENT_NORMALIZE", True),
            separator=os.getenv("PGCOMMENT_SEPARATOR", TABLE_SEPARATOR),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    PostgreSQL connection settings.
    """
    host: Optional[str] = None
    port: int = 5432
    database: Optional[str] = None
    user: str = "postgres"
    password: str = ""
    sslmode: str = "prefer"

    def conninfo(self) -> str:
        """
        Build a libpq connection string.

        Raises:
            ValueError: if host or database is not configured
        """
        if not self.host or not self.database:
            raise ValueError(
                "Database connection not configured. "
                "Set POSTGRES_HOST and POSTGRES_DB environment variables."
            )

        params = {
            "host": self.host,
            "port": self.port,
            "dbname": self.database,
            "user": self.user,
            "sslmode": self.sslmode,
        }
        if self.password:
            params["password"] = self.password
        return make_conninfo(**params)

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            host=os.getenv("POSTGRES_HOST"),
            port=int(os.getenv("POSTGRES_PORT", 5432)),
            database=os.getenv("POSTGRES_DB"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            sslmode=os.getenv("POSTGRES_SSLMODE", "prefer"),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for log output."""
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    comments: CommentDefaults = field(default_factory=CommentDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            comments=CommentDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CommentDefaults",
    "DatabaseDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
