"""Store factory functions."""

from typing import Optional

from tallybook.config import SheetsConfig, resolve_database_path
from tallybook.domain.errors import ConfigError
from tallybook.store.base import TransactionStore
from tallybook.store.sheets import GoogleSheetsStore
from tallybook.store.sqlalchemy_store import SQLAlchemyStore

STORE_BACKENDS = ("sqlite", "sheets")


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            TALLYBOOK_DB_PATH, then defaults to ~/.tallybook/tallybook.db
    """
    return SQLAlchemyStore(f"sqlite:///{resolve_database_path(database_path)}")


def create_sheets_store(config: Optional[SheetsConfig] = None) -> GoogleSheetsStore:
    """Create a Google Sheets store, reading config from the environment if needed."""
    if config is None:
        config = SheetsConfig.from_env()
    return GoogleSheetsStore(config)


def create_store(
    backend: str = "sqlite",
    database_path: Optional[str] = None,
    sheets_config: Optional[SheetsConfig] = None,
) -> TransactionStore:
    """Create a store for the named backend.

    Raises:
        ConfigError: If the backend is unknown or its config is incomplete
    """
    if backend == "sqlite":
        return create_sqlite_store(database_path)
    if backend == "sheets":
        return create_sheets_store(sheets_config)
    raise ConfigError(
        f"Unknown store backend: '{backend}'. Supported: {', '.join(STORE_BACKENDS)}"
    )
