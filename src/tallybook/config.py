"""Configuration for tallybook stores.

Settings are plain frozen dataclasses built from the environment and passed
to store constructors, so nothing is held at module level.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from tallybook.domain.errors import ConfigError

SHEETS_SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)
DEFAULT_TAB = "Sheet1"
DEFAULT_DB_DIR = ".tallybook"
DEFAULT_DB_NAME = "tallybook.db"


@dataclass(frozen=True)
class SheetsConfig:
    """Google Sheets store settings.

    Credentials come either from an inline service account (email plus
    private key) or from a service account JSON file.
    """

    spreadsheet_id: str
    service_account_email: Optional[str] = None
    private_key: Optional[str] = None
    tab: str = DEFAULT_TAB
    service_account_file: Optional[str] = None

    def __post_init__(self):
        if not self.spreadsheet_id:
            raise ConfigError("GOOGLE_SHEETS_ID is not set")
        has_inline = bool(self.service_account_email and self.private_key)
        if not has_inline and not self.service_account_file:
            raise ConfigError(
                "No Google credentials configured. Set GOOGLE_SERVICE_ACCOUNT_EMAIL "
                "and GOOGLE_PRIVATE_KEY, or GOOGLE_APPLICATION_CREDENTIALS."
            )

    @property
    def range(self) -> str:
        """A1 range covering the six transaction columns."""
        return f"{quote_tab(self.tab)}!A:F"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SheetsConfig":
        """Build config from environment variables.

        Raises:
            ConfigError: If the spreadsheet ID or credentials are missing
        """
        env = os.environ if environ is None else environ
        private_key = env.get("GOOGLE_PRIVATE_KEY")
        if private_key:
            # Keys pasted into .env files keep their newlines escaped
            private_key = private_key.replace("\\n", "\n")
        return cls(
            spreadsheet_id=env.get("GOOGLE_SHEETS_ID", ""),
            service_account_email=env.get("GOOGLE_SERVICE_ACCOUNT_EMAIL") or None,
            private_key=private_key or None,
            tab=env.get("GOOGLE_SHEETS_TAB") or DEFAULT_TAB,
            service_account_file=env.get("GOOGLE_APPLICATION_CREDENTIALS") or None,
        )


def quote_tab(tab: str) -> str:
    """Quote a sheet name for use in an A1 range."""
    if tab.startswith("'") and tab.endswith("'"):
        return tab
    return "'" + tab.replace("'", "''") + "'"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite database path.

    Args:
        database_path: Explicit path. If None, checks TALLYBOOK_DB_PATH, then
            defaults to ~/.tallybook/tallybook.db
    """
    if database_path is None:
        database_path = os.environ.get("TALLYBOOK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / DEFAULT_DB_DIR
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / DEFAULT_DB_NAME)

    return database_path
