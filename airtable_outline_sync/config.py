"""
Configuration management for AirTable → Outline sync.

Loads settings from environment variables and provides
structured, read-only configuration for all sync components.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from airtable_outline_sync.errors import ConfigurationError

DEFAULT_AIRTABLE_BASE_URL = "https://api.airtable.com/v0"
DEFAULT_OUTLINE_BASE_URL = "https://app.getoutline.com/api"
DEFAULT_REQUEST_TIMEOUT = 30  # seconds


def _get(name: str) -> Optional[str]:
    """Read an env var, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _require(name: str, hint: str) -> str:
    value = _get(name)
    if value is None:
        raise ConfigurationError(f"{name} environment variable is required.\n{hint}")
    return value


def _flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


@dataclass(frozen=True)
class Config:
    """
    Central configuration for the sync system.

    Built once per run and never mutated afterwards. All secrets
    come from env vars - never hardcoded.

    If outline_document_id is unset every run creates a new document;
    if set, that document is updated in place.
    """

    # AirTable settings
    airtable_api_key: str
    airtable_base_id: str
    airtable_table_name: str

    # Outline settings
    outline_api_token: str
    outline_team_id: str
    outline_document_id: Optional[str] = None
    outline_collection_id: Optional[str] = None

    # Endpoints
    airtable_base_url: str = DEFAULT_AIRTABLE_BASE_URL
    outline_base_url: str = DEFAULT_OUTLINE_BASE_URL
    airtable_view: Optional[str] = None
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT

    # Sync behavior
    debug: bool = False
    dry_run: bool = False

    @property
    def table_label(self) -> str:
        """Label used for the document heading and title."""
        return self.airtable_table_name

    @property
    def document_title(self) -> str:
        return f"{self.table_label} - Airtable Export"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory.

        Returns:
            Configured Config instance.

        Raises:
            ConfigurationError: If required environment variables are
                missing or a value cannot be parsed.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        airtable_api_key = _require(
            "AIRTABLE_API_KEY",
            "Create a personal access token at https://airtable.com/create/tokens",
        )
        airtable_base_id = _require(
            "AIRTABLE_BASE_ID",
            "This is the 'app...' identifier in your base URL.",
        )
        airtable_table_name = _require(
            "AIRTABLE_TABLE_NAME",
            "Set this to the name or 'tbl...' id of the table to export.",
        )
        outline_api_token = _require(
            "OUTLINE_API_TOKEN",
            "Create an API key under Settings → API in Outline.",
        )
        outline_team_id = _require(
            "OUTLINE_TEAM_ID",
            "Set this to the id of the Outline workspace to write into.",
        )

        timeout_str = _get("REQUEST_TIMEOUT")
        request_timeout = DEFAULT_REQUEST_TIMEOUT
        if timeout_str is not None:
            try:
                request_timeout = int(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"REQUEST_TIMEOUT must be an integer number of seconds, got {timeout_str!r}"
                ) from None
            if request_timeout <= 0:
                raise ConfigurationError("REQUEST_TIMEOUT must be positive")

        return cls(
            airtable_api_key=airtable_api_key,
            airtable_base_id=airtable_base_id,
            airtable_table_name=airtable_table_name,
            outline_api_token=outline_api_token,
            outline_team_id=outline_team_id,
            outline_document_id=_get("OUTLINE_DOCUMENT_ID"),
            outline_collection_id=_get("OUTLINE_COLLECTION_ID"),
            airtable_base_url=(_get("AIRTABLE_BASE_URL") or DEFAULT_AIRTABLE_BASE_URL).rstrip("/"),
            outline_base_url=(_get("OUTLINE_BASE_URL") or DEFAULT_OUTLINE_BASE_URL).rstrip("/"),
            airtable_view=_get("AIRTABLE_VIEW"),
            request_timeout=request_timeout,
            debug=_flag("DEBUG"),
            dry_run=_flag("DRY_RUN"),
        )
