"""Configuration management for the HOA ledger."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from hoa_ledger.exceptions import ConfigError


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "hoa-ledger"
    return Path.home() / ".config" / "hoa-ledger"


def _get_data_dir() -> Path:
    """Get XDG-compliant data directory for ledger snapshots."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "hoa-ledger"
    return Path.home() / ".local" / "share" / "hoa-ledger"


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Where a tenant's ledger lives and where it is mirrored.

    Attributes:
        tenant_id: Tenant (association) identifier; one snapshot per tenant
        data_dir: Directory holding snapshot files
        sync_url: Base URL of the remote mirror (PostgREST-style), optional
        sync_key: API key for the remote mirror, optional
    """

    tenant_id: str = "default"
    data_dir: Path | None = None
    sync_url: str | None = None
    sync_key: str | None = None

    @property
    def store_path(self) -> Path:
        """Snapshot file for this tenant."""
        return (self.data_dir or _get_data_dir()) / f"{self.tenant_id}.json"

    @property
    def sync_enabled(self) -> bool:
        return bool(self.sync_url and self.sync_key)

    @property
    def rest_base_url(self) -> str:
        """REST base URL of the remote mirror."""
        if not self.sync_url:
            raise ConfigError("Remote sync is not configured (HOA_LEDGER_SYNC_URL)")
        return f"{self.sync_url.rstrip('/')}/rest/v1"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables.

        Env vars (all optional):
        - HOA_LEDGER_TENANT
        - HOA_LEDGER_DATA_DIR
        - HOA_LEDGER_SYNC_URL
        - HOA_LEDGER_SYNC_KEY
        """
        data_dir = os.environ.get("HOA_LEDGER_DATA_DIR")
        return cls(
            tenant_id=os.environ.get("HOA_LEDGER_TENANT", "default"),
            data_dir=Path(data_dir) if data_dir else None,
            sync_url=os.environ.get("HOA_LEDGER_SYNC_URL"),
            sync_key=os.environ.get("HOA_LEDGER_SYNC_KEY"),
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> "LedgerConfig":
        """Load config from JSON file.

        Default path: ~/.config/hoa-ledger/config.json

        Expected format:
        {
            "tenant_id": "...",
            "data_dir": "...",
            "sync_url": "https://...",
            "sync_key": "..."
        }

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigError: If the file isn't valid JSON
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        try:
            with path.open() as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

        data_dir = data.get("data_dir")
        return cls(
            tenant_id=data.get("tenant_id", "default"),
            data_dir=Path(data_dir) if data_dir else None,
            sync_url=data.get("sync_url"),
            sync_key=data.get("sync_key"),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "LedgerConfig":
        """Load config from file with environment variable overrides.

        Loading priority:
        1. Values from the config file, if present
        2. Each HOA_LEDGER_* environment variable overrides its file value
        """
        try:
            base = cls.from_file(path)
        except FileNotFoundError:
            base = cls()

        env = cls.from_env()
        return cls(
            tenant_id=os.environ.get("HOA_LEDGER_TENANT") or base.tenant_id,
            data_dir=env.data_dir or base.data_dir,
            sync_url=env.sync_url or base.sync_url,
            sync_key=env.sync_key or base.sync_key,
        )
