"""Snapshot storage and persistence."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from hoa_ledger.exceptions import ConfigError
from hoa_ledger.store.snapshot import Snapshot

logger = logging.getLogger(__name__)


def _get_data_dir() -> Path:
    """Get default data directory."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "hoa-ledger"


@dataclass
class JsonFileStore:
    """Durable storage for one tenant's snapshot.

    The whole snapshot is written to a temporary file and then renamed
    over the previous one, so a reader sees either the state before a
    mutation or the state after it, never a partial write.
    """

    path: Path

    def __init__(self, path: Path | None = None, *, tenant_id: str = "default") -> None:
        self.path = path or _get_data_dir() / f"{tenant_id}.json"

    def save(self, snapshot: Snapshot) -> None:
        """Write the snapshot atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        with tmp_path.open("w") as f:
            f.write(snapshot.model_dump_json(by_alias=True, indent=2))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)

        # Set restrictive permissions (owner read/write only)
        self.path.chmod(0o600)
        logger.debug("Saved snapshot to %s", self.path)

    def load(self) -> Snapshot | None:
        """Load the stored snapshot.

        Returns None if nothing has been stored yet.

        Raises:
            ConfigError: If the file exists but can't be parsed
        """
        if not self.path.exists():
            return None

        try:
            return Snapshot.model_validate_json(self.path.read_text())
        except (ValidationError, UnicodeDecodeError) as e:
            raise ConfigError(f"Corrupt ledger snapshot at {self.path}: {e}") from e

    def clear(self) -> None:
        """Remove stored snapshot."""
        if self.path.exists():
            self.path.unlink()

    def exists(self) -> bool:
        """Check if a snapshot is stored."""
        return self.path.exists()
