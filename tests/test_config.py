"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from hoa_ledger import LedgerConfig
from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.exceptions import ConfigError


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Default tenant lives under the XDG data directory."""
        config = LedgerConfig()
        assert config.tenant_id == "default"
        assert config.store_path == tmp_path / "xdg" / "data" / "hoa-ledger" / "default.json"
        assert not config.sync_enabled

    def test_store_path_uses_data_dir(self, tmp_path: Path) -> None:
        """One snapshot file per tenant."""
        config = LedgerConfig(tenant_id="oakwood", data_dir=tmp_path)
        assert config.store_path == tmp_path / "oakwood.json"

    def test_sync_needs_url_and_key(self) -> None:
        """Sync is enabled only when both are set."""
        assert not LedgerConfig(sync_url="https://mirror.example.com").sync_enabled
        assert LedgerConfig(sync_url="https://m.example.com", sync_key="k").sync_enabled

    def test_rest_base_url(self) -> None:
        """The REST path is appended once."""
        config = LedgerConfig(sync_url="https://mirror.example.com//")
        assert config.rest_base_url == "https://mirror.example.com/rest/v1"

    def test_rest_base_url_unset(self) -> None:
        """Asking for the URL without one configured is an error."""
        with pytest.raises(ConfigError):
            _ = LedgerConfig().rest_base_url


class TestFromEnv:
    """Tests for LedgerConfig.from_env()."""

    def test_reads_variables(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read every HOA_LEDGER_* variable."""
        monkeypatch.setenv("HOA_LEDGER_TENANT", "oakwood")
        monkeypatch.setenv("HOA_LEDGER_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("HOA_LEDGER_SYNC_URL", "https://mirror.example.com")
        monkeypatch.setenv("HOA_LEDGER_SYNC_KEY", "secret")

        config = LedgerConfig.from_env()

        assert config.tenant_id == "oakwood"
        assert config.data_dir == tmp_path
        assert config.sync_url == "https://mirror.example.com"
        assert config.sync_key == "secret"

    def test_unset_variables(self) -> None:
        """Missing variables fall back to defaults."""
        config = LedgerConfig.from_env()
        assert config.tenant_id == "default"
        assert config.data_dir is None
        assert config.sync_url is None


class TestFromFile:
    """Tests for LedgerConfig.from_file()."""

    def test_reads_json(self, tmp_path: Path) -> None:
        """Should load values from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"tenant_id": "maple", "data_dir": str(tmp_path / "d")}))

        config = LedgerConfig.from_file(path)

        assert config.tenant_id == "maple"
        assert config.data_dir == tmp_path / "d"
        assert config.sync_key is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            LedgerConfig.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed files."""
        path = tmp_path / "config.json"
        path.write_text("{tenant_id")
        with pytest.raises(ConfigError, match="Invalid config file"):
            LedgerConfig.from_file(path)

    def test_default_location(self, tmp_path: Path) -> None:
        """Without a path the XDG config directory is used."""
        config_dir = tmp_path / "xdg" / "config" / "hoa-ledger"
        config_dir.mkdir(parents=True)
        (config_dir / "config.json").write_text(json.dumps({"tenant_id": "birch"}))

        assert LedgerConfig.from_file().tenant_id == "birch"


class TestLoad:
    """Tests for LedgerConfig.load()."""

    def test_without_file(self) -> None:
        """A missing file is not an error."""
        assert LedgerConfig.load() == LedgerConfig()

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables win over file values, per field."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"tenant_id": "maple", "sync_url": "https://file.example.com"})
        )
        monkeypatch.setenv("HOA_LEDGER_SYNC_URL", "https://env.example.com")

        config = LedgerConfig.load(path)

        assert config.tenant_id == "maple"
        assert config.sync_url == "https://env.example.com"


class TestCLIConfig:
    """Tests for CLIConfig.ledger_config()."""

    def test_options_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """--tenant and --data-dir win over the environment."""
        monkeypatch.setenv("HOA_LEDGER_TENANT", "from-env")

        config = CLIConfig(tenant_id="oakwood", data_dir=tmp_path).ledger_config()

        assert config.tenant_id == "oakwood"
        assert config.store_path == tmp_path / "oakwood.json"

    def test_falls_back_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset options leave the loaded values alone."""
        monkeypatch.setenv("HOA_LEDGER_TENANT", "from-env")
        assert CLIConfig().ledger_config().tenant_id == "from-env"
