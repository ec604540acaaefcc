"""CLI configuration passed through the Typer context."""

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from hoa_ledger.config import LedgerConfig


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


@dataclass
class CLIConfig:
    """Options given on the command line before the sub-command.

    Attributes:
        tenant_id: Tenant to operate on (overrides config file and env)
        data_dir: Directory holding tenant snapshots (overrides config file and env)
        config_file: Alternate config file (default ~/.config/hoa-ledger/config.json)
        verbose: Log engine activity to stderr
        output_format: How command results are printed
    """

    tenant_id: str | None = None
    data_dir: Path | None = None
    config_file: Path | None = None
    verbose: bool = False
    output_format: OutputFormat = OutputFormat.TABLE

    def ledger_config(self) -> LedgerConfig:
        """Resolve the engine configuration.

        Loading priority:
        1. Config file
        2. HOA_LEDGER_* environment variables
        3. --tenant and --data-dir options
        """
        config = LedgerConfig.load(self.config_file)
        if self.tenant_id:
            config = replace(config, tenant_id=self.tenant_id)
        if self.data_dir:
            config = replace(config, data_dir=self.data_dir)
        return config
