"""Tests for the command-line interface."""

import json
from decimal import Decimal
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hoa_ledger.cli import app
from hoa_ledger.cli.formatters import format_money

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Snapshot directory for CLI runs."""
    return tmp_path / "ledgers"


def invoke(data_dir: Path, *args: str):
    """Run the CLI against the test data directory."""
    return runner.invoke(app, ["--data-dir", str(data_dir), *args])


@pytest.fixture
def demo(data_dir: Path) -> Path:
    """Data directory holding the demo tenant."""
    result = invoke(data_dir, "init", "--demo")
    assert result.exit_code == 0, result.output
    return data_dir


class TestInit:
    """Tests for the init command."""

    def test_init_creates_snapshot(self, data_dir: Path) -> None:
        """Should write the tenant file with the standard chart."""
        result = invoke(data_dir, "init")

        assert result.exit_code == 0, result.output
        assert "Initialized tenant" in result.output
        assert (data_dir / "default.json").exists()

    def test_init_twice_refused(self, demo: Path) -> None:
        """An existing ledger is not overwritten without --force."""
        result = invoke(demo, "init")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force_replaces(self, demo: Path) -> None:
        """--force starts over."""
        result = invoke(demo, "init", "--force")
        assert result.exit_code == 0, result.output

        listed = invoke(demo, "--format", "json", "journal", "list")
        assert json.loads(listed.stdout) == []

    def test_tenant_option(self, data_dir: Path) -> None:
        """Each tenant gets its own file."""
        result = invoke(data_dir, "--tenant", "oakwood", "init")
        assert result.exit_code == 0, result.output
        assert (data_dir / "oakwood.json").exists()

    def test_corrupt_snapshot_reported(self, demo: Path) -> None:
        """An unreadable tenant file is an error message, not a traceback."""
        (demo / "default.json").write_bytes(b"\xff\xfe\x00{")

        result = invoke(demo, "units", "list")

        assert result.exit_code == 1
        assert "Corrupt ledger snapshot" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_broken_stored_chart_reported(self, demo: Path) -> None:
        """A stored chart that isn't a valid tree is reported the same way."""
        path = demo / "default.json"
        snapshot = json.loads(path.read_text())
        snapshot["accounts"].append(snapshot["accounts"][0])
        path.write_text(json.dumps(snapshot))

        result = invoke(demo, "units", "list")

        assert result.exit_code == 1
        assert "Duplicate" in result.output
        assert isinstance(result.exception, SystemExit)


class TestUnits:
    """Tests for unit commands."""

    def test_list_json(self, demo: Path) -> None:
        """JSON output carries every unit and its balance."""
        result = invoke(demo, "--format", "json", "units", "list")

        assert result.exit_code == 0, result.output
        units = {u["number"]: u for u in json.loads(result.stdout)}
        assert len(units) == 14
        assert Decimal(units["301"]["balance"]) == Decimal(1425)

    def test_list_delinquent(self, demo: Path) -> None:
        """--delinquent keeps units with a balance."""
        result = invoke(demo, "--format", "json", "units", "list", "--delinquent")
        numbers = [u["number"] for u in json.loads(result.stdout)]
        assert numbers == ["203", "301", "303", "403", "502"]

    def test_add_bill_and_pay(self, data_dir: Path) -> None:
        """A unit can be billed and paid from the command line."""
        invoke(data_dir, "init")
        assert invoke(data_dir, "units", "add", "101", "450", "--owner", "Sam").exit_code == 0
        billed = invoke(data_dir, "units", "bill", "101", "--period", "2026-01-01")
        assert billed.exit_code == 0, billed.output

        paid = invoke(data_dir, "units", "pay", "101", "$200", "--date", "2026-01-05")

        assert paid.exit_code == 0, paid.output
        listed = invoke(data_dir, "--format", "json", "units", "list")
        assert Decimal(json.loads(listed.stdout)["balance"]) == Decimal(250)

    def test_bad_date_rejected(self, demo: Path) -> None:
        """Dates must be ISO formatted."""
        result = invoke(demo, "units", "pay", "101", "100", "--date", "01/05/2026")
        assert result.exit_code == 1
        assert "YYYY-MM-DD" in result.output

    def test_unknown_unit(self, demo: Path) -> None:
        """Ledger errors become exit code 1."""
        result = invoke(demo, "units", "pay", "999", "100")
        assert result.exit_code == 1
        assert "unit not found" in result.output


class TestJournal:
    """Tests for journal commands."""

    def test_post_and_list(self, data_dir: Path) -> None:
        """A manual entry shows up in the journal."""
        invoke(data_dir, "init")
        posted = invoke(
            data_dir, "journal", "post", "1010", "3010", "1,500", "Opening", "--date", "2026-01-01"
        )
        assert posted.exit_code == 0, posted.output

        result = invoke(data_dir, "--format", "json", "journal", "list")
        entry = json.loads(result.stdout)
        assert entry["id"] == "GL1000"
        assert Decimal(entry["amount"]) == Decimal(1500)

    def test_unknown_account(self, data_dir: Path) -> None:
        """Unknown accounts are reported, nothing is posted."""
        invoke(data_dir, "init")
        result = invoke(data_dir, "journal", "post", "1010", "9999", "100", "Oops")

        assert result.exit_code == 1
        assert "Unknown account: 9999" in result.output
        listed = invoke(data_dir, "--format", "json", "journal", "list")
        assert json.loads(listed.stdout) == []

    def test_reverse(self, data_dir: Path) -> None:
        """Reversing twice is refused."""
        invoke(data_dir, "init")
        invoke(data_dir, "journal", "post", "5010", "1010", "100", "Wrong", "--date", "2026-01-01")

        assert invoke(data_dir, "journal", "reverse", "GL1000").exit_code == 0
        again = invoke(data_dir, "journal", "reverse", "GL1000")
        assert again.exit_code == 1

    def test_filter_by_source(self, demo: Path) -> None:
        """Entries can be filtered by source."""
        result = invoke(demo, "--format", "json", "journal", "list", "--source", "case")
        entry = json.loads(result.stdout)
        assert entry["source_id"] == "WO-001"


class TestReports:
    """Tests for report commands."""

    def test_balance_sheet_json(self, demo: Path) -> None:
        """The balance sheet prints as one JSON document."""
        result = invoke(demo, "--format", "json", "reports", "balance-sheet")

        assert result.exit_code == 0, result.output
        sheet = json.loads(result.stdout)
        assert Decimal(sheet["assets"]["total"]) == Decimal(140315)
        assert Decimal(sheet["equity"]["current_surplus"]) == Decimal(315)

    def test_balance_sheet_as_of(self, demo: Path) -> None:
        """--as-of leaves out later activity."""
        result = invoke(
            demo, "--format", "json", "reports", "balance-sheet", "--as-of", "2025-12-31"
        )

        assert result.exit_code == 0, result.output
        sheet = json.loads(result.stdout)
        assert sheet["as_of"] == "2025-12-31"
        assert Decimal(sheet["assets"]["operating"]) == Decimal(15000)

    def test_balance_sheet_table(self, demo: Path) -> None:
        """Table output confirms the sheet balances."""
        result = invoke(demo, "reports", "balance-sheet")
        assert result.exit_code == 0, result.output
        assert "Assets equal liabilities plus equity" in result.output

    def test_aging_json(self, demo: Path) -> None:
        """Aging lists the 90+ day units."""
        result = invoke(demo, "--format", "json", "reports", "aging")
        aging = json.loads(result.stdout)
        assert [r["unit_number"] for r in aging["days90plus"]] == ["301", "403"]

    def test_trial_balance_csv(self, demo: Path) -> None:
        """CSV output has a header row."""
        result = invoke(demo, "--format", "csv", "reports", "trial-balance")
        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines()[0] == "account,name,type,debits,credits,balance"

    @pytest.mark.parametrize(
        "command",
        [
            ["reports", "income-statement", "--from", "2026-01-01", "--to", "2026-01-31"],
            ["reports", "budget-variance"],
            ["reports", "reserves"],
            ["reports", "reconcile"],
            ["reports", "funding", "3000"],
        ],
    )
    def test_reports_run(self, demo: Path, command: list[str]) -> None:
        """Every report runs against the demo tenant."""
        result = invoke(demo, *command)
        assert result.exit_code == 0, result.output


class TestSync:
    """Tests for sync commands."""

    def test_push_without_sync_config(self, demo: Path) -> None:
        """Pushing needs a configured mirror."""
        result = invoke(demo, "sync", "push")
        assert result.exit_code == 1
        assert "HOA_LEDGER_SYNC_URL" in result.output

    def test_status_empty(self, demo: Path) -> None:
        """Untracked tenants have nothing queued."""
        result = invoke(demo, "--format", "json", "sync", "status")
        assert json.loads(result.stdout) == []


class TestFormatMoney:
    """Tests for money formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("1234.5"), "$1,234.50"),
            (Decimal("-80"), "($80.00)"),
            (0, "$0.00"),
            (None, ""),
        ],
    )
    def test_format_money(self, value: Decimal | int | None, expected: str) -> None:
        """Thousands separators, two decimals, negatives in parentheses."""
        assert format_money(value) == expected
