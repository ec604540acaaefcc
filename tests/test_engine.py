"""Tests for engine transactions, persistence and the sync outbox."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from hoa_ledger import LedgerConfig, LedgerEngine
from hoa_ledger.exceptions import ChartStructureError, ConfigError, InactiveAccountError
from hoa_ledger.models import Unit
from hoa_ledger.seed import seed_demo
from hoa_ledger.store import JsonFileStore
from hoa_ledger.sync.records import SyncTable

JAN = date(2026, 1, 1)


class TestTransactions:
    """Mutations are all-or-nothing."""

    def test_failed_operation_leaves_unit_untouched(self, unit_engine: LedgerEngine) -> None:
        """A posting failure doesn't leave a half-recorded payment behind."""
        unit_engine.units.bill_monthly_assessment("101", JAN)
        unit_engine.accounts.set_active("1010", False)

        with pytest.raises(InactiveAccountError):
            unit_engine.units.record_payment("101", 450, "ACH", on=JAN)

        unit = unit_engine.units.get("101")
        assert unit.balance == Decimal(450)
        assert unit.payments == []
        assert len(unit_engine.state.ledger) == 1

    def test_outer_transaction_rolls_back_inner_work(self, unit_engine: LedgerEngine) -> None:
        """Nested operations commit only with the outermost transaction."""
        with pytest.raises(RuntimeError):
            with unit_engine.transaction():
                unit_engine.units.bill_monthly_assessment("101", JAN)
                unit_engine.units.impose_late_fee("101", 25, "Late", on=JAN)
                raise RuntimeError("abort")

        assert len(unit_engine.state.ledger) == 0
        assert unit_engine.units.get("101").balance == 0
        assert unit_engine.units.get("101").charges == []

    def test_rolled_back_ids_are_reused(self, unit_engine: LedgerEngine) -> None:
        """Entry numbering is restored along with the entries."""
        with pytest.raises(RuntimeError):
            with unit_engine.transaction():
                unit_engine.units.bill_monthly_assessment("101", JAN)
                raise RuntimeError("abort")

        entry = unit_engine.units.bill_monthly_assessment("101", JAN)
        assert entry.id == "GL1000"

    def test_failed_chart_change(self, engine: LedgerEngine) -> None:
        """A rejected account leaves the chart as it was."""
        before = len(engine.state.chart)
        with pytest.raises(ChartStructureError, match="1010"):
            engine.accounts.add_account("1010", "Again", "1000")
        assert len(engine.state.chart) == before


class TestPersistence:
    """Tests for the JSON snapshot store."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A reloaded engine reports the same figures and keeps numbering."""
        store = JsonFileStore(tmp_path / "demo.json")
        original = LedgerEngine(store=store)
        seed_demo(original)

        snapshot = store.load()
        assert snapshot is not None
        restored = LedgerEngine.from_snapshot(snapshot, store=store)

        assert restored.reports.balance_sheet(JAN) == original.reports.balance_sheet(JAN)
        assert restored.reports.trial_balance() == original.reports.trial_balance()
        assert [u.balance for u in restored.units.list_units()] == [
            u.balance for u in original.units.list_units()
        ]
        assert restored.work_orders.get("WO-005").status == "draft"

        entry = restored.journal.post_manual_entry(JAN, "Next", "1010", "3010", 1)
        assert entry.id == "GL1067"
        assert restored.work_orders.create("New", "v", 10, "5010", on=JAN).id == "WO-006"

    def test_mutation_is_saved(self, tmp_path: Path) -> None:
        """Every committed operation rewrites the snapshot."""
        store = JsonFileStore(tmp_path / "t.json")
        engine = LedgerEngine(store=store)
        engine.journal.post_manual_entry(JAN, "Opening", "1010", "3010", 500)

        snapshot = store.load()
        assert snapshot is not None
        assert [e.id for e in snapshot.entries] == ["GL1000"]
        assert snapshot.next_entry_number == 1001
        assert not (tmp_path / "t.json.tmp").exists()

    def test_failed_mutation_is_not_saved(self, tmp_path: Path) -> None:
        """A rolled-back operation leaves the file alone."""
        store = JsonFileStore(tmp_path / "t.json")
        engine = LedgerEngine(store=store)
        engine.accounts.set_active("1030", False)

        with pytest.raises(InactiveAccountError):
            engine.journal.post_manual_entry(JAN, "x", "1030", "1010", 5)

        snapshot = store.load()
        assert snapshot is not None
        assert snapshot.entries == []

    def test_load_missing_returns_none(self, tmp_path: Path) -> None:
        """Nothing stored yet."""
        assert JsonFileStore(tmp_path / "none.json").load() is None

    def test_corrupt_snapshot(self, tmp_path: Path) -> None:
        """Unparseable files raise ConfigError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Corrupt"):
            JsonFileStore(path).load()

    def test_undecodable_snapshot(self, tmp_path: Path) -> None:
        """Bytes that aren't UTF-8 are a corrupt snapshot too."""
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe\x00{")
        with pytest.raises(ConfigError, match="Corrupt"):
            JsonFileStore(path).load()

    def test_clear(self, tmp_path: Path) -> None:
        """Clearing removes the file."""
        store = JsonFileStore(tmp_path / "t.json")
        LedgerEngine(store=store).save()
        assert store.exists()
        store.clear()
        assert not store.exists()


class TestOpen:
    """Tests for LedgerEngine.open()."""

    def test_creates_and_reloads_tenant(self, tmp_path: Path) -> None:
        """The first open saves a fresh chart; later opens load it."""
        config = LedgerConfig(tenant_id="oakwood", data_dir=tmp_path)

        engine = LedgerEngine.open(config)
        assert (tmp_path / "oakwood.json").exists()
        assert engine.tenant_id == "oakwood"
        engine.units.add_unit(Unit(number="101", monthly_fee=Decimal(450)))

        reopened = LedgerEngine.open(config)
        assert reopened.units.get("101").monthly_fee == Decimal(450)
        assert not reopened.track_sync

    def test_sync_config_enables_outbox(self, tmp_path: Path) -> None:
        """Configured sync turns on change tracking."""
        config = LedgerConfig(
            data_dir=tmp_path, sync_url="https://mirror.example.com", sync_key="key"
        )
        assert LedgerEngine.open(config).track_sync


class TestOutbox:
    """Tests for change tracking."""

    def test_operation_queues_touched_rows(self) -> None:
        """Billing queues its ledger entry and the unit."""
        engine = LedgerEngine(track_sync=True)
        engine.units.add_unit(Unit(number="101", monthly_fee=Decimal(450)))
        engine.outbox.clear()

        entry = engine.units.bill_monthly_assessment("101", JAN)

        queued = [(r.table, r.key) for r in engine.outbox]
        assert queued == [(SyncTable.GENERAL_LEDGER, entry.id), (SyncTable.UNITS, "101")]
        assert engine.outbox[0].payload["debitAcct"] == "1110"
        assert engine.outbox[1].payload["balance"] == "450.00"

    def test_delete_queues_tombstone(self) -> None:
        """Removed rows are queued without a payload."""
        engine = LedgerEngine(track_sync=True)
        engine.units.add_unit(Unit(number="101", monthly_fee=Decimal(450)))
        engine.units.remove_unit("101")

        assert engine.outbox[-1].table == SyncTable.UNITS
        assert engine.outbox[-1].is_delete

    def test_failed_operation_queues_nothing(self) -> None:
        """Rolled-back work never reaches the outbox."""
        engine = LedgerEngine(track_sync=True)
        with pytest.raises(RuntimeError):
            with engine.transaction():
                engine.journal.post_manual_entry(JAN, "x", "1010", "3010", 5)
                raise RuntimeError("abort")
        assert engine.outbox == []

    def test_untracked_engine_queues_nothing(self, engine: LedgerEngine) -> None:
        """Without sync the outbox stays empty."""
        engine.journal.post_manual_entry(JAN, "x", "1010", "3010", 5)
        assert engine.outbox == []

    def test_drain_keeps_unpushed_rows(self) -> None:
        """Only accepted rows leave the outbox."""
        engine = LedgerEngine(track_sync=True)
        engine.journal.post_manual_entry(JAN, "a", "1010", "3010", 5)
        engine.journal.post_manual_entry(JAN, "b", "1010", "3010", 5)
        first, second = engine.outbox

        engine.drain_outbox([first])

        assert engine.outbox == [second]
