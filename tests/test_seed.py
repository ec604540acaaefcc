"""Tests for the demo association."""

from decimal import Decimal

import pytest

from hoa_ledger import LedgerEngine
from hoa_ledger.exceptions import InactiveAccountError
from hoa_ledger.models import UnitStatus, WorkOrderStatus
from hoa_ledger.seed import seed_demo


class TestSeedDemo:
    """Tests for seed_demo()."""

    def test_record_counts(self, seeded: LedgerEngine) -> None:
        """Units, categories and reserve items are all loaded."""
        units = seeded.units.list_units()
        assert len(units) == 14
        assert sum(1 for u in units if u.status == UnitStatus.VACANT) == 1
        assert len(seeded.budget.list_categories()) == 6
        assert len(seeded.reserves.list_items()) == 5

    def test_work_order_stages(self, seeded: LedgerEngine) -> None:
        """Work orders are left at every stage of their lifecycle."""
        statuses = {w.id: w.status for w in seeded.work_orders.list_work_orders()}
        assert statuses == {
            "WO-001": WorkOrderStatus.PAID,
            "WO-002": WorkOrderStatus.PAID,
            "WO-003": WorkOrderStatus.INVOICED,
            "WO-004": WorkOrderStatus.APPROVED,
            "WO-005": WorkOrderStatus.DRAFT,
        }

    def test_reserve_cash_matches_study(self, seeded: LedgerEngine) -> None:
        """Reserve savings hold what the reserve study says is funded."""
        funded = sum(i.current_funding for i in seeded.reserves.list_items())
        assert seeded.state.balance_of("1020") == funded == Decimal(125000)

    def test_ledger_balances(self, seeded: LedgerEngine) -> None:
        """Debits equal credits and the balance sheet closes."""
        assert seeded.reports.trial_balance().is_balanced
        assert seeded.reports.balance_sheet().is_balanced

    def test_unit_balances_match_history(self, seeded: LedgerEngine) -> None:
        """Every unit's balance agrees with its charges and payments."""
        assert all(row.consistent for row in seeded.reports.reconcile_units())

    def test_failure_loads_nothing(self, engine: LedgerEngine) -> None:
        """Seeding runs in one transaction."""
        engine.accounts.set_active("5010", False)

        with pytest.raises(InactiveAccountError):
            seed_demo(engine)

        assert len(engine.state.ledger) == 0
        assert engine.units.list_units() == []
        assert engine.reserves.list_items() == []
