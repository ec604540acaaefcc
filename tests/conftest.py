"""Shared fixtures for ledger engine tests."""

from decimal import Decimal
from pathlib import Path

import pytest

from hoa_ledger import LedgerEngine
from hoa_ledger.models import Unit
from hoa_ledger.seed import seed_demo


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config and snapshot lookups away from the real home directory."""
    base = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(base / "data"))
    for name in (
        "HOA_LEDGER_TENANT",
        "HOA_LEDGER_DATA_DIR",
        "HOA_LEDGER_SYNC_URL",
        "HOA_LEDGER_SYNC_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine() -> LedgerEngine:
    """In-memory engine with the standard chart and nothing posted."""
    return LedgerEngine()


@pytest.fixture
def unit_engine(engine: LedgerEngine) -> LedgerEngine:
    """Engine with one occupied unit paying 450 a month."""
    engine.units.add_unit(Unit(number="101", owner="Sarah Johnson", monthly_fee=Decimal(450)))
    return engine


@pytest.fixture
def seeded() -> LedgerEngine:
    """Engine loaded with the demo association."""
    engine = LedgerEngine()
    seed_demo(engine)
    return engine
