"""Demo association: units, budget, reserves, work orders and opening ledger.

Everything is entered through the engine services, so the unit balances,
budget expense lists and ledger agree the same way they would after
real use.
"""

from datetime import date
from decimal import Decimal

from hoa_ledger.engine import LedgerEngine
from hoa_ledger.ledger.chart import OPERATING_CASH, OPERATING_FUND, RESERVE_CASH, RESERVE_FUND
from hoa_ledger.ledger.models import EntrySource
from hoa_ledger.models import Unit, UnitStatus

OPENING_DATE = date(2025, 12, 31)
OPENING_OPERATING_BALANCE = Decimal(15000)
BILLING_PERIODS = (date(2026, 1, 1), date(2026, 2, 1))

# (id, name, annual budget)
BUDGET_CATEGORIES = [
    ("cat1", "Maintenance & Repairs", 8000),
    ("cat2", "Utilities", 5000),
    ("cat3", "Landscaping", 3000),
    ("cat4", "Insurance", 5500),
    ("cat5", "Management Fees", 2500),
    ("cat6", "Legal & Professional", 1500),
]

# (category, date, description, amount, vendor, invoice)
EXPENSES = [
    ("cat1", date(2026, 1, 15),
     "Plumbing repair - Unit 204", 450, "Quick Fix Plumbing", "INV-1001"),
    ("cat2", date(2026, 1, 10),
     "Electricity - January", 1250, "City Power & Light", "INV-2001"),
    ("cat2", date(2026, 1, 10),
     "Water & Sewer - January", 850, "City Water Dept", "INV-2002"),
    ("cat2", date(2026, 2, 1),
     "Gas - January", 425, "Metro Gas Company", "INV-2003"),
    ("cat3", date(2026, 1, 20),
     "Monthly lawn service", 650, "Green Thumb Landscaping", "INV-3001"),
    ("cat3", date(2026, 2, 5),
     "Tree trimming", 380, "Tree Masters LLC", "INV-3002"),
    ("cat4", date(2026, 1, 1),
     "Property insurance premium Q1", 4500, "Secure Home Insurance", "INV-4001"),
    ("cat5", date(2026, 1, 31),
     "Property management - January", 1200, "Premier Property Mgmt", "INV-5001"),
    ("cat5", date(2026, 2, 1),
     "Property management - February", 1200, "Premier Property Mgmt", "INV-5002"),
    ("cat6", date(2026, 1, 28),
     "HOA legal consultation", 450, "Smith & Associates Law", "INV-6001"),
    ("cat6", date(2026, 2, 8),
     "Annual audit services", 350, "CPA Solutions Inc", "INV-6002"),
]

# (id, name, cost, funded, useful life, last replaced, years remaining, contingency)
RESERVE_ITEMS = [
    ("res1", "Roof Replacement", 85000, 45000, 25, "2003", "2.3", False),
    ("res2", "HVAC System", 95000, 50000, 20, "2007", "1.8", False),
    ("res3", "Elevator Modernization", 75000, 0, 25, "2005", "4.1", False),
    ("res4", "Parking Lot Resurfacing", 45000, 0, 15, "2014", "3.6", False),
    ("res5", "Contingency Fund", 30000, 30000, 0, None, "0", True),
]

UNITS = [
    Unit(number="101", owner="Sarah Johnson", email="sarah.j@example.com", phone="202-555-0101",
         monthly_fee=Decimal(450), voting_pct=Decimal("2.1"), move_in=date(2019, 6, 15),
         sqft=850, bedrooms=1, parking="P-101"),
    Unit(number="102", owner="Mike Davis", email="mike.d@example.com", phone="202-555-0102",
         monthly_fee=Decimal(475), voting_pct=Decimal("2.2"), move_in=date(2020, 3, 1),
         sqft=900, bedrooms=1, parking="P-102"),
    Unit(number="103", owner="Vacant", monthly_fee=Decimal(450), voting_pct=Decimal("2.1"),
         status=UnitStatus.VACANT, sqft=850, bedrooms=1, parking="P-103"),
    Unit(number="201", owner="Lisa Chen", email="lisa.c@example.com", phone="202-555-0201",
         monthly_fee=Decimal(500), voting_pct=Decimal("2.3"), move_in=date(2018, 9, 1),
         sqft=1050, bedrooms=2, parking="P-201"),
    Unit(number="202", owner="Tom Wilson", email="tom.w@example.com", phone="202-555-0202",
         monthly_fee=Decimal(450), voting_pct=Decimal("2.1"), move_in=date(2021, 1, 15),
         sqft=850, bedrooms=1),
    Unit(number="203", owner="Emma Stone", email="emma.s@example.com", phone="202-555-0203",
         monthly_fee=Decimal(475), voting_pct=Decimal("2.2"), move_in=date(2022, 7, 1),
         sqft=900, bedrooms=1, parking="P-203"),
    Unit(number="301", owner="John Smith", email="john@example.com", phone="202-555-0301",
         monthly_fee=Decimal(450), voting_pct=Decimal("2.1"), move_in=date(2017, 4, 1),
         sqft=850, bedrooms=1, parking="P-301"),
    Unit(number="302", owner="Rachel Green", email="rachel.g@example.com", phone="202-555-0302",
         monthly_fee=Decimal(450), voting_pct=Decimal("2.1"), move_in=date(2023, 11, 1),
         sqft=850, bedrooms=1),
    Unit(number="303", owner="David Park", email="david.p@example.com", phone="202-555-0303",
         monthly_fee=Decimal(475), voting_pct=Decimal("2.2"), move_in=date(2020, 8, 15),
         sqft=900, bedrooms=1, parking="P-303"),
    Unit(number="401", owner="Amy Lee", email="amy.l@example.com", phone="202-555-0401",
         monthly_fee=Decimal(500), voting_pct=Decimal("2.3"), move_in=date(2019, 2, 1),
         sqft=1050, bedrooms=2, parking="P-401"),
    Unit(number="402", owner="James Brown", email="james.b@example.com", phone="202-555-0402",
         monthly_fee=Decimal(450), voting_pct=Decimal("2.1"), move_in=date(2021, 5, 1),
         sqft=850, bedrooms=1),
    Unit(number="403", owner="Maria Garcia", email="maria.g@example.com", phone="202-555-0403",
         monthly_fee=Decimal(475), voting_pct=Decimal("2.2"), move_in=date(2018, 11, 15),
         sqft=900, bedrooms=1, parking="P-403"),
    Unit(number="501", owner="Chris Taylor", email="chris.t@example.com", phone="202-555-0501",
         monthly_fee=Decimal(500), voting_pct=Decimal("2.3"), move_in=date(2022, 1, 1),
         sqft=1200, bedrooms=2, parking="P-501"),
    Unit(number="502", owner="Nicole White", email="nicole.w@example.com", phone="202-555-0502",
         monthly_fee=Decimal(550), voting_pct=Decimal("2.5"), move_in=date(2023, 6, 1),
         sqft=1350, bedrooms=3, parking="P-502A, P-502B"),
]

# (unit, date, amount, method, note)
PAYMENTS = [
    ("101", date(2026, 1, 5), 450, "ACH", ""),
    ("101", date(2026, 2, 3), 450, "ACH", ""),
    ("102", date(2026, 1, 4), 475, "check", "#4521"),
    ("102", date(2026, 2, 2), 475, "check", "#4589"),
    ("201", date(2026, 1, 3), 500, "ACH", ""),
    ("201", date(2026, 2, 1), 500, "ACH", ""),
    ("202", date(2026, 1, 6), 450, "ACH", ""),
    ("202", date(2026, 2, 5), 450, "ACH", ""),
    ("203", date(2026, 1, 8), 475, "check", "#1891"),
    ("302", date(2026, 1, 1), 450, "ACH", ""),
    ("302", date(2026, 2, 1), 450, "ACH", ""),
    ("303", date(2026, 1, 10), 475, "check", "#7823"),
    ("401", date(2026, 1, 2), 500, "ACH", ""),
    ("401", date(2026, 2, 1), 500, "ACH", ""),
    ("402", date(2026, 1, 5), 450, "ACH", ""),
    ("402", date(2026, 2, 4), 450, "ACH", ""),
    ("501", date(2026, 1, 3), 500, "ACH", ""),
    ("501", date(2026, 2, 2), 500, "ACH", ""),
    ("502", date(2026, 1, 7), 550, "check", "#9901"),
]

# (unit, date, amount, reason)
LATE_FEES = [
    ("301", date(2026, 2, 6), 25, "Late payment - Jan 2026"),
    ("403", date(2026, 1, 6), 25, "Late payment - Dec 2025"),
    ("403", date(2026, 2, 6), 50, "Late payment - Jan 2026 (2nd offense)"),
]

SPECIAL_ASSESSMENTS = [
    ("301", date(2026, 1, 15), 500, "Roof emergency repair assessment"),
    ("403", date(2026, 1, 15), 500, "Roof emergency repair assessment"),
]

# (title, vendor, description, account, amount, case, created, stage dates, invoice number)
WORK_ORDERS = [
    ("Emergency Roof Leak Repair", "Apex Roofing",
     "Water intrusion in unit 204 from roof membrane failure", "5010", 1200, "c3",
     date(2026, 1, 28), (date(2026, 1, 29), date(2026, 2, 3), date(2026, 2, 3)), "INV-1003"),
    ("HVAC Filter Replacement - All Units", "Cool Air Services",
     "Quarterly HVAC filter replacement for common areas", "5010", 280, None,
     date(2026, 1, 18), (date(2026, 1, 19), date(2026, 1, 22), date(2026, 1, 22)), "INV-1002"),
    ("Tree Trimming - Front Entrance", "Tree Masters LLC",
     "Annual trim of oak trees along main entrance", "5030", 380, None,
     date(2026, 2, 1), (date(2026, 2, 2), date(2026, 2, 5)), "INV-3002"),
    ("Elevator Annual Inspection", "Metro Elevator Co",
     "Annual state-required elevator inspection and certification", "5010", 950, None,
     date(2026, 2, 10), (date(2026, 2, 12),), None),
    ("Lobby Painting - Water Damage", "Pro Painters LLC",
     "Repaint lobby ceiling after water leak from unit 301", "5010", 1800, None,
     date(2026, 2, 15), (), None),
]


def seed_demo(engine: LedgerEngine) -> None:
    """Load the demo association into an engine with the standard chart.

    The two paid work orders post their own expenses, so the matching
    invoices are not repeated in the maintenance category's expense list.
    """
    with engine.transaction():
        _seed_reserves(engine)
        engine.journal.post(
            OPENING_DATE,
            "Opening operating fund balance",
            OPERATING_CASH,
            OPERATING_FUND,
            OPENING_OPERATING_BALANCE,
            EntrySource.MANUAL,
        )
        _seed_budget(engine)
        _seed_units(engine)
        _seed_work_orders(engine)


def _seed_reserves(engine: LedgerEngine) -> None:
    for item_id, name, cost, funded, life, replaced, remaining, contingency in RESERVE_ITEMS:
        item = engine.reserves.add_item(
            name,
            cost,
            current_funding=funded,
            useful_life=life,
            years_remaining=remaining,
            last_replaced=replaced,
            is_contingency=contingency,
            item_id=item_id,
        )
        if item.current_funding > 0:
            engine.journal.post(
                OPENING_DATE,
                f"Reserve balance - {name}",
                RESERVE_CASH,
                RESERVE_FUND,
                item.current_funding,
                EntrySource.TRANSFER,
                item_id,
            )


def _seed_budget(engine: LedgerEngine) -> None:
    for category_id, name, budgeted in BUDGET_CATEGORIES:
        engine.budget.add_category(name, budgeted, category_id=category_id)
    for category_id, on, description, amount, vendor, invoice in EXPENSES:
        engine.budget.add_expense(category_id, description, amount, vendor, invoice, on=on)


def _seed_units(engine: LedgerEngine) -> None:
    for unit in UNITS:
        engine.units.add_unit(unit)
    for period in BILLING_PERIODS:
        engine.units.bill_all_occupied(period)
    for number, on, amount, method, note in PAYMENTS:
        engine.units.record_payment(number, amount, method, note or None, on=on)
    for number, on, amount, reason in LATE_FEES:
        engine.units.impose_late_fee(number, amount, reason, on=on)
    for number, on, amount, reason in SPECIAL_ASSESSMENTS:
        engine.units.add_special_assessment(number, amount, reason, on=on)


def _seed_work_orders(engine: LedgerEngine) -> None:
    for title, vendor, description, account, amount, case, created, stages, invoice in WORK_ORDERS:
        work_order = engine.work_orders.create(
            title, vendor, amount, account, case, description, on=created
        )
        if stages:
            engine.work_orders.approve(work_order.id, on=stages[0])
        if len(stages) > 1:
            engine.work_orders.receive_invoice(work_order.id, invoice, on=stages[1])
        if len(stages) > 2:
            engine.work_orders.pay(work_order.id, on=stages[2])
