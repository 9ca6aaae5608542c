"""Tests for stockledger/ledger.py."""

from datetime import date, datetime, timedelta

from stockledger.extract import extract_row
from stockledger.ledger import anchor_date, build_ledger, slot_dates
from tests.conftest import AS_OF, make_row


def _ledger(**kw):
    return build_ledger(extract_row(make_row(**kw)), AS_OF)


class TestDates:
    def test_anchor_strips_time(self):
        assert anchor_date(datetime(2024, 1, 15, 18, 30)) == date(2024, 1, 15)
        assert anchor_date(date(2024, 1, 15)) == date(2024, 1, 15)
        assert anchor_date() == date.today()

    def test_slot_dates_end_on_anchor(self):
        assert slot_dates(3, AS_OF) == [date(2024, 1, 13), date(2024, 1, 14), date(2024, 1, 15)]
        assert slot_dates(1, AS_OF) == [AS_OF]
        assert slot_dates(0, AS_OF) == []

    def test_dates_contiguous_across_month_boundary(self):
        entries = build_ledger(
            extract_row(make_row(days={d: (1, 1, 1, 1) for d in range(1, 21)})), date(2024, 3, 5)
        )
        dates = [e.record_date for e in entries]
        assert dates[-1] == date(2024, 3, 5)
        assert dates[0] == date(2024, 2, 15)
        assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))

    def test_labels_are_ordinal(self):
        entries = _ledger(days={2: (1, 1, 0, 1), 9: (1, 1, 0, 1)})
        assert [e.record_date for e in entries] == [date(2024, 1, 14), date(2024, 1, 15)]


class TestBalances:
    def test_single_day_scenario(self):
        (e,) = _ledger()
        assert e.product_code == "P001"
        assert e.record_date == AS_OF
        assert e.opening_inventory == 100
        assert e.closing_inventory == 120

    def test_running_balance(self):
        entries = _ledger(opening=10, days={
            1: (5, 1, 3, 2),
            2: (0, 1, 4, 2),
            3: (20, 1, 1, 2),
        })
        assert [(e.opening_inventory, e.closing_inventory) for e in entries] == [(10, 12), (12, 8), (8, 27)]
        for prev, nxt in zip(entries, entries[1:]):
            assert nxt.opening_inventory == prev.closing_inventory
        for e in entries:
            assert e.closing_inventory == e.opening_inventory + e.procurement_qty - e.sales_qty

    def test_negative_closing_allowed(self):
        entries = _ledger(opening=2, days={1: (0, 0, 5, 1), 2: (1, 1, 0, 1)})
        assert [e.closing_inventory for e in entries] == [-3, -2]
        assert entries[1].opening_inventory == -3

    def test_opening_taken_from_sheet_when_day_one_absent(self):
        entries = _ledger(opening=40, days={2: (0, 0, 10, 1)})
        assert entries[0].opening_inventory == 40
        assert entries[0].closing_inventory == 30

    def test_no_days_no_entries(self):
        product = extract_row({"ID": "P1", "Product Name": "A", "Opening Inventory": 5})
        assert build_ledger(product, AS_OF) == []

    def test_export_uses_persisted_names(self):
        (e,) = _ledger()
        dumped = e.model_dump(by_alias=True)
        assert dumped["recordDate"] == AS_OF
        assert dumped["closingInventory"] == 120
        values = e.record_values(7)
        assert values["product_id"] == 7
        assert "product_code" not in values
