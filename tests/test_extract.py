"""Tests for stockledger/extract.py."""

from decimal import Decimal

from stockledger.extract import extract_row
from tests.conftest import make_row


class TestExtractRow:
    def test_identity_trimmed(self):
        p = extract_row(make_row(code="  P001 ", name=" iPhone 15  "))
        assert p.product_code == "P001"
        assert p.product_name == "iPhone 15"
        assert p.opening_inventory == 100

    def test_single_day(self):
        p = extract_row(make_row())
        assert len(p.days) == 1
        d = p.days[0]
        assert d.day == 1
        assert d.procurement_qty == 50
        assert d.procurement_price == Decimal("5000.00")
        assert d.sales_qty == 30
        assert d.sales_price == Decimal("6500.00")
        assert d.opening_inventory == 100

    def test_days_sorted_regardless_of_column_order(self):
        row = {"ID": "P1", "Product Name": "A", "Opening Inventory": 0}
        for day in (3, 1, 2):
            row[f"Sales Qty (Day {day})"] = day * 10
        p = extract_row(row)
        assert [d.day for d in p.days] == [1, 2, 3]
        assert [d.sales_qty for d in p.days] == [10, 20, 30]

    def test_partial_day_defaults_to_zero(self):
        row = make_row()
        row["Sales Qty (Day 2)"] = 7
        p = extract_row(row)
        d2 = p.days[1]
        assert d2.day == 2
        assert d2.sales_qty == 7
        assert d2.procurement_qty == 0
        assert d2.procurement_price == Decimal("0.00")
        assert d2.sales_price == Decimal("0.00")
        assert d2.opening_inventory is None

    def test_gaps_not_filled(self):
        p = extract_row(make_row(days={1: (1, 1, 1, 1), 3: (2, 2, 2, 2)}))
        assert [d.day for d in p.days] == [1, 3]

    def test_no_day_columns(self):
        p = extract_row({"ID": "P1", "Product Name": "A", "Opening Inventory": 5})
        assert p.days == []

    def test_prices_rounded_to_cents(self):
        p = extract_row(make_row(days={1: (1, 10.555, 1, "2.004")}))
        assert p.days[0].procurement_price == Decimal("10.56")
        assert p.days[0].sales_price == Decimal("2.00")

    def test_whole_floats_become_ints(self):
        p = extract_row(make_row(code=1001.0, opening=12.0, days={1: (5.0, 1, 2.0, 1)}))
        assert p.product_code == "1001"
        assert p.opening_inventory == 12
        assert isinstance(p.days[0].procurement_qty, int)
