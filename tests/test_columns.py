"""Tests for stockledger/columns.py."""

from stockledger.columns import (
    day_label,
    incomplete_quartets,
    match_day_column,
    scan_day_columns,
)


class TestMatchDayColumn:
    def test_each_measure(self):
        assert match_day_column("Procurement Qty (Day 1)") == ("procurement_qty", 1)
        assert match_day_column("Procurement Price (Day 2)") == ("procurement_price", 2)
        assert match_day_column("Sales Qty (Day 10)") == ("sales_qty", 10)
        assert match_day_column("Sales Price (Day 3)") == ("sales_price", 3)

    def test_case_insensitive(self):
        assert match_day_column("sales qty (day 4)") == ("sales_qty", 4)
        assert match_day_column("PROCUREMENT PRICE (DAY 7)") == ("procurement_price", 7)

    def test_non_day_columns(self):
        assert match_day_column("ID") is None
        assert match_day_column("Opening Inventory") is None
        assert match_day_column("Sales Qty") is None
        assert match_day_column("Sales Qty (Day X)") is None
        assert match_day_column("Total Sales Qty (Day 1)") is None
        assert match_day_column(42) is None

    def test_spacing_must_match_vocabulary(self):
        assert match_day_column("Procurement Qty(Day1)") is None
        assert match_day_column("  sales   qty ( day 2 ) ") is None
        assert match_day_column("Sales Qty  (Day 2)") is None

    def test_label_round_trip(self):
        assert day_label("sales_price", 5) == "Sales Price (Day 5)"
        assert match_day_column(day_label("procurement_qty", 12)) == ("procurement_qty", 12)


class TestQuartets:
    def test_order_irrelevant(self):
        cols = ["Sales Price (Day 2)", "ID", "Procurement Qty (Day 2)", "Sales Qty (Day 2)", "Procurement Price (Day 2)"]
        assert scan_day_columns(cols) == {
            2: {
                "sales_price": "Sales Price (Day 2)",
                "procurement_qty": "Procurement Qty (Day 2)",
                "sales_qty": "Sales Qty (Day 2)",
                "procurement_price": "Procurement Price (Day 2)",
            }
        }
        assert incomplete_quartets(cols) == []

    def test_incomplete_quartet_names_missing(self):
        cols = ["Procurement Qty (Day 1)", "Sales Qty (Day 1)"]
        assert incomplete_quartets(cols) == [
            (1, ["Procurement Price (Day 1)", "Sales Price (Day 1)"])
        ]
