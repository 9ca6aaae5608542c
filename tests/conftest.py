import io
from datetime import date

import pandas as pd
import pytest
from sqlalchemy.pool import StaticPool

from stockledger.db import init_db, make_engine, make_session_factory

AS_OF = date(2024, 1, 15)


def make_row(code="P001", name="iPhone 15", opening=100, days=None, **extra):
    """Sheet row with one quartet per entry of `days`: {day: (proc_qty, proc_price, sales_qty, sales_price)}."""
    if days is None:
        days = {1: (50, 5000, 30, 6500)}
    row = {"ID": code, "Product Name": name, "Opening Inventory": opening}
    for day, (pq, pp, sq, sp) in days.items():
        row[f"Procurement Qty (Day {day})"] = pq
        row[f"Procurement Price (Day {day})"] = pp
        row[f"Sales Qty (Day {day})"] = sq
        row[f"Sales Price (Day {day})"] = sp
    row.update(extra)
    return row


def xlsx_bytes(rows, columns=None) -> bytes:
    buf = io.BytesIO()
    pd.DataFrame(rows, columns=columns).to_excel(buf, index=False, engine="openpyxl")
    return buf.getvalue()


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)
