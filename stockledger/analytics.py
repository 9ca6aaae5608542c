"""
Read side over the committed ledger: date-range presets, per-product chart
series and KPI rollups. Everything is computed from daily_records only.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional

import pandas as pd
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import DailyRecord, Product
from .schemas import DateRange

LEDGER_COLUMNS = [
    "product_id", "product_code", "product_name", "record_date",
    "opening_inventory", "procurement_qty", "procurement_price",
    "sales_qty", "sales_price", "closing_inventory",
]


def resolve_date_range(range_key: Optional[str] = None, start=None, end=None,
                       today: Optional[date] = None) -> DateRange:
    """
    'last7'     -> the 7 days ending today
    'thisMonth' -> 1st of the month .. today
    'custom'    -> start/end as given (either may be None)
    anything else -> 'all', unbounded
    """
    today = today or date.today()
    if range_key == "last7":
        return DateRange(key="last7", start=today - timedelta(days=6), end=today)
    if range_key == "thisMonth":
        return DateRange(key="thisMonth", start=today.replace(day=1), end=today)
    if range_key == "custom":
        return DateRange(key="custom", start=start or None, end=end or None)
    return DateRange(key="all")


def list_products(session: Session) -> List[Product]:
    return list(session.execute(select(Product).order_by(Product.product_code)).scalars())


def load_ledger(session: Session, product_ids: Optional[Iterable[int]] = None,
                date_range: Optional[DateRange] = None) -> pd.DataFrame:
    stmt = (
        select(
            DailyRecord.product_id, Product.product_code, Product.name,
            DailyRecord.record_date, DailyRecord.opening_inventory,
            DailyRecord.procurement_qty, DailyRecord.procurement_price,
            DailyRecord.sales_qty, DailyRecord.sales_price,
            DailyRecord.closing_inventory,
        )
        .join(Product, Product.id == DailyRecord.product_id)
        .order_by(DailyRecord.product_id, DailyRecord.record_date)
    )
    if product_ids is not None:
        stmt = stmt.where(DailyRecord.product_id.in_(list(product_ids)))
    if date_range is not None:
        if date_range.start is not None:
            stmt = stmt.where(DailyRecord.record_date >= date_range.start)
        if date_range.end is not None:
            stmt = stmt.where(DailyRecord.record_date <= date_range.end)

    df = pd.DataFrame.from_records(session.execute(stmt).all(), columns=LEDGER_COLUMNS)
    for c in ["procurement_price", "sales_price"]:
        df[c] = df[c].astype(float)
    df["procurement_amount"] = df["procurement_qty"] * df["procurement_price"]
    df["sales_amount"] = df["sales_qty"] * df["sales_price"]
    return df


def _label(d: date) -> str:
    return f"{d:%b} {d.day}"


def product_series(df: pd.DataFrame) -> List[dict]:
    """Chart points per product: closing inventory and the day's procurement/sales amounts."""
    out = []
    for (pid, code, name), g in df.groupby(["product_id", "product_code", "product_name"], sort=False):
        g = g.sort_values("record_date")
        out.append({
            "productId": int(pid),
            "productName": name,
            "productCode": code,
            "data": [
                {
                    "date": _label(r.record_date),
                    "recordDate": r.record_date.isoformat(),
                    "inventory": int(r.closing_inventory),
                    "procurementAmount": float(r.procurement_amount),
                    "salesAmount": float(r.sales_amount),
                }
                for r in g.itertuples(index=False)
            ],
        })
    return out


def product_kpis(df: pd.DataFrame) -> List[dict]:
    """
    Per product totals over the frame. Sell-through is units sold over units
    available (first opening + everything procured), as a percentage.
    """
    out = []
    for (pid, code, name), g in df.groupby(["product_id", "product_code", "product_name"], sort=False):
        g = g.sort_values("record_date")
        revenue = float(g["sales_amount"].sum())
        cost = float(g["procurement_amount"].sum())
        sold = int(g["sales_qty"].sum())
        procured = int(g["procurement_qty"].sum())
        available = int(g["opening_inventory"].iloc[0]) + procured
        out.append({
            "productId": int(pid),
            "productName": name,
            "productCode": code,
            "totalRevenue": revenue,
            "totalCost": cost,
            "totalUnitsSold": sold,
            "totalUnitsProcured": procured,
            "averageSellingPrice": revenue / sold if sold else 0.0,
            "averageProcurementPrice": cost / procured if procured else 0.0,
            "endingInventory": int(g["closing_inventory"].iloc[-1]),
            "netAmount": revenue - cost,
            "sellThroughRate": sold / available * 100 if available > 0 else 0.0,
        })
    return out
