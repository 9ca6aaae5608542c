from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from .schemas import LedgerEntry, ProductRow


def anchor_date(as_of: Optional[Union[date, datetime]] = None) -> date:
    """The upload's calendar day; datetimes lose their time-of-day."""
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def slot_dates(n: int, anchor: date) -> List[date]:
    """n consecutive days ending on the anchor: slot k -> anchor - (n-1-k) days."""
    return [anchor - timedelta(days=n - 1 - k) for k in range(n)]


def build_ledger(product: ProductRow, as_of: Optional[Union[date, datetime]] = None) -> List[LedgerEntry]:
    """
    Walk a product's day slots in order and carry the running stock balance.

    Slot 0 opens with the sheet's declared opening inventory; every later slot
    opens with the previous slot's closing. closing = opening + procured - sold,
    with no floor (negative closing means oversold). Day labels are ordinal
    only: the last slot is dated the anchor day and earlier slots count back
    from it one day at a time.
    """
    if not product.days:
        return []

    dates = slot_dates(len(product.days), anchor_date(as_of))
    entries = []
    balance = product.opening_inventory
    for obs, record_date in zip(product.days, dates):
        opening = balance
        closing = opening + obs.procurement_qty - obs.sales_qty
        entries.append(LedgerEntry(
            product_code=product.product_code,
            record_date=record_date,
            opening_inventory=opening,
            procurement_qty=obs.procurement_qty,
            procurement_price=obs.procurement_price,
            sales_qty=obs.sales_qty,
            sales_price=obs.sales_price,
            closing_inventory=closing,
        ))
        balance = closing
    return entries
