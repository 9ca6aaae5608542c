from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping

from . import settings
from .cells import cell_text, parse_number
from .columns import match_day_column
from .schemas import DayObservation, ProductRow

_CENT = Decimal("0.01")


def _qty(value) -> int:
    v = parse_number(value)
    return int(v) if v is not None else 0


def _price(value) -> Decimal:
    v = parse_number(value)
    if v is None:
        return Decimal("0.00")
    return Decimal(str(v)).quantize(_CENT, rounding=ROUND_HALF_UP)


def extract_row(row: Mapping) -> ProductRow:
    """
    One validated spreadsheet row -> product identity + day observations sorted by day index.

    Day columns are found by name, not position. A day index seen for only some
    of the four measures still becomes a slot, the absent measures being 0.
    Gaps in the day numbering are not filled.
    """
    opening = _qty(row.get(settings.COL_OPENING))

    by_day: Dict[int, Dict[str, object]] = {}
    for column, value in row.items():
        hit = match_day_column(column)
        if hit is None:
            continue
        measure, day = hit
        slot = by_day.setdefault(day, {"day": day})
        if measure in settings.QUANTITY_MEASURES:
            slot[measure] = _qty(value)
        else:
            slot[measure] = _price(value)

    days = []
    for day in sorted(by_day):
        slot = by_day[day]
        if day == 1:
            slot["opening_inventory"] = opening
        days.append(DayObservation(**slot))

    return ProductRow(
        product_code=cell_text(row.get(settings.COL_ID)),
        product_name=cell_text(row.get(settings.COL_NAME)),
        opening_inventory=opening,
        days=days,
    )
