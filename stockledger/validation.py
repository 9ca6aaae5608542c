"""Gate for parsed spreadsheet rows.

Runs every structural check against the column schema, then every row-level
check against every row, and reports all failures at once with 1-based row
numbers. Nothing reaches extraction or the database unless the whole sheet
passes.

Usage:
    from stockledger.validation import validate_rows

    validate_rows(rows, columns)   # raises ValidationFailed
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from . import settings
from .cells import cell_text, is_blank, parse_number
from .columns import day_label, incomplete_quartets, match_day_column, scan_day_columns
from .errors import ValidationFailed

logger = logging.getLogger(__name__)

NO_ROWS = "Excel file contains no data rows"


def _example_day_columns() -> str:
    return ", ".join(f'"{day_label(m, 1)}"' for m in settings.DAY_MEASURES)


def check_structure(columns: Iterable) -> List[str]:
    """Required base columns and complete day quartets. Returns messages, empty if fine."""
    columns = list(columns)
    errors = []

    missing = [c for c in settings.REQUIRED_COLUMNS if c not in columns]
    if missing:
        errors.append(
            f"Missing required columns: {', '.join(missing)}. "
            f"Expected columns: {', '.join(settings.REQUIRED_COLUMNS)}, and daily columns like {_example_day_columns()}"
        )

    if not scan_day_columns(columns):
        errors.append(f"No daily data columns found. Expected columns like {_example_day_columns()}")
    else:
        for day, missing_labels in incomplete_quartets(columns):
            errors.append(f"Incomplete daily columns for Day {day}: missing {', '.join(missing_labels)}")

    return errors


def _number_problem(value, whole: bool) -> Optional[str]:
    v = parse_number(value)
    if v is None or v < 0:
        return "must be a valid non-negative number"
    if whole and not v.is_integer():
        return "must be a whole number"
    if whole and v > settings.INT_MAX:
        return "is too large"
    if not whole and round(v, 2) >= settings.PRICE_MAX:
        return "is too large"
    return None


def check_row(row: Mapping, row_num: int, seen: Dict[str, int]) -> List[str]:
    """Row-level checks for one row; `seen` maps product ID -> first row number and is updated."""
    errors = []
    prefix = f"Row {row_num}: "

    code = cell_text(row.get(settings.COL_ID))
    if not code:
        errors.append(f"{prefix}Missing or empty Product ID")
    elif len(code) > settings.MAX_CODE_LEN:
        errors.append(f"{prefix}Product ID exceeds {settings.MAX_CODE_LEN} characters")
    elif code in seen:
        errors.append(f'{prefix}Duplicate Product ID "{code}" (first seen in row {seen[code]})')
    else:
        seen[code] = row_num

    name = cell_text(row.get(settings.COL_NAME))
    if not name:
        errors.append(f"{prefix}Missing or empty Product Name")
    elif len(name) > settings.MAX_NAME_LEN:
        errors.append(f"{prefix}Product Name exceeds {settings.MAX_NAME_LEN} characters")

    problem = _number_problem(row.get(settings.COL_OPENING), whole=True)
    if problem:
        errors.append(f"{prefix}{settings.COL_OPENING} {problem}")

    for column, value in row.items():
        hit = match_day_column(column)
        if hit is None:
            continue
        measure = hit[0]
        # a blank day cell is an absent measure, not bad input
        if is_blank(value):
            continue
        problem = _number_problem(value, whole=measure in settings.QUANTITY_MEASURES)
        if problem:
            errors.append(f'Row {row_num}, Column "{column}": Value {problem}')

    return errors


def collect_errors(rows: Sequence[Mapping], columns: Optional[Iterable] = None) -> List[str]:
    """
    All problems found in the sheet, in order: structure first (stops there if any),
    then every row. `columns` defaults to the first row's keys.
    """
    if not rows:
        return [NO_ROWS]

    structural = check_structure(columns if columns is not None else rows[0].keys())
    if structural:
        return structural

    errors: List[str] = []
    seen: Dict[str, int] = {}
    for i, row in enumerate(rows, start=1):
        errors.extend(check_row(row, i, seen))
    return errors


def validate_rows(rows: Sequence[Mapping], columns: Optional[Iterable] = None) -> None:
    errors = collect_errors(rows, columns)
    if not errors:
        return
    if errors == [NO_ROWS]:
        raise ValidationFailed([], message=NO_ROWS)
    logger.info(f"Validation rejected sheet: {len(errors)} problem(s)")
    raise ValidationFailed(errors)
