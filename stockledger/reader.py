import io
import logging
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from . import settings
from .cells import is_blank
from .errors import InputShapeError

logger = logging.getLogger(__name__)

UNREADABLE = "Unable to read the Excel file. Please ensure it is not corrupted or password-protected."


# ----------------- helpers -----------------

def _pick_engine(filename: str) -> Optional[str]:
    return "xlrd" if filename.lower().endswith(".xls") else "openpyxl"


def _norm_header(x) -> str:
    if is_blank(x):
        return ""
    # not trimmed: " ID " is not the ID column
    s = str(x)
    if s.lower().startswith("unnamed"):
        return ""
    return s


def _plain(v):
    # numpy scalars -> python scalars so downstream type checks see int/float/str
    if isinstance(v, np.generic):
        return v.item()
    return v


def check_upload(filename: Optional[str], data: Optional[bytes]) -> None:
    """Input-shape checks that need no parsing."""
    if not filename or data is None:
        raise InputShapeError("No file uploaded")
    if not filename.lower().endswith(settings.ALLOWED_EXTENSIONS):
        raise InputShapeError("Only Excel files (.xlsx, .xls) are supported")
    if len(data) == 0:
        raise InputShapeError("Excel file contains no data")
    if len(data) > settings.MAX_UPLOAD_MB * 1024 * 1024:
        raise InputShapeError(f"File exceeds the {settings.MAX_UPLOAD_MB:g} MB upload limit")


# ----------------- main read -----------------

def read_workbook(data: bytes, filename: str) -> Tuple[List[str], List[dict]]:
    """
    Read the FIRST worksheet of an uploaded workbook. The first row is the header
    for the whole sheet.

    Returns (columns, rows): the header names, and one dict per data row that
    leaves out blank cells, so an empty cell reads the same as a missing column.
    Rows with nothing in them are dropped.
    """
    check_upload(filename, data)

    try:
        xls = pd.ExcelFile(io.BytesIO(data), engine=_pick_engine(filename))
    except Exception as e:
        logger.warning(f"Could not open {filename}: {e}")
        raise InputShapeError(UNREADABLE) from e

    if not xls.sheet_names:
        raise InputShapeError("Excel file contains no worksheets")

    try:
        df = pd.read_excel(xls, sheet_name=xls.sheet_names[0], header=0)
    except Exception as e:
        logger.warning(f"Could not read first sheet of {filename}: {e}")
        raise InputShapeError(UNREADABLE) from e

    headers = [_norm_header(c) for c in df.columns]
    keep = [i for i, h in enumerate(headers) if h]
    df = df.iloc[:, keep]
    df.columns = [headers[i] for i in keep]
    columns = list(df.columns)

    rows = []
    for values in df.itertuples(index=False, name=None):
        row = {c: _plain(v) for c, v in zip(columns, values) if not is_blank(_plain(v))}
        if row:
            rows.append(row)

    if not rows:
        raise InputShapeError("Excel file contains no data")

    logger.info(f"Read {len(rows)} row(s), {len(columns)} column(s) from {filename} [{xls.sheet_names[0]}]")
    return columns, rows
