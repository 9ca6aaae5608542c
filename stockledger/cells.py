import math
import numbers
from typing import Optional


def is_blank(x) -> bool:
    if x is None:
        return True
    if isinstance(x, float) and math.isnan(x):
        return True
    return isinstance(x, str) and not x.strip()


def cell_text(x) -> str:
    """Trimmed text of a cell; whole floats lose their '.0' (Excel stores codes like 1001 as 1001.0)."""
    if is_blank(x):
        return ""
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x).strip()


def parse_number(x) -> Optional[float]:
    """
    Finite float for a numeric cell or a numeric string, None for anything else
    (blank, booleans, text, NaN, inf).
    """
    if isinstance(x, bool) or type(x).__name__ == "bool_":
        return None
    if isinstance(x, numbers.Real):
        v = float(x)
    elif isinstance(x, str):
        s = x.strip()
        if not s:
            return None
        try:
            v = float(s)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(v) or math.isinf(v):
        return None
    return v
