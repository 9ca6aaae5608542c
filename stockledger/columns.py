import re
from typing import Dict, Iterable, List, Optional, Tuple

from . import settings


def _day_pattern(label: str) -> "re.Pattern":
    return re.compile(rf"^{re.escape(label)} \(Day (\d+)\)$", re.IGNORECASE)


# measure key -> compiled "<label> (Day N)" matcher
DAY_PATTERNS = {measure: _day_pattern(label) for measure, label in settings.DAY_MEASURES.items()}


def day_label(measure: str, day: int) -> str:
    return f"{settings.DAY_MEASURES[measure]} (Day {day})"


def match_day_column(name) -> Optional[Tuple[str, int]]:
    """
    Return (measure, day) if the column name is one of the four per-day measures,
    else None. Only letter case is relaxed; spacing must match "<Label> (Day N)".
    """
    if not isinstance(name, str):
        return None
    for measure, rx in DAY_PATTERNS.items():
        m = rx.match(name)
        if m:
            return measure, int(m.group(1))
    return None


def scan_day_columns(colnames: Iterable) -> Dict[int, Dict[str, str]]:
    """
    Group recognised day columns by day index: {day: {measure: column name}}.
    Source column order does not matter.
    """
    days: Dict[int, Dict[str, str]] = {}
    for c in colnames:
        hit = match_day_column(c)
        if hit is None:
            continue
        measure, day = hit
        days.setdefault(day, {})[measure] = c
    return days


def incomplete_quartets(colnames: Iterable) -> List[Tuple[int, List[str]]]:
    """
    [(day, [missing labels...]), ...] for every day index that has some but not
    all four measures, ascending by day.
    """
    out = []
    for day, found in sorted(scan_day_columns(colnames).items()):
        missing = [day_label(m, day) for m in settings.DAY_MEASURES if m not in found]
        if missing:
            out.append((day, missing))
    return out
