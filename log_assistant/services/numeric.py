"""
Numeric coercion for raw datalog cells.
"""

import math
import re
from typing import Any, Iterable, List, Optional

# Plain decimal or scientific literal, no thousands separators
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def to_number(value: Any) -> Optional[float]:
    """
    Convert a raw cell to a finite float, or None.

    The first comma is read as a decimal separator so "12,5" becomes 12.5.
    Never raises.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).strip()
    if not text:
        return None

    text = text.replace(",", ".", 1)
    if not _NUMBER_RE.match(text):
        return None

    try:
        number = float(text)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_series(cells: Iterable[Any]) -> List[Optional[float]]:
    """Coerce every cell of a column, keeping positions aligned."""
    return [to_number(cell) for cell in cells]
