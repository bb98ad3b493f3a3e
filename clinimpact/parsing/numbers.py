"""Literal number extraction from a single line of scenario text."""
from __future__ import annotations

import math
import re

# A digit followed by any run of digits, grouping commas or decimal points.
_NUMBER_RUN = re.compile(r"\d[\d,.]*")


def extract_number(line: str) -> int | None:
    """Return the trailing number on *line*, rounded to an integer.

    The last run is used because counts usually follow their label
    ("test positive, actual positive: 8").  A line that mixes a day count
    and a patient count therefore yields only the trailing one, so callers
    should isolate the lines they care about first.
    """
    runs = _NUMBER_RUN.findall(line)
    if not runs:
        return None
    try:
        value = float(runs[-1].replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    # Half-up rounding; round() would send 2.5 to 2.
    return int(math.floor(value + 0.5))
