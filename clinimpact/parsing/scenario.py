"""Assemble a sparse simulation parameter set from free scenario text.

This is the local fast path in front of the remote extractor.  It returns
``None`` when nothing could be derived so the caller knows to escalate.
"""
from __future__ import annotations

import re
from typing import Any, Mapping

from clinimpact.parsing.cells import ConfusionCell, resolve_cells
from clinimpact.parsing.operational import extract_operational

CONFUSION_KEYS: tuple[str, ...] = (
    "totalPatients",
    "positiveCases",
    "truePositives",
    "falsePositives",
)
OPERATIONAL_KEYS: tuple[str, ...] = (
    "dailyCapacity",
    "workdaysPerWeek",
    "slaDays",
    "cohortSize",
    "horizonDays",
)

_DIGIT = re.compile(r"\d")


def parse_scenario_text(text: Any) -> dict[str, int] | None:
    """Parse *text* into a sparse parameter dict, or ``None``.

    ``totalPatients`` sums every resolved cell and ``positiveCases`` sums
    TP and FN; absent cells count as zero and either total is only emitted
    when it is positive.  Fields that could not be derived are left out so
    the result can be merged over existing state.
    """
    if not text or not isinstance(text, str):
        return None
    # Without a single digit there is no count to anchor any field.
    if _DIGIT.search(text) is None:
        return None

    cells = resolve_cells(text)
    operational = extract_operational(text)
    if not cells and not operational:
        return None

    tp = cells.get(ConfusionCell.TRUE_POSITIVE)
    fp = cells.get(ConfusionCell.FALSE_POSITIVE)
    fn = cells.get(ConfusionCell.FALSE_NEGATIVE)
    tn = cells.get(ConfusionCell.TRUE_NEGATIVE)

    result: dict[str, int] = {}
    total = (tp or 0) + (fp or 0) + (fn or 0) + (tn or 0)
    positive_cases = (tp or 0) + (fn or 0)
    if total > 0:
        result["totalPatients"] = total
    if positive_cases > 0:
        result["positiveCases"] = positive_cases
    if tp is not None:
        result["truePositives"] = tp
    if fp is not None:
        result["falsePositives"] = fp
    result.update(operational)
    return result


def is_usable(result: Mapping[str, Any] | None) -> bool:
    """Whether a local result is strong enough to skip the remote extractor.

    It needs ``totalPatients``, or both ``truePositives`` and
    ``falsePositives``.  A result with only operational fields is too weak.
    """
    if not result:
        return False
    if result.get("totalPatients"):
        return True
    return isinstance(result.get("truePositives"), int) and isinstance(
        result.get("falsePositives"), int
    )
