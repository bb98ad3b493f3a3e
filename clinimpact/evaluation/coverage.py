"""How much of a scenario set the local parser handles on its own.

Used to decide which phrasings still depend on the remote extractor.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from clinimpact.evaluation.presets import SCENARIO_PRESETS, ScenarioPreset
from clinimpact.parsing.scenario import CONFUSION_KEYS, OPERATIONAL_KEYS, is_usable, parse_scenario_text

_ALL_KEYS = CONFUSION_KEYS + OPERATIONAL_KEYS


def local_coverage(scenarios: Iterable[ScenarioPreset] | None = None) -> pd.DataFrame:
    """Run the local parser over *scenarios* and tabulate the outcome.

    One row per scenario, indexed by scenario id.  Columns:

    - one column per output field holding the parsed value (``pd.NA`` when
      the field was not resolved),
    - ``n_fields``: number of resolved fields,
    - ``usable``: whether the result passes the usability gate,
    - ``matched`` / ``mismatched``: confusion fields whose parsed value
      agrees / disagrees with the scenario's reference parameters.
    """
    if scenarios is None:
        scenarios = SCENARIO_PRESETS

    rows: list[dict] = []
    for scenario in scenarios:
        parsed = parse_scenario_text(scenario.context) or {}
        row: dict = {"id": scenario.id}
        for key in _ALL_KEYS:
            row[key] = parsed.get(key, pd.NA)
        reference = {k: v for k, v in scenario.params.items() if k in CONFUSION_KEYS}
        compared = [k for k in reference if k in parsed]
        row["n_fields"] = len(parsed)
        row["usable"] = is_usable(parsed)
        row["matched"] = sum(1 for k in compared if parsed[k] == reference[k])
        row["mismatched"] = len(compared) - row["matched"]
        rows.append(row)

    frame = pd.DataFrame(rows, columns=["id", *_ALL_KEYS, "n_fields", "usable", "matched", "mismatched"])
    frame[list(_ALL_KEYS)] = frame[list(_ALL_KEYS)].astype("Int64")
    return frame.set_index("id")


def coverage_summary(frame: pd.DataFrame) -> dict:
    """Aggregate a :func:`local_coverage` frame into headline rates."""
    n = len(frame)
    if n == 0:
        return {"n_scenarios": 0, "usable_rate": 0.0, "field_accuracy": None, "unresolved": []}

    compared = int(frame["matched"].sum() + frame["mismatched"].sum())
    return {
        "n_scenarios": n,
        "usable_rate": round(float(frame["usable"].mean()), 3),
        "field_accuracy": round(float(frame["matched"].sum()) / compared, 3) if compared else None,
        "unresolved": [str(i) for i in frame.index[frame["n_fields"] == 0]],
    }
