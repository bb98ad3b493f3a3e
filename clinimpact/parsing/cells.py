"""Assign per-line counts to confusion-matrix cells.

Each line of a scenario is tried against an ordered tuple of line rules.
A rule resolves the line to a (predicted, actual) polarity pair; the first
pair that names a cell wins and the line's trailing number is stored there.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from clinimpact.parsing.numbers import extract_number
from clinimpact.parsing.polarity import Polarity, classify_polarity


class ConfusionCell(str, Enum):
    TRUE_POSITIVE = "tp"
    FALSE_POSITIVE = "fp"
    FALSE_NEGATIVE = "fn"
    TRUE_NEGATIVE = "tn"


_CELL_FOR_PAIR: dict[tuple[Polarity, Polarity], ConfusionCell] = {
    (Polarity.POSITIVE, Polarity.POSITIVE): ConfusionCell.TRUE_POSITIVE,
    (Polarity.POSITIVE, Polarity.NEGATIVE): ConfusionCell.FALSE_POSITIVE,
    (Polarity.NEGATIVE, Polarity.POSITIVE): ConfusionCell.FALSE_NEGATIVE,
    (Polarity.NEGATIVE, Polarity.NEGATIVE): ConfusionCell.TRUE_NEGATIVE,
}

_PREDICTION_MARKER = r"\b(?:test|pred(?:icted)?)\b"
_ACTUAL_MARKER = r"\b(?:actual|truth|label|ground\s*truth)\b"
_LABEL_WORD = r"\b(true|false|positive|negative)\b"

_PREDICTION_SPAN = re.compile(_PREDICTION_MARKER + r".*?" + _LABEL_WORD)
_ACTUAL_SPAN = re.compile(_ACTUAL_MARKER + r".*?" + _LABEL_WORD)
_PREDICTION_WORD = re.compile(_PREDICTION_MARKER)
_ACTUAL_WORD = re.compile(_ACTUAL_MARKER)

PolarityPair = tuple[Polarity, Polarity]


@dataclass(frozen=True)
class LineRule:
    """A named strategy turning one lower-cased line into a polarity pair."""

    name: str
    resolve: Callable[[str], PolarityPair | None]


def structured_pair(line: str) -> PolarityPair | None:
    """``test|pred ... <label>`` together with ``actual|truth ... <label>``."""
    predicted = _PREDICTION_SPAN.search(line)
    actual = _ACTUAL_SPAN.search(line)
    if predicted is None or actual is None:
        return None
    return classify_polarity(predicted.group(1)), classify_polarity(actual.group(1))


def heuristic_pair(line: str) -> PolarityPair | None:
    """Both marker words present anywhere on the line.

    The predicted polarity comes from the whole line and the actual polarity
    from whatever follows the first actual marker.  Lines that put the
    actual marker before the prediction marker can resolve the wrong way.
    """
    if _PREDICTION_WORD.search(line) is None:
        return None
    actual = _ACTUAL_WORD.search(line)
    if actual is None:
        return None
    return classify_polarity(line), classify_polarity(line[actual.end():])


CELL_RULES: tuple[LineRule, ...] = (
    LineRule("structured", structured_pair),
    LineRule("heuristic", heuristic_pair),
)


def split_lines(text: str) -> list[str]:
    """Lower-case *text* and return its non-blank, stripped lines."""
    lines = (line.strip() for line in re.split(r"\r?\n", text.lower()))
    return [line for line in lines if line]


def resolve_line(line: str, rules: tuple[LineRule, ...] = CELL_RULES) -> ConfusionCell | None:
    """Return the cell *line* describes, or None when no rule resolves it."""
    for rule in rules:
        pair = rule.resolve(line)
        if pair is None:
            continue
        cell = _CELL_FOR_PAIR.get(pair)
        if cell is not None:
            return cell
    return None


def resolve_cells(text: str) -> dict[ConfusionCell, int]:
    """Map each resolvable line of *text* to a confusion cell count.

    Lines without a number are skipped.  When several lines land on the
    same cell the last one wins.
    """
    cells: dict[ConfusionCell, int] = {}
    for line in split_lines(text):
        value = extract_number(line)
        if value is None:
            continue
        cell = resolve_line(line)
        if cell is not None:
            cells[cell] = value
    return cells
