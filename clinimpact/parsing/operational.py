"""Operational capacity fields found anywhere in a scenario.

Every field has its own ordered tuple of :class:`Rule` objects.  Rules are
evaluated in order against the whole lower-cased text and the first one that
both matches and converts to a value wins.  A field with no winning rule is
absent, never zero.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Rule:
    """A named pattern plus a converter from its match to an integer."""

    name: str
    pattern: re.Pattern
    convert: Callable[[re.Match], int | None]

    def apply(self, text: str) -> int | None:
        match = self.pattern.search(text)
        if match is None:
            return None
        return self.convert(match)


def first_match(rules: tuple[Rule, ...], text: str) -> int | None:
    """Return the value of the first rule in *rules* that resolves *text*."""
    for rule in rules:
        value = rule.apply(text)
        if value is not None:
            return value
    return None


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------


def _group(index: int = 1, scale: int = 1) -> Callable[[re.Match], int | None]:
    def convert(match: re.Match) -> int | None:
        try:
            return int(match.group(index).replace(",", "")) * scale
        except ValueError:
            return None
    return convert


def _constant(value: int) -> Callable[[re.Match], int]:
    return lambda match: value


def _weekday_count(match: re.Match) -> int | None:
    value = int(match.group(1))
    return value if 1 <= value <= 7 else None


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

DAILY_CAPACITY_RULES: tuple[Rule, ...] = (
    Rule(
        "per_day",
        re.compile(r"\b(\d{1,7})\s*(?:patients|cases)?\s*(?:per\s*day|/\s*day)\b"),
        _group(),
    ),
    Rule("capacity_label", re.compile(r"\bcapacity\s*[:=]?\s*(\d{1,7})\b"), _group()),
)

WORKDAYS_RULES: tuple[Rule, ...] = (
    Rule("weekdays_only", re.compile(r"\b(?:weekdays?\s*only|business\s*days?)\b"), _constant(5)),
    Rule(
        "days_per_week",
        re.compile(r"\b(\d)\s*(?:work\s*days?|workdays?|days?)\s*per\s*week\b"),
        _weekday_count,
    ),
    Rule("every_day", re.compile(r"\b7\s*days?\s*(?:a|per)\s*week\b"), _constant(7)),
)

SLA_RULES: tuple[Rule, ...] = (
    Rule("sla_keyword", re.compile(r"\bsla\b[^\d]*(\d{1,4})\s*days?"), _group()),
    Rule("within_days", re.compile(r"\bwithin\s*(\d{1,4})\s*days?"), _group()),
)

COHORT_RULES: tuple[Rule, ...] = (
    Rule(
        "cohort_label",
        re.compile(
            r"\b(?:cohort|population|outreach)\s*(?:size)?\s*[:=]?\s*"
            r"(\d{1,3}(?:,\d{3})+|\d{1,12})\b"
        ),
        _group(),
    ),
)

HORIZON_RULES: tuple[Rule, ...] = (
    Rule("one_year", re.compile(r"\b(?:1|one)\s*year\b|\bfor\s*(?:the\s*)?year\b"), _constant(365)),
    Rule("years", re.compile(r"\b(\d{1,2})\s*years?\b"), _group(scale=365)),
    Rule("months", re.compile(r"\b(\d{1,2})\s*months?\b"), _group(scale=30)),
    Rule("weeks", re.compile(r"\b(\d{1,2})\s*weeks?\b"), _group(scale=7)),
)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def extract_daily_capacity(text: str) -> int | None:
    return first_match(DAILY_CAPACITY_RULES, text.lower())


def extract_workdays_per_week(text: str) -> int | None:
    return first_match(WORKDAYS_RULES, text.lower())


def extract_sla_days(text: str) -> int | None:
    return first_match(SLA_RULES, text.lower())


def extract_cohort_size(text: str) -> int | None:
    return first_match(COHORT_RULES, text.lower())


def extract_horizon_days(text: str) -> int | None:
    return first_match(HORIZON_RULES, text.lower())


# Output key -> extractor, in output order.
OPERATIONAL_EXTRACTORS: dict[str, Callable[[str], int | None]] = {
    "dailyCapacity": extract_daily_capacity,
    "workdaysPerWeek": extract_workdays_per_week,
    "slaDays": extract_sla_days,
    "cohortSize": extract_cohort_size,
    "horizonDays": extract_horizon_days,
}


def extract_operational(text: str) -> dict[str, int]:
    """Run every operational extractor and keep only the resolved fields."""
    fields: dict[str, int] = {}
    for key, extractor in OPERATIONAL_EXTRACTORS.items():
        value = extractor(text)
        if value is not None:
            fields[key] = value
    return fields
