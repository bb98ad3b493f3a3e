"""Rule-based scenario text parsing: cells, operational fields, assembly."""

from clinimpact.parsing.cells import ConfusionCell, resolve_cells, resolve_line
from clinimpact.parsing.numbers import extract_number
from clinimpact.parsing.operational import (
    extract_cohort_size,
    extract_daily_capacity,
    extract_horizon_days,
    extract_operational,
    extract_sla_days,
    extract_workdays_per_week,
)
from clinimpact.parsing.polarity import Polarity, classify_polarity
from clinimpact.parsing.scenario import is_usable, parse_scenario_text

__all__ = [
    "ConfusionCell",
    "Polarity",
    "classify_polarity",
    "extract_cohort_size",
    "extract_daily_capacity",
    "extract_horizon_days",
    "extract_number",
    "extract_operational",
    "extract_sla_days",
    "extract_workdays_per_week",
    "is_usable",
    "parse_scenario_text",
    "resolve_cells",
    "resolve_line",
]
