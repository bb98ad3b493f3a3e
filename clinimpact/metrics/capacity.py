"""Review workload for flagged cases when a classifier is deployed on a cohort.

The per-patient flag, TP and FP rates observed in the simulation sample are
scaled to the real-world cohort and compared with staff review capacity.
"""
from __future__ import annotations

import math

from pydantic import BaseModel

from clinimpact.schema.params import SimulationParams

DEFAULT_COHORT_SIZE = 1000
DEFAULT_DAILY_CAPACITY = 40
DEFAULT_WORKDAYS_PER_WEEK = 5
DEFAULT_SLA_DAYS = 10
DEFAULT_HORIZON_DAYS = 365


class CapacityPlan(BaseModel):
    """Workload figures for one cohort / capacity configuration."""

    cohort_size: int
    daily_capacity: int
    workdays_per_week: int
    sla_days: int
    horizon_days: int

    flagged_cohort: int
    tp_cohort: int
    fp_cohort: int
    ppv: float
    days_to_clear: int | None
    backlog_at_sla: int
    meets_sla: bool
    tp_per_day: int
    fp_per_day: int
    weekly_throughput: int
    effective_workdays: int
    flagged_per_day: float
    capacity_delta_per_day: float

    def to_dict(self) -> dict:
        return self.model_dump()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def plan_capacity(
    params: SimulationParams,
    *,
    cohort_size: int | None = None,
    daily_capacity: int | None = None,
    workdays_per_week: int | None = None,
    sla_days: int | None = None,
    horizon_days: int | None = None,
) -> CapacityPlan:
    """Compute the review workload for *params* scaled to a cohort.

    Explicit keyword arguments win over the operational fields stored on
    *params*; anything still unset falls back to the module defaults (the
    cohort defaults to the sample size).

    Raises
    ------
    ValueError
        If a count is negative or ``workdays_per_week`` is outside 1-7.
    """
    if cohort_size is None:
        cohort_size = params.cohort_size
    if cohort_size is None:
        cohort_size = params.total_patients if params.total_patients > 0 else DEFAULT_COHORT_SIZE
    if daily_capacity is None:
        daily_capacity = params.daily_capacity if params.daily_capacity is not None else DEFAULT_DAILY_CAPACITY
    if workdays_per_week is None:
        workdays_per_week = params.workdays_per_week or DEFAULT_WORKDAYS_PER_WEEK
    if sla_days is None:
        sla_days = params.sla_days if params.sla_days is not None else DEFAULT_SLA_DAYS
    if horizon_days is None:
        horizon_days = params.horizon_days or DEFAULT_HORIZON_DAYS

    for name, value in (
        ("cohort_size", cohort_size),
        ("daily_capacity", daily_capacity),
        ("sla_days", sla_days),
        ("horizon_days", horizon_days),
    ):
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
    if not 1 <= workdays_per_week <= 7:
        raise ValueError(f"workdays_per_week must be between 1 and 7, got {workdays_per_week}")

    total = params.total_patients
    flagged = params.true_positives + params.false_positives
    flagged_rate = flagged / total if total > 0 else 0.0
    tp_rate = params.true_positives / total if total > 0 else 0.0
    fp_rate = params.false_positives / total if total > 0 else 0.0

    flagged_cohort = _round_half_up(flagged_rate * cohort_size)
    tp_cohort = _round_half_up(tp_rate * cohort_size)
    fp_cohort = _round_half_up(fp_rate * cohort_size)

    days_to_clear = math.ceil(flagged_cohort / daily_capacity) if daily_capacity > 0 else None
    backlog_at_sla = max(0, flagged_cohort - daily_capacity * sla_days)

    ppv = tp_cohort / flagged_cohort if flagged_cohort > 0 else 0.0
    reviewed_per_day = min(daily_capacity, flagged_cohort)

    effective_workdays = max(1, math.ceil(horizon_days * workdays_per_week / 7))
    flagged_per_day = flagged_cohort / effective_workdays

    return CapacityPlan(
        cohort_size=cohort_size,
        daily_capacity=daily_capacity,
        workdays_per_week=workdays_per_week,
        sla_days=sla_days,
        horizon_days=horizon_days,
        flagged_cohort=flagged_cohort,
        tp_cohort=tp_cohort,
        fp_cohort=fp_cohort,
        ppv=ppv,
        days_to_clear=days_to_clear,
        backlog_at_sla=backlog_at_sla,
        meets_sla=backlog_at_sla == 0,
        tp_per_day=_round_half_up(reviewed_per_day * ppv),
        fp_per_day=_round_half_up(reviewed_per_day * (1 - ppv)),
        weekly_throughput=daily_capacity * workdays_per_week,
        effective_workdays=effective_workdays,
        flagged_per_day=flagged_per_day,
        capacity_delta_per_day=daily_capacity - flagged_per_day,
    )


def fit_to_capacity(params: SimulationParams) -> SimulationParams:
    """Lower the flag counts of *params* so the cohort workload fits the SLA.

    The target is ``min(flagged_cohort, daily_capacity * sla_days)``.  False
    positives are cut first; if the true positives alone already reach the
    target, TP is cut to it and FP is set to zero.  New sample counts are
    clamped to the positive and negative class sizes.

    *params* is returned unchanged (as a copy) when the cohort, daily
    capacity or SLA is missing or zero, or the sample is empty.
    """
    total = params.total_patients
    cohort = params.cohort_size if params.cohort_size else total
    capacity = params.daily_capacity or 0
    sla = params.sla_days or 0
    if not cohort or not capacity or not sla or total <= 0:
        return params.model_copy()

    flagged_cohort = _round_half_up((params.true_positives + params.false_positives) / total * cohort)
    tp_cohort = _round_half_up(params.true_positives / total * cohort)
    target = min(flagged_cohort, capacity * sla)

    if tp_cohort >= target:
        true_positives = _round_half_up(max(0, target) / cohort * total)
        true_positives = max(0, min(params.positive_cases, true_positives))
        return params.merged_with({"truePositives": true_positives, "falsePositives": 0})

    negative_cases = max(0, total - params.positive_cases)
    false_positives = _round_half_up(max(0, target - tp_cohort) / cohort * total)
    false_positives = max(0, min(negative_cases, false_positives))
    return params.merged_with({"falsePositives": false_positives})
