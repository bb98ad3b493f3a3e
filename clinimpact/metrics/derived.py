"""Confusion-matrix metrics derived from a simulation parameter set."""
from __future__ import annotations

from pydantic import BaseModel

from clinimpact.schema.params import SimulationParams


class DerivedMetrics(BaseModel):
    negative_cases: int
    false_negatives: int
    true_negatives: int
    precision: float
    recall: float
    specificity: float
    prevalence: float

    def to_dict(self) -> dict:
        return self.model_dump()


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def derive_metrics(params: SimulationParams) -> DerivedMetrics:
    """Fill in FN/TN and the headline rates for *params*.

    FN and TN are clamped at zero when TP or FP exceed their class size.
    Any rate whose denominator is zero is reported as 0.
    """
    tp = params.true_positives
    fp = params.false_positives
    negative_cases = max(0, params.total_patients - params.positive_cases)
    false_negatives = max(0, params.positive_cases - tp)
    true_negatives = max(0, negative_cases - fp)

    return DerivedMetrics(
        negative_cases=negative_cases,
        false_negatives=false_negatives,
        true_negatives=true_negatives,
        precision=_ratio(tp, tp + fp),
        recall=_ratio(tp, params.positive_cases),
        specificity=_ratio(true_negatives, negative_cases),
        prevalence=_ratio(params.positive_cases, params.total_patients),
    )
