from clinimpact.metrics.capacity import CapacityPlan, fit_to_capacity, plan_capacity
from clinimpact.metrics.derived import DerivedMetrics, derive_metrics

__all__ = ["CapacityPlan", "DerivedMetrics", "derive_metrics", "fit_to_capacity", "plan_capacity"]
