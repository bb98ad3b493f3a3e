"""clinimpact server tools.

Five tools: parse a scenario, derive metrics, plan review capacity, fit the
flag counts to capacity, list presets.  Every method returns a JSON-able
dict and reports failures as ``{"error": ...}`` rather than raising.
"""

from __future__ import annotations

from typing import Any

from clinimpact.evaluation.presets import get_preset, list_presets
from clinimpact.extraction.base import RemoteExtractor
from clinimpact.extraction.config import ProviderConfig
from clinimpact.extraction.router import ScenarioRouter
from clinimpact.metrics.capacity import fit_to_capacity, plan_capacity
from clinimpact.metrics.derived import derive_metrics
from clinimpact.parsing.scenario import is_usable
from clinimpact.schema.params import SimulationParams
from clinimpact.server.audit import AuditLog


class ScenarioServerTools:
    """The 5-tool scenario server."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        audit_log: AuditLog | None = None,
        extractor: RemoteExtractor | None = None,
    ):
        self.config = config or ProviderConfig.from_env()
        self.audit = audit_log or AuditLog()
        self.router = ScenarioRouter(self.config, extractor=extractor)

    def parse_scenario(self, text: str, allow_remote: bool = True) -> dict:
        """Tool 1: turn scenario text into sparse simulation parameters.

        Returns ``params`` (camelCase, only resolved fields), ``source``
        (local / remote / none) and ``usable``.
        """
        try:
            outcome = self.router.parse(text, allow_remote=allow_remote)
            result = outcome.to_dict()
            result["usable"] = is_usable(outcome.params)
            self.audit.log_tool_call(
                "parse_scenario",
                "Parsed scenario text",
                source=outcome.source,
                fields=sorted(outcome.params),
                phi_redacted=outcome.source == "remote" and self.config.redact_phi,
            )
            return result
        except Exception as e:
            return {"error": str(e)}

    def compute_metrics(self, params: dict[str, Any]) -> dict:
        """Tool 2: precision, recall, specificity and FN/TN for full parameters."""
        try:
            sim = SimulationParams.model_validate(params)
            metrics = derive_metrics(sim)
            self.audit.log_tool_call("compute_metrics", "Derived confusion-matrix metrics")
            return {"params": sim.to_dict(), "metrics": metrics.to_dict()}
        except Exception as e:
            return {"error": str(e)}

    def plan_capacity(self, params: dict[str, Any], **overrides: Any) -> dict:
        """Tool 3: scale flag rates to a cohort and compare with review capacity.

        Keyword overrides (``cohort_size``, ``daily_capacity``,
        ``workdays_per_week``, ``sla_days``, ``horizon_days``) win over the
        operational fields in *params*.
        """
        try:
            sim = SimulationParams.model_validate(params)
            plan = plan_capacity(sim, **{k: v for k, v in overrides.items() if v is not None})
            self.audit.log_tool_call("plan_capacity", "Computed capacity plan")
            return plan.to_dict()
        except Exception as e:
            return {"error": str(e)}

    def fit_to_capacity(self, params: dict[str, Any]) -> dict:
        """Tool 4: lower TP/FP so the flagged cohort clears within the SLA."""
        try:
            sim = SimulationParams.model_validate(params)
            fitted = fit_to_capacity(sim)
            self.audit.log_tool_call("fit_to_capacity", "Fitted flag counts to review capacity")
            return {"params": fitted.to_dict(), "plan": plan_capacity(fitted).to_dict()}
        except Exception as e:
            return {"error": str(e)}

    def list_presets(self, preset_id: str | None = None) -> dict:
        """Tool 5: list scenario presets, or return one preset in full."""
        self.audit.log_tool_call("list_presets", "Listed scenario presets")
        if preset_id is None:
            return {"presets": list_presets()}
        preset = get_preset(preset_id)
        if preset is None:
            return {"error": f"Unknown preset: {preset_id}"}
        return preset.to_dict()
