"""Claude-backed scenario extractor.

Uses the Anthropic Python SDK with a single forced tool so the model returns
the simulation parameters as structured tool input instead of prose.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import ValidationError

from clinimpact.extraction.base import ExtractionError, ProviderNotConfiguredError, RemoteExtractor
from clinimpact.extraction.config import ProviderConfig
from clinimpact.schema.params import ScenarioParams

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tool definition
# ---------------------------------------------------------------------------

_SUBMIT_TOOL = {
    "name": "submit_parameters",
    "description": (
        "Submit the numerical parameters stated in the clinical scenario. "
        "Omit any parameter the scenario does not mention."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "totalPatients": {
                "type": "integer",
                "description": 'Total number of patients or scans in the sample, e.g. "1000 scans".',
            },
            "positiveCases": {
                "type": "integer",
                "description": 'Number of actual positive cases, e.g. "10 positive ICH cases".',
            },
            "truePositives": {
                "type": "integer",
                "description": 'Positive cases the model correctly identified, e.g. "identified 8 of those cases".',
            },
            "falsePositives": {
                "type": "integer",
                "description": 'Healthy patients the model flagged, e.g. "flagged 12 healthy patients".',
            },
            "dailyCapacity": {
                "type": "integer",
                "description": "Flagged cases staff can review per day.",
            },
            "workdaysPerWeek": {
                "type": "integer",
                "description": "Working days per week (1-7).",
            },
            "slaDays": {
                "type": "integer",
                "description": "Days allowed to review every flagged case.",
            },
            "cohortSize": {
                "type": "integer",
                "description": "Size of the real-world population the tool will run on.",
            },
            "horizonDays": {
                "type": "integer",
                "description": "Planning horizon in days.",
            },
        },
        "required": [],
    },
}

_SYSTEM_PROMPT = """\
You extract simulation parameters from clinical scenarios describing a
binary classifier (for example a diagnostic AI) evaluated on a patient
sample. Call `submit_parameters` exactly once. Only report numbers the
scenario states or that follow directly from it; leave everything else out.
"""


class ClaudeScenarioExtractor(RemoteExtractor):
    """Extract parameters by calling the Anthropic API with tool use.

    Parameters
    ----------
    config : ProviderConfig
        Model, API key and token budget.  The key falls back to the
        ``ANTHROPIC_API_KEY`` env var inside the SDK.
    client : Any
        Optional pre-built ``anthropic.Anthropic`` client (tests inject a mock).
    """

    def __init__(self, config: ProviderConfig | None = None, client: Any = None) -> None:
        self.config = config or ProviderConfig()
        self._client = client

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def extract(self, text: str) -> dict[str, int]:
        client = self._get_client()
        try:
            response = client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                system=_SYSTEM_PROMPT,
                tools=[_SUBMIT_TOOL],
                tool_choice={"type": "tool", "name": _SUBMIT_TOOL["name"]},
                messages=[{"role": "user", "content": f"SCENARIO:\n---\n{text}\n---"}],
            )
        except Exception as e:
            raise ExtractionError(f"Anthropic request failed: {e}") from e

        tool_input = self._tool_input(response)
        try:
            params = ScenarioParams.from_dict(tool_input)
        except ValidationError as e:
            raise ExtractionError(f"Model returned invalid parameters: {e}") from e

        logger.debug("Remote extraction returned fields %s", sorted(params.to_dict()))
        return params.to_dict()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_client(self) -> Any:
        if self._client is None:
            if not (self.config.api_key or os.environ.get("ANTHROPIC_API_KEY")):
                raise ProviderNotConfiguredError(
                    "No Anthropic API key. Set ANTHROPIC_API_KEY or ProviderConfig.api_key."
                )
            try:
                import anthropic
            except ImportError as e:
                raise ProviderNotConfiguredError(
                    "The 'anthropic' package is required for ClaudeScenarioExtractor. "
                    "Install it with: pip install 'clinimpact[llm]'"
                ) from e
            self._client = anthropic.Anthropic(api_key=self.config.api_key)
        return self._client

    def _tool_input(self, response: Any) -> dict[str, Any]:
        for block in response.content:
            if block.type == "tool_use" and block.name == _SUBMIT_TOOL["name"]:
                return dict(block.input or {})
        raise ExtractionError("Model did not call submit_parameters")
