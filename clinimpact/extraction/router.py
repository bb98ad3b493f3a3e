"""Local-first routing between the rule-based parser and a remote extractor."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from clinimpact.extraction.base import ExtractionError, RemoteExtractor
from clinimpact.extraction.claude_extractor import ClaudeScenarioExtractor
from clinimpact.extraction.config import ProviderConfig, ProviderKey
from clinimpact.extraction.phi import PHIDetector
from clinimpact.parsing.scenario import CONFUSION_KEYS, OPERATIONAL_KEYS, is_usable, parse_scenario_text

logger = logging.getLogger(__name__)

Source = Literal["local", "remote", "none"]


@dataclass
class ExtractionOutcome:
    """Parameters for one scenario and where they came from."""

    params: dict[str, int] = field(default_factory=dict)
    source: Source = "none"

    def to_dict(self) -> dict:
        return {"params": dict(self.params), "source": self.source}


def _pick(data: dict[str, int], keys: tuple[str, ...]) -> dict[str, int]:
    return {key: data[key] for key in keys if key in data}


class ScenarioRouter:
    """Try the local parser first and escalate to a remote extractor.

    The local result is returned as-is when it passes the usability gate.
    Otherwise the confusion-matrix fields come from the remote extractor,
    and the operational fields come from whichever side resolved them,
    preferring the local parser.  Fields are never mixed within a category.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        extractor: RemoteExtractor | None = None,
        phi_detector: PHIDetector | None = None,
    ) -> None:
        self.config = config or ProviderConfig()
        self.phi = phi_detector or PHIDetector()
        if extractor is None and self.config.provider == ProviderKey.ANTHROPIC:
            extractor = ClaudeScenarioExtractor(self.config)
        self.extractor = extractor

    def parse(self, text: str, allow_remote: bool = True) -> ExtractionOutcome:
        local = parse_scenario_text(text)
        if is_usable(local):
            return ExtractionOutcome(params=dict(local), source="local")

        if not allow_remote or self.config.provider == ProviderKey.LOCAL or self.extractor is None:
            return self._local_outcome(local)

        outbound = self.phi.redact_text(text) if self.config.redact_phi else text
        try:
            remote = self.extractor.extract(outbound)
        except ExtractionError as e:
            logger.warning("Remote extraction failed, keeping local result: %s", e)
            return self._local_outcome(local)

        local_ops = _pick(local or {}, OPERATIONAL_KEYS)
        params = _pick(remote, CONFUSION_KEYS)
        params.update(local_ops or _pick(remote, OPERATIONAL_KEYS))
        return ExtractionOutcome(params=params, source="remote")

    @staticmethod
    def _local_outcome(local: dict[str, int] | None) -> ExtractionOutcome:
        if local is None:
            return ExtractionOutcome()
        return ExtractionOutcome(params=dict(local), source="local")
