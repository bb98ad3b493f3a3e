"""
Pytest Configuration and Shared Fixtures

Scenario texts, a temporary audit log and a scripted remote extractor.
"""

import pytest

from clinimpact.extraction.base import ExtractionError, RemoteExtractor
from clinimpact.extraction.config import ProviderConfig, ProviderKey
from clinimpact.schema.params import SimulationParams
from clinimpact.server.audit import AuditLog


class ScriptedExtractor(RemoteExtractor):
    """Remote extractor double that returns a fixed result and records calls."""

    def __init__(self, result=None, error=None):
        self.result = result or {}
        self.error = error
        self.calls = []

    def extract(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise ExtractionError(self.error)
        return dict(self.result)


@pytest.fixture
def matrix_scenario():
    """A scenario stating all four confusion cells on separate lines."""
    return (
        "Validation on chest radiographs\n"
        "Predicted positive, actual positive: 32\n"
        "Predicted positive, actual negative: 96\n"
        "Predicted negative, actual positive: 8\n"
        "Predicted negative, actual negative: 1,864\n"
    )


@pytest.fixture
def capacity_scenario():
    return "capacity 42 per day, SLA 10 days, cohort size 1000, weekdays only, for the year"


@pytest.fixture
def sim_params():
    return SimulationParams(
        total_patients=1000,
        positive_cases=50,
        true_positives=40,
        false_positives=60,
    )


@pytest.fixture
def audit_log(tmp_path):
    return AuditLog(tmp_path / "audit.jsonl")


@pytest.fixture
def anthropic_config():
    return ProviderConfig(provider=ProviderKey.ANTHROPIC, api_key="test-key")


@pytest.fixture
def scripted_extractor():
    return ScriptedExtractor(
        result={"totalPatients": 1000, "positiveCases": 5, "truePositives": 3, "falsePositives": 12}
    )


@pytest.fixture
def make_extractor():
    """Factory for :class:`ScriptedExtractor` doubles."""
    return ScriptedExtractor
