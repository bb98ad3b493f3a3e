"""Tests for clinimpact.schema: ScenarioParams and SimulationParams."""
import pytest
from pydantic import ValidationError

from clinimpact.schema.params import ScenarioParams, SimulationParams


class TestScenarioParams:
    def test_from_camel_case(self):
        params = ScenarioParams.from_dict({"totalPatients": 100, "truePositives": 5})
        assert params.total_patients == 100
        assert params.true_positives == 5
        assert params.false_positives is None

    def test_from_snake_case(self):
        params = ScenarioParams(total_patients=100, cohort_size=2000)
        assert params.to_dict() == {"totalPatients": 100, "cohortSize": 2000}

    def test_to_dict_is_sparse(self):
        assert ScenarioParams().to_dict() == {}
        assert ScenarioParams.from_dict(None).to_dict() == {}

    def test_unknown_keys_ignored(self):
        params = ScenarioParams.from_dict({"slaDays": 10, "narrative": "text"})
        assert params.to_dict() == {"slaDays": 10}

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            ScenarioParams.from_dict({"truePositives": -1})

    def test_rejects_workdays_out_of_range(self):
        with pytest.raises(ValidationError):
            ScenarioParams.from_dict({"workdaysPerWeek": 8})

    def test_field_categories(self):
        params = ScenarioParams.from_dict(
            {"truePositives": 3, "falsePositives": 12, "slaDays": 10, "cohortSize": 500}
        )
        assert params.confusion_fields() == {"truePositives": 3, "falsePositives": 12}
        assert params.operational_fields() == {"slaDays": 10, "cohortSize": 500}

    def test_is_usable(self):
        assert ScenarioParams.from_dict({"totalPatients": 10}).is_usable()
        assert not ScenarioParams.from_dict({"cohortSize": 10}).is_usable()


class TestSimulationParams:
    def test_aliases(self, sim_params):
        data = sim_params.to_dict()
        assert data == {
            "totalPatients": 1000,
            "positiveCases": 50,
            "truePositives": 40,
            "falsePositives": 60,
        }

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            SimulationParams.model_validate({"totalPatients": 100})

    def test_merge_overrides_present_fields_only(self, sim_params):
        merged = sim_params.merged_with({"truePositives": 45, "slaDays": 7})
        assert merged.true_positives == 45
        assert merged.sla_days == 7
        assert merged.total_patients == 1000
        assert merged.false_positives == 60
        # original untouched
        assert sim_params.true_positives == 40
        assert sim_params.sla_days is None

    def test_merge_keeps_existing_operational_fields(self, sim_params):
        state = sim_params.merged_with({"cohortSize": 5000, "dailyCapacity": 40})
        merged = state.merged_with({"totalPatients": 2000, "positiveCases": 80})
        assert merged.cohort_size == 5000
        assert merged.daily_capacity == 40
        assert merged.total_patients == 2000

    def test_merge_scenario_params(self, sim_params):
        merged = sim_params.merged_with(ScenarioParams(false_positives=10))
        assert merged.false_positives == 10

    def test_merge_none(self, sim_params):
        assert sim_params.merged_with(None) == sim_params
