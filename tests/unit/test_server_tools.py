"""Tests for clinimpact.server: ScenarioServerTools and the audit log."""
import json
import sys

import pytest

from clinimpact.extraction.config import ProviderConfig, ProviderKey
from clinimpact.server.audit import AuditEntry, AuditLog
from clinimpact.server.tools import ScenarioServerTools


@pytest.fixture
def tools(anthropic_config, audit_log, scripted_extractor):
    return ScenarioServerTools(config=anthropic_config, audit_log=audit_log, extractor=scripted_extractor)


class TestParseScenarioTool:
    def test_local_parse(self, tools, matrix_scenario):
        result = tools.parse_scenario(matrix_scenario)
        assert result["source"] == "local"
        assert result["usable"] is True
        assert result["params"]["truePositives"] == 32

    def test_remote_fallback(self, tools, scripted_extractor):
        result = tools.parse_scenario("1000 scans, about 5 cases")
        assert result["source"] == "remote"
        assert result["params"] == scripted_extractor.result

    def test_local_only(self, tools, scripted_extractor):
        result = tools.parse_scenario("1000 scans, about 5 cases", allow_remote=False)
        assert result == {"params": {}, "source": "none", "usable": False}
        assert scripted_extractor.calls == []

    def test_result_is_json_serializable(self, tools, capacity_scenario):
        json.dumps(tools.parse_scenario(capacity_scenario))

    def test_audited_without_text(self, tools, audit_log, matrix_scenario):
        tools.parse_scenario(matrix_scenario)
        entries = audit_log.get_entries()
        assert len(entries) == 1
        assert entries[0].tool_name == "parse_scenario"
        assert entries[0].source == "local"
        assert "truePositives" in entries[0].fields
        assert "predicted" not in audit_log.path.read_text()


class TestMetricTools:
    def test_compute_metrics(self, tools, sim_params):
        result = tools.compute_metrics(sim_params.to_dict())
        assert result["metrics"]["precision"] == pytest.approx(0.4)
        assert result["params"]["totalPatients"] == 1000

    def test_compute_metrics_invalid(self, tools):
        result = tools.compute_metrics({"totalPatients": 10})
        assert "error" in result

    def test_plan_capacity(self, tools, sim_params):
        result = tools.plan_capacity(sim_params.to_dict(), cohort_size=10000, daily_capacity=100)
        assert result["flagged_cohort"] == 1000
        assert result["days_to_clear"] == 10

    def test_plan_capacity_ignores_none_overrides(self, tools, sim_params):
        params = dict(sim_params.to_dict(), dailyCapacity=25)
        result = tools.plan_capacity(params, daily_capacity=None)
        assert result["daily_capacity"] == 25

    def test_plan_capacity_error(self, tools, sim_params):
        result = tools.plan_capacity(sim_params.to_dict(), workdays_per_week=0)
        assert "error" in result


class TestFitToCapacityTool:
    def test_fit(self, tools, sim_params):
        params = dict(sim_params.to_dict(), dailyCapacity=5, slaDays=10)
        result = tools.fit_to_capacity(params)
        assert result["params"]["falsePositives"] == 10
        assert result["plan"]["meets_sla"] is True

    def test_fit_invalid(self, tools):
        assert "error" in tools.fit_to_capacity({"totalPatients": 10})

    def test_audited(self, tools, audit_log, sim_params):
        tools.fit_to_capacity(sim_params.to_dict())
        assert audit_log.get_entries()[0].tool_name == "fit_to_capacity"


class TestListPresetsTool:
    def test_list(self, tools):
        assert len(tools.list_presets()["presets"]) >= 4

    def test_single(self, tools):
        assert tools.list_presets("ich")["name"] == "Intracranial Hemorrhage"

    def test_unknown(self, tools):
        assert "error" in tools.list_presets("nope")


class TestAuditLog:
    def test_log_and_read(self, audit_log):
        audit_log.log_tool_call("parse_scenario", "Parsed", source="remote", fields=["slaDays"])
        entries = audit_log.get_entries()
        assert entries[0].source == "remote"
        assert entries[0].fields == ["slaDays"]

    def test_since_filter(self, audit_log):
        audit_log.log(AuditEntry(timestamp="2020-01-01T00:00:00+00:00", tool_name="a", action="old"))
        audit_log.log(AuditEntry(timestamp="2030-01-01T00:00:00+00:00", tool_name="b", action="new"))
        entries = audit_log.get_entries(since="2025-01-01")
        assert [e.tool_name for e in entries] == ["b"]

    def test_summary(self, audit_log):
        audit_log.log_tool_call("parse_scenario", "x", source="local")
        audit_log.log_tool_call("parse_scenario", "x", source="remote")
        audit_log.log_tool_call("compute_metrics", "x")
        summary = audit_log.summary()
        assert summary["total_entries"] == 3
        assert summary["entries_by_tool"] == {"parse_scenario": 2, "compute_metrics": 1}
        assert summary["entries_by_source"] == {"local": 1, "remote": 1}

    def test_missing_file(self, tmp_path):
        log = AuditLog(tmp_path / "nested" / "audit.jsonl")
        assert log.get_entries() == []
        log.log_tool_call("list_presets", "x")
        assert log.path.exists()


class TestDefaultConfig:
    def test_tools_read_env_config(self, monkeypatch, audit_log):
        monkeypatch.setenv("CLINIMPACT_LLM_PROVIDER", "local")
        tools = ScenarioServerTools(audit_log=audit_log)
        assert tools.config.provider == ProviderKey.LOCAL
        assert tools.router.extractor is None

    def test_missing_sdk_still_parses_locally(self, anthropic_config, audit_log, monkeypatch):
        monkeypatch.setitem(sys.modules, "anthropic", None)
        tools = ScenarioServerTools(config=anthropic_config, audit_log=audit_log)
        result = tools.parse_scenario("capacity 42 per day, SLA 10 days")
        assert result == {"params": {"dailyCapacity": 42, "slaDays": 10}, "source": "local", "usable": False}

    def test_explicit_config(self, audit_log):
        tools = ScenarioServerTools(config=ProviderConfig(provider=ProviderKey.LOCAL), audit_log=audit_log)
        assert tools.parse_scenario("no numbers")["source"] == "none"
