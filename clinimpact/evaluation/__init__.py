from clinimpact.evaluation.coverage import coverage_summary, local_coverage
from clinimpact.evaluation.presets import SCENARIO_PRESETS, ScenarioPreset, get_preset, list_presets
