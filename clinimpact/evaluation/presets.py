"""Clinical scenario presets with known reference parameters."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScenarioPreset:
    """A worked clinical scenario and the parameters a reader should extract from it."""

    id: str
    name: str
    description: str
    context: str
    params: dict = field(default_factory=dict)  # camelCase reference values

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "context": self.context,
            "params": dict(self.params),
        }


SCENARIO_PRESETS = [
    ScenarioPreset(
        id="ich",
        name="Intracranial Hemorrhage",
        description="AI detection of ICH in head CT scans",
        params={"totalPatients": 1000, "positiveCases": 4, "truePositives": 3, "falsePositives": 12},
        context=(
            "We are currently evaluating an AI vendor's app that reads head CTs for "
            "intracranial hemorrhage (ICH). The vendor is focused on AUROC, but I'm "
            "concerned about performance given the low prevalence of ICH in our "
            "screening population.\n\n"
            "For a sample of 1000 scans, we have about 5 positive ICH cases. In a "
            "simulation, the model correctly identified 3 of those cases but also "
            "incorrectly flagged 12 healthy patients."
        ),
    ),
    ScenarioPreset(
        id="lung-cancer",
        name="Lung Cancer Screening",
        description="AI detection of lung cancer in low-dose CT scans",
        params={"totalPatients": 2000, "positiveCases": 40, "truePositives": 35, "falsePositives": 150},
        context=(
            "Our radiology department is evaluating an AI tool for lung cancer screening "
            "using low-dose CT scans. The prevalence of lung cancer in our screening "
            "population is relatively low at 2%.\n\n"
            "In a sample of 2000 scans, there were 40 actual lung cancer cases. The model "
            "correctly identified 35 of these cases but also flagged 150 healthy patients "
            "as potentially having cancer."
        ),
    ),
    ScenarioPreset(
        id="diabetic-retinopathy",
        name="Diabetic Retinopathy",
        description="AI detection of diabetic retinopathy in eye exams",
        params={"totalPatients": 1500, "positiveCases": 150, "truePositives": 120, "falsePositives": 90},
        context=(
            "We're assessing an AI system for detecting diabetic retinopathy from retinal "
            "photographs in a primary care setting. The prevalence is moderate at 10% in "
            "our diabetic patient population.\n\n"
            "From 1500 patient exams, 150 had actual diabetic retinopathy. The model "
            "correctly identified 120 cases but also incorrectly flagged 90 healthy patients."
        ),
    ),
    ScenarioPreset(
        id="sepsis-prediction",
        name="Sepsis Prediction",
        description="AI early warning system for sepsis in hospital patients",
        params={"totalPatients": 3000, "positiveCases": 90, "truePositives": 75, "falsePositives": 200},
        context=(
            "Our hospital is implementing an AI early warning system for sepsis prediction. "
            "The condition has a low prevalence of 3% among our monitored patients.\n\n"
            "In a sample of 3000 patients, 90 developed sepsis. The model successfully "
            "predicted 75 of these cases but also generated 200 false alarms for patients "
            "who did not develop sepsis."
        ),
    ),
    ScenarioPreset(
        id="structured-matrix",
        name="Structured Confusion Matrix",
        description="Vendor validation table stated cell by cell",
        params={"totalPatients": 2000, "positiveCases": 40, "truePositives": 32, "falsePositives": 96},
        context=(
            "Vendor validation results on 2000 chest radiographs:\n"
            "Predicted positive, actual positive: 32\n"
            "Predicted positive, actual negative: 96\n"
            "Predicted negative, actual positive: 8\n"
            "Predicted negative, actual negative: 1864\n"
            "Review capacity 25 per day, weekdays only, SLA 5 days."
        ),
    ),
]


def get_preset(preset_id: str) -> ScenarioPreset | None:
    for p in SCENARIO_PRESETS:
        if p.id == preset_id:
            return p
    return None


def list_presets() -> list[dict]:
    return [{"id": p.id, "name": p.name, "description": p.description} for p in SCENARIO_PRESETS]
