"""Parameter models shared by the parser, metrics and extraction layers."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from clinimpact.parsing.scenario import CONFUSION_KEYS, OPERATIONAL_KEYS, is_usable


class ScenarioParams(BaseModel):
    """Sparse parameter set produced by the local parser or a remote extractor.

    Attribute names are snake_case; the external representation uses the
    camelCase aliases (``totalPatients``, ``truePositives``...).  Any field
    may be missing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_patients: int | None = Field(default=None, alias="totalPatients", ge=0)
    positive_cases: int | None = Field(default=None, alias="positiveCases", ge=0)
    true_positives: int | None = Field(default=None, alias="truePositives", ge=0)
    false_positives: int | None = Field(default=None, alias="falsePositives", ge=0)
    daily_capacity: int | None = Field(default=None, alias="dailyCapacity", ge=0)
    workdays_per_week: int | None = Field(default=None, alias="workdaysPerWeek", ge=1, le=7)
    sla_days: int | None = Field(default=None, alias="slaDays", ge=0)
    cohort_size: int | None = Field(default=None, alias="cohortSize", ge=0)
    horizon_days: int | None = Field(default=None, alias="horizonDays", ge=0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ScenarioParams:
        """Validate a sparse camelCase (or snake_case) mapping."""
        return cls.model_validate(dict(data or {}))

    def to_dict(self) -> dict[str, int]:
        """Return the sparse camelCase dict, omitting missing fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def confusion_fields(self) -> dict[str, int]:
        data = self.to_dict()
        return {key: data[key] for key in CONFUSION_KEYS if key in data}

    def operational_fields(self) -> dict[str, int]:
        data = self.to_dict()
        return {key: data[key] for key in OPERATIONAL_KEYS if key in data}

    def is_usable(self) -> bool:
        return is_usable(self.to_dict())


class SimulationParams(BaseModel):
    """Complete simulator state for one classifier at one prevalence."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_patients: int = Field(alias="totalPatients", ge=0)
    positive_cases: int = Field(alias="positiveCases", ge=0)
    true_positives: int = Field(alias="truePositives", ge=0)
    false_positives: int = Field(alias="falsePositives", ge=0)
    user_context: str | None = Field(default=None, alias="userContext")
    cohort_size: int | None = Field(default=None, alias="cohortSize", ge=0)
    daily_capacity: int | None = Field(default=None, alias="dailyCapacity", ge=0)
    workdays_per_week: int | None = Field(default=None, alias="workdaysPerWeek", ge=1, le=7)
    sla_days: int | None = Field(default=None, alias="slaDays", ge=0)
    horizon_days: int | None = Field(default=None, alias="horizonDays", ge=0)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def merged_with(self, partial: ScenarioParams | Mapping[str, Any] | None) -> SimulationParams:
        """Return a copy with every field present in *partial* applied.

        Fields missing from *partial* keep their current value, so a sparse
        parse result never clobbers existing state.
        """
        if partial is None:
            return self.model_copy()
        if not isinstance(partial, ScenarioParams):
            partial = ScenarioParams.from_dict(partial)
        data = self.model_dump(by_alias=True)
        data.update(partial.to_dict())
        return SimulationParams.model_validate(data)
