"""
Pydantic models for evidence snapshots, templates and program design answers.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Level(str, enum.Enum):
    """Three-step rating used for skill demand, stability and fatigue cost."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EvidenceConfidence(str, enum.Enum):
    SOLID = "solid"
    EMERGING = "emerging"
    SPECULATIVE = "speculative"


class EvidenceDomain(str, enum.Enum):
    VOLUME = "volume"
    FREQUENCY = "frequency"
    EXERCISE_SELECTION = "exercise_selection"
    ROM = "rom"
    PROGRESSION = "progression"
    RECOVERY = "recovery"


class ProgramFocus(str, enum.Enum):
    NO_FOCUS = "no_focus"
    UPPER_FOCUS = "upper_focus"
    LOWER_FOCUS = "lower_focus"


class EquipmentProfile(str, enum.Enum):
    FULL_GYM = "full_gym"
    DUMBBELL_ONLY = "dumbbell_only"


# Older UI builds sent these values; both meant "no barbells, cables or machines"
DEPRECATED_EQUIPMENT: dict[str, EquipmentProfile] = {
    "limited_gym": EquipmentProfile.DUMBBELL_ONLY,
    "minimal": EquipmentProfile.DUMBBELL_ONLY,
}


def coerce_equipment(value: EquipmentProfile | str) -> EquipmentProfile:
    """Map a raw equipment value (including deprecated spellings) to the enum."""
    if isinstance(value, EquipmentProfile):
        return value
    key = str(value).strip().lower()
    return DEPRECATED_EQUIPMENT.get(key) or EquipmentProfile(key)


class SessionLength(str, enum.Enum):
    SHORT = "short"
    MODERATE = "moderate"
    LONG = "long"


class ExperienceLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExerciseProfile(BaseModel):
    """Static per-exercise characteristics used for ordering and substitution."""

    model_config = ConfigDict(frozen=True)

    name: str
    primary_muscle: str
    secondary_muscle: str | None = None
    skill_demand: Level
    stability: Level
    fatigue_cost: Level
    long_length_bias: bool = False
    substitutions: tuple[str, ...] = ()


class TemplateExercise(BaseModel):
    name: str
    sets: int = Field(..., ge=1)
    reps_min: int = Field(..., ge=1)
    reps_max: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_rep_range(self) -> TemplateExercise:
        if self.reps_min > self.reps_max:
            raise ValueError(
                f"reps_min ({self.reps_min}) must not exceed reps_max ({self.reps_max})"
            )
        return self


class TemplateDay(BaseModel):
    day_name: str
    muscle_groups: list[str] = Field(default_factory=list)
    exercises: list[TemplateExercise] = Field(default_factory=list)


class TemplateBlueprint(BaseModel):
    """Catalogue-level template before exercise ordering and evidence attachment."""

    id: str
    name: str
    description: str
    days_per_week: int
    confidence: EvidenceConfidence
    public_note: str = ""
    focus_muscles: list[str] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)
    days: list[TemplateDay]


class TemplateEvidence(BaseModel):
    label: str
    confidence: EvidenceConfidence
    public_note: str = ""


class SplitTemplate(BaseModel):
    """A compiled or guided template, ready to be stored or rendered."""

    id: str | None = None
    name: str
    description: str
    days_per_week: int
    focus_muscles: list[str] = Field(default_factory=list)
    evidence: TemplateEvidence | None = None
    days: list[TemplateDay]

    def exercise_count(self) -> int:
        return sum(len(day.exercises) for day in self.days)


class EvidenceRule(BaseModel):
    id: str
    domain: EvidenceDomain
    statement: str
    rationale: str = ""
    confidence: EvidenceConfidence
    sources: list[str] = Field(default_factory=list)


class EvidenceSnapshot(BaseModel):
    version: str
    imported_at: str
    source_repo: str
    source_ref: str
    parser_version: str
    rules: list[EvidenceRule]
    exercise_profiles: list[ExerciseProfile]
    template_blueprints: list[TemplateBlueprint]


class CompiledEvidenceSet(BaseModel):
    templates: list[SplitTemplate]
    rules_by_id: dict[str, EvidenceRule]


class ProgramDesignAnswers(BaseModel):
    """
    Answers collected by the program design questionnaire.

    Accepts both snake_case and the camelCase keys sent by the web client.
    Deprecated equipment spellings are normalized on ingestion.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    days_per_week: int = Field(..., ge=2, le=7, alias="daysPerWeek")
    focus: ProgramFocus = ProgramFocus.NO_FOCUS
    equipment: EquipmentProfile = EquipmentProfile.FULL_GYM
    session_length: SessionLength = Field(SessionLength.MODERATE, alias="sessionLength")
    experience: ExperienceLevel = ExperienceLevel.INTERMEDIATE

    @field_validator("equipment", mode="before")
    @classmethod
    def normalize_equipment(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().lower() in DEPRECATED_EQUIPMENT:
            return coerce_equipment(v)
        return v
