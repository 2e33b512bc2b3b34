"""
Service for program recommendation, personalization and rendering.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pydantic import BaseModel

from ..builder import build_guided_template
from ..catalog import default_registry, find_template, split_templates
from ..models import ProgramDesignAnswers, SplitTemplate
from ..recommend import RankedTemplate, rank_program_templates
from ..registry import ExerciseProfileRegistry
from ..volume import MuscleVolume, VolumeLandmark, assess_weekly_volume, planned_weekly_sets

logger = logging.getLogger(__name__)


class DesignedProgram(BaseModel):
    base_template: SplitTemplate
    guided_template: SplitTemplate
    score: int | None = None


class ProgramService:
    """Glue between the catalogue, the engine and presentation."""

    def __init__(
        self,
        templates: Sequence[SplitTemplate] | None = None,
        registry: ExerciseProfileRegistry | None = None,
    ) -> None:
        self._templates = list(templates) if templates is not None else None
        self._registry = registry

    @property
    def templates(self) -> list[SplitTemplate]:
        return self._templates if self._templates is not None else split_templates()

    @property
    def registry(self) -> ExerciseProfileRegistry:
        return self._registry if self._registry is not None else default_registry()

    def get_template(self, key: str) -> SplitTemplate:
        if self._templates is None:
            return find_template(key)
        for template in self._templates:
            if key in (template.id, template.name):
                return template
        return find_template(key)

    def rank(self, answers: ProgramDesignAnswers) -> list[RankedTemplate]:
        return rank_program_templates(self.templates, answers, self.registry)

    def design_program(
        self, answers: ProgramDesignAnswers, template_id: str | None = None
    ) -> DesignedProgram:
        """Recommend (or use ``template_id``) and personalize a template."""
        score: int | None = None
        if template_id:
            base = self.get_template(template_id)
        else:
            ranked = self.rank(answers)
            if not ranked:
                raise ValueError("No templates available to recommend from")
            base, score = ranked[0].template, ranked[0].score

        guided = build_guided_template(base, answers, self.registry)
        logger.info(
            "Designed program from %r for %s days/week (%s, %s, %s, %s)",
            base.name,
            answers.days_per_week,
            answers.focus.value,
            answers.equipment.value,
            answers.session_length.value,
            answers.experience.value,
        )
        return DesignedProgram(base_template=base, guided_template=guided, score=score)

    def weekly_volume(
        self, template: SplitTemplate, landmarks: Mapping[str, VolumeLandmark] | None = None
    ) -> list[MuscleVolume]:
        """Planned weekly sets per muscle for ``template``, classified against ``landmarks``."""
        return assess_weekly_volume(planned_weekly_sets(template, self.registry), landmarks or {})

    def render_template_message(self, template: SplitTemplate) -> str:
        """Render a template as a formatted message."""
        message = f"**{template.name}**\n{template.description}\n\n"
        for day in template.days:
            header = day.day_name
            if day.muscle_groups:
                header += f" — {', '.join(day.muscle_groups)}"
            message += f"**{header}**\n"
            for exercise in day.exercises:
                reps = (
                    f"{exercise.reps_min}"
                    if exercise.reps_min == exercise.reps_max
                    else f"{exercise.reps_min}-{exercise.reps_max}"
                )
                message += f"• {exercise.name}: {exercise.sets}x{reps}\n"
            message += "\n"

        if template.evidence is not None:
            message += f"_{template.evidence.label} ({template.evidence.confidence.value})_"
            if template.evidence.public_note:
                message += f"\n{template.evidence.public_note}"

        return message.strip()
