"""
Compile evidence blueprints into display-ready split templates.
"""

from __future__ import annotations

import logging

from .models import (
    CompiledEvidenceSet,
    EvidenceSnapshot,
    SplitTemplate,
    TemplateBlueprint,
    TemplateDay,
    TemplateEvidence,
)
from .ordering import optimize_day_order
from .registry import ExerciseProfileRegistry

logger = logging.getLogger(__name__)

EVIDENCE_LABEL = "Evidence-informed"


def compile_blueprint(
    blueprint: TemplateBlueprint,
    registry: ExerciseProfileRegistry,
    optimize: bool = True,
) -> SplitTemplate:
    days: list[TemplateDay] = []
    for day in blueprint.days:
        exercises = (
            optimize_day_order(day, blueprint.focus_muscles, registry)
            if optimize
            else day.exercises
        )
        days.append(
            TemplateDay(
                day_name=day.day_name,
                muscle_groups=list(day.muscle_groups),
                exercises=[ex.model_copy() for ex in exercises],
            )
        )
    return SplitTemplate(
        id=blueprint.id,
        name=blueprint.name,
        description=blueprint.description,
        days_per_week=blueprint.days_per_week,
        focus_muscles=list(blueprint.focus_muscles),
        evidence=TemplateEvidence(
            label=EVIDENCE_LABEL,
            confidence=blueprint.confidence,
            public_note=blueprint.public_note,
        ),
        days=days,
    )


def compile_evidence_templates(
    snapshot: EvidenceSnapshot,
    registry: ExerciseProfileRegistry | None = None,
    optimize: bool = True,
) -> CompiledEvidenceSet:
    """Compile every blueprint in ``snapshot`` and index its rules by id."""
    if registry is None:
        registry = ExerciseProfileRegistry(snapshot.exercise_profiles)
    templates = [compile_blueprint(bp, registry, optimize) for bp in snapshot.template_blueprints]
    logger.debug(
        "Compiled %d templates from snapshot %s (ordering=%s)",
        len(templates),
        snapshot.version,
        optimize,
    )
    return CompiledEvidenceSet(
        templates=templates,
        rules_by_id={rule.id: rule for rule in snapshot.rules},
    )
