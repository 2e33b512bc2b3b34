"""
Rank catalogue templates against a user's program design answers.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

from . import weights as w
from .equipment import is_compatible
from .models import (
    EquipmentProfile,
    ExperienceLevel,
    ProgramDesignAnswers,
    ProgramFocus,
    SessionLength,
    SplitTemplate,
    coerce_equipment,
)
from .registry import ExerciseProfileRegistry
from .substitution import is_recoverable

logger = logging.getLogger(__name__)

_UPPER_SPECIALIZATION = re.compile(
    r"upper\s*focus|specialization\s*upper|upper\s*priority", re.IGNORECASE
)
_LOWER_SPECIALIZATION = re.compile(
    r"lower\s*focus|specialization\s*lower|lower\s*priority|quad\s*focus|quad\s*priority",
    re.IGNORECASE,
)
_UPPER_KEYWORDS = re.compile(r"upper|push|chest|back", re.IGNORECASE)
_LOWER_KEYWORDS = re.compile(r"lower|legs|full body", re.IGNORECASE)


@dataclass(frozen=True)
class RankedTemplate:
    template: SplitTemplate
    score: int
    index: int


def is_upper_specialization(template: SplitTemplate) -> bool:
    return bool(_UPPER_SPECIALIZATION.search(f"{template.name} {template.description}"))


def is_lower_specialization(template: SplitTemplate) -> bool:
    return bool(_LOWER_SPECIALIZATION.search(f"{template.name} {template.description}"))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def equipment_fit_score(
    template: SplitTemplate,
    equipment: EquipmentProfile | str,
    registry: ExerciseProfileRegistry,
) -> int:
    """How well a template survives the user's equipment restrictions."""
    equipment = coerce_equipment(equipment)
    if equipment is EquipmentProfile.FULL_GYM:
        return w.FULL_GYM_EQUIPMENT_FIT

    names = [ex.name for day in template.days for ex in day.exercises]
    if not names:
        return 0
    compatible = sum(1 for name in names if is_compatible(name, equipment))
    recoverable = sum(1 for name in names if is_recoverable(name, equipment, registry))
    return _round_half_up(
        compatible / len(names) * w.COMPATIBLE_RATIO_WEIGHT
        + recoverable / len(names) * w.RECOVERABLE_RATIO_WEIGHT
    )


def focus_score(template: SplitTemplate, focus: ProgramFocus) -> int:
    upper = is_upper_specialization(template)
    lower = is_lower_specialization(template)
    score = 0
    if focus is ProgramFocus.UPPER_FOCUS:
        if upper:
            score += w.MATCHING_SPECIALIZATION_BONUS
        if lower:
            score += w.OPPOSITE_SPECIALIZATION_PENALTY
        if _UPPER_KEYWORDS.search(template.name):
            score += w.FOCUS_KEYWORD_BONUS
    elif focus is ProgramFocus.LOWER_FOCUS:
        if lower:
            score += w.MATCHING_SPECIALIZATION_BONUS
        if upper:
            score += w.OPPOSITE_SPECIALIZATION_PENALTY
        if _LOWER_KEYWORDS.search(template.name):
            score += w.FOCUS_KEYWORD_BONUS
    elif upper or lower:
        score += w.NO_FOCUS_SPECIALIZATION_PENALTY
    return score


def score_template(
    template: SplitTemplate,
    answers: ProgramDesignAnswers,
    registry: ExerciseProfileRegistry,
) -> int:
    day_distance = abs(template.days_per_week - answers.days_per_week)
    score = max(0, w.DAY_MATCH_BASE - day_distance * w.DAY_DISTANCE_PENALTY)

    if template.days_per_week == answers.days_per_week:
        score += w.EXACT_DAY_BONUS

    if template.evidence is not None:
        score += w.EVIDENCE_BONUS

    score += focus_score(template, answers.focus)

    if (
        answers.experience is ExperienceLevel.BEGINNER
        and template.days_per_week > w.BEGINNER_MAX_DAYS
    ):
        score += w.BEGINNER_HIGH_FREQUENCY_PENALTY

    if (
        answers.session_length is SessionLength.SHORT
        and template.days_per_week > w.SHORT_SESSION_MAX_DAYS
    ):
        score += w.SHORT_SESSION_HIGH_FREQUENCY_PENALTY

    score += equipment_fit_score(template, answers.equipment, registry)
    return score


def rank_program_templates(
    templates: Sequence[SplitTemplate],
    answers: ProgramDesignAnswers,
    registry: ExerciseProfileRegistry,
) -> list[RankedTemplate]:
    """All templates, best first; equal scores keep input order."""
    ranked = [
        RankedTemplate(template=t, score=score_template(t, answers, registry), index=i)
        for i, t in enumerate(templates)
    ]
    ranked.sort(key=lambda r: (-r.score, r.index))
    return ranked


def recommend_program_template(
    templates: Sequence[SplitTemplate],
    answers: ProgramDesignAnswers,
    registry: ExerciseProfileRegistry,
) -> SplitTemplate | None:
    """Pick the best template for ``answers``, or ``None`` for an empty list."""
    if not templates:
        return None
    best = rank_program_templates(templates, answers, registry)[0]
    logger.debug("Recommended %r (score %s)", best.template.name, best.score)
    return best.template
