"""
Within-day exercise ordering by a weighted desirability score.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from . import weights as w
from .models import ExerciseProfile, TemplateDay, TemplateExercise
from .registry import ExerciseProfileRegistry

logger = logging.getLogger(__name__)


def intensity_bucket(exercise: TemplateExercise) -> int:
    for max_reps_min, bucket in w.INTENSITY_BUCKETS:
        if exercise.reps_min <= max_reps_min:
            return bucket
    return w.LIGHT_INTENSITY_BUCKET


def muscle_priority(
    day_muscles: list[str], focus_muscles: Iterable[str], profile: ExerciseProfile
) -> int:
    """Reward muscles listed early in the day and muscles the blueprint focuses on."""
    focus = set(focus_muscles)
    score = 0
    if profile.primary_muscle in day_muscles:
        score += max(0, w.PRIMARY_POSITION_BASE - day_muscles.index(profile.primary_muscle))
    if profile.secondary_muscle and profile.secondary_muscle in day_muscles:
        score += max(0, w.SECONDARY_POSITION_BASE - day_muscles.index(profile.secondary_muscle))
    if profile.primary_muscle in focus:
        score += w.PRIMARY_FOCUS_BONUS
    if profile.secondary_muscle and profile.secondary_muscle in focus:
        score += w.SECONDARY_FOCUS_BONUS
    return score


def score_exercise(
    exercise: TemplateExercise,
    day_muscles: list[str],
    focus_muscles: Iterable[str],
    profile: ExerciseProfile,
) -> float:
    return (
        muscle_priority(day_muscles, focus_muscles, profile) * w.MUSCLE_PRIORITY_WEIGHT
        + w.SKILL_SCORE[profile.skill_demand] * w.SKILL_WEIGHT
        + w.FATIGUE_SCORE[profile.fatigue_cost] * w.FATIGUE_WEIGHT
        + w.STABILITY_SCORE[profile.stability] * w.STABILITY_WEIGHT
        + intensity_bucket(exercise) * w.INTENSITY_WEIGHT
    )


def known_coverage(day: TemplateDay, registry: ExerciseProfileRegistry) -> float:
    if not day.exercises:
        return 0.0
    known = sum(1 for ex in day.exercises if registry.lookup(ex.name) is not None)
    return known / len(day.exercises)


def optimize_day_order(
    day: TemplateDay,
    focus_muscles: Iterable[str] | None,
    registry: ExerciseProfileRegistry,
) -> list[TemplateExercise]:
    """Return the day's exercises sorted by desirability, best first.

    When fewer than 60% of the exercises have a known profile the original
    list is returned as-is. Equal scores keep their original relative order.
    """
    coverage = known_coverage(day, registry)
    if coverage < w.MIN_KNOWN_COVERAGE:
        logger.debug(
            "Keeping authored order for %r (profile coverage %.2f)", day.day_name, coverage
        )
        return day.exercises

    focus = list(focus_muscles or [])
    scored: list[tuple[float, int, TemplateExercise]] = []
    for index, exercise in enumerate(day.exercises):
        profile = registry.lookup(exercise.name)
        score = (
            score_exercise(exercise, day.muscle_groups, focus, profile)
            if profile is not None
            else w.UNKNOWN_PROFILE_SCORE
        )
        scored.append((score, index, exercise))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [exercise for _, _, exercise in scored]
