"""
Personalize a compiled template for one user's answers.

The build runs three passes over every day, in this order:

1. session length: trim accessories for short sessions, add one for long ones
2. set adjustment: experience, focus and equipment driven set tweaks
3. equipment: swap exercises the user cannot perform, keeping names unique
   within the day

Each pass works on a private deep copy, so the template passed in is never
modified.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType

from . import weights as w
from .models import (
    EquipmentProfile,
    ExperienceLevel,
    ProgramDesignAnswers,
    ProgramFocus,
    SessionLength,
    SplitTemplate,
    TemplateDay,
    TemplateExercise,
    coerce_equipment,
)
from .naming import normalize_exercise_name
from .registry import ExerciseProfileRegistry
from .substitution import resolve_substitution

logger = logging.getLogger(__name__)

GUIDED_SUFFIX = " · Guided"

_UPPER_DAY = re.compile(r"upper|push|pull|chest|back|shoulder", re.IGNORECASE)
_LOWER_DAY = re.compile(r"lower|leg|quad|ham|glute", re.IGNORECASE)
# Patterns below run on normalized names ("Pull-Up" -> "pullup")
_HIGH_SKILL = re.compile(r"barbell|squat|deadlift|overhead press|pull ?up")
_CORE_LIFT = re.compile(r"squat|deadlift|bench|\brows?\b|press|pull ?up|chin ?up|hip thrust")

ACCESSORY_POOLS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "upper": (
            "Face Pull",
            "Cable Lateral Raise",
            "Hammer Curl",
            "Overhead Tricep Extension",
            "Rear Delt Fly",
        ),
        "lower": (
            "Leg Extension",
            "Seated Leg Curl",
            "Standing Calf Raise",
            "Hip Thrust",
            "Walking Lunge",
        ),
        "full": (
            "Face Pull",
            "Leg Extension",
            "Hammer Curl",
            "Standing Calf Raise",
        ),
    }
)
ACCESSORY_SETS = 2
ACCESSORY_REPS = (10, 15)


def is_upper_day(day_name: str) -> bool:
    return bool(_UPPER_DAY.search(day_name))


def is_lower_day(day_name: str) -> bool:
    return bool(_LOWER_DAY.search(day_name))


def is_high_skill_exercise(name: str) -> bool:
    return bool(_HIGH_SKILL.search(normalize_exercise_name(name)))


def is_core_exercise(index: int, name: str) -> bool:
    """Leading slots and big compound patterns are never trimmed."""
    if index < w.PROTECTED_LEADING_SLOTS:
        return True
    return bool(_CORE_LIFT.search(normalize_exercise_name(name)))


def day_category(day_name: str) -> str:
    if is_upper_day(day_name):
        return "upper"
    if is_lower_day(day_name):
        return "lower"
    return "full"


def clamp_sets(sets: int) -> int:
    return max(w.MIN_SETS, min(w.MAX_SETS, sets))


# ---- Pass 1: session length ----------------------------------------------------


def _trim_for_short_session(day: TemplateDay) -> None:
    exercises = day.exercises
    removed = 0
    index = len(exercises) - 1
    while (
        index >= w.PROTECTED_LEADING_SLOTS
        and len(exercises) > w.SHORT_SESSION_MIN_EXERCISES
        and removed < w.SHORT_SESSION_MAX_REMOVALS
    ):
        if not is_core_exercise(index, exercises[index].name):
            logger.debug("Short session: dropping %r from %r", exercises[index].name, day.day_name)
            del exercises[index]
            removed += 1
        index -= 1

    for index, exercise in enumerate(exercises):
        if not is_core_exercise(index, exercise.name):
            exercise.sets = max(0, exercise.sets - 1)


def _extend_for_long_session(day: TemplateDay) -> None:
    exercises = day.exercises
    if len(exercises) <= w.LONG_SESSION_MAX_EXERCISES_FOR_ACCESSORY:
        present = {normalize_exercise_name(ex.name) for ex in exercises}
        for candidate in ACCESSORY_POOLS[day_category(day.day_name)]:
            if normalize_exercise_name(candidate) not in present:
                exercises.append(
                    TemplateExercise(
                        name=candidate,
                        sets=ACCESSORY_SETS,
                        reps_min=ACCESSORY_REPS[0],
                        reps_max=ACCESSORY_REPS[1],
                    )
                )
                break
    if exercises:
        exercises[0].sets = min(w.MAX_SETS, exercises[0].sets + 1)


def apply_session_length(day: TemplateDay, session_length: SessionLength) -> TemplateDay:
    """Structural pass. Mutates and returns ``day``."""
    if session_length is SessionLength.SHORT:
        _trim_for_short_session(day)
    elif session_length is SessionLength.LONG:
        _extend_for_long_session(day)
    return day


# ---- Pass 2: set adjustment ----------------------------------------------------


def adjusted_sets(
    sets: int, index: int, name: str, day_name: str, answers: ProgramDesignAnswers
) -> int:
    if answers.experience is ExperienceLevel.BEGINNER and sets > 2:
        sets -= 1

    if answers.focus is ProgramFocus.UPPER_FOCUS:
        emphasized, reduced = is_upper_day(day_name), is_lower_day(day_name)
    elif answers.focus is ProgramFocus.LOWER_FOCUS:
        emphasized, reduced = is_lower_day(day_name), is_upper_day(day_name)
    else:
        emphasized = reduced = False

    if emphasized and index < w.PROTECTED_LEADING_SLOTS:
        sets += 1
    if reduced and index >= w.PROTECTED_LEADING_SLOTS and sets > 1:
        sets -= 1

    if (
        answers.equipment is EquipmentProfile.DUMBBELL_ONLY
        and is_high_skill_exercise(name)
        and sets > 2
    ):
        sets -= 1

    return clamp_sets(sets)


def adjust_sets(day: TemplateDay, answers: ProgramDesignAnswers) -> TemplateDay:
    """Set-adjustment pass. Mutates and returns ``day``."""
    for index, exercise in enumerate(day.exercises):
        exercise.sets = adjusted_sets(exercise.sets, index, exercise.name, day.day_name, answers)
    return day


# ---- Pass 3: equipment -----------------------------------------------------------


def apply_equipment(
    day: TemplateDay,
    equipment: EquipmentProfile | str,
    registry: ExerciseProfileRegistry,
) -> TemplateDay:
    """Equipment pass. Mutates and returns ``day``."""
    equipment = coerce_equipment(equipment)
    used: set[str] = set()
    for exercise in day.exercises:
        resolved = resolve_substitution(exercise.name, equipment, used, registry)
        if resolved != exercise.name:
            logger.debug("%s: %r -> %r", day.day_name, exercise.name, resolved)
            exercise.name = resolved
        key = normalize_exercise_name(resolved)
        if key in used:
            logger.warning("%s: %r appears twice and has no alternative", day.day_name, resolved)
        used.add(key)
    return day


# ---- Assembly --------------------------------------------------------------------


def describe_answers(answers: ProgramDesignAnswers) -> str:
    focus_label = {
        ProgramFocus.UPPER_FOCUS: "Upper Focus",
        ProgramFocus.LOWER_FOCUS: "Lower Focus",
    }.get(answers.focus, "No Specific Focus")
    session_label = {
        SessionLength.SHORT: "short sessions",
        SessionLength.LONG: "long sessions",
    }.get(answers.session_length, "moderate sessions")
    experience_label = {
        ExperienceLevel.BEGINNER: "beginner-friendly volume",
        ExperienceLevel.ADVANCED: "advanced progression headroom",
    }.get(answers.experience, "intermediate progression")
    equipment_label = (
        "dumbbell-and-bodyweight substitutions"
        if answers.equipment is EquipmentProfile.DUMBBELL_ONLY
        else "full-gym exercise selection"
    )
    return (
        f"{focus_label} setup for {answers.days_per_week} days/week with {session_label}, "
        f"{experience_label} and {equipment_label}."
    )


def build_guided_template(
    template: SplitTemplate,
    answers: ProgramDesignAnswers,
    registry: ExerciseProfileRegistry,
) -> SplitTemplate:
    """Return a personalized copy of ``template``; the same days, in the same order."""
    guided = template.model_copy(deep=True)
    for day in guided.days:
        apply_session_length(day, answers.session_length)
        adjust_sets(day, answers)
        apply_equipment(day, answers.equipment, registry)

    guided.name = f"{template.name}{GUIDED_SUFFIX}"
    guided.description = describe_answers(answers)
    logger.debug(
        "Built guided template %r: %d -> %d exercises",
        guided.name,
        template.exercise_count(),
        guided.exercise_count(),
    )
    return guided
