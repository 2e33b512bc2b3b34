"""
Equipment-driven exercise substitution.

Candidates come from the exercise profile's own substitution list followed by
a hand-written fallback table per equipment profile. The walk is guarded by a
visited set so cyclic substitution lists (A -> B -> A) always terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .equipment import is_compatible
from .models import EquipmentProfile, coerce_equipment
from .naming import normalize_exercise_name
from .registry import ExerciseProfileRegistry

logger = logging.getLogger(__name__)


def _normalized_table(table: Mapping[str, Iterable[str]]) -> MappingProxyType[str, tuple[str, ...]]:
    return MappingProxyType({normalize_exercise_name(k): tuple(v) for k, v in table.items()})


_DUMBBELL_ONLY_FALLBACKS = _normalized_table(
    {
        "Barbell Back Squat": ["Goblet Squat", "Bulgarian Split Squat", "Lunge"],
        "Front Squat": ["Goblet Squat", "Bulgarian Split Squat"],
        "Hack Squat": ["Goblet Squat", "Bulgarian Split Squat"],
        "Leg Press": ["Goblet Squat", "Bulgarian Split Squat", "Lunge"],
        "Leg Extension": ["Dumbbell Step-Up", "Goblet Squat", "Sissy Squat"],
        "Romanian Deadlift": [
            "Dumbbell Romanian Deadlift",
            "Single-Leg Dumbbell Romanian Deadlift",
        ],
        "Deadlift": ["Dumbbell Romanian Deadlift", "Goblet Squat"],
        "Leg Curl": ["Dumbbell Leg Curl", "Nordic Curl"],
        "Lying Leg Curl": ["Dumbbell Leg Curl", "Nordic Curl"],
        "Seated Leg Curl": ["Dumbbell Leg Curl", "Nordic Curl"],
        "Hip Thrust": ["Dumbbell Hip Thrust", "Glute Bridge"],
        "Calf Raise": ["Dumbbell Calf Raise", "Single-Leg Calf Raise"],
        "Standing Calf Raise": ["Dumbbell Calf Raise", "Single-Leg Calf Raise"],
        "Flat Barbell Bench Press": ["Flat Dumbbell Bench Press", "Push-Up"],
        "Incline Barbell Bench Press": [
            "Incline Dumbbell Bench Press",
            "Flat Dumbbell Bench Press",
        ],
        "Close-Grip Bench Press": ["Close-Grip Dumbbell Press", "Diamond Push-Up"],
        "Machine Chest Press": ["Flat Dumbbell Bench Press", "Push-Up"],
        "Cable Fly": ["Dumbbell Fly", "Push-Up"],
        "Pec Deck / Machine Fly": ["Dumbbell Fly", "Push-Up"],
        "Overhead Barbell Press": ["Dumbbell Shoulder Press", "Arnold Press"],
        "Machine Shoulder Press": ["Dumbbell Shoulder Press", "Arnold Press"],
        "Barbell Row": ["One-Arm Dumbbell Row", "Chest-Supported Dumbbell Row"],
        "Seated Cable Row": ["One-Arm Dumbbell Row", "Chest-Supported Dumbbell Row"],
        "Single Arm Cable Row": ["One-Arm Dumbbell Row"],
        "Lat Pulldown": ["Pull-Up", "Dumbbell Pullover"],
        "Face Pull": ["Rear Delt Fly", "Dumbbell Reverse Fly"],
        "Cable Lateral Raise": ["Lateral Raise", "Lean-Away Lateral Raise"],
        "Tricep Pushdown": ["Overhead Tricep Extension", "Dumbbell Kickback", "Bench Dip"],
        "Skull Crushers": ["Dumbbell Skull Crusher", "Overhead Tricep Extension"],
        "Barbell Curl": ["Dumbbell Curl", "Hammer Curl"],
        "Preacher Curl": ["Dumbbell Preacher Curl", "Dumbbell Curl"],
        "Cable Crunch": ["Plank", "Hanging Leg Raise"],
        # Already-compatible names: alternatives once the name is taken in the day
        "Incline Dumbbell Bench Press": ["Flat Dumbbell Bench Press", "Dumbbell Fly", "Push-Up"],
        "Flat Dumbbell Bench Press": ["Incline Dumbbell Bench Press", "Dumbbell Fly", "Push-Up"],
        "Dumbbell Fly": ["Push-Up"],
        "Push-Up": ["Diamond Push-Up"],
        "Goblet Squat": ["Bulgarian Split Squat", "Lunge", "Dumbbell Step-Up"],
        "Bulgarian Split Squat": ["Goblet Squat", "Lunge", "Dumbbell Step-Up"],
        "Lunge": ["Dumbbell Step-Up", "Goblet Squat"],
        "Walking Lunge": ["Dumbbell Step-Up", "Lunge"],
        "Dumbbell Romanian Deadlift": [
            "Single-Leg Dumbbell Romanian Deadlift",
            "Dumbbell Hip Thrust",
        ],
        "Dumbbell Leg Curl": ["Nordic Curl", "Dumbbell Romanian Deadlift"],
        "Dumbbell Hip Thrust": ["Glute Bridge"],
        "Dumbbell Calf Raise": ["Single-Leg Calf Raise"],
        "One-Arm Dumbbell Row": ["Chest-Supported Dumbbell Row", "Dumbbell Pullover"],
        "Chest-Supported Dumbbell Row": ["One-Arm Dumbbell Row", "Dumbbell Pullover"],
        "Pull-Up": ["Chin-Up", "Dumbbell Pullover"],
        "Chin-Up": ["Pull-Up", "Dumbbell Pullover"],
        "Dumbbell Shoulder Press": ["Arnold Press", "Pike Push-Up"],
        "Arnold Press": ["Dumbbell Shoulder Press", "Pike Push-Up"],
        "Lateral Raise": ["Lean-Away Lateral Raise", "Dumbbell Upright Row"],
        "Rear Delt Fly": ["Dumbbell Reverse Fly", "Dumbbell Face Pull"],
        "Overhead Tricep Extension": ["Dumbbell Kickback", "Bench Dip"],
        "Dumbbell Curl": ["Hammer Curl", "Incline Dumbbell Curl"],
        "Hammer Curl": ["Dumbbell Curl", "Incline Dumbbell Curl"],
    }
)

EQUIPMENT_FALLBACKS: MappingProxyType[EquipmentProfile, MappingProxyType[str, tuple[str, ...]]] = (
    MappingProxyType(
        {
            EquipmentProfile.FULL_GYM: _normalized_table({}),
            EquipmentProfile.DUMBBELL_ONLY: _DUMBBELL_ONLY_FALLBACKS,
        }
    )
)


def substitution_candidates(
    name: str, equipment: EquipmentProfile | str, registry: ExerciseProfileRegistry
) -> list[str]:
    """Profile-declared substitutions followed by the equipment fallback entry."""
    candidates: list[str] = []
    profile = registry.lookup(name)
    if profile is not None:
        candidates.extend(profile.substitutions)
    table = EQUIPMENT_FALLBACKS[coerce_equipment(equipment)]
    candidates.extend(table.get(normalize_exercise_name(name), ()))
    return candidates


def resolve_substitution(
    name: str,
    equipment: EquipmentProfile | str,
    used: set[str] | frozenset[str],
    registry: ExerciseProfileRegistry,
    visited: set[str] | None = None,
) -> str:
    """Find an equipment-compatible exercise for ``name`` not already in ``used``.

    ``used`` holds normalized names of exercises already placed in the day.
    Returns ``name`` itself when it already fits, when it was visited earlier
    in this walk, or when no candidate exists at all; callers detect "could
    not substitute" by comparing the result with the input.
    """

    def usable(candidate: str) -> bool:
        return (
            is_compatible(candidate, equipment)
            and normalize_exercise_name(candidate) not in used
        )

    if usable(name):
        return name

    if visited is None:
        visited = set()
    key = normalize_exercise_name(name)
    if key in visited:
        return name
    visited.add(key)

    candidates = substitution_candidates(name, equipment, registry)
    for candidate in candidates:
        if usable(candidate):
            return candidate
        nested = resolve_substitution(candidate, equipment, used, registry, visited)
        if usable(nested):
            return nested

    for candidate in candidates:
        if normalize_exercise_name(candidate) not in used:
            logger.debug("No compatible substitute for %r; using %r", name, candidate)
            return candidate

    return name


def is_recoverable(
    name: str, equipment: EquipmentProfile | str, registry: ExerciseProfileRegistry
) -> bool:
    """True when ``name`` fits ``equipment`` as-is or via substitution."""
    resolved = resolve_substitution(name, equipment, frozenset(), registry)
    return is_compatible(resolved, equipment)
