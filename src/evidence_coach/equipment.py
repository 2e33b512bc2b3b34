"""
Equipment tier inference and compatibility checks for exercise names.
"""

from __future__ import annotations

import enum
import re
from types import MappingProxyType

from .models import EquipmentProfile, coerce_equipment
from .naming import normalize_exercise_name


class EquipmentTier(str, enum.Enum):
    BARBELL = "barbell"
    CABLE = "cable"
    MACHINE = "machine"
    DUMBBELLS = "dumbbells"
    BODYWEIGHT = "bodyweight"
    UNKNOWN = "unknown"


# Checked in order against the normalized name; first hit wins.
_TIER_PATTERNS: tuple[tuple[re.Pattern[str], EquipmentTier], ...] = (
    (re.compile(r"\bbarbell\b"), EquipmentTier.BARBELL),
    (re.compile(r"\b(cable|pulldown|pushdown)s?\b"), EquipmentTier.CABLE),
    (re.compile(r"\bmachine\b|\bpec deck\b"), EquipmentTier.MACHINE),
    (re.compile(r"\b(dumbbell|arnold|goblet)s?\b"), EquipmentTier.DUMBBELLS),
    (
        re.compile(
            r"\b(push ?ups?|pull ?ups?|chin ?ups?|dips?|planks?|hanging|ab wheel|russian twists?)\b"
        ),
        EquipmentTier.BODYWEIGHT,
    ),
)

# Names that carry no equipment word but are almost always done one way.
# Keys are normalized; the longest key contained in a name wins.
AMBIGUOUS_NAME_HINTS: MappingProxyType[str, EquipmentTier] = MappingProxyType(
    {
        "romanian deadlift": EquipmentTier.BARBELL,
        "deadlift": EquipmentTier.BARBELL,
        "back squat": EquipmentTier.BARBELL,
        "front squat": EquipmentTier.BARBELL,
        "bench press": EquipmentTier.BARBELL,
        "overhead press": EquipmentTier.BARBELL,
        "good morning": EquipmentTier.BARBELL,
        "hip thrust": EquipmentTier.BARBELL,
        "skull crusher": EquipmentTier.BARBELL,
        "skull crushers": EquipmentTier.BARBELL,
        "preacher curl": EquipmentTier.BARBELL,
        "tbar row": EquipmentTier.BARBELL,
        "leg press": EquipmentTier.MACHINE,
        "hack squat": EquipmentTier.MACHINE,
        "leg extension": EquipmentTier.MACHINE,
        "leg curl": EquipmentTier.MACHINE,
        "calf raise": EquipmentTier.MACHINE,
        "chest press": EquipmentTier.MACHINE,
        "face pull": EquipmentTier.CABLE,
        "seated row": EquipmentTier.CABLE,
        "lateral raise": EquipmentTier.DUMBBELLS,
        "rear delt fly": EquipmentTier.DUMBBELLS,
        "reverse fly": EquipmentTier.DUMBBELLS,
        "hammer curl": EquipmentTier.DUMBBELLS,
        "concentration curl": EquipmentTier.DUMBBELLS,
        "overhead tricep extension": EquipmentTier.DUMBBELLS,
        "kickback": EquipmentTier.DUMBBELLS,
        "bulgarian split squat": EquipmentTier.DUMBBELLS,
        "split squat": EquipmentTier.DUMBBELLS,
        "lunge": EquipmentTier.DUMBBELLS,
        "lunges": EquipmentTier.DUMBBELLS,
        "step up": EquipmentTier.DUMBBELLS,
        "stepup": EquipmentTier.DUMBBELLS,
        "shrug": EquipmentTier.DUMBBELLS,
        "single leg calf raise": EquipmentTier.BODYWEIGHT,
        "singleleg calf raise": EquipmentTier.BODYWEIGHT,
        "glute bridge": EquipmentTier.BODYWEIGHT,
        "nordic curl": EquipmentTier.BODYWEIGHT,
        "sissy squat": EquipmentTier.BODYWEIGHT,
        "inverted row": EquipmentTier.BODYWEIGHT,
        "leg raise": EquipmentTier.BODYWEIGHT,
        "crunch": EquipmentTier.BODYWEIGHT,
    }
)

_ALLOWED_TIERS: MappingProxyType[EquipmentProfile, frozenset[EquipmentTier] | None] = (
    MappingProxyType(
        {
            EquipmentProfile.FULL_GYM: None,  # everything
            EquipmentProfile.DUMBBELL_ONLY: frozenset(
                {EquipmentTier.DUMBBELLS, EquipmentTier.BODYWEIGHT}
            ),
        }
    )
)


def _hint_tier(normalized: str) -> EquipmentTier | None:
    best_key = ""
    for key in AMBIGUOUS_NAME_HINTS:
        if len(key) > len(best_key) and re.search(rf"\b{re.escape(key)}\b", normalized):
            best_key = key
    return AMBIGUOUS_NAME_HINTS[best_key] if best_key else None


def infer_tier(name: str) -> EquipmentTier:
    """Guess the equipment an exercise needs from its name alone."""
    normalized = normalize_exercise_name(name)
    for pattern, tier in _TIER_PATTERNS:
        if pattern.search(normalized):
            return tier
    return _hint_tier(normalized) or EquipmentTier.UNKNOWN


def is_compatible(name: str, equipment: EquipmentProfile | str) -> bool:
    """Return True when ``name`` can be performed with ``equipment``.

    Full gym accepts anything. Restricted profiles reject unknown tiers.
    """
    allowed = _ALLOWED_TIERS[coerce_equipment(equipment)]
    if allowed is None:
        return True
    return infer_tier(name) in allowed
