"""
Tunable heuristic weights for exercise ordering and template recommendation.

Every number the ordering and scoring code depends on lives here so that a
tuning change touches a single module.
"""

from types import MappingProxyType

from .models import Level

# ---- Day exercise ordering ---------------------------------------------------

MIN_KNOWN_COVERAGE = 0.6
UNKNOWN_PROFILE_SCORE = -1.0

MUSCLE_PRIORITY_WEIGHT = 4
SKILL_WEIGHT = 3
FATIGUE_WEIGHT = 2
STABILITY_WEIGHT = 1
INTENSITY_WEIGHT = 0.5

PRIMARY_POSITION_BASE = 4
SECONDARY_POSITION_BASE = 2
PRIMARY_FOCUS_BONUS = 2
SECONDARY_FOCUS_BONUS = 1

SKILL_SCORE = MappingProxyType({Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1})
FATIGUE_SCORE = MappingProxyType({Level.HIGH: 3, Level.MEDIUM: 2, Level.LOW: 1})
# Lower stability requirement scores higher
STABILITY_SCORE = MappingProxyType({Level.LOW: 3, Level.MEDIUM: 2, Level.HIGH: 1})

# (max reps_min, bucket); anything above the last threshold scores 1
INTENSITY_BUCKETS = ((6, 3), (10, 2))
LIGHT_INTENSITY_BUCKET = 1

# ---- Template recommendation ---------------------------------------------------

DAY_MATCH_BASE = 40
DAY_DISTANCE_PENALTY = 10
EXACT_DAY_BONUS = 20
EVIDENCE_BONUS = 15

NO_FOCUS_SPECIALIZATION_PENALTY = -25
MATCHING_SPECIALIZATION_BONUS = 35
OPPOSITE_SPECIALIZATION_PENALTY = -20
FOCUS_KEYWORD_BONUS = 8

BEGINNER_MAX_DAYS = 5
BEGINNER_HIGH_FREQUENCY_PENALTY = -8
SHORT_SESSION_MAX_DAYS = 4
SHORT_SESSION_HIGH_FREQUENCY_PENALTY = -6

FULL_GYM_EQUIPMENT_FIT = 24
COMPATIBLE_RATIO_WEIGHT = 20
RECOVERABLE_RATIO_WEIGHT = 10

# ---- Guided builder ------------------------------------------------------------

MIN_SETS = 1
MAX_SETS = 6
SHORT_SESSION_MIN_EXERCISES = 4
SHORT_SESSION_MAX_REMOVALS = 2
LONG_SESSION_MAX_EXERCISES_FOR_ACCESSORY = 6
PROTECTED_LEADING_SLOTS = 2
