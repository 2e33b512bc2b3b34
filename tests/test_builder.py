"""
Tests for guided template personalization.
"""

import itertools
import re

import pytest

from evidence_coach.builder import (
    GUIDED_SUFFIX,
    adjusted_sets,
    apply_session_length,
    build_guided_template,
    is_core_exercise,
)
from evidence_coach.catalog import default_registry, find_template, split_templates
from evidence_coach.equipment import is_compatible
from evidence_coach.models import (
    ProgramDesignAnswers,
    SessionLength,
    SplitTemplate,
    TemplateDay,
    TemplateExercise,
)
from evidence_coach.naming import normalize_exercise_name

BASELINE = "upper-lower-4-evidence-v2"

ALL_ANSWERS = [
    ProgramDesignAnswers(
        days_per_week=4, focus=focus, equipment=equipment, session_length=length, experience=exp
    )
    for focus, equipment, length, exp in itertools.product(
        ["no_focus", "upper_focus", "lower_focus"],
        ["full_gym", "dumbbell_only"],
        ["short", "moderate", "long"],
        ["beginner", "intermediate", "advanced"],
    )
]


def _build(template_id: str = BASELINE, **kw) -> SplitTemplate:
    kw.setdefault("days_per_week", 4)
    return build_guided_template(
        find_template(template_id), ProgramDesignAnswers(**kw), default_registry()
    )


def _names(template: SplitTemplate, day_name: str) -> list[str]:
    day = next(d for d in template.days if d.day_name == day_name)
    return [e.name for e in day.exercises]


def _ex(name: str, sets: int = 3) -> TemplateExercise:
    return TemplateExercise(name=name, sets=sets, reps_min=10, reps_max=15)


def test_every_build_keeps_days_sets_and_unique_names():
    registry = default_registry()
    for template in split_templates():
        for answers in ALL_ANSWERS:
            guided = build_guided_template(template, answers, registry)
            assert [d.day_name for d in guided.days] == [d.day_name for d in template.days]
            for day in guided.days:
                keys = [normalize_exercise_name(e.name) for e in day.exercises]
                assert len(keys) == len(set(keys)), (template.id, answers, day.day_name)
                assert all(1 <= e.sets <= 6 for e in day.exercises)
                if answers.equipment.value == "dumbbell_only":
                    assert all(is_compatible(e.name, answers.equipment) for e in day.exercises)


def test_input_template_is_not_modified():
    template = find_template(BASELINE)
    before = template.model_dump()
    for answers in ALL_ANSWERS[:18]:
        build_guided_template(template, answers, default_registry())
    assert template.model_dump() == before


def test_builds_are_deterministic():
    first = _build(equipment="dumbbell_only", session_length="short", experience="beginner")
    second = _build(equipment="dumbbell_only", session_length="short", experience="beginner")
    assert first == second


def test_name_description_and_id():
    guided = _build(equipment="dumbbell_only", focus="upper_focus", session_length="short")
    assert guided.id == BASELINE
    assert guided.name == "Evidence Upper/Lower (4 days)" + GUIDED_SUFFIX
    assert "Guided" in guided.name
    assert guided.description == (
        "Upper Focus setup for 4 days/week with short sessions, "
        "intermediate progression and dumbbell-and-bodyweight substitutions."
    )
    assert "full-gym exercise selection" in _build().description


def test_dumbbell_only_removes_gym_equipment():
    guided = _build(equipment="dumbbell_only")
    banned = re.compile(r"barbell|machine|cable|pulldown|pushdown", re.IGNORECASE)
    for day in guided.days:
        for exercise in day.exercises:
            assert not banned.search(exercise.name), exercise.name
    assert _names(guided, "Lower A")[0] == "Goblet Squat"
    assert _names(guided, "Upper A")[:3] == [
        "Incline Dumbbell Bench Press",
        "Pull-Up",
        "One-Arm Dumbbell Row",
    ]


def test_deprecated_equipment_matches_dumbbell_only():
    legacy = _build(equipment="minimal", session_length="long")
    current = _build(equipment="dumbbell_only", session_length="long")
    assert legacy.model_dump() == current.model_dump()


def test_short_sessions_trim_accessories():
    base = find_template(BASELINE)
    guided = _build(session_length="short")
    upper_a = _names(guided, "Upper A")
    assert 4 <= len(upper_a) <= 5
    assert upper_a == [
        "Flat Barbell Bench Press",
        "Lat Pulldown",
        "Seated Cable Row",
        "Lateral Raise",
    ]
    assert upper_a[:2] == _names(base, "Upper A")[:2]
    assert guided.exercise_count() < base.exercise_count()

    day = next(d for d in guided.days if d.day_name == "Upper A")
    assert [e.sets for e in day.exercises] == [3, 2, 3, 1]


def test_long_sessions_add_an_accessory_and_lead_set():
    guided = _build(session_length="long")
    assert _names(guided, "Upper A")[-1] == "Face Pull"
    assert _names(guided, "Lower A")[-1] == "Leg Extension"
    # Lower B already has a leg extension; the next pool entry is used
    assert _names(guided, "Lower B")[-1] == "Seated Leg Curl"
    day = next(d for d in guided.days if d.day_name == "Upper A")
    assert day.exercises[0].sets == 4


def test_focus_and_experience_set_adjustments():
    guided = _build(focus="upper_focus", experience="beginner")
    upper_a = next(d for d in guided.days if d.day_name == "Upper A")
    lower_a = next(d for d in guided.days if d.day_name == "Lower A")
    assert [e.sets for e in upper_a.exercises][:2] == [3, 3]
    assert [e.sets for e in lower_a.exercises] == [2, 2, 1, 1, 1]


def test_adjusted_sets_clamps():
    upper = ProgramDesignAnswers(days_per_week=4, focus="upper_focus")
    assert adjusted_sets(6, 0, "Flat Barbell Bench Press", "Upper A", upper) == 6
    assert adjusted_sets(1, 3, "Leg Curl", "Lower A", upper) == 1
    assert adjusted_sets(0, 3, "Lateral Raise", "Upper A", upper) == 1


def test_dumbbell_only_trims_high_skill_sets():
    answers = ProgramDesignAnswers(days_per_week=4, equipment="dumbbell_only")
    assert adjusted_sets(3, 0, "Barbell Back Squat", "Lower A", answers) == 2
    assert adjusted_sets(3, 0, "Pull-Up", "Upper B", answers) == 2
    assert adjusted_sets(2, 0, "Barbell Back Squat", "Lower A", answers) == 2
    assert adjusted_sets(3, 3, "Lateral Raise", "Upper A", answers) == 3


@pytest.mark.parametrize(
    "index,name,core",
    [
        (0, "Lateral Raise", True),
        (1, "Face Pull", True),
        (2, "Barbell Row", True),
        (3, "Pull-Up", True),
        (4, "Hip Thrust", True),
        (3, "Lateral Raise", False),
        (5, "Tricep Pushdown", False),
        (4, "Leg Curl", False),
    ],
)
def test_core_exercises(index, name, core):
    assert is_core_exercise(index, name) is core


def test_short_session_never_goes_below_minimum():
    day = TemplateDay(
        day_name="Full Body",
        exercises=[_ex("Goblet Squat"), _ex("Push-Up"), _ex("Curl", 1), _ex("Fly"), _ex("Raise")],
    )
    apply_session_length(day, SessionLength.SHORT)
    assert [e.name for e in day.exercises] == ["Goblet Squat", "Push-Up", "Curl", "Fly"]
    assert [e.sets for e in day.exercises] == [3, 3, 0, 2]


def test_short_session_keeps_small_days():
    day = TemplateDay(day_name="Upper", exercises=[_ex("A"), _ex("B"), _ex("C"), _ex("D")])
    apply_session_length(day, SessionLength.SHORT)
    assert len(day.exercises) == 4


def test_accessory_floor_is_restored_by_set_pass():
    template = SplitTemplate(
        name="Tiny",
        description="",
        days_per_week=2,
        days=[
            TemplateDay(
                day_name="Full Body",
                exercises=[
                    _ex("Goblet Squat"),
                    _ex("Push-Up"),
                    _ex("Curl", 1),
                    _ex("Fly", 1),
                ],
            )
        ],
    )
    guided = build_guided_template(
        template,
        ProgramDesignAnswers(days_per_week=2, session_length="short"),
        default_registry(),
    )
    assert [e.sets for e in guided.days[0].exercises] == [3, 3, 1, 1]
