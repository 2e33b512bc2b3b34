import pytest

from evidence_coach.models import ExerciseProfile, SplitTemplate, TemplateDay, TemplateExercise
from evidence_coach.registry import ExerciseProfileRegistry
from evidence_coach.volume import (
    VolumeLandmark,
    assess_weekly_volume,
    get_volume_recommendation,
    planned_weekly_sets,
)

LANDMARK = VolumeLandmark(mev=6, mav_low=10, mav_high=16, mrv=20)


@pytest.mark.parametrize(
    "sets,status",
    [
        (5, "below_mev"),
        (6, "mev_mav"),
        (8, "mev_mav"),
        (10, "mav"),
        (12, "mav"),
        (16, "mav"),
        (18, "approaching_mrv"),
        (20, "above_mrv"),
        (21, "above_mrv"),
    ],
)
def test_volume_status(sets, status):
    assert get_volume_recommendation(sets, LANDMARK).status == status


def test_below_mev_message_mentions_counts():
    assert "(5/6 sets)" in get_volume_recommendation(5, LANDMARK).message


def test_planned_weekly_sets_counts_secondary_as_half():
    registry = ExerciseProfileRegistry(
        [
            ExerciseProfile(
                name="Bench",
                primary_muscle="chest",
                secondary_muscle="triceps",
                skill_demand="high",
                stability="medium",
                fatigue_cost="high",
            ),
        ]
    )
    template = SplitTemplate(
        name="Two Day",
        description="",
        days_per_week=2,
        days=[
            TemplateDay(
                day_name="A",
                exercises=[
                    TemplateExercise(name="Bench", sets=3, reps_min=5, reps_max=8),
                    TemplateExercise(name="Mystery", sets=4, reps_min=8, reps_max=12),
                ],
            ),
            TemplateDay(
                day_name="B",
                exercises=[TemplateExercise(name="Bench", sets=4, reps_min=5, reps_max=8)],
            ),
        ],
    )
    assert planned_weekly_sets(template, registry) == {"chest": 7, "triceps": 3.5}


def test_assess_without_landmark_is_below_mev():
    result = assess_weekly_volume({"chest": 12, "calves": 4}, {"chest": LANDMARK})
    by_muscle = {m.muscle_group: m for m in result}
    assert by_muscle["chest"].status == "mav"
    assert by_muscle["chest"].landmark == LANDMARK
    assert by_muscle["calves"].status == "below_mev"
    assert by_muscle["calves"].landmark is None
