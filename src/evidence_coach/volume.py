"""Weekly volume guidance against per-muscle volume landmarks."""

import logging
from collections.abc import Mapping

from pydantic import BaseModel, Field

from .models import SplitTemplate
from .registry import ExerciseProfileRegistry

logger = logging.getLogger(__name__)

# A set counts fully for the primary muscle and half for the secondary one
SECONDARY_MUSCLE_SHARE = 0.5


class VolumeLandmark(BaseModel):
    """Weekly hard-set landmarks for one muscle group."""

    mev: int = Field(..., ge=0, description="Minimum effective volume")
    mav_low: int = Field(..., ge=0, description="Lower bound of maximum adaptive volume")
    mav_high: int = Field(..., ge=0, description="Upper bound of maximum adaptive volume")
    mrv: int = Field(..., ge=0, description="Maximum recoverable volume")


class VolumeRecommendation(BaseModel):
    status: str
    message: str


def get_volume_recommendation(
    weekly_sets: float, landmark: VolumeLandmark
) -> VolumeRecommendation:
    logger.debug("Checking weekly volume: sets=%s landmark=%s", weekly_sets, landmark)
    if weekly_sets < landmark.mev:
        return VolumeRecommendation(
            status="below_mev",
            message=(
                f"Below minimum effective volume ({weekly_sets}/{landmark.mev} sets). "
                "Add more sets to stimulate growth."
            ),
        )
    if weekly_sets < landmark.mav_low:
        return VolumeRecommendation(
            status="mev_mav",
            message="In maintenance range. Consider adding sets to optimize hypertrophy.",
        )
    if weekly_sets <= landmark.mav_high:
        return VolumeRecommendation(
            status="mav",
            message="Optimal volume range! Keep consistent for best results.",
        )
    if weekly_sets < landmark.mrv:
        return VolumeRecommendation(
            status="approaching_mrv",
            message="High volume zone. Monitor fatigue and consider a deload if recovery suffers.",
        )
    return VolumeRecommendation(
        status="above_mrv",
        message=(
            "Exceeding recoverable volume. "
            "Reduce sets or take a deload week to prevent overtraining."
        ),
    )


class MuscleVolume(BaseModel):
    muscle_group: str
    weekly_sets: float
    landmark: VolumeLandmark | None = None
    status: str


def planned_weekly_sets(
    template: SplitTemplate, registry: ExerciseProfileRegistry
) -> dict[str, float]:
    """Weekly hard sets per muscle group planned by ``template``.

    Exercises without a known profile are not counted.
    """
    volume: dict[str, float] = {}
    for day in template.days:
        for exercise in day.exercises:
            profile = registry.lookup(exercise.name)
            if profile is None:
                continue
            volume[profile.primary_muscle] = volume.get(profile.primary_muscle, 0) + exercise.sets
            if profile.secondary_muscle:
                volume[profile.secondary_muscle] = (
                    volume.get(profile.secondary_muscle, 0)
                    + exercise.sets * SECONDARY_MUSCLE_SHARE
                )
    return volume


def assess_weekly_volume(
    weekly_sets: Mapping[str, float], landmarks: Mapping[str, VolumeLandmark]
) -> list[MuscleVolume]:
    """Classify each muscle's weekly sets; muscles without a landmark are below MEV."""
    result: list[MuscleVolume] = []
    for muscle, sets in weekly_sets.items():
        landmark = landmarks.get(muscle)
        status = get_volume_recommendation(sets, landmark).status if landmark else "below_mev"
        result.append(
            MuscleVolume(muscle_group=muscle, weekly_sets=sets, landmark=landmark, status=status)
        )
    return result
