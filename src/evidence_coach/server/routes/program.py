"""
Program recommendation and personalization API routes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ...errors import TemplateNotFoundError
from ...models import ProgramDesignAnswers, SplitTemplate
from ...services import ProgramService
from ...volume import MuscleVolume, VolumeLandmark

router = APIRouter()
service = ProgramService()


class RankedItem(BaseModel):
    id: str | None
    name: str
    score: int


class RecommendResponse(BaseModel):
    success: bool
    best_id: str | None = None
    ranking: list[RankedItem] = Field(default_factory=list)


class DesignRequest(ProgramDesignAnswers):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    template_id: str | None = Field(None, alias="templateId")


class DesignResponse(BaseModel):
    success: bool
    base_template: SplitTemplate
    guided_template: SplitTemplate
    score: int | None = None
    message: str


class VolumeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    template_id: str = Field(..., alias="templateId")
    landmarks: dict[str, VolumeLandmark] = Field(default_factory=dict)


class VolumeResponse(BaseModel):
    success: bool
    template_id: str
    muscles: list[MuscleVolume]


@router.post("/program/recommend")
async def recommend_program(answers: ProgramDesignAnswers) -> RecommendResponse:
    """Rank the catalogue for the given questionnaire answers."""
    ranked = service.rank(answers)
    if not ranked:
        raise HTTPException(status_code=503, detail="No templates available")
    return RecommendResponse(
        success=True,
        best_id=ranked[0].template.id,
        ranking=[
            RankedItem(id=r.template.id, name=r.template.name, score=r.score) for r in ranked
        ],
    )


@router.post("/program/design")
async def design_program(req: DesignRequest) -> DesignResponse:
    """Recommend a template (or use the requested one) and personalize it."""
    answers = ProgramDesignAnswers.model_validate(req.model_dump(exclude={"template_id"}))
    try:
        designed = service.design_program(answers, template_id=req.template_id)
    except TemplateNotFoundError as err:
        raise HTTPException(status_code=404, detail=str(err)) from err

    logging.info("Designed %r", designed.guided_template.name)
    return DesignResponse(
        success=True,
        base_template=designed.base_template,
        guided_template=designed.guided_template,
        score=designed.score,
        message=service.render_template_message(designed.guided_template),
    )


@router.post("/program/volume")
async def program_volume(req: VolumeRequest) -> VolumeResponse:
    """Planned weekly sets per muscle for a catalogue template."""
    try:
        template = service.get_template(req.template_id)
    except TemplateNotFoundError as err:
        raise HTTPException(status_code=404, detail=str(err)) from err

    return VolumeResponse(
        success=True,
        template_id=req.template_id,
        muscles=service.weekly_volume(template, req.landmarks),
    )
