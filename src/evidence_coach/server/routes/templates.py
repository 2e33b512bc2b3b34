"""
Compiled template catalogue API routes.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...errors import TemplateNotFoundError
from ...models import SplitTemplate
from ...services import ProgramService

router = APIRouter()
service = ProgramService()


class TemplateSummary(BaseModel):
    id: str | None
    name: str
    description: str
    days_per_week: int
    confidence: str | None
    day_names: list[str]


@router.get("/templates")
async def list_templates() -> dict:
    """List the compiled evidence catalogue."""
    items = [
        TemplateSummary(
            id=t.id,
            name=t.name,
            description=t.description,
            days_per_week=t.days_per_week,
            confidence=t.evidence.confidence.value if t.evidence else None,
            day_names=[d.day_name for d in t.days],
        )
        for t in service.templates
    ]
    return {"ok": True, "items": [i.model_dump() for i in items], "total": len(items)}


@router.get("/templates/{template_id}")
async def get_template(template_id: str) -> SplitTemplate:
    """Get one compiled template by id (or display name)."""
    try:
        return service.get_template(template_id)
    except TemplateNotFoundError as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
