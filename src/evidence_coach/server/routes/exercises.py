"""
Exercise profile lookup API routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from ...equipment import infer_tier, is_compatible
from ...models import EquipmentProfile
from ...naming import normalize_exercise_name
from ...services import ProgramService
from ...substitution import resolve_substitution

router = APIRouter()
service = ProgramService()


@router.get("/exercises/profile")
async def exercise_profile(q: str = Query(..., min_length=1)) -> dict:
    """
    Resolve a free-text exercise name to its profile and equipment tier.
    A missing profile is not an error; ``profile`` is simply null.
    """
    profile = service.registry.lookup(q)
    return {
        "ok": True,
        "query": q,
        "normalized": normalize_exercise_name(q),
        "tier": infer_tier(q).value,
        "profile": profile.model_dump() if profile else None,
    }


@router.get("/exercises/substitute")
async def exercise_substitute(
    q: str = Query(..., min_length=1),
    equipment: EquipmentProfile = Query(EquipmentProfile.DUMBBELL_ONLY),
) -> dict:
    """
    Suggest a replacement for ``q`` that fits ``equipment``.
    ``substituted`` is false when the name was returned unchanged.
    """
    resolved = resolve_substitution(q, equipment, frozenset(), service.registry)
    return {
        "ok": True,
        "query": q,
        "equipment": equipment.value,
        "name": resolved,
        "substituted": resolved != q,
        "compatible": is_compatible(resolved, equipment),
    }
