"""
Default evidence catalogue, built once per process and shared read-only.
"""

from __future__ import annotations

from functools import lru_cache

from .compiler import compile_evidence_templates
from .config import SETTINGS
from .errors import TemplateNotFoundError
from .models import CompiledEvidenceSet, EvidenceSnapshot, SplitTemplate
from .registry import ExerciseProfileRegistry
from .snapshot import load_snapshot


@lru_cache(maxsize=1)
def default_snapshot() -> EvidenceSnapshot:
    return load_snapshot(SETTINGS.EVIDENCE_SNAPSHOT_PATH)


@lru_cache(maxsize=1)
def default_registry() -> ExerciseProfileRegistry:
    return ExerciseProfileRegistry(default_snapshot().exercise_profiles)


@lru_cache(maxsize=1)
def compiled_evidence() -> CompiledEvidenceSet:
    return compile_evidence_templates(
        default_snapshot(), default_registry(), optimize=SETTINGS.FF_EXERCISE_ORDERING
    )


def split_templates() -> list[SplitTemplate]:
    """Compiled catalogue templates in snapshot order (a fresh list each call)."""
    return list(compiled_evidence().templates)


def find_template(key: str) -> SplitTemplate:
    """Look a compiled template up by id, falling back to its display name."""
    templates = compiled_evidence().templates
    for template in templates:
        if template.id == key:
            return template
    for template in templates:
        if template.name == key:
            return template
    raise TemplateNotFoundError(f"Unknown template: {key}")
