"""
Evidence snapshot provider.

The snapshot is produced offline by the evidence import tooling and shipped as
JSON next to this module. Loading parses it with pydantic and applies the same
sanity checks the importer runs before writing a snapshot.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path

from pydantic import ValidationError

from .errors import SnapshotError
from .models import EvidenceSnapshot

logger = logging.getLogger(__name__)

BUNDLED_SNAPSHOT = Path(__file__).parent / "data" / "evidence_snapshot.json"


def validate_snapshot(snapshot: EvidenceSnapshot) -> EvidenceSnapshot:
    """Raise ``SnapshotError`` when the snapshot cannot back the catalogue."""
    if not snapshot.rules:
        raise SnapshotError("Snapshot has no evidence rules.")

    for rule in snapshot.rules:
        if not rule.sources:
            raise SnapshotError(f"Rule {rule.id} has no sources.")

    if not snapshot.template_blueprints:
        raise SnapshotError("Snapshot has no template blueprints.")

    counts = Counter(rule.id for rule in snapshot.rules)
    duplicates = sorted(rule_id for rule_id, n in counts.items() if n > 1)
    if duplicates:
        raise SnapshotError(f"Duplicate rule ids detected: {', '.join(duplicates)}")

    return snapshot


def parse_snapshot(data: dict) -> EvidenceSnapshot:
    try:
        snapshot = EvidenceSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Malformed evidence snapshot: {e}") from e
    return validate_snapshot(snapshot)


def load_snapshot(path: str | Path | None = None) -> EvidenceSnapshot:
    """Load and validate a snapshot file (the bundled one by default)."""
    data_file = Path(path) if path else BUNDLED_SNAPSHOT
    try:
        with open(data_file, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Failed to read evidence snapshot {data_file}: {e}") from e

    snapshot = parse_snapshot(data)
    logger.info(
        "Loaded evidence snapshot %s: %d rules, %d profiles, %d blueprints",
        snapshot.version,
        len(snapshot.rules),
        len(snapshot.exercise_profiles),
        len(snapshot.template_blueprints),
    )
    return snapshot
