"""Exceptions raised outside the pure engine (loading, lookups, API)."""


class EvidenceCoachError(Exception):
    """Base class for evidence coach errors."""


class SnapshotError(EvidenceCoachError):
    """The evidence snapshot could not be read or failed validation."""


class TemplateNotFoundError(EvidenceCoachError, LookupError):
    """No compiled template matches the requested id or name."""
