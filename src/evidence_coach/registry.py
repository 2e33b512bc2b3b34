"""
Exercise profile registry: normalized-name lookup with substring fallback.
"""

import logging
from collections.abc import Iterable, Iterator

from .models import ExerciseProfile
from .naming import normalize_exercise_name

logger = logging.getLogger(__name__)


class ExerciseProfileRegistry:
    """Read-only map from normalized exercise name to profile.

    Duplicate names keep the first profile seen. Instances are never mutated
    after construction, so one registry can be shared by concurrent callers.
    """

    def __init__(self, profiles: Iterable[ExerciseProfile] = ()) -> None:
        by_name: dict[str, ExerciseProfile] = {}
        dropped = 0
        for profile in profiles:
            key = normalize_exercise_name(profile.name)
            if not key:
                continue
            if key in by_name:
                dropped += 1
                continue
            by_name[key] = profile
        self._by_name = by_name
        if dropped:
            logger.debug("Dropped %d duplicate exercise profiles", dropped)

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[ExerciseProfile]:
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def lookup(self, name: str) -> ExerciseProfile | None:
        """Resolve ``name`` to a profile, or ``None`` when nothing matches.

        Exact normalized match first; otherwise the longest registry key that
        contains, or is contained in, the query. Equal-length keys resolve to
        the one registered first.
        """
        query = normalize_exercise_name(name)
        if not query:
            return None
        direct = self._by_name.get(query)
        if direct is not None:
            return direct

        best: ExerciseProfile | None = None
        best_length = -1
        for key, profile in self._by_name.items():
            if (key in query or query in key) and len(key) > best_length:
                best, best_length = profile, len(key)
        return best
