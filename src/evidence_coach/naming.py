"""Exercise name canonicalization shared by every matching step."""

import re

_DROP = re.compile(r"[^a-z0-9 ]")
_SPACES = re.compile(r" +")


def normalize_exercise_name(name: str | None) -> str:
    """Lowercase, drop everything outside ``[a-z0-9 ]``, collapse and trim spaces.

    ``"Pull-Up"`` becomes ``"pullup"`` and ``"Pec Deck / Machine Fly"`` becomes
    ``"pec deck machine fly"``.
    """
    s = " ".join((name or "").split()).lower()
    s = _DROP.sub("", s)
    return _SPACES.sub(" ", s).strip()
