import logging
import os

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load .env for local dev; real env vars always win
load_dotenv(override=False)


def _bool(name: str, default: bool) -> bool:
    """
    Helper to parse boolean environment variables.
    Accepts: 1, true, yes, on (case-insensitive).
    """
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def _split_origins(value: str | None) -> list[str]:
    """Split a comma-separated origin list, dropping blanks and duplicates."""
    if not value:
        return []
    seen: set[str] = set()
    origins: list[str] = []
    for raw in value.split(","):
        origin = raw.strip().rstrip("/")
        if origin and origin not in seen:
            seen.add(origin)
            origins.append(origin)
    return origins


class Config(BaseSettings):
    """
    Application configuration loaded from environment variables.
    Uses pydantic for validation and parsing.
    """

    EVIDENCE_SNAPSHOT_PATH: str | None = Field(
        None, description="Path to an evidence snapshot JSON file (bundled snapshot if unset)"
    )
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    CORS_ORIGINS: str = Field(
        "http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Feature flags
    FF_EXERCISE_ORDERING: bool = Field(
        default_factory=lambda: _bool("FF_EXERCISE_ORDERING", True),
        description="Reorder exercises by desirability when compiling the catalogue",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        level = str(v or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("EVIDENCE_SNAPSHOT_PATH", mode="before")
    @classmethod
    def blank_path_is_unset(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @property
    def cors_origins(self) -> list[str]:
        return _split_origins(self.CORS_ORIGINS)

    @property
    def log_level(self) -> int:
        return logging.getLevelNamesMapping()[self.LOG_LEVEL]


SETTINGS = Config()  # pyright: ignore[reportCallIssue]
