"""
Services layer for evidence coach business logic.
"""

from .program_service import DesignedProgram, ProgramService

__all__ = ["DesignedProgram", "ProgramService"]
