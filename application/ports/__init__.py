"""
Repository Interfaces (Ports) for the training engine.

This package defines abstract interfaces that decouple the session engine
from infrastructure (database, external services). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository, StreakRepository

    class StreakTracker:
        def __init__(self, streak_repo: StreakRepository):
            self._streak_repo = streak_repo
"""

# Session persistence
from application.ports.session_repository import SessionRepository

# Program context (templates, assignments, baselines)
from application.ports.program_repository import ProgramRepository

# Exercise catalog
from application.ports.exercises_repository import ExercisesRepository

# Achievements
from application.ports.personal_record_repository import PersonalRecordRepository
from application.ports.streak_repository import StreakRepository

__all__ = [
    "SessionRepository",
    "ProgramRepository",
    "ExercisesRepository",
    "PersonalRecordRepository",
    "StreakRepository",
]
