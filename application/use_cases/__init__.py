"""
Application Use Cases for the session lifecycle.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses carrying an Outcome, never raise for
  domain failures

Usage:
    from application.use_cases import (
        StartSessionUseCase,
        LogSetUseCase,
        CompleteSessionUseCase,
        Outcome,
    )

    # Start a session from a template
    start = StartSessionUseCase(session_repo, program_repo)
    result = start.execute(actor, template_id="tpl-1")

    # Log a set against one of its entries
    log = LogSetUseCase(session_repo)
    log.log_set(actor, result.entries[0].entry_id, set_number=1, weight=100, reps=5)

    # Finish it
    complete = CompleteSessionUseCase(session_repo, record_repo, streak_repo)
    done = complete.execute(actor, result.session_id)
    if done.outcome == Outcome.OK:
        print(done.total_volume, done.new_records)
"""

from application.use_cases.abandon_session import (
    AbandonSessionUseCase,
    DeleteSessionUseCase,
)
from application.use_cases.add_exercise import AddExerciseUseCase, position_label
from application.use_cases.complete_session import CompleteSessionUseCase
from application.use_cases.get_session import GetSessionUseCase
from application.use_cases.log_sets import UPDATABLE_SET_FIELDS, LogSetUseCase
from application.use_cases.results import (
    AddExerciseResult,
    CompleteSessionResult,
    LogSetResult,
    MaterializedEntry,
    Outcome,
    RemoveSessionResult,
    SessionDetailResult,
    StartSessionResult,
    UseCaseResult,
)
from application.use_cases.start_session import StartSessionUseCase

__all__ = [
    # Outcomes
    "Outcome",
    "UseCaseResult",
    # StartSession
    "StartSessionUseCase",
    "StartSessionResult",
    "MaterializedEntry",
    # LogSet
    "LogSetUseCase",
    "LogSetResult",
    "UPDATABLE_SET_FIELDS",
    # AddExercise
    "AddExerciseUseCase",
    "AddExerciseResult",
    "position_label",
    # CompleteSession
    "CompleteSessionUseCase",
    "CompleteSessionResult",
    # AbandonSession / DeleteSession
    "AbandonSessionUseCase",
    "DeleteSessionUseCase",
    "RemoveSessionResult",
    # GetSession
    "GetSessionUseCase",
    "SessionDetailResult",
]
