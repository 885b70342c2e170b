"""
StartSession Use Case.

Creates a new ACTIVE workout session, either empty ("quick" workout) or
materialized from a template. For program templates it resolves the
client's assignment, the program week and the exercise baselines, and
computes each exercise's progressed targets for that week.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from application.ports import ProgramRepository, SessionRepository
from application.use_cases.results import (
    MaterializedEntry,
    Outcome,
    StartSessionResult,
)
from backend.core.clock import utc_now
from backend.core.progression import apply_progression, calculate_week_number
from domain.models import Actor, ProgressionScheme, WorkoutTemplate

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM_WEEKS = 6


class StartSessionUseCase:
    """
    Use case for starting a workout session.

    Orchestrates the following workflow:
    1. Resolve the template (if given) and its program context
    2. Resolve the athlete's active assignment, week number and baselines
    3. Create the session
    4. Create one entry per template exercise, in template order
    5. Compute progressed targets for each entry

    Usage:
        >>> use_case = StartSessionUseCase(session_repo, program_repo)
        >>> result = use_case.execute(actor, template_id="tpl-1")
        >>> if result.success:
        ...     print(result.session_id, result.week_number)
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        program_repo: ProgramRepository,
        *,
        enforce_single_active: bool = False,
        default_total_weeks: int = DEFAULT_PROGRAM_WEEKS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            session_repo: Repository for session persistence
            program_repo: Repository for templates, assignments and baselines
            enforce_single_active: Reject a start while another session is ACTIVE
            default_total_weeks: Program length reported when there is no program
            clock: Source of the current time
        """
        self._session_repo = session_repo
        self._program_repo = program_repo
        self._enforce_single_active = enforce_single_active
        self._default_total_weeks = default_total_weeks
        self._clock = clock

    def execute(
        self,
        actor: Actor,
        *,
        template_id: Optional[str] = None,
        week_number: Optional[int] = None,
    ) -> StartSessionResult:
        """
        Execute the start session workflow.

        Args:
            actor: Athlete starting the session
            template_id: Template to materialize, or None for an empty session
            week_number: Explicit program week; computed from the assignment
                start date when omitted

        Returns:
            StartSessionResult with the new session and its entries
        """
        template: Optional[WorkoutTemplate] = None
        if template_id:
            template = self._program_repo.get_template(template_id)
            if template is None:
                logger.warning(f"Template not found: {template_id}")
                return StartSessionResult.failure(
                    Outcome.NOT_FOUND,
                    f"Template not found: {template_id}",
                )

        if self._enforce_single_active:
            active = self._session_repo.list_active_sessions(actor.user_id)
            if active:
                return StartSessionResult.failure(
                    Outcome.ILLEGAL_STATE,
                    f"Athlete already has an active session: {active[0].id}",
                )

        now = self._clock()
        resolved_week = week_number
        scheme = ProgressionScheme.NONE
        total_weeks = self._default_total_weeks
        baselines: Dict[str, float] = {}

        if template is not None and template.program is not None:
            scheme = template.program.progression_scheme
            total_weeks = template.program.weeks

            assignment = self._program_repo.get_active_assignment(
                template.program.id,
                actor.user_id,
            )
            if assignment is not None:
                if resolved_week is None:
                    resolved_week = calculate_week_number(
                        assignment.start_date,
                        total_weeks,
                        now=now,
                    )
                baselines = self._program_repo.get_exercise_baselines(assignment.id)

            # Stored week must match the week the targets were computed for
            if resolved_week is not None and total_weeks > 0:
                resolved_week = max(1, min(resolved_week, total_weeks))

        session = self._session_repo.create_session(
            actor.user_id,
            started_at=now,
            template_id=template.id if template else None,
            week_number=resolved_week,
            logged_by=actor.user_id,
        )
        logger.info(
            f"Started session {session.id} for {actor.user_id} "
            f"(template={template_id}, week={resolved_week}, scheme={scheme.value})"
        )

        entries: List[MaterializedEntry] = []
        if template is not None:
            for order, template_exercise in enumerate(template.exercises):
                entry = self._session_repo.add_entry(
                    session.id,
                    exercise_id=template_exercise.exercise_id,
                    position=template_exercise.position,
                    order=order,
                )
                targets = apply_progression(
                    template_exercise.nominal_targets(),
                    resolved_week or 1,
                    scheme,
                    total_weeks,
                    baselines.get(template_exercise.exercise_id),
                )
                entries.append(MaterializedEntry(
                    entry_id=entry.id,
                    exercise_id=entry.exercise_id,
                    position=entry.position,
                    targets=targets,
                ))

        return StartSessionResult(
            session_id=session.id,
            entries=entries,
            week_number=resolved_week,
            progression_scheme=scheme,
            total_weeks=total_weeks,
            exercise_baselines=baselines,
        )
