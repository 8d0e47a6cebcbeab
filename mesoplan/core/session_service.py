"""
Session generation: one WorkoutSession with its session exercises and sets.
"""

import logging
from datetime import datetime
from typing import List, Optional

from mesoplan.application.exceptions import PlanPreconditionError
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.core.set_service import generate_sets_for_session_exercise
from mesoplan.core.volume_planning_service import MicrocycleSetPlan
from mesoplan.domain.models import (
    CalibrationExercisePair,
    WorkoutSession,
    WorkoutSessionExercise,
)

logger = logging.getLogger(__name__)


def generate_session(
    context: MesocyclePlanContext,
    microcycle_index: int,
    session_index: int,
    session_start: datetime,
    exercise_pairs: List[CalibrationExercisePair],
    target_rir: Optional[int],
    is_deload_microcycle: bool,
    set_plan: MicrocycleSetPlan,
) -> WorkoutSession:
    """
    Generate a session and everything under it.

    Creates the session, one session exercise per pair (in pair order) and
    the sets of each. All records are queued on the context.

    Args:
        context: Plan context
        microcycle_index: Index into context.microcycles_to_create
        session_index: Zero-based position of the session in the microcycle
        session_start: Scheduled start of the session
        exercise_pairs: Ordered calibration/exercise pairs for this session
        target_rir: Target RIR for the microcycle
        is_deload_microcycle: Whether this is the deload microcycle
        set_plan: Set counts for the microcycle

    Returns:
        The created session, with session_exercise_order filled in

    Raises:
        PlanPreconditionError: If the set plan has no count for an exercise
    """
    microcycle = context.microcycles_to_create[microcycle_index]
    microcycle_position = context.get_microcycle_position(microcycle)

    session = WorkoutSession(
        user_id=context.mesocycle.user_id,
        workout_microcycle_id=microcycle.id,
        title=f"Microcycle {microcycle_position + 1} - Session {session_index + 1}",
        start_time=session_start,
    )
    context.add_session(session)

    for pair in exercise_pairs:
        set_count = set_plan.exercise_id_to_set_count.get(pair.exercise.id)
        if set_count is None:
            raise PlanPreconditionError(
                f"No set count planned for exercise {pair.exercise.id} ({pair.exercise.exercise_name})",
                invariant="exercise_has_set_plan",
                ref_id=pair.exercise.id,
            )

        session_exercise = WorkoutSessionExercise(
            user_id=context.mesocycle.user_id,
            workout_session_id=session.id,
            workout_exercise_id=pair.exercise.id,
            is_recovery_exercise=pair.exercise.id in set_plan.recovery_exercise_ids,
        )
        context.add_session_exercise(session_exercise)

        sets = generate_sets_for_session_exercise(
            context=context,
            exercise=pair.exercise,
            calibration=pair.calibration,
            session=session,
            session_exercise=session_exercise,
            set_count=set_count,
            target_rir=target_rir,
            is_deload_microcycle=is_deload_microcycle,
            microcycle_index=microcycle_position,
            session_index=session_index,
        )

        session_exercise.set_order.extend(s.id for s in sets)
        session.session_exercise_order.append(session_exercise.id)

    logger.debug(
        f"Generated '{session.title}' on {session_start.date()} "
        f"with {len(exercise_pairs)} exercises"
    )
    return session
