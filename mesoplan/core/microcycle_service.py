"""
Microcycle scheduling: put each planned session on a calendar day.

Days 0..length-1 are walked from the microcycle start. Rest days are skipped
and every other day takes the next planned session until all are placed.
What happens when sessions outnumber non-rest days is set by
Settings.session_overflow_policy (see SessionOverflowPolicy).
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from mesoplan.application.exceptions import (
    InvalidPlanConfigurationError,
    PlanPreconditionError,
)
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.core.session_service import generate_session
from mesoplan.core.volume_planning_service import calculate_set_plan_for_microcycle
from mesoplan.domain.models import WorkoutSession
from mesoplan.settings import SessionOverflowPolicy

logger = logging.getLogger(__name__)


def plan_session_dates(
    start_date: datetime,
    length_in_days: int,
    rest_days: Sequence[int],
    session_count: int,
    overflow_policy: SessionOverflowPolicy = SessionOverflowPolicy.STOP,
) -> List[datetime]:
    """
    Calculate the start date of every session in a microcycle.

    Args:
        start_date: First day of the microcycle
        length_in_days: Microcycle length
        rest_days: 0-based day indices with no session
        session_count: Planned sessions in the microcycle
        overflow_policy: Behavior when sessions outnumber non-rest days

    Returns:
        Session dates in chronological order. Never on a rest day.

    Raises:
        InvalidPlanConfigurationError: On a non-positive count or length, rest
            days outside the microcycle, no training days, or overflow under
            the "error" policy
    """
    if session_count <= 0:
        raise InvalidPlanConfigurationError(
            f"Session count must be positive, got {session_count}",
            invariant="session_count_positive",
        )
    if length_in_days <= 0:
        raise InvalidPlanConfigurationError(
            f"Microcycle length must be positive, got {length_in_days}",
            invariant="microcycle_length_positive",
        )
    out_of_range = sorted(d for d in rest_days if d < 0 or d >= length_in_days)
    if out_of_range:
        raise InvalidPlanConfigurationError(
            f"Rest days {out_of_range} are outside a {length_in_days}-day microcycle",
            invariant="rest_days_within_microcycle",
        )

    rest_day_set = set(rest_days)
    training_days = [day for day in range(length_in_days) if day not in rest_day_set]
    if not training_days:
        raise InvalidPlanConfigurationError(
            f"Every day of the {length_in_days}-day microcycle is a rest day",
            invariant="microcycle_has_training_day",
        )

    if session_count <= len(training_days):
        return [start_date + timedelta(days=day) for day in training_days[:session_count]]

    overflow = session_count - len(training_days)
    policy = SessionOverflowPolicy(overflow_policy)

    if policy == SessionOverflowPolicy.ERROR:
        raise InvalidPlanConfigurationError(
            f"{session_count} sessions do not fit in {len(training_days)} training days",
            invariant="sessions_fit_training_days",
        )

    if policy == SessionOverflowPolicy.STOP:
        logger.warning(
            f"Dropping {overflow} of {session_count} sessions: only "
            f"{len(training_days)} training days in a {length_in_days}-day microcycle"
        )
        return [start_date + timedelta(days=day) for day in training_days]

    # PACK: earliest training days take the extra sessions
    per_day, extra = divmod(session_count, len(training_days))
    dates: List[datetime] = []
    for position, day in enumerate(training_days):
        sessions_on_day = per_day + (1 if position < extra else 0)
        dates.extend([start_date + timedelta(days=day)] * sessions_on_day)
    logger.info(
        f"Packed {session_count} sessions into {len(training_days)} training days"
    )
    return dates


def generate_sessions_for_microcycle(
    context: MesocyclePlanContext,
    microcycle_index: int,
    target_rir: Optional[int],
    is_deload_microcycle: bool,
    overflow_policy: Optional[SessionOverflowPolicy] = None,
) -> List[WorkoutSession]:
    """
    Generate the sessions of a microcycle.

    Exercises must already be distributed (plan before schedule). Session ids
    are appended to the microcycle's session_order.

    Args:
        context: Plan context with planned session exercise pairs
        microcycle_index: Index into context.microcycles_to_create
        target_rir: Target RIR for the microcycle
        is_deload_microcycle: Whether this is the deload microcycle
        overflow_policy: Overrides Settings.session_overflow_policy

    Returns:
        The created sessions in date order

    Raises:
        PlanPreconditionError: If the microcycle index does not resolve or
            exercises have not been distributed
        InvalidPlanConfigurationError: If the mesocycle shape cannot be scheduled
    """
    mesocycle = context.mesocycle

    if not 0 <= microcycle_index < len(context.microcycles_to_create):
        raise PlanPreconditionError(
            f"Microcycle index {microcycle_index} is out of range "
            f"({len(context.microcycles_to_create)} microcycles to create)",
            invariant="microcycle_index_in_range",
        )
    if context.planned_session_exercise_pairs is None:
        raise PlanPreconditionError(
            "Planned session exercise pairs are not initialized. "
            "Distribute exercises before scheduling sessions.",
            invariant="plan_before_schedule",
            ref_id=mesocycle.id,
        )
    if context.muscle_group_to_exercise_pairs is None:
        raise PlanPreconditionError(
            "Muscle group map is not initialized. It is derived when the planned "
            "session exercise pairs are set.",
            invariant="plan_before_schedule",
            ref_id=mesocycle.id,
        )

    session_count = mesocycle.planned_session_count_per_microcycle
    planned_pairs = context.planned_session_exercise_pairs
    if len(planned_pairs) < session_count:
        raise PlanPreconditionError(
            f"Only {len(planned_pairs)} sessions planned for {session_count} sessions per microcycle",
            invariant="plan_covers_session_count",
            ref_id=mesocycle.id,
        )

    microcycle = context.microcycles_to_create[microcycle_index]
    policy = overflow_policy or context.settings.session_overflow_policy
    session_dates = plan_session_dates(
        start_date=microcycle.start_date,
        length_in_days=mesocycle.planned_microcycle_length_in_days,
        rest_days=mesocycle.planned_microcycle_rest_days,
        session_count=session_count,
        overflow_policy=policy,
    )

    microcycle_position = context.get_microcycle_position(microcycle)
    set_plan = calculate_set_plan_for_microcycle(
        context, microcycle_position, is_deload_microcycle
    )

    sessions: List[WorkoutSession] = []
    for session_index, session_start in enumerate(session_dates):
        session = generate_session(
            context=context,
            microcycle_index=microcycle_index,
            session_index=session_index,
            session_start=session_start,
            exercise_pairs=planned_pairs[session_index],
            target_rir=target_rir,
            is_deload_microcycle=is_deload_microcycle,
            set_plan=set_plan,
        )
        microcycle.session_order.append(session.id)
        sessions.append(session)

    logger.info(
        f"Scheduled {len(sessions)} sessions for microcycle {microcycle_position + 1} "
        f"(RIR {target_rir}{', deload' if is_deload_microcycle else ''})"
    )
    return sessions
