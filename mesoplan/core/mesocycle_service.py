"""
Mesocycle generation: the whole pipeline for one mesocycle.

1. Distribute exercises across sessions (once per mesocycle)
2. For each remaining microcycle: create it, then schedule its sessions
3. Return the records to create

Target RIR drops by one per microcycle from Settings.first_microcycle_rir
(floored at 0). The last microcycle is the deload.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from mesoplan.core.distribution_service import distribute_exercises_across_sessions
from mesoplan.core.microcycle_service import generate_sessions_for_microcycle
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.domain.models import MesocyclePlan, WorkoutMicrocycle

logger = logging.getLogger(__name__)


def get_target_rir(first_microcycle_rir: int, microcycle_position: int) -> int:
    """Target RIR for a microcycle: one less per microcycle, never below 0."""
    return max(first_microcycle_rir - microcycle_position, 0)


def _resolve_start_date(context: MesocyclePlanContext, start_date: Optional[datetime]) -> datetime:
    if start_date is not None:
        return start_date
    if context.microcycles_in_order:
        return context.microcycles_in_order[-1].end_date
    return datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)


def generate_mesocycle_plan(
    context: MesocyclePlanContext,
    start_date: Optional[datetime] = None,
) -> MesocyclePlan:
    """
    Generate every remaining microcycle of a mesocycle.

    Existing microcycles in the context are kept as history; generation
    continues after the last of them.

    Args:
        context: Plan context for the mesocycle
        start_date: Start of the first new microcycle. Defaults to the end of
            the last existing microcycle, else today at midnight.

    Returns:
        MesocyclePlan with the created microcycles, sessions, session
        exercises and sets
    """
    mesocycle = context.mesocycle
    total_microcycles = (
        mesocycle.planned_microcycle_count or context.settings.default_microcycle_count
    )
    length = timedelta(days=mesocycle.planned_microcycle_length_in_days)

    if context.planned_session_exercise_pairs is None:
        planned_pairs = distribute_exercises_across_sessions(
            mesocycle.planned_session_count_per_microcycle,
            context.calibration_map,
            context.exercise_map,
            fatigue_scorer=context.fatigue_scorer,
        )
        context.set_planned_session_exercise_pairs(planned_pairs)

    first_position = len(context.microcycles_in_order)
    if first_position >= total_microcycles:
        logger.info(
            f"Mesocycle {mesocycle.id} already has {first_position} of "
            f"{total_microcycles} microcycles, nothing to generate"
        )
        return context.to_plan()

    logger.info(
        f"Generating microcycles {first_position + 1}-{total_microcycles} "
        f"for mesocycle {mesocycle.id}"
    )

    current_start = _resolve_start_date(context, start_date)
    for position in range(first_position, total_microcycles):
        is_deload = position == total_microcycles - 1
        target_rir = get_target_rir(context.first_microcycle_rir, position)

        microcycle = WorkoutMicrocycle(
            user_id=mesocycle.user_id,
            workout_mesocycle_id=mesocycle.id,
            start_date=current_start,
            end_date=current_start + length,
        )
        context.add_microcycle(microcycle)

        generate_sessions_for_microcycle(
            context=context,
            microcycle_index=len(context.microcycles_to_create) - 1,
            target_rir=target_rir,
            is_deload_microcycle=is_deload,
        )
        current_start = microcycle.end_date

    plan = context.to_plan()
    logger.info(
        f"Planned {len(plan.microcycles)} microcycles, {len(plan.sessions)} sessions, "
        f"{len(plan.sets)} sets for mesocycle {mesocycle.id}"
    )
    return plan
