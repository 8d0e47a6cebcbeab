"""
Set progression: reps and weight for every set of a session exercise.

Normal microcycles:
    Each set after the first drops 2 reps at the same weight. When that would
    go below the bottom of the rep band, reps hold and the weight drops 2%
    (rounded down to a loadable option), so weight keeps decreasing instead.

Deload microcycles:
    The first set does half the normal reps, and sessions in the second half
    of the microcycle also halve the weight. Later sets drop 1 rep at a time
    with the same floor rule. Deload sets have no target RIR.
"""

import logging
from typing import List, Optional

from mesoplan.application.exceptions import (
    InvalidPlanConfigurationError,
    PlanPreconditionError,
)
from mesoplan.application.ports import RoundingDirection
from mesoplan.core.exercise_service import (
    LOAD_STEP_FACTOR,
    calculate_first_set_targets,
    get_rep_range_values,
)
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.domain.models import (
    WorkoutExercise,
    WorkoutExerciseCalibration,
    WorkoutSession,
    WorkoutSessionExercise,
    WorkoutSet,
)

logger = logging.getLogger(__name__)


NORMAL_REP_STEP = 2
DELOAD_REP_STEP = 1


def generate_sets_for_session_exercise(
    context: MesocyclePlanContext,
    exercise: WorkoutExercise,
    calibration: WorkoutExerciseCalibration,
    session: WorkoutSession,
    session_exercise: WorkoutSessionExercise,
    set_count: int,
    target_rir: Optional[int],
    is_deload_microcycle: bool,
    microcycle_index: int = 0,
    session_index: int = 0,
) -> List[WorkoutSet]:
    """
    Generate the ordered set prescriptions for one session exercise.

    The sets are queued on the context and also returned.

    Args:
        context: Plan context (equipment lookup, rounding, accumulators)
        exercise: The exercise being prescribed
        calibration: The calibration the 1RM basis comes from
        session: The owning session
        session_exercise: The owning session exercise
        set_count: Number of sets to generate
        target_rir: Target RIR for the microcycle
        is_deload_microcycle: Whether this is the deload microcycle
        microcycle_index: Zero-based position of the microcycle in the mesocycle
        session_index: Zero-based position of the session in the microcycle

    Returns:
        set_count WorkoutSet records, first set first

    Raises:
        InvalidPlanConfigurationError: If set_count is not positive
        PlanPreconditionError: If the exercise's equipment type is unknown
    """
    if set_count <= 0:
        raise InvalidPlanConfigurationError(
            f"Set count must be positive for exercise {exercise.id}, got {set_count}",
            invariant="set_count_positive",
            ref_id=exercise.id,
        )

    equipment = context.equipment_map.get(exercise.workout_equipment_type_id)
    if equipment is None:
        raise PlanPreconditionError(
            f"Equipment type not found for exercise {exercise.id}, {exercise.exercise_name}",
            invariant="exercise_equipment_exists",
            ref_id=exercise.workout_equipment_type_id,
        )

    rounder = context.weight_rounder
    planned_rir = context.first_microcycle_rir if target_rir is None else target_rir
    rep_range = get_rep_range_values(exercise.rep_range)
    rep_step = DELOAD_REP_STEP if is_deload_microcycle else NORMAL_REP_STEP

    reps, weight = calculate_first_set_targets(
        exercise=exercise,
        calibration=calibration,
        equipment=equipment,
        microcycle_index=microcycle_index,
        target_rir=target_rir,
        weight_rounder=rounder,
        first_microcycle_rir=context.first_microcycle_rir,
    )

    if is_deload_microcycle:
        reps = max(1, reps // 2)
        # First half of the deload keeps the weight, second half halves it too
        if session_index >= context.mesocycle.planned_session_count_per_microcycle // 2:
            halved = rounder.find_nearest_weight(equipment, weight / 2, RoundingDirection.DOWN)
            weight = halved if halved is not None else weight / 2

    sets: List[WorkoutSet] = []
    for set_index in range(set_count):
        if set_index > 0:
            if reps - rep_step < rep_range.min:
                reduced_target = weight / LOAD_STEP_FACTOR
                reduced = rounder.find_nearest_weight(
                    equipment, reduced_target, RoundingDirection.DOWN
                )
                weight = reduced if reduced is not None else reduced_target
            else:
                reps -= rep_step

        sets.append(
            WorkoutSet(
                user_id=exercise.user_id,
                workout_exercise_id=exercise.id,
                workout_session_id=session.id,
                workout_session_exercise_id=session_exercise.id,
                planned_reps=reps,
                planned_weight=weight,
                planned_rir=None if is_deload_microcycle else planned_rir,
                exercise_properties=calibration.exercise_properties,
            )
        )

    context.add_sets(sets)
    logger.debug(
        f"{exercise.exercise_name}: {set_count} sets "
        f"{[s.planned_reps for s in sets]} @ {[s.planned_weight for s in sets]}"
        f"{' (deload)' if is_deload_microcycle else ''}"
    )
    return sets


def is_completed(workout_set: WorkoutSet) -> bool:
    """
    Check whether a set has been logged.

    A set is complete once actual reps and weight are recorded, and RIR is
    recorded unless no RIR was planned (deload sets).
    """
    return (
        workout_set.actual_reps is not None
        and workout_set.actual_weight is not None
        and (workout_set.rir is not None or workout_set.planned_rir is None)
    )
