"""
Volume planning: set counts per exercise for a microcycle.

Set progression is shared by all exercises with the same main muscle group
across the whole microcycle, whichever session they are in.

Baseline:
    2 sets per exercise in the muscle group, plus 1 set per microcycle for the
    group as a whole, handed to earlier exercises first.

Historical adjustment:
    When earlier microcycles are complete, each exercise starts from its last
    real (non-recovery) set count and the soreness/performance feedback
    decides whether sets are added or the exercise becomes a recovery one.

Limits come from Settings: max_sets_per_exercise and
max_sets_per_muscle_group_per_session.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple
from uuid import UUID

from mesoplan.application.exceptions import PlanPreconditionError
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.core.session_exercise_service import (
    RECOVERY_RECOMMENDATION,
    get_recommended_set_additions_or_recovery,
)
from mesoplan.core.sfr_service import get_sfr
from mesoplan.domain.models import CalibrationExercisePair, WorkoutSessionExercise

logger = logging.getLogger(__name__)


# Most sets added to one muscle group in one microcycle
MAX_SETS_ADDED_PER_MUSCLE_GROUP = 3

# Most sets added to one exercise in one microcycle
MAX_SETS_ADDED_PER_EXERCISE = 2


@dataclass
class MicrocycleSetPlan:
    """Set counts for every exercise of a microcycle."""
    exercise_id_to_set_count: Dict[UUID, int] = field(default_factory=dict)
    recovery_exercise_ids: Set[UUID] = field(default_factory=set)


@dataclass
class _AdditionCandidate:
    exercise_id: UUID
    sfr: float
    muscle_group_index: int


def calculate_baseline_set_count(
    microcycle_index: int,
    exercise_count: int,
    exercise_index: int,
    is_deload_microcycle: bool,
) -> int:
    """
    Default set count for an exercise from microcycle progression alone.

    Args:
        microcycle_index: Zero-based position of the microcycle in the mesocycle
        exercise_count: Exercises sharing the muscle group this microcycle
        exercise_index: Position of the exercise in the muscle-group ordering
        is_deload_microcycle: Deload halves the previous microcycle's baseline

    Returns:
        Planned set count, at least 1 for deloads
    """
    if is_deload_microcycle:
        previous = calculate_baseline_set_count(
            microcycle_index - 1, exercise_count, exercise_index, False
        )
        return max(1, previous // 2)

    total_sets = 2 * exercise_count + max(microcycle_index, 0)
    base_sets, remainder = divmod(total_sets, exercise_count)
    return base_sets + 1 if exercise_index < remainder else base_sets


def calculate_set_plan_for_microcycle(
    context: MesocyclePlanContext,
    microcycle_index: int,
    is_deload_microcycle: bool,
) -> MicrocycleSetPlan:
    """
    Calculate set counts for every exercise in a microcycle.

    Args:
        context: Plan context with planned session exercise pairs
        microcycle_index: Zero-based position in context.microcycles_in_order
        is_deload_microcycle: Whether this is the deload microcycle

    Returns:
        MicrocycleSetPlan covering every planned exercise

    Raises:
        PlanPreconditionError: If exercises have not been distributed yet
    """
    if context.muscle_group_to_exercise_pairs is None:
        raise PlanPreconditionError(
            "Muscle group map is not initialized. Distribute exercises before planning volume.",
            invariant="plan_before_schedule",
        )

    plan = MicrocycleSetPlan()
    for muscle_group_pairs in context.muscle_group_to_exercise_pairs.values():
        group_plan = _calculate_muscle_group_set_plan(
            context, microcycle_index, muscle_group_pairs, is_deload_microcycle
        )
        plan.exercise_id_to_set_count.update(group_plan.exercise_id_to_set_count)
        plan.recovery_exercise_ids.update(group_plan.recovery_exercise_ids)

    logger.debug(
        f"Set plan for microcycle {microcycle_index}: "
        f"{sum(plan.exercise_id_to_set_count.values())} sets, "
        f"{len(plan.recovery_exercise_ids)} recovery exercises"
    )
    return plan


def _find_previous_session_exercises(
    context: MesocyclePlanContext,
    microcycle_index: int,
    exercise_ids: Set[UUID],
) -> Tuple[Dict[UUID, WorkoutSessionExercise], Set[UUID]]:
    """
    Walk back through complete microcycles to find each exercise's last real session exercise.

    Returns:
        Tuple of (exercise id -> session exercise, ids only found before the
        immediately previous microcycle)
    """
    found: Dict[UUID, WorkoutSessionExercise] = {}
    found_in_earlier: Set[UUID] = set()

    previous_index = microcycle_index - 1
    while len(found) < len(exercise_ids) and 0 <= previous_index < len(context.microcycles_in_order):
        previous_microcycle = context.microcycles_in_order[previous_index]
        if not previous_microcycle.session_order:
            break
        last_session = context.session_map.get(previous_microcycle.session_order[-1])
        if last_session is None or not last_session.complete:
            break

        for session_id in previous_microcycle.session_order:
            session = context.session_map.get(session_id)
            if session is None:
                continue
            for session_exercise_id in session.session_exercise_order:
                session_exercise = context.session_exercise_map.get(session_exercise_id)
                if (
                    session_exercise is None
                    or session_exercise.workout_exercise_id not in exercise_ids
                    or session_exercise.workout_exercise_id in found
                    or session_exercise.is_recovery_exercise
                ):
                    continue
                found[session_exercise.workout_exercise_id] = session_exercise
                if previous_index < microcycle_index - 1:
                    found_in_earlier.add(session_exercise.workout_exercise_id)

        previous_index -= 1

    return found, found_in_earlier


def _calculate_muscle_group_set_plan(
    context: MesocyclePlanContext,
    microcycle_index: int,
    muscle_group_pairs: List[CalibrationExercisePair],
    is_deload_microcycle: bool,
) -> MicrocycleSetPlan:
    max_sets_per_exercise = context.settings.max_sets_per_exercise
    max_sets_per_session = context.settings.max_sets_per_muscle_group_per_session

    plan = MicrocycleSetPlan()
    set_counts = plan.exercise_id_to_set_count
    session_index_to_exercise_ids: Dict[int, List[UUID]] = {}
    session_indices = context.exercise_id_to_session_index or {}

    # 1. Baselines
    for index, pair in enumerate(muscle_group_pairs):
        baseline = calculate_baseline_set_count(
            microcycle_index, len(muscle_group_pairs), index, is_deload_microcycle
        )
        set_counts[pair.exercise.id] = min(baseline, max_sets_per_exercise)

        session_index = session_indices.get(pair.exercise.id)
        if session_index is not None:
            session_index_to_exercise_ids.setdefault(session_index, []).append(pair.exercise.id)

    # 2. History
    exercise_ids = {pair.exercise.id for pair in muscle_group_pairs}
    previous, found_in_earlier = _find_previous_session_exercises(
        context, microcycle_index, exercise_ids
    )
    if not previous:
        return plan

    for pair in muscle_group_pairs:
        previous_session_exercise = previous.get(pair.exercise.id)
        if previous_session_exercise is not None:
            set_counts[pair.exercise.id] = min(
                len(previous_session_exercise.set_order), max_sets_per_exercise
            )

    def previous_session_total(exercise_id: UUID) -> int:
        session_index = session_indices.get(exercise_id)
        if session_index is None:
            return 0
        return sum(
            len(previous[other_id].set_order)
            for other_id in session_index_to_exercise_ids.get(session_index, [])
            if other_id in previous
        )

    def planned_session_total(exercise_id: UUID) -> int:
        session_index = session_indices.get(exercise_id)
        if session_index is None:
            return 0
        return sum(
            set_counts.get(other_id, 0)
            for other_id in session_index_to_exercise_ids.get(session_index, [])
        )

    # 3. Recommendations
    total_sets_to_add = 0
    candidates: List[_AdditionCandidate] = []
    for muscle_group_index, pair in enumerate(muscle_group_pairs):
        previous_session_exercise = previous.get(pair.exercise.id)
        if previous_session_exercise is None:
            continue

        if pair.exercise.id in found_in_earlier:
            # Skipped last microcycle (recovery), so no additions this time
            recommendation: Optional[int] = 0
        else:
            recommendation = get_recommended_set_additions_or_recovery(previous_session_exercise)

        previous_set_count = len(previous_session_exercise.set_order)
        if recommendation == RECOVERY_RECOMMENDATION:
            plan.recovery_exercise_ids.add(pair.exercise.id)
            set_counts[pair.exercise.id] = max(1, previous_set_count // 2)
        elif recommendation is not None and recommendation >= 0:
            total_sets_to_add += recommendation
            if (
                previous_set_count < max_sets_per_exercise
                and previous_session_total(pair.exercise.id) < max_sets_per_session
            ):
                sfr = get_sfr(previous_session_exercise.rsm, previous_session_exercise.fatigue)
                candidates.append(
                    _AdditionCandidate(
                        exercise_id=pair.exercise.id,
                        sfr=float("-inf") if sfr is None else sfr,
                        muscle_group_index=muscle_group_index,
                    )
                )

    if total_sets_to_add == 0 or not candidates:
        return plan

    # 4. Hand out additions, best SFR first
    candidates.sort(key=lambda c: (-c.sfr, c.muscle_group_index))
    sets_remaining = min(total_sets_to_add, MAX_SETS_ADDED_PER_MUSCLE_GROUP)
    for candidate in candidates:
        current = set_counts.get(candidate.exercise_id, 0)
        addable = min(
            sets_remaining,
            max_sets_per_exercise - current,
            max_sets_per_session - planned_session_total(candidate.exercise_id),
            MAX_SETS_ADDED_PER_EXERCISE,
        )
        if addable > 0:
            set_counts[candidate.exercise_id] = current + addable
            sets_remaining -= addable
        if sets_remaining == 0:
            break

    return plan
