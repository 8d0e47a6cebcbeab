"""
Exercise distribution across the sessions of a microcycle.

Greedy assignment by fatigue score:
1. Group calibration/exercise pairs by main muscle group
2. Order groups by their most fatiguing exercise
3. Give every session a headliner, a different muscle group per session
   while unused groups remain
4. Deal the remaining exercises round-robin, most fatiguing first
5. Within a session keep the headliner first, then Heavy -> Medium -> Light

The function is pure: the same ordered inputs always give the same output.
Fatigue-score ties keep the lookup iteration order.
"""

import logging
from typing import Dict, List, Mapping, Optional
from uuid import UUID

from mesoplan.application.exceptions import (
    InvalidPlanConfigurationError,
    PlanPreconditionError,
)
from mesoplan.application.ports import FatigueScorer
from mesoplan.core.exercise_service import InitialGuessFatigueScorer
from mesoplan.domain.models import (
    CalibrationExercisePair,
    ExerciseRepRange,
    WorkoutExercise,
    WorkoutExerciseCalibration,
)

logger = logging.getLogger(__name__)


REP_RANGE_ORDER = {
    ExerciseRepRange.HEAVY: 0,
    ExerciseRepRange.MEDIUM: 1,
    ExerciseRepRange.LIGHT: 2,
}


def build_calibration_exercise_pairs(
    calibration_map: Mapping[UUID, WorkoutExerciseCalibration],
    exercise_map: Mapping[UUID, WorkoutExercise],
) -> List[CalibrationExercisePair]:
    """
    Pair every calibration with its exercise.

    Raises:
        PlanPreconditionError: If a calibration references an unknown exercise
    """
    pairs: List[CalibrationExercisePair] = []
    for calibration in calibration_map.values():
        exercise = exercise_map.get(calibration.workout_exercise_id)
        if exercise is None:
            raise PlanPreconditionError(
                f"Exercise {calibration.workout_exercise_id} not found for calibration {calibration.id}",
                invariant="calibration_exercise_exists",
                ref_id=calibration.workout_exercise_id,
            )
        pairs.append(CalibrationExercisePair(calibration=calibration, exercise=exercise))
    return pairs


def distribute_exercises_across_sessions(
    session_count: int,
    calibration_map: Mapping[UUID, WorkoutExerciseCalibration],
    exercise_map: Mapping[UUID, WorkoutExercise],
    fatigue_scorer: Optional[FatigueScorer] = None,
) -> List[List[CalibrationExercisePair]]:
    """
    Distribute exercises across the sessions of a microcycle.

    Args:
        session_count: Number of sessions to distribute across
        calibration_map: Calibration lookup (iteration order breaks ties)
        exercise_map: Exercise lookup
        fatigue_scorer: Fatigue scoring collaborator (defaults to initial guesses)

    Returns:
        session_count ordered lists of pairs, one per session. Every
        calibration appears exactly once.

    Raises:
        InvalidPlanConfigurationError: If session_count is not positive
        PlanPreconditionError: If a calibration references an unknown exercise
            or an exercise has no primary muscle group
    """
    if session_count <= 0:
        raise InvalidPlanConfigurationError(
            f"Session count must be positive, got {session_count}",
            invariant="session_count_positive",
        )

    scorer = fatigue_scorer or InitialGuessFatigueScorer()
    pairs = build_calibration_exercise_pairs(calibration_map, exercise_map)

    # Score once per pair so tie-breaks cannot drift between sorts
    scores: Dict[UUID, float] = {
        pair.calibration.id: scorer.get_fatigue_score(pair.exercise) for pair in pairs
    }

    def score_of(pair: CalibrationExercisePair) -> float:
        return scores[pair.calibration.id]

    # Group by main muscle group, keeping first-seen order
    muscle_groups: Dict[UUID, List[CalibrationExercisePair]] = {}
    for pair in pairs:
        muscle_group_id = pair.exercise.main_muscle_group_id
        if muscle_group_id is None:
            raise PlanPreconditionError(
                f"Exercise {pair.exercise.id} ({pair.exercise.exercise_name}) "
                "has no primary muscle group",
                invariant="exercise_has_primary_muscle_group",
                ref_id=pair.exercise.id,
            )
        muscle_groups.setdefault(muscle_group_id, []).append(pair)

    group_max_fatigue = {
        group_id: max(score_of(pair) for pair in group_pairs)
        for group_id, group_pairs in muscle_groups.items()
    }
    sorted_group_ids = sorted(
        muscle_groups, key=lambda group_id: group_max_fatigue[group_id], reverse=True
    )

    sessions: List[List[CalibrationExercisePair]] = [[] for _ in range(session_count)]
    used_headliner_groups = set()

    # Headliners
    for session_index in range(session_count):
        candidate_group_id = next(
            (g for g in sorted_group_ids if g not in used_headliner_groups), None
        )

        if candidate_group_id is None:
            # Every group has headlined, reuse the one with the most fatiguing exercise left
            best_fatigue = None
            for group_id in sorted_group_ids:
                group_pairs = muscle_groups[group_id]
                if not group_pairs:
                    continue
                remaining_max = max(score_of(pair) for pair in group_pairs)
                if best_fatigue is None or remaining_max > best_fatigue:
                    best_fatigue = remaining_max
                    candidate_group_id = group_id

        if candidate_group_id is None:
            continue

        group_pairs = muscle_groups[candidate_group_id]
        group_pairs.sort(key=score_of, reverse=True)
        sessions[session_index].append(group_pairs.pop(0))
        used_headliner_groups.add(candidate_group_id)

    # Remainder, dealt round-robin
    remaining = [pair for group_pairs in muscle_groups.values() for pair in group_pairs]
    remaining.sort(key=score_of, reverse=True)
    for position, pair in enumerate(remaining):
        sessions[position % session_count].append(pair)

    # Headliner first, rest by rep range
    for session_pairs in sessions:
        if len(session_pairs) > 1:
            session_pairs[1:] = sorted(
                session_pairs[1:],
                key=lambda pair: REP_RANGE_ORDER[ExerciseRepRange(pair.exercise.rep_range)],
            )

    empty_sessions = [i for i, session_pairs in enumerate(sessions) if not session_pairs]
    if pairs and empty_sessions:
        logger.warning(
            f"{len(empty_sessions)} of {session_count} sessions have no exercises "
            f"({len(pairs)} exercises available)"
        )

    logger.debug(
        f"Distributed {len(pairs)} exercises across {session_count} sessions "
        f"from {len(muscle_groups)} muscle groups"
    )
    return sessions
