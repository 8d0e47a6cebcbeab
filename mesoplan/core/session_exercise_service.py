"""
Session exercise helpers: volume recommendations and review status.
"""

from typing import Optional, Sequence

from mesoplan.domain.models import WorkoutSessionExercise, WorkoutSet

# Recommendation meaning "cut volume, make this a recovery exercise"
RECOVERY_RECOMMENDATION = -1


def get_recommended_set_additions_or_recovery(
    session_exercise: WorkoutSessionExercise,
) -> Optional[int]:
    """
    Recommend set changes for the next microcycle from soreness and performance.

    Performance 3 (could not match last week) always means recovery. Otherwise:

        soreness \\ performance   0   1   2
        0                         2   1   0
        1                         1   0   0
        2+                        0   0   0

    Args:
        session_exercise: The previous microcycle's session exercise

    Returns:
        Sets to add (0-2), -1 for a recovery exercise, or None when either
        score has not been recorded
    """
    soreness = session_exercise.soreness_score
    performance = session_exercise.performance_score
    if soreness is None or performance is None:
        return None

    if performance == 3:
        return RECOVERY_RECOMMENDATION

    if soreness == 0:
        return {0: 2, 1: 1}.get(performance, 0)
    if soreness == 1:
        return 1 if performance == 0 else 0
    return 0


def is_deload_exercise(sets: Sequence[WorkoutSet]) -> bool:
    """True when the session exercise has sets and none of them targets an RIR."""
    return bool(sets) and all(s.planned_rir is None for s in sets)


def needs_review(session_exercise: WorkoutSessionExercise, sets: Sequence[WorkoutSet]) -> bool:
    """
    Check whether post-session feedback is still missing.

    Deload exercises never need review. Otherwise the lifter still owes
    the disruption score, the unused-muscle performance score, or the
    soreness score.

    Args:
        session_exercise: The session exercise to check
        sets: Its sets, in order
    """
    if is_deload_exercise(sets):
        return False

    rsm = session_exercise.rsm
    fatigue = session_exercise.fatigue
    return (
        rsm is None
        or rsm.disruption is None
        or fatigue is None
        or fatigue.unused_muscle_performance is None
        or session_exercise.soreness_score is None
    )
