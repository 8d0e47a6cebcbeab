"""
Stimulus to Fatigue Ratio (SFR) aggregation.

Rolls the subjective RSM and fatigue scores of a session (or a session
exercise) into totals and their ratio. A total is None unless all three of
its components are recorded; the ratio is None unless both totals exist.
"""

from dataclasses import dataclass
from typing import Optional

from mesoplan.domain.models import Fatigue, Rsm, WorkoutSession, WorkoutSessionExercise


@dataclass
class StimulusFatigueSummary:
    """Aggregated stimulus and fatigue for a session or session exercise."""
    rsm_total: Optional[int] = None
    fatigue_total: Optional[int] = None
    sfr: Optional[float] = None


def get_rsm_total(rsm: Optional[Rsm]) -> Optional[int]:
    """
    Calculate the total Raw Stimulus Magnitude.

    Args:
        rsm: The RSM scores

    Returns:
        Sum of the three components (0-9), or None if any is missing
    """
    if rsm is None:
        return None
    components = (rsm.mind_muscle_connection, rsm.pump, rsm.disruption)
    if any(c is None for c in components):
        return None
    return sum(components)


def get_fatigue_total(fatigue: Optional[Fatigue]) -> Optional[int]:
    """
    Calculate the total fatigue score.

    Args:
        fatigue: The fatigue scores

    Returns:
        Sum of the three components (0-9), or None if any is missing
    """
    if fatigue is None:
        return None
    components = (
        fatigue.joint_and_tissue_disruption,
        fatigue.perceived_effort,
        fatigue.unused_muscle_performance,
    )
    if any(c is None for c in components):
        return None
    return sum(components)


def get_sfr(rsm: Optional[Rsm], fatigue: Optional[Fatigue]) -> Optional[float]:
    """
    Calculate the Stimulus to Fatigue Ratio.

    A zero fatigue total returns the RSM total itself instead of dividing.

    Returns:
        RSM total / fatigue total, or None when either total is missing
    """
    rsm_total = get_rsm_total(rsm)
    fatigue_total = get_fatigue_total(fatigue)

    if rsm_total is None or fatigue_total is None:
        return None

    if fatigue_total == 0:
        return float(rsm_total)

    return rsm_total / fatigue_total


def _summarize(rsm: Optional[Rsm], fatigue: Optional[Fatigue]) -> StimulusFatigueSummary:
    return StimulusFatigueSummary(
        rsm_total=get_rsm_total(rsm),
        fatigue_total=get_fatigue_total(fatigue),
        sfr=get_sfr(rsm, fatigue),
    )


def aggregate_session(session: WorkoutSession) -> StimulusFatigueSummary:
    """Aggregate the stored RSM and fatigue of a session."""
    return _summarize(session.rsm, session.fatigue)


def aggregate_session_exercise(session_exercise: WorkoutSessionExercise) -> StimulusFatigueSummary:
    """Aggregate the stored RSM and fatigue of a session exercise."""
    return _summarize(session_exercise.rsm, session_exercise.fatigue)
