"""
Fatigue Scorer Interface (Port).

The planner only uses fatigue scores as sort and tie-break keys when
distributing exercises across sessions. How a score is computed is up to the
implementation; the default lives in mesoplan.core.exercise_service.
"""

from typing import Protocol

from mesoplan.domain.models import WorkoutExercise


class FatigueScorer(Protocol):
    """
    Abstract interface for scoring the fatigue an exercise produces.

    Higher scores mean more fatiguing exercises, which are scheduled first.
    """

    def get_fatigue_score(self, exercise: WorkoutExercise) -> float:
        """
        Score the fatigue of an exercise.

        Args:
            exercise: The exercise definition

        Returns:
            A scalar fatigue score
        """
        ...
