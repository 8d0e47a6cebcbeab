"""
Fake collaborator implementations for testing.

In-memory implementations of the FatigueScorer and WeightRounder ports.
"""
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from mesoplan.application.ports import RoundingDirection
from mesoplan.domain.models import WorkoutEquipmentType, WorkoutExercise


class FakeFatigueScorer:
    """
    FatigueScorer returning seeded scores by exercise id.

    Unknown exercises score `default`. Every scored exercise id is recorded.
    """

    def __init__(self, scores: Optional[Dict[UUID, float]] = None, default: float = 0.0):
        self._scores: Dict[UUID, float] = dict(scores or {})
        self._default = default
        self.calls: List[UUID] = []

    def seed(self, exercise_id: UUID, score: float) -> None:
        """Set the score for an exercise."""
        self._scores[exercise_id] = score

    def reset(self) -> None:
        """Clear recorded calls."""
        self.calls.clear()

    def get_fatigue_score(self, exercise: WorkoutExercise) -> float:
        self.calls.append(exercise.id)
        return self._scores.get(exercise.id, self._default)


class FakeWeightRounder:
    """
    WeightRounder that never rounds: every target weight is loadable.

    Every call is recorded as (equipment id, target weight, direction).
    """

    def __init__(self):
        self.calls: List[Tuple[UUID, float, RoundingDirection]] = []

    def reset(self) -> None:
        """Clear recorded calls."""
        self.calls.clear()

    def find_nearest_weight(
        self,
        equipment: WorkoutEquipmentType,
        target_weight: float,
        direction: RoundingDirection,
    ) -> Optional[float]:
        self.calls.append((equipment.id, target_weight, direction))
        return target_weight
