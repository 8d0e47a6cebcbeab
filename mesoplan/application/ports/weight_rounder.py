"""
Weight Rounder Interface (Port).

Computed target weights are rarely loadable as-is. The planner asks a
WeightRounder for the nearest weight an equipment type can actually be set
to. The default implementation lives in mesoplan.core.equipment_service.
"""

from enum import Enum
from typing import Optional, Protocol

from mesoplan.domain.models import WorkoutEquipmentType


class RoundingDirection(str, Enum):
    """How to pick a loadable weight relative to the target."""

    UP = "up"  # Smallest option >= target
    DOWN = "down"  # Largest option <= target
    NEAREST = "nearest"  # Closest option, lower wins ties
    PREFER_DOWN = "prefer_down"  # DOWN, falling back to UP when nothing is lighter


class WeightRounder(Protocol):
    """
    Abstract interface for equipment-based weight rounding.
    """

    def find_nearest_weight(
        self,
        equipment: WorkoutEquipmentType,
        target_weight: float,
        direction: RoundingDirection,
    ) -> Optional[float]:
        """
        Find a loadable weight for the equipment.

        Args:
            equipment: The equipment type
            target_weight: Raw computed weight
            direction: Which side of the target to search

        Returns:
            The loadable weight, or None if no option satisfies the direction
        """
        ...
