"""
Equipment weight options and rounding.

Provides the default WeightRounder adapter, which rounds against the
equipment type's own `weight_options` list.
"""

import logging
from typing import List, Optional

from mesoplan.application.ports import RoundingDirection
from mesoplan.domain.models import WorkoutEquipmentType

logger = logging.getLogger(__name__)


def generate_weight_options(min_weight: float, increment: float, max_weight: float) -> List[float]:
    """
    Generate weight options for adjustable equipment such as barbells.

    Starts at min_weight (e.g. the bar), adds increment (e.g. 2.5, 5, 10 lbs)
    and stops once max_weight is exceeded.

    Args:
        min_weight: The minimum weight
        increment: The weight increment
        max_weight: The maximum weight

    Returns:
        Ascending list of weights

    Raises:
        ValueError: If increment is not positive
    """
    if increment <= 0:
        raise ValueError("increment must be positive")

    weights: List[float] = []
    step = 0
    current = min_weight
    while current <= max_weight:
        weights.append(current)
        step += 1
        # Multiply instead of accumulating to avoid float drift on 2.5 increments
        current = min_weight + step * increment
    return weights


def find_nearest_weight(
    equipment: WorkoutEquipmentType,
    target_weight: float,
    direction: RoundingDirection,
) -> Optional[float]:
    """
    Find the nearest available weight from equipment.weight_options.

    Args:
        equipment: The equipment type
        target_weight: The target weight
        direction: Which side of the target to search

    Returns:
        The matching option, or None if the equipment has no options or
        none satisfies the direction
    """
    if not equipment.weight_options:
        return None

    sorted_weights = sorted(equipment.weight_options)

    if direction == RoundingDirection.UP:
        return next((w for w in sorted_weights if w >= target_weight), None)

    if direction == RoundingDirection.DOWN:
        return next((w for w in reversed(sorted_weights) if w <= target_weight), None)

    if direction == RoundingDirection.PREFER_DOWN:
        lower = find_nearest_weight(equipment, target_weight, RoundingDirection.DOWN)
        if lower is not None:
            return lower
        return find_nearest_weight(equipment, target_weight, RoundingDirection.UP)

    # NEAREST: first minimum wins, so the lighter option wins ties
    return min(sorted_weights, key=lambda w: abs(target_weight - w))


class EquipmentWeightRounder:
    """
    Default WeightRounder backed by each equipment type's weight options.
    """

    def find_nearest_weight(
        self,
        equipment: WorkoutEquipmentType,
        target_weight: float,
        direction: RoundingDirection,
    ) -> Optional[float]:
        result = find_nearest_weight(equipment, target_weight, direction)
        if result is None:
            logger.debug(
                f"No {direction.value} weight option for {equipment.title} "
                f"around {target_weight:.2f}"
            )
        return result
