"""
Exercise helpers for set planning.

- Numeric rep bands for each rep-range class
- Default fatigue scoring from an exercise's initial fatigue guess
- First-set targets (reps and weight) for a microcycle
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from mesoplan.application.ports import RoundingDirection, WeightRounder
from mesoplan.core.calibration_service import target_weight_for_reps
from mesoplan.domain.models import (
    ExerciseProgressionType,
    ExerciseRepRange,
    WorkoutEquipmentType,
    WorkoutExercise,
    WorkoutExerciseCalibration,
)

logger = logging.getLogger(__name__)


# Weight step used for load progression and intra-session weight drops
LOAD_STEP_FACTOR = 1.02

# Reps added when load progression runs out of heavier weight options
REPS_PER_LOAD_FALLBACK = 2


@dataclass(frozen=True)
class RepRangeValues:
    """Inclusive numeric rep band."""
    min: int
    max: int


_REP_RANGE_VALUES = {
    ExerciseRepRange.HEAVY: RepRangeValues(min=5, max=15),
    ExerciseRepRange.MEDIUM: RepRangeValues(min=10, max=20),
    ExerciseRepRange.LIGHT: RepRangeValues(min=15, max=30),
}


def get_rep_range_values(rep_range: ExerciseRepRange) -> RepRangeValues:
    """
    Get the numeric rep band for a rep-range class.

    - Heavy: 5-15
    - Medium: 10-20
    - Light: 15-30
    """
    return _REP_RANGE_VALUES[ExerciseRepRange(rep_range)]


class InitialGuessFatigueScorer:
    """
    Default FatigueScorer: the sum of the exercise's initial fatigue guess.

    Missing components count as 0, so an exercise without a guess scores 0.
    """

    def get_fatigue_score(self, exercise: WorkoutExercise) -> float:
        guess = exercise.initial_fatigue_guess
        return float(
            (guess.joint_and_tissue_disruption or 0)
            + (guess.perceived_effort or 0)
            + (guess.unused_muscle_performance or 0)
        )


def calculate_first_set_targets(
    exercise: WorkoutExercise,
    calibration: WorkoutExerciseCalibration,
    equipment: WorkoutEquipmentType,
    microcycle_index: int,
    target_rir: Optional[int],
    weight_rounder: WeightRounder,
    first_microcycle_rir: int,
) -> Tuple[int, float]:
    """
    Calculate the target reps and weight for the first set of a session exercise.

    The base weight is the calibration's target weight at the top of the rep
    band. Reps then depend on the preferred progression type:

    Rep progression: reps = band max - target RIR, so reps climb as RIR falls
    over the mesocycle, kept within the band.

    Load progression: reps stay at band max - first microcycle RIR. Each
    microcycle after the first raises the weight to the lightest option at or
    above +2%. When no heavier option exists, 2 reps are added instead
    (capped at the band max). Equipment without options gets a raw +2%.

    The weight is finally rounded to a loadable option, preferring lighter.
    With no options at all it stays unrounded.

    Args:
        exercise: The exercise definition
        calibration: The calibration the 1RM basis comes from
        equipment: The exercise's equipment type
        microcycle_index: Zero-based position of the microcycle in the mesocycle
        target_rir: Target RIR for the microcycle, None to use first_microcycle_rir
        weight_rounder: Rounds weights to loadable options
        first_microcycle_rir: RIR of the first microcycle of the mesocycle

    Returns:
        Tuple of (target reps, target weight)
    """
    rep_range = get_rep_range_values(exercise.rep_range)
    rir = first_microcycle_rir if target_rir is None else target_rir

    target_weight = target_weight_for_reps(calibration, rep_range.max)

    if exercise.preferred_progression_type == ExerciseProgressionType.LOAD:
        target_reps = rep_range.max - first_microcycle_rir
        for _ in range(max(microcycle_index, 0)):
            increased = target_weight * LOAD_STEP_FACTOR
            if not equipment.weight_options:
                target_weight = increased
                continue
            next_weight = weight_rounder.find_nearest_weight(
                equipment, increased, RoundingDirection.UP
            )
            if next_weight is None:
                # Out of heavier options, progress reps instead
                target_reps = min(target_reps + REPS_PER_LOAD_FALLBACK, rep_range.max)
            else:
                target_weight = next_weight
    else:
        target_reps = rep_range.max - rir

    target_reps = max(min(target_reps, rep_range.max), rep_range.min)

    rounded = weight_rounder.find_nearest_weight(
        equipment, target_weight, RoundingDirection.PREFER_DOWN
    )
    if rounded is not None:
        target_weight = rounded

    logger.debug(
        f"First set for {exercise.exercise_name} (microcycle {microcycle_index}): "
        f"{target_reps} reps @ {target_weight}"
    )
    return target_reps, target_weight
