"""
Calibration math for strength estimates.

- 1RM estimation with the NASM formula
- Target weight for a rep goal, as a percentage of 1RM

All functions are pure and return unrounded values. Rounding to a loadable
weight is the caller's job (see mesoplan.core.equipment_service).
"""

from mesoplan.domain.models import WorkoutExerciseCalibration


# NASM divisor: 1RM = weight * reps / 30.48 + weight
NASM_DIVISOR = 30.48

# Percentage of 1RM for a 5-rep target, and the slope per extra target rep
BASE_TARGET_PERCENTAGE = 30.0
BASE_TARGET_REPS = 5
PERCENTAGE_PER_REP = 2.2


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the NASM formula.

    Formula: 1RM = (weight * reps / 30.48) + weight

    Args:
        weight: Weight lifted
        reps: Number of reps performed near failure

    Returns:
        Estimated 1RM
    """
    return (weight * reps) / NASM_DIVISOR + weight


def estimate_calibration_one_rep_max(calibration: WorkoutExerciseCalibration) -> float:
    """Estimate 1RM from a calibration record."""
    return estimate_one_rep_max(calibration.weight, calibration.reps)


def target_percentage_for_reps(target_reps: int) -> float:
    """
    Percentage of 1RM to load for a target rep count.

    Formula: 30 + (target_reps - 5) * 2.2

    This maps a 5-rep target to 30% and a 30-rep target to 85%, keeping
    training inside the effective 30%-85% of 1RM window.
    """
    return BASE_TARGET_PERCENTAGE + (target_reps - BASE_TARGET_REPS) * PERCENTAGE_PER_REP


def target_weight_for_reps(calibration: WorkoutExerciseCalibration, target_reps: int) -> float:
    """
    Calculate the target weight for a set from a calibration.

    Args:
        calibration: The strength calibration to base the estimate on
        target_reps: Planned reps for the set

    Returns:
        Unrounded target weight
    """
    one_rep_max = estimate_calibration_one_rep_max(calibration)
    return (target_percentage_for_reps(target_reps) / 100) * one_rep_max
