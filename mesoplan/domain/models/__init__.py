"""
Domain models for the mesocycle planner.

These models are pure records, independent of persistence and transport.
The planner consumes lists of them and emits lists of new ones.

- WorkoutMesocycle / WorkoutMicrocycle: the training block and its sub-blocks
- WorkoutSession / WorkoutSessionExercise / WorkoutSet: the generated workouts
- WorkoutExercise / WorkoutExerciseCalibration: exercise definitions and strength data
- WorkoutEquipmentType / WorkoutMuscleGroup: reference data
- Rsm / Fatigue: subjective stimulus and fatigue scores

Usage:
    >>> from mesoplan.domain.models import WorkoutMesocycle, CycleType

    >>> mesocycle = WorkoutMesocycle.model_validate_json(json_str)
    >>> json_str = mesocycle.model_dump_json(indent=2)
"""

from mesoplan.domain.models.cycle import CycleType, WorkoutMesocycle, WorkoutMicrocycle
from mesoplan.domain.models.equipment import WorkoutEquipmentType, WorkoutMuscleGroup
from mesoplan.domain.models.exercise import (
    CalibrationExercisePair,
    ExerciseProgressionType,
    ExerciseProperty,
    ExercisePropertyType,
    ExerciseRepRange,
    WorkoutExercise,
    WorkoutExerciseCalibration,
)
from mesoplan.domain.models.plan import MesocyclePlan, MesocyclePlanRequest
from mesoplan.domain.models.scores import Fatigue, Rsm
from mesoplan.domain.models.session import WorkoutSession, WorkoutSessionExercise, WorkoutSet

__all__ = [
    # Cycles
    "WorkoutMesocycle",
    "WorkoutMicrocycle",
    "CycleType",
    # Sessions
    "WorkoutSession",
    "WorkoutSessionExercise",
    "WorkoutSet",
    # Exercises
    "WorkoutExercise",
    "WorkoutExerciseCalibration",
    "CalibrationExercisePair",
    "ExerciseRepRange",
    "ExerciseProgressionType",
    "ExerciseProperty",
    "ExercisePropertyType",
    # Reference data
    "WorkoutEquipmentType",
    "WorkoutMuscleGroup",
    # Scores
    "Rsm",
    "Fatigue",
    # Run bundles
    "MesocyclePlanRequest",
    "MesocyclePlan",
]
