"""
Input and output bundles for a mesocycle generation run.
"""

from typing import List

from pydantic import BaseModel, Field

from mesoplan.domain.models.cycle import WorkoutMesocycle, WorkoutMicrocycle
from mesoplan.domain.models.equipment import WorkoutEquipmentType
from mesoplan.domain.models.exercise import WorkoutExercise, WorkoutExerciseCalibration
from mesoplan.domain.models.session import WorkoutSession, WorkoutSessionExercise, WorkoutSet


class MesocyclePlanRequest(BaseModel):
    """
    Everything the planner needs, already loaded by the caller.

    The existing_* lists are only needed when regenerating a mesocycle that
    already has microcycles.
    """

    mesocycle: WorkoutMesocycle
    calibrations: List[WorkoutExerciseCalibration]
    exercises: List[WorkoutExercise]
    equipment_types: List[WorkoutEquipmentType]
    existing_microcycles: List[WorkoutMicrocycle] = Field(default_factory=list)
    existing_sessions: List[WorkoutSession] = Field(default_factory=list)
    existing_session_exercises: List[WorkoutSessionExercise] = Field(default_factory=list)
    existing_sets: List[WorkoutSet] = Field(default_factory=list)


class MesocyclePlan(BaseModel):
    """The records created by one generation run, ready for insert-many persistence."""

    microcycles: List[WorkoutMicrocycle] = Field(default_factory=list)
    sessions: List[WorkoutSession] = Field(default_factory=list)
    session_exercises: List[WorkoutSessionExercise] = Field(default_factory=list)
    sets: List[WorkoutSet] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the run produced no records."""
        return not (self.microcycles or self.sessions or self.session_exercises or self.sets)
