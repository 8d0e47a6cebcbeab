"""
Exercise definitions and strength calibrations.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from mesoplan.domain.models.scores import Fatigue


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExerciseRepRange(str, Enum):
    """
    Rep-range class of an exercise.

    - Heavy: normally done in the 5-15 rep range
    - Medium: normally done in the 10-20 rep range (the most common)
    - Light: normally done in the 15-30 rep range
    """

    HEAVY = "Heavy"
    MEDIUM = "Medium"
    LIGHT = "Light"


class ExerciseProgressionType(str, Enum):
    """
    Preferred progression type of an exercise.

    - Rep: add reps week over week, weight held constant
    - Load: add the smallest loadable increment (or 2%, whichever is greater)
    """

    REP = "Rep"
    LOAD = "Load"


class ExercisePropertyType(str, Enum):
    """Types of custom exercise properties."""

    WEIGHT = "Weight"
    TEXT = "Text"
    YES_NO = "Yes/No"
    NUMBER = "Number"


class ExerciseProperty(BaseModel):
    """A custom property tracked for an exercise (e.g. band color, seat height)."""

    name: str = Field(..., min_length=1)
    type: ExercisePropertyType


class WorkoutExercise(BaseModel):
    """
    A specific variation of an exercise.

    This is intentionally very specific: a different grip, tempo or set style
    is its own exercise so that it can be tracked separately, e.g.
    "Barbell Bench Press (Straight Sets)" vs "Barbell Bench Press (Myoreps)".

    The first entry of `primary_muscle_groups` is the canonical grouping key
    used when distributing exercises across sessions.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    exercise_name: str = Field(..., min_length=1)
    workout_equipment_type_id: UUID
    notes: Optional[str] = None
    rest_seconds: Optional[int] = Field(
        default=None, ge=0, description="Recommended rest between sets"
    )
    custom_properties: Optional[List[ExerciseProperty]] = None
    rep_range: ExerciseRepRange
    preferred_progression_type: ExerciseProgressionType = ExerciseProgressionType.REP
    primary_muscle_groups: List[UUID] = Field(default_factory=list)
    secondary_muscle_groups: List[UUID] = Field(default_factory=list)
    initial_fatigue_guess: Fatigue = Field(
        default_factory=Fatigue,
        description="Fatigue guess used for scheduling before empirical data exists",
    )
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)

    @property
    def main_muscle_group_id(self) -> Optional[UUID]:
        """The grouping key for distribution, or None when no primary group is set."""
        return self.primary_muscle_groups[0] if self.primary_muscle_groups else None


class WorkoutExerciseCalibration(BaseModel):
    """
    One strength data point for an exercise.

    Stores the heaviest weight the lifter can handle and the reps performed
    with it near failure. This is the basis for the 1RM estimate.
    Mesocycles reference calibrations by id so that the 1RM basis of a block
    stays frozen even if calibrations are updated later.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    workout_exercise_id: UUID
    exercise_properties: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Snapshot of the exercise custom properties at calibration time",
    )
    reps: int = Field(..., gt=0)
    weight: float = Field(..., ge=0)
    date_recorded: datetime = Field(default_factory=_utcnow)
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)


@dataclass(frozen=True)
class CalibrationExercisePair:
    """A calibration paired with its exercise definition."""

    calibration: WorkoutExerciseCalibration
    exercise: WorkoutExercise
