"""
Mesocycle and microcycle models.

A mesocycle is an organized sequence of microcycles ordered to elicit a set
of training adaptations. A typical mesocycle has two phases:

1. Accumulation: 4-8 microcycles progressing towards maximum recoverable volume
2. Deload: one shorter-stimulus recovery microcycle

A microcycle is the shortest repeated cycle of training that includes all
sessions and rest days, usually (but not always) a week.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CycleType(str, Enum):
    """
    The type of mesocycle.

    - MuscleGain: recommendations tuned for muscle gain
    - Resensitization: maintenance-volume training
    - Cut: fat loss while maintaining muscle
    - FreeForm: no automatic recommendations
    """

    MUSCLE_GAIN = "MuscleGain"
    RESENSITIZATION = "Resensitization"
    CUT = "Cut"
    FREE_FORM = "FreeForm"


class WorkoutMesocycle(BaseModel):
    """
    A training block configuration.

    `calibrated_exercises` locks in which calibrations were used for this
    block, so historical 1RM values remain accurate even if calibrations are
    changed later. The record is read-only to the planner; regenerating a
    plan supersedes it rather than mutating it.

    Examples:
        >>> mesocycle = WorkoutMesocycle(
        ...     user_id=user_id,
        ...     cycle_type=CycleType.MUSCLE_GAIN,
        ...     planned_session_count_per_microcycle=3,
        ...     planned_microcycle_length_in_days=7,
        ...     planned_microcycle_rest_days=[2, 5, 6],
        ...     calibrated_exercises=[c.id for c in calibrations],
        ... )
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    title: Optional[str] = None
    calibrated_exercises: List[UUID] = Field(default_factory=list)
    cycle_type: CycleType
    planned_session_count_per_microcycle: int = Field(..., ge=1)
    planned_microcycle_length_in_days: int = Field(
        ..., ge=1, description="Typically 7 days (one week)"
    )
    planned_microcycle_rest_days: List[int] = Field(
        default_factory=list,
        description="0-based day indices relative to the microcycle start, e.g. [0, 3]",
    )
    planned_microcycle_count: Optional[int] = Field(
        default=None,
        ge=2,
        le=20,
        description="Accumulation plus deload microcycles, typically 5-9",
    )
    completed_date: Optional[datetime] = None
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def validate_plan_shape(self) -> "WorkoutMesocycle":
        """Rest days must fall inside the microcycle and every session needs an exercise."""
        length = self.planned_microcycle_length_in_days
        out_of_range = [d for d in self.planned_microcycle_rest_days if d < 0 or d >= length]
        if out_of_range:
            raise ValueError(
                f"Rest day indices {out_of_range} are outside a {length}-day microcycle"
            )
        if len(self.calibrated_exercises) < self.planned_session_count_per_microcycle:
            raise ValueError(
                "Number of calibrated exercises must be at least equal to planned sessions "
                "per microcycle. Create a slight variation of an existing exercise if needed."
            )
        return self

    @property
    def training_day_count(self) -> int:
        """Number of non-rest days in one microcycle."""
        rest_days = set(self.planned_microcycle_rest_days)
        return sum(1 for day in range(self.planned_microcycle_length_in_days) if day not in rest_days)


class WorkoutMicrocycle(BaseModel):
    """
    A repeatable sub-block of a mesocycle.

    `end_date` is the start of the following microcycle. `session_order` lets
    callers reason about session order before dates are assigned.
    The soreness and performance scores are stored for future auto-regulation.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    workout_mesocycle_id: Optional[UUID] = Field(
        default=None,
        description="Optional because workouts can be tracked outside a mesocycle",
    )
    start_date: datetime
    end_date: datetime
    session_order: List[UUID] = Field(default_factory=list)
    soreness_score: Optional[int] = Field(default=None, ge=0, le=3)
    performance_score: Optional[int] = Field(default=None, ge=0, le=3)
    completed_date: Optional[datetime] = None
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def validate_dates(self) -> "WorkoutMicrocycle":
        """Start date must not be after end date."""
        if self.start_date > self.end_date:
            raise ValueError("Microcycle start_date must be on or before end_date")
        return self
