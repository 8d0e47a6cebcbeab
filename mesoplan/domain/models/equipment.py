"""
Equipment types and muscle groups.

Reference data supplied by the caller. Equipment types are consumed only for
weight rounding; muscle groups are referenced by id from exercises.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutEquipmentType(BaseModel):
    """
    A piece of equipment and the discrete loads it can be set to.

    For fixed weights like dumbbells, `weight_options` lists the available
    weights. For adjustable equipment like barbells it can be generated from
    a minimum (the bar) and an increment, see
    `mesoplan.core.equipment_service.generate_weight_options`.

    Examples:
        >>> barbell = WorkoutEquipmentType(
        ...     user_id=user_id,
        ...     title="Barbell",
        ...     weight_options=[45, 55, 65, 75],
        ... )
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    weight_options: Optional[List[float]] = Field(
        default=None,
        description="Available loads for this equipment",
    )
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)

    @field_validator("weight_options")
    @classmethod
    def validate_weight_options(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        """Weight options cannot be negative."""
        if v is not None and any(weight < 0 for weight in v):
            raise ValueError("Weight options must be non-negative")
        return v


class WorkoutMuscleGroup(BaseModel):
    """A muscle group that exercises can target."""

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)
