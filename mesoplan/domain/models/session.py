"""
Sessions, session exercises and sets.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from mesoplan.domain.models.scores import Fatigue, Rsm


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutSession(BaseModel):
    """
    One scheduled workout occurrence.

    `session_exercise_order` holds WorkoutSessionExercise ids so that queries
    like "last time you did this exercise after these other exercises" stay
    cheap. The stimulus-to-fatigue ratio is derived from `rsm` and `fatigue`,
    see `mesoplan.core.sfr_service`.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    workout_microcycle_id: Optional[UUID] = None
    title: str
    description: Optional[str] = None
    start_time: datetime
    complete: bool = False
    session_exercise_order: List[UUID] = Field(default_factory=list)
    rsm: Optional[Rsm] = None
    fatigue: Optional[Fatigue] = None
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)


class WorkoutSessionExercise(BaseModel):
    """
    Join of one exercise into one session, with its ordered sets.

    Soreness score (0-3):
    - 0: no soreness in the target muscles
    - 1: stiff for a few hours, resolved by the next session
    - 2: DOMS that resolved just in time for the next session
    - 3: DOMS that remained for the next session

    Performance score (0-3):
    - 0: hit target reps with 2+ reps to spare
    - 1: hit target reps with 0-1 reps to spare
    - 2: hit target reps only after the target RIR
    - 3: could not match last week's reps at any RIR
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    workout_session_id: UUID
    workout_exercise_id: UUID
    set_order: List[UUID] = Field(default_factory=list)
    rsm: Optional[Rsm] = None
    fatigue: Optional[Fatigue] = None
    soreness_score: Optional[int] = Field(default=None, ge=0, le=3)
    performance_score: Optional[int] = Field(default=None, ge=0, le=3)
    is_recovery_exercise: bool = Field(
        default=False,
        description="True when volume was cut because of high soreness or low performance",
    )
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)


class WorkoutSet(BaseModel):
    """
    One prescribed set.

    `planned_weight` may be unrounded when the equipment has no loadable
    options. `planned_rir` is None for deload sets, which are not taken close
    to failure.

    Effective sets have 5-30 reps, 0-5 RIR and a weight between 30% and 85%
    of 1RM.
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    workout_exercise_id: UUID
    workout_session_id: UUID
    workout_session_exercise_id: UUID
    planned_reps: Optional[int] = None
    planned_weight: Optional[float] = None
    planned_rir: Optional[int] = None
    actual_reps: Optional[int] = None
    actual_weight: Optional[float] = None
    rir: Optional[int] = None
    exercise_properties: Optional[Dict[str, Any]] = None
    created_date: datetime = Field(default_factory=_utcnow)
    last_updated_date: datetime = Field(default_factory=_utcnow)

    model_config = {
        "frozen": True,  # Prescriptions are never edited once generated
    }
