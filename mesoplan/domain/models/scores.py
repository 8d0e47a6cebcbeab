"""
Subjective stimulus and fatigue scores.

Both are embedded in sessions and session exercises. Every component is an
ordinal 0-3 score that the lifter fills in after training, so any of them
may still be missing when a plan is generated.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Rsm(BaseModel):
    """
    Raw Stimulus Magnitude: how much growth stimulus a session or exercise gave.

    The total RSM is the sum of the three components (0-9).

    Examples:
        >>> rsm = Rsm(mind_muscle_connection=2, pump=3, disruption=1)
    """

    mind_muscle_connection: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = barely aware of target muscles, 3 = tension and burn near the limit",
    )
    pump: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = no pump, 3 = close to maximal pump",
    )
    disruption: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = no soreness or weakness, 3 = much weaker with soreness for days",
    )


class Fatigue(BaseModel):
    """
    Fatigue cost of a session or exercise.

    The total fatigue is the sum of the three components (0-9). It is also
    used on exercises as an initial guess for scheduling before any
    empirical data exists.
    """

    joint_and_tissue_disruption: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = no joint pain, 3 = chronic joint or connective tissue pain",
    )
    perceived_effort: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = very easy, 3 = all-out effort, drained for days",
    )
    unused_muscle_performance: Optional[int] = Field(
        default=None,
        ge=0,
        le=3,
        description="0 = later exercises better than expected, 3 = hugely deteriorated",
    )
