"""
Planning services for the mesocycle generation pipeline.

Usage:
    from mesoplan.core import MesocyclePlanContext, generate_mesocycle_plan

    context = MesocyclePlanContext(mesocycle, calibrations, exercises, equipment_types)
    plan = generate_mesocycle_plan(context)
"""

from mesoplan.core.calibration_service import (
    estimate_calibration_one_rep_max,
    estimate_one_rep_max,
    target_percentage_for_reps,
    target_weight_for_reps,
)
from mesoplan.core.distribution_service import distribute_exercises_across_sessions
from mesoplan.core.mesocycle_service import generate_mesocycle_plan
from mesoplan.core.microcycle_service import generate_sessions_for_microcycle, plan_session_dates
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.core.set_service import generate_sets_for_session_exercise
from mesoplan.core.sfr_service import (
    StimulusFatigueSummary,
    aggregate_session,
    aggregate_session_exercise,
    get_sfr,
)

__all__ = [
    # Calibration
    "estimate_one_rep_max",
    "estimate_calibration_one_rep_max",
    "target_percentage_for_reps",
    "target_weight_for_reps",
    # Pipeline
    "MesocyclePlanContext",
    "distribute_exercises_across_sessions",
    "generate_sessions_for_microcycle",
    "plan_session_dates",
    "generate_sets_for_session_exercise",
    "generate_mesocycle_plan",
    # Aggregation
    "StimulusFatigueSummary",
    "aggregate_session",
    "aggregate_session_exercise",
    "get_sfr",
]
