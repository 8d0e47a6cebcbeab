"""
Shared planning context for one mesocycle generation run.

The context keeps the pipeline (mesocycle -> microcycle -> session -> set)
from threading the same lookups through every function. It holds:

- id-keyed lookups for calibrations, exercises, equipment, sessions and
  session exercises
- the planned session -> exercise-pair matrix and the maps derived from it
- accumulators of the records created in this run

One instance belongs to one run. Do not share it between concurrent runs.
"""

import logging
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from mesoplan.application.exceptions import PlanPreconditionError
from mesoplan.application.ports import FatigueScorer, WeightRounder
from mesoplan.core.equipment_service import EquipmentWeightRounder
from mesoplan.core.exercise_service import InitialGuessFatigueScorer
from mesoplan.domain.models import (
    CalibrationExercisePair,
    MesocyclePlan,
    WorkoutEquipmentType,
    WorkoutExercise,
    WorkoutExerciseCalibration,
    WorkoutMesocycle,
    WorkoutMicrocycle,
    WorkoutSession,
    WorkoutSessionExercise,
    WorkoutSet,
)
from mesoplan.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _referenced_calibrations(
    mesocycle: WorkoutMesocycle,
    calibrations: Sequence[WorkoutExerciseCalibration],
) -> Dict[UUID, WorkoutExerciseCalibration]:
    """
    Calibrations the mesocycle references, keyed by id in input order.

    Raises:
        PlanPreconditionError: If a referenced calibration is missing
    """
    supplied = {c.id: c for c in calibrations}
    for calibration_id in mesocycle.calibrated_exercises:
        if calibration_id not in supplied:
            raise PlanPreconditionError(
                f"Calibration {calibration_id} referenced by mesocycle {mesocycle.id} not found",
                invariant="calibrated_exercise_exists",
                ref_id=calibration_id,
            )

    referenced = set(mesocycle.calibrated_exercises)
    ignored = [calibration_id for calibration_id in supplied if calibration_id not in referenced]
    if ignored:
        logger.warning(
            f"Ignoring {len(ignored)} calibrations not referenced by mesocycle {mesocycle.id}"
        )
    return {
        calibration_id: calibration
        for calibration_id, calibration in supplied.items()
        if calibration_id in referenced
    }


class MesocyclePlanContext:
    """
    Mutable state threaded through a mesocycle generation run.

    Existing records (for regeneration) are loaded into the same lookups as
    records created during the run, so later stages see one consistent view.

    Lifecycle:
        1. Construct with the mesocycle and reference data
        2. set_planned_session_exercise_pairs() with the distribution result
        3. add_microcycle() and schedule each microcycle
        4. Persist the *_to_create accumulators (or call to_plan())

    Example:
        >>> context = MesocyclePlanContext(mesocycle, calibrations, exercises, equipment_types)
        >>> pairs = distribute_exercises_across_sessions(3, context.calibration_map, context.exercise_map)
        >>> context.set_planned_session_exercise_pairs(pairs)
    """

    def __init__(
        self,
        mesocycle: WorkoutMesocycle,
        calibrations: Sequence[WorkoutExerciseCalibration],
        exercises: Sequence[WorkoutExercise],
        equipment_types: Sequence[WorkoutEquipmentType],
        existing_microcycles: Optional[Sequence[WorkoutMicrocycle]] = None,
        existing_sessions: Optional[Sequence[WorkoutSession]] = None,
        existing_session_exercises: Optional[Sequence[WorkoutSessionExercise]] = None,
        existing_sets: Optional[Sequence[WorkoutSet]] = None,
        fatigue_scorer: Optional[FatigueScorer] = None,
        weight_rounder: Optional[WeightRounder] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Build the lookups for a generation run.

        Args:
            mesocycle: The mesocycle being planned
            calibrations: Calibrations referenced by the mesocycle. Calibrations
                not listed in mesocycle.calibrated_exercises are left out.
            exercises: Exercise definitions for those calibrations
            equipment_types: All equipment types the exercises may use
            existing_microcycles: Microcycles already generated (regeneration only)
            existing_sessions: Sessions already generated
            existing_session_exercises: Session exercises already generated
            existing_sets: Sets already generated. Accepted alongside the other
                existing records; set history is read through session exercises.
            fatigue_scorer: Fatigue scoring collaborator (defaults to initial guesses)
            weight_rounder: Weight rounding collaborator (defaults to equipment options)
            settings: Planner settings (defaults to get_settings())

        Raises:
            PlanPreconditionError: If a calibrated exercise id of the mesocycle
                has no matching calibration
        """
        self.mesocycle = mesocycle
        self.settings = settings or get_settings()
        self.fatigue_scorer: FatigueScorer = fatigue_scorer or InitialGuessFatigueScorer()
        self.weight_rounder: WeightRounder = weight_rounder or EquipmentWeightRounder()

        self.calibration_map: Dict[UUID, WorkoutExerciseCalibration] = _referenced_calibrations(
            mesocycle, calibrations
        )
        self.exercise_map: Dict[UUID, WorkoutExercise] = {e.id: e for e in exercises}
        self.equipment_map: Dict[UUID, WorkoutEquipmentType] = {
            et.id: et for et in equipment_types
        }
        self.session_map: Dict[UUID, WorkoutSession] = {
            s.id: s for s in (existing_sessions or [])
        }
        self.session_exercise_map: Dict[UUID, WorkoutSessionExercise] = {
            se.id: se for se in (existing_session_exercises or [])
        }

        self.existing_microcycles: List[WorkoutMicrocycle] = list(existing_microcycles or [])

        # Only this mesocycle's microcycles, oldest first
        self.microcycles_in_order: List[WorkoutMicrocycle] = sorted(
            (m for m in self.existing_microcycles if m.workout_mesocycle_id == mesocycle.id),
            key=lambda m: m.start_date,
        )

        self.microcycles_to_create: List[WorkoutMicrocycle] = []
        self.sessions_to_create: List[WorkoutSession] = []
        self.session_exercises_to_create: List[WorkoutSessionExercise] = []
        self.sets_to_create: List[WorkoutSet] = []

        # Derived by set_planned_session_exercise_pairs()
        self.planned_session_exercise_pairs: Optional[List[List[CalibrationExercisePair]]] = None
        self.muscle_group_to_exercise_pairs: Optional[Dict[UUID, List[CalibrationExercisePair]]] = None
        self.exercise_id_to_session_index: Optional[Dict[UUID, int]] = None

        logger.debug(
            f"Plan context for mesocycle {mesocycle.id}: {len(self.calibration_map)} calibrations, "
            f"{len(self.exercise_map)} exercises, {len(self.microcycles_in_order)} existing microcycles"
        )

    @property
    def first_microcycle_rir(self) -> int:
        """Target RIR of the first microcycle of every mesocycle."""
        return self.settings.first_microcycle_rir

    # =========================================================================
    # Mutators
    # =========================================================================

    def add_microcycle(self, microcycle: WorkoutMicrocycle) -> None:
        """Queue a microcycle for creation and append it to the ordered history."""
        self.microcycles_to_create.append(microcycle)
        self.microcycles_in_order.append(microcycle)

    def add_session(self, session: WorkoutSession) -> None:
        """Queue a session for creation and make it resolvable by id."""
        self.sessions_to_create.append(session)
        self.session_map[session.id] = session

    def add_session_exercise(self, session_exercise: WorkoutSessionExercise) -> None:
        """Queue a session exercise for creation and make it resolvable by id."""
        self.session_exercises_to_create.append(session_exercise)
        self.session_exercise_map[session_exercise.id] = session_exercise

    def add_sets(self, sets: Sequence[WorkoutSet]) -> None:
        """Queue sets for creation."""
        self.sets_to_create.extend(sets)

    def set_planned_session_exercise_pairs(
        self, planned_pairs: List[List[CalibrationExercisePair]]
    ) -> None:
        """
        Store the session -> exercise-pair plan and derive its lookups.

        In one pass over sessions in order (and exercises within a session in
        order) this builds:
        - muscle_group_to_exercise_pairs: main muscle group -> ordered pairs
        - exercise_id_to_session_index: exercise id -> session index

        Args:
            planned_pairs: One ordered list of pairs per session

        Raises:
            PlanPreconditionError: If an exercise has no primary muscle group
        """
        muscle_group_map: Dict[UUID, List[CalibrationExercisePair]] = {}
        session_index_map: Dict[UUID, int] = {}

        for session_index, session_pairs in enumerate(planned_pairs):
            for pair in session_pairs:
                muscle_group_id = pair.exercise.main_muscle_group_id
                if muscle_group_id is None:
                    raise PlanPreconditionError(
                        f"Exercise {pair.exercise.id} ({pair.exercise.exercise_name}) "
                        "has no primary muscle group",
                        invariant="exercise_has_primary_muscle_group",
                        ref_id=pair.exercise.id,
                    )
                muscle_group_map.setdefault(muscle_group_id, []).append(pair)
                session_index_map[pair.exercise.id] = session_index

        self.planned_session_exercise_pairs = planned_pairs
        self.muscle_group_to_exercise_pairs = muscle_group_map
        self.exercise_id_to_session_index = session_index_map

        logger.debug(
            f"Planned {len(planned_pairs)} sessions across {len(muscle_group_map)} muscle groups"
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_microcycle_position(self, microcycle: WorkoutMicrocycle) -> int:
        """
        Zero-based position of a microcycle within the whole mesocycle.

        Existing microcycles count, so the first microcycle created during a
        regeneration run is not position 0.

        Raises:
            PlanPreconditionError: If the microcycle is not part of this context
        """
        for position, candidate in enumerate(self.microcycles_in_order):
            if candidate.id == microcycle.id:
                return position
        raise PlanPreconditionError(
            f"Microcycle {microcycle.id} does not belong to mesocycle {self.mesocycle.id}",
            invariant="microcycle_in_context",
            ref_id=microcycle.id,
        )

    def to_plan(self) -> MesocyclePlan:
        """Bundle the accumulators into a MesocyclePlan."""
        return MesocyclePlan(
            microcycles=list(self.microcycles_to_create),
            sessions=list(self.sessions_to_create),
            session_exercises=list(self.session_exercises_to_create),
            sets=list(self.sets_to_create),
        )
