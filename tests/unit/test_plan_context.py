"""
Unit tests for MesocyclePlanContext.
"""
from datetime import datetime

import pytest

from mesoplan.application.exceptions import PlanPreconditionError
from mesoplan.core.distribution_service import distribute_exercises_across_sessions
from mesoplan.core.equipment_service import EquipmentWeightRounder
from mesoplan.core.exercise_service import InitialGuessFatigueScorer
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.domain.models import CalibrationExercisePair, MesocyclePlan
from tests.fakes import (
    FakeFatigueScorer,
    create_context,
    create_mesocycle,
    create_microcycle,
    create_session,
    create_session_exercise,
    create_set,
    create_settings,
)


NAMES = ["barbell_squat", "barbell_bench_press", "dumbbell_curl"]


@pytest.mark.unit
class TestContextConstruction:
    """Lookups and defaults built on construction."""

    def test_builds_lookup_maps(self, catalog):
        context = create_context(catalog, NAMES)

        assert set(context.calibration_map) == {catalog.calibrations[n].id for n in NAMES}
        assert set(context.exercise_map) == {catalog.exercises[n].id for n in NAMES}
        assert set(context.equipment_map) == {e.id for e in catalog.equipment.values()}
        assert context.session_map == {}
        assert context.session_exercise_map == {}

    def test_accumulators_start_empty(self, catalog):
        context = create_context(catalog, NAMES)

        assert context.microcycles_to_create == []
        assert context.sessions_to_create == []
        assert context.session_exercises_to_create == []
        assert context.sets_to_create == []
        assert context.to_plan().is_empty

    def test_plan_not_derived_yet(self, catalog):
        context = create_context(catalog, NAMES)

        assert context.planned_session_exercise_pairs is None
        assert context.muscle_group_to_exercise_pairs is None
        assert context.exercise_id_to_session_index is None

    def test_default_collaborators(self, catalog):
        context = create_context(catalog, NAMES)

        assert isinstance(context.fatigue_scorer, InitialGuessFatigueScorer)
        assert isinstance(context.weight_rounder, EquipmentWeightRounder)

    def test_custom_collaborators(self, catalog):
        scorer = FakeFatigueScorer()
        context = create_context(catalog, NAMES, fatigue_scorer=scorer)
        assert context.fatigue_scorer is scorer

    def test_first_microcycle_rir_from_settings(self, catalog):
        context = create_context(catalog, NAMES, settings=create_settings(first_microcycle_rir=3))
        assert context.first_microcycle_rir == 3

    def test_existing_microcycles_filtered_and_sorted(self, catalog):
        mesocycle = create_mesocycle(catalog, NAMES)
        other_mesocycle = create_mesocycle(catalog, NAMES)
        later = create_microcycle(mesocycle, datetime(2024, 1, 8))
        earlier = create_microcycle(mesocycle, datetime(2024, 1, 1))
        foreign = create_microcycle(other_mesocycle, datetime(2023, 12, 25))

        context = create_context(
            catalog, NAMES, mesocycle=mesocycle, existing_microcycles=[later, foreign, earlier]
        )

        assert [m.id for m in context.microcycles_in_order] == [earlier.id, later.id]

    def test_existing_sessions_are_resolvable(self, catalog):
        session = create_session(catalog.user_id)
        session_exercise = create_session_exercise(catalog.user_id, session=session)

        context = create_context(
            catalog,
            NAMES,
            existing_sessions=[session],
            existing_session_exercises=[session_exercise],
        )

        assert context.session_map[session.id] is session
        assert context.session_exercise_map[session_exercise.id] is session_exercise


@pytest.mark.unit
class TestContextMutators:
    """add_* keep accumulators and lookups consistent."""

    def test_add_microcycle(self, catalog):
        context = create_context(catalog, NAMES)
        microcycle = create_microcycle(context.mesocycle, datetime(2024, 1, 1))

        context.add_microcycle(microcycle)

        assert context.microcycles_to_create == [microcycle]
        assert context.microcycles_in_order[-1] is microcycle
        assert context.get_microcycle_position(microcycle) == 0

    def test_position_counts_existing_microcycles(self, catalog):
        mesocycle = create_mesocycle(catalog, NAMES)
        existing = create_microcycle(mesocycle, datetime(2024, 1, 1))
        context = create_context(catalog, NAMES, mesocycle=mesocycle, existing_microcycles=[existing])
        new = create_microcycle(mesocycle, datetime(2024, 1, 8))

        context.add_microcycle(new)

        assert context.get_microcycle_position(new) == 1

    def test_position_of_unknown_microcycle(self, catalog):
        context = create_context(catalog, NAMES)
        stranger = create_microcycle(context.mesocycle, datetime(2024, 1, 1))

        with pytest.raises(PlanPreconditionError) as exc_info:
            context.get_microcycle_position(stranger)
        assert exc_info.value.ref_id == stranger.id

    def test_add_session(self, catalog):
        context = create_context(catalog, NAMES)
        session = create_session(catalog.user_id)

        context.add_session(session)

        assert context.sessions_to_create == [session]
        assert context.session_map[session.id] is session

    def test_add_session_exercise(self, catalog):
        context = create_context(catalog, NAMES)
        session_exercise = create_session_exercise(catalog.user_id)

        context.add_session_exercise(session_exercise)

        assert context.session_exercises_to_create == [session_exercise]
        assert context.session_exercise_map[session_exercise.id] is session_exercise

    def test_add_sets(self, catalog):
        context = create_context(catalog, NAMES)
        sets = [create_set(catalog.user_id) for _ in range(3)]

        context.add_sets(sets[:2])
        context.add_sets(sets[2:])

        assert context.sets_to_create == sets

    def test_to_plan(self, catalog):
        context = create_context(catalog, NAMES)
        session = create_session(catalog.user_id)
        context.add_session(session)

        plan = context.to_plan()

        assert isinstance(plan, MesocyclePlan)
        assert plan.sessions == [session]
        assert not plan.is_empty


@pytest.mark.unit
class TestSetPlannedSessionExercisePairs:
    """Deriving the muscle group and session index maps."""

    def test_derives_maps_in_order(self, catalog):
        names = ["barbell_bench_press", "incline_bench_press", "dumbbell_curl"]
        context = create_context(catalog, names)
        bench, incline, curl = (
            CalibrationExercisePair(catalog.calibrations[n], catalog.exercises[n]) for n in names
        )

        context.set_planned_session_exercise_pairs([[curl, incline], [bench]])

        chest_id = catalog.muscle_groups["chest"].id
        biceps_id = catalog.muscle_groups["biceps"].id
        # Sessions in order, exercises in order within each session
        assert context.muscle_group_to_exercise_pairs[chest_id] == [incline, bench]
        assert context.muscle_group_to_exercise_pairs[biceps_id] == [curl]
        assert context.exercise_id_to_session_index == {
            curl.exercise.id: 0,
            incline.exercise.id: 0,
            bench.exercise.id: 1,
        }

    def test_uses_first_primary_muscle_group(self, catalog):
        context = create_context(catalog, ["deadlift"])
        deadlift = CalibrationExercisePair(
            catalog.calibrations["deadlift"], catalog.exercises["deadlift"]
        )

        context.set_planned_session_exercise_pairs([[deadlift]])

        assert list(context.muscle_group_to_exercise_pairs) == [catalog.muscle_groups["back"].id]

    def test_stores_distribution_result(self, catalog):
        context = create_context(catalog, NAMES)
        planned = distribute_exercises_across_sessions(
            3, context.calibration_map, context.exercise_map
        )

        context.set_planned_session_exercise_pairs(planned)

        assert context.planned_session_exercise_pairs is planned

    def test_missing_primary_muscle_group_is_fatal(self, catalog):
        context = create_context(catalog, NAMES)
        orphan = catalog.exercises["dumbbell_curl"].model_copy(update={"primary_muscle_groups": []})
        pair = CalibrationExercisePair(catalog.calibrations["dumbbell_curl"], orphan)

        with pytest.raises(PlanPreconditionError) as exc_info:
            context.set_planned_session_exercise_pairs([[pair]])

        assert exc_info.value.invariant == "exercise_has_primary_muscle_group"
        assert exc_info.value.ref_id == orphan.id
        assert context.planned_session_exercise_pairs is None


@pytest.mark.unit
class TestCalibratedExercises:
    """The mesocycle's calibrated_exercises decide which calibrations are planned."""

    def test_missing_calibration_is_fatal(self, catalog):
        names = ["barbell_squat", "barbell_bench_press", "cable_row"]
        mesocycle = create_mesocycle(catalog, names, session_count=3)

        with pytest.raises(PlanPreconditionError) as exc_info:
            MesocyclePlanContext(
                mesocycle,
                catalog.calibrations_for(["barbell_squat"]),
                catalog.exercises_for(names),
                list(catalog.equipment.values()),
                settings=create_settings(),
            )

        assert exc_info.value.invariant == "calibrated_exercise_exists"
        assert exc_info.value.ref_id == catalog.calibrations["barbell_bench_press"].id

    def test_unreferenced_calibrations_left_out(self, catalog):
        referenced = ["barbell_squat", "barbell_bench_press"]
        supplied = referenced + ["deadlift"]
        mesocycle = create_mesocycle(catalog, referenced, session_count=2)

        context = MesocyclePlanContext(
            mesocycle,
            catalog.calibrations_for(supplied),
            catalog.exercises_for(supplied),
            list(catalog.equipment.values()),
            settings=create_settings(),
        )

        assert list(context.calibration_map) == [
            catalog.calibrations[n].id for n in referenced
        ]
        planned = distribute_exercises_across_sessions(
            2, context.calibration_map, context.exercise_map
        )
        planned_exercise_ids = {pair.exercise.id for pairs in planned for pair in pairs}
        assert catalog.exercises["deadlift"].id not in planned_exercise_ids

    def test_existing_sets_not_queued(self, catalog):
        existing = [create_set(catalog.user_id), create_set(catalog.user_id)]

        context = create_context(catalog, NAMES, existing_sets=existing)

        assert context.sets_to_create == []
        assert context.to_plan().is_empty


@pytest.mark.unit
class TestContextIsolation:
    """Contexts share no state."""

    def test_independent_accumulators(self, catalog):
        mesocycle = create_mesocycle(catalog, NAMES)
        settings = create_settings()
        first = MesocyclePlanContext(
            mesocycle, catalog.calibrations_for(NAMES), catalog.exercises_for(NAMES), [],
            settings=settings,
        )
        second = MesocyclePlanContext(
            mesocycle, catalog.calibrations_for(NAMES), catalog.exercises_for(NAMES), [],
            settings=settings,
        )

        first.add_session(create_session(catalog.user_id))

        assert second.sessions_to_create == []
        assert second.session_map == {}
