"""
Unit tests for the mesoplan-plan command line entry point.
"""

import json

import pytest
import yaml

from mesoplan.cli import load_request, main, render_plan
from mesoplan.domain.models import MesocyclePlan, MesocyclePlanRequest
from tests.fakes import create_mesocycle


NAMES = ["barbell_squat", "barbell_bench_press", "dumbbell_curl"]


def build_request(catalog, names=NAMES, exercise_names=None):
    """A plan request for a 3-session, 3-microcycle mesocycle."""
    return MesocyclePlanRequest(
        mesocycle=create_mesocycle(catalog, names, session_count=3, rest_days=[2, 5, 6]),
        calibrations=catalog.calibrations_for(names),
        exercises=catalog.exercises_for(exercise_names or names),
        equipment_types=list(catalog.equipment.values()),
    )


@pytest.fixture
def request_file(tmp_path, catalog):
    path = tmp_path / "request.json"
    path.write_text(build_request(catalog).model_dump_json())
    return path


@pytest.mark.unit
class TestLoadRequest:
    """Tests for load_request."""

    def test_json(self, request_file):
        request = load_request(str(request_file))
        assert len(request.calibrations) == 3

    def test_yaml(self, tmp_path, catalog):
        path = tmp_path / "request.yaml"
        path.write_text(yaml.safe_dump(build_request(catalog).model_dump(mode="json")))

        request = load_request(str(path))

        assert request.mesocycle.planned_microcycle_rest_days == [2, 5, 6]


@pytest.mark.unit
class TestRenderPlan:
    """Tests for render_plan."""

    def test_json(self):
        assert json.loads(render_plan(MesocyclePlan(), "json")) == {
            "microcycles": [],
            "sessions": [],
            "session_exercises": [],
            "sets": [],
        }

    def test_yaml(self):
        assert yaml.safe_load(render_plan(MesocyclePlan(), "yaml"))["sets"] == []


@pytest.mark.unit
class TestMain:
    """End-to-end runs of main()."""

    def test_json_to_stdout(self, request_file, capsys):
        main([str(request_file), "--format", "json", "--start-date", "2024-01-01"])

        output = json.loads(capsys.readouterr().out)
        assert len(output["microcycles"]) == 3
        assert len(output["sessions"]) == 9
        assert output["microcycles"][0]["start_date"].startswith("2024-01-01")

    def test_yaml_to_file(self, request_file, tmp_path):
        output_path = tmp_path / "plan.yaml"

        main([str(request_file), "-o", str(output_path), "--start-date", "2024-01-01"])

        plan = MesocyclePlan.model_validate(yaml.safe_load(output_path.read_text()))
        assert len(plan.microcycles) == 3
        assert plan.sessions[0].title == "Microcycle 1 - Session 1"

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])

        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])

        assert exc_info.value.code == 1
        assert "Invalid input" in capsys.readouterr().err

    def test_invalid_request(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text("{}")

        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])

        assert exc_info.value.code == 1
        assert "Invalid plan request" in capsys.readouterr().err

    def test_planning_error(self, tmp_path, catalog, capsys):
        path = tmp_path / "request.json"
        path.write_text(
            build_request(catalog, exercise_names=["barbell_squat", "barbell_bench_press"])
            .model_dump_json()
        )

        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--start-date", "2024-01-01"])

        assert exc_info.value.code == 1
        assert "[calibration_exercise_exists]" in capsys.readouterr().err
