"""
Shared pytest fixtures for planner tests.
"""
import pytest

from mesoplan.settings import get_settings
from tests.fakes import StandardCatalog, create_settings


ALL_EXERCISES = [
    "barbell_squat",
    "barbell_bench_press",
    "incline_bench_press",
    "dumbbell_chest_press",
    "deadlift",
    "dumbbell_lateral_raise",
    "barbell_overhead_press",
    "cable_row",
    "dumbbell_curl",
    "cable_tricep_pushdown",
    "dumbbell_calf_raise",
    "cable_crunch",
]


@pytest.fixture
def catalog():
    """A fresh standard catalog (new ids per test)."""
    return StandardCatalog()


@pytest.fixture
def settings():
    """Default settings, isolated from .env files."""
    return create_settings()


@pytest.fixture
def all_exercise_names():
    """Names of every exercise in the standard catalog."""
    return list(ALL_EXERCISES)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make sure no test sees settings cached by another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
