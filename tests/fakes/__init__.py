"""
Fake Collaborators and Test Data for Testing.

This package provides in-memory fake implementations of the planner's
collaborator ports plus a standard catalog of reference data.

Features:
- Fakes implement the same Protocol interfaces as the default adapters
- Fakes record their calls and support reset() for test isolation
- Factory functions for mesocycles, contexts and records

Usage:
    from tests.fakes import StandardCatalog, create_context

    catalog = StandardCatalog()
    context = create_context(catalog, ["barbell_squat", "dumbbell_curl"])
"""
from tests.fakes.catalog import (
    StandardCatalog,
    create_context,
    create_mesocycle,
    create_microcycle,
    create_session,
    create_session_exercise,
    create_set,
    create_settings,
)
from tests.fakes.ports import FakeFatigueScorer, FakeWeightRounder

__all__ = [
    # Fakes
    "FakeFatigueScorer",
    "FakeWeightRounder",
    # Catalog
    "StandardCatalog",
    # Factory functions
    "create_settings",
    "create_mesocycle",
    "create_context",
    "create_microcycle",
    "create_session",
    "create_session_exercise",
    "create_set",
]
