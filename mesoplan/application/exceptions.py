"""
Application-layer exceptions.

Both kinds are fatal: they signal caller-side data-integrity or programming
errors, never transient conditions, so nothing in the planner retries them.
Each carries the name of the violated invariant so callers can react to it
without parsing messages.
"""

from typing import Optional
from uuid import UUID


class PlanningError(Exception):
    """Base error for mesocycle planning.

    Attributes:
        invariant: Machine-readable name of the violated invariant
        ref_id: Id of the offending record, when there is one
    """

    def __init__(self, message: str, invariant: str, ref_id: Optional[UUID] = None):
        super().__init__(message)
        self.invariant = invariant
        self.ref_id = ref_id


class PlanPreconditionError(PlanningError):
    """A required pipeline step was skipped or a referenced id does not resolve.

    Raised, for example, when sessions are scheduled before exercises were
    distributed, or when a calibration points at an unknown exercise.
    """

    pass


class InvalidPlanConfigurationError(PlanningError):
    """The mesocycle configuration cannot produce a valid plan.

    Raised for non-positive session or set counts, rest days outside the
    microcycle, or session overflow under the "error" policy.
    """

    pass
