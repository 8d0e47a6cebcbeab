"""
Collaborator Interfaces (Ports) for the mesocycle planner.

The planner consumes two collaborators it does not own: fatigue scoring and
equipment-based weight rounding. Default adapters are provided in
mesoplan.core; tests substitute in-memory fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the planner needs)
- Adapters: Concrete implementations (how it's provided)

Usage:
    from mesoplan.application.ports import FatigueScorer

    def distribute(exercises, fatigue_scorer: FatigueScorer):
        return sorted(exercises, key=fatigue_scorer.get_fatigue_score, reverse=True)
"""

from mesoplan.application.ports.fatigue_scorer import FatigueScorer
from mesoplan.application.ports.weight_rounder import RoundingDirection, WeightRounder

__all__ = [
    "FatigueScorer",
    "WeightRounder",
    "RoundingDirection",
]
