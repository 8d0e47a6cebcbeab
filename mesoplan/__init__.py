"""
mesoplan: periodized-training mesocycle planner.

Turns strength calibrations and a mesocycle configuration into microcycles,
sessions, session exercises and set prescriptions, including a deload
microcycle. See mesoplan.core.mesocycle_service.generate_mesocycle_plan.
"""

__version__ = "0.1.0"
