"""Foyer Planner - household chores laid out on a week or month grid."""
from foyer.engine import PlanningInputError, generate, generate_from_raw

__version__ = "0.1.0"

__all__ = ["generate", "generate_from_raw", "PlanningInputError", "__version__"]
