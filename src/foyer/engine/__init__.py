# foyer/engine - Automatic slot placement
from .converter import build_stats, grid_to_schedule
from .generate import generate, generate_from_raw
from .grid import build_grid, month_dates, period_dates, week_dates
from .matcher import SearchOptions, SlotMatch, find_available_slot, matches_time_preference
from .normalize import (
    PlanningInputError,
    check_config,
    normalize_config,
    normalize_inputs,
    normalize_milestone,
    normalize_milestones,
    normalize_person,
    normalize_task,
)
from .placement import attempt_placement, place_task, run_passes, sort_tasks
from .template import build_day_slots

__all__ = [
    "generate",
    "generate_from_raw",
    "build_day_slots",
    "build_grid",
    "week_dates",
    "month_dates",
    "period_dates",
    "find_available_slot",
    "matches_time_preference",
    "SearchOptions",
    "SlotMatch",
    "place_task",
    "attempt_placement",
    "sort_tasks",
    "run_passes",
    "grid_to_schedule",
    "build_stats",
    "normalize_config",
    "normalize_person",
    "normalize_task",
    "normalize_inputs",
    "normalize_milestone",
    "normalize_milestones",
    "check_config",
    "PlanningInputError",
]
