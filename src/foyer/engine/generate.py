"""
Planning Generation
===================
Entry point of the engine: build the grid, run the placement passes, convert.

The grid lives only for the duration of one call.
"""
import time
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from foyer.models.config import PlanningConfig
from foyer.models.person import Person
from foyer.models.schedule import PlacementResult, Schedule
from foyer.models.task import Task
from foyer.utils.logging_setup import get_logger

from .converter import build_stats, grid_to_schedule
from .grid import build_grid
from .normalize import check_config, normalize_inputs, require_inputs
from .placement import run_passes

logger = get_logger("foyer.engine.generate")


def generate(
    config: PlanningConfig,
    persons: Sequence[Person],
    tasks: Sequence[Task],
) -> Tuple[Schedule, PlacementResult]:
    """
    Lay tasks out on a week or month grid.

    Args:
        config: Period and day template
        persons: Household members (non-empty)
        tasks: Normalized tasks (non-empty)

    Returns:
        (schedule, stats). Unplaceable tasks are listed in stats.failed.

    Raises:
        PlanningInputError: empty persons or tasks, a reserved person id, or
            a day template the grid cannot be built from
    """
    require_inputs(persons, tasks)
    check_config(config)
    t0 = time.perf_counter()

    grid = build_grid(config, persons)
    working = PlacementResult(total=len(tasks))
    run_passes(grid, tasks, working)

    schedule = grid_to_schedule(grid)
    stats = build_stats(working.placed, working.failed, len(tasks))

    logger.info(
        f"Generated {config.period.value} planning from {config.start_date}: "
        f"{stats.placed_count} placed, {stats.failed_count} failed, "
        f"success {stats.success_rate}% in {time.perf_counter() - t0:.3f}s"
    )
    return schedule, stats


def generate_from_raw(
    config: Union[PlanningConfig, Mapping[str, Any], None],
    persons: Iterable[Union[Person, Mapping[str, Any]]],
    tasks: Iterable[Union[Task, Mapping[str, Any]]],
    today: Optional[date] = None,
) -> Tuple[Schedule, PlacementResult]:
    """Normalize loosely shaped input, then generate."""
    cfg, people, items = normalize_inputs(config, persons, tasks, today=today)
    return generate(cfg, people, items)
