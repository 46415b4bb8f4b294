"""
Placement Engine
================
Writes tasks into the grid, one recurrence class at a time.

Pass order:
    1. daily     one pinned attempt per day
    2. weekly    one attempt over the whole period
    3. once      one attempt over the whole period
    4. custom    one attempt per preferred weekday (or a single attempt)
    5. flexible  direct fill of every remaining gap in person columns

Every pass goes through `attempt_placement`; only the day window and weekday
filter differ.
"""
from typing import Dict, List, Optional, Sequence

from foyer.models.grid import Grid
from foyer.models.rules import COMMON_COLUMN, FAILURE_NO_SLOT
from foyer.models.schedule import FailedTask, PlacedTask, PlacementResult
from foyer.models.task import Recurrence, Task
from foyer.utils.logging_setup import PlacementLogger, get_logger

from .matcher import SearchOptions, SlotMatch, find_available_slot

logger = get_logger("foyer.engine.placement")
plog = PlacementLogger("foyer.engine.placement")


def sort_tasks(tasks: Sequence[Task]) -> List[Task]:
    """
    Order tasks for placement.

    Priority ascending, then shared before personal, then longest first.
    Remaining ties keep input order.
    """
    return sorted(tasks, key=lambda t: (t.priority, 0 if t.is_shared else 1, -t.duration))


def place_task(grid: Grid, task: Task, match: SlotMatch) -> PlacedTask:
    """
    Write a task into the grid at a matched position.

    The target column gets the task on `slots_needed` slots. A shared task also
    blocks the same range in every person column, without putting the task
    there.
    """
    day = grid.days[match.day_index]
    column = day.columns[task.target_column]
    end_index = min(match.slot_index + match.slots_needed, len(column.slots))

    for i in range(match.slot_index, end_index):
        column.slots[i].task = task
        column.slots[i].available = False

    if task.is_shared:
        for person_column in day.person_columns():
            for i in range(match.slot_index, min(end_index, len(person_column.slots))):
                person_column.slots[i].available = False
                person_column.slots[i].blocked_by = COMMON_COLUMN

    first = column.slots[match.slot_index]
    return PlacedTask(
        task=task,
        date=day.date,
        day_index=match.day_index,
        slot_index=match.slot_index,
        start_time=first.start_time,
        end_time=column.slots[end_index - 1].end_time,
        column=column.key,
    )


def attempt_placement(
    grid: Grid,
    task: Task,
    weekdays: Optional[List[str]] = None,
    start_day_index: int = 0,
    pinned: bool = False,
) -> Optional[PlacedTask]:
    """
    Search for a slot and place the task there.

    Args:
        grid: Grid being filled
        task: Task to place
        weekdays: Allowed weekday names (None or empty = any)
        start_day_index: First day of the search window
        pinned: Restrict the search to start_day_index only

    Returns:
        The placement record, or None if nothing fits
    """
    options = SearchOptions(
        preferred_time=task.preferred_time,
        preferred_days=list(weekdays or []),
        start_day_index=start_day_index,
        pinned=pinned,
        time_bands=grid.time_bands,
    )
    match = find_available_slot(grid, task, options)
    if match is None:
        return None
    return place_task(grid, task, match)


def _record_single(grid: Grid, task: Task, weekdays: List[str], result: PlacementResult) -> None:
    placed = attempt_placement(grid, task, weekdays)
    if placed:
        result.placed.append(placed)
    else:
        logger.warning(f"No slot for '{task.name}' ({task.recurrence.value}, {task.duration} min)")
        result.failed.append(FailedTask(task=task, reason=FAILURE_NO_SLOT))


def place_daily_tasks(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> None:
    """One attempt per day; days that cannot take the task are skipped silently."""
    for task in tasks:
        hits = 0
        for day_index in range(len(grid.days)):
            placed = attempt_placement(grid, task, task.preferred_days, start_day_index=day_index, pinned=True)
            if placed:
                result.placed.append(placed)
                hits += 1
            else:
                logger.debug(f"'{task.name}' not placed on {grid.days[day_index].date}")
        plog.detail(task.name, f"{hits}/{len(grid.days)} days")


def place_weekly_tasks(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> None:
    for task in tasks:
        _record_single(grid, task, task.preferred_days, result)


def place_once_tasks(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> None:
    for task in tasks:
        _record_single(grid, task, task.preferred_days, result)


def place_custom_tasks(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> None:
    """One attempt per preferred weekday; without preferred days, behave like once."""
    for task in tasks:
        if not task.preferred_days:
            _record_single(grid, task, [], result)
            continue
        for weekday in task.preferred_days:
            placed = attempt_placement(grid, task, [weekday])
            if placed:
                result.placed.append(placed)
            else:
                logger.debug(f"'{task.name}' not placed on a {weekday}")


def fill_with_flexible(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> None:
    """
    Fill every free, unblocked slot of every person column.

    Each person's first flexible task takes all of that person's gaps; persons
    without one fall back to the first shared flexible task. The common column
    is never filled.
    """
    if not tasks:
        return

    by_owner: Dict[str, Task] = {}
    for task in tasks:
        owner = COMMON_COLUMN if task.is_shared else task.assigned_to
        by_owner.setdefault(owner, task)

    filled = 0
    for day_index, day in enumerate(grid.days):
        for column in day.person_columns():
            if column.is_day_off:
                continue
            filler = by_owner.get(column.key) or by_owner.get(COMMON_COLUMN)
            if filler is None:
                continue
            for slot_index, slot in enumerate(column.slots):
                if slot.is_free and not slot.blocked_by:
                    slot.task = filler
                    slot.available = False
                    result.placed.append(PlacedTask(
                        task=filler,
                        date=day.date,
                        day_index=day_index,
                        slot_index=slot_index,
                        start_time=slot.start_time,
                        end_time=slot.end_time,
                        column=column.key,
                    ))
                    filled += 1
    plog.detail("flexible slots filled", filled)


PASSES = [
    (Recurrence.DAILY, place_daily_tasks),
    (Recurrence.WEEKLY, place_weekly_tasks),
    (Recurrence.ONCE, place_once_tasks),
    (Recurrence.CUSTOM, place_custom_tasks),
    (Recurrence.FLEXIBLE, fill_with_flexible),
]


def run_passes(grid: Grid, tasks: Sequence[Task], result: PlacementResult) -> PlacementResult:
    """
    Run every placement pass over the grid, in order.

    Args:
        grid: Freshly built grid, mutated in place
        tasks: Normalized tasks
        result: Accumulator for placed and failed records

    Returns:
        The same result, filled
    """
    ordered = sort_tasks(tasks)
    plog.phase("Placement")
    for recurrence, place in PASSES:
        batch = [t for t in ordered if t.recurrence == recurrence]
        if not batch:
            continue
        before = len(result.placed)
        plog.enter(f"{recurrence.value} pass ({len(batch)} tasks)")
        place(grid, batch, result)
        plog.exit(f"{recurrence.value}: {len(result.placed) - before} placements")
    plog.step(f"{result.placed_count} placements, {result.failed_count} failures")
    return result
