"""
Availability Matcher
====================
First-fit search for a position where a task can be written into the grid.

The sweep walks days forward from a start index (never wrapping), then slots
in column order, and returns the first position that satisfies the time band,
the weekday filter, the consecutive-duration requirement and, for shared
tasks, simultaneous availability in every person column.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional

from foyer.models.grid import Column, Day, Grid
from foyer.models.rules import TIME_BANDS, TimeBands
from foyer.models.task import Task, TimePreference
from foyer.utils.logging_setup import TRACE, get_logger

logger = get_logger("foyer.engine.matcher")


@dataclass
class SearchOptions:
    """Constraints for one slot search."""
    preferred_time: TimePreference = TimePreference.ANY
    preferred_days: List[str] = field(default_factory=list)  # empty = any weekday
    start_day_index: int = 0
    pinned: bool = False  # only look at start_day_index
    time_bands: TimeBands = TIME_BANDS


@dataclass
class SlotMatch:
    """Where a task fits."""
    day_index: int
    slot_index: int
    slots_needed: int
    day: Day

    def __repr__(self):
        return f"SlotMatch(day={self.day_index} {self.day.day_name}, slot={self.slot_index}, n={self.slots_needed})"


def slots_needed(task: Task, slot_duration: int) -> int:
    """Number of consecutive slots a task occupies."""
    return max(1, math.ceil(task.duration / slot_duration))


def matches_time_preference(start_minute: int, preference: TimePreference, bands: TimeBands = TIME_BANDS) -> bool:
    """Check a slot start against the morning/afternoon/evening bands."""
    if preference == TimePreference.ANY:
        return True

    hour = start_minute // 60
    if preference == TimePreference.MORNING:
        return bands.morning_start <= hour < bands.lunch_start
    if preference == TimePreference.AFTERNOON:
        return bands.afternoon_start <= hour < bands.evening_end
    if preference == TimePreference.EVENING:
        return hour >= bands.evening_end
    return True


def all_persons_free(grid: Grid, day: Day, slot_index: int) -> bool:
    """True if slot_index is free in every person column of the day."""
    for person in grid.persons:
        column = day.columns.get(person.id)
        if column is None or column.is_day_off:
            return False
        if slot_index >= len(column.slots) or not column.slots[slot_index].is_free:
            return False
    return True


def consecutive_free(column: Column, start_index: int, needed: int) -> bool:
    """True if `needed` slots from start_index are all free in the column."""
    if start_index + needed > len(column.slots):
        return False
    return all(column.slots[start_index + i].is_free for i in range(needed))


def find_available_slot(
    grid: Grid,
    task: Task,
    options: Optional[SearchOptions] = None,
) -> Optional[SlotMatch]:
    """
    Find the first position where the task fits.

    Args:
        grid: Grid being filled
        task: Task to place
        options: Time band, weekday filter and day window

    Returns:
        SlotMatch, or None when no day in the window can take the task
    """
    options = options or SearchOptions(time_bands=grid.time_bands)
    needed = slots_needed(task, grid.slot_duration)
    target = task.target_column

    if options.pinned:
        day_range = range(options.start_day_index, min(options.start_day_index + 1, len(grid.days)))
    else:
        day_range = range(options.start_day_index, len(grid.days))

    for day_idx in day_range:
        day = grid.days[day_idx]

        if options.preferred_days and day.day_name not in options.preferred_days:
            continue

        column = day.columns.get(target)
        if column is None:
            continue
        if column.is_day_off:
            continue

        for slot_idx, slot in enumerate(column.slots):
            if not matches_time_preference(slot.start, options.preferred_time, options.time_bands):
                continue
            if not slot.is_free:
                continue
            if task.is_shared and not all_persons_free(grid, day, slot_idx):
                continue
            if needed > 1 and not consecutive_free(column, slot_idx, needed):
                continue

            match = SlotMatch(day_index=day_idx, slot_index=slot_idx, slots_needed=needed, day=day)
            logger.log(TRACE, f"{task.name}: {match}")
            return match

    return None
