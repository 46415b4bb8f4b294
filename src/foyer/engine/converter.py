"""
Output Converter
================
Flattens a filled grid into a week-grouped Schedule.
"""
from typing import Dict, List, Tuple

from foyer.models.grid import Grid
from foyer.models.schedule import (
    DayRecord,
    FailedTask,
    PlacedTask,
    PlacementResult,
    PlanningWeek,
    Schedule,
    ScheduledEntry,
)
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.engine.converter")


def grid_to_schedule(grid: Grid) -> Schedule:
    """
    Convert the grid into a Schedule.

    Every slot carrying a task gives one entry (a two-slot task gives two).
    Days and entries are grouped by ISO week, weeks sorted by (year, number).
    """
    weeks: Dict[Tuple[int, int], dict] = {}

    for day in grid.days:
        key = (day.iso_year, day.week_number)
        bucket = weeks.setdefault(key, {"start_date": day.date, "days": [], "entries": []})

        for column_key, column in day.columns.items():
            for slot in column.slots:
                if slot.task is not None:
                    bucket["entries"].append(ScheduledEntry(
                        date=day.date,
                        day_name=day.day_name,
                        start_time=slot.start_time,
                        end_time=slot.end_time,
                        task=slot.task,
                        column=column_key,
                    ))
        bucket["days"].append(DayRecord(date=day.date, day_name=day.day_name, week_number=day.week_number))

    # Year first: week 1 of January sorts after week 52/53 of the previous December
    planning_weeks = [
        PlanningWeek(
            week_number=week_number,
            iso_year=iso_year,
            start_date=data["start_date"],
            days=data["days"],
            entries=data["entries"],
        )
        for (iso_year, week_number), data in sorted(weeks.items())
    ]
    logger.debug(f"Converted grid to {len(planning_weeks)} weeks, {sum(len(w.entries) for w in planning_weeks)} entries")
    return Schedule(period=grid.period, start_date=grid.start_date, weeks=planning_weeks)


def build_stats(placed: List[PlacedTask], failed: List[FailedTask], total: int) -> PlacementResult:
    """Bundle placement records with the input task count."""
    return PlacementResult(placed=list(placed), failed=list(failed), total=total)
