"""
Grid Builder
============
Expands a period into days, each holding one column per person plus the
shared common column, all cloned from the same slot template.
"""
import calendar
from datetime import date, timedelta
from typing import List

from foyer.models.config import PeriodKind, PlanningConfig
from foyer.models.days import day_name
from foyer.models.grid import Column, Day, Grid, SlotInterval, TimeSlot
from foyer.models.person import Person
from foyer.models.rules import COMMON_COLUMN
from foyer.utils.logging_setup import get_logger, log_function_call

from .template import build_day_slots

logger = get_logger("foyer.engine.grid")


def monday_of(d: date) -> date:
    """Monday of the ISO week containing d."""
    return d - timedelta(days=d.weekday())


def week_dates(start: date) -> List[date]:
    """The seven dates, Monday to Sunday, of the week containing start."""
    monday = monday_of(start)
    return [monday + timedelta(days=i) for i in range(7)]


def month_dates(start: date) -> List[date]:
    """Every date of start's calendar month."""
    days_in_month = calendar.monthrange(start.year, start.month)[1]
    return [date(start.year, start.month, day) for day in range(1, days_in_month + 1)]


def period_dates(period: PeriodKind, start: date) -> List[date]:
    if PeriodKind(period) == PeriodKind.WEEK:
        return week_dates(start)
    return month_dates(start)


def _clone_slots(template: List[SlotInterval], available: bool) -> List[TimeSlot]:
    return [TimeSlot(start=s.start, end=s.end, available=available) for s in template]


@log_function_call
def build_grid(config: PlanningConfig, persons: List[Person]) -> Grid:
    """
    Build an empty grid for the configured period.

    Args:
        config: Planning configuration (period, start date, day template)
        persons: Household members, one column each

    Returns:
        Grid with every slot free, except whole days off in person columns
    """
    template = build_day_slots(
        config.work_start,
        config.work_end,
        config.lunch_start,
        config.lunch_end,
        config.slot_duration,
    )
    dates = period_dates(config.period, config.start_date)
    logger.info(
        f"Building {config.period.value} grid: {len(dates)} days, "
        f"{len(persons)} persons, {len(template)} slots/day"
    )

    days: List[Day] = []
    for d in dates:
        name = day_name(d)
        iso_year, iso_week, _ = d.isocalendar()

        columns = {COMMON_COLUMN: Column(key=COMMON_COLUMN, slots=_clone_slots(template, True))}
        for person in persons:
            off = person.is_off(name)
            columns[person.id] = Column(
                key=person.id,
                slots=_clone_slots(template, not off),
                person_id=person.id,
                person_name=person.name,
                is_day_off=off,
            )
            if off:
                logger.debug(f"{d} ({name}): day off for {person.name}")

        days.append(Day(date=d, day_name=name, week_number=iso_week, iso_year=iso_year, columns=columns))

    return Grid(
        period=config.period.value,
        start_date=config.start_date,
        days=days,
        persons=list(persons),
        slot_duration=config.slot_duration,
        time_bands=config.time_bands,
    )
