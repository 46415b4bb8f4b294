"""
Grid Models
===========
Working state of one generation run: days, columns and time slots.

A Grid is built fresh by `foyer.engine.grid.build_grid`, mutated in place by
the placement passes, converted to a Schedule and then dropped.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterator, List, Optional, Union

from .person import Person
from .rules import COMMON_COLUMN, TIME_BANDS, TimeBands
from .task import Task


def time_to_minutes(time: Union[str, int]) -> int:
    """Convert "HH:MM" (or an already converted minute count) to minutes since midnight."""
    if isinstance(time, int):
        return time
    hours, minutes = str(time).strip().split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class SlotInterval:
    """One [start, end) interval of the day template, in minutes."""
    start: int
    end: int

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end)

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class TimeSlot:
    """A slot in one column on one day."""
    start: int
    end: int
    available: bool = True
    task: Optional[Task] = None
    blocked_by: Optional[str] = None  # COMMON_COLUMN when a shared task holds it

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end)

    @property
    def is_free(self) -> bool:
        """Available and not occupied."""
        return self.available and self.task is None

    def __repr__(self):
        state = self.task.name if self.task else ("blocked" if self.blocked_by else ("free" if self.available else "off"))
        return f"TimeSlot({self.start_time}-{self.end_time} {state})"


@dataclass
class Column:
    """A person's lane or the common lane within one day."""
    key: str
    slots: List[TimeSlot]
    person_id: Optional[str] = None
    person_name: Optional[str] = None
    is_day_off: bool = False

    @property
    def is_common(self) -> bool:
        return self.key == COMMON_COLUMN


@dataclass
class Day:
    """One calendar date of the grid."""
    date: date
    day_name: str
    week_number: int
    iso_year: int
    columns: Dict[str, Column] = field(default_factory=dict)

    @property
    def common(self) -> Column:
        return self.columns[COMMON_COLUMN]

    def person_columns(self) -> Iterator[Column]:
        """Columns bound to a person, in person order."""
        for key, column in self.columns.items():
            if key != COMMON_COLUMN:
                yield column


@dataclass
class Grid:
    """The whole period being planned."""
    period: str
    start_date: date
    days: List[Day]
    persons: List[Person]
    slot_duration: int
    time_bands: TimeBands = TIME_BANDS

    @property
    def slots_per_day(self) -> int:
        if not self.days:
            return 0
        return len(self.days[0].common.slots)

    def __repr__(self):
        return (
            f"Grid(period={self.period}, start={self.start_date}, "
            f"days={len(self.days)}, persons={len(self.persons)}, slots/day={self.slots_per_day})"
        )
