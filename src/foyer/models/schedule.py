"""Schedule output and placement statistics."""
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd

from .task import Task


@dataclass(frozen=True)
class ScheduledEntry:
    """One occupied slot in the generated planning."""
    date: date
    day_name: str
    start_time: str
    end_time: str
    task: Task
    column: str

    def key(self) -> tuple:
        """Identity used to compare schedules independently of Task objects."""
        return (self.date, self.start_time, self.end_time, self.task.id, self.column)


@dataclass(frozen=True)
class DayRecord:
    date: date
    day_name: str
    week_number: int


@dataclass(frozen=True)
class PlanningWeek:
    """Days and entries sharing one ISO week."""
    week_number: int
    iso_year: int
    start_date: date
    days: List[DayRecord]
    entries: List[ScheduledEntry]


@dataclass(frozen=True)
class Schedule:
    """Generated planning, grouped by week."""
    period: str
    start_date: date
    weeks: List[PlanningWeek]

    @property
    def entries(self) -> List[ScheduledEntry]:
        return [e for w in self.weeks for e in w.entries]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert entries to a long DataFrame."""
        columns = ["date", "day", "week", "start", "end", "column", "task_id", "task"]
        rows = [
            {
                "date": e.date,
                "day": e.day_name,
                "week": w.week_number,
                "start": e.start_time,
                "end": e.end_time,
                "column": e.column,
                "task_id": e.task.id,
                "task": e.task.name,
            }
            for w in self.weeks
            for e in w.entries
        ]
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns)


@dataclass
class PlacedTask:
    """A successful placement of a task (one per occurrence)."""
    task: Task
    date: date
    day_index: int
    slot_index: int
    start_time: str
    end_time: str
    column: str


@dataclass
class FailedTask:
    """A task that found no slot."""
    task: Task
    reason: str


@dataclass
class PlacementResult:
    """Outcome of one generation run."""
    placed: List[PlacedTask] = field(default_factory=list)
    failed: List[FailedTask] = field(default_factory=list)
    total: int = 0  # Input tasks, before daily expansion

    @property
    def placed_count(self) -> int:
        return len(self.placed)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def success_rate(self) -> int:
        """Placed over total, in percent, rounded half up. 0 when there are no tasks."""
        if not self.total:
            return 0
        return math.floor(self.placed_count / self.total * 100 + 0.5)

    def failure_for(self, task_id: str) -> Optional[FailedTask]:
        for f in self.failed:
            if f.task.id == task_id:
                return f
        return None

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "total": self.total,
            "placed": self.placed_count,
            "failed": self.failed_count,
            "success_rate": self.success_rate,
            "failures": [
                {"task_id": f.task.id, "task": f.task.name, "reason": f.reason}
                for f in self.failed
            ],
        }
