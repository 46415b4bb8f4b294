# foyer/models - Data models for the household planner
from .config import PeriodKind, PlanningConfig
from .days import DAYS_OF_WEEK, WEEKEND, WORKDAYS, normalize_day
from .grid import Column, Day, Grid, SlotInterval, TimeSlot
from .milestone import Milestone, MilestoneStatus, focus_milestone, milestones_by_status, toggle_focus
from .person import Person
from .rules import COMMON_COLUMN, SHARED, TimeBands
from .schedule import (
    DayRecord,
    FailedTask,
    PlacedTask,
    PlacementResult,
    PlanningWeek,
    ScheduledEntry,
    Schedule,
)
from .task import Recurrence, Task, TimePreference

__all__ = [
    "Person",
    "Task", "Recurrence", "TimePreference",
    "Milestone", "MilestoneStatus", "focus_milestone", "milestones_by_status", "toggle_focus",
    "PlanningConfig", "PeriodKind", "TimeBands",
    "Grid", "Day", "Column", "TimeSlot", "SlotInterval",
    "Schedule", "PlanningWeek", "DayRecord", "ScheduledEntry",
    "PlacementResult", "PlacedTask", "FailedTask",
    "DAYS_OF_WEEK", "WORKDAYS", "WEEKEND", "normalize_day",
    "COMMON_COLUMN", "SHARED",
]
