"""
Centralized Planning Statistics
===============================
Per-person workload, task breakdowns and milestone progress. Used by the CLI
summary and the Excel/JSON exports.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from foyer.models.grid import Grid, time_to_minutes
from foyer.models.milestone import Milestone, MilestoneStatus, focus_milestone
from foyer.models.person import Person
from foyer.models.rules import COMMON_COLUMN
from foyer.models.schedule import Schedule
from foyer.models.task import Recurrence, Task
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.engine.stats")


@dataclass
class PersonStats:
    """Statistics for a single column."""
    column: str
    name: str
    slots: int      # Occupied slots in the column
    minutes: int    # Sum of occupied slot lengths
    tasks: int      # Distinct tasks
    by_recurrence: Dict[str, int] = field(default_factory=dict)


def calculate_person_stats(schedule: Schedule, persons: Sequence[Person]) -> List[PersonStats]:
    """
    Workload per person, plus the common column last.

    Args:
        schedule: Generated schedule
        persons: Household members, in display order

    Returns:
        List of PersonStats, one per person and one for the common column
    """
    labels = [(p.id, p.name) for p in persons] + [(COMMON_COLUMN, "Commun")]
    stats = []

    for column, name in labels:
        entries = [e for e in schedule.entries if e.column == column]
        minutes = sum(time_to_minutes(e.end_time) - time_to_minutes(e.start_time) for e in entries)
        by_recurrence = Counter(e.task.recurrence.value for e in entries)
        stats.append(PersonStats(
            column=column,
            name=name,
            slots=len(entries),
            minutes=minutes,
            tasks=len({e.task.id for e in entries}),
            by_recurrence=dict(by_recurrence),
        ))

    logger.debug(f"Calculated stats for {len(stats)} columns")
    return stats


def count_available_slots(grid: Grid, column: Optional[str] = None) -> int:
    """Free slots left in the grid, for one column or all of them."""
    count = 0
    for day in grid.days:
        columns = [day.columns.get(column)] if column else list(day.columns.values())
        for col in columns:
            if col is None:
                continue
            count += sum(1 for s in col.slots if s.is_free)
    return count


def task_breakdown(tasks: Sequence[Task]) -> Dict[str, Dict[str, int]]:
    """Count input tasks by recurrence class and by priority."""
    by_recurrence = {r.value: 0 for r in Recurrence}
    by_priority: Dict[str, int] = {}
    for t in tasks:
        by_recurrence[t.recurrence.value] += 1
        by_priority[str(t.priority)] = by_priority.get(str(t.priority), 0) + 1
    return {
        "by_recurrence": by_recurrence,
        "by_priority": dict(sorted(by_priority.items())),
        "shared": {"total": sum(1 for t in tasks if t.is_shared)},
    }


def stats_to_dict_list(stats: List[PersonStats]) -> List[Dict]:
    """Convert stats to list of dicts for DataFrame or export."""
    return [
        {
            "Colonne": s.name,
            "Creneaux": s.slots,
            "Minutes": s.minutes,
            "Taches": s.tasks,
            "Quotidien": s.by_recurrence.get("daily", 0),
            "Hebdomadaire": s.by_recurrence.get("weekly", 0),
            "Une fois": s.by_recurrence.get("once", 0),
            "Personnalise": s.by_recurrence.get("custom", 0),
            "Flexible": s.by_recurrence.get("flexible", 0),
        }
        for s in stats
    ]


@dataclass
class MilestoneStats:
    """Progress over a set of milestones."""
    total: int
    todo: int
    in_progress: int
    done: int
    average_progress: int  # percent, rounded half up
    focus: Optional[str] = None  # id of the focus milestone

    def to_dict(self) -> Dict:
        return {
            "total": self.total,
            "todo": self.todo,
            "in_progress": self.in_progress,
            "done": self.done,
            "average_progress": self.average_progress,
            "focus": self.focus,
        }


def _average_progress(milestones: Sequence[Milestone]) -> int:
    if not milestones:
        return 0
    return int(sum(m.progress for m in milestones) / len(milestones) + 0.5)


def calculate_milestone_stats(milestones: Sequence[Milestone]) -> MilestoneStats:
    counts = Counter(m.status for m in milestones)
    focus = focus_milestone(milestones)
    return MilestoneStats(
        total=len(milestones),
        todo=counts[MilestoneStatus.TODO],
        in_progress=counts[MilestoneStatus.IN_PROGRESS],
        done=counts[MilestoneStatus.DONE],
        average_progress=_average_progress(milestones),
        focus=focus.id if focus else None,
    )


def milestone_stats_by_person(
    milestones: Sequence[Milestone],
    persons: Sequence[Person],
) -> Dict[str, Dict[str, int]]:
    """
    Milestone count, completed count and average progress per person.

    Milestones assigned to nobody (or to an unknown id) are not counted.
    """
    result = {}
    for p in persons:
        own = [m for m in milestones if m.assigned_to == p.id]
        result[p.id] = {
            "milestones": len(own),
            "completed": sum(1 for m in own if m.is_done),
            "average_progress": _average_progress(own),
        }
    return result


def upcoming_milestones(milestones: Sequence[Milestone], today: date, days: int = 7) -> List[Milestone]:
    """Open milestones due between today and today + days (inclusive), soonest first."""
    horizon = today + timedelta(days=days)
    due = [m for m in milestones if m.target_date and not m.is_done and today <= m.target_date <= horizon]
    return sorted(due, key=lambda m: m.target_date)


def overdue_milestones(milestones: Sequence[Milestone], today: date) -> List[Milestone]:
    """Open milestones whose target date has passed, oldest first."""
    late = [m for m in milestones if m.target_date and not m.is_done and m.target_date < today]
    return sorted(late, key=lambda m: m.target_date)


def milestone_summary(
    milestones: Sequence[Milestone],
    persons: Sequence[Person],
    today: Optional[date] = None,
) -> Dict:
    """Milestone block of the CLI summary."""
    today = today or date.today()
    summary = calculate_milestone_stats(milestones).to_dict()
    summary["by_person"] = milestone_stats_by_person(milestones, persons)
    summary["upcoming"] = [m.id for m in upcoming_milestones(milestones, today)]
    summary["overdue"] = [m.id for m in overdue_milestones(milestones, today)]
    return summary
