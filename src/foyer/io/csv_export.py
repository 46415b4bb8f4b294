"""CSV exports for task lists and generated schedules."""
from pathlib import Path
from typing import IO, List, Sequence, Union

import pandas as pd

from foyer.models.days import DAY_LABELS
from foyer.models.person import Person
from foyer.models.rules import PRIORITY_LABELS, RECURRENCE_LABELS, TIME_PREFERENCE_LABELS
from foyer.models.schedule import Schedule
from foyer.models.task import Task

TASK_HEADERS = [
    "Nom",
    "Assigne a",
    "Recurrence",
    "Duree (min)",
    "Priorite",
    "Preference horaire",
    "Jours",
]

Target = Union[str, Path, IO[str]]


def tasks_to_dataframe(tasks: Sequence[Task], persons: Sequence[Person]) -> pd.DataFrame:
    """Task list with French headers and labels."""
    names = {p.id: p.name for p in persons}

    def assignee(task: Task) -> str:
        if task.is_shared:
            return "Commun"
        return names.get(task.assigned_to, task.assigned_to)

    rows: List[List] = [
        [
            t.name,
            assignee(t),
            RECURRENCE_LABELS.get(t.recurrence.value, t.recurrence.value),
            t.duration,
            PRIORITY_LABELS.get(t.priority, str(t.priority)),
            TIME_PREFERENCE_LABELS.get(t.preferred_time.value, t.preferred_time.value),
            ", ".join(DAY_LABELS.get(d, d) for d in t.preferred_days) or "Tous",
        ]
        for t in tasks
    ]
    return pd.DataFrame(rows, columns=TASK_HEADERS)


def export_tasks_to_csv(tasks: Sequence[Task], persons: Sequence[Person], target: Target) -> None:
    """Write the task list as CSV with a UTF-8 BOM (opens cleanly in Excel)."""
    tasks_to_dataframe(tasks, persons).to_csv(target, index=False, encoding="utf-8-sig")


def export_schedule_to_csv(schedule: Schedule, target: Target) -> None:
    """Write every scheduled entry as one CSV row."""
    df = schedule.to_dataframe()
    df["date"] = df["date"].astype(str)
    df.to_csv(target, index=False, encoding="utf-8-sig")
