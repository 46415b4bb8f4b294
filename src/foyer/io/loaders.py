"""CSV and JSON loading for persons, tasks and planning files."""
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import pandas as pd

from foyer.engine.normalize import normalize_inputs, normalize_milestones, normalize_person, normalize_task
from foyer.models.config import PlanningConfig
from foyer.models.milestone import Milestone
from foyer.models.person import Person
from foyer.models.task import Task
from foyer.models.validated import ValidatedMilestone, ValidatedPerson, ValidatedPlanningConfig, ValidatedTask
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.io.loaders")

Source = Union[str, Path, pd.DataFrame]


def _read_frame(source: Source) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str, encoding="utf-8-sig")
    return df.fillna("")


def _rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    return [{k: v for k, v in row.items() if str(v).strip() != ""} for row in df.to_dict(orient="records")]


def load_people(source: Source) -> List[Person]:
    """
    Load household members from a CSV file or DataFrame.

    Columns: name (required), id, color, days_off (";" or "," separated),
    constraints. Rows with an empty name are skipped.
    """
    df = _read_frame(source)
    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    people = [normalize_person(row, i) for i, row in enumerate(_rows(df), start=1)]
    people = [p for p in people if p.name]
    logger.debug(f"Loaded {len(people)} persons")
    return people


def load_tasks(source: Source) -> List[Task]:
    """
    Load tasks from a CSV file or DataFrame.

    Columns: name (required), id, duration, priority, assigned_to, recurrence,
    type, color, preferred_days, preferred_time. Missing values get the
    normalization defaults.
    """
    df = _read_frame(source)
    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    tasks = [normalize_task(row, i) for i, row in enumerate(_rows(df), start=1)]
    tasks = [t for t in tasks if t.name]
    logger.debug(f"Loaded {len(tasks)} tasks")
    return tasks


def save_people(people: List[Person], path: Union[str, Path]) -> None:
    """Save household members to CSV (days off joined with ";")."""
    columns = ["id", "name", "color", "days_off", "constraints"]
    if not people:
        df = pd.DataFrame(columns=columns)
    else:
        rows = [p.to_dict() for p in people]
        for r in rows:
            r["days_off"] = ";".join(r["days_off"])
        df = pd.DataFrame(rows, columns=columns)
    df.to_csv(path, index=False)


def validate_strict(
    config: PlanningConfig,
    people: List[Person],
    tasks: List[Task],
) -> Tuple[PlanningConfig, List[Person], List[Task]]:
    """Run the pydantic validators over normalized records."""
    cfg = ValidatedPlanningConfig.from_dataclass(config).to_dataclass()
    people = [ValidatedPerson(**p.to_dict()).to_dataclass() for p in people]
    tasks = [ValidatedTask(**t.to_dict()).to_dataclass() for t in tasks]
    return cfg, people, tasks


def load_planning_file(
    path: Union[str, Path],
    strict: bool = False,
) -> Tuple[PlanningConfig, List[Person], List[Task], List[Milestone]]:
    """
    Load a JSON planning request:
    {"config": {...}, "persons": [...], "tasks": [...], "milestones": [...]}.

    "users" is accepted in place of "persons". Milestones are optional.

    Args:
        path: JSON file
        strict: Also run the pydantic validators (raises ValidationError)

    Raises:
        PlanningInputError: no person or no task, or an unreadable milestone
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    persons = data.get("persons", data.get("users", []))
    cfg, people, tasks = normalize_inputs(data.get("config"), persons, data.get("tasks", []))
    milestones = normalize_milestones(data.get("milestones") or [])
    if strict:
        cfg, people, tasks = validate_strict(cfg, people, tasks)
        milestones = [ValidatedMilestone(**m.to_dict()).to_dataclass() for m in milestones]

    logger.info(
        f"Loaded planning file {path}: {len(people)} persons, {len(tasks)} tasks, {len(milestones)} milestones"
    )
    return cfg, people, tasks, milestones
