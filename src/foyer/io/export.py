"""
Planning Export
===============
Lossless, versioned JSON record of a generated planning, suitable for storage
or download, and the inverse transform.
"""
import json
import re
import unicodedata
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from foyer.models.config import PlanningConfig
from foyer.models.milestone import Milestone
from foyer.models.person import Person
from foyer.models.schedule import DayRecord, PlacementResult, PlanningWeek, Schedule, ScheduledEntry
from foyer.models.task import Task
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.io.export")

EXPORT_VERSION = "1.0"


def sanitize_filename(name: str) -> str:
    """Lowercase ASCII slug: accents stripped, other characters turned into dashes."""
    ascii_name = unicodedata.normalize("NFD", name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-zA-Z0-9_-]", "-", ascii_name)
    return re.sub(r"-+", "-", slug).lower()


def _collect_tasks(schedule: Schedule, stats: Optional[PlacementResult]) -> List[Task]:
    seen: Dict[str, Task] = {}
    for e in schedule.entries:
        seen.setdefault(e.task.id, e.task)
    if stats:
        for f in stats.failed:
            seen.setdefault(f.task.id, f.task)
    return list(seen.values())


def export_planning(
    schedule: Schedule,
    stats: Optional[PlacementResult] = None,
    config: Optional[PlanningConfig] = None,
    persons: Optional[Sequence[Person]] = None,
    tasks: Optional[Sequence[Task]] = None,
    milestones: Optional[Sequence[Milestone]] = None,
    name: str = "planning",
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the export record.

    Entries reference tasks by id; the full task records travel alongside in
    "tasks" so the schedule can be rebuilt exactly.

    Args:
        schedule: Generated schedule
        stats: Placement statistics (optional)
        config: Configuration used for the run (optional)
        persons: Household members (optional)
        tasks: Input tasks; defaults to the tasks found in the schedule
        milestones: Household milestones (optional)
        name: Planning name, used for the file name
        exported_at: Timestamp override

    Returns:
        JSON-serializable dict
    """
    task_list = list(tasks) if tasks is not None else _collect_tasks(schedule, stats)
    stamp = exported_at or datetime.now()

    return {
        "version": EXPORT_VERSION,
        "exported_at": stamp.isoformat(),
        "name": name,
        "period": schedule.period,
        "start_date": schedule.start_date.isoformat(),
        "config": config.to_dict() if config else None,
        "persons": [p.to_dict() for p in persons] if persons else [],
        "tasks": [t.to_dict() for t in task_list],
        "milestones": [m.to_dict() for m in milestones] if milestones else [],
        "stats": stats.summary() if stats else None,
        "weeks": [
            {
                "week_number": w.week_number,
                "iso_year": w.iso_year,
                "start_date": w.start_date.isoformat(),
                "days": [
                    {"date": d.date.isoformat(), "day_name": d.day_name, "week_number": d.week_number}
                    for d in w.days
                ],
                "slots": [
                    {
                        "day": e.date.isoformat(),
                        "day_name": e.day_name,
                        "start_time": e.start_time,
                        "end_time": e.end_time,
                        "task_id": e.task.id,
                        "task_name": e.task.name,
                        "task_color": e.task.color,
                        "column": e.column,
                    }
                    for e in w.entries
                ],
            }
            for w in schedule.weeks
        ],
    }


def import_planning(record: Dict[str, Any]) -> Schedule:
    """
    Rebuild a Schedule from an export record.

    Raises:
        ValueError: unknown format version
    """
    version = str(record.get("version", ""))
    if version != EXPORT_VERSION:
        raise ValueError(f"Unsupported export version: {version!r}")

    tasks = {t["id"]: Task.from_dict(t) for t in record.get("tasks", [])}

    weeks = []
    for w in record.get("weeks", []):
        entries = []
        for s in w.get("slots", []):
            task = tasks.get(s["task_id"])
            if task is None:
                task = Task(id=s["task_id"], name=s.get("task_name", ""), color=s.get("task_color") or "")
                tasks[task.id] = task
            entries.append(ScheduledEntry(
                date=date.fromisoformat(s["day"]),
                day_name=s["day_name"],
                start_time=s["start_time"],
                end_time=s["end_time"],
                task=task,
                column=s["column"],
            ))
        week_start = date.fromisoformat(w["start_date"])
        weeks.append(PlanningWeek(
            week_number=int(w["week_number"]),
            iso_year=int(w.get("iso_year") or week_start.isocalendar()[0]),
            start_date=week_start,
            days=[
                DayRecord(date=date.fromisoformat(d["date"]), day_name=d["day_name"], week_number=int(d["week_number"]))
                for d in w.get("days", [])
            ],
            entries=entries,
        ))

    return Schedule(
        period=record.get("period", "week"),
        start_date=date.fromisoformat(record["start_date"]),
        weeks=weeks,
    )


def export_filename(record: Dict[str, Any]) -> str:
    stamp = str(record.get("exported_at", ""))[:10] or datetime.now().strftime("%Y-%m-%d")
    return f"foyer-{sanitize_filename(record.get('name', 'planning'))}-{stamp}.json"


def save_export(record: Dict[str, Any], directory: Union[str, Path] = ".") -> Path:
    """Write the record as `foyer-<name>-<YYYY-MM-DD>.json` in directory."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / export_filename(record)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(record, f, indent=2, ensure_ascii=False)

    logger.info(f"Planning exported to {output_path}")
    return output_path


def load_export(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def import_milestones(record: Dict[str, Any]) -> List[Milestone]:
    """Milestones carried by an export record (empty for older records)."""
    return [Milestone.from_dict(m) for m in record.get("milestones") or []]
