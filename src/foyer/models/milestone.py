"""Milestone model: household goals tracked alongside the planning."""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

DEFAULT_MILESTONE_COLOR = "#6B7280"


class MilestoneStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def from_string(cls, s: str) -> "MilestoneStatus":
        mapping = {
            "todo": cls.TODO, "a faire": cls.TODO, "à faire": cls.TODO,
            "in_progress": cls.IN_PROGRESS, "in-progress": cls.IN_PROGRESS, "en cours": cls.IN_PROGRESS,
            "done": cls.DONE, "termine": cls.DONE, "terminé": cls.DONE,
        }
        return mapping.get(str(s).strip().lower(), cls.TODO)


def _as_date(value) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    return date.fromisoformat(text[:10]) if text else None


@dataclass
class Milestone:
    """A goal with a target date and a completion percentage."""

    id: str
    name: str
    description: str = ""
    target_date: Optional[date] = None
    status: MilestoneStatus = MilestoneStatus.TODO
    progress: int = 0  # percent, clamped to 0..100
    is_focus: bool = False
    assigned_to: Optional[str] = None  # person id, None = whole household
    color: str = DEFAULT_MILESTONE_COLOR

    def __post_init__(self):
        self.id = str(self.id).strip()
        self.name = str(self.name).strip()
        self.target_date = _as_date(self.target_date)
        if not isinstance(self.status, MilestoneStatus):
            self.status = MilestoneStatus.from_string(self.status)
        self.progress = max(0, min(100, int(self.progress or 0)))
        self.color = self.color or DEFAULT_MILESTONE_COLOR

    @property
    def is_done(self) -> bool:
        return self.status == MilestoneStatus.DONE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "target_date": self.target_date.isoformat() if self.target_date else None,
            "status": self.status.value,
            "progress": self.progress,
            "is_focus": self.is_focus,
            "assigned_to": self.assigned_to,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Milestone":
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            description=str(d.get("description") or ""),
            target_date=d.get("target_date"),
            status=d.get("status") or MilestoneStatus.TODO.value,
            progress=d.get("progress") or 0,
            is_focus=bool(d.get("is_focus", False)),
            assigned_to=d.get("assigned_to") or None,
            color=str(d.get("color") or DEFAULT_MILESTONE_COLOR),
        )


def focus_milestone(milestones: Sequence[Milestone]) -> Optional[Milestone]:
    """The first milestone flagged as focus, or None."""
    return next((m for m in milestones if m.is_focus), None)


def milestones_by_status(milestones: Sequence[Milestone], status: MilestoneStatus) -> List[Milestone]:
    return [m for m in milestones if m.status == status]


def toggle_focus(milestones: Sequence[Milestone], milestone_id: str) -> None:
    """
    Flip the focus flag of one milestone. Setting it clears the flag on every
    other milestone, so at most one is in focus.
    """
    target = next((m for m in milestones if m.id == milestone_id), None)
    if target is None:
        raise KeyError(milestone_id)
    focused = not target.is_focus
    for m in milestones:
        m.is_focus = False
    target.is_focus = focused
