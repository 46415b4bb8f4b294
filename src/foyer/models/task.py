"""Task model and its scheduling classes."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .days import normalize_days
from .rules import COMMON_COLUMN, DEFAULT_DURATIONS, PRIORITIES, SHARED


class Recurrence(str, Enum):
    """Placement strategy followed by a task."""
    DAILY = "daily"
    WEEKLY = "weekly"
    ONCE = "once"
    CUSTOM = "custom"
    FLEXIBLE = "flexible"  # Fills every gap left in a person's column

    @classmethod
    def from_string(cls, s: str) -> "Recurrence":
        """Parse recurrence from various string formats."""
        mapping = {
            "daily": cls.DAILY, "quotidien": cls.DAILY, "quotidienne": cls.DAILY,
            "weekly": cls.WEEKLY, "hebdomadaire": cls.WEEKLY,
            "once": cls.ONCE, "none": cls.ONCE, "une fois": cls.ONCE, "ponctuelle": cls.ONCE,
            "custom": cls.CUSTOM, "personnalise": cls.CUSTOM,
            "flexible": cls.FLEXIBLE, "filler": cls.FLEXIBLE,
        }
        key = str(s).strip().lower()
        return mapping.get(key, cls.ONCE)


class TimePreference(str, Enum):
    """Preferred time of day for a task."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"

    @classmethod
    def from_string(cls, s: str) -> "TimePreference":
        mapping = {
            "morning": cls.MORNING, "matin": cls.MORNING,
            "afternoon": cls.AFTERNOON, "apres-midi": cls.AFTERNOON, "après-midi": cls.AFTERNOON,
            "evening": cls.EVENING, "soir": cls.EVENING,
            "any": cls.ANY, "indifferent": cls.ANY,
        }
        return mapping.get(str(s).strip().lower(), cls.ANY)


@dataclass
class Task:
    """A chore or goal to be laid out on the grid."""

    id: str
    name: str
    duration: int = DEFAULT_DURATIONS["SHORT"]  # minutes
    priority: int = PRIORITIES["NORMAL"]
    assigned_to: str = SHARED
    recurrence: Recurrence = Recurrence.ONCE
    color: str = ""
    preferred_days: List[str] = field(default_factory=list)
    preferred_time: TimePreference = TimePreference.ANY

    def __post_init__(self):
        self.id = str(self.id).strip()
        self.name = str(self.name).strip()
        if isinstance(self.recurrence, str) and not isinstance(self.recurrence, Recurrence):
            self.recurrence = Recurrence.from_string(self.recurrence)
        if isinstance(self.preferred_time, str) and not isinstance(self.preferred_time, TimePreference):
            self.preferred_time = TimePreference.from_string(self.preferred_time)
        self.preferred_days = normalize_days(self.preferred_days)

    @property
    def is_shared(self) -> bool:
        """True if the task involves every household member."""
        return self.assigned_to in (SHARED, COMMON_COLUMN)

    @property
    def target_column(self) -> str:
        """Grid column key the task is written into."""
        return COMMON_COLUMN if self.is_shared else self.assigned_to

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "priority": self.priority,
            "assigned_to": self.assigned_to,
            "recurrence": self.recurrence.value,
            "color": self.color,
            "preferred_days": list(self.preferred_days),
            "preferred_time": self.preferred_time.value,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Task":
        """Create from dictionary."""
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            duration=int(d.get("duration", DEFAULT_DURATIONS["SHORT"])),
            priority=int(d.get("priority", PRIORITIES["NORMAL"])),
            assigned_to=str(d.get("assigned_to", SHARED)),
            recurrence=Recurrence.from_string(d.get("recurrence", "once")),
            color=str(d.get("color") or ""),
            preferred_days=list(d.get("preferred_days") or []),
            preferred_time=TimePreference.from_string(d.get("preferred_time", "any")),
        )
