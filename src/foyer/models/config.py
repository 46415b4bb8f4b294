"""Planning configuration."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict

from .rules import TIME_BANDS, TimeBands


class PeriodKind(str, Enum):
    """Length of the generated planning."""
    WEEK = "week"
    MONTH = "month"


@dataclass
class PlanningConfig:
    """Configuration for one generation run."""

    period: PeriodKind = PeriodKind.WEEK
    start_date: date = field(default_factory=date.today)

    # Work-day template ("HH:MM")
    work_start: str = "09:00"
    work_end: str = "17:00"
    lunch_start: str = "12:30"
    lunch_end: str = "14:00"
    slot_duration: int = 30  # minutes

    # Time-of-day preference boundaries
    time_bands: TimeBands = TIME_BANDS

    def __post_init__(self):
        if isinstance(self.period, str) and not isinstance(self.period, PeriodKind):
            self.period = PeriodKind(self.period.strip().lower())
        if isinstance(self.start_date, str):
            self.start_date = date.fromisoformat(self.start_date[:10])

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "period": self.period.value,
            "start_date": self.start_date.isoformat(),
            "work_start": self.work_start,
            "work_end": self.work_end,
            "lunch_start": self.lunch_start,
            "lunch_end": self.lunch_end,
            "slot_duration": self.slot_duration,
            "time_bands": self.time_bands.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "PlanningConfig":
        """Create from dictionary."""
        cfg = cls()
        for key, value in d.items():
            if not hasattr(cfg, key):
                continue
            if key == "period":
                value = PeriodKind(value) if value else PeriodKind.WEEK
            elif key == "start_date" and isinstance(value, str):
                value = date.fromisoformat(value[:10])
            elif key == "slot_duration":
                value = int(value)
            elif key == "time_bands" and isinstance(value, dict):
                value = TimeBands(**{k: int(v) for k, v in value.items() if k in TimeBands.__dataclass_fields__})
            setattr(cfg, key, value)
        return cfg
