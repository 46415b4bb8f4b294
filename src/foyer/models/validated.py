"""
Pydantic Validated Models
=========================
Strict validation layer for configuration and records read at file or API
boundaries. The engine itself consumes the plain dataclasses.

Usage:
    from foyer.models.validated import ValidatedPlanningConfig

    config = ValidatedPlanningConfig(work_start="08:00", slot_duration=60).to_dataclass()
"""
import re
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import PeriodKind, PlanningConfig
from .days import is_valid_day, normalize_day
from .milestone import DEFAULT_MILESTONE_COLOR, Milestone, MilestoneStatus
from .person import Person
from .rules import SHARED
from .task import Recurrence, Task, TimePreference

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _minutes(value: str) -> int:
    h, m = value.split(":")
    return int(h) * 60 + int(m)


def _check_days(values: List[str]) -> List[str]:
    out = []
    for v in values:
        if not is_valid_day(v):
            raise ValueError(f"unknown weekday: {v!r}")
        out.append(normalize_day(v))
    return out


class ValidatedPlanningConfig(BaseModel):
    """
    Pydantic-validated planning configuration.

    Can be converted to/from the dataclass PlanningConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    period: PeriodKind = Field(default=PeriodKind.WEEK)
    start_date: date = Field(default_factory=date.today)
    work_start: str = Field(default="09:00")
    work_end: str = Field(default="17:00")
    lunch_start: str = Field(default="12:30")
    lunch_end: str = Field(default="14:00")
    slot_duration: int = Field(default=30, ge=5, le=240, description="Slot length in minutes")

    @field_validator("work_start", "work_end", "lunch_start", "lunch_end")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        """Times must be zero-padded HH:MM."""
        v = v.strip()
        if not _HHMM.match(v):
            raise ValueError(f"expected HH:MM, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_windows(self):
        """Cross-field validation."""
        start, end = _minutes(self.work_start), _minutes(self.work_end)
        if end <= start:
            raise ValueError("work_end must be after work_start")
        l_start, l_end = _minutes(self.lunch_start), _minutes(self.lunch_end)
        if l_end < l_start:
            raise ValueError("lunch_end must not be before lunch_start")
        if self.slot_duration > end - start:
            raise ValueError("slot_duration exceeds the work window")
        return self

    def to_dataclass(self) -> PlanningConfig:
        """Convert to dataclass PlanningConfig for the engine."""
        return PlanningConfig(
            period=PeriodKind(self.period),
            start_date=self.start_date,
            work_start=self.work_start,
            work_end=self.work_end,
            lunch_start=self.lunch_start,
            lunch_end=self.lunch_end,
            slot_duration=self.slot_duration,
        )

    @classmethod
    def from_dataclass(cls, config: PlanningConfig) -> "ValidatedPlanningConfig":
        """Create from dataclass PlanningConfig."""
        return cls(
            period=config.period,
            start_date=config.start_date,
            work_start=config.work_start,
            work_end=config.work_end,
            lunch_start=config.lunch_start,
            lunch_end=config.lunch_end,
            slot_duration=config.slot_duration,
        )


class ValidatedPerson(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    color: str = ""
    days_off: List[str] = Field(default_factory=list)
    constraints: str = ""

    @field_validator("days_off")
    @classmethod
    def validate_days(cls, v: List[str]) -> List[str]:
        return _check_days(v)

    def to_dataclass(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            color=self.color,
            days_off=list(self.days_off),
            constraints=self.constraints,
        )


class ValidatedTask(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    duration: int = Field(default=30, gt=0, le=24 * 60)
    priority: int = Field(default=3, ge=1, le=5)
    assigned_to: str = Field(default=SHARED, min_length=1)
    recurrence: Recurrence = Recurrence.ONCE
    color: str = ""
    preferred_days: List[str] = Field(default_factory=list)
    preferred_time: TimePreference = TimePreference.ANY
    notes: Optional[str] = None

    @field_validator("preferred_days")
    @classmethod
    def validate_days(cls, v: List[str]) -> List[str]:
        return _check_days(v)

    def to_dataclass(self) -> Task:
        return Task(
            id=self.id,
            name=self.name,
            duration=self.duration,
            priority=self.priority,
            assigned_to=self.assigned_to,
            recurrence=Recurrence(self.recurrence),
            color=self.color,
            preferred_days=list(self.preferred_days),
            preferred_time=TimePreference(self.preferred_time),
        )


class ValidatedMilestone(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    target_date: Optional[date] = None
    status: MilestoneStatus = MilestoneStatus.TODO
    progress: int = Field(default=0, ge=0, le=100)
    is_focus: bool = False
    assigned_to: Optional[str] = None
    color: str = DEFAULT_MILESTONE_COLOR

    def to_dataclass(self) -> Milestone:
        return Milestone(
            id=self.id,
            name=self.name,
            description=self.description,
            target_date=self.target_date,
            status=MilestoneStatus(self.status),
            progress=self.progress,
            is_focus=self.is_focus,
            assigned_to=self.assigned_to,
            color=self.color,
        )
