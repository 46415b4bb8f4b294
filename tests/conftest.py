"""Pytest configuration and fixtures."""
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from foyer.engine.grid import build_grid
from foyer.models.config import PeriodKind, PlanningConfig
from foyer.models.person import Person
from foyer.models.task import Recurrence, Task

MONDAY = date(2026, 10, 19)


@pytest.fixture
def persons():
    """Two household members; Alice is off on Saturdays."""
    return [
        Person(id="alice", name="Alice", color="#FF8800", days_off=["samedi"]),
        Person(id="bob", name="Bob", color="#0088FF"),
    ]


@pytest.fixture
def week_config():
    """One week, 09:00-17:00, lunch 12:00-13:00, hourly slots (7 per day)."""
    return PlanningConfig(
        period=PeriodKind.WEEK,
        start_date=MONDAY,
        work_start="09:00",
        work_end="17:00",
        lunch_start="12:00",
        lunch_end="13:00",
        slot_duration=60,
    )


@pytest.fixture
def tiny_config():
    """One week with a single 09:00-10:00 slot per day."""
    return PlanningConfig(
        period=PeriodKind.WEEK,
        start_date=MONDAY,
        work_start="09:00",
        work_end="10:00",
        lunch_start="12:00",
        lunch_end="13:00",
        slot_duration=60,
    )


@pytest.fixture
def grid(week_config, persons):
    return build_grid(week_config, persons)


@pytest.fixture
def sample_tasks():
    """A mix of every recurrence class."""
    return [
        Task(id="t1", name="Cuisine", duration=60, priority=2, assigned_to="shared",
             recurrence=Recurrence.DAILY, preferred_time="afternoon"),
        Task(id="t2", name="Courses", duration=120, priority=3, assigned_to="bob",
             recurrence=Recurrence.WEEKLY, preferred_days=["samedi"]),
        Task(id="t3", name="Rendez-vous", duration=60, priority=1, assigned_to="alice",
             recurrence=Recurrence.ONCE, preferred_time="morning"),
        Task(id="t4", name="Sport", duration=60, priority=3, assigned_to="alice",
             recurrence=Recurrence.CUSTOM, preferred_days=["lundi", "jeudi"]),
        Task(id="t5", name="Lecture", duration=60, priority=4, assigned_to="alice",
             recurrence=Recurrence.FLEXIBLE),
    ]
