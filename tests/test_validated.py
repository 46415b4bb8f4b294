"""Tests for the pydantic validation layer."""
from datetime import date

import pytest
from pydantic import ValidationError

from foyer.models.config import PeriodKind, PlanningConfig
from foyer.models.task import Recurrence
from foyer.models.validated import ValidatedPerson, ValidatedPlanningConfig, ValidatedTask


class TestValidatedPlanningConfig:
    def test_valid_config(self):
        cfg = ValidatedPlanningConfig(work_start="08:00", work_end="18:00", slot_duration=60)
        dc = cfg.to_dataclass()
        assert isinstance(dc, PlanningConfig)
        assert dc.work_start == "08:00"
        assert dc.slot_duration == 60

    @pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "noon"])
    def test_bad_time_format(self, value):
        with pytest.raises(ValidationError):
            ValidatedPlanningConfig(work_start=value)

    def test_end_before_start(self):
        with pytest.raises(ValidationError, match="work_end"):
            ValidatedPlanningConfig(work_start="17:00", work_end="09:00")

    def test_lunch_reversed(self):
        with pytest.raises(ValidationError, match="lunch_end"):
            ValidatedPlanningConfig(lunch_start="14:00", lunch_end="12:00")

    def test_slot_bounds(self):
        with pytest.raises(ValidationError):
            ValidatedPlanningConfig(slot_duration=0)
        with pytest.raises(ValidationError):
            ValidatedPlanningConfig(work_start="09:00", work_end="10:00", slot_duration=90)

    def test_from_dataclass_roundtrip(self):
        dc = PlanningConfig(period=PeriodKind.MONTH, start_date=date(2026, 10, 1), slot_duration=45)
        assert ValidatedPlanningConfig.from_dataclass(dc).to_dataclass() == dc


class TestValidatedRecords:
    def test_person_days_normalized(self):
        p = ValidatedPerson(id="u1", name="Alice", days_off=["Sat", "dim"]).to_dataclass()
        assert p.days_off == ["samedi", "dimanche"]

    def test_person_unknown_day(self):
        with pytest.raises(ValidationError, match="weekday"):
            ValidatedPerson(id="u1", name="Alice", days_off=["funday"])

    def test_person_empty_name(self):
        with pytest.raises(ValidationError):
            ValidatedPerson(id="u1", name="")

    def test_task(self):
        t = ValidatedTask(id="t1", name="Courses", duration=90, recurrence="weekly").to_dataclass()
        assert t.recurrence == Recurrence.WEEKLY
        assert t.duration == 90

    @pytest.mark.parametrize("field,value", [("duration", 0), ("priority", 0), ("priority", 6)])
    def test_task_bounds(self, field, value):
        with pytest.raises(ValidationError):
            ValidatedTask(id="t1", name="x", **{field: value})
