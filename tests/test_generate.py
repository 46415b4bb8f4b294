"""Tests for the generation entry points."""
from dataclasses import replace
from datetime import date

import pytest

from foyer import PlanningInputError, generate, generate_from_raw
from foyer.models.config import PeriodKind, PlanningConfig
from foyer.models.rules import COMMON_COLUMN
from foyer.models.person import Person
from foyer.models.task import Task

MONDAY = date(2026, 10, 19)


def once(id, day, assigned_to="bob"):
    return Task(id=id, name=id, duration=60, assigned_to=assigned_to, preferred_days=[day])


class TestGenerate:
    def test_requires_persons(self, week_config, sample_tasks):
        with pytest.raises(PlanningInputError, match="person"):
            generate(week_config, [], sample_tasks)

    def test_requires_tasks(self, week_config, persons):
        with pytest.raises(PlanningInputError, match="task"):
            generate(week_config, persons, [])

    def test_input_error_is_value_error(self, week_config):
        with pytest.raises(ValueError):
            generate(week_config, [], [])

    @pytest.mark.parametrize("reserved", ["common", "shared"])
    def test_reserved_person_id(self, week_config, sample_tasks, reserved):
        with pytest.raises(PlanningInputError, match="reserved"):
            generate(week_config, [Person(id=reserved, name="X")], sample_tasks)

    @pytest.mark.parametrize("override", [
        {"work_start": "9h"},
        {"slot_duration": -30},
        {"work_start": "17:00", "work_end": "09:00"},
    ])
    def test_rejects_unusable_day_template(self, week_config, persons, sample_tasks, override):
        cfg = replace(week_config, **override)
        with pytest.raises(PlanningInputError):
            generate(cfg, persons, sample_tasks)

    def test_deterministic(self, week_config, persons, sample_tasks):
        first, stats_a = generate(week_config, persons, sample_tasks)
        second, stats_b = generate(week_config, persons, sample_tasks)
        assert [e.key() for e in first.entries] == [e.key() for e in second.entries]
        assert stats_a.summary() == stats_b.summary()

    def test_success_rate(self, tiny_config, persons):
        tasks = [
            once("a", "lundi"),
            once("b", "mardi"),
            once("c", "mercredi"),
            once("d", "lundi"),
        ]
        _, stats = generate(tiny_config, persons, tasks)
        assert stats.total == 4
        assert stats.placed_count == 3
        assert stats.failed_count == 1
        assert stats.success_rate == 75
        assert stats.failure_for("d") is not None
        assert stats.failure_for("a") is None

    def test_occurrences_can_exceed_total(self, week_config, persons, sample_tasks):
        _, stats = generate(week_config, persons, sample_tasks)
        assert stats.total == 5
        assert stats.placed_count > stats.total
        assert stats.success_rate > 100

    def test_day_off_never_used(self, week_config, persons, sample_tasks):
        schedule, _ = generate(week_config, persons, sample_tasks)
        saturday = date(2026, 10, 24)
        assert not [e for e in schedule.entries if e.date == saturday and e.column == "alice"]
        assert not [e for e in schedule.entries if e.date == saturday and e.column == COMMON_COLUMN]

    def test_single_week_schedule(self, week_config, persons, sample_tasks):
        schedule, _ = generate(week_config, persons, sample_tasks)
        assert len(schedule.weeks) == 1
        week = schedule.weeks[0]
        assert week.week_number == 43
        assert week.start_date == MONDAY
        assert len(week.days) == 7

    def test_month_has_five_weeks(self, persons, sample_tasks):
        cfg = PlanningConfig(period=PeriodKind.MONTH, start_date=MONDAY, slot_duration=60)
        schedule, _ = generate(cfg, persons, sample_tasks)
        assert [w.week_number for w in schedule.weeks] == [40, 41, 42, 43, 44]
        assert sum(len(w.days) for w in schedule.weeks) == 31

    def test_weeks_sorted_across_year_boundary(self, persons, sample_tasks):
        cfg = PlanningConfig(period=PeriodKind.MONTH, start_date=date(2027, 1, 15), slot_duration=60)
        schedule, _ = generate(cfg, persons, sample_tasks)
        assert [(w.iso_year, w.week_number) for w in schedule.weeks] == [
            (2026, 53), (2027, 1), (2027, 2), (2027, 3), (2027, 4),
        ]
        assert schedule.weeks[0].start_date == date(2027, 1, 1)


class TestGenerateFromRaw:
    def test_camel_case_input(self):
        schedule, stats = generate_from_raw(
            {"period": "week", "startDate": "2026-10-19", "workStart": "09:00", "workEnd": "12:00",
             "lunchStart": "12:00", "lunchEnd": "13:00", "slotDuration": 60},
            [{"id": "u1", "name": "Alice", "daysOff": ["samedi"]}],
            [{"name": "Vaisselle", "assignedTo": "u1", "recurrence": "daily", "duration": 30}],
        )
        assert stats.placed_count == 6
        assert schedule.start_date == MONDAY
        assert {e.column for e in schedule.entries} == {"u1"}

    def test_defaults_and_today(self):
        schedule, stats = generate_from_raw(
            None,
            [{"name": "Alice"}],
            [{"name": "Rangement"}],
            today=date(2026, 10, 21),
        )
        # week of the given day, default 30 min slots, task shared and placed once
        assert schedule.weeks[0].start_date == MONDAY
        entry = schedule.entries[0]
        assert entry.column == COMMON_COLUMN
        assert (entry.start_time, entry.end_time) == ("09:00", "09:30")
        assert stats.success_rate == 100

    def test_blank_names_dropped(self):
        with pytest.raises(PlanningInputError):
            generate_from_raw({"startDate": "2026-10-19"}, [{"name": "  "}], [{"name": "x"}])
