"""Tests for the placement passes."""
from dataclasses import replace
from datetime import date

from foyer.engine.grid import build_grid
from foyer.engine.matcher import SearchOptions, find_available_slot
from foyer.engine.placement import (
    PASSES,
    attempt_placement,
    fill_with_flexible,
    place_custom_tasks,
    place_daily_tasks,
    place_once_tasks,
    place_task,
    run_passes,
    sort_tasks,
)
from foyer.models.rules import COMMON_COLUMN, FAILURE_NO_SLOT, TimeBands
from foyer.models.schedule import PlacementResult
from foyer.models.task import Recurrence, Task


def make(id, assigned_to="bob", recurrence=Recurrence.ONCE, **kw):
    kw.setdefault("duration", 60)
    return Task(id=id, name=kw.pop("name", id.upper()), assigned_to=assigned_to, recurrence=recurrence, **kw)


class TestSortTasks:
    def test_priority_then_shared_then_duration(self):
        tasks = [
            make("low", priority=4),
            make("personal-short", priority=2, duration=30),
            make("personal-long", priority=2, duration=90),
            make("shared", assigned_to="shared", priority=2, duration=15),
            make("urgent", priority=1),
        ]
        assert [t.id for t in sort_tasks(tasks)] == [
            "urgent", "shared", "personal-long", "personal-short", "low",
        ]

    def test_stable_for_ties(self):
        tasks = [make("a"), make("b"), make("c")]
        assert [t.id for t in sort_tasks(tasks)] == ["a", "b", "c"]


class TestPlaceTask:
    def test_personal_task_spans_slots(self, grid):
        task = make("long", duration=120)
        placed = place_task(grid, task, find_available_slot(grid, task))
        bob = grid.days[0].columns["bob"]
        assert bob.slots[0].task is task and bob.slots[1].task is task
        assert bob.slots[2].task is None
        assert (placed.start_time, placed.end_time) == ("09:00", "11:00")
        assert placed.column == "bob"
        assert placed.date == date(2026, 10, 19)

    def test_shared_task_blocks_person_columns(self, grid):
        task = make("meal", assigned_to="shared")
        placed = place_task(grid, task, find_available_slot(grid, task))
        day = grid.days[0]
        assert placed.column == COMMON_COLUMN
        assert day.common.slots[0].task is task
        for column in day.person_columns():
            slot = column.slots[0]
            assert slot.task is None
            assert slot.available is False
            assert slot.blocked_by == COMMON_COLUMN

    def test_shared_block_rejects_personal_search(self, grid):
        shared = make("meal", assigned_to="shared")
        place_task(grid, shared, find_available_slot(grid, shared))
        match = find_available_slot(grid, make("x"), SearchOptions(start_day_index=0, pinned=True))
        assert match.slot_index == 1

    def test_config_time_bands_reach_the_search(self, week_config, persons):
        cfg = replace(week_config, time_bands=TimeBands(morning_start=13, lunch_start=14,
                                                         afternoon_start=15, evening_end=16))
        grid = build_grid(cfg, persons)
        assert grid.time_bands == cfg.time_bands

        placed = attempt_placement(grid, make("x", preferred_time="morning"))
        assert placed.start_time == "13:00"
        evening = attempt_placement(grid, make("y", preferred_time="evening"))
        assert evening.start_time == "16:00"

    def test_attempt_returns_none_when_full(self, grid):
        assert attempt_placement(grid, make("x", duration=600)) is None


class TestDailyPass:
    def test_one_per_day(self, grid):
        result = PlacementResult()
        place_daily_tasks(grid, [make("d", recurrence=Recurrence.DAILY)], result)
        assert len(result.placed) == 7
        assert [p.day_index for p in result.placed] == list(range(7))
        assert all(p.slot_index == 0 for p in result.placed)

    def test_day_off_skipped_without_failure(self, grid):
        result = PlacementResult()
        place_daily_tasks(grid, [make("d", assigned_to="alice", recurrence=Recurrence.DAILY)], result)
        assert len(result.placed) == 6
        assert 5 not in [p.day_index for p in result.placed]
        assert result.failed == []

    def test_preferred_days_restrict_daily(self, grid):
        result = PlacementResult()
        task = make("d", recurrence=Recurrence.DAILY, preferred_days=["mardi", "vendredi"])
        place_daily_tasks(grid, [task], result)
        assert [p.day_index for p in result.placed] == [1, 4]


class TestSingleShotPasses:
    def test_priority_wins_the_only_slot(self, tiny_config, persons):
        grid = build_grid(tiny_config, persons)
        result = PlacementResult()
        low = make("low", priority=4, preferred_days=["lundi"])
        high = make("high", priority=1, preferred_days=["lundi"])
        place_once_tasks(grid, sort_tasks([low, high]), result)
        assert [p.task.id for p in result.placed] == ["high"]
        assert result.failed[0].task.id == "low"
        assert result.failed[0].reason == FAILURE_NO_SLOT

    def test_once_moves_to_next_day(self, tiny_config, persons):
        grid = build_grid(tiny_config, persons)
        result = PlacementResult()
        place_once_tasks(grid, [make("a"), make("b")], result)
        assert [p.day_index for p in result.placed] == [0, 1]

    def test_custom_one_per_weekday(self, grid):
        result = PlacementResult()
        task = make("sport", recurrence=Recurrence.CUSTOM, preferred_days=["lundi", "jeudi"])
        place_custom_tasks(grid, [task], result)
        assert [p.date for p in result.placed] == [date(2026, 10, 19), date(2026, 10, 22)]

    def test_custom_missed_weekday_not_recorded(self, grid):
        result = PlacementResult()
        task = make("sport", assigned_to="alice", recurrence=Recurrence.CUSTOM, preferred_days=["samedi", "lundi"])
        place_custom_tasks(grid, [task], result)
        assert len(result.placed) == 1
        assert result.failed == []

    def test_custom_without_days_behaves_like_once(self, tiny_config, persons):
        grid = build_grid(tiny_config, persons)
        result = PlacementResult()
        fill = [make(f"f{i}", preferred_days=[]) for i in range(7)]
        place_once_tasks(grid, fill, result)
        place_custom_tasks(grid, [make("c", recurrence=Recurrence.CUSTOM)], result)
        assert result.failed[0].task.id == "c"


class TestFlexibleFill:
    def test_fills_every_gap_of_owner(self, grid):
        result = PlacementResult()
        fill_with_flexible(grid, [make("read", recurrence=Recurrence.FLEXIBLE)], result)
        assert len(result.placed) == 7 * 7
        assert all(p.column == "bob" for p in result.placed)
        assert all(s.task is None for s in grid.days[0].columns["alice"].slots)

    def test_skips_day_off_and_blocked(self, grid):
        shared = make("meal", assigned_to="shared")
        place_task(grid, shared, find_available_slot(grid, shared))
        result = PlacementResult()
        fill_with_flexible(grid, [make("read", assigned_to="alice", recurrence=Recurrence.FLEXIBLE)], result)
        monday = grid.days[0].columns["alice"]
        assert monday.slots[0].task is None
        assert monday.slots[0].blocked_by == COMMON_COLUMN
        assert all(s.task is None for s in grid.days[5].columns["alice"].slots)
        assert len(result.placed) == 6 + 7 * 5

    def test_shared_filler_as_fallback(self, grid):
        result = PlacementResult()
        tasks = [
            make("alice-read", assigned_to="alice", recurrence=Recurrence.FLEXIBLE),
            make("tidy", assigned_to="shared", recurrence=Recurrence.FLEXIBLE),
        ]
        fill_with_flexible(grid, tasks, result)
        monday = grid.days[0]
        assert monday.columns["alice"].slots[0].task.id == "alice-read"
        assert monday.columns["bob"].slots[0].task.id == "tidy"
        assert all(s.task is None for s in monday.common.slots)

    def test_first_filler_per_owner_wins(self, grid):
        result = PlacementResult()
        tasks = [
            make("first", recurrence=Recurrence.FLEXIBLE),
            make("second", recurrence=Recurrence.FLEXIBLE),
        ]
        fill_with_flexible(grid, tasks, result)
        assert {p.task.id for p in result.placed} == {"first"}


class TestRunPasses:
    def test_pass_order(self):
        assert [r for r, _ in PASSES] == [
            Recurrence.DAILY, Recurrence.WEEKLY, Recurrence.ONCE, Recurrence.CUSTOM, Recurrence.FLEXIBLE,
        ]

    def test_full_run(self, grid, sample_tasks):
        result = run_passes(grid, sample_tasks, PlacementResult(total=len(sample_tasks)))
        by_task = {}
        for p in result.placed:
            by_task.setdefault(p.task.id, []).append(p)

        # shared daily task: afternoon, every day but Saturday (Alice off)
        assert len(by_task["t1"]) == 6
        assert all(p.start_time == "14:00" for p in by_task["t1"])
        # weekly on Saturday, two hourly slots
        assert by_task["t2"][0].date == date(2026, 10, 24)
        assert (by_task["t2"][0].start_time, by_task["t2"][0].end_time) == ("09:00", "11:00")
        # urgent once task takes Monday morning first
        assert (by_task["t3"][0].day_index, by_task["t3"][0].slot_index) == (0, 0)
        # custom Monday lands after it
        assert [(p.day_index, p.slot_index) for p in by_task["t4"]] == [(0, 1), (3, 0)]
        # filler takes every remaining Alice slot
        assert len(by_task["t5"]) == 4 + 6 * 4 + 5
        assert result.failed == []

    def test_daily_runs_before_higher_priority_once(self, tiny_config, persons):
        grid = build_grid(tiny_config, persons)
        tasks = [
            make("urgent", priority=1, preferred_days=["lundi"]),
            make("daily", priority=5, recurrence=Recurrence.DAILY),
        ]
        result = run_passes(grid, tasks, PlacementResult(total=2))
        assert len([p for p in result.placed if p.task.id == "daily"]) == 7
        assert result.failed[0].task.id == "urgent"
