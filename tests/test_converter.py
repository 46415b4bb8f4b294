"""Tests for grid to schedule conversion and placement statistics."""
from foyer.engine.converter import build_stats, grid_to_schedule
from foyer.engine.matcher import find_available_slot
from foyer.engine.placement import place_task
from foyer.models.rules import COMMON_COLUMN
from foyer.models.schedule import FailedTask, PlacementResult
from foyer.models.task import Task


def test_empty_grid_gives_empty_weeks(grid):
    schedule = grid_to_schedule(grid)
    assert len(schedule.weeks) == 1
    assert schedule.entries == []
    assert len(schedule.weeks[0].days) == 7
    assert schedule.to_dataframe().empty


def test_multi_slot_task_gives_one_entry_per_slot(grid):
    task = Task(id="long", name="Menage", duration=120, assigned_to="bob")
    place_task(grid, task, find_available_slot(grid, task))
    entries = grid_to_schedule(grid).entries
    assert [(e.start_time, e.end_time) for e in entries] == [("09:00", "10:00"), ("10:00", "11:00")]
    assert all(e.column == "bob" and e.day_name == "lundi" for e in entries)


def test_shared_task_only_in_common_column(grid):
    task = Task(id="meal", name="Repas", duration=60, assigned_to="shared")
    place_task(grid, task, find_available_slot(grid, task))
    entries = grid_to_schedule(grid).entries
    assert len(entries) == 1
    assert entries[0].column == COMMON_COLUMN


def test_dataframe_columns(grid):
    task = Task(id="t", name="Linge", duration=60, assigned_to="alice")
    place_task(grid, task, find_available_slot(grid, task))
    df = grid_to_schedule(grid).to_dataframe()
    assert list(df.columns) == ["date", "day", "week", "start", "end", "column", "task_id", "task"]
    assert df.iloc[0]["task"] == "Linge"
    assert df.iloc[0]["week"] == 43


class TestPlacementResult:
    def test_zero_total(self):
        assert build_stats([], [], 0).success_rate == 0

    def test_rounds_half_up(self):
        result = PlacementResult(placed=[object()], total=8)  # 12.5 %
        assert result.success_rate == 13
        result = PlacementResult(placed=[object()] * 2, total=3)  # 66.67 %
        assert result.success_rate == 67

    def test_summary(self):
        task = Task(id="x", name="Vitres")
        result = build_stats([], [FailedTask(task=task, reason="no available slot")], 1)
        summary = result.summary()
        assert summary["failed"] == 1
        assert summary["success_rate"] == 0
        assert summary["failures"] == [{"task_id": "x", "task": "Vitres", "reason": "no available slot"}]
