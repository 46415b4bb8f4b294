"""
Time Slot Template
==================
Turns a work-day description into the ordered list of slots used by every
column of every day.
"""
from typing import List, Union

from foyer.models.grid import SlotInterval, minutes_to_time, time_to_minutes
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.engine.template")

TimeLike = Union[str, int]

__all__ = [
    "build_day_slots",
    "slots_overlap",
    "time_to_minutes",
    "minutes_to_time",
]


def slots_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """True if the half-open intervals [start1, end1) and [start2, end2) overlap."""
    return start1 < end2 and start2 < end1


def build_day_slots(
    work_start: TimeLike,
    work_end: TimeLike,
    lunch_start: TimeLike,
    lunch_end: TimeLike,
    slot_duration: int,
) -> List[SlotInterval]:
    """
    Generate the slots of one working day.

    Slots start at work_start and step by slot_duration. A slot that would end
    after work_end is dropped, so a trailing partial slot never appears. Any
    slot overlapping the lunch window is excluded entirely.

    Args:
        work_start: "HH:MM" or minutes since midnight
        work_end: "HH:MM" or minutes since midnight
        lunch_start: "HH:MM" or minutes since midnight
        lunch_end: "HH:MM" or minutes since midnight
        slot_duration: Slot length in minutes (> 0)

    Returns:
        Ordered, non-overlapping SlotIntervals
    """
    if slot_duration <= 0:
        raise ValueError(f"slot_duration must be positive, got {slot_duration}")

    start = time_to_minutes(work_start)
    current = start
    end = time_to_minutes(work_end)
    l_start = time_to_minutes(lunch_start)
    l_end = time_to_minutes(lunch_end)

    slots: List[SlotInterval] = []
    while current + slot_duration <= end:
        slot_end = current + slot_duration
        if not slots_overlap(current, slot_end, l_start, l_end):
            slots.append(SlotInterval(current, slot_end))
        current = slot_end

    if (end - start) % slot_duration:
        logger.debug(
            f"Work window {minutes_to_time(start)}-{minutes_to_time(end)} "
            f"not divisible by {slot_duration} min, trailing partial slot dropped"
        )
    logger.debug(f"Day template: {len(slots)} slots of {slot_duration} min")
    return slots
