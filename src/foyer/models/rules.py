"""
Business Rules and Constants
============================
Central source of truth for priorities, default durations, time-of-day bands
and the French labels used by the exports.
"""
from dataclasses import dataclass
from typing import Dict


# Priority ranks (lower = more urgent)
PRIORITIES: Dict[str, int] = {
    "URGENT": 1,
    "HIGH": 2,
    "NORMAL": 3,
    "LOW": 4,
}

PRIORITY_LABELS: Dict[int, str] = {
    1: "Urgente",
    2: "Haute",
    3: "Normale",
    4: "Basse",
    5: "Basse",
}

# Accepted spellings for priority names
PRIORITY_ALIASES: Dict[str, int] = {
    "urgent": 1, "urgente": 1,
    "high": 2, "haute": 2,
    "normal": 3, "normale": 3, "medium": 3,
    "low": 4, "basse": 4,
}

# Task durations in minutes
DEFAULT_DURATIONS: Dict[str, int] = {
    "SHORT": 30,
    "MEDIUM": 60,
    "LONG": 90,
    "HALF_DAY": 240,
}

# Column key of the shared household lane
COMMON_COLUMN = "common"

# Assignment sentinel for tasks that involve everyone
SHARED = "shared"

# Ids a person cannot take: they name the common column or the shared sentinel
RESERVED_IDS = frozenset({COMMON_COLUMN, SHARED})

FAILURE_NO_SLOT = "no available slot"


@dataclass(frozen=True)
class TimeBands:
    """
    Hour boundaries for the time-of-day preferences.

    morning:   MORNING_START <= hour < LUNCH_START
    afternoon: AFTERNOON_START <= hour < EVENING_END
    evening:   hour >= EVENING_END

    Household conventions, independent of the configured work hours. A
    PlanningConfig can carry its own bands.
    """
    morning_start: int = 9
    lunch_start: int = 12
    afternoon_start: int = 14
    evening_end: int = 17

    def to_dict(self) -> Dict[str, int]:
        return {
            "morning_start": self.morning_start,
            "lunch_start": self.lunch_start,
            "afternoon_start": self.afternoon_start,
            "evening_end": self.evening_end,
        }


TIME_BANDS = TimeBands()

# Labels for CSV / Excel exports
RECURRENCE_LABELS: Dict[str, str] = {
    "daily": "Quotidien",
    "weekly": "Hebdomadaire",
    "once": "Une fois",
    "custom": "Personnalise",
    "flexible": "Flexible",
}

TIME_PREFERENCE_LABELS: Dict[str, str] = {
    "morning": "Matin",
    "afternoon": "Apres-midi",
    "evening": "Soir",
    "any": "Indifferent",
}
