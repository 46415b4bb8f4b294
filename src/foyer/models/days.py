"""Weekday names and normalization."""
from datetime import date
from typing import Iterable, List

# Canonical weekday keys, Monday first (date.weekday() order)
DAYS_OF_WEEK = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]
WORKDAYS = DAYS_OF_WEEK[:5]
WEEKEND = DAYS_OF_WEEK[5:]

DAY_LABELS = {
    "lundi": "Lun", "mardi": "Mar", "mercredi": "Mer", "jeudi": "Jeu",
    "vendredi": "Ven", "samedi": "Sam", "dimanche": "Dim",
}

# Day normalization map
DAY_ALIASES = {
    "lun": "lundi", "lundi": "lundi", "mon": "lundi", "monday": "lundi",
    "mar": "mardi", "mardi": "mardi", "tue": "mardi", "tuesday": "mardi",
    "mer": "mercredi", "mercredi": "mercredi", "wed": "mercredi", "wednesday": "mercredi",
    "jeu": "jeudi", "jeudi": "jeudi", "thu": "jeudi", "thursday": "jeudi",
    "ven": "vendredi", "vendredi": "vendredi", "fri": "vendredi", "friday": "vendredi",
    "sam": "samedi", "samedi": "samedi", "sat": "samedi", "saturday": "samedi",
    "dim": "dimanche", "dimanche": "dimanche", "sun": "dimanche", "sunday": "dimanche",
}


def normalize_day(s: str) -> str:
    """Normalize day string to canonical format (lundi, mardi, etc.)."""
    key = str(s).strip().lower()
    return DAY_ALIASES.get(key, key)


def normalize_days(values: Iterable[str]) -> List[str]:
    """Normalize a list of day names, dropping blanks and duplicates."""
    out: List[str] = []
    for v in values or []:
        if not str(v).strip():
            continue
        d = normalize_day(v)
        if d not in out:
            out.append(d)
    return out


def day_name(d: date) -> str:
    """Canonical weekday key for a date."""
    return DAYS_OF_WEEK[d.weekday()]


def is_valid_day(s: str) -> bool:
    return normalize_day(s) in DAYS_OF_WEEK
