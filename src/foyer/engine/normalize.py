"""
Input Normalization
===================
Single place where loosely shaped input (form data, JSON files, CSV rows) is
turned into the canonical Person / Task / PlanningConfig records consumed by
the engine. Runs once, before the grid is built.

Defaults applied when a field is missing, blank or zero:

    config.period          "week"
    config.start_date      today
    config.work_start      "09:00"
    config.work_end        "17:00"
    config.lunch_start     "12:30"
    config.lunch_end       "14:00"
    config.slot_duration   30
    person.id              "user-<n>"  (1-based position)
    person.color           ""
    person.days_off        []
    person.constraints     ""
    task.id                "task-<n>"  (1-based position)
    task.duration          30
    task.priority          3 (normal)
    task.recurrence        "once"
    task.assigned_to       "shared"
    task.preferred_time    "any"
    task.preferred_days    []
    task.color             ""
    milestone.id           "milestone-<n>"  (1-based position)
    milestone.status       "todo" ("done" when is_completed is set)
    milestone.progress     0
    milestone.color        "#6B7280"
"""
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from foyer.models.config import PeriodKind, PlanningConfig
from foyer.models.grid import time_to_minutes
from foyer.models.milestone import DEFAULT_MILESTONE_COLOR, Milestone, MilestoneStatus
from foyer.models.person import Person
from foyer.models.rules import COMMON_COLUMN, PRIORITIES, PRIORITY_ALIASES, RESERVED_IDS, SHARED
from foyer.models.task import Recurrence, Task, TimePreference
from foyer.utils.logging_setup import get_logger

logger = get_logger("foyer.engine.normalize")


class PlanningInputError(ValueError):
    """Input that makes a generation run impossible."""


CONFIG_DEFAULTS = {
    "period": PeriodKind.WEEK.value,
    "work_start": "09:00",
    "work_end": "17:00",
    "lunch_start": "12:30",
    "lunch_end": "14:00",
    "slot_duration": 30,
}

PERSON_DEFAULTS = {
    "color": "",
    "days_off": [],
    "constraints": "",
}

TASK_DEFAULTS = {
    "duration": 30,
    "priority": PRIORITIES["NORMAL"],
    "recurrence": Recurrence.ONCE.value,
    "assigned_to": SHARED,
    "preferred_time": TimePreference.ANY.value,
    "preferred_days": [],
    "color": "",
}

# Canonical field -> accepted spellings
KEY_ALIASES = {
    "start_date": ("start_date", "startDate"),
    "work_start": ("work_start", "workStart"),
    "work_end": ("work_end", "workEnd"),
    "lunch_start": ("lunch_start", "lunchStart"),
    "lunch_end": ("lunch_end", "lunchEnd"),
    "slot_duration": ("slot_duration", "slotDuration"),
    "days_off": ("days_off", "daysOff", "jours_off"),
    "assigned_to": ("assigned_to", "assignedTo"),
    "preferred_days": ("preferred_days", "preferredDays"),
    "preferred_time": ("preferred_time", "preferredTime", "timePreference"),
    "target_date": ("target_date", "targetDate"),
    "is_focus": ("is_focus", "isFocus", "isFocused"),
    "is_completed": ("is_completed", "isCompleted"),
    "milestone_name": ("name", "title"),
}


def _pick(raw: Mapping[str, Any], field: str) -> Any:
    for key in KEY_ALIASES.get(field, (field,)):
        if key in raw:
            value = raw[key]
            if value is None or (isinstance(value, str) and not value.strip()):
                return None
            return value
    return None


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        sep = ";" if ";" in value else ","
        return [v.strip() for v in value.split(sep) if v.strip()]
    return [str(v) for v in value]


def _as_int(value: Any, default: int) -> int:
    try:
        result = int(float(value))
    except (TypeError, ValueError):
        return default
    return result or default


def _as_priority(value: Any) -> int:
    if isinstance(value, str) and value.strip().lower() in PRIORITY_ALIASES:
        return PRIORITY_ALIASES[value.strip().lower()]
    return _as_int(value, TASK_DEFAULTS["priority"])


def normalize_config(raw: Union[PlanningConfig, Mapping[str, Any], None], today: Optional[date] = None) -> PlanningConfig:
    """Build a PlanningConfig, filling every missing value from CONFIG_DEFAULTS."""
    if isinstance(raw, PlanningConfig):
        return raw
    raw = raw or {}

    start = _pick(raw, "start_date")
    period = str(_pick(raw, "period") or CONFIG_DEFAULTS["period"]).strip().lower()
    try:
        if isinstance(start, str):
            start = date.fromisoformat(start[:10])
        period = PeriodKind(period)
    except ValueError as e:
        raise PlanningInputError(f"Invalid planning config: {e}") from e

    return PlanningConfig(
        period=period,
        start_date=start or today or date.today(),
        work_start=str(_pick(raw, "work_start") or CONFIG_DEFAULTS["work_start"]),
        work_end=str(_pick(raw, "work_end") or CONFIG_DEFAULTS["work_end"]),
        lunch_start=str(_pick(raw, "lunch_start") or CONFIG_DEFAULTS["lunch_start"]),
        lunch_end=str(_pick(raw, "lunch_end") or CONFIG_DEFAULTS["lunch_end"]),
        slot_duration=_as_int(_pick(raw, "slot_duration"), CONFIG_DEFAULTS["slot_duration"]),
    )


def normalize_person(raw: Union[Person, Mapping[str, Any]], position: int = 1) -> Person:
    """Build a Person from a record, filling defaults from PERSON_DEFAULTS."""
    if isinstance(raw, Person):
        return raw
    return Person(
        id=str(_pick(raw, "id") or f"user-{position}"),
        name=str(_pick(raw, "name") or ""),
        color=str(_pick(raw, "color") or PERSON_DEFAULTS["color"]),
        days_off=_as_list(_pick(raw, "days_off")),
        constraints=str(_pick(raw, "constraints") or PERSON_DEFAULTS["constraints"]),
    )


def normalize_task(raw: Union[Task, Mapping[str, Any]], position: int = 1) -> Task:
    """
    Build a Task from a record, filling defaults from TASK_DEFAULTS.

    Legacy shapes are folded in: `type: "flexible"` selects the flexible
    class, `type: "common"` or `assigned_to: "common"` the shared target, and
    recurrence "none" means once.
    """
    if isinstance(raw, Task):
        return raw

    kind = str(_pick(raw, "type") or "").strip().lower()

    if kind == "flexible":
        recurrence = Recurrence.FLEXIBLE
    else:
        recurrence = Recurrence.from_string(_pick(raw, "recurrence") or TASK_DEFAULTS["recurrence"])

    assigned = _pick(raw, "assigned_to")
    if kind == "common" or assigned is None or str(assigned).strip().lower() in (SHARED, COMMON_COLUMN):
        assigned = SHARED

    return Task(
        id=str(_pick(raw, "id") or f"task-{position}"),
        name=str(_pick(raw, "name") or ""),
        duration=_as_int(_pick(raw, "duration"), TASK_DEFAULTS["duration"]),
        priority=_as_priority(_pick(raw, "priority")),
        assigned_to=str(assigned).strip(),
        recurrence=recurrence,
        color=str(_pick(raw, "color") or TASK_DEFAULTS["color"]),
        preferred_days=_as_list(_pick(raw, "preferred_days")),
        preferred_time=TimePreference.from_string(_pick(raw, "preferred_time") or TASK_DEFAULTS["preferred_time"]),
    )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "oui")
    return bool(value)


def normalize_milestone(raw: Union[Milestone, Mapping[str, Any]], position: int = 1) -> Milestone:
    """
    Build a Milestone from a record. A truthy `is_completed` marks it done
    whatever its status says.
    """
    if isinstance(raw, Milestone):
        return raw

    status = MilestoneStatus.from_string(_pick(raw, "status") or MilestoneStatus.TODO.value)
    assigned = _pick(raw, "assigned_to")
    if _as_bool(_pick(raw, "is_completed")):
        status = MilestoneStatus.DONE

    try:
        return Milestone(
            id=str(_pick(raw, "id") or f"milestone-{position}"),
            name=str(_pick(raw, "milestone_name") or ""),
            description=str(_pick(raw, "description") or ""),
            target_date=_pick(raw, "target_date"),
            status=status,
            progress=_as_int(_pick(raw, "progress"), 0),
            is_focus=_as_bool(_pick(raw, "is_focus")),
            assigned_to=str(assigned).strip() if assigned is not None else None,
            color=str(_pick(raw, "color") or DEFAULT_MILESTONE_COLOR),
        )
    except ValueError as e:
        raise PlanningInputError(f"Invalid milestone #{position}: {e}") from e


def normalize_milestones(milestones: Iterable[Union[Milestone, Mapping[str, Any]]]) -> List[Milestone]:
    """Normalize a milestone list, dropping entries without a name."""
    items = [normalize_milestone(m, i) for i, m in enumerate(milestones or [], start=1)]
    return [m for m in items if m.name]


def require_inputs(persons: Sequence[Person], tasks: Sequence[Task]) -> None:
    """Fail fast when there is nobody or nothing to plan."""
    if not persons:
        raise PlanningInputError("At least one person is required")
    if not tasks:
        raise PlanningInputError("At least one task is required")
    for person in persons:
        if person.id.lower() in RESERVED_IDS:
            raise PlanningInputError(f"Person id {person.id!r} is reserved")


def check_config(config: PlanningConfig) -> None:
    """
    Reject a day template the grid cannot be built from.

    Times must read "HH:MM", the work window must be non-empty and the slot
    duration positive. Lunch is not checked: a lunch outside the window simply
    removes nothing.
    """
    minutes = {}
    for field in ("work_start", "work_end", "lunch_start", "lunch_end"):
        value = getattr(config, field)
        try:
            minutes[field] = time_to_minutes(value)
        except (TypeError, ValueError):
            raise PlanningInputError(f"Invalid time for {field}: {value!r}") from None
        if not 0 <= minutes[field] <= 24 * 60:
            raise PlanningInputError(f"Invalid time for {field}: {value!r}")
    if minutes["work_end"] <= minutes["work_start"]:
        raise PlanningInputError("work_end must be after work_start")
    if not isinstance(config.slot_duration, int) or config.slot_duration <= 0:
        raise PlanningInputError(f"Invalid slot duration: {config.slot_duration!r}")


def normalize_inputs(
    config: Union[PlanningConfig, Mapping[str, Any], None],
    persons: Iterable[Union[Person, Mapping[str, Any]]],
    tasks: Iterable[Union[Task, Mapping[str, Any]]],
    today: Optional[date] = None,
) -> Tuple[PlanningConfig, List[Person], List[Task]]:
    """
    Normalize a whole generation request.

    Persons and tasks with a blank name are dropped. Raises PlanningInputError
    when no person or no task remains.
    """
    cfg = normalize_config(config, today=today)

    people = [normalize_person(p, i) for i, p in enumerate(persons, start=1)]
    people = [p for p in people if p.name]

    items = [normalize_task(t, i) for i, t in enumerate(tasks, start=1)]
    items = [t for t in items if t.name]

    require_inputs(people, items)

    known = {p.id for p in people}
    for t in items:
        if not t.is_shared and t.assigned_to not in known:
            logger.warning(f"Task '{t.name}' is assigned to unknown person '{t.assigned_to}'")

    logger.debug(f"Normalized input: {len(people)} persons, {len(items)} tasks")
    return cfg, people, items
