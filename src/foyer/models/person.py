"""Person model for household members."""
from dataclasses import dataclass, field
from typing import List

from .days import normalize_days


@dataclass
class Person:
    """A household member with their days off."""

    id: str
    name: str
    color: str = ""
    days_off: List[str] = field(default_factory=list)
    constraints: str = ""  # Free-text note, not interpreted by the engine

    def __post_init__(self):
        """Validate and normalize fields."""
        self.id = str(self.id).strip()
        self.name = str(self.name).strip()
        self.days_off = normalize_days(self.days_off)

    def is_off(self, weekday: str) -> bool:
        """True if the whole weekday is off for this person."""
        return weekday in self.days_off

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "days_off": list(self.days_off),
            "constraints": self.constraints,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            id=str(d.get("id", "")),
            name=d.get("name", ""),
            color=str(d.get("color") or ""),
            days_off=list(d.get("days_off") or []),
            constraints=str(d.get("constraints") or ""),
        )
