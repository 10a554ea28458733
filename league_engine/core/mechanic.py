"""Mechanic model and specialty enumeration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from league_engine.core.errors import InvalidFormatError
from league_engine.core.person import Person, PersonDetails

if TYPE_CHECKING:
    from league_engine.core.team import Team


class Specialty(Enum):
    """Closed set of mechanic specialties."""

    ENGINE = "engine"
    TIRES = "tires"
    AERODYNAMICS = "aerodynamics"
    ELECTRONICS = "electronics"

    @classmethod
    def parse(cls, text: str) -> Specialty:
        """Look up a specialty by member name, ignoring case and padding.

        Raises:
            InvalidFormatError: If *text* names no specialty.
        """
        key = text.strip().upper() if text else ""
        try:
            return cls[key]
        except KeyError:
            allowed = ", ".join(member.name for member in cls)
            raise InvalidFormatError(
                f"Unknown specialty '{text}'. Expected one of: {allowed}."
            ) from None


@dataclass(eq=False)
class Mechanic(PersonDetails):
    """A mechanic who may work for several teams at once.

    Attributes:
        person: Identity details (DNI, names, country).
        specialty: Area of expertise.
        years_experience: Years of experience, >= 0.
        teams: Teams the mechanic works for.
    """

    person: Person
    specialty: Specialty
    years_experience: int
    teams: list[Team] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return (
            f"{self.full_name} ({self.specialty.name}, "
            f"{self.years_experience} years)"
        )
