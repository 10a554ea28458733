"""Race model for the league management core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from league_engine.core.circuit import Circuit
from league_engine.core.country import Country
from league_engine.core.dates import normalize_date

if TYPE_CHECKING:
    from league_engine.core.driver import Driver
    from league_engine.core.participation import Participation


@dataclass(eq=False)
class Race:
    """A race held once at a circuit on a given date.

    Attributes:
        date: Race day as ``d-m-yyyy`` text.
        laps: Number of laps, > 0.
        time: Start time as ``HH:MM``.
        circuit: Circuit the race is held at.
        participations: Driver/car entries for this race.
    """

    date: str
    laps: int
    time: str
    circuit: Circuit
    participations: list[Participation] = field(default_factory=list, repr=False)

    @property
    def country(self) -> Country:
        return self.circuit.country

    @property
    def normalized_date(self) -> str:
        return normalize_date(self.date)

    def add_participation(self, participation: Participation) -> None:
        self.participations.append(participation)

    def participation_of(self, driver: Driver) -> Participation | None:
        for entry in self.participations:
            if entry.driver is driver:
                return entry
        return None

    def __str__(self) -> str:
        return f"{self.circuit.name} ({self.date})"
