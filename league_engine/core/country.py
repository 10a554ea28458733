"""Country model for the league management core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from league_engine.core.circuit import Circuit
    from league_engine.core.driver import Driver
    from league_engine.core.mechanic import Mechanic
    from league_engine.core.race import Race
    from league_engine.core.team import Team


@dataclass(eq=False)
class Country:
    """A country that people, teams, circuits, and races belong to.

    The relationship lists are a denormalised index for reporting; the
    country does not own the lifetime of anything listed in them.

    Attributes:
        country_id: Unique positive identifier.
        name: Unique country name (compared case-insensitively).
        people: Drivers and mechanics from this country.
        teams: Teams based in this country.
        circuits: Circuits located in this country.
        races: Races held in this country.
    """

    country_id: int
    name: str
    people: list[Driver | Mechanic] = field(default_factory=list, repr=False)
    teams: list[Team] = field(default_factory=list, repr=False)
    circuits: list[Circuit] = field(default_factory=list, repr=False)
    races: list[Race] = field(default_factory=list, repr=False)

    def add_person(self, person: Driver | Mechanic) -> None:
        self.people.append(person)

    def add_team(self, team: Team) -> None:
        self.teams.append(team)

    def add_circuit(self, circuit: Circuit) -> None:
        self.circuits.append(circuit)

    def add_race(self, race: Race) -> None:
        self.races.append(race)

    def __str__(self) -> str:
        return self.name
