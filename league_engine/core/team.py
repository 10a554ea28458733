"""Team (escudería) model for the league management core.

A team owns cars, employs mechanics, and holds driver contracts.  Every
link is kept on both sides; the ``add_*`` methods below are the only
places that write them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from league_engine.core.country import Country

if TYPE_CHECKING:
    from league_engine.core.car import Car
    from league_engine.core.contract import Contract
    from league_engine.core.driver import Driver
    from league_engine.core.mechanic import Mechanic


@dataclass(eq=False)
class Team:
    """A racing team.

    Attributes:
        name: Unique team name (compared case-insensitively).
        country: Country the team is based in.
        cars: Cars currently owned by the team.
        mechanics: Mechanics working for the team.
        contracts: Every driver contract signed with the team, past or active.
    """

    name: str
    country: Country
    cars: list[Car] = field(default_factory=list, repr=False)
    mechanics: list[Mechanic] = field(default_factory=list, repr=False)
    contracts: list[Contract] = field(default_factory=list, repr=False)

    def add_car(self, car: Car) -> None:
        """Take ownership of *car*, updating the car's side of the link."""
        self.cars.append(car)
        car.team = self

    def add_mechanic(self, mechanic: Mechanic) -> None:
        """Employ *mechanic*, updating the mechanic's side of the link."""
        self.mechanics.append(mechanic)
        mechanic.teams.append(self)

    def add_contract(self, contract: Contract) -> None:
        self.contracts.append(contract)

    def active_drivers(self) -> list[Driver]:
        """Drivers currently under an open-ended contract with this team."""
        return [c.driver for c in self.contracts if c.is_active]

    def __str__(self) -> str:
        return self.name
