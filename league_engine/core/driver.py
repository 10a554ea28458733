"""Driver model for the league management core.

A driver embeds a :class:`Person` and keeps four lifetime counters that
are only ever incremented by recorded results and pole positions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from league_engine.core.person import Person, PersonDetails

if TYPE_CHECKING:
    from league_engine.core.contract import Contract
    from league_engine.core.participation import Participation
    from league_engine.core.team import Team


@dataclass(eq=False)
class Driver(PersonDetails):
    """A racing driver.

    Attributes:
        person: Identity details (DNI, names, country).
        competition_number: Non-negative racing number.
        wins: Races finished in first place.
        pole_positions: Pole positions granted.
        fastest_laps: Fastest laps recorded with a result.
        podiums: Races finished in the top three.
        participations: Race entries of this driver.
        contracts: Team contracts, past and active, in signing order.
    """

    person: Person
    competition_number: int
    wins: int = 0
    pole_positions: int = 0
    fastest_laps: int = 0
    podiums: int = 0
    participations: list[Participation] = field(default_factory=list, repr=False)
    contracts: list[Contract] = field(default_factory=list, repr=False)

    def active_contract(self) -> Contract | None:
        """Return the open-ended contract, if the driver has one."""
        for contract in self.contracts:
            if contract.is_active:
                return contract
        return None

    def current_team(self) -> Team | None:
        contract = self.active_contract()
        return contract.team if contract is not None else None

    def add_participation(self, participation: Participation) -> None:
        self.participations.append(participation)

    def add_contract(self, contract: Contract) -> None:
        self.contracts.append(contract)

    def __str__(self) -> str:
        return f"{self.full_name} #{self.competition_number}"
