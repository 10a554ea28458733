"""Car model for the league management core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from league_engine.core.participation import Participation
    from league_engine.core.team import Team


@dataclass(eq=False)
class Car:
    """A race car.

    Cars are registered without an owner; ownership is assigned later
    through :meth:`Team.add_car`, after which it never changes.

    Attributes:
        model: Car model name.
        engine: Engine description.
        team: Owning team, or ``None`` while unassigned.
        participations: Races this car has been entered in.
    """

    model: str
    engine: str
    team: Team | None = field(default=None, repr=False)
    participations: list[Participation] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        return f"{self.model} ({self.engine})"
