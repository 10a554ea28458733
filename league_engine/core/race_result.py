"""Final classification record of a driver in a race."""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.driver import Driver
from league_engine.core.race import Race


@dataclass(frozen=True, eq=False)
class RaceResult:
    """Finishing position of one driver in one race.

    Attributes:
        driver: Classified driver.
        position: Finishing position, 1-based.
        race: Race the result belongs to.
        fastest_lap: Whether the driver set the fastest lap.
    """

    driver: Driver
    position: int
    race: Race
    fastest_lap: bool = False
