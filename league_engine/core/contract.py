"""Driver-team contract record."""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.dates import normalize_date
from league_engine.core.driver import Driver
from league_engine.core.team import Team


@dataclass(eq=False)
class Contract:
    """A period during which a driver races for a team.

    Attributes:
        start_date: First day of the contract (``d-m-yyyy``).
        driver: Contracted driver.
        team: Contracting team.
        end_date: Last day of the contract, or ``""`` while active.
    """

    start_date: str
    driver: Driver
    team: Team
    end_date: str = ""

    @property
    def is_active(self) -> bool:
        return not (self.end_date and self.end_date.strip())

    @property
    def normalized_start(self) -> str:
        return normalize_date(self.start_date)

    @property
    def normalized_end(self) -> str | None:
        """ISO end date, or ``None`` for an open-ended contract."""
        if self.is_active:
            return None
        return normalize_date(self.end_date)

    def __str__(self) -> str:
        until = self.end_date if not self.is_active else "present"
        return (
            f"{self.driver.full_name} @ {self.team.name} "
            f"({self.start_date} - {until})"
        )
