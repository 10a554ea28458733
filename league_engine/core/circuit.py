"""Circuit model for the league management core."""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.country import Country


@dataclass(frozen=True, eq=False)
class Circuit:
    """A racing circuit.  Immutable once registered.

    Attributes:
        name: Unique circuit name (compared case-insensitively).
        length: Lap length, a positive integer.
        country: Country the circuit is located in.
    """

    name: str
    length: int
    country: Country

    def __str__(self) -> str:
        return self.name
