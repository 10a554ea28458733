"""League-wide rule parameters shared by the services."""

from __future__ import annotations

from dataclasses import dataclass

# Championship points for positions 1-10.
POINTS_TABLE: tuple[int, ...] = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1)


@dataclass(frozen=True)
class LeagueRules:
    """Tunable limits applied by registration, results, and scoring.

    Attributes:
        points_table: Points awarded by finishing position, index 0 being
            the winner.  Positions beyond the table score nothing.
        max_position: Highest classifiable finishing position.
        dni_min_digits: Minimum number of digits in a DNI.
        dni_max_digits: Maximum number of digits in a DNI.
        min_model_length: Minimum length of a car model name.
    """

    points_table: tuple[int, ...] = POINTS_TABLE
    max_position: int = 20
    dni_min_digits: int = 7
    dni_max_digits: int = 8
    min_model_length: int = 2

    def __post_init__(self) -> None:
        """Validate rule parameters."""
        if not self.points_table:
            raise ValueError("points_table must not be empty.")
        if any(points < 0 for points in self.points_table):
            raise ValueError("points_table values must be >= 0.")
        if any(a < b for a, b in zip(self.points_table, self.points_table[1:])):
            raise ValueError("points_table must be non-increasing.")
        if self.max_position < 1:
            raise ValueError("max_position must be >= 1.")
        if not 1 <= self.dni_min_digits <= self.dni_max_digits:
            raise ValueError("dni digit bounds must satisfy 1 <= min <= max.")
        if self.min_model_length < 1:
            raise ValueError("min_model_length must be >= 1.")


DEFAULT_RULES: LeagueRules = LeagueRules()
