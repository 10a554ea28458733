"""Championship points computed from recorded race results.

Points follow a fixed table for the top ten finishers
``[25, 18, 15, 12, 10, 8, 6, 4, 2, 1]``; any other position scores
nothing.  Rankings are sorted by points descending, and drivers tied on
points keep their registration order.
"""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.driver import Driver
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import DEFAULT_RULES, POINTS_TABLE, LeagueRules


@dataclass(frozen=True)
class DriverScore:
    """Total championship points of one driver.

    Attributes:
        driver: Scored driver.
        points: Sum of points over all of the driver's results.
    """

    driver: Driver
    points: int

    def __str__(self) -> str:
        return f"{self.driver.full_name}: {self.points} points"


def points_for_position(
    position: int, points_table: tuple[int, ...] = POINTS_TABLE
) -> int:
    """Return the points awarded for finishing in *position* (1-based)."""
    if 1 <= position <= len(points_table):
        return points_table[position - 1]
    return 0


def compute_driver_scores(
    repository: LeagueRepository, rules: LeagueRules = DEFAULT_RULES
) -> list[DriverScore]:
    """Sum the points of every driver over all recorded results.

    Drivers without results score zero.  The list follows driver
    registration order; use :func:`rank_drivers` for a standings order.

    Args:
        repository: Store holding drivers and results.
        rules: Supplies the points table.

    Returns:
        One :class:`DriverScore` per registered driver.
    """
    totals: dict[int, int] = {id(driver): 0 for driver in repository.drivers}
    for result in repository.results:
        key = id(result.driver)
        if key in totals:
            totals[key] += points_for_position(result.position, rules.points_table)

    return [
        DriverScore(driver=driver, points=totals[id(driver)])
        for driver in repository.drivers
    ]


def rank_drivers(
    repository: LeagueRepository, rules: LeagueRules = DEFAULT_RULES
) -> list[DriverScore]:
    """Return driver scores sorted by points, highest first.

    ``sorted`` is stable, so drivers level on points stay in the order
    they were registered.
    """
    return sorted(
        compute_driver_scores(repository, rules),
        key=lambda score: score.points,
        reverse=True,
    )
