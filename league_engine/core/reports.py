"""Read-only reports over the league repository.

None of these functions mutate state.  Date ranges are compared on
normalised ``YYYY-MM-DD`` dates, so ``"5-3-2024"`` and ``"05-03-2024"``
refer to the same day.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from league_engine.core.circuit import Circuit
from league_engine.core.dates import normalize_date
from league_engine.core.driver import Driver
from league_engine.core.errors import PreconditionError
from league_engine.core.mechanic import Mechanic
from league_engine.core.participation import Participation
from league_engine.core.race_result import RaceResult
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import DEFAULT_RULES, LeagueRules
from league_engine.core.scoring import rank_drivers
from league_engine.core.team import Team

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def results_between(
    repository: LeagueRepository, start: str, end: str
) -> list[RaceResult]:
    """Return results of races held from *start* to *end*, both inclusive.

    Results come grouped by race: ordered by race date, then by race
    registration order for races on the same day, then by position.

    Raises:
        InvalidFormatError: If either bound is not a valid date.
    """
    low, high = normalize_date(start), normalize_date(end)
    race_order = {id(race): index for index, race in enumerate(repository.races)}

    selected = [
        result
        for result in repository.results
        if low <= result.race.normalized_date <= high
    ]
    return sorted(
        selected,
        key=lambda r: (
            r.race.normalized_date,
            race_order.get(id(r.race), len(race_order)),
            r.position,
        ),
    )


# ---------------------------------------------------------------------------
# Driver statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DriverStats:
    """Snapshot of a driver's lifetime counters."""

    dni: str
    name: str
    wins: int
    podiums: int
    pole_positions: int
    fastest_laps: int

    @classmethod
    def of(cls, driver: Driver) -> DriverStats:
        return cls(
            dni=driver.dni,
            name=driver.full_name,
            wins=driver.wins,
            podiums=driver.podiums,
            pole_positions=driver.pole_positions,
            fastest_laps=driver.fastest_laps,
        )


def driver_stats(repository: LeagueRepository, dni: str) -> DriverStats:
    driver = repository.find_driver(dni)
    if driver is None:
        raise PreconditionError(f"No driver with DNI {dni} is registered.")
    return DriverStats.of(driver)


def all_driver_stats(repository: LeagueRepository) -> list[DriverStats]:
    return [DriverStats.of(driver) for driver in repository.drivers]


# ---------------------------------------------------------------------------
# Team reports
# ---------------------------------------------------------------------------


def car_usage_by_team(
    repository: LeagueRepository,
) -> dict[Team | None, list[Participation]]:
    """Group every race entry by the team owning the car used.

    Teams appear in registration order with their cars' entries in car
    registration order.  Entries of cars without a team are collected
    under ``None``, which is only present when such entries exist.
    """
    report: dict[Team | None, list[Participation]] = {
        team: [] for team in repository.teams
    }
    for car in repository.cars:
        if not car.participations:
            continue
        report.setdefault(car.team, []).extend(car.participations)
    return report


def mechanics_by_team(repository: LeagueRepository) -> dict[Team, list[Mechanic]]:
    """Map every team, including those without staff, to its mechanics."""
    return {team: list(team.mechanics) for team in repository.teams}


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


def count_driver_at_circuit(
    repository: LeagueRepository, driver: Driver, circuit: Circuit
) -> int:
    """Number of races at *circuit* that *driver* was entered in."""
    return sum(
        1
        for race in repository.races
        if race.circuit is circuit
        for entry in race.participations
        if entry.driver is driver
    )


def count_races_at_circuit(repository: LeagueRepository, circuit: Circuit) -> int:
    return sum(1 for race in repository.races if race.circuit is circuit)


# ---------------------------------------------------------------------------
# Tabular output
# ---------------------------------------------------------------------------


def standings_frame(
    repository: LeagueRepository, rules: LeagueRules = DEFAULT_RULES
) -> pd.DataFrame:
    """Driver standings as a :class:`pandas.DataFrame`.

    Columns: ``rank``, ``dni``, ``driver``, ``points``, ``wins``,
    ``podiums``.  Rows follow :func:`rank_drivers`.
    """
    rows: list[dict[str, object]] = [
        {
            "rank": rank,
            "dni": score.driver.dni,
            "driver": score.driver.full_name,
            "points": score.points,
            "wins": score.driver.wins,
            "podiums": score.driver.podiums,
        }
        for rank, score in enumerate(rank_drivers(repository, rules), start=1)
    ]
    return pd.DataFrame(
        rows, columns=["rank", "dni", "driver", "points", "wins", "podiums"]
    )
