"""Tests for championship points and driver ranking."""

import pytest

from league_engine.core.driver import Driver
from league_engine.core.management import ManagementService
from league_engine.core.registration import RegistrationService
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import POINTS_TABLE, LeagueRules
from league_engine.core.scoring import (
    compute_driver_scores,
    points_for_position,
    rank_drivers,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class _Season:
    """A small season builder: one team, one car per driver, N races."""

    def __init__(self, n_races: int = 3) -> None:
        self.repository = LeagueRepository()
        self.registry = RegistrationService(self.repository)
        self.manager = ManagementService(self.repository)
        self.country = self.registry.register_country(1, "Argentina")
        self.team = self.registry.register_team("Alpha", self.country)
        self.races = []
        for i in range(n_races):
            circuit = self.registry.register_circuit(
                f"Circuit {i + 1}", 4000, self.country
            )
            self.races.append(
                self.registry.register_race(f"{i + 1}-03-2024", 50, "14:00", circuit)
            )
        self._cars = 0

    def driver(self, dni: str, first: str, last: str) -> Driver:
        driver = self.registry.register_driver(dni, first, last, self.country, 1)
        self.manager.assign_driver_to_team(driver, self.team, "01-01-2024")
        return driver

    def finish(self, race_index: int, driver: Driver, position: int) -> None:
        race = self.races[race_index]
        self._cars += 1
        car = self.registry.register_car(f"C{self._cars}", "Engine")
        self.manager.assign_car_to_team(car, self.team)
        self.manager.assign_to_race(race, driver, car)
        self.manager.record_result(race, driver, position)


# ---------------------------------------------------------------------------
# Points table
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("position", "points"),
    [(1, 25), (2, 18), (3, 15), (4, 12), (5, 10), (6, 8), (7, 6), (8, 4),
     (9, 2), (10, 1), (11, 0), (20, 0)],
)
def test_points_for_position(position: int, points: int) -> None:
    """Top ten score from the table; everyone else scores zero."""
    assert points_for_position(position) == points


def test_points_table_is_non_increasing() -> None:
    """Finishing higher never earns fewer points."""
    assert list(POINTS_TABLE) == sorted(POINTS_TABLE, reverse=True)


def test_custom_points_table() -> None:
    """A shorter table only rewards its own positions."""
    assert points_for_position(2, (10, 5)) == 5
    assert points_for_position(3, (10, 5)) == 0


# ---------------------------------------------------------------------------
# Totals and ranking
# ---------------------------------------------------------------------------


def test_driver_total_over_several_races() -> None:
    """1st, 5th, and 11th add up to 25 + 10 + 0."""
    season = _Season()
    juan = season.driver("30111222", "Juan", "Perez")
    season.finish(0, juan, 1)
    season.finish(1, juan, 5)
    season.finish(2, juan, 11)

    scores = compute_driver_scores(season.repository)
    assert [(s.driver, s.points) for s in scores] == [(juan, 35)]


def test_drivers_without_results_score_zero() -> None:
    """Every registered driver appears, in registration order."""
    season = _Season()
    juan = season.driver("30111222", "Juan", "Perez")
    pedro = season.driver("31222333", "Pedro", "Diaz")
    season.finish(0, pedro, 3)

    scores = compute_driver_scores(season.repository)
    assert [s.driver for s in scores] == [juan, pedro]
    assert [s.points for s in scores] == [0, 15]


def test_ranking_by_points_descending() -> None:
    """Higher totals rank first."""
    season = _Season()
    juan = season.driver("30111222", "Juan", "Perez")
    pedro = season.driver("31222333", "Pedro", "Diaz")
    luis = season.driver("32444555", "Luis", "Sosa")
    season.finish(0, juan, 3)
    season.finish(0, pedro, 1)
    season.finish(0, luis, 2)

    ranking = rank_drivers(season.repository)
    assert [s.driver for s in ranking] == [pedro, luis, juan]
    assert [s.points for s in ranking] == [25, 18, 15]


def test_ties_keep_registration_order() -> None:
    """Drivers level on points stay in the order they were registered."""
    season = _Season()
    juan = season.driver("30111222", "Juan", "Perez")
    pedro = season.driver("31222333", "Pedro", "Diaz")
    luis = season.driver("32444555", "Luis", "Sosa")
    # Pedro and Luis both reach 25; Pedro was registered first.
    season.finish(0, luis, 1)
    season.finish(0, pedro, 2)
    season.finish(1, pedro, 7)
    season.finish(2, pedro, 10)

    ranking = rank_drivers(season.repository)
    assert [(s.driver, s.points) for s in ranking] == [
        (pedro, 25),
        (luis, 25),
        (juan, 0),
    ]


def test_ranking_uses_rules_points_table() -> None:
    """The rules object supplies the points table."""
    season = _Season(n_races=1)
    juan = season.driver("30111222", "Juan", "Perez")
    season.finish(0, juan, 2)

    rules = LeagueRules(points_table=(10, 6, 4))
    ranking = rank_drivers(season.repository, rules)
    assert ranking[0].points == 6
    assert str(ranking[0]) == "Juan Perez: 6 points"
