"""In-memory system store holding every entity of the league.

The repository is the single source of truth for existence checks and
lookups.  It is created explicitly and handed to each service; the
``add_*`` methods append without validating, so callers other than the
services (such as the CSV import layer) are responsible for consistency.
"""

from __future__ import annotations

from league_engine.core.car import Car
from league_engine.core.circuit import Circuit
from league_engine.core.country import Country
from league_engine.core.dates import normalize_date
from league_engine.core.driver import Driver
from league_engine.core.mechanic import Mechanic
from league_engine.core.race import Race
from league_engine.core.race_result import RaceResult
from league_engine.core.team import Team


def _same_name(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


class LeagueRepository:
    """Canonical collections of every entity type.

    Attributes:
        countries: Registered countries.
        teams: Registered teams.
        circuits: Registered circuits.
        races: Registered races.
        drivers: Registered drivers.
        mechanics: Registered mechanics.
        cars: Registered cars.
        results: Recorded race results.
    """

    __slots__ = (
        "countries",
        "teams",
        "circuits",
        "races",
        "drivers",
        "mechanics",
        "cars",
        "results",
    )

    def __init__(self) -> None:
        self.countries: list[Country] = []
        self.teams: list[Team] = []
        self.circuits: list[Circuit] = []
        self.races: list[Race] = []
        self.drivers: list[Driver] = []
        self.mechanics: list[Mechanic] = []
        self.cars: list[Car] = []
        self.results: list[RaceResult] = []

    # -- Insertion ------------------------------------------------------------

    def add_country(self, country: Country) -> None:
        self.countries.append(country)

    def add_team(self, team: Team) -> None:
        self.teams.append(team)
        team.country.add_team(team)

    def add_circuit(self, circuit: Circuit) -> None:
        self.circuits.append(circuit)
        circuit.country.add_circuit(circuit)

    def add_race(self, race: Race) -> None:
        self.races.append(race)
        race.country.add_race(race)

    def add_driver(self, driver: Driver) -> None:
        self.drivers.append(driver)
        driver.country.add_person(driver)

    def add_mechanic(self, mechanic: Mechanic) -> None:
        self.mechanics.append(mechanic)
        mechanic.country.add_person(mechanic)

    def add_car(self, car: Car) -> None:
        self.cars.append(car)

    def add_result(self, result: RaceResult) -> None:
        self.results.append(result)

    # -- Lookup ---------------------------------------------------------------

    def find_country(self, country_id: int) -> Country | None:
        for country in self.countries:
            if country.country_id == country_id:
                return country
        return None

    def find_country_by_name(self, name: str) -> Country | None:
        for country in self.countries:
            if _same_name(country.name, name):
                return country
        return None

    def find_team(self, name: str) -> Team | None:
        for team in self.teams:
            if _same_name(team.name, name):
                return team
        return None

    def find_circuit(self, name: str) -> Circuit | None:
        for circuit in self.circuits:
            if _same_name(circuit.name, name):
                return circuit
        return None

    def find_driver(self, dni: str) -> Driver | None:
        for driver in self.drivers:
            if driver.dni == dni.strip():
                return driver
        return None

    def find_mechanic(self, dni: str) -> Mechanic | None:
        for mechanic in self.mechanics:
            if mechanic.dni == dni.strip():
                return mechanic
        return None

    def find_car(self, model: str) -> Car | None:
        """Return the first car registered under *model*, if any."""
        for car in self.cars:
            if _same_name(car.model, model):
                return car
        return None

    def find_race(self, circuit: Circuit, date: str) -> Race | None:
        """Return the race held at *circuit* on *date* (any date spelling)."""
        wanted = normalize_date(date)
        for race in self.races:
            if race.circuit is circuit and race.normalized_date == wanted:
                return race
        return None

    def results_for_race(self, race: Race) -> list[RaceResult]:
        return [r for r in self.results if r.race is race]

    def results_for_driver(self, driver: Driver) -> list[RaceResult]:
        return [r for r in self.results if r.driver is driver]

    def contains(self, entity: object) -> bool:
        """Return ``True`` if *entity* is the very object stored here."""
        collection = self._collection_for(entity)
        return any(item is entity for item in collection)

    def _collection_for(self, entity: object) -> list:
        if isinstance(entity, Country):
            return self.countries
        if isinstance(entity, Team):
            return self.teams
        if isinstance(entity, Circuit):
            return self.circuits
        if isinstance(entity, Race):
            return self.races
        if isinstance(entity, Driver):
            return self.drivers
        if isinstance(entity, Mechanic):
            return self.mechanics
        if isinstance(entity, Car):
            return self.cars
        if isinstance(entity, RaceResult):
            return self.results
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}")

    def __repr__(self) -> str:
        return (
            f"LeagueRepository(countries={len(self.countries)}, "
            f"teams={len(self.teams)}, circuits={len(self.circuits)}, "
            f"races={len(self.races)}, drivers={len(self.drivers)}, "
            f"mechanics={len(self.mechanics)}, cars={len(self.cars)}, "
            f"results={len(self.results)})"
        )
