"""CSV import of the initial league data.

This module builds the starting object graph from a directory of CSV
files, one per entity type plus link files.  Rows are wired directly
into a :class:`LeagueRepository` without going through the registration
rules: the files are trusted to describe a consistent league, and any
broken reference or malformed number aborts the whole load with a
:class:`DataIntegrityError` naming the file and line.

Expected files (first row is a header)::

    countries.csv        country_id,name
    teams.csv            name,country_id
    circuits.csv         name,length,country_id
    races.csv            date,laps,time,circuit
    drivers.csv          dni,first_name,last_name,country_id,competition_number,
                         wins,pole_positions,fastest_laps,podiums
    mechanics.csv        dni,first_name,last_name,country_id,specialty,
                         years_experience
    cars.csv             model,engine,team
    mechanic_teams.csv   dni,team
    results.csv          dni,circuit,race_date,position[,fastest_lap]

Optional files::

    contracts.csv        dni,team,start_date[,end_date]
    participations.csv   dni,car,circuit,race_date[,assigned_on]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pandas as pd

from league_engine.core.car import Car
from league_engine.core.circuit import Circuit
from league_engine.core.contract import Contract
from league_engine.core.country import Country
from league_engine.core.dates import normalize_date
from league_engine.core.driver import Driver
from league_engine.core.errors import DataIntegrityError, InvalidFormatError
from league_engine.core.mechanic import Mechanic, Specialty
from league_engine.core.participation import Participation
from league_engine.core.person import Person
from league_engine.core.race import Race
from league_engine.core.race_result import RaceResult
from league_engine.core.repository import LeagueRepository
from league_engine.core.team import Team

logger = logging.getLogger(__name__)

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "y", "si", "sí"})

# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _read_table(
    data_dir: Path,
    filename: str,
    columns: tuple[str, ...],
    required: bool = True,
) -> pd.DataFrame | None:
    """Read *filename* with every column as text.

    Returns ``None`` for a missing optional file.
    """
    path = data_dir / filename
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Data file not found: {path}")
        return None

    df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataIntegrityError(
            f"Error in {filename}: missing column(s) {', '.join(missing)}."
        )
    return df


def _rows(
    df: pd.DataFrame, filename: str, columns: tuple[str, ...]
) -> Iterator[tuple[int, dict[str, str]]]:
    """Yield ``(line_number, row)`` pairs, skipping blank lines.

    Line numbers count the header as line 1.  A row with any of
    *columns* empty is reported as incomplete.
    """
    for index, record in enumerate(df.to_dict("records")):
        line = index + 2
        row = {
            key: "" if pd.isna(value) else str(value).strip()
            for key, value in record.items()
        }
        if not any(row.values()):
            continue
        blank = [c for c in columns if not row.get(c)]
        if blank:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): incomplete row, "
                f"missing {', '.join(blank)}."
            )
        yield line, row


def _int(value: str, filename: str, line: int, label: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise DataIntegrityError(
            f"Error in {filename} (line {line}): {label} '{value}' is not a number."
        ) from None


def _date(value: str, filename: str, line: int) -> str:
    try:
        normalize_date(value)
    except InvalidFormatError as exc:
        raise DataIntegrityError(f"Error in {filename} (line {line}): {exc}") from exc
    return value


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().casefold() in _TRUE_VALUES


# ---------------------------------------------------------------------------
# Reference resolution
# ---------------------------------------------------------------------------


class _Resolver:
    """Looks up already-loaded entities, failing loudly on dangling keys."""

    def __init__(self, repository: LeagueRepository) -> None:
        self.repository = repository

    def country(self, raw_id: str, filename: str, line: int) -> Country:
        country_id = _int(raw_id, filename, line, "country id")
        country = self.repository.find_country(country_id)
        if country is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): country id {country_id} "
                "does not exist in countries.csv."
            )
        return country

    def team(self, name: str, filename: str, line: int) -> Team:
        team = self.repository.find_team(name)
        if team is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): team '{name}' does not "
                "exist in teams.csv."
            )
        return team

    def circuit(self, name: str, filename: str, line: int) -> Circuit:
        circuit = self.repository.find_circuit(name)
        if circuit is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): circuit '{name}' does not "
                "exist in circuits.csv."
            )
        return circuit

    def driver(self, dni: str, filename: str, line: int) -> Driver:
        driver = self.repository.find_driver(dni)
        if driver is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): driver with DNI {dni} does "
                "not exist in drivers.csv."
            )
        return driver

    def mechanic(self, dni: str, filename: str, line: int) -> Mechanic:
        mechanic = self.repository.find_mechanic(dni)
        if mechanic is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): mechanic with DNI {dni} "
                "does not exist in mechanics.csv."
            )
        return mechanic

    def car(self, model: str, filename: str, line: int) -> Car:
        car = self.repository.find_car(model)
        if car is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): car '{model}' does not "
                "exist in cars.csv."
            )
        return car

    def race(self, circuit_name: str, date: str, filename: str, line: int) -> Race:
        circuit = self.circuit(circuit_name, filename, line)
        race = self.repository.find_race(circuit, _date(date, filename, line))
        if race is None:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): no race at '{circuit_name}' "
                f"on {date} in races.csv."
            )
        return race


# ---------------------------------------------------------------------------
# Entity loaders
# ---------------------------------------------------------------------------


def _load_countries(data_dir: Path, repo: LeagueRepository) -> None:
    filename, cols = "countries.csv", ("country_id", "name")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        country_id = _int(row["country_id"], filename, line, "country id")
        repo.add_country(Country(country_id=country_id, name=row["name"]))


def _load_teams(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename, cols = "teams.csv", ("name", "country_id")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        country = res.country(row["country_id"], filename, line)
        repo.add_team(Team(name=row["name"], country=country))


def _load_circuits(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename, cols = "circuits.csv", ("name", "length", "country_id")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        length = _int(row["length"], filename, line, "length")
        country = res.country(row["country_id"], filename, line)
        repo.add_circuit(Circuit(name=row["name"], length=length, country=country))


def _load_races(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename, cols = "races.csv", ("date", "laps", "time", "circuit")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        date = _date(row["date"], filename, line)
        laps = _int(row["laps"], filename, line, "number of laps")
        circuit = res.circuit(row["circuit"], filename, line)
        repo.add_race(Race(date=date, laps=laps, time=row["time"], circuit=circuit))


def _load_drivers(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename = "drivers.csv"
    cols = (
        "dni",
        "first_name",
        "last_name",
        "country_id",
        "competition_number",
        "wins",
        "pole_positions",
        "fastest_laps",
        "podiums",
    )
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        country = res.country(row["country_id"], filename, line)
        counters = {
            key: _int(row[key], filename, line, key.replace("_", " "))
            for key in cols[4:]
        }
        person = Person(row["dni"], row["first_name"], row["last_name"], country)
        repo.add_driver(Driver(person=person, **counters))


def _load_mechanics(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename = "mechanics.csv"
    cols = (
        "dni",
        "first_name",
        "last_name",
        "country_id",
        "specialty",
        "years_experience",
    )
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        country = res.country(row["country_id"], filename, line)
        try:
            specialty = Specialty.parse(row["specialty"])
        except InvalidFormatError as exc:
            raise DataIntegrityError(
                f"Error in {filename} (line {line}): {exc}"
            ) from exc
        years = _int(row["years_experience"], filename, line, "years of experience")
        person = Person(row["dni"], row["first_name"], row["last_name"], country)
        repo.add_mechanic(
            Mechanic(person=person, specialty=specialty, years_experience=years)
        )


def _load_cars(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename, cols = "cars.csv", ("model", "engine", "team")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        team = res.team(row["team"], filename, line)
        car = Car(model=row["model"], engine=row["engine"])
        team.add_car(car)
        repo.add_car(car)


def _link_mechanics(data_dir: Path, res: _Resolver) -> None:
    filename, cols = "mechanic_teams.csv", ("dni", "team")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        mechanic = res.mechanic(row["dni"], filename, line)
        team = res.team(row["team"], filename, line)
        team.add_mechanic(mechanic)


def _load_contracts(data_dir: Path, res: _Resolver) -> None:
    filename, cols = "contracts.csv", ("dni", "team", "start_date")
    df = _read_table(data_dir, filename, cols, required=False)
    if df is None:
        return
    for line, row in _rows(df, filename, cols):
        driver = res.driver(row["dni"], filename, line)
        team = res.team(row["team"], filename, line)
        start = _date(row["start_date"], filename, line)
        end = row.get("end_date", "")
        if end:
            _date(end, filename, line)
        contract = Contract(start_date=start, driver=driver, team=team, end_date=end)
        driver.add_contract(contract)
        team.add_contract(contract)


def _load_participations(data_dir: Path, res: _Resolver) -> None:
    filename, cols = "participations.csv", ("dni", "car", "circuit", "race_date")
    df = _read_table(data_dir, filename, cols, required=False)
    if df is None:
        return
    for line, row in _rows(df, filename, cols):
        driver = res.driver(row["dni"], filename, line)
        car = res.car(row["car"], filename, line)
        race = res.race(row["circuit"], row["race_date"], filename, line)
        assigned_on = _date(row.get("assigned_on") or race.date, filename, line)
        entry = Participation(
            assigned_on=assigned_on, driver=driver, car=car, race=race
        )
        race.add_participation(entry)
        driver.add_participation(entry)
        car.participations.append(entry)


def _load_results(data_dir: Path, repo: LeagueRepository, res: _Resolver) -> None:
    filename, cols = "results.csv", ("dni", "circuit", "race_date", "position")
    for line, row in _rows(_read_table(data_dir, filename, cols), filename, cols):
        driver = res.driver(row["dni"], filename, line)
        race = res.race(row["circuit"], row["race_date"], filename, line)
        position = _int(row["position"], filename, line, "position")
        repo.add_result(
            RaceResult(
                driver=driver,
                position=position,
                race=race,
                fastest_lap=_flag(row.get("fastest_lap")),
            )
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_league(data_dir: Path | str) -> LeagueRepository:
    """Build a repository from the CSV files in *data_dir*.

    Files are read in dependency order so every reference resolves to an
    entity loaded earlier.  Driver counters are taken as stored; loaded
    results do not increment them.

    Args:
        data_dir: Directory holding the CSV files described in the module
            docstring.

    Returns:
        A fully wired :class:`LeagueRepository`.

    Raises:
        FileNotFoundError: If a required file is missing.
        DataIntegrityError: If a row is incomplete, holds a malformed
            value, or references an entity that does not exist.
    """
    data_dir = Path(data_dir)
    repo = LeagueRepository()
    res = _Resolver(repo)

    _load_countries(data_dir, repo)
    _load_teams(data_dir, repo, res)
    _load_circuits(data_dir, repo, res)
    _load_races(data_dir, repo, res)
    _load_drivers(data_dir, repo, res)
    _load_mechanics(data_dir, repo, res)
    _load_cars(data_dir, repo, res)
    _link_mechanics(data_dir, res)
    _load_contracts(data_dir, res)
    _load_participations(data_dir, res)
    _load_results(data_dir, repo, res)

    logger.info("Loaded league data from %s: %r", data_dir, repo)
    return repo
