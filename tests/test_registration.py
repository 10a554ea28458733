"""Tests for entity registration: required fields, formats, and uniqueness."""

import pytest

from league_engine.core.country import Country
from league_engine.core.errors import (
    ConsistencyError,
    DuplicateEntityError,
    InvalidFormatError,
    LeagueError,
    MissingFieldError,
)
from league_engine.core.mechanic import Specialty
from league_engine.core.registration import RegistrationService
from league_engine.core.repository import LeagueRepository

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _make_service() -> tuple[RegistrationService, Country]:
    service = RegistrationService(LeagueRepository())
    country = service.register_country(1, "Argentina")
    return service, country


# ---------------------------------------------------------------------------
# Countries
# ---------------------------------------------------------------------------


def test_register_country_adds_to_repository() -> None:
    """A valid country is stored and returned."""
    service = RegistrationService(LeagueRepository())
    country = service.register_country(7, "Perú")
    assert service.repository.countries == [country]
    assert country.country_id == 7
    assert country.people == [] and country.teams == []


def test_country_id_accepts_digit_string() -> None:
    """Numeric text from a presentation layer is converted to an int."""
    service = RegistrationService(LeagueRepository())
    country = service.register_country("12", "Brasil")
    assert country.country_id == 12


@pytest.mark.parametrize("name", ["", "   ", None])
def test_country_name_required(name: str | None) -> None:
    """Blank or missing country names are rejected."""
    service = RegistrationService(LeagueRepository())
    with pytest.raises(MissingFieldError, match="country name is required"):
        service.register_country(1, name)


@pytest.mark.parametrize("name", ["Argentina2", "Reino-Unido", "España!"])
def test_country_name_letters_only(name: str) -> None:
    """Digits and symbols in a country name are rejected."""
    service = RegistrationService(LeagueRepository())
    with pytest.raises(InvalidFormatError, match="letters and spaces"):
        service.register_country(1, name)


def test_country_name_with_accents_and_spaces() -> None:
    """Accented Latin letters and internal spaces are valid."""
    service = RegistrationService(LeagueRepository())
    country = service.register_country(3, "Países Bajos")
    assert country.name == "Países Bajos"


@pytest.mark.parametrize("country_id", [0, -4, "x1"])
def test_country_id_must_be_positive_integer(country_id: object) -> None:
    """Zero, negative, and non-numeric ids are rejected."""
    service = RegistrationService(LeagueRepository())
    with pytest.raises(InvalidFormatError):
        service.register_country(country_id, "Chile")


def test_country_duplicates_rejected() -> None:
    """Country id and name (any casing) must be unique."""
    service, _ = _make_service()
    with pytest.raises(DuplicateEntityError, match="id 1"):
        service.register_country(1, "Chile")
    with pytest.raises(DuplicateEntityError, match="named"):
        service.register_country(2, "ARGENTINA")
    assert len(service.repository.countries) == 1


# ---------------------------------------------------------------------------
# Teams and circuits
# ---------------------------------------------------------------------------


def test_register_team_links_country() -> None:
    """A new team is indexed under its country."""
    service, country = _make_service()
    team = service.register_team("Alpha", country)
    assert service.repository.teams == [team]
    assert country.teams == [team]
    assert team.cars == [] and team.mechanics == [] and team.contracts == []


def test_team_requires_name_and_country() -> None:
    """Missing name or country fails before anything is stored."""
    service, country = _make_service()
    with pytest.raises(MissingFieldError):
        service.register_team(" ", country)
    with pytest.raises(MissingFieldError, match="country"):
        service.register_team("Alpha", None)
    assert service.repository.teams == []


def test_team_name_unique_case_insensitive() -> None:
    """Team names differing only in case collide."""
    service, country = _make_service()
    service.register_team("Alpha", country)
    with pytest.raises(DuplicateEntityError, match="alpha"):
        service.register_team("alpha", country)


def test_team_country_must_be_registered() -> None:
    """A country object that is not in the repository is refused."""
    service, _ = _make_service()
    stray = Country(country_id=99, name="Atlantis")
    with pytest.raises(ConsistencyError, match="not registered"):
        service.register_team("Alpha", stray)


def test_team_country_must_be_a_country() -> None:
    """A plain string in place of a country is a league error, not a crash."""
    service, _ = _make_service()
    with pytest.raises(ConsistencyError, match="must be a Country"):
        service.register_team("Alpha", "Argentina")
    with pytest.raises(ConsistencyError, match="must be a Circuit"):
        service.register_race("28-04-2024", 57, "13:30", "Termas")
    assert service.repository.teams == []


def test_register_circuit_once() -> None:
    """A circuit registers once; a second registration in any case fails."""
    service, country = _make_service()
    circuit = service.register_circuit("Termas", 4806, country)
    assert country.circuits == [circuit]
    with pytest.raises(DuplicateEntityError):
        service.register_circuit("TERMAS", 5000, country)
    assert len(service.repository.circuits) == 1


@pytest.mark.parametrize("length", [0, -1, "abc"])
def test_circuit_length_must_be_positive(length: object) -> None:
    """Length must be an integer greater than zero."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError):
        service.register_circuit("Termas", length, country)


# ---------------------------------------------------------------------------
# Races
# ---------------------------------------------------------------------------


def test_register_race_derives_country_from_circuit() -> None:
    """The race's country is the circuit's country."""
    service, country = _make_service()
    circuit = service.register_circuit("Termas", 4806, country)
    race = service.register_race("28-04-2024", 57, "13:30", circuit)
    assert race.country is country
    assert country.races == [race]
    assert race.normalized_date == "2024-04-28"


@pytest.mark.parametrize(
    ("date", "laps", "time", "error"),
    [
        ("", 50, "14:00", MissingFieldError),
        ("31-02-2024", 50, "14:00", InvalidFormatError),
        ("2024-04-28", 50, "14:00", InvalidFormatError),
        ("28-04-2024", 50, "", MissingFieldError),
        ("28-04-2024", 0, "14:00", InvalidFormatError),
        ("28-04-2024", 50, "25:00", InvalidFormatError),
        ("28-04-2024", 50, "14:7", InvalidFormatError),
    ],
)
def test_race_field_validation(
    date: str, laps: int, time: str, error: type[LeagueError]
) -> None:
    """Each malformed race field raises its own validation error."""
    service, country = _make_service()
    circuit = service.register_circuit("Termas", 4806, country)
    with pytest.raises(error):
        service.register_race(date, laps, time, circuit)
    assert service.repository.races == []


def test_race_requires_circuit() -> None:
    """A race without a circuit is rejected."""
    service, _ = _make_service()
    with pytest.raises(MissingFieldError, match="circuit"):
        service.register_race("28-04-2024", 57, "13:30", None)


def test_one_race_per_circuit_and_date() -> None:
    """The same circuit cannot host two races on the same day, however spelled."""
    service, country = _make_service()
    termas = service.register_circuit("Termas", 4806, country)
    other = service.register_circuit("Buenos Aires", 4259, country)
    service.register_race("5-3-2024", 57, "13:30", termas)
    with pytest.raises(DuplicateEntityError, match="already scheduled"):
        service.register_race("05-03-2024", 40, "16:00", termas)
    # A different circuit on the same day is fine.
    service.register_race("05-03-2024", 60, "13:30", other)
    assert len(service.repository.races) == 2


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


def test_register_driver() -> None:
    """A valid driver is stored with its counters and indexed by country."""
    service, country = _make_service()
    driver = service.register_driver(
        "30111222", "Juan", "Perez", country, 10, wins=1, podiums=4
    )
    assert service.repository.drivers == [driver]
    assert country.people == [driver]
    assert driver.dni == "30111222"
    assert driver.full_name == "Juan Perez"
    assert driver.country is country
    assert (driver.wins, driver.podiums, driver.pole_positions) == (1, 4, 0)
    assert driver.participations == [] and driver.contracts == []


@pytest.mark.parametrize(
    ("dni", "message"),
    [
        ("12ab5678", "digits only"),
        ("123456", "between 7 and 8"),
        ("123456789", "between 7 and 8"),
        ("0000000", "positive"),
    ],
)
def test_driver_dni_format(dni: str, message: str) -> None:
    """DNI must be 7-8 digits with a positive value."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError, match=message):
        service.register_driver(dni, "Juan", "Perez", country, 10)


def test_driver_names_letters_only() -> None:
    """Names with digits or symbols are rejected; accents are allowed."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError, match="first name"):
        service.register_driver("30111222", "Juan3", "Perez", country, 10)
    with pytest.raises(InvalidFormatError, match="last name"):
        service.register_driver("30111222", "Juan", "Pérez_", country, 10)
    driver = service.register_driver("30111222", "José María", "Núñez", country, 10)
    assert driver.full_name == "José María Núñez"


@pytest.mark.parametrize(
    ("first", "last"),
    [("Antonín", "Dvořák"), ("Łukasz", "Kowalski"), ("Nico", "Hülkenberg"),
     ("Gergő", "Szőke"), ("Kemal", "Doğan")],
)
def test_driver_names_beyond_latin1(first: str, last: str) -> None:
    """Accented letters outside Latin-1 are valid name letters."""
    service, country = _make_service()
    driver = service.register_driver("30111222", first, last, country, 10)
    assert driver.full_name == f"{first} {last}"


@pytest.mark.parametrize(
    "first", ["Juan\nCarlos", "Juan\rCarlos", "Juan\u2028Carlos"]
)
def test_driver_name_line_breaks_rejected(first: str) -> None:
    """Words may only be separated by spaces or tabs."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError, match="first name"):
        service.register_driver("30111222", first, "Perez", country, 10)
    assert service.repository.drivers == []


@pytest.mark.parametrize("number", [-1, "diez", "1.5"])
def test_competition_number_non_negative_integer(number: object) -> None:
    """Competition number must be a non-negative whole number."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError):
        service.register_driver("30111222", "Juan", "Perez", country, number)


def test_competition_number_required() -> None:
    """A blank competition number is a missing field."""
    service, country = _make_service()
    with pytest.raises(MissingFieldError):
        service.register_driver("30111222", "Juan", "Perez", country, " ")


def test_driver_counters_validated() -> None:
    """Counters cannot be negative and wins cannot exceed podiums."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError, match="negative"):
        service.register_driver("30111222", "Juan", "Perez", country, 10, podiums=-1)
    with pytest.raises(InvalidFormatError, match="more wins than podiums"):
        service.register_driver("30111222", "Juan", "Perez", country, 10, wins=2)


def test_driver_dni_and_name_unique() -> None:
    """DNI and full name (any casing) must be unique among drivers."""
    service, country = _make_service()
    service.register_driver("30111222", "Juan", "Perez", country, 10)
    with pytest.raises(DuplicateEntityError, match="DNI 30111222"):
        service.register_driver("30111222", "Pedro", "Gomez", country, 11)
    with pytest.raises(DuplicateEntityError, match="named"):
        service.register_driver("30999888", "JUAN", "perez", country, 11)
    assert len(service.repository.drivers) == 1


def test_dni_shared_between_drivers_and_mechanics() -> None:
    """A mechanic cannot reuse a driver's DNI, and vice versa."""
    service, country = _make_service()
    service.register_driver("30111222", "Juan", "Perez", country, 10)
    with pytest.raises(DuplicateEntityError, match="driver with DNI"):
        service.register_mechanic(
            "30111222", "Carlos", "Gomez", country, Specialty.ENGINE, 5
        )
    service.register_mechanic(
        "20111333", "Carlos", "Gomez", country, Specialty.ENGINE, 5
    )
    with pytest.raises(DuplicateEntityError, match="mechanic with DNI"):
        service.register_driver("20111333", "Pedro", "Diaz", country, 3)


# ---------------------------------------------------------------------------
# Mechanics
# ---------------------------------------------------------------------------


def test_register_mechanic() -> None:
    """A valid mechanic is stored with no teams."""
    service, country = _make_service()
    mechanic = service.register_mechanic(
        "20111333", "Carlos", "Gómez", country, Specialty.AERODYNAMICS, 12
    )
    assert service.repository.mechanics == [mechanic]
    assert country.people == [mechanic]
    assert mechanic.specialty is Specialty.AERODYNAMICS
    assert mechanic.teams == []


def test_mechanic_specialty_by_name() -> None:
    """Specialty may be given by its member name; other strings are rejected."""
    service, country = _make_service()
    mechanic = service.register_mechanic(
        "20111333", "Carlos", "Gomez", country, "tires", 2
    )
    assert mechanic.specialty is Specialty.TIRES
    with pytest.raises(InvalidFormatError, match="Unknown specialty"):
        service.register_mechanic("20111444", "Ana", "Sosa", country, "paint", 2)
    with pytest.raises(MissingFieldError, match="specialty"):
        service.register_mechanic("20111444", "Ana", "Sosa", country, None, 2)
    for blank in ("", "  "):
        with pytest.raises(MissingFieldError, match="specialty"):
            service.register_mechanic("20111444", "Ana", "Sosa", country, blank, 2)


def test_mechanic_experience_not_negative() -> None:
    """Negative years of experience are rejected."""
    service, country = _make_service()
    with pytest.raises(InvalidFormatError, match="experience"):
        service.register_mechanic(
            "20111333", "Carlos", "Gomez", country, Specialty.ENGINE, -1
        )


# ---------------------------------------------------------------------------
# Cars
# ---------------------------------------------------------------------------


def test_register_car_without_team() -> None:
    """Cars start without an owning team."""
    service, _ = _make_service()
    car = service.register_car("X1", "EngineA")
    assert service.repository.cars == [car]
    assert car.team is None
    assert car.participations == []


def test_car_model_and_engine_validation() -> None:
    """Model needs two characters; engine is required."""
    service, _ = _make_service()
    with pytest.raises(MissingFieldError, match="model"):
        service.register_car("", "EngineA")
    with pytest.raises(InvalidFormatError, match="too short"):
        service.register_car("X", "EngineA")
    with pytest.raises(MissingFieldError, match="engine"):
        service.register_car("X1", "  ")
    assert service.repository.cars == []
