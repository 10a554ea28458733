"""Registration of new entities into the league repository.

Each ``register_*`` operation validates its inputs in a fixed order
(required fields, formats, references, uniqueness) and raises the first
violation found.  Nothing is added to the repository unless every check
passes.
"""

from __future__ import annotations

import logging
import re

from league_engine.core.car import Car
from league_engine.core.circuit import Circuit
from league_engine.core.country import Country
from league_engine.core.dates import (
    is_valid_time,
    normalize_date,
    parse_day_month_year,
)
from league_engine.core.driver import Driver
from league_engine.core.errors import (
    ConsistencyError,
    DuplicateEntityError,
    InvalidFormatError,
    MissingFieldError,
)
from league_engine.core.mechanic import Mechanic, Specialty
from league_engine.core.person import Person
from league_engine.core.race import Race
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import DEFAULT_RULES, LeagueRules
from league_engine.core.team import Team

logger = logging.getLogger(__name__)

# Words of letters (any script, accents included) separated by spaces or tabs.
_LETTER = r"[^\W\d_]"
_NAME_PATTERN = re.compile(rf"^{_LETTER}+(?:[ \t]+{_LETTER}+)*$")
_DIGITS = re.compile(r"^\d+$", re.ASCII)
_INTEGER = re.compile(r"^[+-]?\d+$", re.ASCII)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _require_text(value: str | None, message: str) -> str:
    """Return *value* stripped, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise MissingFieldError(message)
    return str(value).strip()


def _require_ref(value: object, message: str) -> None:
    """Reject a missing reference; blank text counts as missing."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(message)


def _parse_int(value: int | str | None, label: str) -> int:
    """Accept an ``int`` or a string of digits; reject anything else."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(f"A value for the {label} is required.")
    if isinstance(value, bool):
        raise InvalidFormatError(
            f"The value for the {label} must be a whole number."
        )
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value.strip())
    raise InvalidFormatError(
        f"The value for the {label} must be a whole number, got '{value}'."
    )


def _check_name(value: str, label: str) -> None:
    if not _NAME_PATTERN.fullmatch(value):
        raise InvalidFormatError(
            f"The {label} '{value}' may only contain letters and spaces."
        )


class RegistrationService:
    """Validates and admits new entities into a :class:`LeagueRepository`.

    Args:
        repository: Store the new entities are added to.
        rules: Limits used for DNI length and car model length.
    """

    def __init__(
        self, repository: LeagueRepository, rules: LeagueRules = DEFAULT_RULES
    ) -> None:
        self.repository = repository
        self.rules = rules

    # -- Shared checks --------------------------------------------------------

    def _require_known(self, entity: object, label: str, kind: type) -> None:
        if not isinstance(entity, kind):
            raise ConsistencyError(
                f"The {label} must be a {kind.__name__}, got '{entity}'."
            )
        if not self.repository.contains(entity):
            raise ConsistencyError(f"The {label} '{entity}' is not registered.")

    def _check_dni(self, dni: str) -> None:
        if not _DIGITS.match(dni):
            raise InvalidFormatError("Invalid DNI: it must contain digits only.")
        low, high = self.rules.dni_min_digits, self.rules.dni_max_digits
        if not low <= len(dni) <= high:
            raise InvalidFormatError(
                f"The DNI must have between {low} and {high} digits."
            )
        if int(dni) <= 0:
            raise InvalidFormatError("The DNI must be a positive number.")

    def _check_dni_free(self, dni: str) -> None:
        for driver in self.repository.drivers:
            if driver.dni == dni:
                raise DuplicateEntityError(f"A driver with DNI {dni} already exists.")
        for mechanic in self.repository.mechanics:
            if mechanic.dni == dni:
                raise DuplicateEntityError(
                    f"A mechanic with DNI {dni} already exists."
                )

    # -- Operations -----------------------------------------------------------

    def register_country(self, country_id: int | str, name: str) -> Country:
        """Register a country with a unique positive id and a unique name.

        Raises:
            MissingFieldError: If the name or id is missing.
            InvalidFormatError: If the name has non-letters or the id is
                not a positive integer.
            DuplicateEntityError: If the id or the name is taken.
        """
        name = _require_text(name, "The country name is required.")
        _check_name(name, "country name")
        country_id = _parse_int(country_id, "country id")
        if country_id <= 0:
            raise InvalidFormatError("The country id must be greater than 0.")

        for existing in self.repository.countries:
            if existing.country_id == country_id:
                raise DuplicateEntityError(
                    f"A country with id {country_id} already exists."
                )
            if existing.name.casefold() == name.casefold():
                raise DuplicateEntityError(f"A country named {name} already exists.")

        country = Country(country_id=country_id, name=name)
        self.repository.add_country(country)
        logger.info("Registered country %s (id=%d)", name, country_id)
        return country

    def register_team(self, name: str, country: Country | None) -> Team:
        """Register a team based in an existing country."""
        name = _require_text(name, "The team name is required.")
        _require_ref(country, "A country must be selected for the team.")
        self._require_known(country, "country", Country)

        for existing in self.repository.teams:
            if existing.name.casefold() == name.casefold():
                raise DuplicateEntityError(f"A team named {name} already exists.")

        team = Team(name=name, country=country)
        self.repository.add_team(team)
        logger.info("Registered team %s (%s)", name, country.name)
        return team

    def register_circuit(
        self, name: str, length: int | str, country: Country | None
    ) -> Circuit:
        """Register a circuit with a unique name and a positive length."""
        name = _require_text(name, "The circuit name is required.")
        _require_ref(country, "A country must be selected for the circuit.")
        length = _parse_int(length, "circuit length")
        if length <= 0:
            raise InvalidFormatError("The circuit length must be greater than 0.")
        self._require_known(country, "country", Country)

        for existing in self.repository.circuits:
            if existing.name.casefold() == name.casefold():
                raise DuplicateEntityError(f"A circuit named {name} already exists.")

        circuit = Circuit(name=name, length=length, country=country)
        self.repository.add_circuit(circuit)
        logger.info("Registered circuit %s (%s)", name, country.name)
        return circuit

    def register_race(
        self,
        date: str,
        laps: int | str,
        time: str,
        circuit: Circuit | None,
    ) -> Race:
        """Register a race; its country is taken from the circuit.

        Args:
            date: Race day in ``d-m-yyyy`` form.
            laps: Number of laps, > 0.
            time: Start time, ``HH:MM`` between 00:00 and 23:59.
            circuit: Registered circuit hosting the race.

        Returns:
            The created :class:`Race`.

        Raises:
            MissingFieldError: If date, time, laps, or circuit is missing.
            InvalidFormatError: If the date is not a real ``d-m-yyyy`` day,
                the time is malformed, or laps is not positive.
            DuplicateEntityError: If the circuit already hosts a race on
                that date.
        """
        date = _require_text(date, "The race date is required.")
        parse_day_month_year(date)
        time = _require_text(time, "The race start time is required.")
        laps = _parse_int(laps, "number of laps")
        if laps <= 0:
            raise InvalidFormatError("A race must have at least 1 lap.")
        if not is_valid_time(time):
            raise InvalidFormatError(
                f"Invalid start time '{time}'. Use HH:MM between 00:00 and 23:59."
            )
        _require_ref(circuit, "A circuit must be selected for the race.")
        self._require_known(circuit, "circuit", Circuit)

        day = normalize_date(date)
        for existing in self.repository.races:
            if existing.circuit is circuit and existing.normalized_date == day:
                raise DuplicateEntityError(
                    f"A race is already scheduled at {circuit.name} on {date}."
                )

        race = Race(date=date, laps=laps, time=time, circuit=circuit)
        self.repository.add_race(race)
        logger.info("Registered race at %s on %s", circuit.name, date)
        return race

    def register_driver(
        self,
        dni: str,
        first_name: str,
        last_name: str,
        country: Country | None,
        competition_number: int | str,
        wins: int = 0,
        pole_positions: int = 0,
        fastest_laps: int = 0,
        podiums: int = 0,
    ) -> Driver:
        """Register a driver with a unique DNI and full name.

        The four counters seed the driver's lifetime statistics; they must
        be non-negative and wins can never exceed podiums.

        Raises:
            MissingFieldError: If a required field is missing.
            InvalidFormatError: If a name, the DNI, the competition number,
                or a counter is malformed.
            ConsistencyError: If the country is not registered.
            DuplicateEntityError: If the DNI or full name is taken.
        """
        dni = _require_text(dni, "The driver's DNI is required.")
        first_name = _require_text(first_name, "The driver's first name is required.")
        last_name = _require_text(last_name, "The driver's last name is required.")
        number = _parse_int(competition_number, "competition number")
        _require_ref(country, "A country of origin must be selected for the driver.")
        _check_name(first_name, "first name")
        _check_name(last_name, "last name")
        self._check_dni(dni)
        if number < 0:
            raise InvalidFormatError("The competition number cannot be negative.")

        counters = {
            label: _parse_int(value, label)
            for label, value in (
                ("wins", wins),
                ("pole positions", pole_positions),
                ("fastest laps", fastest_laps),
                ("podiums", podiums),
            )
        }
        for label, value in counters.items():
            if value < 0:
                raise InvalidFormatError(f"The number of {label} cannot be negative.")
        if counters["wins"] > counters["podiums"]:
            raise InvalidFormatError("A driver cannot have more wins than podiums.")
        self._require_known(country, "country", Country)

        self._check_dni_free(dni)
        for existing in self.repository.drivers:
            if existing.person.same_name(first_name, last_name):
                raise DuplicateEntityError(
                    f"A driver named '{first_name} {last_name}' already exists."
                )

        driver = Driver(
            person=Person(dni, first_name, last_name, country),
            competition_number=number,
            wins=counters["wins"],
            pole_positions=counters["pole positions"],
            fastest_laps=counters["fastest laps"],
            podiums=counters["podiums"],
        )
        self.repository.add_driver(driver)
        logger.info("Registered driver %s (DNI %s)", driver.full_name, dni)
        return driver

    def register_mechanic(
        self,
        dni: str,
        first_name: str,
        last_name: str,
        country: Country | None,
        specialty: Specialty | str | None,
        years_experience: int | str,
    ) -> Mechanic:
        """Register a mechanic with a unique DNI."""
        dni = _require_text(dni, "The mechanic's DNI is required.")
        first_name = _require_text(
            first_name, "The mechanic's first name is required."
        )
        last_name = _require_text(last_name, "The mechanic's last name is required.")
        _require_ref(
            country, "A country of origin must be selected for the mechanic."
        )
        _require_ref(specialty, "A specialty must be selected for the mechanic.")
        _check_name(first_name, "first name")
        _check_name(last_name, "last name")
        self._check_dni(dni)
        if not isinstance(specialty, Specialty):
            specialty = Specialty.parse(str(specialty))
        years = _parse_int(years_experience, "years of experience")
        if years < 0:
            raise InvalidFormatError("Years of experience cannot be negative.")
        self._require_known(country, "country", Country)

        self._check_dni_free(dni)

        mechanic = Mechanic(
            person=Person(dni, first_name, last_name, country),
            specialty=specialty,
            years_experience=years,
        )
        self.repository.add_mechanic(mechanic)
        logger.info(
            "Registered mechanic %s (%s)", mechanic.full_name, specialty.name
        )
        return mechanic

    def register_car(self, model: str, engine: str) -> Car:
        """Register a car with no owning team."""
        model = _require_text(model, "The car model is required.")
        if len(model) < self.rules.min_model_length:
            raise InvalidFormatError(
                "The car model is too short, please enter a valid model."
            )
        engine = _require_text(engine, "The car engine is required.")

        car = Car(model=model, engine=engine)
        self.repository.add_car(car)
        logger.info("Registered car %s", car)
        return car
