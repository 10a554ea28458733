"""Associations between entities and recording of race outcomes.

This module links registered entities together (race entries, driver
contracts, car ownership, mechanic employment) and records results.
Every check runs before the first mutation, so a rejected call leaves
the repository exactly as it was.

Contract dates are compared in normalised ``YYYY-MM-DD`` form.  A driver
holds at most one open-ended contract, and a new contract must start
strictly after the latest end date of the driver's earlier contracts.
"""

from __future__ import annotations

import logging

from league_engine.core.car import Car
from league_engine.core.contract import Contract
from league_engine.core.dates import parse_day_month_year
from league_engine.core.driver import Driver
from league_engine.core.errors import (
    ConsistencyError,
    DuplicateEntityError,
    InvalidFormatError,
    MissingFieldError,
    PreconditionError,
)
from league_engine.core.mechanic import Mechanic
from league_engine.core.participation import Participation
from league_engine.core.race import Race
from league_engine.core.race_result import RaceResult
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import DEFAULT_RULES, LeagueRules
from league_engine.core.team import Team

logger = logging.getLogger(__name__)


class ManagementService:
    """Creates cross-entity links and records race results.

    Args:
        repository: Store holding every entity the operations refer to.
        rules: Limits used when validating finishing positions.
    """

    def __init__(
        self, repository: LeagueRepository, rules: LeagueRules = DEFAULT_RULES
    ) -> None:
        self.repository = repository
        self.rules = rules

    def _require(self, entity: object | None, label: str, kind: type) -> None:
        """Reject a missing reference or one the repository does not hold."""
        if entity is None:
            raise MissingFieldError(f"A {label} must be selected.")
        if not isinstance(entity, kind):
            raise ConsistencyError(
                f"The {label} must be a {kind.__name__}, got '{entity}'."
            )
        if not self.repository.contains(entity):
            raise ConsistencyError(f"The {label} '{entity}' is not registered.")

    # -- Race entries ---------------------------------------------------------

    def assign_to_race(
        self,
        race: Race,
        driver: Driver,
        car: Car,
        assigned_on: str | None = None,
    ) -> Participation:
        """Enter *driver* in *race* driving *car*.

        The driver's active contract and the car's owner must be the same
        team.  The new entry is linked from the race, the driver, and the
        car.

        Args:
            race: Race to enter.
            driver: Driver taking part.
            car: Car the driver will use.
            assigned_on: Date of the pairing; defaults to the race date.

        Returns:
            The created :class:`Participation`.

        Raises:
            DuplicateEntityError: If the car or the driver is already
                entered in the race.
            PreconditionError: If the driver has no active contract or the
                car has no team.
            ConsistencyError: If driver and car belong to different teams.
        """
        self._require(race, "race", Race)
        self._require(driver, "driver", Driver)
        self._require(car, "car", Car)
        if assigned_on and assigned_on.strip():
            assigned_on = assigned_on.strip()
            parse_day_month_year(assigned_on)
        else:
            assigned_on = race.date

        for entry in race.participations:
            if entry.car is car:
                raise DuplicateEntityError(
                    f"The car {car.model} is already assigned to another "
                    "driver in this race."
                )
        for entry in race.participations:
            if entry.driver is driver:
                raise DuplicateEntityError(
                    f"The driver {driver.full_name} is already taking part "
                    "in this race with another car."
                )

        driver_team = driver.current_team()
        if driver_team is None:
            raise PreconditionError(
                f"The driver {driver.full_name} has no active contract with any team."
            )
        if car.team is None:
            raise PreconditionError(f"The car {car.model} is not assigned to any team.")
        if driver_team is not car.team:
            raise ConsistencyError(
                f"Consistency error: driver {driver.full_name} belongs to "
                f"{driver_team.name}, but car {car.model} belongs to "
                f"{car.team.name}."
            )

        entry = Participation(
            assigned_on=assigned_on, driver=driver, car=car, race=race
        )
        race.add_participation(entry)
        driver.add_participation(entry)
        car.participations.append(entry)
        logger.info("Entered %s with %s in %s", driver.full_name, car.model, race)
        return entry

    # -- Results --------------------------------------------------------------

    def record_result(
        self,
        race: Race,
        driver: Driver,
        position: int,
        fastest_lap: bool = False,
    ) -> RaceResult:
        """Record the finishing *position* of *driver* in *race*.

        On success the driver's counters are updated independently: a win
        adds to wins, any top-three finish adds to podiums, and
        *fastest_lap* adds to fastest laps.

        Raises:
            InvalidFormatError: If position is not within ``1..max_position``.
            PreconditionError: If the driver was not entered in the race.
            DuplicateEntityError: If the driver already has a result in the
                race, or the position is already taken (no ties).
        """
        self._require(race, "race", Race)
        self._require(driver, "driver", Driver)
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidFormatError("The position must be a whole number.")
        if position < 1:
            raise InvalidFormatError("The position must be greater than or equal to 1.")
        if position > self.rules.max_position:
            raise InvalidFormatError(
                f"The highest allowed position is {self.rules.max_position}. "
                "Please enter a valid position."
            )

        if race.participation_of(driver) is None:
            raise PreconditionError(
                f"The driver {driver.full_name} did not take part in this race."
            )

        race_results = self.repository.results_for_race(race)
        for existing in race_results:
            if existing.driver is driver:
                raise DuplicateEntityError(
                    f"The driver {driver.full_name} already has a result "
                    "recorded for this race."
                )
        for existing in race_results:
            if existing.position == position:
                raise DuplicateEntityError(
                    f"Position {position} has already been given to "
                    f"{existing.driver.full_name} in this race."
                )

        result = RaceResult(
            driver=driver, position=position, race=race, fastest_lap=fastest_lap
        )
        self.repository.add_result(result)

        if position == 1:
            driver.wins += 1
        if position <= 3:
            driver.podiums += 1
        if fastest_lap:
            driver.fastest_laps += 1
        logger.info("Recorded P%d for %s in %s", position, driver.full_name, race)
        return result

    def grant_pole_position(self, driver: Driver | None) -> None:
        """Add one pole position to *driver*'s lifetime counter."""
        if driver is None:
            raise MissingFieldError("The driver must not be empty.")
        driver.pole_positions += 1
        logger.info("Granted pole position to %s", driver.full_name)

    # -- Contracts ------------------------------------------------------------

    def assign_driver_to_team(
        self, driver: Driver, team: Team, start_date: str
    ) -> Contract:
        """Sign an open-ended contract between *driver* and *team*.

        Args:
            driver: Driver being contracted.
            team: Contracting team.
            start_date: First day of the contract (``d-m-yyyy``).

        Returns:
            The created :class:`Contract`, linked from driver and team.

        Raises:
            PreconditionError: If the driver already has an active contract.
            ConsistencyError: If *start_date* is not strictly after the end
                of every earlier contract of the driver.
        """
        self._require(driver, "driver", Driver)
        self._require(team, "team", Team)
        if not start_date or not start_date.strip():
            raise MissingFieldError("The contract start date is required.")
        start_date = start_date.strip()
        new_start = parse_day_month_year(start_date).isoformat()

        latest_end: str | None = None
        for contract in driver.contracts:
            if contract.is_active:
                raise PreconditionError(
                    f"The driver {driver.full_name} already has an active "
                    f"contract with {contract.team.name}."
                )
            end = contract.normalized_end
            if latest_end is None or end > latest_end:
                latest_end = end

        if latest_end is not None and new_start <= latest_end:
            raise ConsistencyError(
                f"The start date ({start_date}) overlaps an earlier contract. "
                f"It must be after {latest_end} (YYYY-MM-DD)."
            )

        contract = Contract(start_date=start_date, driver=driver, team=team)
        driver.add_contract(contract)
        team.add_contract(contract)
        logger.info(
            "Signed %s with %s from %s", driver.full_name, team.name, start_date
        )
        return contract

    def terminate_contract(self, driver: Driver, team: Team, end_date: str) -> Contract:
        """Close the active contract between *driver* and *team*.

        Raises:
            PreconditionError: If no active contract links them.
            ConsistencyError: If *end_date* is before the contract start.
        """
        self._require(driver, "driver", Driver)
        self._require(team, "team", Team)
        if not end_date or not end_date.strip():
            raise MissingFieldError("The contract end date is required.")
        end_date = end_date.strip()

        active = None
        for contract in driver.contracts:
            if contract.team is team and contract.is_active:
                active = contract
                break
        if active is None:
            raise PreconditionError(
                f"The driver {driver.full_name} has no active contract with "
                f"{team.name}."
            )

        if parse_day_month_year(end_date).isoformat() < active.normalized_start:
            raise ConsistencyError(
                f"The end date ({end_date}) cannot be before the start date "
                f"({active.start_date})."
            )

        active.end_date = end_date
        logger.info(
            "Ended contract of %s with %s on %s",
            driver.full_name,
            team.name,
            end_date,
        )
        return active

    # -- Team staff and equipment ---------------------------------------------

    def assign_car_to_team(self, car: Car, team: Team) -> None:
        """Give *team* ownership of *car*; a car never changes owner."""
        self._require(car, "car", Car)
        self._require(team, "team", Team)
        if car.team is not None:
            raise PreconditionError(
                f"The car {car.model} already belongs to {car.team.name}."
            )
        team.add_car(car)
        logger.info("Assigned car %s to %s", car.model, team.name)

    def assign_mechanic_to_team(self, mechanic: Mechanic, team: Team) -> None:
        self._require(mechanic, "mechanic", Mechanic)
        self._require(team, "team", Team)
        if any(m is mechanic for m in team.mechanics):
            raise DuplicateEntityError(
                f"The mechanic {mechanic.full_name} already works for {team.name}."
            )
        team.add_mechanic(mechanic)
        logger.info("Assigned mechanic %s to %s", mechanic.full_name, team.name)
