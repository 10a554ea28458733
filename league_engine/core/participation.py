"""Driver-car-race entry record."""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.car import Car
from league_engine.core.driver import Driver
from league_engine.core.race import Race


@dataclass(frozen=True, eq=False)
class Participation:
    """A driver entered in a race with a specific car.

    The record is referenced from the race, the driver, and the car;
    none of them owns it exclusively.

    Attributes:
        assigned_on: Date the pairing was made (``d-m-yyyy``).
        driver: Entered driver.
        car: Car driven.
        race: Race entered.
    """

    assigned_on: str
    driver: Driver
    car: Car
    race: Race
