"""Core data model and business rules of the racing league."""

from league_engine.core.car import Car
from league_engine.core.circuit import Circuit
from league_engine.core.contract import Contract
from league_engine.core.country import Country
from league_engine.core.dates import (
    is_valid_date,
    is_valid_time,
    normalize_date,
    parse_date,
    parse_day_month_year,
)
from league_engine.core.driver import Driver
from league_engine.core.errors import (
    ConsistencyError,
    DataIntegrityError,
    DuplicateEntityError,
    InvalidFormatError,
    LeagueError,
    MissingFieldError,
    PreconditionError,
)
from league_engine.core.management import ManagementService
from league_engine.core.mechanic import Mechanic, Specialty
from league_engine.core.participation import Participation
from league_engine.core.person import Person
from league_engine.core.race import Race
from league_engine.core.race_result import RaceResult
from league_engine.core.registration import RegistrationService
from league_engine.core.reports import (
    DriverStats,
    all_driver_stats,
    car_usage_by_team,
    count_driver_at_circuit,
    count_races_at_circuit,
    driver_stats,
    mechanics_by_team,
    results_between,
    standings_frame,
)
from league_engine.core.repository import LeagueRepository
from league_engine.core.rules import DEFAULT_RULES, POINTS_TABLE, LeagueRules
from league_engine.core.scoring import (
    DriverScore,
    compute_driver_scores,
    points_for_position,
    rank_drivers,
)
from league_engine.core.team import Team

__all__ = [
    "Car",
    "Circuit",
    "ConsistencyError",
    "Contract",
    "Country",
    "DEFAULT_RULES",
    "DataIntegrityError",
    "Driver",
    "DriverScore",
    "DriverStats",
    "DuplicateEntityError",
    "InvalidFormatError",
    "LeagueError",
    "LeagueRepository",
    "LeagueRules",
    "ManagementService",
    "Mechanic",
    "MissingFieldError",
    "POINTS_TABLE",
    "Participation",
    "Person",
    "PreconditionError",
    "Race",
    "RaceResult",
    "RegistrationService",
    "Specialty",
    "Team",
    "all_driver_stats",
    "car_usage_by_team",
    "compute_driver_scores",
    "count_driver_at_circuit",
    "count_races_at_circuit",
    "driver_stats",
    "is_valid_date",
    "is_valid_time",
    "mechanics_by_team",
    "normalize_date",
    "parse_date",
    "parse_day_month_year",
    "points_for_position",
    "rank_drivers",
    "results_between",
    "standings_frame",
]
