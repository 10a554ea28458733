"""CLI entrypoint for the racing league management core."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from league_engine import __version__
from league_engine.config import SEED_DIR, load_rules
from league_engine.core.reports import (
    count_races_at_circuit,
    mechanics_by_team,
    standings_frame,
)
from league_engine.data_ingestion.csv_loader import load_league


def main(argv: list[str] | None = None) -> None:
    """Load a league from CSV files and print its standings.

    An optional first argument overrides the bundled seed directory.
    """
    logging.basicConfig(
        level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s"
    )
    args = sys.argv[1:] if argv is None else argv
    data_dir = Path(args[0]) if args else SEED_DIR

    print(f"Racing League Manager v{__version__}")
    print("=" * 56)

    # -- Load rules and data --------------------------------------------------
    rules = load_rules()
    repository = load_league(data_dir)
    print(f"\nData loaded from {data_dir}")
    print(
        f"  {len(repository.drivers)} drivers, {len(repository.teams)} teams, "
        f"{len(repository.races)} races, {len(repository.results)} results"
    )

    # -- Driver standings -----------------------------------------------------
    print("\nDriver standings:\n")
    table = standings_frame(repository, rules)
    for row in table.itertuples(index=False):
        print(f"  {row.rank:2d}. {row.driver:<25s} {row.points:4d} pts")

    # -- Races per circuit ----------------------------------------------------
    print("\nRaces per circuit:\n")
    for circuit in repository.circuits:
        count = count_races_at_circuit(repository, circuit)
        print(f"  {circuit.name:<25s} {count}")

    # -- Team staff -----------------------------------------------------------
    print("\nMechanics per team:\n")
    for team, mechanics in mechanics_by_team(repository).items():
        names = ", ".join(m.full_name for m in mechanics) or "(no mechanics)"
        print(f"  {team.name:<25s} {names}")


if __name__ == "__main__":
    sys.exit(main() or 0)
