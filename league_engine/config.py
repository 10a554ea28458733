"""Configuration loader for the league management core."""

from pathlib import Path

import yaml

from league_engine.core.rules import LeagueRules

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
RULES_PATH: Path = DATA_DIR / "league_rules.yaml"
SEED_DIR: Path = DATA_DIR / "seed"

_REQUIRED_FIELDS: tuple[str, ...] = (
    "points_table",
    "max_position",
    "dni_min_digits",
    "dni_max_digits",
    "min_model_length",
)

_INTEGER_FIELDS: tuple[str, ...] = _REQUIRED_FIELDS[1:]  # all except points_table


def load_rules(path: Path | None = None) -> LeagueRules:
    """Load league rules from a YAML file.

    The file holds a single ``rules`` mapping with every key of
    :class:`LeagueRules`.

    Args:
        path: Optional override for the rules file path.

    Returns:
        The validated :class:`LeagueRules`.

    Raises:
        FileNotFoundError: If the rules file does not exist.
        ValueError: If a key is missing, a value has the wrong type, or
            the values are out of range.
    """
    rules_path = path or RULES_PATH
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules file not found: {rules_path}")

    with open(rules_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    entry = data.get("rules")
    if not isinstance(entry, dict):
        raise ValueError(f"{rules_path}: missing top-level 'rules' mapping")

    # --- Validate required fields ---
    for field in _REQUIRED_FIELDS:
        if field not in entry:
            raise ValueError(f"{rules_path}: missing required field '{field}'")

    # --- Validate types ---
    for field in _INTEGER_FIELDS:
        val = entry[field]
        if isinstance(val, bool) or not isinstance(val, int):
            raise ValueError(
                f"{rules_path}: '{field}' must be an integer, "
                f"got {type(val).__name__}"
            )

    table = entry["points_table"]
    if not isinstance(table, list) or not all(
        isinstance(v, int) and not isinstance(v, bool) for v in table
    ):
        raise ValueError(f"{rules_path}: 'points_table' must be a list of integers")

    # LeagueRules validates the ranges.
    return LeagueRules(
        points_table=tuple(table),
        max_position=entry["max_position"],
        dni_min_digits=entry["dni_min_digits"],
        dni_max_digits=entry["dni_max_digits"],
        min_model_length=entry["min_model_length"],
    )
