"""Date and time-of-day handling for races and contracts.

Dates travel through the system as ``d-m-yyyy`` text.  For ordering they
are normalised to ISO ``YYYY-MM-DD``, which sorts lexically in calendar
order.  The same parser is used for validation and for normalisation so
that a date accepted at registration always compares correctly later.
"""

from __future__ import annotations

import re
from datetime import date

from league_engine.core.errors import InvalidFormatError

_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$", re.ASCII)
_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_TIME_OF_DAY = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$", re.ASCII)


def _build(year: str, month: str, day: str, text: str) -> date:
    try:
        return date(int(year), int(month), int(day))
    except ValueError as exc:
        raise InvalidFormatError(
            f"'{text}' is not a valid calendar date: {exc}."
        ) from exc


def parse_day_month_year(text: str) -> date:
    """Parse a ``d-m-yyyy`` date, rejecting impossible calendar dates.

    Args:
        text: Date text such as ``"15-03-2025"`` or ``"5-3-2025"``.

    Returns:
        The corresponding :class:`datetime.date`.

    Raises:
        InvalidFormatError: If *text* is not in ``d-m-yyyy`` form or does
            not name a real day.
    """
    match = _DAY_MONTH_YEAR.match(text.strip()) if text else None
    if match is None:
        raise InvalidFormatError(
            f"Date '{text}' is not valid. Use the dd-mm-yyyy format "
            "(e.g. 15-03-2025)."
        )
    day, month, year = match.groups()
    return _build(year, month, day, text)


def parse_date(text: str) -> date:
    """Parse either a ``d-m-yyyy`` date or an already-normalised ISO date."""
    stripped = text.strip() if text else ""
    iso = _ISO.match(stripped)
    if iso is not None:
        year, month, day = iso.groups()
        return _build(year, month, day, text)
    return parse_day_month_year(stripped)


def is_valid_date(text: str | None) -> bool:
    """Return ``True`` if *text* is a real calendar date in ``d-m-yyyy`` form."""
    if not text:
        return False
    try:
        parse_day_month_year(text)
    except InvalidFormatError:
        return False
    return True


def normalize_date(text: str) -> str:
    """Rewrite a date as zero-padded ``YYYY-MM-DD`` for calendar comparison.

    ``"5-3-2024"`` becomes ``"2024-03-05"``; ISO input is returned in the
    same canonical form.
    """
    return parse_date(text).isoformat()


def is_valid_time(text: str | None) -> bool:
    """Return ``True`` for ``H:MM`` / ``HH:MM`` between 00:00 and 23:59."""
    if not text:
        return False
    return _TIME_OF_DAY.match(text.strip()) is not None
