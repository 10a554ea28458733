"""Validation error taxonomy for the league management core.

Every business-rule failure is a :class:`LeagueError`, raised by the
operation that detects it before any state is changed.  The subclasses
identify the category of failure; the message is meant to be shown to
the user as-is.
"""


class LeagueError(ValueError):
    """Base class for every validation or business-rule failure."""


class MissingFieldError(LeagueError):
    """A required value is absent or blank."""


class InvalidFormatError(LeagueError):
    """A value is malformed or outside its allowed range."""


class DuplicateEntityError(LeagueError):
    """An entity with the same identifying value already exists."""


class ConsistencyError(LeagueError):
    """Entities referenced together contradict each other."""


class PreconditionError(LeagueError):
    """The current state does not allow the requested operation."""


class DataIntegrityError(LeagueError):
    """Initial data supplied by the import layer is inconsistent."""
