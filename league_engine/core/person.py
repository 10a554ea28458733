"""Identity data shared by drivers and mechanics."""

from __future__ import annotations

from dataclasses import dataclass

from league_engine.core.country import Country


@dataclass(frozen=True, eq=False)
class Person:
    """Personal details embedded in a :class:`Driver` or :class:`Mechanic`.

    Attributes:
        dni: National identity number, 7-8 digits.
        first_name: Given name.
        last_name: Family name.
        country: Country of origin.
    """

    dni: str
    first_name: str
    last_name: str
    country: Country

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def same_name(self, first_name: str, last_name: str) -> bool:
        """Case-insensitive comparison against another first/last name pair."""
        return (
            self.first_name.casefold() == first_name.strip().casefold()
            and self.last_name.casefold() == last_name.strip().casefold()
        )


class PersonDetails:
    """Mixin exposing the embedded :class:`Person` fields directly."""

    person: Person

    @property
    def dni(self) -> str:
        return self.person.dni

    @property
    def first_name(self) -> str:
        return self.person.first_name

    @property
    def last_name(self) -> str:
        return self.person.last_name

    @property
    def full_name(self) -> str:
        return self.person.full_name

    @property
    def country(self) -> Country:
        return self.person.country
