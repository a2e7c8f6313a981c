"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-contained documentation (Field) without coupling
  the Core to I/O libraries.
- Normalizes the raw SWAPI payloads into typed, immutable snapshots.

Note:
- These models describe *what* the data is, not *how* it is fetched.
- Every model is frozen: a fetched entity is a snapshot consumed once.
"""

from __future__ import annotations

import re
from typing import Iterable

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Person(_Snapshot):
    """Root entity as delivered by `GET /people/{id}`."""

    name: str = Field(
        ...,
        description="Full name of the person.",
    )
    height: str = Field(
        ...,
        description="Height in centimeters, as the raw string sent by the API.",
    )
    gender: str = Field(
        ...,
        description="Gender as reported by the API.",
    )
    homeworld: str = Field(
        ...,
        description="Absolute URL of the homeworld planet.",
    )
    films: tuple[str, ...] = Field(
        default=(),
        description="Absolute URLs of the films, in API order.",
    )


class Planet(_Snapshot):
    """Homeworld entity; only the name is used."""

    name: str = Field(
        ...,
        description="Planet name.",
    )


class Film(_Snapshot):
    """Film entity as delivered by `GET /films/{id}`."""

    title: str = Field(..., description="Film title.")
    director: str = Field(..., description="Director name.")
    release_date: str = Field(..., description="Release date (YYYY-MM-DD).")


class FilmSummary(_Snapshot):
    """Film as embedded in the aggregated result."""

    title: str
    director: str
    release_date: str

    @classmethod
    def from_film(cls, film: Film) -> "FilmSummary":
        return cls(title=film.title, director=film.director, release_date=film.release_date)


class PersonInfo(_Snapshot):
    """Aggregate: a person with its homeworld and films denormalized.

    Why an aggregate:
    - Gives callers one flat object instead of a graph of URLs.
    - `model_dump(mode="json")` is the public output shape.
    """

    name: str = Field(..., description="Full name of the person.")
    height: int | None = Field(
        default=None,
        description="Height parsed from the raw string; None when it is not numeric.",
    )
    gender: str = Field(..., description="Gender as reported by the API.")
    homeworld: str = Field(..., description="Name of the homeworld planet.")
    films: tuple[FilmSummary, ...] = Field(
        default=(),
        description="Films in the same order as the person's film URLs.",
    )


def parse_height(raw: str) -> int | None:
    """Base-10 parse of the leading integer of `raw` ("172" -> 172, "unknown" -> None)."""

    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1), 10)


def build_person_info(*, person: Person, planet: Planet, films: Iterable[Film]) -> PersonInfo:
    """Merge the fetched snapshots into the aggregate.

    `films` must already be in `person.films` order.
    """

    return PersonInfo(
        name=person.name,
        height=parse_height(person.height),
        gender=person.gender,
        homeworld=planet.name,
        films=tuple(FilmSummary.from_film(film) for film in films),
    )
