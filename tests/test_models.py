"""Tests for domain models and the merge helper."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import FILM_PAYLOAD, HOMEWORLD_PAYLOAD, PEOPLE_PAYLOAD
from core.domain.models import (
    Film,
    FilmSummary,
    Person,
    PersonInfo,
    Planet,
    build_person_info,
    parse_height,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("172", 172),
        ("96", 96),
        (" 202 ", 202),
        ("172cm", 172),
        ("-5", -5),
        ("007", 7),
        ("unknown", None),
        ("", None),
        ("n/a 12", None),
    ],
)
def test_parse_height(raw, expected):
    assert parse_height(raw) == expected


def test_person_ignores_extra_fields():
    person = Person.model_validate(PEOPLE_PAYLOAD)
    assert person.height == "172"
    assert len(person.films) == 4
    assert not hasattr(person, "mass")


def test_snapshots_are_frozen():
    planet = Planet.model_validate(HOMEWORLD_PAYLOAD)
    with pytest.raises(ValidationError):
        planet.name = "Alderaan"


def test_film_requires_release_date():
    with pytest.raises(ValidationError):
        Film.model_validate({"title": "A New Hope", "director": "George Lucas"})


def test_build_person_info_shape():
    person = Person.model_validate(PEOPLE_PAYLOAD)
    planet = Planet.model_validate(HOMEWORLD_PAYLOAD)
    films = [Film.model_validate(FILM_PAYLOAD)] * len(person.films)

    info = build_person_info(person=person, planet=planet, films=films)

    assert isinstance(info, PersonInfo)
    assert info.height == 172
    assert info.homeworld == "Tatooine"
    assert info.films[0] == FilmSummary(
        title="A New Hope", director="George Lucas", release_date="1977-05-25"
    )
    dumped = info.model_dump(mode="json")
    assert list(dumped) == ["name", "height", "gender", "homeworld", "films"]
    assert set(dumped["films"][0]) == {"title", "director", "release_date"}


def test_unknown_height_serializes_as_null():
    person = Person.model_validate({**PEOPLE_PAYLOAD, "height": "unknown", "films": []})
    info = build_person_info(person=person, planet=Planet(name="Tatooine"), films=[])
    assert info.model_dump(mode="json")["height"] is None
    assert info.films == ()
