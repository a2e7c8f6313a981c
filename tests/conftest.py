"""Shared fixtures: a fake SWAPI served through `httpx.MockTransport`.

The fake records every requested URL, can delay individual responses to
control settle order, and can make any URL fail with a given message.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
import pytest

from adapters.swapi_client import SwapiClient
from core.services.aggregator import PersonAggregator

ROOT_URL = "https://swapi.dev/api/people/1"
HOMEWORLD_URL = "https://swapi.dev/api/planets/1/"
FILM_URLS = [
    "https://swapi.dev/api/films/1/",
    "https://swapi.dev/api/films/2/",
    "https://swapi.dev/api/films/3/",
    "https://swapi.dev/api/films/6/",
]

PEOPLE_PAYLOAD: dict[str, Any] = {
    "name": "Luke Skywalker",
    "height": "172",
    "mass": "77",
    "gender": "male",
    "homeworld": HOMEWORLD_URL,
    "films": FILM_URLS,
    "url": ROOT_URL,
}

HOMEWORLD_PAYLOAD: dict[str, Any] = {"name": "Tatooine", "climate": "arid"}

FILM_PAYLOAD: dict[str, Any] = {
    "title": "A New Hope",
    "director": "George Lucas",
    "release_date": "1977-05-25",
    "episode_id": 4,
}

FILM_TITLES = {
    FILM_URLS[0]: ("A New Hope", "George Lucas", "1977-05-25"),
    FILM_URLS[1]: ("The Empire Strikes Back", "Irvin Kershner", "1980-05-17"),
    FILM_URLS[2]: ("Return of the Jedi", "Richard Marquand", "1983-05-25"),
    FILM_URLS[3]: ("Revenge of the Sith", "George Lucas", "2005-05-19"),
}


class FakeSwapi:
    """In-memory SWAPI. Unknown URLs answer 404."""

    def __init__(self) -> None:
        self.payloads: dict[str, Any] = {
            ROOT_URL: PEOPLE_PAYLOAD,
            HOMEWORLD_URL: HOMEWORLD_PAYLOAD,
        }
        for url in FILM_URLS:
            self.payloads[url] = FILM_PAYLOAD
        self.failures: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def fail(self, url: str, message: str) -> None:
        self.failures[url] = httpx.ConnectError(message)

    def distinct_films(self) -> None:
        for url, (title, director, release_date) in FILM_TITLES.items():
            self.payloads[url] = {"title": title, "director": director, "release_date": release_date}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(url)
            if delay:
                await asyncio.sleep(delay)
            if url in self.failures:
                raise self.failures[url]
            if url not in self.payloads:
                return httpx.Response(404, json={"detail": "Not found"})
            return httpx.Response(200, json=self.payloads[url])
        finally:
            self.in_flight -= 1

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def swapi() -> FakeSwapi:
    return FakeSwapi()


@asynccontextmanager
async def open_aggregator(swapi: FakeSwapi) -> AsyncIterator[PersonAggregator]:
    async with swapi.client() as client:
        async with SwapiClient(client=client) as fetcher:
            yield PersonAggregator(fetcher, root_url=ROOT_URL)
