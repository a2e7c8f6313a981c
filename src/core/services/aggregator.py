"""Person aggregation.

One root fetch (the person) fans out into dependent fetches (homeworld and
films) whose results are merged into a single `PersonInfo`. The same
aggregation is exposed in three concurrency idioms:

- `fetch_chained`: future callbacks; each stage is issued from the
  continuation of the previous one.
- `fetch_sequential`: linear `await`s.
- `observe`: a cold `Single` that forks homeworld and films in parallel.

All three share `_get` for requests and `build_person_info` for the merge, so
they return equal results for equal responses. Any failed request fails the
whole aggregation with a `FetchError` carrying the original message; when
several requests fail concurrently the first to settle wins.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from adapters.swapi_client import SwapiClient
from core.config import AppSettings
from core.domain.models import Film, Person, PersonInfo, Planet, build_person_info
from core.domain.style import AggregationStyle
from core.errors import FetchError
from core.interfaces.fetcher import JsonFetcher
from core.streams import Single, fork_join, fork_join_all

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _forward_failure(source: "asyncio.Future[Any]", outcome: "asyncio.Future[Any]") -> bool:
    """Propagate a failed or cancelled `source` into `outcome`.

    Returns True when the chain must stop (failure, cancellation, or an
    `outcome` that is already settled).
    """

    if source.cancelled():
        if not outcome.done():
            outcome.cancel()
        return True
    exc = source.exception()
    if outcome.done():
        return True
    if exc is not None:
        outcome.set_exception(exc)
        return True
    return False


class PersonAggregator:
    """Fetches a person and its dependents and merges them into `PersonInfo`."""

    def __init__(self, fetcher: JsonFetcher, *, root_url: str) -> None:
        self._fetcher = fetcher
        self._root_url = root_url

    @property
    def root_url(self) -> str:
        return self._root_url

    async def _get(self, model: type[ModelT], url: str) -> ModelT:
        """One request, validated into `model`. Every failure becomes `FetchError`."""

        try:
            payload = await self._fetcher.get_json(url)
        except FetchError:
            raise
        except Exception as exc:
            raise FetchError(str(exc), url=url) from exc

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise FetchError(str(exc), url=url) from exc

    # -- chained continuations -------------------------------------------

    def fetch_chained(self) -> "asyncio.Future[PersonInfo]":
        """Start the aggregation and return a future settled by callbacks.

        Must be called with a running event loop. The homeworld request is
        issued from the root continuation; the film requests are issued
        together (join-all) once the homeworld resolved.
        """

        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[PersonInfo] = loop.create_future()

        def on_person(task: "asyncio.Task[Person]") -> None:
            if _forward_failure(task, outcome):
                return
            person = task.result()
            logger.debug("Root %s resolved with %d film(s)", person.name, len(person.films))
            homeworld = loop.create_task(self._get(Planet, person.homeworld))
            homeworld.add_done_callback(partial(on_planet, person))

        def on_planet(person: Person, task: "asyncio.Task[Planet]") -> None:
            if _forward_failure(task, outcome):
                return
            planet = task.result()
            films = asyncio.gather(*(self._get(Film, url) for url in person.films))
            films.add_done_callback(partial(on_films, person, planet))

        def on_films(person: Person, planet: Planet, joined: "asyncio.Future[list[Film]]") -> None:
            if _forward_failure(joined, outcome):
                return
            outcome.set_result(build_person_info(person=person, planet=planet, films=joined.result()))

        root = loop.create_task(self._get(Person, self._root_url))
        root.add_done_callback(on_person)
        return outcome

    # -- sequential awaits -------------------------------------------------

    async def fetch_sequential(self) -> PersonInfo:
        """Root, then homeworld, then all films concurrently."""

        person = await self._get(Person, self._root_url)
        logger.debug("Root %s resolved with %d film(s)", person.name, len(person.films))
        planet = await self._get(Planet, person.homeworld)
        films = await asyncio.gather(*(self._get(Film, url) for url in person.films))
        return build_person_info(person=person, planet=planet, films=films)

    # -- reactive stream ---------------------------------------------------

    def observe(self) -> Single[PersonInfo]:
        """Cold stream of the aggregate.

        No request is made until the stream is consumed, and each consumption
        re-issues every request.
        """

        return self._single(Person, self._root_url).flat_map(self._expand)

    def _single(self, model: type[ModelT], url: str) -> Single[ModelT]:
        return Single.defer(lambda: self._get(model, url))

    def _expand(self, person: Person) -> Single[PersonInfo]:
        logger.debug("Root %s resolved with %d film(s)", person.name, len(person.films))
        homeworld = self._single(Planet, person.homeworld)
        films = fork_join_all(self._single(Film, url) for url in person.films)
        return fork_join(homeworld, films).map(
            lambda joined: build_person_info(person=person, planet=joined[0], films=joined[1])
        )

    # -- dispatch ----------------------------------------------------------

    async def fetch(self, style: AggregationStyle | str = AggregationStyle.SEQUENTIAL) -> PersonInfo:
        """Run the aggregation with the given style."""

        style = AggregationStyle(style)
        logger.debug("Aggregating %s (%s)", self._root_url, style.value)
        if style is AggregationStyle.CHAINED:
            return await self.fetch_chained()
        if style is AggregationStyle.REACTIVE:
            return await self.observe()
        return await self.fetch_sequential()


async def aggregate_person(
    *,
    settings: AppSettings,
    style: AggregationStyle | str | None = None,
    client: httpx.AsyncClient | None = None,
) -> PersonInfo:
    """Build the HTTP adapter from `settings` and run one aggregation."""

    chosen = AggregationStyle(style) if style is not None else settings.default_style
    async with SwapiClient(settings, client=client) as fetcher:
        aggregator = PersonAggregator(fetcher, root_url=settings.root_url)
        return await aggregator.fetch(chosen)


async def compare_styles(
    *,
    settings: AppSettings,
    client: httpx.AsyncClient | None = None,
) -> dict[AggregationStyle, PersonInfo]:
    """Run every style against the same client, one after the other."""

    results: dict[AggregationStyle, PersonInfo] = {}
    async with SwapiClient(settings, client=client) as fetcher:
        aggregator = PersonAggregator(fetcher, root_url=settings.root_url)
        for style in AggregationStyle:
            results[style] = await aggregator.fetch(style)
    return results
