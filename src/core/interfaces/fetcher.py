"""Network fetch contract.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Lets the aggregator run against the httpx adapter or any test double
  without coupling the Core to a concrete client.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JsonFetcher(Protocol):
    """Minimal contract for the host's network fetch capability.

    Design rules:
    - `get_json` is async because it does I/O (HTTP).
    - One call issues exactly one request: no retries, no caching.
    - Failures are raised as `core.errors.FetchError` carrying the original message.
    """

    async def get_json(self, url: str) -> Any:
        """GET `url` and return the decoded JSON body."""

        ...
