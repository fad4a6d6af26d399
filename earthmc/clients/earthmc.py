"""EarthMC v3 REST API client."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

import requests
from requests import Response

from earthmc.config import Settings
from earthmc.rate_limit import RateLimiter
from earthmc.schemas import (
    DiscordResponse,
    LocationResponse,
    NamedObject,
    NationResponse,
    PlayerResponse,
    QuarterResponse,
    ServerResponse,
    TownResponse,
)
from earthmc.utils import cache_bust_token, format_location, js_round

LOGGER = logging.getLogger(__name__)

CACHE_BUST_PARAM = "no-cache-please"
ORIGIN_HEADER = "X-Origin"
GATEWAY_TIMEOUT = 504

Identifier = str | UUID
QueryParams = Sequence[Tuple[str, str]]


def _join_ids(ids: Iterable[Identifier]) -> str:
    return ",".join(str(value) for value in ids)


class EarthMCClient:
    """Async client for one EarthMC server, with a client-side request quota.

    Every request passes through the client's own :class:`RateLimiter`, so
    the quota applies across all endpoint methods of one instance. Separate
    instances never share a quota.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[object]]] = None,
    ) -> None:
        self._settings = settings or Settings()
        self._session = session or requests.Session()
        limiter_kwargs: dict[str, Any] = {}
        if clock is not None:
            limiter_kwargs["clock"] = clock
        if sleep is not None:
            limiter_kwargs["sleep"] = sleep
        self.rate_limiter = RateLimiter(self._settings.rate_limit, **limiter_kwargs)
        self._last_token: Optional[str] = None

    @property
    def settings(self) -> Settings:
        return self._settings

    async def __aenter__(self) -> "EarthMCClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _next_token(self) -> str:
        token = cache_bust_token()
        while token == self._last_token:
            token = cache_bust_token()
        self._last_token = token
        return token

    async def execute(
        self,
        url: str,
        params: Optional[QueryParams] = None,
        *,
        retries: Optional[int] = None,
    ) -> Response:
        """GET ``url`` under the rate limit, retrying Gateway Timeouts.

        A 504 is retried up to ``retries`` times (``Settings.max_retries`` by
        default). Every other status is returned untouched, and so is the last
        504 once the retries are used up. Transport errors from ``requests``
        propagate unchanged.
        """

        budget = self._settings.max_retries if retries is None else retries
        base_params = list(params or [])
        attempt = 0
        while True:
            attempt += 1
            await self.rate_limiter.admit()
            query = base_params + [(CACHE_BUST_PARAM, self._next_token())]
            response = await asyncio.to_thread(
                self._session.get,
                url,
                params=query,
                headers={ORIGIN_HEADER: self._settings.origin_tag},
                timeout=self._settings.timeout_seconds,
            )
            if response.status_code == GATEWAY_TIMEOUT and attempt <= budget:
                LOGGER.info(
                    "Encountered 504 Gateway Timeout. Retrying...",
                    extra={"url": url, "attempt": attempt, "server": self._settings.server},
                )
                continue
            return response

    async def _fetch(self, path: str, params: Optional[QueryParams] = None) -> Any:
        url = f"{self._settings.server_url}/{path}"
        response = await self.execute(url, params)
        LOGGER.debug("earthmc response", extra={"url": url, "status": response.status_code})
        return response.json()

    async def discord(self, *ids: Identifier) -> List[DiscordResponse]:
        """Look up Discord IDs by Minecraft UUID, or UUIDs by Discord ID."""

        return await self._fetch("discord", [("query", _join_ids(ids))])

    async def location(self, *locations: Sequence[float]) -> List[LocationResponse]:
        """Return the town and nation, if any, at each ``(x, z)`` location."""

        query = ",".join(format_location(coords) for coords in locations)
        return await self._fetch("location", [("query", query)])

    async def nations(self) -> List[NamedObject]:
        return await self._fetch("nations")

    async def nation(self, *ids: Identifier) -> List[NationResponse]:
        return await self._fetch("nations", [("query", _join_ids(ids))])

    async def towns(self) -> List[NamedObject]:
        return await self._fetch("towns")

    async def town(self, *ids: Identifier) -> List[TownResponse]:
        return await self._fetch("towns", [("query", _join_ids(ids))])

    async def nearby_town(self, town: Identifier, radius: float) -> List[NamedObject]:
        """Towns within ``radius`` town blocks of ``town``, empty if none."""

        params = [("town", str(town)), ("radius", str(js_round(radius)))]
        return await self._fetch("towns", params)

    async def nearby_coord(self, coords: Sequence[float], radius: float) -> List[NamedObject]:
        """Towns within ``radius`` town blocks of an ``(x, z)`` coordinate, empty if none."""

        x, z = coords
        params = [
            ("x", str(js_round(x))),
            ("z", str(js_round(z))),
            ("radius", str(js_round(radius))),
        ]
        return await self._fetch("towns", params)

    async def players(self) -> List[NamedObject]:
        return await self._fetch("players")

    async def player(self, *ids: Identifier) -> List[PlayerResponse]:
        return await self._fetch("players", [("query", _join_ids(ids))])

    async def quarters(self) -> List[str]:
        """UUIDs of every quarter on the server."""

        return await self._fetch("quarters")

    async def quarter(self, *ids: Identifier) -> List[QuarterResponse]:
        return await self._fetch("quarters", [("query", _join_ids(ids))])

    async def server(self) -> ServerResponse:
        """Version, weather, moon phase and global statistics of the server."""

        return await self._fetch("")
