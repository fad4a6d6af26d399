from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest import mock

import pytest
import requests

from earthmc.clients.earthmc import EarthMCClient
from earthmc.config import Settings


class FakeClock:
    """Monotonic clock whose sleep advances time instead of blocking."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


def _make_response(status: int, payload: Any = None, *, body: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if body is None:
        body = json.dumps(payload if payload is not None else []).encode("utf-8")
    response._content = body
    response.encoding = "utf-8"
    return response


@pytest.fixture()
def make_response():
    return _make_response


@pytest.fixture()
def fake_clock():
    return FakeClock()


@pytest.fixture()
def fake_session():
    session = mock.Mock(spec=requests.Session)
    session.get.return_value = _make_response(200, [])
    return session


@pytest.fixture()
def client(fake_session):
    return EarthMCClient(Settings(), session=fake_session)
