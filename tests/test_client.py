from __future__ import annotations

import asyncio
import logging

import pytest
import requests

from earthmc.clients.earthmc import CACHE_BUST_PARAM, ORIGIN_HEADER, EarthMCClient
from earthmc.config import Settings

URL = "https://api.earthmc.net/v3/aurora/towns"


def sent_params(call) -> dict[str, str]:
    return dict(call.kwargs["params"])


def test_returns_successful_response_after_one_attempt(client, fake_session, make_response):
    fake_session.get.return_value = make_response(200, [{"name": "Paris"}])

    response = asyncio.run(client.execute(URL, [("query", "Paris")]))

    assert response.status_code == 200
    assert fake_session.get.call_count == 1
    args, kwargs = fake_session.get.call_args
    assert args == (URL,)
    assert kwargs["headers"] == {ORIGIN_HEADER: "earthmc-py"}
    assert kwargs["timeout"] == 30.0
    assert kwargs["params"][0] == ("query", "Paris")
    assert kwargs["params"][-1][0] == CACHE_BUST_PARAM


def test_non_gateway_errors_are_not_retried(client, fake_session, make_response):
    fake_session.get.return_value = make_response(404, {"error": "missing"})

    response = asyncio.run(client.execute(URL))

    assert response.status_code == 404
    assert fake_session.get.call_count == 1


def test_gateway_timeout_retries_until_budget_exhausted(client, fake_session, make_response):
    fake_session.get.return_value = make_response(504, body=b"")

    response = asyncio.run(client.execute(URL))

    assert response.status_code == 504
    assert fake_session.get.call_count == 4


def test_custom_retry_budget(client, fake_session, make_response):
    fake_session.get.return_value = make_response(504, body=b"")

    asyncio.run(client.execute(URL, retries=1))

    assert fake_session.get.call_count == 2


def test_zero_retries_makes_single_attempt(fake_session, make_response):
    fake_session.get.return_value = make_response(504, body=b"")
    client = EarthMCClient(Settings(max_retries=0), session=fake_session)

    asyncio.run(client.execute(URL))

    assert fake_session.get.call_count == 1


def test_gateway_timeout_then_success(client, fake_session, make_response):
    fake_session.get.side_effect = [
        make_response(504, body=b""),
        make_response(504, body=b""),
        make_response(200, []),
    ]

    response = asyncio.run(client.execute(URL, [("query", "Paris")]))

    assert response.status_code == 200
    assert fake_session.get.call_count == 3
    for call in fake_session.get.call_args_list:
        assert call.args == (URL,)
        assert sent_params(call)["query"] == "Paris"


def test_each_attempt_uses_a_fresh_cache_bust_token(client, fake_session, make_response):
    fake_session.get.side_effect = [make_response(504, body=b""), make_response(200, [])]

    asyncio.run(client.execute(URL))

    tokens = [sent_params(call)[CACHE_BUST_PARAM] for call in fake_session.get.call_args_list]
    assert len(tokens) == 2
    assert tokens[0] != tokens[1]
    millis, _, noise = tokens[0].partition("~")
    assert millis.isdigit()
    assert noise


def test_cache_bust_token_is_regenerated_on_collision(client, monkeypatch):
    tokens = iter(["1~0.5", "1~0.5", "1~0.5", "2~0.1"])
    monkeypatch.setattr("earthmc.clients.earthmc.cache_bust_token", lambda: next(tokens))

    assert client._next_token() == "1~0.5"
    assert client._next_token() == "2~0.1"


def test_retry_is_logged(client, fake_session, make_response, caplog):
    fake_session.get.side_effect = [make_response(504, body=b""), make_response(200, [])]

    with caplog.at_level(logging.INFO, logger="earthmc.clients.earthmc"):
        asyncio.run(client.execute(URL))

    messages = [record.getMessage() for record in caplog.records]
    assert messages.count("Encountered 504 Gateway Timeout. Retrying...") == 1
    assert caplog.records[0].attempt == 1


def test_transport_errors_propagate_without_retry(client, fake_session):
    fake_session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(requests.ConnectionError, match="connection refused"):
        asyncio.run(client.execute(URL))

    assert fake_session.get.call_count == 1


def test_every_attempt_passes_the_rate_limiter(fake_session, fake_clock, make_response):
    clock = fake_clock
    fake_session.get.side_effect = [make_response(504, body=b""), make_response(200, [])]
    settings = Settings(max_requests_per_window=1, window_ms=1000)
    client = EarthMCClient(settings, session=fake_session, clock=clock, sleep=clock.sleep)

    asyncio.run(client.execute(URL))

    assert clock.sleeps == [pytest.approx(1.0)]
    assert client.rate_limiter.pending() == 1


def test_clients_do_not_share_quota(fake_session):
    settings = Settings(max_requests_per_window=1, window_ms=60_000)
    first = EarthMCClient(settings, session=fake_session)
    second = EarthMCClient(settings, session=fake_session)

    asyncio.run(first.execute(URL))

    assert first.rate_limiter.pending() == 1
    assert second.rate_limiter.pending() == 0


def test_async_context_manager_closes_session(fake_session):
    async def run():
        async with EarthMCClient(session=fake_session) as client:
            await client.execute(URL)

    asyncio.run(run())

    fake_session.close.assert_called_once()
