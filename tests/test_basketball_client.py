from __future__ import annotations

import httpx
import pytest

from hoops_live.basketball_client import (
    API_KEY_HEADER,
    BasketballAPIClient,
    MissingCredentialError,
    TransportError,
    UpstreamMalformedError,
    UpstreamRejectedError,
    unwrap_envelope,
)
from hoops_live.settings import Settings


def _settings(key: str = "test-key") -> Settings:
    return Settings(_env_file=None, basketball_api_key=key)


def _client(handler, *, key: str = "test-key", max_attempts: int = 3) -> BasketballAPIClient:
    return BasketballAPIClient(
        _settings(key),
        transport=httpx.MockTransport(handler),
        max_attempts=max_attempts,
        sleep=lambda _: None,
    )


def test_client_raises_when_key_missing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("network should not be called")

    with _client(handler, key="") as client, pytest.raises(MissingCredentialError):
        client.games_by_date("2025-01-15")


def test_games_by_date_sends_header_and_date_param() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["date"] = request.url.params["date"]
        seen["key"] = request.headers[API_KEY_HEADER]
        return httpx.Response(200, json={"errors": [], "response": [{"id": 1}]})

    with _client(handler) as client:
        response = client.games_by_date("2025-01-15")

    assert seen == {"path": "/games", "date": "2025-01-15", "key": "test-key"}
    assert response.rows == [{"id": 1}]
    assert response.retry_count == 0


def test_head_to_head_and_schedule_params() -> None:
    params: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        params.append(dict(request.url.params))
        return httpx.Response(200, json={"errors": {}, "response": []})

    with _client(handler) as client:
        client.games_head_to_head("145", "146")
        client.games_for_team("145", "2024-2025")
        client.search_teams("lak")

    assert params == [
        {"h2h": "145-146"},
        {"team": "145", "season": "2024-2025"},
        {"search": "lak"},
    ]


def test_search_teams_rejects_short_query() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("network should not be called")

    with _client(handler) as client, pytest.raises(ValueError):
        client.search_teams("la")


def test_error_collection_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errors": {"token": "bad key"}, "response": []})

    with _client(handler) as client, pytest.raises(UpstreamRejectedError, match="token"):
        client.games_by_date("2025-01-15")


def test_client_error_status_is_rejected_without_retry() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(403, json={})

    with _client(handler) as client, pytest.raises(UpstreamRejectedError, match="403"):
        client.games_by_date("2025-01-15")
    assert calls["count"] == 1


def test_server_errors_are_retried_then_rejected() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503, headers={"Retry-After": "0"})

    with _client(handler, max_attempts=3) as client, pytest.raises(UpstreamRejectedError):
        client.games_by_date("2025-01-15")
    assert calls["count"] == 3


def test_retry_recovers_after_rate_limit() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return httpx.Response(429)
        return httpx.Response(200, json={"errors": [], "response": []})

    with _client(handler) as client:
        response = client.games_by_date("2025-01-15")

    assert response.retry_count == 1
    assert response.rows == []


def test_transport_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client, pytest.raises(TransportError):
        client.games_by_date("2025-01-15")


def test_non_json_body_is_malformed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with _client(handler) as client, pytest.raises(UpstreamMalformedError):
        client.games_by_date("2025-01-15")


def test_unwrap_envelope_shapes() -> None:
    assert unwrap_envelope({"errors": [], "response": [1]}, path="/games") == [1]
    with pytest.raises(UpstreamMalformedError):
        unwrap_envelope({"errors": []}, path="/games")
    with pytest.raises(UpstreamMalformedError):
        unwrap_envelope([1, 2], path="/games")
