"""HTTP client for the api-sports basketball v1 API."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from time import perf_counter
from typing import Any

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt

from hoops_live.settings import Settings

API_KEY_HEADER = "x-apisports-key"
MIN_SEARCH_QUERY_LENGTH = 3


class BasketballAPIError(RuntimeError):
    """Raised on basketball API failures."""


class MissingCredentialError(BasketballAPIError):
    """Raised when no API credential is configured."""


class UpstreamRejectedError(BasketballAPIError):
    """Raised on a non-success status or a non-empty `errors` collection."""


class UpstreamMalformedError(BasketballAPIError):
    """Raised when the response body does not have the expected envelope."""


class TransportError(BasketballAPIError):
    """Raised on network-level failures."""


class RetryableStatusError(RuntimeError):
    """Raised for retryable status codes."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        message = f"retryable status {response.status_code}"
        super().__init__(message)

    def retry_after_seconds(self) -> float | None:
        raw_value = self.response.headers.get("Retry-After")
        if not raw_value:
            return None
        try:
            return max(0.0, float(raw_value))
        except ValueError:
            try:
                date_value = parsedate_to_datetime(raw_value)
            except (TypeError, ValueError):
                return None
            now = datetime.now(UTC)
            return max(0.0, (date_value - now).total_seconds())


@dataclass(frozen=True)
class APIResponse:
    """Envelope rows and metadata from an API call."""

    rows: list[Any]
    status_code: int
    duration_ms: int
    retry_count: int


def _wait_for_retry(retry_state) -> float:
    """Wait strategy for tenacity retries."""
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exc, RetryableStatusError):
        retry_after = exc.retry_after_seconds()
        if retry_after is not None:
            return min(retry_after, 30.0)
    return min(2 ** (retry_state.attempt_number - 1), 10.0)


def _has_errors(value: Any) -> bool:
    if isinstance(value, (dict, list)):
        return len(value) > 0
    if isinstance(value, str):
        return bool(value.strip())
    return False


def unwrap_envelope(payload: Any, *, path: str) -> list[Any]:
    """Validate a `{response: [...], errors: ...}` envelope and return its rows."""
    if not isinstance(payload, dict):
        raise UpstreamMalformedError(f"{path} returned a non-object body")
    errors = payload.get("errors")
    if _has_errors(errors):
        raise UpstreamRejectedError(f"{path} returned errors: {errors}")
    rows = payload.get("response")
    if not isinstance(rows, list):
        raise UpstreamMalformedError(f"{path} body is missing a `response` list")
    return rows


class BasketballAPIClient:
    """Thin HTTP client around the api-sports basketball API."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
        max_attempts: int = 3,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self._base_url = settings.basketball_api_base_url.rstrip("/")
        self._max_attempts = max(1, max_attempts)
        self._sleep = sleep
        limits = httpx.Limits(max_connections=8, max_keepalive_connections=4)
        self._http = httpx.Client(
            timeout=settings.basketball_api_timeout_s, limits=limits, transport=transport
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> BasketballAPIClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _request(self, *, path: str, params: dict[str, Any]) -> APIResponse:
        api_key = str(self.settings.basketball_api_key).strip()
        if not api_key:
            raise MissingCredentialError(
                "missing basketball API key; set BASKETBALL_API_KEY or configure "
                "basketball_api.fallback_key in runtime.toml"
            )
        url = f"{self._base_url}/{path.lstrip('/')}"
        retries = 0
        started = perf_counter()
        response: httpx.Response | None = None
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._max_attempts),
                retry=retry_if_exception_type(RetryableStatusError),
                wait=_wait_for_retry,
                sleep=self._sleep,
                reraise=True,
            ):
                with attempt:
                    retries = attempt.retry_state.attempt_number - 1
                    response = self._http.get(
                        url, params=params, headers={API_KEY_HEADER: api_key}
                    )
                    if response.status_code == 429 or 500 <= response.status_code <= 599:
                        raise RetryableStatusError(response)
                    response.raise_for_status()
        except RetryableStatusError as exc:
            raise UpstreamRejectedError(
                f"{path} failed with status {exc.response.status_code} after retries"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamRejectedError(
                f"{path} failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{path} failed with transport error: {exc}") from exc
        if response is None:
            raise TransportError(f"{path} failed without a response")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamMalformedError(f"{path} returned a non-JSON body") from exc
        return APIResponse(
            rows=unwrap_envelope(payload, path=path),
            status_code=response.status_code,
            duration_ms=int((perf_counter() - started) * 1000),
            retry_count=retries,
        )

    def games_by_date(self, day: str) -> APIResponse:
        """List games on one calendar date (`YYYY-MM-DD`)."""
        return self._request(path="/games", params={"date": day})

    def games_head_to_head(self, team_a: str, team_b: str) -> APIResponse:
        """List historical games between two teams."""
        return self._request(path="/games", params={"h2h": f"{team_a}-{team_b}"})

    def games_for_team(self, team_id: str, season: str) -> APIResponse:
        """List a team's games for one season."""
        return self._request(path="/games", params={"team": team_id, "season": season})

    def search_teams(self, query: str) -> APIResponse:
        """Free-text team search."""
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            raise ValueError(
                f"team search query must have at least {MIN_SEARCH_QUERY_LENGTH} chars"
            )
        return self._request(path="/teams", params={"search": query})
