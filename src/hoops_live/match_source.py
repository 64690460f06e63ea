"""Match source adapter: upstream fetch, normalization, and degrade-to-fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from hoops_live.basketball_client import (
    MIN_SEARCH_QUERY_LENGTH,
    BasketballAPIClient,
    BasketballAPIError,
    MissingCredentialError,
    UpstreamMalformedError,
)
from hoops_live.fixtures import mock_matches_for_date, search_fallback_teams
from hoops_live.models import Match, TeamSearchResult
from hoops_live.settings import Settings
from hoops_live.time_utils import calendar_day, query_date
from hoops_live.transform import MalformedPayloadError, transform_games, transform_teams

logger = logging.getLogger(__name__)

H2H_LIMIT = 10


@dataclass(frozen=True)
class FetchResult:
    """Matches for one date; `is_live` is False when they are fallback fixtures."""

    matches: list[Match]
    is_live: bool


class MatchSource:
    """Fetch matches and teams; every public method is total and never raises."""

    def __init__(self, settings: Settings, client: BasketballAPIClient | None = None) -> None:
        self.settings = settings
        self.client = client or BasketballAPIClient(settings)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> MatchSource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch_matches_for_date(self, day: date | datetime) -> FetchResult:
        """Fetch all games on `day`, degrading to re-dated fallback fixtures on failure."""
        target = calendar_day(day)
        day_str = query_date(target)
        if not self.settings.has_api_key:
            logger.warning("no basketball API key configured; serving fallback fixtures")
            return FetchResult(matches=mock_matches_for_date(target), is_live=False)

        logger.info("fetching matches for %s", day_str)
        try:
            response = self.client.games_by_date(day_str)
            matches = transform_games(response.rows)
        except UpstreamMalformedError as exc:
            logger.warning("match fetch for %s returned an unexpected body: %s", day_str, exc)
            return FetchResult(matches=[], is_live=True)
        except (BasketballAPIError, MalformedPayloadError) as exc:
            logger.warning("match fetch for %s failed, serving fallback fixtures: %s", day_str, exc)
            return FetchResult(matches=mock_matches_for_date(target), is_live=False)
        except Exception:
            logger.exception("unexpected error fetching matches for %s", day_str)
            return FetchResult(matches=mock_matches_for_date(target), is_live=False)

        logger.info("found %d matches for %s", len(matches), day_str)
        return FetchResult(matches=matches, is_live=True)

    def fetch_head_to_head(
        self, team_a: str, team_b: str, *, exclude_match_id: str | None = None
    ) -> list[Match]:
        """Most recent meetings between two teams, newest first, at most `H2H_LIMIT`."""
        if not self.settings.has_api_key:
            return []
        try:
            response = self.client.games_head_to_head(team_a, team_b)
            matches = transform_games(response.rows)
        except (BasketballAPIError, MalformedPayloadError) as exc:
            logger.warning("h2h fetch %s-%s failed: %s", team_a, team_b, exc)
            return []
        except Exception:
            logger.exception("unexpected error fetching h2h %s-%s", team_a, team_b)
            return []

        if exclude_match_id is not None:
            matches = [match for match in matches if match.id != exclude_match_id]
        matches.sort(key=lambda match: match.start_time, reverse=True)
        return matches[:H2H_LIMIT]

    def fetch_team_schedule(self, team_id: str) -> list[Match]:
        """All games for a team in the configured season, in upstream order."""
        if not self.settings.has_api_key:
            return []
        season = self.settings.basketball_api_season
        try:
            response = self.client.games_for_team(team_id, season)
            return transform_games(response.rows)
        except (BasketballAPIError, MalformedPayloadError) as exc:
            logger.warning("schedule fetch for team %s (%s) failed: %s", team_id, season, exc)
            return []
        except Exception:
            logger.exception("unexpected error fetching schedule for team %s", team_id)
            return []

    def search_teams(self, query: str) -> list[TeamSearchResult]:
        """Search teams by name; queries shorter than three characters return nothing."""
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []
        if not self.settings.has_api_key:
            return search_fallback_teams(query)
        try:
            response = self.client.search_teams(query)
            return transform_teams(response.rows)
        except MissingCredentialError:
            return search_fallback_teams(query)
        except BasketballAPIError as exc:
            logger.warning("team search %r failed: %s", query, exc)
            return []
        except Exception:
            logger.exception("unexpected error searching teams for %r", query)
            return []
