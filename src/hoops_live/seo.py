"""Page metadata and schema.org structured data for the dashboard."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from hoops_live.models import Match, ViewMode
from hoops_live.time_utils import iso_z

SITE_NAME = "HoopsLive"
SITE_URL = "https://basketlivescores.com"
SCHEMA_MATCH_LIMIT = 20
EVENT_SCHEDULED = "https://schema.org/EventScheduled"


@dataclass(frozen=True)
class PageMetadata:
    title: str
    description: str
    keywords: str


def page_metadata(view_mode: ViewMode, league_name: str | None, match_count: int) -> PageMetadata:
    """Title/description/keywords; a selected league wins over the view mode."""
    if league_name:
        return PageMetadata(
            title=f"{league_name} Live Scores, Standings & Results | {SITE_NAME}",
            description=(
                f"Track live {league_name} scores, updated real-time. View {league_name} "
                f"schedule, standings, box scores, and team stats on {SITE_NAME}."
            ),
            keywords=(
                f"{league_name} scores, {league_name} live, {league_name} standings, "
                f"{league_name} schedule, basketball results"
            ),
        )
    if view_mode == "SCHEDULED":
        return PageMetadata(
            title=f"NBA & Basketball Schedule - Upcoming Games | {SITE_NAME}",
            description=(
                "Complete schedule of upcoming NBA, NCAA, and international basketball "
                "games. Find game times, TV broadcasts, and matchups."
            ),
            keywords=(
                "NBA schedule, basketball fixtures, upcoming games, NBA games tonight, "
                "college basketball schedule"
            ),
        )
    if view_mode == "LIVE":
        return PageMetadata(
            title=f"Live Basketball Scores ({match_count} Games In Play) | {SITE_NAME}",
            description=(
                f"Follow {match_count} live basketball games happening right now. Real-time "
                "play-by-play, box scores, and live updates for NBA and global leagues."
            ),
            keywords=(
                "live basketball scores, nba live, now playing basketball, "
                "real-time sports scores"
            ),
        )
    return PageMetadata(
        title=f"NBA Live Scores, NCAA Basketball Results & Stats | {SITE_NAME}",
        description=(
            "The fastest live basketball scores for NBA, NCAA College Basketball, and "
            "EuroLeague. Get real-time stats, box scores, and AI-powered match analysis."
        ),
        keywords=(
            "NBA scores, NCAA basketball, college basketball scores, basketball live stream "
            "info, NBA schedule, live sports scores, basketball stats"
        ),
    )


def _sports_team(name: str, logo: str | None) -> dict[str, Any]:
    team: dict[str, Any] = {"@type": "SportsTeam", "name": name}
    if logo:
        team["logo"] = logo
    return team


def _sports_event(match: Match) -> dict[str, Any]:
    home = match.home_team
    away = match.away_team
    event: dict[str, Any] = {
        "@type": "SportsEvent",
        "name": f"{home.name} vs {away.name}",
        "description": (
            f"{match.league_name} match: {home.name} vs {away.name}. "
            "Live score, results, and stats."
        ),
        "startDate": iso_z(match.start_time),
        "eventStatus": EVENT_SCHEDULED,
        "sport": "Basketball",
        "competitor": [_sports_team(home.name, home.logo), _sports_team(away.name, away.logo)],
        "location": {
            "@type": "Place",
            "name": f"{home.name} Arena",
            "address": {"@type": "PostalAddress", "addressCountry": match.country},
        },
    }
    if match.home_score.total > 0 or match.away_score.total > 0:
        event["homeTeam"] = {
            "@type": "SportsTeam",
            "name": home.name,
            "score": match.home_score.total,
        }
        event["awayTeam"] = {
            "@type": "SportsTeam",
            "name": away.name,
            "score": match.away_score.total,
        }
    return event


def sports_event_list_schema(matches: Sequence[Match]) -> dict[str, Any]:
    """schema.org ItemList over the first `SCHEMA_MATCH_LIMIT` matches."""
    return {
        "@context": "https://schema.org",
        "@type": "ItemList",
        "itemListElement": [
            {"@type": "ListItem", "position": index, "item": _sports_event(match)}
            for index, match in enumerate(matches[:SCHEMA_MATCH_LIMIT], start=1)
        ],
    }


def breadcrumb_schema(page_name: str) -> dict[str, Any]:
    crumbs = ["Home", "Basketball Scores", page_name]
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": index, "name": name, "item": SITE_URL}
            for index, name in enumerate(crumbs, start=1)
        ],
    }


def match_detail_schema(match: Match) -> dict[str, Any]:
    home = match.home_team
    away = match.away_team
    return {
        "@context": "https://schema.org",
        "@type": "SportsEvent",
        "name": f"{home.name} vs {away.name}",
        "startDate": iso_z(match.start_time),
        "eventStatus": EVENT_SCHEDULED,
        "sport": "Basketball",
        "description": f"Live coverage of {home.name} vs {away.name} in {match.league_name}.",
        "homeTeam": _sports_team(home.name, home.logo),
        "awayTeam": _sports_team(away.name, away.logo),
    }
