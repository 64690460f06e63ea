"""Deterministic synthetic fixtures shown when the upstream source is unavailable."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, date, datetime

from hoops_live.models import (
    FINISHED,
    HALFTIME,
    LIVE,
    SCHEDULED,
    Match,
    MatchStats,
    Score,
    Team,
    TeamSearchResult,
)

LOGO_URL = "https://media.api-sports.io/basketball/teams/{team_id}.png"


def _team(team_id: str, name: str, short_name: str) -> Team:
    return Team(id=team_id, name=name, short_name=short_name, logo=LOGO_URL.format(team_id=team_id))


def _at(hour: int, minute: int) -> datetime:
    return datetime(2024, 11, 1, hour, minute, tzinfo=UTC)


MOCK_MATCHES: tuple[Match, ...] = (
    Match(
        id="mock-1",
        league_id="12",
        league_name="NBA",
        country="USA",
        home_team=_team("145", "Los Angeles Lakers", "LAL"),
        away_team=_team("146", "Golden State Warriors", "GSW"),
        home_score=Score(q1=28, q2=31, q3=24, q4=0, total=83),
        away_score=Score(q1=25, q2=27, q3=30, q4=0, total=82),
        status=LIVE,
        start_time=_at(0, 30),
        current_time="Q3 02:41",
        home_stats=MatchStats(
            fg_percentage=48.2, three_pt_percentage=36.1, rebounds=31, assists=19, turnovers=9
        ),
        away_stats=MatchStats(
            fg_percentage=45.0, three_pt_percentage=39.4, rebounds=27, assists=22, turnovers=11
        ),
        tv="ESPN, NBA TV",
    ),
    Match(
        id="mock-2",
        league_id="12",
        league_name="NBA",
        country="USA",
        home_team=_team("133", "Boston Celtics", "BOS"),
        away_team=_team("147", "Milwaukee Bucks", "MIL"),
        home_score=Score(),
        away_score=Score(),
        status=SCHEDULED,
        start_time=_at(23, 0),
        current_time="Not Started",
        tv="TNT",
    ),
    Match(
        id="mock-3",
        league_id="120",
        league_name="Euroleague",
        country="Europe",
        home_team=_team("1337", "Real Madrid", "RMB"),
        away_team=_team("1331", "Panathinaikos", "PAO"),
        home_score=Score(q1=22, q2=19, q3=21, q4=24, total=86),
        away_score=Score(q1=18, q2=23, q3=20, q4=19, total=80),
        status=FINISHED,
        start_time=_at(19, 45),
        current_time="Ended",
    ),
    Match(
        id="mock-4",
        league_id="116",
        league_name="NCAA",
        country="USA",
        home_team=_team("2151", "Duke Blue Devils", "DUKE"),
        away_team=_team("2173", "North Carolina Tar Heels", "UNC"),
        home_score=Score(q1=35, q2=0, q3=0, q4=0, total=35),
        away_score=Score(q1=31, q2=0, q3=0, q4=0, total=31),
        status=HALFTIME,
        start_time=_at(1, 0),
        current_time="Halftime",
    ),
    Match(
        id="mock-5",
        league_id="117",
        league_name="ACB",
        country="Spain",
        home_team=_team("2334", "Barcelona", "BAR"),
        away_team=_team("2341", "Valencia", "VAL"),
        home_score=Score(),
        away_score=Score(),
        status=SCHEDULED,
        start_time=_at(18, 30),
        current_time="Not Started",
    ),
)

FALLBACK_TEAMS: tuple[TeamSearchResult, ...] = (
    TeamSearchResult(
        id="1",
        name="Los Angeles Lakers",
        logo=LOGO_URL.format(team_id="145"),
        country="USA",
        national=False,
    ),
    TeamSearchResult(
        id="2",
        name="Golden State Warriors",
        logo=LOGO_URL.format(team_id="146"),
        country="USA",
        national=False,
    ),
)


def redate(value: datetime, day: date) -> datetime:
    """Move a timestamp onto `day`, keeping its hour and minute."""
    return value.replace(year=day.year, month=day.month, day=day.day, second=0, microsecond=0)


def mock_matches_for_date(day: date) -> list[Match]:
    """Return the fallback fixtures re-dated onto `day`."""
    return [replace(match, start_time=redate(match.start_time, day)) for match in MOCK_MATCHES]


def search_fallback_teams(query: str) -> list[TeamSearchResult]:
    needle = query.lower()
    return [team for team in FALLBACK_TEAMS if needle in team.name.lower()]
