"""Normalize api-sports basketball payloads into domain models."""

from __future__ import annotations

import logging
from typing import Any

from hoops_live.models import Match, Score, Team, TeamSearchResult
from hoops_live.status import clock_label, map_status
from hoops_live.time_utils import parse_iso_z
from hoops_live.util.parsing import as_dict, id_str, optional_str, points, safe_int

logger = logging.getLogger(__name__)


class MalformedPayloadError(ValueError):
    """Raised when an upstream row does not have the expected shape."""


def looks_like_game(raw: Any) -> bool:
    """Cheap shape check for one upstream game object."""
    if not isinstance(raw, dict):
        return False
    teams = raw.get("teams")
    if not isinstance(teams, dict):
        return False
    for side in ("home", "away"):
        team = teams.get(side)
        if not isinstance(team, dict) or not id_str(team.get("id")):
            return False
        if not isinstance(team.get("name"), str):
            return False
    league = raw.get("league")
    return (
        bool(id_str(raw.get("id")))
        and isinstance(league, dict)
        and bool(id_str(league.get("id")))
        and isinstance(raw.get("status"), dict)
        and isinstance(raw.get("date"), str)
    )


def _team(raw: dict[str, Any]) -> Team:
    return Team.from_name(
        id=id_str(raw.get("id")),
        name=str(raw.get("name", "")).strip(),
        short_name=optional_str(raw.get("code")),
        logo=optional_str(raw.get("logo")),
    )


def _score(raw: Any) -> Score:
    row = as_dict(raw)
    ot = safe_int(row.get("over_time"))
    return Score(
        q1=points(row.get("quarter_1")),
        q2=points(row.get("quarter_2")),
        q3=points(row.get("quarter_3")),
        q4=points(row.get("quarter_4")),
        total=points(row.get("total")),
        ot=ot if ot is not None and ot >= 0 else None,
    )


def _tv(raw: dict[str, Any]) -> str | None:
    stations = raw.get("tv_stations")
    if isinstance(stations, list):
        names = [str(item).strip() for item in stations if str(item).strip()]
        return ", ".join(names) if names else None
    return optional_str(raw.get("tv"))


def transform_game(raw: Any) -> Match:
    """Map one upstream game object onto `Match`."""
    if not looks_like_game(raw):
        raise MalformedPayloadError("game payload missing id/league/teams/status/date")
    start_time = parse_iso_z(raw["date"])
    if start_time is None:
        raise MalformedPayloadError(f"game {raw.get('id')} has unparseable date {raw['date']!r}")

    status = as_dict(raw.get("status"))
    league = as_dict(raw.get("league"))
    country = as_dict(raw.get("country"))
    teams = raw["teams"]
    scores = as_dict(raw.get("scores"))
    return Match(
        id=id_str(raw.get("id")),
        league_id=id_str(league.get("id")),
        league_name=str(league.get("name", "")).strip(),
        country=str(country.get("name", "")).strip(),
        home_team=_team(teams["home"]),
        away_team=_team(teams["away"]),
        home_score=_score(scores.get("home")),
        away_score=_score(scores.get("away")),
        status=map_status(status.get("short")),
        start_time=start_time,
        current_time=clock_label(
            short=status.get("short"),
            long=status.get("long"),
            timer=status.get("timer"),
            period=status.get("period"),
        ),
        tv=_tv(raw),
    )


def transform_games(rows: list[Any]) -> list[Match]:
    """Transform every well-formed row, skipping the rest."""
    matches: list[Match] = []
    skipped = 0
    for row in rows:
        try:
            matches.append(transform_game(row))
        except MalformedPayloadError as exc:
            skipped += 1
            logger.debug("skipping malformed game row: %s", exc)
    if skipped:
        logger.warning("skipped %d malformed game rows of %d", skipped, len(rows))
    return matches


def transform_team(raw: Any) -> TeamSearchResult:
    """Map one upstream team search row onto `TeamSearchResult`."""
    row = as_dict(raw)
    team_id = id_str(row.get("id"))
    name = row.get("name")
    if not team_id or not isinstance(name, str):
        raise MalformedPayloadError("team payload missing id/name")
    return TeamSearchResult(
        id=team_id,
        name=name.strip(),
        logo=optional_str(row.get("logo")),
        country=str(as_dict(row.get("country")).get("name", "")).strip(),
        national=row.get("national") is True,
    )


def transform_teams(rows: list[Any]) -> list[TeamSearchResult]:
    results: list[TeamSearchResult] = []
    for row in rows:
        try:
            results.append(transform_team(row))
        except MalformedPayloadError as exc:
            logger.debug("skipping malformed team row: %s", exc)
    return results
