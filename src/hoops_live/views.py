"""Pure view derivation over a match collection and dashboard state."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from hoops_live.basketball_client import MIN_SEARCH_QUERY_LENGTH
from hoops_live.models import (
    FINISHED,
    HALFTIME,
    LIVE,
    SCHEDULED,
    VIEW_MODES,
    League,
    Match,
    ViewMode,
)

DEFAULT_LEAGUE_FLAG = "\U0001f3c0"
DEFAULT_PRIORITY = 100


def league_priority(name: str) -> int:
    """Display priority for a league name; lower sorts first."""
    lowered = name.strip().lower()
    if lowered == "nba":
        return 1
    if "euroleague" in lowered:
        return 2
    if "ncaa" in lowered:
        return 3
    return DEFAULT_PRIORITY


def derive_league_directory(matches: Iterable[Match]) -> list[League]:
    """Distinct leagues in first-seen order, stable-sorted by priority."""
    seen: dict[str, League] = {}
    for match in matches:
        if match.league_id in seen:
            continue
        seen[match.league_id] = League(
            id=match.league_id,
            name=match.league_name,
            country=match.country,
            flag=DEFAULT_LEAGUE_FLAG,
            priority=league_priority(match.league_name),
        )
    return sorted(seen.values(), key=lambda league: league.priority)


def _matches_view_mode(match: Match, view_mode: ViewMode, favorites: frozenset[str]) -> bool:
    if view_mode == "FAVORITES":
        return match.id in favorites
    if view_mode == "LIVE":
        return match.status in (LIVE, HALFTIME)
    if view_mode == "FINISHED":
        return match.status == FINISHED
    if view_mode == "SCHEDULED":
        return match.status == SCHEDULED
    return True


def filter_matches(
    matches: Sequence[Match],
    view_mode: ViewMode,
    selected_league_id: str | None,
    favorites: Iterable[str],
) -> list[Match]:
    """Apply the view-mode predicate, then the league restriction; input order is kept."""
    if view_mode not in VIEW_MODES:
        raise ValueError(f"unknown view mode: {view_mode}")
    favorite_ids = frozenset(favorites)
    filtered = [match for match in matches if _matches_view_mode(match, view_mode, favorite_ids)]
    if selected_league_id is not None:
        filtered = [match for match in filtered if match.league_id == selected_league_id]
    return filtered


def group_by_league(matches: Iterable[Match]) -> dict[str, list[Match]]:
    """Group by league id, keeping first-seen league order and per-league match order."""
    grouped: dict[str, list[Match]] = {}
    for match in matches:
        grouped.setdefault(match.league_id, []).append(match)
    return grouped


def search_active(query: str) -> bool:
    return len(query) >= MIN_SEARCH_QUERY_LENGTH


@dataclass(frozen=True)
class DashboardState:
    """All transient dashboard UI state as one serializable record."""

    selected_date: date
    view_mode: ViewMode = "ALL"
    selected_league_id: str | None = None
    favorites: frozenset[str] = field(default_factory=frozenset)
    search_query: str = ""

    def select_league(self, league_id: str | None) -> DashboardState:
        """League and view mode are exclusive facets; picking a league resets to ALL."""
        return replace(self, selected_league_id=league_id, view_mode="ALL")

    def select_view_mode(self, view_mode: ViewMode) -> DashboardState:
        if view_mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {view_mode}")
        return replace(self, view_mode=view_mode, selected_league_id=None, search_query="")

    def select_date(self, selected_date: date) -> DashboardState:
        return replace(self, selected_date=selected_date)

    def set_search_query(self, query: str) -> DashboardState:
        return replace(self, search_query=query)

    def with_favorites(self, favorites: Iterable[str]) -> DashboardState:
        return replace(self, favorites=frozenset(favorites))

    def to_dict(self) -> dict[str, Any]:
        return {
            "selected_date": self.selected_date.isoformat(),
            "view_mode": self.view_mode,
            "selected_league_id": self.selected_league_id,
            "favorites": sorted(self.favorites),
            "search_query": self.search_query,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> DashboardState:
        view_mode = payload.get("view_mode", "ALL")
        if view_mode not in VIEW_MODES:
            raise ValueError(f"unknown view mode: {view_mode}")
        league_id = payload.get("selected_league_id")
        favorites = payload.get("favorites") or []
        return cls(
            selected_date=date.fromisoformat(str(payload["selected_date"])),
            view_mode=view_mode,
            selected_league_id=str(league_id) if league_id is not None else None,
            favorites=frozenset(str(item) for item in favorites if isinstance(item, str)),
            search_query=str(payload.get("search_query", "")),
        )


@dataclass(frozen=True)
class DashboardView:
    leagues: list[League]
    matches: list[Match]
    grouped: dict[str, list[Match]]
    active_league_name: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "leagues": [league.to_dict() for league in self.leagues],
            "active_league_name": self.active_league_name,
            "match_count": len(self.matches),
            "groups": [
                {
                    "league_id": league_id,
                    "league_name": rows[0].league_name,
                    "country": rows[0].country,
                    "matches": [match.to_dict() for match in rows],
                }
                for league_id, rows in self.grouped.items()
            ],
        }


def derive_view(matches: Sequence[Match], state: DashboardState) -> DashboardView:
    """Compute every derived view for the current collection and state."""
    leagues = derive_league_directory(matches)
    filtered = filter_matches(
        matches, state.view_mode, state.selected_league_id, state.favorites
    )
    active_league_name = None
    if state.selected_league_id is not None:
        active_league_name = next(
            (league.name for league in leagues if league.id == state.selected_league_id), None
        )
    return DashboardView(
        leagues=leagues,
        matches=filtered,
        grouped=group_by_league(filtered),
        active_league_name=active_league_name,
    )
