"""Canonical match domain types."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Literal

from hoops_live.time_utils import iso_z

MatchStatus = Literal["SCHEDULED", "LIVE", "HALFTIME", "FINISHED"]
ViewMode = Literal["ALL", "LIVE", "FINISHED", "SCHEDULED", "FAVORITES"]

SCHEDULED: MatchStatus = "SCHEDULED"
LIVE: MatchStatus = "LIVE"
HALFTIME: MatchStatus = "HALFTIME"
FINISHED: MatchStatus = "FINISHED"
MATCH_STATUSES: tuple[MatchStatus, ...] = (SCHEDULED, LIVE, HALFTIME, FINISHED)

VIEW_MODES: tuple[ViewMode, ...] = ("ALL", "LIVE", "FINISHED", "SCHEDULED", "FAVORITES")


def short_name_for(name: str) -> str:
    """Derive a team abbreviation from its name."""
    return name[:3].upper()


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    short_name: str
    logo: str | None = None

    @classmethod
    def from_name(
        cls, *, id: str, name: str, short_name: str | None = None, logo: str | None = None
    ) -> Team:
        return cls(id=id, name=name, short_name=short_name or short_name_for(name), logo=logo)


@dataclass(frozen=True)
class Score:
    """Per-quarter points; `total` is authoritative and may include overtime."""

    q1: int = 0
    q2: int = 0
    q3: int = 0
    q4: int = 0
    total: int = 0
    ot: int | None = None


@dataclass(frozen=True)
class MatchStats:
    fg_percentage: float
    three_pt_percentage: float
    rebounds: int
    assists: int
    turnovers: int


@dataclass(frozen=True)
class Match:
    """One fixture as of a single poll; `id` is stable across polls."""

    id: str
    league_id: str
    league_name: str
    country: str
    home_team: Team
    away_team: Team
    home_score: Score
    away_score: Score
    status: MatchStatus
    start_time: datetime
    current_time: str | None = None
    home_stats: MatchStats | None = None
    away_stats: MatchStats | None = None
    tv: str | None = None

    @property
    def is_in_play(self) -> bool:
        return self.status in (LIVE, HALFTIME)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["start_time"] = iso_z(self.start_time)
        return payload


@dataclass(frozen=True)
class League:
    id: str
    name: str
    country: str
    flag: str
    priority: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TeamSearchResult:
    id: str
    name: str
    logo: str | None
    country: str
    national: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
