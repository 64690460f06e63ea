from __future__ import annotations

from dataclasses import replace

from hoops_live.fixtures import MOCK_MATCHES, mock_matches_for_date
from hoops_live.models import Score
from hoops_live.seo import (
    SCHEMA_MATCH_LIMIT,
    breadcrumb_schema,
    match_detail_schema,
    page_metadata,
    sports_event_list_schema,
)


def test_page_metadata_league_wins_over_view_mode() -> None:
    meta = page_metadata("LIVE", "EuroLeague", 4)

    assert meta.title == "EuroLeague Live Scores, Standings & Results | HoopsLive"
    assert "EuroLeague standings" in meta.keywords


def test_page_metadata_by_view_mode() -> None:
    assert page_metadata("LIVE", None, 3).title.startswith("Live Basketball Scores (3 Games")
    assert "Schedule" in page_metadata("SCHEDULED", None, 0).title
    assert page_metadata("ALL", None, 10).title.startswith("NBA Live Scores")
    assert page_metadata("FAVORITES", "", 10).title.startswith("NBA Live Scores")


def test_event_list_schema_caps_matches() -> None:
    matches = []
    for offset in range(5):
        matches.extend(
            replace(match, id=f"{match.id}-{offset}")
            for match in mock_matches_for_date(MOCK_MATCHES[0].start_time.date())
        )

    schema = sports_event_list_schema(matches)

    items = schema["itemListElement"]
    assert len(items) == SCHEMA_MATCH_LIMIT
    assert [item["position"] for item in items[:3]] == [1, 2, 3]


def test_event_schema_scores_only_when_started() -> None:
    live, scheduled = MOCK_MATCHES[0], MOCK_MATCHES[1]

    items = sports_event_list_schema([live, scheduled])["itemListElement"]

    assert items[0]["item"]["homeTeam"]["score"] == 83
    assert "homeTeam" not in items[1]["item"]
    assert items[0]["item"]["startDate"] == "2024-11-01T00:30:00Z"


def test_event_schema_omits_missing_logo() -> None:
    match = replace(
        MOCK_MATCHES[1],
        home_team=replace(MOCK_MATCHES[1].home_team, logo=None),
        home_score=Score(),
    )

    detail = match_detail_schema(match)

    assert "logo" not in detail["homeTeam"]
    assert detail["awayTeam"]["logo"].endswith(".png")


def test_breadcrumb_schema_positions() -> None:
    crumbs = breadcrumb_schema("Live")["itemListElement"]

    assert [crumb["name"] for crumb in crumbs] == ["Home", "Basketball Scores", "Live"]
