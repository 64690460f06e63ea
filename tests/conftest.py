from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

API_KEY_ENV_NAMES = (
    "VITE_BASKETBALL_API_KEY",
    "BASKETBALL_API_KEY",
    "REACT_APP_BASKETBALL_API_KEY",
    "HOOPS_BASKETBALL_API_KEY",
    "OPENAI_API_KEY",
    "HOOPS_OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def _clear_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in API_KEY_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def build_game(
    game_id: int = 1001,
    *,
    date: str = "2025-01-15T00:30:00+00:00",
    league_id: int = 12,
    league_name: str = "NBA",
    short: str = "Q3",
    long: str = "Quarter 3",
    timer: Any = "05:12",
    period: Any = None,
    home_total: int | None = 80,
    away_total: int | None = 77,
) -> dict[str, Any]:
    return {
        "id": game_id,
        "date": date,
        "status": {"long": long, "short": short, "timer": timer, "period": period},
        "league": {"id": league_id, "name": league_name, "season": "2024-2025"},
        "country": {"id": 5, "name": "USA"},
        "teams": {
            "home": {"id": 145, "name": "Los Angeles Lakers", "logo": "https://x/145.png"},
            "away": {"id": 146, "name": "Golden State Warriors", "logo": ""},
        },
        "scores": {
            "home": {
                "quarter_1": 20,
                "quarter_2": 30,
                "quarter_3": 30,
                "quarter_4": None,
                "over_time": None,
                "total": home_total,
            },
            "away": {
                "quarter_1": 25,
                "quarter_2": 22,
                "quarter_3": 30,
                "quarter_4": None,
                "over_time": None,
                "total": away_total,
            },
        },
    }


@pytest.fixture
def game_row() -> Callable[..., dict[str, Any]]:
    return build_game
