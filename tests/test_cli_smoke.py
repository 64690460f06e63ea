from __future__ import annotations

import json
from pathlib import Path

import pytest

from hoops_live.cli import main
from hoops_live.runtime_config import set_current_runtime_config


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "runtime.toml"
    path.write_text('[paths]\nstate_dir = "state"\n', encoding="utf-8")
    yield path
    set_current_runtime_config(None)


def test_cli_matches_uses_fallback_without_key(capsys, config_path: Path) -> None:
    code = main(["--config", str(config_path), "matches", "--date", "2025-01-15"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["is_live"] is False
    assert payload["state"]["selected_date"] == "2025-01-15"
    assert [league["name"] for league in payload["leagues"]][:2] == ["NBA", "Euroleague"]
    starts = [match["start_time"] for group in payload["groups"] for match in group["matches"]]
    assert starts and all(start.startswith("2025-01-15") for start in starts)


def test_cli_matches_live_view_with_meta(capsys, config_path: Path) -> None:
    code = main(
        ["--config", str(config_path), "matches", "--date", "2025-01-15", "--view", "LIVE"]
        + ["--with-meta"]
    )
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    statuses = {match["status"] for group in payload["groups"] for match in group["matches"]}
    assert statuses <= {"LIVE", "HALFTIME"}
    assert payload["meta"]["title"].startswith(f"Live Basketball Scores ({payload['match_count']}")
    assert payload["schema"]["@type"] == "ItemList"


def test_cli_favorite_toggle_persists(capsys, config_path: Path) -> None:
    assert main(["--config", str(config_path), "favorite", "toggle", "mock-3"]) == 0
    assert json.loads(capsys.readouterr().out) == {"match_id": "mock-3", "favorite": True}

    assert main(["--config", str(config_path), "favorite", "ls"]) == 0
    assert json.loads(capsys.readouterr().out) == ["mock-3"]

    code = main(
        ["--config", str(config_path), "matches", "--date", "2025-01-15", "--view", "FAVORITES"]
    )
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [m["id"] for group in payload["groups"] for m in group["matches"]] == ["mock-3"]


def test_cli_search_short_query_is_empty(capsys, config_path: Path) -> None:
    assert main(["--config", str(config_path), "search", "la"]) == 0
    assert json.loads(capsys.readouterr().out) == []

    assert main(["--config", str(config_path), "search", "lakers"]) == 0
    assert [team["id"] for team in json.loads(capsys.readouterr().out)] == ["1"]


def test_cli_h2h_without_key_is_empty(capsys, config_path: Path) -> None:
    assert main(["--config", str(config_path), "h2h", "145", "146"]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_cli_watch_single_cycle(capsys, config_path: Path) -> None:
    code = main(["--config", str(config_path), "watch", "--date", "2025-01-15", "--cycles", "1"])

    assert code == 0
    assert "2025-01-15 matches=5 in_play=2 source=fallback" in capsys.readouterr().out


def test_cli_analyze_without_openai_key(capsys, config_path: Path) -> None:
    code = main(["--config", str(config_path), "analyze", "mock-1", "--date", "2025-01-15"])

    assert code == 0
    assert "Unable to generate analysis" in capsys.readouterr().out


def test_cli_reports_bad_date(capsys, config_path: Path) -> None:
    code = main(["--config", str(config_path), "matches", "--date", "15/01/2025"])

    assert code == 2
    assert "invalid --date" in capsys.readouterr().err


def test_cli_matches_rejects_view_with_league(capsys, config_path: Path) -> None:
    argv = ["--config", str(config_path), "matches", "--view", "LIVE", "--league", "12"]

    with pytest.raises(SystemExit) as exc_info:
        main(argv)

    assert exc_info.value.code == 2
    assert "not allowed with argument" in capsys.readouterr().err


def test_cli_matches_league_filter(capsys, config_path: Path) -> None:
    argv = ["--config", str(config_path), "matches", "--date", "2025-01-15", "--league", "120"]
    code = main(argv)
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["state"]["view_mode"] == "ALL"
    assert payload["active_league_name"] == "Euroleague"
    assert [m["id"] for group in payload["groups"] for m in group["matches"]] == ["mock-3"]


def test_cli_ask_without_openai_key(capsys, config_path: Path) -> None:
    code = main(["--config", str(config_path), "ask", "who won the 2016 finals?"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "Error connecting to AI."
