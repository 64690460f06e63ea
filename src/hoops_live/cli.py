"""CLI entrypoint for hoops-live."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

from hoops_live.analysis import MatchAnalyst
from hoops_live.favorites import FavoritesStore
from hoops_live.match_source import FetchResult, MatchSource
from hoops_live.models import VIEW_MODES
from hoops_live.polling import PollingController
from hoops_live.runtime_config import load_runtime_config, set_current_runtime_config
from hoops_live.seo import page_metadata, sports_event_list_schema
from hoops_live.settings import Settings
from hoops_live.time_utils import parse_query_date
from hoops_live.views import DashboardState, derive_league_directory, derive_view


class CLIError(RuntimeError):
    """User-facing CLI error."""


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def _load_settings(args: argparse.Namespace) -> Settings:
    config_path = Path(args.config).expanduser() if args.config else None
    runtime = load_runtime_config(config_path)
    if args.state_dir:
        runtime = runtime.with_state_dir(Path(args.state_dir))
    set_current_runtime_config(runtime)
    return Settings.from_runtime()


def _selected_date(raw: str) -> date:
    if not raw:
        return date.today()
    try:
        return parse_query_date(raw)
    except ValueError as exc:
        raise CLIError(f"invalid --date {raw!r}; expected YYYY-MM-DD") from exc


def _cmd_matches(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    favorites = FavoritesStore(settings.state_dir).load()
    state = DashboardState(selected_date=_selected_date(args.date), favorites=favorites)
    state = state.select_view_mode(args.view)
    if args.league:
        state = state.select_league(args.league)
    with MatchSource(settings) as source:
        result = source.fetch_matches_for_date(state.selected_date)
    view = derive_view(result.matches, state)
    payload = view.to_dict()
    payload["is_live"] = result.is_live
    payload["state"] = state.to_dict()
    if args.with_meta:
        meta = page_metadata(state.view_mode, view.active_league_name, len(view.matches))
        payload["meta"] = {
            "title": meta.title,
            "description": meta.description,
            "keywords": meta.keywords,
        }
        payload["schema"] = sports_event_list_schema(view.matches)
    _print_json(payload)
    return 0


def _cmd_leagues(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    with MatchSource(settings) as source:
        result = source.fetch_matches_for_date(_selected_date(args.date))
    _print_json([league.to_dict() for league in derive_league_directory(result.matches)])
    return 0


def _cmd_h2h(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    with MatchSource(settings) as source:
        matches = source.fetch_head_to_head(
            args.team_a, args.team_b, exclude_match_id=args.exclude or None
        )
    _print_json([match.to_dict() for match in matches])
    return 0


def _cmd_schedule(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    with MatchSource(settings) as source:
        matches = source.fetch_team_schedule(args.team_id)
    _print_json([match.to_dict() for match in matches])
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    with MatchSource(settings) as source:
        teams = source.search_teams(args.query)
    _print_json([team.to_dict() for team in teams])
    return 0


def _cmd_favorite_toggle(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    store = FavoritesStore(settings.state_dir)
    favorites = store.toggle(args.match_id)
    _print_json({"match_id": args.match_id, "favorite": args.match_id in favorites})
    return 0


def _cmd_favorite_ls(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    _print_json(sorted(FavoritesStore(settings.state_dir).load()))
    return 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    with MatchSource(settings) as source:
        result = source.fetch_matches_for_date(_selected_date(args.date))
    match = next((row for row in result.matches if row.id == args.match_id), None)
    if match is None:
        raise CLIError(f"match {args.match_id} not found on {args.date or 'today'}")
    print(MatchAnalyst(settings).analyze(match))
    return 0


def _cmd_ask(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    print(MatchAnalyst(settings).ask(args.query))
    return 0


def _cmd_watch(args: argparse.Namespace) -> int:
    settings = _load_settings(args)
    day = _selected_date(args.date)
    interval_s = args.interval if args.interval > 0 else settings.polling_interval_s

    def on_update(result: FetchResult) -> None:
        live = sum(1 for match in result.matches if match.is_in_play)
        source = "live" if result.is_live else "fallback"
        print(f"{day.isoformat()} matches={len(result.matches)} in_play={live} source={source}")

    with MatchSource(settings) as source:
        controller = PollingController(
            source.fetch_matches_for_date, on_update, interval_s=interval_s
        )
        controller.select_date(day)
        try:
            controller.run(stop=lambda: args.cycles > 0 and controller.cycles >= args.cycles)
        except KeyboardInterrupt:
            pass
        finally:
            controller.dispose()
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hoops-live")
    parser.add_argument(
        "--config",
        default="",
        help="Path to runtime config TOML (default: config/runtime.toml).",
    )
    parser.add_argument(
        "--state-dir",
        default="",
        help="Override the directory holding persisted favorites.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    matches = subparsers.add_parser("matches", help="List matches for a date, grouped by league")
    matches.add_argument("--date", default="", help="YYYY-MM-DD (default: today)")
    scope = matches.add_mutually_exclusive_group()
    scope.add_argument("--view", choices=VIEW_MODES, default="ALL")
    scope.add_argument("--league", default="", help="Restrict to one league id")
    matches.add_argument("--with-meta", action="store_true", help="Include page metadata")
    matches.set_defaults(func=_cmd_matches)

    leagues = subparsers.add_parser("leagues", help="League directory for a date")
    leagues.add_argument("--date", default="")
    leagues.set_defaults(func=_cmd_leagues)

    h2h = subparsers.add_parser("h2h", help="Recent head-to-head meetings")
    h2h.add_argument("team_a")
    h2h.add_argument("team_b")
    h2h.add_argument("--exclude", default="", help="Match id to leave out")
    h2h.set_defaults(func=_cmd_h2h)

    schedule = subparsers.add_parser("schedule", help="Season schedule for a team")
    schedule.add_argument("team_id")
    schedule.set_defaults(func=_cmd_schedule)

    search = subparsers.add_parser("search", help="Search teams by name")
    search.add_argument("query")
    search.set_defaults(func=_cmd_search)

    favorite = subparsers.add_parser("favorite", help="Manage favorite matches")
    favorite_sub = favorite.add_subparsers(dest="favorite_command")
    toggle = favorite_sub.add_parser("toggle", help="Toggle a match id")
    toggle.add_argument("match_id")
    toggle.set_defaults(func=_cmd_favorite_toggle)
    favorite_ls = favorite_sub.add_parser("ls", help="List favorite match ids")
    favorite_ls.set_defaults(func=_cmd_favorite_ls)

    analyze = subparsers.add_parser("analyze", help="LLM analysis for one match")
    analyze.add_argument("match_id")
    analyze.add_argument("--date", default="")
    analyze.set_defaults(func=_cmd_analyze)

    ask = subparsers.add_parser("ask", help="Ask the basketball assistant a question")
    ask.add_argument("query")
    ask.set_defaults(func=_cmd_ask)

    watch = subparsers.add_parser("watch", help="Poll matches for a date")
    watch.add_argument("--date", default="")
    watch.add_argument("--interval", type=float, default=0.0, help="Seconds between polls")
    watch.add_argument("--cycles", type=int, default=0, help="Stop after N fetches (0: forever)")
    watch.set_defaults(func=_cmd_watch)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    try:
        return int(func(args))
    except (CLIError, FileNotFoundError, ValueError, RuntimeError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
