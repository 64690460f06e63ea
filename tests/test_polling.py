from __future__ import annotations

from datetime import date

import pytest

from hoops_live.fixtures import mock_matches_for_date
from hoops_live.match_source import FetchResult
from hoops_live.polling import PollingController


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _result(day: date) -> FetchResult:
    return FetchResult(matches=mock_matches_for_date(day), is_live=False)


def test_select_date_fetches_immediately_and_schedules() -> None:
    clock = FakeClock()
    fetched: list[date] = []
    applied: list[FetchResult] = []

    def fetch(day: date) -> FetchResult:
        fetched.append(day)
        return _result(day)

    controller = PollingController(fetch, applied.append, interval_s=60.0, clock=clock)
    controller.select_date(date(2025, 1, 15))

    assert fetched == [date(2025, 1, 15)]
    assert len(applied) == 1
    assert controller.next_due == 60.0
    assert controller.state == "IDLE"


def test_tick_refetches_only_when_due() -> None:
    clock = FakeClock()
    fetched: list[date] = []
    controller = PollingController(
        lambda day: fetched.append(day) or _result(day), lambda _: None, clock=clock
    )
    controller.select_date(date(2025, 1, 15))

    clock.advance(59.0)
    assert controller.tick() is False
    clock.advance(1.0)
    assert controller.tick() is True
    assert controller.next_due == 120.0
    assert len(fetched) == 2


def test_tick_skips_when_hidden() -> None:
    clock = FakeClock()
    visible = {"value": False}
    fetched: list[date] = []
    controller = PollingController(
        lambda day: fetched.append(day) or _result(day),
        lambda _: None,
        clock=clock,
        is_visible=lambda: visible["value"],
    )
    controller.select_date(date(2025, 1, 15))

    clock.advance(60.0)
    assert controller.tick() is False
    assert controller.skipped == 1
    visible["value"] = True
    clock.advance(60.0)
    assert controller.tick() is True
    assert len(fetched) == 2


def test_date_change_cancels_previous_schedule() -> None:
    clock = FakeClock()
    fetched: list[date] = []
    controller = PollingController(
        lambda day: fetched.append(day) or _result(day), lambda _: None, clock=clock
    )
    controller.select_date(date(2025, 1, 15))
    clock.advance(50.0)
    controller.select_date(date(2025, 1, 16))

    clock.advance(10.0)
    assert controller.tick() is False
    clock.advance(50.0)
    assert controller.tick() is True
    assert fetched == [date(2025, 1, 15), date(2025, 1, 16), date(2025, 1, 16)]


def test_dispose_drops_in_flight_response() -> None:
    applied: list[FetchResult] = []
    holder: dict[str, PollingController] = {}

    def fetch(day: date) -> FetchResult:
        holder["controller"].dispose()
        return _result(day)

    controller = PollingController(fetch, applied.append)
    holder["controller"] = controller
    controller.select_date(date(2025, 1, 15))

    assert applied == []
    assert controller.discarded == 1
    assert controller.state == "DISPOSED"
    assert controller.tick() is False
    with pytest.raises(RuntimeError):
        controller.select_date(date(2025, 1, 16))


def _racing_controller(sequence_guard: bool) -> tuple[PollingController, list[FetchResult]]:
    applied: list[FetchResult] = []
    holder: dict[str, PollingController] = {}
    calls = {"count": 0}

    def fetch(day: date) -> FetchResult:
        calls["count"] += 1
        if calls["count"] == 1:
            # A newer date selection lands while the first request is in flight.
            holder["controller"].select_date(date(2025, 1, 16))
        return _result(day)

    controller = PollingController(fetch, applied.append, sequence_guard=sequence_guard)
    holder["controller"] = controller
    controller.select_date(date(2025, 1, 15))
    return controller, applied


def test_sequence_guard_discards_stale_response() -> None:
    controller, applied = _racing_controller(sequence_guard=True)

    assert [result.matches[0].start_time.date() for result in applied] == [date(2025, 1, 16)]
    assert controller.discarded == 1
    assert controller.selected_date == date(2025, 1, 16)


def test_without_guard_last_response_wins() -> None:
    controller, applied = _racing_controller(sequence_guard=False)

    assert [result.matches[0].start_time.date() for result in applied] == [
        date(2025, 1, 16),
        date(2025, 1, 15),
    ]
    assert controller.discarded == 0


def test_run_stops_on_predicate() -> None:
    clock = FakeClock()
    controller = PollingController(_result, lambda _: None, interval_s=5.0, clock=clock)
    controller.select_date(date(2025, 1, 15))

    controller.run(stop=lambda: controller.cycles >= 3, sleep=clock.advance, poll_s=5.0)

    assert controller.cycles == 3


def test_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        PollingController(_result, lambda _: None, interval_s=0)
