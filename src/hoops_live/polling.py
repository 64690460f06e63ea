"""Fixed-interval refresh of the match collection for the selected date."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date
from typing import Literal

from hoops_live.match_source import FetchResult

logger = logging.getLogger(__name__)

PollingState = Literal["IDLE", "FETCHING", "DISPOSED"]

DEFAULT_INTERVAL_S = 60.0

FetchFn = Callable[[date], FetchResult]
UpdateFn = Callable[[FetchResult], None]


class PollingController:
    """Immediate fetch on date change, then a re-fetch every `interval_s` while visible.

    Every fetch carries a request token. With `sequence_guard` on, a response is
    applied only if its token is still the latest issued one; with it off the
    last response to resolve wins. Responses resolving after `dispose()` are
    always dropped.
    """

    def __init__(
        self,
        fetch: FetchFn,
        on_update: UpdateFn,
        *,
        interval_s: float = DEFAULT_INTERVAL_S,
        is_visible: Callable[[], bool] = lambda: True,
        clock: Callable[[], float] = time.monotonic,
        sequence_guard: bool = True,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self._fetch = fetch
        self._on_update = on_update
        self.interval_s = interval_s
        self._is_visible = is_visible
        self._clock = clock
        self.sequence_guard = sequence_guard
        self.selected_date: date | None = None
        self.next_due: float | None = None
        self._latest_token = 0
        self._in_flight = 0
        self._disposed = False
        self.cycles = 0
        self.skipped = 0
        self.discarded = 0

    @property
    def state(self) -> PollingState:
        if self._disposed:
            return "DISPOSED"
        return "FETCHING" if self._in_flight else "IDLE"

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def select_date(self, day: date) -> None:
        """Cancel the pending schedule, fetch `day` now, then schedule the next refresh."""
        if self._disposed:
            raise RuntimeError("polling controller is disposed")
        self.next_due = None
        self.selected_date = day
        self._run_fetch(day)
        if not self._disposed and self.selected_date == day:
            self.next_due = self._clock() + self.interval_s

    def tick(self) -> bool:
        """Run the scheduled refresh if it is due; returns True when a fetch ran."""
        if self._disposed or self.next_due is None or self.selected_date is None:
            return False
        now = self._clock()
        if now < self.next_due:
            return False
        self.next_due = now + self.interval_s
        if not self._is_visible():
            self.skipped += 1
            logger.debug("view hidden; skipping refresh for %s", self.selected_date)
            return False
        self._run_fetch(self.selected_date)
        return True

    def dispose(self) -> None:
        self._disposed = True
        self.next_due = None

    def run(
        self,
        stop: Callable[[], bool],
        *,
        sleep: Callable[[float], None] = time.sleep,
        poll_s: float = 1.0,
    ) -> None:
        """Drive `tick()` until `stop()` is true or the controller is disposed."""
        while not self._disposed and not stop():
            self.tick()
            sleep(poll_s)

    def _run_fetch(self, day: date) -> None:
        self._latest_token += 1
        token = self._latest_token
        self._in_flight += 1
        try:
            result = self._fetch(day)
        finally:
            self._in_flight -= 1
        self.cycles += 1
        if self._disposed:
            self.discarded += 1
            logger.debug("dropping response for %s: controller disposed", day)
            return
        if self.sequence_guard and token != self._latest_token:
            self.discarded += 1
            logger.debug("dropping stale response for %s (token %d)", day, token)
            return
        self._on_update(result)
