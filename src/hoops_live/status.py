"""Upstream status codes and the live-clock display label."""

from __future__ import annotations

from typing import Any, Literal

from hoops_live.models import FINISHED, HALFTIME, LIVE, SCHEDULED, MatchStatus

STATUS_BY_SHORT_CODE: dict[str, MatchStatus] = {
    "NS": SCHEDULED,
    "Q1": LIVE,
    "Q2": LIVE,
    "Q3": LIVE,
    "Q4": LIVE,
    "OT": LIVE,
    "BT": LIVE,
    "HT": HALFTIME,
    "FT": FINISHED,
    "AOT": FINISHED,
}

HALFTIME_LABEL = "Halftime"
ENDED_LABEL = "Ended"

LabelRule = Literal["period_clock", "running_clock", "halftime", "ended", "long"]

# (status, has_clock, has_period) -> rule
CLOCK_LABEL_RULES: dict[tuple[MatchStatus, bool, bool], LabelRule] = {
    (SCHEDULED, True, True): "period_clock",
    (SCHEDULED, True, False): "running_clock",
    (SCHEDULED, False, True): "long",
    (SCHEDULED, False, False): "long",
    (LIVE, True, True): "period_clock",
    (LIVE, True, False): "running_clock",
    (LIVE, False, True): "long",
    (LIVE, False, False): "long",
    (HALFTIME, True, True): "period_clock",
    (HALFTIME, True, False): "running_clock",
    (HALFTIME, False, True): "halftime",
    (HALFTIME, False, False): "halftime",
    (FINISHED, True, True): "period_clock",
    (FINISHED, True, False): "running_clock",
    (FINISHED, False, True): "ended",
    (FINISHED, False, False): "ended",
}


def map_status(short_code: Any) -> MatchStatus:
    """Map an upstream short status code; unknown codes are treated as scheduled."""
    if not isinstance(short_code, str):
        return SCHEDULED
    return STATUS_BY_SHORT_CODE.get(short_code.strip().upper(), SCHEDULED)


def _present(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (int, float)):
        return value != 0
    return True


def clock_label(
    *,
    short: Any,
    long: Any = None,
    timer: Any = None,
    period: Any = None,
) -> str | None:
    """Build the display label for a match clock (e.g. `Q4 04:23`)."""
    has_clock = _present(timer)
    has_period = _present(period)
    rule = CLOCK_LABEL_RULES[(map_status(short), has_clock, has_period)]
    if rule == "period_clock":
        return f"Q{str(period).strip()} {str(timer).strip()}"
    if rule == "running_clock":
        return f"{str(timer).strip()}'"
    if rule == "halftime":
        return HALFTIME_LABEL
    if rule == "ended":
        return ENDED_LABEL
    if isinstance(long, str) and long.strip():
        return long.strip()
    return None
