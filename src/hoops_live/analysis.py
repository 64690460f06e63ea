"""Match analysis text from an LLM, phase-specific by match status."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from hoops_live.models import FINISHED, HALFTIME, LIVE, Match, MatchStats, Score
from hoops_live.settings import Settings

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = "https://api.openai.com/v1"
MAX_OUTPUT_TOKENS = 400

NO_ANALYSIS_TEXT = "No analysis generated."
ANALYSIS_FAILED_TEXT = "Unable to generate analysis at this time."
NO_ANSWER_TEXT = "No response."
ASSISTANT_FAILED_TEXT = "Error connecting to AI."

LIVE_INSTRUCTION = (
    "Provide a 3-sentence live commentary on the momentum of the game. "
    "Who is controlling the pace? What does the trailing team need to do to catch up?"
)
FINISHED_INSTRUCTION = (
    "Provide a concise 3-sentence summary of why the winning team won, focusing on key "
    "stats (shooting efficiency, turnovers, or rebounding)."
)
PREVIEW_INSTRUCTION = (
    "Provide a pre-game prediction. Based on typical performance "
    "(assume these are top tier teams), who has the edge?"
)


class AnalysisError(RuntimeError):
    """Raised when the analysis request fails."""


PostFn = Callable[[str, dict[str, str], dict[str, Any], float], dict[str, Any]]


def _score_line(name: str, score: Score) -> str:
    return (
        f"{name}: {score.total} "
        f"(Q1:{score.q1}, Q2:{score.q2}, Q3:{score.q3}, Q4:{score.q4})"
    )


def _stats_line(side: str, stats: MatchStats) -> str:
    return (
        f"{side} FG%: {stats.fg_percentage}%, 3PT%: {stats.three_pt_percentage}%, "
        f"REB: {stats.rebounds}, AST: {stats.assists}, TO: {stats.turnovers}"
    )


def phase_instruction(match: Match) -> str:
    if match.status in (LIVE, HALFTIME):
        return LIVE_INSTRUCTION
    if match.status == FINISHED:
        return FINISHED_INSTRUCTION
    return PREVIEW_INSTRUCTION


def build_analysis_prompt(match: Match) -> str:
    """Score and stat summary followed by the instruction for the match phase."""
    clock = f" ({match.current_time})" if match.current_time else ""
    lines = [
        "You are an expert Basketball Analyst and Coach.",
        f"Analyze the following match data between {match.home_team.name} (Home) "
        f"and {match.away_team.name} (Away).",
        f"Current Status: {match.status}{clock}",
        "",
        "Scores:",
        _score_line(match.home_team.name, match.home_score),
        _score_line(match.away_team.name, match.away_score),
    ]
    if match.home_stats is not None and match.away_stats is not None:
        lines.extend(
            [
                "",
                "Stats:",
                _stats_line("Home", match.home_stats),
                _stats_line("Away", match.away_stats),
            ]
        )
    return "\n".join(lines) + "\n\n" + phase_instruction(match)


def build_assistant_prompt(query: str) -> str:
    return (
        "You are a helpful basketball expert assistant. "
        f"Answer this query briefly: {query.strip()}"
    )


def _extract_text(payload: dict[str, Any]) -> str:
    direct = payload.get("output_text")
    if isinstance(direct, str) and direct.strip():
        return direct.strip()

    pieces: list[str] = []
    output = payload.get("output", [])
    if isinstance(output, list):
        for item in output:
            if not isinstance(item, dict):
                continue
            content = item.get("content", [])
            if not isinstance(content, list):
                continue
            for row in content:
                if not isinstance(row, dict):
                    continue
                text = row.get("text")
                if isinstance(text, str) and text.strip():
                    pieces.append(text.strip())
    return "\n".join(pieces).strip()


def _default_post(
    url: str, headers: dict[str, str], payload: dict[str, Any], timeout: float
) -> dict[str, Any]:
    attempts = 3
    for attempt in range(1, attempts + 1):
        try:
            response = httpx.post(url, headers=headers, json=payload, timeout=timeout)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict):
                raise AnalysisError("unexpected OpenAI response payload")
            return data
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status in {429, 500, 502, 503, 504} and attempt < attempts:
                time.sleep(0.7 * attempt)
                continue
            raise AnalysisError(f"openai request failed: status={status}") from exc
        except httpx.HTTPError as exc:
            retryable = isinstance(
                exc,
                (httpx.ReadTimeout, httpx.ConnectTimeout, httpx.ReadError, httpx.ConnectError),
            )
            if retryable and attempt < attempts:
                time.sleep(0.7 * attempt)
                continue
            raise AnalysisError(f"openai request transport error: {exc}") from exc

    raise AnalysisError("openai request failed after retries")


class MatchAnalyst:
    """Ask the model for short basketball text; always returns display text."""

    def __init__(self, settings: Settings, post_fn: PostFn | None = None) -> None:
        self.settings = settings
        self.post_fn = post_fn or _default_post

    def _complete(self, prompt: str) -> str:
        api_key = self.settings.openai_api_key.strip()
        if not api_key:
            raise AnalysisError("no OpenAI key configured")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.settings.openai_model,
            "input": prompt,
            "max_output_tokens": MAX_OUTPUT_TOKENS,
        }
        raw = self.post_fn(
            f"{OPENAI_BASE_URL}/responses",
            headers,
            payload,
            max(20.0, float(self.settings.openai_timeout_s)),
        )
        return _extract_text(raw)

    def analyze(self, match: Match) -> str:
        try:
            text = self._complete(build_analysis_prompt(match))
        except AnalysisError as exc:
            logger.warning("analysis for match %s failed: %s", match.id, exc)
            return ANALYSIS_FAILED_TEXT
        return text or NO_ANALYSIS_TEXT

    def ask(self, query: str) -> str:
        """Free-form basketball question answered briefly."""
        try:
            text = self._complete(build_assistant_prompt(query))
        except AnalysisError as exc:
            logger.warning("assistant query failed: %s", exc)
            return ASSISTANT_FAILED_TEXT
        return text or NO_ANSWER_TEXT
