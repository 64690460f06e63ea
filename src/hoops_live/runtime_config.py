"""Runtime configuration loader (config-first, env-overrides)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"
DEFAULT_LOCAL_OVERRIDE_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.local.toml"

DEFAULT_BASE_URL = "https://v1.basketball.api-sports.io"
DEFAULT_SEASON = "2024-2025"


@dataclass(frozen=True)
class RuntimeConfig:
    """Materialized runtime configuration."""

    config_path: Path
    state_dir: Path
    basketball_api_base_url: str
    basketball_api_timeout_s: float
    basketball_api_season: str
    basketball_api_fallback_key: str
    polling_interval_s: float
    openai_model: str
    openai_timeout_s: float

    def with_state_dir(self, state_dir: Path | None) -> RuntimeConfig:
        """Return copy with an explicit CLI state dir override applied."""
        if state_dir is None:
            return self
        return replace(self, state_dir=state_dir.expanduser().resolve())


_CURRENT_RUNTIME_CONFIG: RuntimeConfig | None = None


def set_current_runtime_config(config: RuntimeConfig | None) -> None:
    global _CURRENT_RUNTIME_CONFIG
    _CURRENT_RUNTIME_CONFIG = config


def current_runtime_config() -> RuntimeConfig:
    config = _CURRENT_RUNTIME_CONFIG
    if config is not None:
        return config
    loaded = load_runtime_config()
    set_current_runtime_config(loaded)
    return loaded


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = _deep_merge(existing, value)
        else:
            out[key] = value
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {path}") from exc
    if not isinstance(payload, dict):
        raise RuntimeError(f"runtime config root must be a table: {path}")
    return payload


def _as_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"runtime config section [{key}] must be a table")
    return value


def _as_str(value: Any, *, default: str) -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def _as_float(value: Any, *, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _resolve_path(raw: Any, *, default: str, base_dir: Path) -> Path:
    value = _as_str(raw, default=default)
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return path


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load runtime config from `config/runtime.toml` plus optional local override."""
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not source.exists():
        raise RuntimeError(f"runtime config file not found: {source}")

    payload = _read_toml(source)
    if source == DEFAULT_CONFIG_PATH and DEFAULT_LOCAL_OVERRIDE_PATH.exists():
        payload = _deep_merge(payload, _read_toml(DEFAULT_LOCAL_OVERRIDE_PATH))

    paths = _as_table(payload, "paths")
    api = _as_table(payload, "basketball_api")
    polling = _as_table(payload, "polling")
    openai = _as_table(payload, "openai")
    base_dir = source.parent

    fallback_key = api.get("fallback_key", "")
    return RuntimeConfig(
        config_path=source,
        state_dir=_resolve_path(paths.get("state_dir"), default="data/state", base_dir=base_dir),
        basketball_api_base_url=_as_str(api.get("base_url"), default=DEFAULT_BASE_URL),
        basketball_api_timeout_s=_as_float(api.get("timeout_s"), default=10.0),
        basketball_api_season=_as_str(api.get("season"), default=DEFAULT_SEASON),
        basketball_api_fallback_key=fallback_key.strip() if isinstance(fallback_key, str) else "",
        polling_interval_s=_as_float(polling.get("interval_s"), default=60.0),
        openai_model=_as_str(openai.get("model"), default="gpt-5-mini"),
        openai_timeout_s=_as_float(openai.get("timeout_s"), default=60.0),
    )
