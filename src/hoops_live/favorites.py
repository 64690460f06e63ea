"""Persisted set of favorite match ids."""

from __future__ import annotations

import json
import logging
import os
import uuid
from collections.abc import Iterable
from contextlib import suppress
from pathlib import Path

logger = logging.getLogger(__name__)

FAVORITES_KEY = "hoops_favorites"


def toggle_favorite(favorites: Iterable[str], match_id: str) -> frozenset[str]:
    """Add `match_id` if absent, remove it if present."""
    return frozenset(favorites) ^ {match_id}


def is_favorite(favorites: Iterable[str], match_id: str) -> bool:
    return match_id in frozenset(favorites)


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".tmp-{path.name}-{uuid.uuid4().hex}")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        with suppress(FileNotFoundError):
            tmp_path.unlink()
        raise


class FavoritesStore:
    """One JSON array of match ids on disk, mirrored by an in-memory frozenset."""

    def __init__(self, root: Path | str) -> None:
        self.path = Path(root) / f"{FAVORITES_KEY}.json"
        self._current: frozenset[str] | None = None

    def load(self) -> frozenset[str]:
        """Read persisted favorites; missing or corrupt data yields an empty set."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            payload = []
        except (OSError, ValueError) as exc:
            logger.warning("ignoring unreadable favorites file %s: %s", self.path, exc)
            payload = []
        if not isinstance(payload, list):
            logger.warning("ignoring favorites file %s: expected a JSON array", self.path)
            payload = []
        self._current = frozenset(item for item in payload if isinstance(item, str))
        return self._current

    @property
    def current(self) -> frozenset[str]:
        if self._current is None:
            return self.load()
        return self._current

    def save(self, favorites: Iterable[str]) -> frozenset[str]:
        """Overwrite the persisted list."""
        snapshot = frozenset(favorites)
        _atomic_write_text(self.path, json.dumps(sorted(snapshot)) + "\n")
        self._current = snapshot
        return snapshot

    def toggle(self, match_id: str) -> frozenset[str]:
        """Toggle against the latest in-memory set and persist immediately."""
        return self.save(toggle_favorite(self.current, match_id))

    def is_favorite(self, match_id: str) -> bool:
        return is_favorite(self.current, match_id)
