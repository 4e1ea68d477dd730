"""
Save persistence.

- SaveStore: file-backed JSON blob (load / save / clear), written atomically
- SaveScheduler: debounced, at-most-once-per-interval saving driven by sim time
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from config import SAVE_DEBOUNCE_MS

logger = logging.getLogger(__name__)


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


@dataclass
class SaveStore:
    """Opaque save blob on disk. A missing or unreadable file means "no save"."""

    path: Path

    def load(self) -> Optional[dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, RecursionError, json.JSONDecodeError) as e:
            logger.warning("could not read save %s: %s", self.path, e)
            return None
        if not isinstance(raw, dict):
            logger.warning("save %s is not an object; ignoring", self.path)
            return None
        return raw

    def save(self, blob: dict[str, Any]) -> None:
        _atomic_write_text(self.path, json.dumps(blob, indent=2, sort_keys=True))

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class SaveScheduler:
    """
    Debounced saver.

    `request(now)` (re)arms the timer; `poll(now)` writes once the quiet period has
    elapsed. Write failures are logged and dropped: saving is fire-and-forget.
    """

    def __init__(
        self,
        store: Optional[SaveStore],
        snapshot: Callable[[], dict[str, Any]],
        *,
        debounce_ms: int = SAVE_DEBOUNCE_MS,
    ):
        self.store = store
        self._snapshot = snapshot
        self.debounce_ms = int(debounce_ms)
        self._due_ms: Optional[int] = None
        self.saves = 0

    @property
    def pending(self) -> bool:
        return self._due_ms is not None

    def request(self, now_ms: int) -> None:
        self._due_ms = int(now_ms) + self.debounce_ms

    def poll(self, now_ms: int) -> bool:
        if self._due_ms is None or int(now_ms) < self._due_ms:
            return False
        return self.save_now()

    def save_now(self) -> bool:
        self._due_ms = None
        if self.store is None:
            return False
        try:
            self.store.save(self._snapshot())
        except OSError as e:
            logger.warning("save failed: %s", e)
            return False
        self.saves += 1
        logger.debug("saved to %s", self.store.path)
        return True

    def cancel(self) -> None:
        self._due_ms = None
