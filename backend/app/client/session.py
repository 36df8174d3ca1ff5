"""Client-side session and history cache for the Launchpad.

The key is persisted to a small JSON file so it survives restarts. The
history list is a cache of the server's view with two rules:
  - it is refetched from the server after every successful analysis;
  - an entry is removed locally only after the server confirmed the delete.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .api_client import LaunchpadApiClient

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".velocity" / "session.json"

LOADING_STEPS: List[str] = [
    "Scanning market landscape",
    "Analyzing competition",
    "Generating brand identity",
    "Architecting tech stack",
    "Crafting launch strategy",
]


def loading_step(elapsed_seconds: float, expected_seconds: float = 40.0) -> int:
    """Index into LOADING_STEPS for the time spent waiting so far.

    Progress follows an ease-out curve (fast at first, slowing down) and
    stays on the last step once the expected duration is exceeded.
    """
    if elapsed_seconds <= 0 or expected_seconds <= 0:
        return 0
    progress = min(1.0, elapsed_seconds / expected_seconds)
    eased = 1 - (1 - progress) ** 2
    return min(len(LOADING_STEPS) - 1, int(math.floor(eased * len(LOADING_STEPS))))


class LaunchpadSession:
    def __init__(
        self,
        api: LaunchpadApiClient,
        storage_path: Union[str, Path, None] = None,
    ) -> None:
        self.api = api
        self.storage_path = Path(storage_path) if storage_path else DEFAULT_SESSION_FILE
        self.auth_key: Optional[str] = self._load_key()
        self.history: List[Dict[str, Any]] = []

    # ── persistence ──────────────────────────────────────────

    def _load_key(self) -> Optional[str]:
        if not self.storage_path.exists():
            return None
        try:
            stored = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.storage_path, exc)
            return None
        key = stored.get("key") if isinstance(stored, dict) else None
        return key or None

    def _save_key(self, key: str) -> None:
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(json.dumps({"key": key}), encoding="utf-8")

    # ── auth ─────────────────────────────────────────────────

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_key)

    def login(self, code: str) -> Dict[str, Any]:
        """Check the code with the server; on success store it and load history."""
        response = self.api.login(code)
        if response.get("valid"):
            self.auth_key = code
            self._save_key(code)
            self.refresh_history()
        return response

    def logout(self) -> None:
        self.auth_key = None
        self.history = []
        if self.storage_path.exists():
            self.storage_path.unlink()

    # ── history ──────────────────────────────────────────────

    def refresh_history(self) -> List[Dict[str, Any]]:
        if not self.auth_key:
            self.history = []
            return self.history
        self.history = self.api.get_analyses(self.auth_key)
        return self.history

    def analyze(self, idea: str) -> Dict[str, Any]:
        """Run one analysis. History is refetched only when it succeeds."""
        if not self.auth_key:
            raise RuntimeError("Not logged in")
        data = self.api.analyze(self.auth_key, idea)
        self.refresh_history()
        return data

    def delete(self, record_id: str) -> None:
        """Delete on the server first; drop the local entry only on success."""
        if not self.auth_key:
            raise RuntimeError("Not logged in")
        self.api.delete_analysis(self.auth_key, record_id)
        self.history = [entry for entry in self.history if entry.get("id") != record_id]
