from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...rules.game import Game


class InMemorySessionStore:
    """Thread-safe map of ``game_id`` to ``Game``.

    Each game owns its board exclusively; the lock only guards the map
    itself, callers must not share one game between concurrent requests.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Store ``game`` (a new start-position game by default) and return its id."""
        gid = uuid.uuid4().hex
        with self._lock:
            self._games[gid] = game if game is not None else Game.new()
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def set(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None
