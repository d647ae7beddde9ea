from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from ...engine.game import Game


logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Look up existing sessions by `game_id` under the store lock (`locked`)
    - Replace or delete session state

    One lock guards every session, so reads and moves on a game never
    interleave.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if game is None:
            game = Game.new()
        with self._lock:
            self._games[gid] = game
        logger.info("session created", extra={"game_id": gid})
        return gid

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[Game]]:
        """Hold the store lock while the caller reads or mutates one game."""
        with self._lock:
            yield self._games.get(game_id)

    def set(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            removed = self._games.pop(game_id, None) is not None
        if removed:
            logger.info("session deleted", extra={"game_id": game_id})
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
