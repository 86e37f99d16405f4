"""
In-memory store
Holds live game sessions for the lifetime of the process.
Nothing is persisted: restarting the server forgets every game.
"""

import logging
from typing import Dict, Optional, Tuple
from uuid import uuid4
from threading import RLock

from .config import DEFAULT_DIFFICULTY
from .random_client import ColorSource, SecureColorSource
from .session import GameSession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, color_source: Optional[ColorSource] = None) -> None:
        self._sessions: Dict[str, GameSession] = {}
        self._lock = RLock()
        self.color_source = color_source or SecureColorSource()

    def create(self, difficulty: str = DEFAULT_DIFFICULTY) -> Tuple[str, GameSession]:
        new_id = str(uuid4())
        session = GameSession(color_source=self.color_source, difficulty=difficulty)
        with self._lock:
            self._sessions[new_id] = session
        logger.info("Session %s created", new_id)
        return new_id, session

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get(game_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
