"""
Background AI search for a match.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Union

from checkers_online.match import Match
from checkers_online.search import SearchEngine, get_engine
from checkers_online.types import Difficulty, Move, Player

logger = logging.getLogger(__name__)

# on_complete(move, applied, elapsed_seconds)
CompletionCallback = Callable[[Optional[Move], bool, float], None]


class AIWorker:
    """Runs searches on a daemon thread so callers never block on them.

    The match generation is captured before searching; if the match moved
    on in the meantime (surrender, undo, reset) the result is dropped.
    """

    def __init__(self, engine: Optional[SearchEngine] = None) -> None:
        self.engine = engine or get_engine()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self.is_thinking = False

    def request_move(self, match: Match, player: Player,
                     difficulty: Union[Difficulty, str],
                     on_complete: Optional[CompletionCallback] = None) -> bool:
        """Start a search for ``player``; False if one is already running or it is not their turn."""
        match.require_playing()
        with self._lock:
            if self.is_thinking:
                return False
            state, generation = match.snapshot()
            if state.current_player is not player:
                return False
            self.is_thinking = True

        def worker() -> None:
            start_time = time.time()
            move: Optional[Move] = None
            applied = False
            try:
                move = self.engine.pick_move(state.board, player, difficulty)
                applied = move is not None and match.apply_ai_move(move, player, generation)
            except Exception:
                logger.exception("AI search for %s failed", player.value)
                move, applied = None, False
            finally:
                with self._lock:
                    self.is_thinking = False
            elapsed_time = time.time() - start_time
            logger.debug("AI search for %s finished in %.3fs (applied=%s)",
                         player.value, elapsed_time, applied)
            if on_complete is not None:
                on_complete(move, applied, elapsed_time)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current search finishes; True if nothing is running."""
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            return not thread.is_alive()
        return True
