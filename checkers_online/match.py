"""
Per-match controller used by the session layer.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional, Set, Tuple

from checkers_online.board import count_pieces
from checkers_online.errors import EngineError, GameNotInProgress
from checkers_online.game import GameStateMachine
from checkers_online.types import GameState, GameStatus, Move, Player, Position

logger = logging.getLogger(__name__)


class Match:
    """Owns one GameState and serializes every mutation of it.

    Each accepted mutation bumps ``generation``; a background AI result
    computed for an older generation is discarded instead of applied.
    """

    def __init__(self, machine: Optional[GameStateMachine] = None,
                 allow_undo: Optional[bool] = None) -> None:
        if machine is None or allow_undo is None:
            from config import get_game_rules
            rules = get_game_rules()
            machine = machine or GameStateMachine.from_rules(rules)
            allow_undo = rules.allow_undo if allow_undo is None else allow_undo
        self.machine = machine
        self.allow_undo = bool(allow_undo)
        self._lock = threading.RLock()
        self._state: GameState = machine.new_game()
        self._history: List[GameState] = []
        self._generation = 0

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._state

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def snapshot(self) -> Tuple[GameState, int]:
        """Current state and generation, read atomically."""
        with self._lock:
            return self._state, self._generation

    def _commit(self, new_state: GameState, record: bool = True) -> GameState:
        if record:
            self._history.append(self._state)
        self._state = new_state
        self._generation += 1
        return new_state

    def start(self) -> GameState:
        with self._lock:
            return self._commit(self.machine.start(self._state), record=False)

    def reset(self, started: bool = True) -> GameState:
        """Throw away the current game and begin a new one."""
        with self._lock:
            self._history.clear()
            state = self.machine.new_game()
            if started:
                state = self.machine.start(state)
            return self._commit(state, record=False)

    def legal_moves(self, piece_id: str) -> Set[Position]:
        with self._lock:
            return self.machine.legal_moves(self._state, piece_id)

    def submit_move(self, player: Player, start: Position, end: Position) -> GameState:
        with self._lock:
            try:
                new_state = self.machine.submit_move(self._state, player, start, end)
            except EngineError as e:
                logger.debug("Rejected %s move %s -> %s: %s", player.value, start, end, e)
                raise
            self._commit(new_state)
            if new_state.is_finished:
                logger.info("Game finished, winner: %s", new_state.winner.value if new_state.winner else None)
            return new_state

    def apply_ai_move(self, move: Move, player: Player, expected_generation: int) -> bool:
        """Apply a searched move unless the match changed since the search began."""
        with self._lock:
            if self._generation != expected_generation:
                logger.info("Discarding stale AI move for %s (generation %d, now %d)",
                            player.value, expected_generation, self._generation)
                return False
            if self._state.status is not GameStatus.PLAYING or self._state.current_player is not player:
                logger.info("Discarding AI move for %s: match no longer expects it", player.value)
                return False
            new_state = self.machine.apply_chain(self._state, player, move)
            self._commit(new_state)
            return True

    def surrender(self, player: Player) -> GameState:
        with self._lock:
            return self._commit(self.machine.surrender(self._state, player))

    def undo(self) -> bool:
        """Step back one submitted move; returns False when nothing can be undone."""
        with self._lock:
            if not self.allow_undo or not self._history:
                return False
            self._state = self._history.pop()
            self._generation += 1
            return True

    def require_playing(self) -> None:
        with self._lock:
            if self._state.status is not GameStatus.PLAYING:
                raise GameNotInProgress(f"Match is {self._state.status.value}")

    def get_piece_counts(self) -> Tuple[int, int, int, int]:
        """Piece counts: (red_pieces, black_pieces, red_kings, black_kings)."""
        return count_pieces(self.state.board)
