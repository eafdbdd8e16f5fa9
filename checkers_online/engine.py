"""
Public engine surface consumed by the session/transport layer.

Every function takes and returns immutable values; rule violations raise
EngineError subclasses and never alter the input state. The rule toggles and
AI settings come from the global configuration (see ``config``).
"""
from __future__ import annotations

from typing import Optional, Set, Union

from config import get_game_rules
from checkers_online.board import Board, create_initial_board
from checkers_online.game import GameStateMachine, is_terminal, winner
from checkers_online.moves import MoveGenerator
from checkers_online.search import get_engine
from checkers_online.types import Difficulty, GameState, Move, Player, Position

__all__ = [
    "create_initial_board",
    "legal_moves",
    "new_game",
    "submit_move",
    "surrender",
    "pick_move",
    "is_terminal",
    "winner",
    "get_state_machine",
]


def get_state_machine() -> GameStateMachine:
    return GameStateMachine.from_rules(get_game_rules())


def legal_moves(board: Board, piece_id: str) -> Set[Position]:
    """Legal destinations for a piece; unknown ids raise KeyError."""
    piece = board.get(piece_id)
    return MoveGenerator.from_rules(get_game_rules()).legal_moves(piece, board)


def new_game(started: bool = True) -> GameState:
    """A fresh match, already Playing unless ``started`` is False."""
    machine = get_state_machine()
    state = machine.new_game()
    return machine.start(state) if started else state


def submit_move(state: GameState, player: Player, start: Position, end: Position) -> GameState:
    return get_state_machine().submit_move(state, player, start, end)


def surrender(state: GameState, player: Player) -> GameState:
    return get_state_machine().surrender(state, player)


def pick_move(board: Board, player: Player, difficulty: Union[Difficulty, str],
              seed: Optional[int] = None) -> Optional[Move]:
    return get_engine(seed).pick_move(board, player, difficulty)
