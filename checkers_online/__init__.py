"""Checkers online: rule engine and AI for an online checkers game.

Usage examples:
    from checkers_online import new_game, submit_move, pick_move
    from checkers_online import Match, AIWorker
"""
from __future__ import annotations

# Engine API
from .engine import (
    create_initial_board,
    legal_moves,
    new_game,
    submit_move,
    surrender,
    pick_move,
    is_terminal,
    winner,
    get_state_machine,
)

# Types and errors
from .types import Difficulty, GameState, GameStatus, Move, Piece, Player, Position, Rank
from .board import Board
from .errors import EngineError, GameNotInProgress, InvalidMove, NotYourTurn

# Components
from .moves import MoveGenerator
from .executor import MoveExecutor
from .game import GameStateMachine
from .search import SearchEngine, get_engine
from .match import Match
from .worker import AIWorker
