"""
Position evaluation for the AI search.

The heuristic sums, for every piece, its rank value plus positional bonuses
(center table, advancement toward promotion, edge safety, diagonal support,
central block) and signs the total for the side being evaluated.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

import numpy as np

from checkers_online.board import Board
from checkers_online.types import BOARD_ROWS, Player, Rank

PIECE_VALUES: Dict[Rank, int] = {
    Rank.NORMAL: 100,
    Rank.KING: 250,
    Rank.SUPER_KING: 400,
}

CENTER_BONUS = np.array([
    [0, 0, 0, 0, 0, 0, 0, 0],
    [0, 10, 10, 10, 10, 10, 10, 0],
    [0, 10, 20, 20, 20, 20, 10, 0],
    [0, 10, 20, 30, 30, 20, 10, 0],
    [0, 10, 20, 30, 30, 20, 10, 0],
    [0, 10, 20, 20, 20, 20, 10, 0],
    [0, 10, 10, 10, 10, 10, 10, 0],
    [0, 0, 0, 0, 0, 0, 0, 0],
], dtype=np.int32)

ADVANCEMENT_STEP = 15
EDGE_PROTECTION = 15
SUPPORT_BONUS = 20
CENTRAL_BLOCK_BONUS = 25

_DIAGONAL_SHIFTS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, player: Player) -> float:  # pragma: no cover
        """Evaluate a board from ``player``'s point of view; higher is better."""
        raise NotImplementedError


def _support_counts(owner: np.ndarray) -> np.ndarray:
    """Number of diagonally adjacent friendly pieces for every square."""
    padded = np.pad(owner, 1)
    counts = np.zeros_like(owner)
    for dr, dc in _DIAGONAL_SHIFTS:
        shifted = padded[1 + dr:1 + dr + BOARD_ROWS, 1 + dc:1 + dc + BOARD_ROWS]
        counts += (shifted == owner) & (owner != 0)
    return counts


class HeuristicEvaluator(Evaluator):
    """Material plus positional heuristic, vectorized over the piece list."""

    def evaluate_position(self, board: Board, player: Player) -> float:
        pieces = board.pieces()
        if not pieces:
            return 0.0
        rows = np.array([p.position[0] for p in pieces], dtype=np.int32)
        cols = np.array([p.position[1] for p in pieces], dtype=np.int32)
        # Black is the positive side internally
        signs = np.array([1 if p.player is Player.BLACK else -1 for p in pieces], dtype=np.int32)
        normal = np.array([p.rank is Rank.NORMAL for p in pieces])

        owner = np.zeros((BOARD_ROWS, BOARD_ROWS), dtype=np.int32)
        owner[rows, cols] = signs

        values = np.array([PIECE_VALUES[p.rank] for p in pieces], dtype=np.int32)
        values += CENTER_BONUS[rows, cols]
        travelled = np.where(signs > 0, rows, BOARD_ROWS - 1 - rows)
        values += np.where(normal, travelled * ADVANCEMENT_STEP, 0)
        values += np.where((cols == 0) | (cols == BOARD_ROWS - 1), EDGE_PROTECTION, 0)
        values += _support_counts(owner)[rows, cols] * SUPPORT_BONUS
        central = (rows >= 2) & (rows <= 5) & (cols >= 2) & (cols <= 5)
        values += np.where(central, CENTRAL_BLOCK_BONUS, 0)

        total = float(np.sum(values * signs))
        return total if player is Player.BLACK else -total


def evaluate(board: Board, player: Player) -> float:
    return HeuristicEvaluator().evaluate_position(board, player)


def get_evaluator() -> Evaluator:
    return HeuristicEvaluator()
