"""
Applies single hops to a board: relocation, capture removal, promotion and
multi-jump continuation.
"""
from __future__ import annotations

from typing import Optional

from checkers_online.board import Board
from checkers_online.errors import InvalidMove
from checkers_online.moves import MoveGenerator, is_capture_step
from checkers_online.types import (
    MoveResult,
    Piece,
    Player,
    Position,
    Rank,
    check_position,
)


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


class MoveExecutor:
    """Validates a hop against MoveGenerator and produces the resulting board."""

    def __init__(self, generator: Optional[MoveGenerator] = None,
                 super_king_promotion: bool = False) -> None:
        self.generator = generator or MoveGenerator()
        self.super_king_promotion = bool(super_king_promotion)

    @classmethod
    def from_rules(cls, rules) -> 'MoveExecutor':
        return cls(MoveGenerator.from_rules(rules),
                   super_king_promotion=rules.super_king_promotion)

    def _jumped_piece(self, board: Board, start: Position, end: Position) -> Optional[Piece]:
        """First piece on the diagonal strictly between ``start`` and ``end``."""
        dr = _sign(end[0] - start[0])
        dc = _sign(end[1] - start[1])
        r, c = start[0] + dr, start[1] + dc
        while (r, c) != end:
            found = board.at((r, c))
            if found is not None:
                return found
            r, c = r + dr, c + dc
        return None

    def _promoted_rank(self, piece: Piece, end: Position) -> Rank:
        if end[0] != piece.player.promotion_row:
            return piece.rank
        if piece.rank is Rank.NORMAL:
            return Rank.KING
        if piece.rank is Rank.KING and self.super_king_promotion:
            return Rank.SUPER_KING
        return piece.rank

    def apply_move(self, board: Board, start: Position, end: Position,
                   player: Player) -> MoveResult:
        start = check_position(start)
        end = check_position(end)
        piece = board.at(start)
        if piece is None:
            raise InvalidMove(f"No piece at {start}")
        if piece.player is not player:
            raise InvalidMove(f"Piece at {start} belongs to {piece.player.value}")
        if end not in self.generator.legal_moves(piece, board):
            raise InvalidMove(f"Illegal move {start} -> {end} for {player.value}")

        captured_piece: Optional[Piece] = None
        if is_capture_step(start, end):
            captured_piece = self._jumped_piece(board, start, end)
            if captured_piece is None or captured_piece.player is player:
                # legal_moves never yields such a destination
                raise InvalidMove(f"Nothing to capture between {start} and {end}")

        new_rank = self._promoted_rank(piece, end)
        moved = piece.moved_to(end, rank=new_rank)
        removed = [captured_piece.id] if captured_piece else []
        new_board = board.replace(moved, removed=removed)

        must_continue = False
        if captured_piece is not None and self.generator.capture_moves(moved, new_board):
            must_continue = True
            moved = moved.moved_to(end, must_continue_capture=True)
            new_board = new_board.replace(moved)

        return MoveResult(
            board=new_board,
            captured=captured_piece is not None,
            must_continue=must_continue,
            promoted=new_rank is not piece.rank,
            captured_piece=captured_piece,
        )


def apply_move(board: Board, start: Position, end: Position, player: Player) -> MoveResult:
    # Local import so the rules toggles are read at call time
    from config import get_game_rules

    return MoveExecutor.from_rules(get_game_rules()).apply_move(board, start, end, player)
