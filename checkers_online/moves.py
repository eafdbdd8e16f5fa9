from __future__ import annotations

from typing import List, Optional, Set

from checkers_online.board import Board, pieces_of
from checkers_online.types import (
    ALL_DIRECTIONS,
    BOARD_ROWS,
    Direction,
    Piece,
    Player,
    Position,
    in_bounds,
)


def _forward_dirs(player: Player) -> List[Direction]:
    dr = player.forward
    return [(dr, -1), (dr, 1)]


class MoveGenerator:
    """Generates legal destinations for a piece on a given board.

    Capture is mandatory: while any piece of a side can capture, only
    captures are legal for that side. A piece flagged
    ``must_continue_capture`` is the only one of its side allowed to move.
    """

    def __init__(self, normal_backward_capture: bool = False) -> None:
        self.normal_backward_capture = bool(normal_backward_capture)

    @classmethod
    def from_rules(cls, rules) -> 'MoveGenerator':
        return cls(normal_backward_capture=rules.normal_backward_capture)

    def basic_moves(self, piece: Piece, board: Board) -> Set[Position]:
        if piece.must_continue_capture:
            return set()
        r, c = piece.position
        dirs = ALL_DIRECTIONS if piece.is_king else _forward_dirs(piece.player)
        moves: Set[Position] = set()
        for dr, dc in dirs:
            nr, nc = r + dr, c + dc
            if in_bounds(nr, nc) and board.is_empty((nr, nc)):
                moves.add((nr, nc))
        return moves

    def capture_moves(self, piece: Piece, board: Board) -> Set[Position]:
        r, c = piece.position
        if piece.is_king or self.normal_backward_capture:
            dirs = ALL_DIRECTIONS
        else:
            dirs = _forward_dirs(piece.player)
        # Kings may slide over empty squares up to the first piece on the diagonal
        reach = BOARD_ROWS - 1 if piece.is_king else 1
        moves: Set[Position] = set()
        for dr, dc in dirs:
            for i in range(1, reach + 1):
                mr, mc = r + i * dr, c + i * dc
                if not in_bounds(mr, mc):
                    break
                target = board.at((mr, mc))
                if target is None:
                    continue
                er, ec = mr + dr, mc + dc
                if (target.player is not piece.player and in_bounds(er, ec)
                        and board.is_empty((er, ec))):
                    moves.add((er, ec))
                break
        return moves

    def continuing_piece(self, board: Board, player: Player) -> Optional[Piece]:
        """The piece of ``player`` in the middle of a multi-jump, if any."""
        for p in pieces_of(board, player):
            if p.must_continue_capture:
                return p
        return None

    def player_has_capture(self, board: Board, player: Player) -> bool:
        return any(self.capture_moves(p, board) for p in pieces_of(board, player))

    def legal_moves(self, piece: Piece, board: Board) -> Set[Position]:
        if piece.must_continue_capture:
            return self.capture_moves(piece, board)
        if self.continuing_piece(board, piece.player) is not None:
            return set()
        if self.player_has_capture(board, piece.player):
            return self.capture_moves(piece, board)
        return self.basic_moves(piece, board)

    def movable_pieces(self, board: Board, player: Player) -> List[Piece]:
        """Pieces of ``player`` that have at least one legal destination."""
        return [p for p in pieces_of(board, player) if self.legal_moves(p, board)]

    def has_any_legal_move(self, board: Board, player: Player) -> bool:
        own = pieces_of(board, player)
        if any(p.must_continue_capture for p in own):
            return True
        return any(self.capture_moves(p, board) or self.basic_moves(p, board) for p in own)


def is_capture_step(start: Position, end: Position) -> bool:
    """A step longer than one diagonal square is always a capture."""
    return abs(end[0] - start[0]) > 1 or abs(end[1] - start[1]) > 1


# Convenience functional API

def default_generator() -> MoveGenerator:
    # Local import so the rules toggles are read at call time
    from config import get_game_rules

    return MoveGenerator.from_rules(get_game_rules())


def basic_moves(piece: Piece, board: Board) -> Set[Position]:
    return default_generator().basic_moves(piece, board)


def capture_moves(piece: Piece, board: Board) -> Set[Position]:
    return default_generator().capture_moves(piece, board)


def legal_moves(piece: Piece, board: Board) -> Set[Position]:
    return default_generator().legal_moves(piece, board)
