from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from checkers_online.types import (
    BOARD_COLS,
    Piece,
    Player,
    Position,
    Rank,
    check_position,
    is_playable,
)

# Rows occupied by each side at the start of a match
_START_ROWS: Dict[Player, range] = {
    Player.BLACK: range(0, 3),
    Player.RED: range(5, 8),
}


class Board:
    """Immutable piece placement, indexed by piece id and by square.

    Construction enforces that every piece stands on a playable square, that
    no two pieces share a square and that ids are unique. Updates return a
    new Board.
    """

    __slots__ = ('_pieces', '_index')

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        by_id: Dict[str, Piece] = {}
        index: Dict[Position, str] = {}
        for piece in pieces:
            if piece.id in by_id:
                raise ValueError(f"Duplicate piece id {piece.id!r}")
            if not is_playable(*piece.position):
                raise ValueError(f"Square {piece.position} is not playable")
            if piece.position in index:
                raise ValueError(
                    f"Square {piece.position} already holds {index[piece.position]!r}"
                )
            by_id[piece.id] = piece
            index[piece.position] = piece.id
        self._pieces = by_id
        self._index = index

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces())

    def __contains__(self, piece_id: object) -> bool:
        return piece_id in self._pieces

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(frozenset(self._pieces.values()))

    def __repr__(self) -> str:
        return f"Board({len(self._pieces)} pieces)"

    def pieces(self) -> List[Piece]:
        """All pieces ordered by square, top-left first."""
        return sorted(self._pieces.values(), key=lambda p: p.position)

    def get(self, piece_id: str) -> Piece:
        """Look up a piece by id; unknown ids raise KeyError."""
        return self._pieces[piece_id]

    def at(self, pos: Position) -> Optional[Piece]:
        piece_id = self._index.get(check_position(pos))
        return self._pieces[piece_id] if piece_id is not None else None

    def is_empty(self, pos: Position) -> bool:
        return check_position(pos) not in self._index

    def replace(self, *updated: Piece, removed: Iterable[str] = ()) -> 'Board':
        """Return a board with ``removed`` ids dropped and ``updated`` pieces swapped in."""
        pieces = dict(self._pieces)
        for piece_id in removed:
            del pieces[piece_id]
        for piece in updated:
            pieces[piece.id] = piece
        return Board(pieces.values())


def create_initial_board() -> Board:
    """Black on rows 0..2, Red on rows 5..7, twelve normal pieces each."""
    pieces: List[Piece] = []
    for player, rows in _START_ROWS.items():
        for r in rows:
            for c in range(BOARD_COLS):
                if is_playable(r, c):
                    pieces.append(Piece(
                        id=f"{player.value}-{r}-{c}",
                        player=player,
                        rank=Rank.NORMAL,
                        position=(r, c),
                    ))
    return Board(pieces)


def piece_at(board: Board, pos: Position) -> Optional[Piece]:
    return board.at(pos)


def pieces_of(board: Board, player: Player) -> List[Piece]:
    return [p for p in board.pieces() if p.player is player]


def count_pieces(board: Board) -> Tuple[int, int, int, int]:
    """Count pieces of each side.

    Returns:
        Tuple of (red_pieces, black_pieces, red_kings, black_kings)
    """
    pieces = board.pieces()
    reds: int = sum(1 for p in pieces if p.player is Player.RED)
    blacks: int = sum(1 for p in pieces if p.player is Player.BLACK)
    rk: int = sum(1 for p in pieces if p.player is Player.RED and p.is_king)
    bk: int = sum(1 for p in pieces if p.player is Player.BLACK and p.is_king)
    return reds, blacks, rk, bk
