"""
Type definitions for the checkers engine.

This module provides:
- Enums for players, piece ranks, game status and AI difficulty
- Immutable dataclasses for pieces, move results, AI moves and game state
- Type aliases and board constants shared by every other module
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from checkers_online.board import Board

# Basic type aliases
Position = Tuple[int, int]  # (row, col), both in 0..7
Direction = Tuple[int, int]

BOARD_ROWS = 8
BOARD_COLS = 8
PIECES_PER_SIDE = 12
ALL_DIRECTIONS: List[Direction] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


class Player(str, Enum):
    """Side of the board. Red moves first and advances toward row 0."""

    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> 'Player':
        return Player.BLACK if self is Player.RED else Player.RED

    @property
    def forward(self) -> int:
        """Row delta of a normal piece's forward step."""
        return -1 if self is Player.RED else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Player.RED else BOARD_ROWS - 1


class Rank(str, Enum):
    NORMAL = "normal"
    KING = "king"
    SUPER_KING = "superKing"


class GameStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_ROWS and 0 <= col < BOARD_COLS


def is_playable(row: int, col: int) -> bool:
    """Only dark squares, where row + col is odd, hold pieces."""
    return (row + col) % 2 == 1


def check_position(pos: Any) -> Position:
    """Validate and normalize a position, raising ValueError when malformed."""
    try:
        row, col = pos
    except (TypeError, ValueError):
        raise ValueError(f"Position must be a (row, col) pair, got {pos!r}") from None
    if not isinstance(row, int) or not isinstance(col, int):
        raise ValueError(f"Position coordinates must be integers, got {pos!r}")
    if not in_bounds(row, col):
        raise ValueError(f"Position {pos!r} is outside the 8x8 board")
    return (row, col)


@dataclass(frozen=True)
class Piece:
    """A single checker on the board."""

    id: str
    player: Player
    rank: Rank
    position: Position
    must_continue_capture: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'position', check_position(self.position))
        if not is_playable(*self.position):
            raise ValueError(f"Piece {self.id} placed on non-playable square {self.position}")

    @property
    def is_king(self) -> bool:
        return self.rank is not Rank.NORMAL

    def moved_to(self, pos: Position, rank: Optional[Rank] = None,
                 must_continue_capture: bool = False) -> 'Piece':
        return replace(self, position=pos, rank=rank or self.rank,
                       must_continue_capture=must_continue_capture)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'player': self.player.value,
            'type': self.rank.value,
            'position': {'row': self.position[0], 'col': self.position[1]},
        }
        if self.must_continue_capture:
            data['mustContinueCapture'] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Piece':
        pos = data['position']
        return cls(
            id=str(data['id']),
            player=Player(data['player']),
            rank=Rank(data.get('type', Rank.NORMAL.value)),
            position=(int(pos['row']), int(pos['col'])),
            must_continue_capture=bool(data.get('mustContinueCapture', False)),
        )


@dataclass(frozen=True)
class MoveResult:
    """Outcome of applying a single hop to a board."""

    board: 'Board'
    captured: bool
    must_continue: bool
    promoted: bool
    captured_piece: Optional[Piece] = None


@dataclass(frozen=True)
class Move:
    """A complete turn as chosen by the AI.

    ``capture_chain`` lists every landing square of a multi-jump, ending with
    ``end``; it is empty for a basic move.
    """

    start: Position
    end: Position
    capture_chain: Tuple[Position, ...] = ()
    score: float = 0.0

    @property
    def is_capture(self) -> bool:
        return bool(self.capture_chain)

    @property
    def hops(self) -> List[Tuple[Position, Position]]:
        """The (from, to) pairs that make up this move."""
        if not self.capture_chain:
            return [(self.start, self.end)]
        squares = [self.start, *self.capture_chain]
        return list(zip(squares, squares[1:]))


def _zero_scores() -> Dict[Player, int]:
    return {Player.RED: 0, Player.BLACK: 0}


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of one match.

    Every transition goes through GameStateMachine, which returns a new
    GameState; callers never edit the board directly.
    """

    board: 'Board'
    current_player: Player = Player.RED
    status: GameStatus = GameStatus.WAITING
    winner: Optional[Player] = None
    scores: Dict[Player, int] = field(default_factory=_zero_scores)
    move_count: int = 0

    def __post_init__(self) -> None:
        if self.move_count < 0:
            raise ValueError("Move count must be non-negative")
        if self.winner is not None and self.status is not GameStatus.FINISHED:
            raise ValueError("Only a finished game can have a winner")

    @property
    def is_finished(self) -> bool:
        return self.status is GameStatus.FINISHED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the room ``gameData`` shape used by the session layer."""
        return {
            'pieces': [p.to_dict() for p in self.board.pieces()],
            'currentPlayer': self.current_player.value,
            'status': self.status.value,
            'winner': self.winner.value if self.winner else None,
            'scores': {p.value: n for p, n in self.scores.items()},
            'moveCount': self.move_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        # Local import to avoid circular import during module initialization
        from checkers_online.board import Board

        scores = _zero_scores()
        for name, count in data.get('scores', {}).items():
            scores[Player(name)] = int(count)
        winner = data.get('winner')
        return cls(
            board=Board(Piece.from_dict(p) for p in data.get('pieces', [])),
            current_player=Player(data.get('currentPlayer', Player.RED.value)),
            status=GameStatus(data.get('status', GameStatus.PLAYING.value)),
            winner=Player(winner) if winner else None,
            scores=scores,
            move_count=int(data.get('moveCount', 0)),
        )
