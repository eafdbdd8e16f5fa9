from __future__ import annotations

from typing import List, Optional

from checkers_online.types import Move, Position, in_bounds


def pos_to_str(pos: Position) -> str:
    return f"{pos[0]},{pos[1]}"


def move_to_str(move: Move) -> str:
    """Convert a move to notation, e.g. ``5,2-4,3`` or ``5,2x3,4x1,2``."""
    if move.capture_chain:
        squares = [move.start, *move.capture_chain]
        return 'x'.join(pos_to_str(p) for p in squares)
    return f"{pos_to_str(move.start)}-{pos_to_str(move.end)}"


def parse_position(s: str) -> Optional[Position]:
    """Parse ``"r,c"`` or ``"rc"`` into a position, or None when malformed."""
    s = s.strip().replace(' ', '')
    parts = s.split(',') if ',' in s else list(s)
    if len(parts) != 2:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not in_bounds(row, col):
        return None
    return (row, col)


def parse_move_str(s: str) -> Optional[List[Position]]:
    """Parse a move string into its list of squares (start first)."""
    s = s.strip().lower().replace('x', '-')
    if not s:
        return None
    parts: List[str] = [p for p in s.split('-') if p.strip()]
    squares: List[Position] = []
    for part in parts:
        pos = parse_position(part)
        if pos is None:
            return None
        squares.append(pos)
    if len(squares) < 2:
        return None
    return squares
