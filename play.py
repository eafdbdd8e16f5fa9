from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from config import get_ui_settings, load_config_from_file, setup_logging
from checkers_online import AIWorker, Difficulty, EngineError, Match, Player
from checkers_online.notation import move_to_str, parse_move_str
from checkers_online.types import BOARD_COLS, BOARD_ROWS, GameState, Rank, is_playable

logger = logging.getLogger("play")

_UNICODE_PIECES = {
    (Player.RED, Rank.NORMAL): "●", (Player.RED, Rank.KING): "♚",
    (Player.RED, Rank.SUPER_KING): "★",
    (Player.BLACK, Rank.NORMAL): "○", (Player.BLACK, Rank.KING): "♔",
    (Player.BLACK, Rank.SUPER_KING): "☆",
}
_ASCII_PIECES = {
    (Player.RED, Rank.NORMAL): "r", (Player.RED, Rank.KING): "R",
    (Player.RED, Rank.SUPER_KING): "S",
    (Player.BLACK, Rank.NORMAL): "b", (Player.BLACK, Rank.KING): "B",
    (Player.BLACK, Rank.SUPER_KING): "Z",
}


def render_board(state: GameState) -> str:
    ui = get_ui_settings()
    symbols = _UNICODE_PIECES if ui.use_unicode else _ASCII_PIECES
    lines: List[str] = []
    if ui.show_indices:
        lines.append("   " + " ".join(str(c) for c in range(BOARD_COLS)))
    for r in range(BOARD_ROWS):
        cells = []
        for c in range(BOARD_COLS):
            piece = state.board.at((r, c))
            if piece is not None:
                cells.append(symbols[(piece.player, piece.rank)])
            else:
                cells.append("." if is_playable(r, c) else " ")
        prefix = f"{r}  " if ui.show_indices else ""
        lines.append(prefix + " ".join(cells))
    red, black = state.scores[Player.RED], state.scores[Player.BLACK]
    lines.append(f"captures  red: {red}  black: {black}")
    return "\n".join(lines)


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play checkers in the terminal")
    ap.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="medium",
                    help="AI difficulty")
    ap.add_argument("--human", choices=["red", "black", "none"], default="red",
                    help="Side played by the human ('none' for AI vs AI)")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    return ap.parse_args()


def _human_turn(match: Match, player: Player) -> bool:
    """Read and apply one command; returns False when the user quits."""
    line = input(f"{player.value} to move (e.g. 5,0-4,1; 'undo', 'resign', 'quit'): ").strip()
    if line == "quit":
        return False
    if line == "resign":
        match.surrender(player)
        return True
    if line == "undo":
        if not match.undo():
            print("Nothing to undo")
        # Step back past the AI reply to the human's own turn
        while match.state.current_player is not player and match.undo():
            pass
        return True
    squares = parse_move_str(line)
    if squares is None:
        print("Could not parse move")
        return True
    try:
        for start, end in zip(squares, squares[1:]):
            match.submit_move(player, start, end)
    except EngineError as e:
        print(f"Rejected: {e}")
    return True


def main() -> None:
    args = parse_args()
    if args.config:
        load_config_from_file(args.config)
    setup_logging()

    human: Optional[Player] = None if args.human == "none" else Player(args.human)
    match = Match()
    match.start()
    worker = AIWorker()

    while not match.state.is_finished:
        state = match.state
        print(render_board(state))
        if state.current_player is human:
            if not _human_turn(match, human):
                return
            continue

        results = []

        def report(move, applied, elapsed):
            results.append(applied)
            if move is not None:
                print(f"AI ({state.current_player.value}) plays {move_to_str(move)} "
                      f"[{elapsed:.2f}s]")

        worker.request_move(match, state.current_player, args.difficulty, report)
        worker.wait()
        if not any(results):
            print("AI could not produce a move, stopping")
            return

    final = match.state
    print(render_board(final))
    winner = final.winner.value if final.winner else "nobody"
    print(f"Game over, winner: {winner}")
    logger.info("Match finished after %d moves", final.move_count)


if __name__ == "__main__":
    main()
