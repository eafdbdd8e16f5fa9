"""
AI move selection: capture-chain enumeration, minimax with alpha-beta
pruning, and difficulty shaping on top of the raw search scores.
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import List, Optional, Tuple, Union

import numpy as np

from checkers_online.board import Board, pieces_of
from checkers_online.eval import Evaluator, get_evaluator
from checkers_online.executor import MoveExecutor
from checkers_online.notation import move_to_str
from checkers_online.types import Difficulty, Move, Piece, Player, Position

logger = logging.getLogger(__name__)

WIN_SCORE = 100000
CENTRAL_CONTROL_BONUS = 50
DEFENSIVE_KING_BONUS = 30

Candidate = Tuple[Move, Board]  # move and the board after the whole turn
GameResult = Tuple[float, Optional[Move]]  # (score, best_move)


class SearchEngine:
    """Alpha-beta minimax over whole turns; a capture chain is one ply."""

    def __init__(self, executor: Optional[MoveExecutor] = None,
                 evaluator: Optional[Evaluator] = None,
                 settings=None, seed: Optional[int] = None) -> None:
        if settings is None:
            from config import get_engine_settings
            settings = get_engine_settings()
        self.settings = settings
        self.executor = executor or MoveExecutor()
        self.generator = self.executor.generator
        self.evaluator = evaluator or get_evaluator()
        self.rng = np.random.default_rng(seed if seed is not None else settings.seed)
        self.nodes = 0

    # ----------------------------
    # Move enumeration
    # ----------------------------
    def _capture_chains(self, board: Board, piece: Piece,
                        path: Tuple[Position, ...]) -> List[Tuple[Tuple[Position, ...], Board]]:
        chains: List[Tuple[Tuple[Position, ...], Board]] = []
        for dest in sorted(self.generator.legal_moves(piece, board)):
            result = self.executor.apply_move(board, piece.position, dest, piece.player)
            new_path = path + (dest,)
            if result.must_continue:
                moved = result.board.at(dest)
                chains.extend(self._capture_chains(result.board, moved, new_path))
            else:
                chains.append((new_path, result.board))
        return chains

    def generate_candidates(self, board: Board, player: Player) -> List[Candidate]:
        """Every complete turn available to ``player``, in a stable order."""
        own = pieces_of(board, player)
        continuing = [p for p in own if p.must_continue_capture]
        if continuing or self.generator.player_has_capture(board, player):
            candidates: List[Candidate] = []
            for piece in continuing or own:
                for chain, after in self._capture_chains(board, piece, ()):
                    move = Move(start=piece.position, end=chain[-1], capture_chain=chain)
                    candidates.append((move, after))
            return candidates

        candidates = []
        for piece in own:
            for dest in sorted(self.generator.basic_moves(piece, board)):
                result = self.executor.apply_move(board, piece.position, dest, player)
                candidates.append((Move(start=piece.position, end=dest), result.board))
        return candidates

    def enumerate_moves(self, board: Board, player: Player) -> List[Move]:
        return [move for move, _ in self.generate_candidates(board, player)]

    # ----------------------------
    # Search
    # ----------------------------
    def _minimax(self, board: Board, side: Player, root: Player, depth: int,
                 alpha: float, beta: float) -> float:
        self.nodes += 1
        candidates = self.generate_candidates(board, side)
        if not candidates:
            # Side to move is stuck or eliminated; sooner results weigh more
            return -(WIN_SCORE + depth) if side is root else WIN_SCORE + depth
        if depth == 0:
            return self.evaluator.evaluate_position(board, root)

        if side is root:
            value = -float('inf')
            for _, child in candidates:
                value = max(value, self._minimax(child, side.opponent, root, depth - 1, alpha, beta))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
            return value

        value = float('inf')
        for _, child in candidates:
            value = min(value, self._minimax(child, side.opponent, root, depth - 1, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value

    def score_moves(self, board: Board, player: Player, depth: int) -> List[Move]:
        """Root moves with their minimax scores, best first (ties keep enumeration order)."""
        scored: List[Move] = []
        for move, child in self.generate_candidates(board, player):
            score = self._minimax(child, player.opponent, player, max(0, depth - 1),
                                  -float('inf'), float('inf'))
            scored.append(replace(move, score=float(score)))
        return sorted(scored, key=lambda m: -m.score)

    def search(self, board: Board, player: Player, depth: int) -> GameResult:
        """Plain alpha-beta search returning (score, best_move)."""
        scored = self.score_moves(board, player, depth)
        if not scored:
            return (-WIN_SCORE, None)
        return (scored[0].score, scored[0])

    # ----------------------------
    # Difficulty shaping
    # ----------------------------
    def _hard_bonus(self, board: Board, move: Move, player: Player) -> float:
        bonus = 0.0
        row, col = move.end
        if 2 <= row <= 5 and 2 <= col <= 5:
            bonus += CENTRAL_CONTROL_BONUS
        piece = board.at(move.start)
        if piece is not None and piece.is_king:
            home_row = player.opponent.promotion_row
            if abs(row - home_row) <= 1 or col in (0, 7):
                bonus += DEFENSIVE_KING_BONUS
        return bonus

    def pick_move(self, board: Board, player: Player,
                  difficulty: Union[Difficulty, str]) -> Optional[Move]:
        difficulty = Difficulty(difficulty)
        start_time = time.time()
        self.nodes = 0

        if difficulty is Difficulty.EASY:
            moves = self.enumerate_moves(board, player)
            if not moves:
                return None
            choice = moves[int(self.rng.integers(len(moves)))]
            logger.debug("easy %s picked %s at random from %d moves",
                         player.value, move_to_str(choice), len(moves))
            return choice

        depth = self.settings.depth_for(difficulty.value)
        scored = self.score_moves(board, player, depth)
        if not scored:
            return None

        if difficulty is Difficulty.HARD:
            scored = sorted(
                (replace(m, score=m.score + self._hard_bonus(board, m, player)) for m in scored),
                key=lambda m: -m.score,
            )
            if len(scored) > 1 and self.rng.random() < self.settings.hard_second_best_probability:
                logger.debug("hard %s deliberately playing second best move", player.value)
                scored = scored[1:]

        best = scored[0]
        logger.debug("%s %s depth=%d nodes=%d score=%.1f move=%s in %.3fs",
                     difficulty.value, player.value, depth, self.nodes, best.score,
                     move_to_str(best), time.time() - start_time)
        return best


def get_engine(seed: Optional[int] = None) -> SearchEngine:
    """Get a new search engine wired to the configured rules."""
    from config import get_game_rules

    return SearchEngine(MoveExecutor.from_rules(get_game_rules()), seed=seed)
