"""
Turn ownership, scoring and terminal-state detection.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional, Set

from checkers_online.board import create_initial_board, pieces_of
from checkers_online.errors import GameNotInProgress, InvalidMove, NotYourTurn
from checkers_online.executor import MoveExecutor
from checkers_online.types import (
    GameState,
    GameStatus,
    Move,
    Player,
    Position,
)


class GameStateMachine:
    """Drives a match through Waiting -> Playing -> Finished.

    All methods are pure: they take a GameState and return a new one, or
    raise an EngineError leaving the input untouched.
    """

    def __init__(self, executor: Optional[MoveExecutor] = None) -> None:
        self.executor = executor or MoveExecutor()
        self.generator = self.executor.generator

    @classmethod
    def from_rules(cls, rules) -> 'GameStateMachine':
        return cls(MoveExecutor.from_rules(rules))

    def new_game(self) -> GameState:
        return GameState(board=create_initial_board())

    def start(self, state: GameState) -> GameState:
        """Enter Playing once both seats are filled."""
        if state.status is not GameStatus.WAITING:
            raise GameNotInProgress(f"Cannot start a game that is {state.status.value}")
        return replace(state, status=GameStatus.PLAYING)

    def legal_moves(self, state: GameState, piece_id: str) -> Set[Position]:
        piece = state.board.get(piece_id)
        if state.status is not GameStatus.PLAYING or piece.player is not state.current_player:
            return set()
        return self.generator.legal_moves(piece, state.board)

    def submit_move(self, state: GameState, player: Player, start: Position,
                    end: Position) -> GameState:
        if state.status is not GameStatus.PLAYING:
            raise GameNotInProgress(f"Game is {state.status.value}")
        if player is not state.current_player:
            raise NotYourTurn(f"It is {state.current_player.value}'s turn")

        result = self.executor.apply_move(state.board, start, end, player)

        scores = dict(state.scores)
        if result.captured:
            scores[player] = scores.get(player, 0) + 1
        next_player = player if result.must_continue else player.opponent
        new_state = replace(
            state,
            board=result.board,
            current_player=next_player,
            scores=scores,
            move_count=state.move_count + (0 if result.must_continue else 1),
        )
        return self._check_terminal(new_state, mover=player)

    def apply_chain(self, state: GameState, player: Player, move: Move) -> GameState:
        """Apply every hop of an AI move; a partial chain is rejected."""
        for start, end in move.hops:
            state = self.submit_move(state, player, start, end)
        if not state.is_finished and state.current_player is player:
            raise InvalidMove(f"Capture chain ending at {move.end} is incomplete")
        return state

    def surrender(self, state: GameState, player: Player) -> GameState:
        if state.status is GameStatus.FINISHED:
            raise GameNotInProgress("Game is already finished")
        return replace(state, status=GameStatus.FINISHED, winner=player.opponent)

    def _check_terminal(self, state: GameState, mover: Player) -> GameState:
        opponent = mover.opponent
        if not pieces_of(state.board, opponent):
            return replace(state, status=GameStatus.FINISHED, winner=mover)
        if state.current_player is opponent and not self.generator.has_any_legal_move(
                state.board, opponent):
            return replace(state, status=GameStatus.FINISHED, winner=mover)
        return state


def is_terminal(state: GameState) -> bool:
    return state.status is GameStatus.FINISHED


def winner(state: GameState) -> Optional[Player]:
    return state.winner
