import pytest

from checkers_online.board import Board, count_pieces, create_initial_board, piece_at, pieces_of
from checkers_online.moves import MoveGenerator
from checkers_online.types import GameState, GameStatus, Piece, Player, Rank


def red(r, c, rank=Rank.NORMAL):
    return Piece(id=f"red-{r}-{c}", player=Player.RED, rank=rank, position=(r, c))


def black(r, c, rank=Rank.NORMAL):
    return Piece(id=f"black-{r}-{c}", player=Player.BLACK, rank=rank, position=(r, c))


def test_initial_layout():
    board = create_initial_board()
    reds = pieces_of(board, Player.RED)
    blacks = pieces_of(board, Player.BLACK)
    assert len(reds) == 12
    assert len(blacks) == 12
    assert all((p.position[0] + p.position[1]) % 2 == 1 for p in board.pieces())
    assert not any(p.position[0] in (3, 4) for p in board.pieces())
    assert all(p.position[0] <= 2 for p in blacks)
    assert all(p.position[0] >= 5 for p in reds)
    assert all(p.rank is Rank.NORMAL for p in board.pieces())


def test_initial_layout_is_deterministic():
    assert create_initial_board() == create_initial_board()


def test_piece_at_and_empty_squares():
    board = create_initial_board()
    assert piece_at(board, (5, 0)).player is Player.RED
    assert piece_at(board, (0, 1)).player is Player.BLACK
    assert piece_at(board, (4, 1)) is None
    assert board.is_empty((3, 2))


def test_out_of_range_position_is_rejected():
    board = create_initial_board()
    with pytest.raises(ValueError):
        piece_at(board, (8, 1))
    with pytest.raises(ValueError):
        piece_at(board, (-1, 0))


def test_non_playable_square_is_rejected():
    with pytest.raises(ValueError):
        Piece(id="x", player=Player.RED, rank=Rank.NORMAL, position=(0, 0))


def test_two_pieces_on_one_square_is_rejected():
    clash = Piece(id="other", player=Player.BLACK, rank=Rank.NORMAL, position=(4, 3))
    with pytest.raises(ValueError):
        Board([red(4, 3), clash])


def test_duplicate_ids_are_rejected():
    twin = Piece(id="red-4-3", player=Player.RED, rank=Rank.NORMAL, position=(4, 5))
    with pytest.raises(ValueError):
        Board([red(4, 3), twin])


def test_replace_returns_new_board():
    board = Board([red(4, 3), black(3, 2)])
    moved = board.get("red-4-3").moved_to((3, 4))
    new_board = board.replace(moved, removed=["black-3-2"])
    assert piece_at(new_board, (3, 4)).id == "red-4-3"
    assert piece_at(new_board, (3, 2)) is None
    # original untouched
    assert piece_at(board, (4, 3)).id == "red-4-3"
    assert len(board) == 2


def test_unknown_piece_id_raises_key_error():
    with pytest.raises(KeyError):
        create_initial_board().get("nope")


def test_count_pieces():
    board = Board([red(4, 3), red(0, 1, Rank.KING), black(3, 2)])
    assert count_pieces(board) == (2, 1, 1, 0)


def test_game_state_dict_round_trip():
    board = Board([red(4, 3), black(3, 2, Rank.KING)])
    state = GameState(board=board, current_player=Player.BLACK, status=GameStatus.PLAYING,
                      scores={Player.RED: 3, Player.BLACK: 1}, move_count=7)
    data = state.to_dict()
    assert data['currentPlayer'] == 'black'
    assert data['scores'] == {'red': 3, 'black': 1}
    assert {'id': 'black-3-2', 'player': 'black', 'type': 'king',
            'position': {'row': 3, 'col': 2}} in data['pieces']
    assert GameState.from_dict(data) == state


def test_winner_requires_finished_state():
    with pytest.raises(ValueError):
        GameState(board=Board(), status=GameStatus.PLAYING, winner=Player.RED)


def test_game_state_from_dict_keeps_capture_in_progress():
    data = {
        'pieces': [
            {'id': 'red-x', 'player': 'red', 'type': 'normal',
             'position': {'row': 4, 'col': 3}, 'mustContinueCapture': True},
            {'id': 'black-y', 'player': 'black', 'type': 'normal',
             'position': {'row': 3, 'col': 2}},
            {'id': 'red-z', 'player': 'red', 'type': 'normal',
             'position': {'row': 5, 'col': 0}},
        ],
        'currentPlayer': 'red',
        'status': 'playing',
        'scores': {'red': 1, 'black': 0},
        'moveCount': 4,
    }
    state = GameState.from_dict(data)
    assert state.board.get('red-x').must_continue_capture
    assert not state.board.get('red-z').must_continue_capture
    assert MoveGenerator().legal_moves(state.board.get('red-z'), state.board) == set()
    assert GameState.from_dict(state.to_dict()) == state
    assert state.to_dict()['pieces'][1]['mustContinueCapture'] is True
