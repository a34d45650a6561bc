from __future__ import annotations

import random

import pytest

from reversi_engine.engine.errors import InvalidMove, TerminalStateViolation
from reversi_engine.engine.piece import Piece
from reversi_engine.engine.reversi import Reversi
from reversi_engine.engine.tile_pos import TilePos, all_positions

OPENING_MOVES = [TilePos(2, 3), TilePos(3, 2), TilePos(4, 5), TilePos(5, 4)]  # D3 C4 F5 E6


def random_playout(seed: int):
    """Yield every state of a random game, starting position included."""
    rng = random.Random(seed)
    g = Reversi()
    yield g
    while not g.is_terminal():
        moves = g.valid_moves()
        if not moves:
            g = g.passed()
        else:
            g = g.after(rng.choice(moves))
        yield g


def test_start_position(start):
    assert start.current_player is Piece.BLACK
    assert start.scores() == {Piece.BLACK: 2, Piece.WHITE: 2}
    assert start.tile(TilePos(3, 3)) is Piece.WHITE
    assert start.tile(TilePos(3, 4)) is Piece.BLACK
    assert start.tile(TilePos(4, 3)) is Piece.BLACK
    assert start.tile(TilePos(4, 4)) is Piece.WHITE
    assert not start.is_terminal()


def test_opening_moves_for_black(start):
    assert start.valid_moves(Piece.BLACK) == OPENING_MOVES
    assert start.valid_moves() == OPENING_MOVES


def test_opening_moves_for_white(start):
    # Mirror image of Black's options
    assert start.valid_moves(Piece.WHITE) == [TilePos(2, 4), TilePos(3, 5), TilePos(4, 2), TilePos(5, 3)]


def test_opening_move_flips_one_piece_and_passes_turn(start):
    start.apply_move(TilePos(2, 3), Piece.BLACK)
    assert start.tile(TilePos(2, 3)) is Piece.BLACK
    assert start.tile(TilePos(3, 3)) is Piece.BLACK
    # untouched
    assert start.tile(TilePos(4, 4)) is Piece.WHITE
    assert start.scores() == {Piece.BLACK: 4, Piece.WHITE: 1}
    assert start.current_player is Piece.WHITE


def test_three_move_opening():
    g = Reversi()
    for pos in (TilePos(2, 3), TilePos(2, 2), TilePos(2, 1)):
        g.apply_move(pos)
    # D3, C3, B3: each move places one piece and flips exactly one
    total = sum(g.scores().values())
    assert total == 7
    assert g.scores() == {Piece.BLACK: 5, Piece.WHITE: 2}
    assert g.current_player is Piece.WHITE
    for pos in all_positions():
        assert g.is_valid_move(pos) == bool(g.flips(pos))


def test_flips_stop_at_empty_and_edge(edge_pass_game):
    g = edge_pass_game
    # Run of white towards the edge with nothing behind it
    assert g.flips(TilePos(0, 2), Piece.WHITE) == []
    assert g.flips(TilePos(0, 2), Piece.BLACK) == [TilePos(0, 1)]
    # Occupied tile never captures
    assert g.flips(TilePos(0, 1), Piece.BLACK) == []
    assert g.valid_moves(Piece.BLACK) == [TilePos(0, 2), TilePos(7, 2)]
    assert g.valid_moves(Piece.WHITE) == []


class TestApplyMoveFailures:
    """Rejected moves must leave the game untouched."""

    def test_move_without_capture(self, start):
        before = start.clone()
        with pytest.raises(InvalidMove) as info:
            start.apply_move(TilePos(0, 0))
        assert info.value.pos == TilePos(0, 0)
        assert info.value.player is Piece.BLACK
        assert start == before

    def test_move_on_occupied_tile(self, start):
        before = start.clone()
        with pytest.raises(InvalidMove):
            start.apply_move(TilePos(3, 3))
        assert start == before

    def test_move_out_of_turn(self, start):
        before = start.clone()
        with pytest.raises(InvalidMove):
            start.apply_move(TilePos(2, 4), Piece.WHITE)
        assert start == before
        assert start.current_player is Piece.BLACK

    def test_move_after_game_over(self, near_full_game):
        before = near_full_game.clone()
        with pytest.raises(TerminalStateViolation):
            near_full_game.apply_move(TilePos(0, 0), Piece.WHITE)
        assert near_full_game == before

    def test_invalid_move_is_not_terminal_error(self, start):
        with pytest.raises(InvalidMove):
            start.apply_move(TilePos(7, 7))
        assert not issubclass(InvalidMove, TerminalStateViolation)


def test_near_full_board_is_terminal(near_full_game):
    g = near_full_game
    assert not g.grid().is_full()
    assert g.valid_moves(Piece.BLACK) == []
    assert g.valid_moves(Piece.WHITE) == []
    assert g.is_terminal()
    assert g.scores() == {Piece.BLACK: 63, Piece.WHITE: 0}
    assert g.winner() is Piece.BLACK


def test_same_player_moves_again_when_opponent_has_no_reply(edge_pass_game):
    g = edge_pass_game
    g.apply_move(TilePos(0, 2))
    assert g.current_player is Piece.BLACK
    assert not g.is_terminal()
    g.apply_move(TilePos(7, 2))
    assert g.scores() == {Piece.BLACK: 6, Piece.WHITE: 0}
    assert g.is_terminal()
    with pytest.raises(TerminalStateViolation):
        g.pass_turn()


def test_pass_turn(edge_pass_game):
    stuck = Reversi.from_grid(edge_pass_game.grid(), Piece.WHITE)
    assert stuck.valid_moves() == []
    assert not stuck.is_terminal()
    passed = stuck.passed()
    assert passed.current_player is Piece.BLACK
    # source state left alone
    assert stuck.current_player is Piece.WHITE
    with pytest.raises(InvalidMove):
        passed.pass_turn()


def test_clone_is_independent(start):
    copied = start.clone()
    copied.apply_move(TilePos(2, 3))
    assert start.tile(TilePos(2, 3)) is None
    assert start.current_player is Piece.BLACK
    assert start.after(TilePos(2, 3)) == copied


def test_winner_tie(start):
    assert start.winner() is None


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_random_games_keep_rules_consistent(seed):
    previous = None
    for g in random_playout(seed):
        for player in Piece:
            moves = g.valid_moves(player)
            assert moves == sorted(moves)
            for pos in all_positions():
                assert g.is_valid_move(pos, player) == (pos in moves)
        assert g.is_terminal() == (not g.valid_moves(Piece.BLACK) and not g.valid_moves(Piece.WHITE))
        total = sum(g.scores().values())
        if previous is not None:
            # +1 per placed piece, unchanged by a pass
            assert total - previous in (0, 1)
        previous = total
    assert g.is_terminal()
