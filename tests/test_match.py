from __future__ import annotations

import logging
import random

import orjson
import pytest

from reversi_engine.display import render, render_result, render_scores
from reversi_engine.settings import DisplayConfig
from reversi_engine.engine.errors import InvalidMove
from reversi_engine.engine.eval import positional
from reversi_engine.engine.piece import Piece
from reversi_engine.engine.reversi import Reversi
from reversi_engine.engine.tile_pos import TilePos
from reversi_engine.logging_setup import log_event
from reversi_engine.match import play_game
from reversi_engine.players import HumanPlayer, NegamaxPlayer, RandomPlayer


class ScriptedInput:
    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class IllegalPlayer:
    def choose_move(self, game):
        return TilePos(0, 0)


def test_negamax_vs_negamax_plays_to_the_end():
    players = {Piece.BLACK: NegamaxPlayer(depth=1), Piece.WHITE: NegamaxPlayer(depth=1, evaluate=positional)}
    record = play_game(players)
    assert record.finished
    assert record.game.is_terminal()
    placed = [move for _, move in record.moves if move is not None]
    assert sum(record.scores.values()) == 4 + len(placed)
    assert record.winner == record.game.winner()
    # Deterministic players replay the same game
    assert play_game(players).transcript == record.transcript


def test_random_vs_negamax_with_seed():
    rng = random.Random(5)
    players = {Piece.BLACK: RandomPlayer(rng), Piece.WHITE: NegamaxPlayer(depth=2, rng=rng)}
    record = play_game(players)
    assert record.finished
    assert len(record.transcript) == 2 * len(record.moves)


def test_negamax_player_with_rng_picks_a_best_move(start):
    player = NegamaxPlayer(depth=1, rng=random.Random(0))
    # All four openings score the same
    assert player.choose_move(start) in start.valid_moves()
    assert NegamaxPlayer(depth=1).choose_move(start) == TilePos(2, 3)


def test_play_game_does_not_touch_given_game(start):
    players = {Piece.BLACK: NegamaxPlayer(depth=1), Piece.WHITE: NegamaxPlayer(depth=1)}
    play_game(players, game=start)
    assert start == Reversi()


def test_on_update_sees_every_position():
    seen = []
    players = {Piece.BLACK: NegamaxPlayer(depth=1), Piece.WHITE: NegamaxPlayer(depth=1)}
    record = play_game(players, on_update=lambda g: seen.append(g.clone()))
    assert len(seen) == len(record.moves) + 1
    assert seen[0] == Reversi()


def test_illegal_choice_raises():
    with pytest.raises(InvalidMove):
        play_game({Piece.BLACK: IllegalPlayer(), Piece.WHITE: IllegalPlayer()})


class TestHumanPlayer:
    """Prompted moves are re-asked until legal."""

    def test_reprompts_until_legal(self, start):
        out = []
        scripted = ScriptedInput(["zz\n", "A1\n", "d3\n"])
        player = HumanPlayer(input_fn=scripted, output_fn=out.append)
        assert player.choose_move(start) == TilePos(2, 3)
        assert len(scripted.prompts) == 3
        assert out[0].startswith("Invalid input: `zz`")
        assert out[1].startswith("Invalid move: `A1`")

    def test_end_of_input_stops_the_game(self):
        human = HumanPlayer(input_fn=ScriptedInput(["d3"]), output_fn=lambda _: None)
        players = {Piece.BLACK: human, Piece.WHITE: NegamaxPlayer(depth=1)}
        record = play_game(players)
        assert not record.finished
        assert record.moves[0] == (Piece.BLACK, TilePos(2, 3))
        assert record.game.current_player is Piece.BLACK


class TestDisplay:
    """Text rendering of the board."""

    def test_render_start(self, start):
        text = render(start)
        lines = text.splitlines()
        assert lines[0].split("│")[1:9] == [f" {c} " for c in "ABCDEFGH"]
        assert text.count("·") == 4
        assert text.count("●") == 2 and text.count("○") == 2
        assert len(lines) == 2 + 2 * 8

    def test_render_without_hints(self, start):
        assert "·" not in render(start, DisplayConfig(show_moves=False))

    def test_scores_and_result(self, start, near_full_game):
        assert render_scores(start) == "Score: ● 2 | ○ 2"
        assert render_result(start) == "The game ended with a tie"
        assert render_result(near_full_game, DisplayConfig(black_symbol="X")) == "The winner is: X (black)"


def test_log_event_is_json(caplog):
    with caplog.at_level(logging.INFO, logger="event.match"):
        log_event("match", "test_event", black=3, move=str(TilePos(0, 0)))
    payload = orjson.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "test_event"
    assert payload["module"] == "match"
    assert payload["black"] == 3
    assert payload["move"] == "A1"


def test_negamax_player_keeps_search_move_when_budget_is_spent(start):
    player = NegamaxPlayer(depth=4, rng=random.Random(0), time_ms=0)
    assert player.choose_move(start) == TilePos(2, 3)


def test_record_moves_pair_player_and_move():
    players = {Piece.BLACK: NegamaxPlayer(depth=1), Piece.WHITE: NegamaxPlayer(depth=1)}
    record = play_game(players)
    for player, move in record.moves:
        assert isinstance(player, Piece)
        assert move is None or isinstance(move, TilePos)
