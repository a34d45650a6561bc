from __future__ import annotations

import argparse
import logging
import pathlib
import random
import sys
from dataclasses import replace
from typing import Dict, Optional

from ..settings import LOG_LEVELS, PLAYER_KINDS, Config, ConfigError, load_config, validate_config
from ..display import render, render_result, render_scores
from ..engine.errors import ReversiError
from ..engine.eval import EVALUATORS
from ..engine.piece import Piece
from ..engine.reversi import Reversi
from ..logging_setup import setup_logging
from ..match import play_game
from ..players import HumanPlayer, NegamaxPlayer, Player, RandomPlayer

logger = logging.getLogger(__name__)


def build_player(kind: str, cfg: Config, rng: random.Random) -> Player:
    if kind == "human":
        return HumanPlayer()
    if kind == "random":
        return RandomPlayer(rng)
    if kind == "negamax":
        search = cfg.search
        return NegamaxPlayer(
            depth=search.depth,
            evaluate=EVALUATORS[search.evaluator],
            rng=rng,
            time_ms=search.time_ms or None,
            alpha_beta=search.alpha_beta,
        )
    raise ConfigError(f"unknown player {kind!r}")


def _override(cfg: Config, args: argparse.Namespace) -> Config:
    search = cfg.search
    if args.depth is not None:
        search = replace(search, depth=args.depth)
    if args.eval is not None:
        search = replace(search, evaluator=args.eval)
    if args.time_ms is not None:
        search = replace(search, time_ms=args.time_ms)
    players = cfg.players
    if args.black is not None:
        players = replace(players, black=args.black)
    if args.white is not None:
        players = replace(players, white=args.white)
    if args.seed is not None:
        players = replace(players, seed=args.seed)
    log = cfg.logging
    if args.log_level is not None:
        log = replace(log, level=args.log_level)
    return validate_config(replace(cfg, search=search, players=players, logging=log))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="reversi", description="Play Reversi in the terminal")
    p.add_argument("--black", choices=PLAYER_KINDS, default=None, help="Who plays black")
    p.add_argument("--white", choices=PLAYER_KINDS, default=None, help="Who plays white")
    p.add_argument("--depth", type=int, default=None, help="Negamax search depth")
    p.add_argument("--eval", choices=sorted(EVALUATORS), default=None, help="Static evaluator")
    p.add_argument("--time-ms", type=int, default=None, help="Per-move search budget, 0 for none")
    p.add_argument("--seed", type=int, default=None, help="Random seed, -1 for a fresh one")
    p.add_argument("--config", type=pathlib.Path, default=None, help="Path to a config.toml")
    p.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Override the configured log level",
    )
    return p


def run(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = _override(load_config(args.config), args)
    except ReversiError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        level=cfg.logging.level,
        log_path=pathlib.Path(cfg.logging.file),
        overwrite=cfg.logging.overwrite,
    )

    seed = cfg.players.seed
    rng = random.Random(None if seed < 0 else seed)
    try:
        players: Dict[Piece, Player] = {
            Piece.BLACK: build_player(cfg.players.black, cfg, rng),
            Piece.WHITE: build_player(cfg.players.white, cfg, rng),
        }

        def show(game: Reversi) -> None:
            print()
            print(render(game, cfg.display))
            print()
            print(render_scores(game, cfg.display))
            if not game.is_terminal():
                print(f"The current piece is: {game.current_player.name.lower()}")

        record = play_game(players, on_update=show)
    except ReversiError:
        logger.exception("Game aborted")
        return 1

    if record.finished:
        print(render_result(record.game, cfg.display))
    else:
        print()
    return 0


def main() -> None:
    sys.exit(run())
