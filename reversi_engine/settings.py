from __future__ import annotations

import logging
import os
import pathlib
import sys
import typing
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .engine.errors import ReversiError
from .engine.eval import EVALUATORS

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_HOME = pathlib.Path(os.path.expanduser("~/.reversi_engine"))
CONFIG_PATH = CONFIG_HOME / "config.toml"
DEFAULTS_PATH = pathlib.Path(__file__).resolve().parent / "config" / "defaults.toml"

PLAYER_KINDS = ("human", "negamax", "random")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


class ConfigError(ReversiError):
    """The configuration file is unreadable or holds an unsupported value."""


@dataclass(frozen=True)
class SearchConfig:
    depth: int = 4
    evaluator: str = "positional"
    alpha_beta: bool = True
    time_ms: int = 0


@dataclass(frozen=True)
class PlayersConfig:
    black: str = "human"
    white: str = "negamax"
    seed: int = -1


@dataclass(frozen=True)
class DisplayConfig:
    black_symbol: str = "●"
    white_symbol: str = "○"
    empty_symbol: str = " "
    hint_symbol: str = "·"
    show_moves: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: str = "reversi-engine.log"
    overwrite: bool = True


@dataclass(frozen=True)
class Config:
    search: SearchConfig = SearchConfig()
    players: PlayersConfig = PlayersConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()


def _read_toml(path: pathlib.Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _check_type(expected: type, value: Any) -> bool:
    # bool is a subclass of int, keep the two apart
    if expected is bool or isinstance(value, bool):
        return expected is bool and isinstance(value, bool)
    return isinstance(value, expected)


def _section(cls, data: Dict[str, Any], name: str):
    values = data.get(name, {})
    if not isinstance(values, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(values).__name__}")
    known = typing.get_type_hints(cls)
    unknown = set(values) - set(known)
    if unknown:
        raise ConfigError(f"unknown key(s) in [{name}]: {', '.join(sorted(unknown))}")
    for key, value in values.items():
        if not _check_type(known[key], value):
            raise ConfigError(
                f"{name}.{key} must be of type {known[key].__name__}, got {type(value).__name__} {value!r}"
            )
    return cls(**values)


def validate_config(cfg: Config) -> Config:
    if cfg.search.depth < 1:
        raise ConfigError(f"search.depth must be at least 1, got {cfg.search.depth}")
    if cfg.search.time_ms < 0:
        raise ConfigError(f"search.time_ms must not be negative, got {cfg.search.time_ms}")
    if cfg.search.evaluator not in EVALUATORS:
        raise ConfigError(f"unknown evaluator {cfg.search.evaluator!r}, expected one of {sorted(EVALUATORS)}")
    for color in ("black", "white"):
        kind = getattr(cfg.players, color)
        if kind not in PLAYER_KINDS:
            raise ConfigError(f"unknown player {kind!r} for {color}, expected one of {list(PLAYER_KINDS)}")
    if cfg.logging.level.upper() not in LOG_LEVELS:
        raise ConfigError(f"unknown log level {cfg.logging.level!r}, expected one of {list(LOG_LEVELS)}")
    return cfg


def config_from_dict(data: Dict[str, Any]) -> Config:
    return validate_config(Config(
        search=_section(SearchConfig, data, "search"),
        players=_section(PlayersConfig, data, "players"),
        display=_section(DisplayConfig, data, "display"),
        logging=_section(LoggingConfig, data, "logging"),
    ))


def load_config(path: Optional[pathlib.Path] = None) -> Config:
    """Load the shipped defaults, overridden by `path` or the user config if present."""
    data = _read_toml(DEFAULTS_PATH)
    user_path = path if path is not None else CONFIG_PATH
    if path is not None or CONFIG_PATH.exists():
        data = _merge(data, _read_toml(pathlib.Path(user_path)))
        logger.debug("Loaded config overrides from %s", user_path)
    return config_from_dict(data)
