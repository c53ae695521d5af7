"""Chess rules core: board state, legal moves, make/unmake, draws and FEN."""

from __future__ import annotations

from .board import STARTPOS_FEN, Board
from .errors import (
    ChessRulesError,
    IllegalMove,
    IllegalOperation,
    InvalidSquareReference,
    MalformedInput,
)
from .fen import parse_fen, serialize_fen
from .game import Game
from .move import Move, MoveKey, MoveKind, parse_uci, square_to_str, str_to_square

__all__ = [
    "STARTPOS_FEN",
    "Board",
    "ChessRulesError",
    "Game",
    "IllegalMove",
    "IllegalOperation",
    "InvalidSquareReference",
    "MalformedInput",
    "Move",
    "MoveKey",
    "MoveKind",
    "parse_fen",
    "parse_uci",
    "serialize_fen",
    "square_to_str",
    "str_to_square",
]
