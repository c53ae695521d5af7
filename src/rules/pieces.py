"""Piece codes, colours and FEN symbols.

A piece is a 4-bit code: bit 3 is the colour (0 white, 8 black) and the low
three bits are the type. ``EMPTY`` (0) marks a vacant square.
"""

from __future__ import annotations

from typing import Dict

WHITE = 0
BLACK = 1

EMPTY = 0
PAWN = 1
KNIGHT = 2
BISHOP = 3
ROOK = 4
QUEEN = 5
KING = 6

TYPE_MASK = 0b0111

PROMOTION_TYPES = (KNIGHT, BISHOP, ROOK, QUEEN)

TYPE_TO_CHAR = {PAWN: "p", KNIGHT: "n", BISHOP: "b", ROOK: "r", QUEEN: "q", KING: "k"}
CHAR_TO_TYPE = {v: k for k, v in TYPE_TO_CHAR.items()}


def make_piece(color: int, piece_type: int) -> int:
    return (color << 3) | piece_type


def color_of(piece: int) -> int:
    return piece >> 3


def type_of(piece: int) -> int:
    return piece & TYPE_MASK


def piece_to_char(piece: int) -> str:
    """Return the FEN symbol for ``piece`` (uppercase white, lowercase black)."""
    ch = TYPE_TO_CHAR[type_of(piece)]
    return ch.upper() if color_of(piece) == WHITE else ch


def char_to_piece(ch: str) -> int:
    """Return the piece code for a FEN symbol.

    Raises:
        KeyError: If ``ch`` is not one of ``pnbrqkPNBRQK``.
    """
    piece_type = CHAR_TO_TYPE[ch.lower()]
    return make_piece(BLACK if ch.islower() else WHITE, piece_type)


PIECE_TO_CHAR: Dict[int, str] = {
    make_piece(c, t): piece_to_char(make_piece(c, t)) for c in (WHITE, BLACK) for t in TYPE_TO_CHAR
}

# Castling slots: castling_lost[colour][side]
KINGSIDE = 0
QUEENSIDE = 1
NO_RIGHTS = -1  # right never held in this game
HELD = 0  # right held and never lost
# any positive value: half-move number at which the right was lost
