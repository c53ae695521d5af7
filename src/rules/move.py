from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from .errors import InvalidSquareReference
from .pieces import CHAR_TO_TYPE, EMPTY, PROMOTION_TYPES, TYPE_TO_CHAR


class MoveKind(Enum):
    NORMAL = "normal"
    EN_PASSANT = "en_passant"
    CASTLE = "castle"
    PROMOTION = "promotion"


@dataclass
class Move:
    """One ply, fully described against the position it was generated in.

    Attributes:
        start (int): Origin square index (0-based, a1=0).
        target (int): Destination square index.
        moving (int): Piece code standing on ``start``.
        captured (int): Piece code removed by the move (``EMPTY`` if none);
            for en passant this is the pawn behind ``target``.
        kind (MoveKind): Normal, en passant, castle or promotion.
        promotion (int): Promoted piece type for ``MoveKind.PROMOTION``,
            otherwise ``EMPTY``.
        legal (bool): Set once the move is known not to leave the mover's
            king in check. Not part of equality.
    """

    start: int
    target: int
    moving: int
    captured: int = EMPTY
    kind: MoveKind = MoveKind.NORMAL
    promotion: int = EMPTY
    legal: bool = field(default=False, compare=False)

    @property
    def color(self) -> int:
        return self.moving >> 3

    @property
    def is_capture(self) -> bool:
        return self.captured != EMPTY

    def to_uci(self) -> str:
        """Serialize the move into long algebraic UCI form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        promo = TYPE_TO_CHAR[self.promotion] if self.promotion else ""
        return square_to_str(self.start) + square_to_str(self.target) + promo

    def key(self) -> "MoveKey":
        return MoveKey(self.start, self.target, self.promotion or None)


class MoveKey(NamedTuple):
    """Position-independent lookup key: what a UI can know about a move."""

    start: int
    target: int
    promotion: Optional[int] = None


def parse_uci(uci: str) -> MoveKey:
    """Parse a UCI move string into a lookup key.

    Args:
        uci (str): Move encoded in long algebraic notation (e.g. ``"e2e4"``).

    Returns:
        MoveKey: Start, target and optional promotion type. Resolve it
            against a position with ``Board.find_move``.

    Raises:
        ValueError: If the string has an invalid length or promotion piece.
        InvalidSquareReference: If either square is malformed.
    """
    if len(uci) not in (4, 5):
        raise ValueError(f"invalid UCI move length: {uci!r}")
    start = str_to_square(uci[0:2])
    target = str_to_square(uci[2:4])
    promo: Optional[int] = None
    if len(uci) == 5:
        promo = CHAR_TO_TYPE.get(uci[4].lower())
        if promo not in PROMOTION_TYPES:
            raise ValueError(f"invalid promotion piece: {uci[4]!r}")
    return MoveKey(start, target, promo)


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        int: Zero-based square index.

    Raises:
        InvalidSquareReference: If ``s`` is not in ``[a-h][1-8]``.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise InvalidSquareReference(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    rank = int(s[1]) - 1
    return rank * 8 + file


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Raises:
        InvalidSquareReference: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx > 63:
        raise InvalidSquareReference(f"invalid square index: {idx}")
    file = idx % 8
    rank = idx // 8
    return chr(ord("a") + file) + str(rank + 1)
