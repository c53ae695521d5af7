from __future__ import annotations

from typing import List, Sequence, TYPE_CHECKING

from .pieces import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE, make_piece
from .tables import DIAGONAL, KING_MOVES, KNIGHT_MOVES, ORTHOGONAL, RAYS

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


def pawn_attackers_of(sq: int, by_color: int) -> List[int]:
    """Return squares from which a pawn of ``by_color`` would attack ``sq``."""
    f = sq % 8
    out: List[int] = []
    if by_color == WHITE:
        # White pawns attack upwards, so they sit one rank below
        if f > 0 and sq - 9 >= 0:
            out.append(sq - 9)
        if f < 7 and sq - 7 >= 0:
            out.append(sq - 7)
    else:
        if f > 0 and sq + 7 <= 63:
            out.append(sq + 7)
        if f < 7 and sq + 9 <= 63:
            out.append(sq + 9)
    return out


def _attackers(pieces: Sequence[int], sq: int, by_color: int, first_only: bool) -> List[int]:
    found: List[int] = []

    pawn = make_piece(by_color, PAWN)
    for o in pawn_attackers_of(sq, by_color):
        if pieces[o] == pawn:
            found.append(o)
            if first_only:
                return found

    knight = make_piece(by_color, KNIGHT)
    for o in KNIGHT_MOVES[sq]:
        if pieces[o] == knight:
            found.append(o)
            if first_only:
                return found

    queen = make_piece(by_color, QUEEN)
    rook = make_piece(by_color, ROOK)
    for d in ORTHOGONAL:
        for o in RAYS[sq][d]:
            p = pieces[o]
            if p:
                if p == rook or p == queen:
                    found.append(o)
                    if first_only:
                        return found
                break

    bishop = make_piece(by_color, BISHOP)
    for d in DIAGONAL:
        for o in RAYS[sq][d]:
            p = pieces[o]
            if p:
                if p == bishop or p == queen:
                    found.append(o)
                    if first_only:
                        return found
                break

    king = make_piece(by_color, KING)
    for o in KING_MOVES[sq]:
        if pieces[o] == king:
            found.append(o)
            if first_only:
                return found

    return found


def attacks_square(board: "Board", sq: int, by_color: int) -> bool:
    """Return True if any piece of ``by_color`` attacks ``sq``.

    Rays stop at the first occupied square regardless of colour. The square
    itself may be occupied by either side or empty.
    """
    return bool(_attackers(board.pieces, sq, by_color, True))


def in_check(board: "Board", color: int) -> bool:
    """Return True if the king of ``color`` is attacked."""
    return attacks_square(board, board.king_square[color], color ^ 1)


def checkers(board: "Board", color: int) -> List[int]:
    """Return the squares of every enemy piece giving check to ``color``."""
    return _attackers(board.pieces, board.king_square[color], color ^ 1, False)
