from __future__ import annotations

from typing import TYPE_CHECKING

from .attacks import attacks_square, in_check
from .move import Move, MoveKind
from .pieces import EMPTY, KING, WHITE, make_piece, type_of

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


def en_passant_capture_square(move: Move) -> int:
    """Square of the pawn removed by an en-passant ``move`` (behind target)."""
    return move.target - 8 if move.color == WHITE else move.target + 8


def castling_transit_squares(move: Move) -> tuple[int, int]:
    """Squares the king crosses and lands on when castling."""
    rank_base = move.start & ~7
    if move.target > move.start:
        return rank_base + 5, rank_base + 6
    return rank_base + 3, rank_base + 2


def is_legal(board: "Board", move: Move) -> bool:
    """Return True if ``move`` does not leave the mover's king in check.

    ``move`` must be pseudo-legal in the current position. Probing touches
    only the piece array and king cache and is reverted before returning.
    A positive answer is cached on the move.
    """
    if move.legal:
        return True

    color = move.color
    if move.kind is MoveKind.CASTLE:
        enemy = color ^ 1
        if in_check(board, color):
            return False
        for sq in castling_transit_squares(move):
            if attacks_square(board, sq, enemy):
                return False
        move.legal = True
        return True

    pieces = board.pieces
    start, target = move.start, move.target
    placed = make_piece(color, move.promotion) if move.kind is MoveKind.PROMOTION else move.moving
    is_king = type_of(move.moving) == KING

    pieces[start] = EMPTY
    pieces[target] = placed
    ep_sq = -1
    if move.kind is MoveKind.EN_PASSANT:
        ep_sq = en_passant_capture_square(move)
        pieces[ep_sq] = EMPTY
    if is_king:
        board.king_square[color] = target

    legal = not in_check(board, color)

    pieces[start] = move.moving
    if ep_sq >= 0:
        pieces[target] = EMPTY
        pieces[ep_sq] = move.captured
    else:
        pieces[target] = move.captured
    if is_king:
        board.king_square[color] = start

    if legal:
        move.legal = True
    return legal
