"""Draw and game-over detection.

The fifty-move rule counts half-moves: the standard limit of fifty moves by
each side is 100 plies since the last pawn move or capture.

Insufficient material is a simplified rule, not the full FIDE definition:
only bare kings, king and one minor piece against a bare king, and king and
two knights against a bare king are drawn. Same-coloured bishops and other
dead positions are not detected.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from .pieces import BISHOP, KING, KNIGHT, color_of, type_of

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


FIFTY_MOVE_HALFMOVES = 100


def is_fifty_move_draw(board: "Board") -> bool:
    return board.halfmove_clock >= FIFTY_MOVE_HALFMOVES


def is_insufficient_material(board: "Board") -> bool:
    minors = [0, 0]
    knights = [0, 0]
    for p in board.pieces:
        if not p:
            continue
        kind = type_of(p)
        if kind == KING:
            continue
        if kind not in (KNIGHT, BISHOP):
            return False  # any pawn, rook or queen can still mate
        c = color_of(p)
        minors[c] += 1
        if kind == KNIGHT:
            knights[c] += 1
        if minors[c] > 2:
            return False

    total = minors[0] + minors[1]
    if total <= 1:
        return True
    if total == 2:
        # K+N+N vs bare K
        return knights[0] == 2 or knights[1] == 2
    return False


def is_threefold_repetition(board: "Board") -> bool:
    """Return True if the current position occurred twice before.

    Only positions with the same side to move and inside the window of the
    fifty-move counter can repeat, so the history is walked backwards in
    steps of two plies up to that bound.
    """
    history = board.hash_history
    current = history[-1]
    window = min(board.halfmove_clock, len(history) - 1)
    matches = 0
    for back in range(2, window + 1, 2):
        if history[-1 - back] == current:
            matches += 1
            if matches >= 2:
                return True
    return False


def is_draw(board: "Board") -> bool:
    return (
        is_fifty_move_draw(board)
        or is_insufficient_material(board)
        or is_threefold_repetition(board)
    )


def game_over(board: "Board") -> Optional[int]:
    """Return ``None`` while play continues, 0 for a draw, +1/-1 for a win.

    Checkmate is decided before the draw rules, so a mate delivered on the
    hundredth half-move still wins.
    """
    if not board.has_legal_moves():
        if board.in_check():
            return -board.color_to_move()
        return 0
    if is_draw(board):
        return 0
    return None
