from __future__ import annotations

from typing import Dict, Tuple

from .board import Board
from .errors import IllegalOperation
from .zobrist import compute_hash_from_scratch


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for ``board`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    The board is walked in place with make/unmake and restored on return.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = board.legal_moves()
    if depth == 1:
        return len(moves)

    nodes = 0
    for m in list(moves):
        board.make_move(m)
        nodes += perft(board, depth - 1)
        board.unmake_move(m)
    return nodes


def divide(board: Board, depth: int) -> Dict[str, int]:
    """Return perft(depth - 1) per root move, keyed by UCI string."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    out: Dict[str, int] = {}
    for m in list(board.legal_moves()):
        board.make_move(m)
        out[m.to_uci()] = perft(board, depth - 1)
        board.unmake_move(m)
    return out


Snapshot = Tuple[object, ...]


def snapshot(board: Board) -> Snapshot:
    """Capture every field make/unmake must restore, by value."""
    return (
        tuple(board.pieces),
        tuple(tuple(s) for s in board.castling_lost),
        tuple(board.king_square),
        board.total_halfmoves,
        tuple(board.ep_history),
        tuple(board.fifty_history),
        board.zobrist_hash,
        tuple(board.hash_history),
        len(board.move_stack),
    )


def perft_checked(board: Board, depth: int) -> int:
    """Perft that verifies every make/unmake pair.

    After each make the incremental hash is compared against a from-scratch
    hash, and after each unmake the full board snapshot must match the one
    taken before the make.

    Raises:
        IllegalOperation: On the first divergence found.
    """
    if depth == 0:
        return 1
    nodes = 0
    for m in list(board.legal_moves()):
        before = snapshot(board)
        board.make_move(m)
        if board.zobrist_hash != compute_hash_from_scratch(board):
            raise IllegalOperation(f"incremental hash diverged after {m.to_uci()}")
        nodes += perft_checked(board, depth - 1)
        board.unmake_move(m)
        if snapshot(board) != before:
            raise IllegalOperation(f"state not restored after unmaking {m.to_uci()}")
    return nodes
