from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from .errors import IllegalOperation
from .legality import en_passant_capture_square
from .move import Move, MoveKind
from .pieces import EMPTY, HELD, KING, KINGSIDE, PAWN, QUEENSIDE, ROOK, make_piece, type_of
from .zobrist import MASK64, ZOBRIST

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


logger = logging.getLogger(__name__)

# Rook home squares per colour: [KINGSIDE, QUEENSIDE]
ROOK_HOMES = ((7, 0), (63, 56))


def castling_rook_squares(move: Move) -> tuple[int, int]:
    """Return ``(rook_from, rook_to)`` for a castling move."""
    rank_base = move.target & ~7
    if move.target % 8 < 4:
        return rank_base, rank_base + 3
    return rank_base + 7, rank_base + 5


def _placed_piece(move: Move) -> int:
    if move.kind is MoveKind.PROMOTION:
        return make_piece(move.color, move.promotion)
    return move.moving


def make_move(board: "Board", move: Move) -> None:
    """Apply ``move`` to ``board`` in place.

    ``move`` must be legal in the current position (normally taken from
    ``board.legal_moves()``). Updates pieces, king cache, hash and hash
    history, counters, en-passant target and castling rights, and pushes the
    move for ``unmake_move``.
    """
    pieces = board.pieces
    color = move.color
    enemy = color ^ 1
    start, target = move.start, move.target
    placed = _placed_piece(move)
    h = board.zobrist_hash ^ ZOBRIST.side_to_move

    # Piece array and piece-square keys
    pieces[start] = EMPTY
    h ^= ZOBRIST.piece(move.moving, start)
    if move.kind is MoveKind.EN_PASSANT:
        cap_sq = en_passant_capture_square(move)
        pieces[cap_sq] = EMPTY
        h ^= ZOBRIST.piece(move.captured, cap_sq)
    elif move.captured:
        h ^= ZOBRIST.piece(move.captured, target)
    pieces[target] = placed
    h ^= ZOBRIST.piece(placed, target)

    if move.kind is MoveKind.CASTLE:
        rook_from, rook_to = castling_rook_squares(move)
        rook = pieces[rook_from]
        pieces[rook_to] = rook
        pieces[rook_from] = EMPTY
        h ^= ZOBRIST.piece(rook, rook_from) ^ ZOBRIST.piece(rook, rook_to)

    moving_type = type_of(move.moving)
    if moving_type == KING:
        board.king_square[color] = target

    # Counters
    board.total_halfmoves += 1
    ply = board.total_halfmoves
    if move.captured or moving_type == PAWN:
        board.fifty_history.append(0)
    else:
        board.fifty_history.append(board.fifty_history[-1] + 1)

    if moving_type == PAWN and abs(target - start) == 16:
        board.ep_history.append((start + target) // 2)
    else:
        board.ep_history.append(None)

    # Castling rights, stamped with the half-move at which they were lost
    lost = board.castling_lost
    for side in (KINGSIDE, QUEENSIDE):
        if lost[color][side] == HELD and (
            moving_type == KING or (moving_type == ROOK and start == ROOK_HOMES[color][side])
        ):
            lost[color][side] = ply
            h ^= ZOBRIST.castling[color][side]
        if lost[enemy][side] == HELD and target == ROOK_HOMES[enemy][side]:
            lost[enemy][side] = ply
            h ^= ZOBRIST.castling[enemy][side]

    h &= MASK64
    board.zobrist_hash = h
    board.hash_history.append(h)
    board.move_stack.append(move)
    board._legal_cache = None


def unmake_move(board: "Board", move: Optional[Move] = None) -> None:
    """Revert the most recently made move.

    Args:
        board (Board): Board to restore.
        move (Optional[Move]): The move being undone; when given it must equal
            the top of ``board.move_stack``. Defaults to that top move.

    Raises:
        IllegalOperation: If no move has been made, ``move`` is not the most
            recent one, or the restored hash does not match history. The
            board must be discarded in the last case.
    """
    if not board.move_stack:
        raise IllegalOperation("unmake called with no prior move")
    last = board.move_stack[-1]
    if move is not None and move is not last and move != last:
        raise IllegalOperation(f"unmake of {move.to_uci()} but last move was {last.to_uci()}")
    move = last

    pieces = board.pieces
    color = move.color
    start, target = move.start, move.target
    placed = _placed_piece(move)
    h = board.zobrist_hash ^ ZOBRIST.side_to_move

    pieces[start] = move.moving
    h ^= ZOBRIST.piece(move.moving, start)
    h ^= ZOBRIST.piece(placed, target)
    if move.kind is MoveKind.EN_PASSANT:
        cap_sq = en_passant_capture_square(move)
        pieces[target] = EMPTY
        pieces[cap_sq] = move.captured
        h ^= ZOBRIST.piece(move.captured, cap_sq)
    else:
        pieces[target] = move.captured
        if move.captured:
            h ^= ZOBRIST.piece(move.captured, target)

    if move.kind is MoveKind.CASTLE:
        rook_from, rook_to = castling_rook_squares(move)
        rook = pieces[rook_to]
        pieces[rook_from] = rook
        pieces[rook_to] = EMPTY
        h ^= ZOBRIST.piece(rook, rook_from) ^ ZOBRIST.piece(rook, rook_to)

    if type_of(move.moving) == KING:
        board.king_square[color] = start

    # Only rights lost on exactly this half-move come back
    ply = board.total_halfmoves
    for c in range(2):
        for side in (KINGSIDE, QUEENSIDE):
            if board.castling_lost[c][side] == ply:
                board.castling_lost[c][side] = HELD
                h ^= ZOBRIST.castling[c][side]

    board.total_halfmoves -= 1
    board.fifty_history.pop()
    board.ep_history.pop()
    board.hash_history.pop()
    board.move_stack.pop()
    board._legal_cache = None

    h &= MASK64
    board.zobrist_hash = h
    if board.hash_history[-1] != h:
        logger.critical(
            "zobrist divergence after unmake",
            extra={"move": move.to_uci(), "expected": board.hash_history[-1], "actual": h},
        )
        raise IllegalOperation(f"hash mismatch after unmaking {move.to_uci()}")
