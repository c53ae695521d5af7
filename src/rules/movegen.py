"""Legal move generation.

Generation runs in two phases. ``analyze_king`` looks outward from the king
of the side to move and records how many enemy pieces give check, which
squares would resolve a single check, and which friendly pieces are pinned.
``generate_legal_moves`` then emits moves per piece, marking every move whose
legality follows from that analysis as proven. Only king steps, castling and
en passant (and nothing else) go through ``legality.is_legal``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Set, TYPE_CHECKING

from .attacks import pawn_attackers_of
from .legality import en_passant_capture_square, is_legal
from .move import Move, MoveKind
from .pieces import (
    BISHOP,
    EMPTY,
    KING,
    KINGSIDE,
    KNIGHT,
    PAWN,
    PROMOTION_TYPES,
    QUEEN,
    QUEENSIDE,
    ROOK,
    WHITE,
    color_of,
    make_piece,
    type_of,
)
from .tables import DIAGONAL, KING_MOVES, KNIGHT_MOVES, ORTHOGONAL, RAYS


if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


ALL_DIRECTIONS = ORTHOGONAL + DIAGONAL
SLIDER_DIRECTIONS = {BISHOP: DIAGONAL, ROOK: ORTHOGONAL, QUEEN: ALL_DIRECTIONS}


@dataclass
class KingSafety:
    """Check and pin analysis for the side to move.

    Attributes:
        checks (int): Number of enemy pieces giving check.
        block_squares (Set[int]): With exactly one check, the squares on
            which a friendly piece captures the checker or interposes.
        pins (Dict[int, FrozenSet[int]]): Pinned friendly piece square to the
            squares of its pin ray (up to and including the pinner).
    """

    checks: int = 0
    block_squares: Set[int] = field(default_factory=set)
    pins: Dict[int, FrozenSet[int]] = field(default_factory=dict)


def analyze_king(board: "Board") -> KingSafety:
    color = board.color
    enemy = color ^ 1
    pieces = board.pieces
    king_sq = board.king_square[color]
    safety = KingSafety()

    e_queen = make_piece(enemy, QUEEN)
    for d in ALL_DIRECTIONS:
        slider = make_piece(enemy, ROOK if d in ORTHOGONAL else BISHOP)
        path: List[int] = []
        pinned = -1
        for sq in RAYS[king_sq][d]:
            path.append(sq)
            p = pieces[sq]
            if not p:
                continue
            if color_of(p) == color:
                if pinned >= 0:
                    break  # two friendly pieces: no pin on this ray
                pinned = sq
                continue
            if p == slider or p == e_queen:
                if pinned < 0:
                    safety.checks += 1
                    safety.block_squares.update(path)
                else:
                    safety.pins[pinned] = frozenset(path)
            break

    e_knight = make_piece(enemy, KNIGHT)
    for sq in KNIGHT_MOVES[king_sq]:
        if pieces[sq] == e_knight:
            safety.checks += 1
            safety.block_squares.add(sq)

    e_pawn = make_piece(enemy, PAWN)
    for sq in pawn_attackers_of(king_sq, enemy):
        if pieces[sq] == e_pawn:
            safety.checks += 1
            safety.block_squares.add(sq)

    return safety


def _add_pawn_move(out: List[Move], start: int, target: int, moving: int, captured: int) -> None:
    rank = target // 8
    if rank == 7 or rank == 0:
        for promo in PROMOTION_TYPES:
            out.append(Move(start, target, moving, captured, MoveKind.PROMOTION, promo))
    else:
        out.append(Move(start, target, moving, captured))


def _pawn_moves(pieces: List[int], sq: int, color: int, out: List[Move]) -> None:
    # Pawns never stand on the first or last rank, so ``ahead`` is on the board.
    moving = pieces[sq]
    step = 8 if color == WHITE else -8
    start_rank = 1 if color == WHITE else 6
    f = sq % 8
    ahead = sq + step

    if not pieces[ahead]:
        _add_pawn_move(out, sq, ahead, moving, EMPTY)
        if sq // 8 == start_rank and not pieces[ahead + step]:
            out.append(Move(sq, ahead + step, moving))

    if f > 0:
        victim = pieces[ahead - 1]
        if victim and color_of(victim) != color:
            _add_pawn_move(out, sq, ahead - 1, moving, victim)
    if f < 7:
        victim = pieces[ahead + 1]
        if victim and color_of(victim) != color:
            _add_pawn_move(out, sq, ahead + 1, moving, victim)


def _jump_moves(pieces: List[int], sq: int, color: int, targets, out: List[Move]) -> None:
    moving = pieces[sq]
    for t in targets:
        p = pieces[t]
        if not p or color_of(p) != color:
            out.append(Move(sq, t, moving, p))


def _slider_moves(pieces: List[int], sq: int, color: int, directions, out: List[Move]) -> None:
    moving = pieces[sq]
    rays = RAYS[sq]
    for d in directions:
        for t in rays[d]:
            p = pieces[t]
            if p:
                if color_of(p) != color:
                    out.append(Move(sq, t, moving, p))
                break
            out.append(Move(sq, t, moving))


def piece_moves(board: "Board", sq: int, out: List[Move]) -> None:
    """Append pseudo-legal moves of the piece on ``sq`` (no castling/en passant)."""
    pieces = board.pieces
    piece = pieces[sq]
    color = color_of(piece)
    kind = type_of(piece)
    if kind == PAWN:
        _pawn_moves(pieces, sq, color, out)
    elif kind == KNIGHT:
        _jump_moves(pieces, sq, color, KNIGHT_MOVES[sq], out)
    elif kind == KING:
        _jump_moves(pieces, sq, color, KING_MOVES[sq], out)
    else:
        _slider_moves(pieces, sq, color, SLIDER_DIRECTIONS[kind], out)


def castling_candidates(board: "Board") -> List[Move]:
    """Castling moves with rights held and an empty path; not yet checked for attacks."""
    color = board.color
    pieces = board.pieces
    base = 56 * color
    king = make_piece(color, KING)
    out: List[Move] = []
    if board.king_square[color] != base + 4:
        return out
    if board.has_castling_right(color, KINGSIDE) and not pieces[base + 5] and not pieces[base + 6]:
        out.append(Move(base + 4, base + 6, king, EMPTY, MoveKind.CASTLE))
    if (
        board.has_castling_right(color, QUEENSIDE)
        and not pieces[base + 1]
        and not pieces[base + 2]
        and not pieces[base + 3]
    ):
        out.append(Move(base + 4, base + 2, king, EMPTY, MoveKind.CASTLE))
    return out


def en_passant_candidates(board: "Board") -> List[Move]:
    ep = board.ep_square
    out: List[Move] = []
    if ep is None or board.pieces[ep]:
        return out
    color = board.color
    pawn = make_piece(color, PAWN)
    victim = make_piece(color ^ 1, PAWN)
    for s in pawn_attackers_of(ep, color):
        if board.pieces[s] == pawn:
            mv = Move(s, ep, pawn, victim, MoveKind.EN_PASSANT)
            if board.pieces[en_passant_capture_square(mv)] == victim:
                out.append(mv)
    return out


def generate_pseudo_legal_moves(board: "Board") -> List[Move]:
    """Every move obeying piece movement rules, ignoring own-king safety
    (castling still requires rights and an empty path)."""
    color = board.color
    pieces = board.pieces
    moves: List[Move] = []
    for sq in range(64):
        p = pieces[sq]
        if p and color_of(p) == color:
            piece_moves(board, sq, moves)
    moves.extend(castling_candidates(board))
    moves.extend(en_passant_candidates(board))
    return moves


def generate_legal_moves_reference(board: "Board") -> List[Move]:
    """Exhaustive generate-then-filter; slow, used to cross-check the fast path."""
    return [m for m in generate_pseudo_legal_moves(board) if is_legal(board, m)]


def generate_legal_moves(board: "Board") -> List[Move]:
    """Return all legal moves for the side to move.

    The board is left unchanged. Order of the returned moves is unspecified.
    """
    color = board.color
    pieces = board.pieces
    king_sq = board.king_square[color]
    safety = analyze_king(board)
    moves: List[Move] = []

    king_steps: List[Move] = []
    _jump_moves(pieces, king_sq, color, KING_MOVES[king_sq], king_steps)
    for m in king_steps:
        if is_legal(board, m):
            moves.append(m)

    if safety.checks >= 2:
        return moves

    single_check = safety.checks == 1
    block = safety.block_squares
    pins = safety.pins
    candidates: List[Move] = []
    for sq in range(64):
        p = pieces[sq]
        if not p or sq == king_sq or color_of(p) != color:
            continue
        ray = pins.get(sq)
        if single_check:
            if ray is not None:
                continue  # a pinned piece can never resolve a check
            candidates.clear()
            piece_moves(board, sq, candidates)
            for m in candidates:
                if m.target in block:
                    m.legal = True
                    moves.append(m)
        else:
            if ray is not None and type_of(p) == KNIGHT:
                continue
            candidates.clear()
            piece_moves(board, sq, candidates)
            for m in candidates:
                if ray is None or m.target in ray:
                    m.legal = True
                    moves.append(m)

    if not single_check:
        for m in castling_candidates(board):
            if is_legal(board, m):
                moves.append(m)

    for m in en_passant_candidates(board):
        if single_check and en_passant_capture_square(m) not in block and m.target not in block:
            continue
        if is_legal(board, m):
            moves.append(m)

    return moves
