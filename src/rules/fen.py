from __future__ import annotations

from typing import List, Optional

from .attacks import in_check
from .board import Board, STARTPOS_FEN
from .errors import InvalidSquareReference, MalformedInput
from .move import square_to_str, str_to_square
from .pieces import (
    BLACK,
    HELD,
    KING,
    KINGSIDE,
    NO_RIGHTS,
    PAWN,
    PIECE_TO_CHAR,
    QUEENSIDE,
    ROOK,
    WHITE,
    char_to_piece,
    make_piece,
    type_of,
)
from .zobrist import compute_hash_from_scratch


__all__ = ["STARTPOS_FEN", "parse_fen", "serialize_fen"]

CASTLING_ORDER = (("K", WHITE, KINGSIDE), ("Q", WHITE, QUEENSIDE), ("k", BLACK, KINGSIDE), ("q", BLACK, QUEENSIDE))


def _parse_placement(placement: str) -> List[int]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedInput("placement", f"expected 8 ranks, got {len(ranks)}")
    pieces = [0] * 64
    for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
        file_idx = 0
        for ch in rank:
            if ch in "0123456789":
                n = int(ch)
                if n < 1 or n > 8:
                    raise MalformedInput("placement", f"invalid empty count {ch!r} in rank {rank_idx + 1}")
                file_idx += n
            else:
                try:
                    piece = char_to_piece(ch)
                except KeyError:
                    raise MalformedInput("placement", f"invalid piece {ch!r}") from None
                if file_idx >= 8:
                    raise MalformedInput("placement", f"rank {rank_idx + 1} has more than 8 squares")
                pieces[rank_idx * 8 + file_idx] = piece
                file_idx += 1
            if file_idx > 8:
                raise MalformedInput("placement", f"rank {rank_idx + 1} has more than 8 squares")
        if file_idx != 8:
            raise MalformedInput("placement", f"rank {rank_idx + 1} does not sum to 8 squares")
    return pieces


def _find_kings(pieces: List[int]) -> List[int]:
    kings: List[int] = []
    for color in (WHITE, BLACK):
        squares = [sq for sq, p in enumerate(pieces) if p == make_piece(color, KING)]
        if len(squares) != 1:
            name = "white" if color == WHITE else "black"
            raise MalformedInput("placement", f"expected exactly one {name} king, found {len(squares)}")
        kings.append(squares[0])
    return kings


def _parse_castling(field: str, pieces: List[int]) -> List[List[int]]:
    lost = [[NO_RIGHTS, NO_RIGHTS], [NO_RIGHTS, NO_RIGHTS]]
    if field == "-":
        return lost
    for ch in field:
        if ch not in "KQkq":
            raise MalformedInput("castling", f"invalid castling character {ch!r}")
    for ch, color, side in CASTLING_ORDER:
        if ch not in field:
            continue
        base = 56 * color
        rook_sq = base + (7 if side == KINGSIDE else 0)
        # A right only exists while king and rook stand on their home squares
        if pieces[base + 4] == make_piece(color, KING) and pieces[rook_sq] == make_piece(color, ROOK):
            lost[color][side] = HELD
    return lost


def _parse_en_passant(field: str, color: int) -> Optional[int]:
    if field == "-":
        return None
    try:
        sq = str_to_square(field)
    except InvalidSquareReference as e:
        raise MalformedInput("en_passant", str(e)) from e
    # Target sits behind a pawn that just double-pushed: rank 6 if white moves, else rank 3
    expected_rank = 5 if color == WHITE else 2
    if sq // 8 != expected_rank:
        raise MalformedInput("en_passant", f"target {field!r} is not on rank {expected_rank + 1}")
    return sq


def _parse_counter(field: str, name: str, minimum: int) -> int:
    if not (field.isascii() and field.isdigit()):
        raise MalformedInput(name, f"expected a non-negative integer, got {field!r}")
    value = int(field)
    if value < minimum:
        raise MalformedInput(name, f"must be >= {minimum}, got {value}")
    return value


def parse_fen(fen: str) -> Board:
    """Create a board from a Forsyth–Edwards Notation (FEN) string.

    Args:
        fen (str): Six space-separated fields: placement, active colour,
            castling availability, en-passant target, halfmove clock and
            fullmove number.

    Returns:
        Board: A fresh board with an empty move history.

    Raises:
        MalformedInput: If any field is malformed or out of range. The
            ``field`` attribute names the offending field; no partially
            built board is returned.
    """
    if not fen or not isinstance(fen, str):
        raise MalformedInput("fen", "FEN must be a non-empty string")
    parts = fen.split()
    if len(parts) != 6:
        raise MalformedInput("fen", f"expected 6 fields, got {len(parts)}")
    placement, stm, castling, ep, halfmove, fullmove = parts

    pieces = _parse_placement(placement)
    kings = _find_kings(pieces)
    for sq in list(range(8)) + list(range(56, 64)):
        if type_of(pieces[sq]) == PAWN:
            raise MalformedInput("placement", f"pawn on back rank square {square_to_str(sq)}")

    if stm not in ("w", "b"):
        raise MalformedInput("active_color", f"side to move must be 'w' or 'b', got {stm!r}")
    color = WHITE if stm == "w" else BLACK

    castling_lost = _parse_castling(castling, pieces)
    ep_square = _parse_en_passant(ep, color)
    halfmove_clock = _parse_counter(halfmove, "halfmove_clock", 0)
    fullmove_number = _parse_counter(fullmove, "fullmove_number", 1)

    board = Board(
        pieces=pieces,
        total_halfmoves=2 * (fullmove_number - 1) + color,
        castling_lost=castling_lost,
        king_square=kings,
        ep_history=[ep_square],
        fifty_history=[halfmove_clock],
    )
    if in_check(board, color ^ 1):
        raise MalformedInput("placement", "side not to move is in check")

    board.zobrist_hash = compute_hash_from_scratch(board)
    board.hash_history.append(board.zobrist_hash)
    return board


def serialize_fen(board: Board) -> str:
    """Serialize ``board`` into FEN.

    Placement, active colour, castling (``KQkq`` order) and en passant are an
    exact inverse of ``parse_fen``; the clock and move number come from the
    current counters.
    """
    ranks_str: List[str] = []
    for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
        run = 0
        row = []
        for file_idx in range(8):
            p = board.pieces[rank_idx * 8 + file_idx]
            if not p:
                run += 1
                continue
            if run > 0:
                row.append(str(run))
                run = 0
            row.append(PIECE_TO_CHAR[p])
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    placement = "/".join(ranks_str)

    castling = "".join(ch for ch, color, side in CASTLING_ORDER if board.has_castling_right(color, side))
    ep = square_to_str(board.ep_square) if board.ep_square is not None else "-"
    return (
        f"{placement} {board.side_to_move} {castling or '-'} {ep} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
