from __future__ import annotations

from typing import List, TYPE_CHECKING

from .pieces import BLACK, KINGSIDE, QUEENSIDE, color_of, type_of

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


MASK64 = 0xFFFFFFFFFFFFFFFF


class _SplitMix64:
    def __init__(self, seed: int) -> None:
        self.state = seed & MASK64

    def next(self) -> int:
        # Deterministic 64-bit SplitMix64
        self.state = (self.state + 0x9E3779B97F4A7C15) & MASK64
        z = self.state
        z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & MASK64
        z = (z ^ (z >> 27)) * 0x94D049BB133111EB & MASK64
        z = z ^ (z >> 31)
        return z & MASK64


class Zobrist:
    """Zobrist hashing keys.

    Table layout:
    - piece_square[2][6][64]: colour, piece type - 1, square
    - castling[2][2]: colour, KINGSIDE / QUEENSIDE
    - side_to_move: toggled while black is to move

    The en-passant target is not part of the key; repetition
    detection compares piece placement, side to move and castling rights.
    """

    piece_square: List[List[List[int]]]
    castling: List[List[int]]
    side_to_move: int

    def __init__(self, seed: int = 0xC0FFEE_F00D_DEAD) -> None:
        prng = _SplitMix64(seed)
        self.piece_square = [[[prng.next() for _ in range(64)] for _ in range(6)] for _ in range(2)]
        self.castling = [[prng.next() for _ in range(2)] for _ in range(2)]
        self.side_to_move = prng.next()

    def piece(self, piece: int, sq: int) -> int:
        """Return the key for piece code ``piece`` standing on ``sq``."""
        return self.piece_square[color_of(piece)][type_of(piece) - 1][sq]


# Global deterministic table
ZOBRIST = Zobrist()


def compute_hash_from_scratch(board: "Board") -> int:
    """Compute the 64-bit Zobrist hash of ``board`` from its raw state.

    Used to seed the incremental hash after FEN parsing and as ground truth
    when verifying make/unmake.
    """
    h = 0
    for sq, piece in enumerate(board.pieces):
        if piece:
            h ^= ZOBRIST.piece(piece, sq)
    if board.color == BLACK:
        h ^= ZOBRIST.side_to_move
    for color in range(2):
        for side in (KINGSIDE, QUEENSIDE):
            if board.has_castling_right(color, side):
                h ^= ZOBRIST.castling[color][side]
    return h & MASK64
