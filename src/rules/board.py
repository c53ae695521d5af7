from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from . import attacks, draw, makemove, movegen
from .move import Move, MoveKey, parse_uci
from .pieces import BLACK, HELD


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@dataclass
class Board:
    """Mutable chess position with per-ply history for make/unmake.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - ``pieces`` holds 4-bit piece codes (see ``pieces.py``), 0 for empty.
    - Side to move is the parity of ``total_halfmoves``.
    - ``ep_history``, ``fifty_history`` and ``hash_history`` grow by one entry
      per ply; the last entry describes the current position.
    - Not thread-safe: confine a board to one thread.
    """

    pieces: List[int]
    total_halfmoves: int
    castling_lost: List[List[int]]  # [colour][KINGSIDE/QUEENSIDE]
    king_square: List[int]  # [colour]
    ep_history: List[Optional[int]]
    fifty_history: List[int]
    zobrist_hash: int = 0
    hash_history: List[int] = field(default_factory=list, repr=False)
    move_stack: List[Move] = field(default_factory=list, repr=False)
    _legal_cache: Optional[List[Move]] = field(default=None, repr=False, compare=False)

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str = STARTPOS_FEN) -> "Board":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Raises:
            MalformedInput: If any of the six FEN fields is invalid; the
                exception's ``field`` names the offending one.
        """
        from .fen import parse_fen

        return parse_fen(fen)

    def to_fen(self) -> str:
        """Serialize the current position into a normalized FEN string."""
        from .fen import serialize_fen

        return serialize_fen(self)

    as_fen = to_fen

    # --- Derived state ---
    @property
    def color(self) -> int:
        """Colour index to move: ``WHITE`` (0) or ``BLACK`` (1)."""
        return self.total_halfmoves & 1

    @property
    def side_to_move(self) -> str:
        return "b" if self.color == BLACK else "w"

    def color_to_move(self) -> int:
        """Return +1 when white is to move and -1 when black is."""
        return 1 - 2 * self.color

    @property
    def ep_square(self) -> Optional[int]:
        return self.ep_history[-1]

    @property
    def halfmove_clock(self) -> int:
        return self.fifty_history[-1]

    @property
    def fullmove_number(self) -> int:
        return self.total_halfmoves // 2 + 1

    def has_castling_right(self, color: int, side: int) -> bool:
        return self.castling_lost[color][side] == HELD

    # --- Move generation ---
    def legal_moves(self) -> List[Move]:
        """Return the legal moves for the side to move.

        The list is cached until the next make/unmake; callers must not
        mutate it.
        """
        if self._legal_cache is None:
            self._legal_cache = movegen.generate_legal_moves(self)
        return self._legal_cache

    generate_legal_moves = legal_moves

    def find_move(self, start: int, target: int, promotion: Optional[int] = None) -> Optional[Move]:
        """Resolve ``(start, target[, promotion])`` to a concrete legal move.

        Returns:
            Optional[Move]: The matching legal move, or ``None``. A pawn
                reaching the last rank needs ``promotion`` to match.
        """
        for m in self.legal_moves():
            if m.start == start and m.target == target and (m.promotion or None) == promotion:
                return m
        return None

    def find_uci(self, uci: str) -> Optional[Move]:
        key: MoveKey = parse_uci(uci)
        return self.find_move(key.start, key.target, key.promotion)

    def has_legal_moves(self) -> bool:
        return bool(self.legal_moves())

    # --- Mutation ---
    def make_move(self, move: Move) -> None:
        """Apply a legal ``move`` in place. See ``makemove.make_move``."""
        makemove.make_move(self, move)

    def unmake_move(self, move: Optional[Move] = None) -> None:
        """Revert the most recent move. See ``makemove.unmake_move``."""
        makemove.unmake_move(self, move)

    # --- Status helpers ---
    def in_check(self, color: Optional[int] = None) -> bool:
        """Return True if ``color`` (default: side to move) is in check."""
        return attacks.in_check(self, self.color if color is None else color)

    def is_checkmate(self) -> bool:
        return not self.has_legal_moves() and self.in_check()

    def is_stalemate(self) -> bool:
        return not self.has_legal_moves() and not self.in_check()

    def is_draw(self) -> bool:
        return draw.is_draw(self)

    def game_over(self) -> Optional[int]:
        """Return ``None`` while play continues, else 0 / +1 / -1.

        0 is a draw (including stalemate); +1 white wins; -1 black wins.
        """
        return draw.game_over(self)
