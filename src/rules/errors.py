from __future__ import annotations

from typing import Optional


class ChessRulesError(Exception):
    """Base class for all errors raised by the rules package."""


class InvalidSquareReference(ChessRulesError, ValueError):
    """Algebraic square outside ``[a-h][1-8]`` or index outside ``0..63``."""


class MalformedInput(ChessRulesError, ValueError):
    """A FEN string is structurally or semantically invalid.

    Attributes:
        field (str): Name of the offending FEN field (``placement``,
            ``active_color``, ``castling``, ``en_passant``,
            ``halfmove_clock``, ``fullmove_number``) or ``fen`` when the
            string as a whole is unusable.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class IllegalMove(ChessRulesError, ValueError):
    """A requested move is not among the legal moves of the position."""

    def __init__(self, message: str = "illegal move", uci: Optional[str] = None) -> None:
        super().__init__(message)
        self.uci = uci


class IllegalOperation(ChessRulesError, RuntimeError):
    """Internal consistency fault: the board state can no longer be trusted.

    Raised on unmake without a prior make, on unmake of a move other than the
    most recent one, and when the incrementally maintained hash diverges from
    the recorded history. Callers must not try to recover from it.
    """
