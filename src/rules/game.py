from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .board import Board
from .errors import IllegalMove
from .move import Move, MoveKey, parse_uci


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around a board for callers outside the rules core.

    Responsibility: resolve user-selected moves against the legal list,
    apply and undo them, and report check / mate / draw state.
    """

    board: Board

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=Board.from_fen(fen))

    def to_fen(self) -> str:
        return self.board.to_fen()

    @property
    def move_stack(self) -> List[Move]:
        return self.board.move_stack

    def legal_moves(self) -> List[Move]:
        return self.board.legal_moves()

    def find_move(self, start: int, target: int, promotion: Optional[int] = None) -> Optional[Move]:
        return self.board.find_move(start, target, promotion)

    def apply_move(self, move: Union[Move, MoveKey, str]) -> Move:
        """Play ``move`` if it is legal in the current position.

        Args:
            move: A generated ``Move``, a ``MoveKey`` or a UCI string.

        Returns:
            Move: The concrete move that was played.

        Raises:
            IllegalMove: If no legal move matches.
            ValueError: If a UCI string cannot be parsed.
        """
        key = parse_uci(move) if isinstance(move, str) else move
        if isinstance(key, Move):
            key = key.key()
        found = self.board.find_move(key.start, key.target, key.promotion)
        if found is None:
            raise IllegalMove(uci=move if isinstance(move, str) else None)
        self.board.make_move(found)
        logger.debug("move applied", extra={"move": found.to_uci(), "fen": self.board.to_fen()})
        return found

    def undo_move(self) -> Move:
        if not self.board.move_stack:
            raise ValueError("no moves to undo")
        last = self.board.move_stack[-1]
        self.board.unmake_move(last)
        logger.debug("move undone", extra={"move": last.to_uci()})
        return last

    # --- State flags for protocol ---
    def color_to_move(self) -> int:
        return self.board.color_to_move()

    def in_check(self) -> bool:
        return self.board.in_check()

    def checkmate(self) -> bool:
        return self.board.is_checkmate()

    def stalemate(self) -> bool:
        return self.board.is_stalemate()

    def is_draw(self) -> bool:
        # Rule-based draws and stalemate
        return self.board.is_draw() or self.stalemate()

    def game_over(self) -> Optional[int]:
        return self.board.game_over()

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.board.move_stack]
