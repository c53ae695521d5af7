from __future__ import annotations

import pytest

from src.rules.board import Board, STARTPOS_FEN
from src.rules.perft import divide, perft


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
ENDGAME = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
PROMOTIONS = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
TALKCHESS = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


@pytest.mark.parametrize(
    ("depth", "expected"),
    [
        (0, 1),
        (1, 20),
        (2, 400),
        (3, 8902),
    ],
)
def test_startpos_perft(depth: int, expected: int) -> None:
    b = Board.from_fen(STARTPOS_FEN)
    assert perft(b, depth) == expected


@pytest.mark.slow
def test_startpos_perft_depth_4() -> None:
    assert perft(Board.startpos(), 4) == 197281


@pytest.mark.parametrize(
    ("fen", "depth", "expected"),
    [
        (KIWIPETE, 1, 48),
        (KIWIPETE, 2, 2039),
        (ENDGAME, 1, 14),
        (ENDGAME, 2, 191),
        (ENDGAME, 3, 2812),
        (PROMOTIONS, 1, 6),
        (PROMOTIONS, 2, 264),
        (TALKCHESS, 1, 44),
        (TALKCHESS, 2, 1486),
    ],
)
def test_known_positions(fen: str, depth: int, expected: int) -> None:
    assert perft(Board.from_fen(fen), depth) == expected


@pytest.mark.slow
@pytest.mark.parametrize(
    ("fen", "depth", "expected"),
    [
        (KIWIPETE, 3, 97862),
        (ENDGAME, 4, 43238),
        (PROMOTIONS, 3, 9467),
        (TALKCHESS, 3, 62379),
    ],
)
def test_known_positions_deep(fen: str, depth: int, expected: int) -> None:
    assert perft(Board.from_fen(fen), depth) == expected


def test_perft_leaves_board_unchanged() -> None:
    b = Board.from_fen(KIWIPETE)
    before = b.to_fen()
    before_hash = b.zobrist_hash
    perft(b, 2)
    assert b.to_fen() == before
    assert b.zobrist_hash == before_hash
    assert b.move_stack == []


def test_divide_sums_to_perft() -> None:
    b = Board.startpos()
    counts = divide(b, 2)
    assert len(counts) == 20
    assert all(n == 20 for n in counts.values())
    assert sum(counts.values()) == 400


def test_perft_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        perft(Board.startpos(), -1)
