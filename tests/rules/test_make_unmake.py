from __future__ import annotations

import pytest

from src.rules.board import Board, STARTPOS_FEN
from src.rules.errors import IllegalOperation
from src.rules.perft import perft_checked, snapshot


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.mark.parametrize(
    ("fen", "depth", "expected"),
    [
        (STARTPOS_FEN, 3, 8902),
        (KIWIPETE, 2, 2039),
        ("8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1", 3, 2812),
    ],
)
def test_make_unmake_restores_every_field(fen: str, depth: int, expected: int) -> None:
    b = Board.from_fen(fen)
    before = snapshot(b)
    assert perft_checked(b, depth) == expected
    assert snapshot(b) == before


def test_state_updates_after_quiet_and_pawn_moves() -> None:
    b = Board.startpos()
    b.make_move(b.find_uci("g1f3"))
    assert b.halfmove_clock == 1
    assert b.total_halfmoves == 1
    b.make_move(b.find_uci("e7e5"))
    assert b.halfmove_clock == 0
    assert b.fullmove_number == 2
    assert len(b.hash_history) == 3
    assert len(b.fifty_history) == 3
    assert len(b.ep_history) == 3
    assert [m.to_uci() for m in b.move_stack] == ["g1f3", "e7e5"]


def test_capture_resets_halfmove_clock() -> None:
    b = Board.from_fen("4k3/8/8/3p4/8/2N5/8/4K3 w - - 12 30")
    b.make_move(b.find_uci("c3d5"))
    assert b.halfmove_clock == 0
    b.unmake_move()
    assert b.halfmove_clock == 12


def test_unmake_without_make_raises() -> None:
    b = Board.startpos()
    with pytest.raises(IllegalOperation):
        b.unmake_move()


def test_unmake_of_other_move_raises() -> None:
    b = Board.startpos()
    e4 = b.find_uci("e2e4")
    d4 = b.find_uci("d2d4")
    b.make_move(e4)
    with pytest.raises(IllegalOperation):
        b.unmake_move(d4)


def test_hash_divergence_is_fatal() -> None:
    b = Board.startpos()
    b.make_move(b.find_uci("e2e4"))
    b.zobrist_hash ^= 1
    with pytest.raises(IllegalOperation):
        b.unmake_move()
