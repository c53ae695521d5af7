from __future__ import annotations

from src.rules.board import Board
from src.rules.zobrist import ZOBRIST, compute_hash_from_scratch


def _play(b: Board, *ucis: str) -> None:
    for uci in ucis:
        mv = b.find_uci(uci)
        assert mv is not None, uci
        b.make_move(mv)


def test_keys_are_distinct_and_nonzero() -> None:
    keys = [k for color in ZOBRIST.piece_square for kind in color for k in kind]
    keys += [k for color in ZOBRIST.castling for k in color]
    keys.append(ZOBRIST.side_to_move)
    assert all(keys)
    assert len(set(keys)) == len(keys)


def test_incremental_hash_matches_scratch() -> None:
    b = Board.from_fen("r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1")
    _play(b, "e1g1", "h3g2", "d5e6", "e8c8")
    assert b.zobrist_hash == compute_hash_from_scratch(b)


def test_transpositions_share_hash() -> None:
    a = Board.startpos()
    _play(a, "g1f3", "g8f6", "b1c3")
    b = Board.startpos()
    _play(b, "b1c3", "g8f6", "g1f3")
    assert a.zobrist_hash == b.zobrist_hash


def test_hash_matches_parsed_fen() -> None:
    b = Board.startpos()
    _play(b, "e2e4", "c7c5", "g1f3")
    assert b.zobrist_hash == Board.from_fen(b.to_fen()).zobrist_hash


def test_side_to_move_changes_hash() -> None:
    w = Board.from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
    b = Board.from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
    assert w.zobrist_hash ^ b.zobrist_hash == ZOBRIST.side_to_move
