from __future__ import annotations

import pytest

from src.rules.board import Board, STARTPOS_FEN
from src.rules.errors import MalformedInput
from src.rules.fen import parse_fen, serialize_fen
from src.rules.pieces import BLACK, KINGSIDE, QUEENSIDE, WHITE


@pytest.mark.parametrize(
    "fen",
    [
        STARTPOS_FEN,
        "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
        "r3k2r/8/8/8/8/8/8/R3K2R w Kq - 5 20",
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
    ],
)
def test_round_trip(fen: str) -> None:
    assert serialize_fen(parse_fen(fen)) == fen


def test_startpos_fields() -> None:
    b = Board.startpos()
    assert b.color == WHITE
    assert b.color_to_move() == 1
    assert b.ep_square is None
    assert b.halfmove_clock == 0
    assert b.fullmove_number == 1
    for color in (WHITE, BLACK):
        for side in (KINGSIDE, QUEENSIDE):
            assert b.has_castling_right(color, side)
    assert len(b.hash_history) == 1
    assert b.hash_history[-1] == b.zobrist_hash


def test_black_to_move_counts_halfmoves() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/8/4K3 b - - 7 12")
    assert b.total_halfmoves == 23
    assert b.color_to_move() == -1
    assert b.halfmove_clock == 7
    assert b.fullmove_number == 12


def test_castling_letters_need_pieces_at_home() -> None:
    # No rooks on the board: the letters are dropped
    b = Board.from_fen("4k3/8/8/8/8/8/8/4K3 w KQkq - 0 1")
    assert b.to_fen() == "4k3/8/8/8/8/8/8/4K3 w - - 0 1"


@pytest.mark.parametrize(
    ("fen", "field"),
    [
        ("", "fen"),
        ("8/8/8/8/8/8/8/4K3 w - - 0", "fen"),
        ("4k3/8/8/8/8/8/8/4K3 w - - 0 1 extra", "fen"),
        ("4k3/8/8/8/8/8/4K3 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/4K4 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/4X3 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/8 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/3KK3 w - - 0 1", "placement"),
        ("P3k3/8/8/8/8/8/8/4K3 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/4R3/4K3 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/4K3 x - - 0 1", "active_color"),
        ("r3k2r/8/8/8/8/8/8/R3K2R w KX - 0 1", "castling"),
        ("4k3/8/8/8/8/8/8/4K3 w - e9 0 1", "en_passant"),
        ("4k3/8/8/8/8/8/8/4K3 w - e3 0 1", "en_passant"),
        ("4k3/8/8/8/8/8/8/4K3 w - - -1 1", "halfmove_clock"),
        ("4k3/8/8/8/8/8/8/4K3 w - - x 1", "halfmove_clock"),
        ("4k3/8/8/8/8/8/8/4K3 w - - 0 0", "fullmove_number"),
        ("4k3/8/8/8/8/8/8/\u00b3K4 w - - 0 1", "placement"),
        ("4k3/8/8/8/8/8/8/4K3 w - - \u00b2 1", "halfmove_clock"),
        ("4k3/8/8/8/8/8/8/4K3 w - - \u0663 1", "halfmove_clock"),
        ("4k3/8/8/8/8/8/8/4K3 w - - 0 \u00b2", "fullmove_number"),
    ],
)
def test_malformed_fen_names_field(fen: str, field: str) -> None:
    with pytest.raises(MalformedInput) as ei:
        parse_fen(fen)
    assert ei.value.field == field


def test_malformed_input_is_value_error() -> None:
    with pytest.raises(ValueError):
        Board.from_fen("not a fen")
