from __future__ import annotations

import pytest

from src.rules.board import STARTPOS_FEN
from src.rules.errors import IllegalMove, InvalidSquareReference, MalformedInput
from src.rules.game import Game
from src.rules.move import MoveKey, str_to_square


def test_new_game_defaults_to_start_position() -> None:
    g = Game.new()
    assert g.to_fen() == STARTPOS_FEN
    assert g.color_to_move() == 1
    assert len(g.legal_moves()) == 20
    assert g.move_history_uci() == []


def test_apply_move_accepts_uci_key_and_move() -> None:
    g = Game.new()
    played = g.apply_move("e2e4")
    assert played.to_uci() == "e2e4"
    assert g.color_to_move() == -1

    g.apply_move(MoveKey(str_to_square("e7"), str_to_square("e5")))
    knight = g.find_move(str_to_square("g1"), str_to_square("f3"))
    assert knight is not None
    g.apply_move(knight)
    assert g.move_history_uci() == ["e2e4", "e7e5", "g1f3"]
    assert g.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"


def test_illegal_move_rejected_without_changing_state() -> None:
    g = Game.new()
    with pytest.raises(IllegalMove):
        g.apply_move("e2e5")
    assert g.to_fen() == STARTPOS_FEN
    assert g.move_stack == []


@pytest.mark.parametrize("uci", ["e2", "e2e4e5", "e7e8k"])
def test_unparseable_uci_is_value_error(uci: str) -> None:
    with pytest.raises(ValueError):
        Game.new().apply_move(uci)


def test_bad_square_in_uci() -> None:
    with pytest.raises(InvalidSquareReference):
        Game.new().apply_move("i2i4")


def test_undo_round_trip() -> None:
    g = Game.new()
    g.apply_move("d2d4")
    undone = g.undo_move()
    assert undone.to_uci() == "d2d4"
    assert g.to_fen() == STARTPOS_FEN


def test_undo_without_moves() -> None:
    with pytest.raises(ValueError, match="no moves"):
        Game.new().undo_move()


def test_from_fen_rejects_malformed() -> None:
    with pytest.raises(MalformedInput):
        Game.from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1")
