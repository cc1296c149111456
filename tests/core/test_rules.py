"""Tests for Rules: check, checkmate, stalemate."""

from chessling.core.enums import GameStatus
from chessling.core.notation import STARTING_FEN, position_from_fen
from chessling.core.rules import Rules


class TestEvaluate:
    def test_start_is_playing(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert Rules.evaluate(pos) == GameStatus.PLAYING
        assert not Rules.is_in_check(pos)
        assert Rules.has_legal_moves(pos)

    def test_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.CHECK
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)

    def test_fools_mate(self) -> None:
        pos = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert Rules.evaluate(pos) == GameStatus.CHECKMATE
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)

    def test_back_rank_mate(self) -> None:
        pos = position_from_fen("R5k1/5ppp/8/8/8/8/8/6K1 b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.CHECKMATE

    def test_check_with_capture_escape(self) -> None:
        pos = position_from_fen("R5k1/5ppp/8/8/8/8/7K/r7 b - - 0 1")
        # Black's own rook on a1 can take back on a8.
        assert Rules.evaluate(pos) == GameStatus.CHECK


class TestStalemate:
    def test_queen_stalemate(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.STALEMATE
        assert Rules.is_stalemate(pos)
        assert not Rules.is_in_check(pos)

    def test_king_and_pawn_stalemate(self) -> None:
        pos = position_from_fen("k7/P7/K7/8/8/8/8/8 b - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.STALEMATE

    def test_other_side_can_still_move(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 w - - 0 1")
        assert Rules.evaluate(pos) == GameStatus.PLAYING
