"""Move generation tests, anchored by perft.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessling.core.enums import Color, MoveFlag, PieceType
from chessling.core.move import Move
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation import STARTING_FEN, position_from_fen
from chessling.core.piece import Piece
from chessling.core.position import Position
from chessling.core.types import (
    A7,
    A8,
    C1,
    D5,
    D6,
    D7,
    E1,
    E2,
    E3,
    E4,
    E5,
    E6,
    F3,
    G1,
    H1,
    H3,
    parse_square,
)


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* using make/unmake."""
    if depth == 0:
        return 1
    moves = MoveGenerator(position).generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        position.make_move(move)
        nodes += perft(position, depth - 1)
        position.unmake_move()
    return nodes


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812


# ── Position 4: promotions and castling under attack ────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS4), 2) == 264


# ── Position 5 ──────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS5), 2) == 1_486


# ── Targeted behaviour ──────────────────────────────────────────────────────


class TestPerOrigin:
    def test_knight_destinations(self, start_position: Position) -> None:
        gen = MoveGenerator(start_position)
        assert gen.legal_destinations(G1) == {F3, H3}

    def test_pawn_destinations(self, start_position: Position) -> None:
        gen = MoveGenerator(start_position)
        assert gen.legal_destinations(E2) == {E3, E4}

    def test_double_push_flag(self, start_position: Position) -> None:
        move = MoveGenerator(start_position).find_move(E2, E4)
        assert move == Move(E2, E4, MoveFlag.DOUBLE_PAWN)

    def test_empty_origin(self, start_position: Position) -> None:
        assert MoveGenerator(start_position).legal_moves_from(E4) == []

    def test_blocked_piece(self, start_position: Position) -> None:
        assert MoveGenerator(start_position).legal_destinations(H1) == set()

    def test_find_move_missing(self, start_position: Position) -> None:
        assert MoveGenerator(start_position).find_move(E2, E5) is None

    def test_generation_leaves_position_untouched(self) -> None:
        pos = position_from_fen(KIWIPETE)
        before = pos.board.copy()
        MoveGenerator(pos).generate_legal_moves()
        assert pos.board == before
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant_target is None


class TestPins:
    def test_pinned_piece_cannot_leave_line(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert MoveGenerator(pos).legal_destinations(E2) == set()

    def test_pinned_rook_slides_along_pin(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/4R3/4K3 w - - 0 1")
        dests = MoveGenerator(pos).legal_destinations(E2)
        assert dests == {E3, E4, E5, E6, parse_square("e7")}

    def test_king_cannot_step_into_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        dests = MoveGenerator(pos).legal_destinations(E1)
        assert dests == {parse_square("d2"), E2, parse_square("f2")}

    def test_must_answer_check(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/8/N3K3 w - - 0 1")
        gen = MoveGenerator(pos)
        # The knight cannot block on the e-file, so only king moves remain.
        assert gen.legal_moves_from(parse_square("a1")) == []
        assert gen.is_in_check(Color.WHITE)


class TestEnPassant:
    def test_capture_offered_after_double_push(self) -> None:
        pos = position_from_fen("4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
        gen = MoveGenerator(pos)
        pos.make_move(gen.find_move(D7, D5))
        assert pos.en_passant_target == D6
        assert pos.en_passant_pawn == D5

        move = MoveGenerator(pos).find_move(E5, D6)
        assert move == Move(E5, D6, MoveFlag.EN_PASSANT)

    def test_from_fen_field(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        assert MoveGenerator(pos).legal_destinations(E5) == {E6, D6}

    def test_expires_after_one_move(self) -> None:
        pos = position_from_fen("4k3/3p4/8/4P3/8/8/8/4K3 b - - 0 1")
        pos.make_move(Move(D7, D5, MoveFlag.DOUBLE_PAWN))
        pos.make_move(Move(E1, E2))
        pos.make_move(Move(parse_square("e8"), parse_square("f8")))
        assert MoveGenerator(pos).legal_destinations(E5) == {E6}

    def test_not_offered_for_single_push(self) -> None:
        pos = position_from_fen("4k3/8/3p4/4P3/8/8/8/4K3 b - - 0 1")
        pos.make_move(Move(D6, D5))
        assert MoveGenerator(pos).legal_destinations(E5) == {E6}

    def test_refused_when_it_exposes_king(self) -> None:
        pos = position_from_fen("8/8/8/K2pP2r/8/8/8/7k w - d6 0 1")
        assert MoveGenerator(pos).legal_destinations(E5) == {E6}


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def _king_dests(self, pos: Position) -> set:
        return MoveGenerator(pos).legal_destinations(E1)

    def test_both_sides_available(self) -> None:
        pos = position_from_fen(self.FEN)
        gen = MoveGenerator(pos)
        assert gen.find_move(E1, G1) == Move(E1, G1, MoveFlag.CASTLE_KINGSIDE)
        assert gen.find_move(E1, C1) == Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE)

    def test_king_moved(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.board[E1] = Piece(Color.WHITE, PieceType.KING, has_moved=True)
        dests = self._king_dests(pos)
        assert G1 not in dests and C1 not in dests

    def test_king_returned_home_still_moved(self) -> None:
        pos = position_from_fen(self.FEN)
        f1, e8, f8 = parse_square("f1"), parse_square("e8"), parse_square("f8")
        for move in (Move(E1, f1), Move(e8, f8), Move(f1, E1), Move(f8, e8)):
            pos.make_move(move)
        dests = self._king_dests(pos)
        assert G1 not in dests and C1 not in dests

    def test_rook_moved(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.board[H1] = Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        dests = self._king_dests(pos)
        assert G1 not in dests
        assert C1 in dests

    def test_fen_without_rights(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w kq - 0 1")
        dests = self._king_dests(pos)
        assert G1 not in dests and C1 not in dests

    def test_path_blocked(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/RN2KB1R w KQkq - 0 1")
        dests = self._king_dests(pos)
        assert G1 not in dests and C1 not in dests

    def test_in_check(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1")
        dests = self._king_dests(pos)
        assert G1 not in dests and C1 not in dests

    def test_transit_square_attacked(self) -> None:
        pos = position_from_fen("4k3/5r2/8/8/8/8/8/R3K2R w KQ - 0 1")
        dests = self._king_dests(pos)
        assert G1 not in dests
        assert C1 in dests

    def test_destination_attacked(self) -> None:
        pos = position_from_fen("4k3/2r5/8/8/8/8/8/R3K2R w KQ - 0 1")
        dests = self._king_dests(pos)
        assert C1 not in dests
        assert G1 in dests

    def test_b_file_attack_does_not_matter(self) -> None:
        pos = position_from_fen("4k3/1r6/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert C1 in self._king_dests(pos)


class TestPromotionGeneration:
    FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_per_origin_single_move(self) -> None:
        pos = position_from_fen(self.FEN)
        moves = MoveGenerator(pos).legal_moves_from(A7)
        assert moves == [Move(A7, A8, MoveFlag.PROMOTION)]

    def test_full_list_expands_choices(self) -> None:
        pos = position_from_fen(self.FEN)
        promos = [
            m for m in MoveGenerator(pos).generate_legal_moves() if m.from_sq == A7
        ]
        assert {m.promotion for m in promos} == {
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        }

    def test_capture_promotion(self) -> None:
        pos = position_from_fen("1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        dests = MoveGenerator(pos).legal_destinations(A7)
        assert dests == {A8, parse_square("b8")}


class TestHasLegalMoves:
    def test_start(self, start_position: Position) -> None:
        gen = MoveGenerator(start_position)
        assert gen.has_legal_moves(Color.WHITE)
        assert gen.has_legal_moves(Color.BLACK)

    def test_stalemated_side(self) -> None:
        pos = position_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert not MoveGenerator(pos).has_legal_moves(Color.BLACK)
