"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessling.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_in_check,
    is_square_attacked,
    pawn_direction,
)
from chessling.core.enums import PROMOTION_CHOICES, Color, MoveFlag, PieceType
from chessling.core.move import Move
from chessling.core.types import BOARD_SIZE, Square, is_in_bounds

if TYPE_CHECKING:
    from chessling.core.piece import Piece
    from chessling.core.position import Position


_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def _start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def _last_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


class MoveGenerator:
    """Generates moves for pieces of a given :class:`Position`.

    Generation is per origin square: callers pass the square explicitly and
    get the moves back. Legality is decided by playing each candidate with
    :meth:`Position.simulate`, so the position is always restored before a
    result is returned.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_moves_from(self, origin: Square) -> list[Move]:
        """Legal moves of the piece on *origin*, one per destination.

        Promotion moves are returned with ``promotion=None``.
        """
        return [m for m in self.pseudo_legal_moves_from(origin) if self.is_legal(m)]

    def legal_destinations(self, origin: Square) -> set[Square]:
        """Squares the piece on *origin* may legally move to."""
        return {m.to_sq for m in self.legal_moves_from(origin)}

    def find_move(self, origin: Square, destination: Square) -> Move | None:
        """The legal move from *origin* to *destination*, if there is one."""
        for move in self.legal_moves_from(origin):
            if move.to_sq == destination:
                return move
        return None

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move.

        Each promotion is expanded into one move per promotion piece.
        """
        legal: list[Move] = []
        for origin in self._board.pieces(self._pos.side_to_move):
            for move in self.legal_moves_from(origin):
                if move.flag == MoveFlag.PROMOTION:
                    legal.extend(
                        Move(move.from_sq, move.to_sq, MoveFlag.PROMOTION, pt)
                        for pt in PROMOTION_CHOICES
                    )
                else:
                    legal.append(move)
        return legal

    def has_legal_moves(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops at the first)."""
        for origin in self._board.pieces(color):
            for move in self.pseudo_legal_moves_from(origin):
                if self.is_legal(move):
                    return True
        return False

    def is_legal(self, move: Move) -> bool:
        """A pseudo-legal *move* is legal iff it keeps the mover out of check."""
        mover = self._board[move.from_sq]
        if mover is None or self._board.is_ally(move.to_sq, mover.color):
            return False
        with self._pos.simulate(move):
            in_check = is_in_check(self._board, mover.color)
        return not in_check

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Pseudo-legal generation -------------------------------------------

    def pseudo_legal_moves_from(self, origin: Square) -> list[Move]:
        """Moves matching the piece's pattern; may leave own king in check."""
        piece = self._board[origin]
        moves: list[Move] = []
        if piece is None:
            return moves

        if piece.piece_type == PieceType.PAWN:
            self._gen_pawn(origin, piece.color, moves)
        elif piece.piece_type == PieceType.KNIGHT:
            self._gen_steps(origin, piece.color, KNIGHT_OFFSETS, moves)
        elif piece.piece_type == PieceType.KING:
            self._gen_steps(origin, piece.color, KING_OFFSETS, moves)
            self._gen_castling(origin, piece, moves)
        else:
            self._gen_sliding(origin, piece.color, _SLIDER_DIRS[piece.piece_type], moves)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        direction = pawn_direction(color)
        row, col = sq
        fwd_row = row + direction
        if not 0 <= fwd_row < BOARD_SIZE:
            return
        flag = MoveFlag.PROMOTION if fwd_row == _last_row(color) else MoveFlag.NORMAL

        one_step = Square(fwd_row, col)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step, flag))
            if row == _start_row(color):
                two_step = Square(row + 2 * direction, col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for dc in (-1, 1):
            if not is_in_bounds(fwd_row, col + dc):
                continue
            target = Square(fwd_row, col + dc)
            if board.is_enemy(target, color):
                moves.append(Move(sq, target, flag))
            elif target == self._pos.en_passant_target and self._can_capture_en_passant(
                sq, color
            ):
                moves.append(Move(sq, target, MoveFlag.EN_PASSANT))

    def _can_capture_en_passant(self, sq: Square, color: Color) -> bool:
        """The tracked pawn must stand beside *sq* on the same row."""
        ep_pawn = self._pos.en_passant_pawn
        if ep_pawn is None or ep_pawn.row != sq.row or abs(ep_pawn.col - sq.col) != 1:
            return False
        victim = self._board[ep_pawn]
        return (
            victim is not None
            and victim.color != color
            and victim.piece_type == PieceType.PAWN
        )

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for dr, dc in offsets:
            if not is_in_bounds(sq.row + dr, sq.col + dc):
                continue
            to_sq = Square(sq.row + dr, sq.col + dc)
            if not board.is_ally(to_sq, color):
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        dirs: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for dr, dc in dirs:
            for step in range(1, BOARD_SIZE):
                r = sq.row + dr * step
                c = sq.col + dc * step
                if not is_in_bounds(r, c):
                    break
                to_sq = Square(r, c)
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        if king.has_moved or king_sq.col != 4:
            return
        color = king.color
        if self.is_in_check(color):
            return

        board = self._board
        opponent = color.opposite
        row = king_sq.row

        if (
            self._unmoved_rook(Square(row, 7), color)
            and board.is_empty(Square(row, 5))
            and board.is_empty(Square(row, 6))
            and not self.is_square_attacked(Square(row, 5), opponent)
            and not self.is_square_attacked(Square(row, 6), opponent)
        ):
            moves.append(Move(king_sq, Square(row, 6), MoveFlag.CASTLE_KINGSIDE))

        if (
            self._unmoved_rook(Square(row, 0), color)
            and board.is_empty(Square(row, 1))
            and board.is_empty(Square(row, 2))
            and board.is_empty(Square(row, 3))
            and not self.is_square_attacked(Square(row, 2), opponent)
            and not self.is_square_attacked(Square(row, 3), opponent)
        ):
            moves.append(Move(king_sq, Square(row, 2), MoveFlag.CASTLE_QUEENSIDE))

    def _unmoved_rook(self, sq: Square, color: Color) -> bool:
        rook = self._board[sq]
        return (
            rook is not None
            and rook.color == color
            and rook.piece_type == PieceType.ROOK
            and not rook.has_moved
        )
