"""Attack detection: is a square threatened by a given side?"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessling.core.enums import Color, PieceType
from chessling.core.types import BOARD_SIZE, Square, is_in_bounds

if TYPE_CHECKING:
    from chessling.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS


def pawn_direction(color: Color) -> int:
    """Row delta of a pawn advance for *color*."""
    return -1 if color == Color.WHITE else 1


def _slider_hits(
    board: Board,
    sq: Square,
    by_color: Color,
    dirs: tuple[tuple[int, int], ...],
    kinds: tuple[PieceType, PieceType],
) -> bool:
    row, col = sq
    for dr, dc in dirs:
        for step in range(1, BOARD_SIZE):
            r = row + dr * step
            c = col + dc * step
            if not is_in_bounds(r, c):
                break
            piece = board[Square(r, c)]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def _jumper_hits(
    board: Board,
    sq: Square,
    by_color: Color,
    offsets: tuple[tuple[int, int], ...],
    kind: PieceType,
) -> bool:
    row, col = sq
    for dr, dc in offsets:
        r = row + dr
        c = col + dc
        if not is_in_bounds(r, c):
            continue
        piece = board[Square(r, c)]
        if piece is not None and piece.color == by_color and piece.piece_type == kind:
            return True
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Pure with respect to *board*; short-circuits on the first attacker.
    """
    row, col = sq

    # A pawn attacks from one row "behind" the target, seen from its side.
    pawn_row = row - pawn_direction(by_color)
    for dc in (-1, 1):
        c = col + dc
        if is_in_bounds(pawn_row, c):
            piece = board[Square(pawn_row, c)]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.PAWN
            ):
                return True

    if _jumper_hits(board, sq, by_color, KNIGHT_OFFSETS, PieceType.KNIGHT):
        return True

    if _jumper_hits(board, sq, by_color, KING_OFFSETS, PieceType.KING):
        return True

    if _slider_hits(board, sq, by_color, ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)):
        return True

    return _slider_hits(
        board, sq, by_color, BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? False when the king is missing."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
