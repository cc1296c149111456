"""Square type and coordinate helpers.

Board layout (row-major, as seen from White's side)::

    row 0: a8 b8 c8 d8 e8 f8 g8 h8   <- Black's back rank
    row 1: a7 ...                 h7
    ...
    row 7: a1 b1 c1 d1 e1 f1 g1 h1   <- White's back rank

White pawns advance toward decreasing row index.
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_SIZE = 8
FILES = "abcdefgh"


class Square(NamedTuple):
    """Board coordinate ``(row, col)``, both in ``range(8)``."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        """Square shifted by the given deltas (may be off the board)."""
        return Square(self.row + d_row, self.col + d_col)

    @property
    def in_bounds(self) -> bool:
        return is_in_bounds(self.row, self.col)

    @property
    def file_char(self) -> str:
        return FILES[self.col]

    @property
    def rank_char(self) -> str:
        return str(BOARD_SIZE - self.row)

    def __str__(self) -> str:
        return square_name(self)


def is_in_bounds(row: int, col: int) -> bool:
    """Whether ``(row, col)`` lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 4)`` -> ``'e1'``."""
    return FILES[sq.col] + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` -> ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)

# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
