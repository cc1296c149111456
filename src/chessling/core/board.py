"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessling.core.enums import Color, PieceType
from chessling.core.piece import Piece
from chessling.core.types import ALL_SQUARES, BOARD_SIZE, Square, is_in_bounds

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces with a cached king index.

    Callers bounds-check coordinates before indexing; an off-board square
    is a contract violation, not a recoverable error.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        # color -> king square cache (None if king missing).
        self._king_squares: dict[Color, Square | None] = {
            Color.WHITE: None,
            Color.BLACK: None,
        }

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        old_piece = self._grid[row][col]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._grid[row][col] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = Square(row, col)

    # -- Point queries ------------------------------------------------------

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return is_in_bounds(row, col)

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    def is_ally(self, sq: Square, color: Color) -> bool:
        piece = self._grid[sq[0]][sq[1]]
        return piece is not None and piece.color == color

    def is_enemy(self, sq: Square, color: Color) -> bool:
        piece = self._grid[sq[0]][sq[1]]
        return piece is not None and piece.color != color

    # -- Scans --------------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square, row by row."""
        for sq in ALL_SQUARES:
            piece = self._grid[sq.row][sq.col]
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares occupied by *color* (optionally only its *piece_type*)."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color
            and (piece_type is None or piece.piece_type == piece_type)
        ]

    def king_square(self, color: Color) -> Square | None:
        """Cached king square for *color*, ``None`` if there is no king."""
        return self._king_squares[color]

    def find_king(self, color: Color) -> Square | None:
        """Locate *color*'s king by scanning the whole board."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._king_squares = {Color.WHITE: None, Color.BLACK: None}

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, nothing moved yet."""
        b = cls()
        for col, pt in enumerate(BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
