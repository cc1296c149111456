"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from chessling.core.enums import MoveFlag, PieceType
from chessling.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A ``PROMOTION`` move may carry ``promotion=None`` while the promotion
    piece has not been chosen yet.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


class MoveDescriptor(NamedTuple):
    """Wire shape of a move: ``(fromRow, fromCol, toRow, toCol, promotion)``.

    ``promotion`` is a :class:`PieceType` value, or 0 for none.
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    promotion: int = 0

    @property
    def from_sq(self) -> Square:
        return Square(self.from_row, self.from_col)

    @property
    def to_sq(self) -> Square:
        return Square(self.to_row, self.to_col)

    @property
    def promotion_piece(self) -> PieceType | None:
        """Decoded promotion piece; ``None`` for 0 or an unknown value."""
        try:
            return PieceType(self.promotion)
        except ValueError:
            return None

    @classmethod
    def of(
        cls, from_sq: Square, to_sq: Square, promotion: PieceType | None = None
    ) -> MoveDescriptor:
        return cls(
            from_sq.row, from_sq.col, to_sq.row, to_sq.col, int(promotion or 0)
        )
