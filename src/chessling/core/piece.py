"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessling.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "k",
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
    PieceType.PAWN: "p",
}

# FEN character -> (Color, PieceType); uppercase is White
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {}
for _pt, _letter in _LETTERS.items():
    _CHAR_MAP[_letter.upper()] = (Color.WHITE, _pt)
    _CHAR_MAP[_letter] = (Color.BLACK, _pt)

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` gates castling for kings and rooks. It only ever flips
    from False to True during play.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    def moved(self) -> Piece:
        """Same piece with ``has_moved`` set."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    def promoted(self, piece_type: PieceType) -> Piece:
        return replace(self, piece_type=piece_type)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, has_moved: bool = False) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, has_moved)
