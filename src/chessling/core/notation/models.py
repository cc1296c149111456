"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

from chessling.core.enums import Color, PieceType
from chessling.core.move import MoveDescriptor
from chessling.core.types import Square

SAN_PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(slots=True)
class MoveRecord:
    """A single executed move, as kept in the game history.

    Created once per executed move. The check/checkmate flags are only known
    after the opponent's position has been evaluated, so they are filled in
    afterwards by :meth:`finalize`, which also regenerates ``notation``.
    """

    from_sq: Square
    to_sq: Square
    piece_type: PieceType
    color: Color
    captured_type: PieceType | None = None
    is_capture: bool = False
    is_castle_kingside: bool = False
    is_castle_queenside: bool = False
    is_en_passant: bool = False
    promoted_to: PieceType | None = None
    disambiguation: str = ""
    gives_check: bool = False
    gives_checkmate: bool = False
    notation: str = ""

    @property
    def is_promotion(self) -> bool:
        return self.promoted_to is not None

    @property
    def descriptor(self) -> MoveDescriptor:
        """The move in the shape sent to a remote peer."""
        return MoveDescriptor.of(self.from_sq, self.to_sq, self.promoted_to)

    def finalize(self, gives_check: bool, gives_checkmate: bool) -> None:
        """Backfill the check flags and re-render the notation."""
        self.gives_check = gives_check or gives_checkmate
        self.gives_checkmate = gives_checkmate
        self.notation = record_to_san(self)

    def __str__(self) -> str:
        return self.notation


def record_to_san(record: MoveRecord) -> str:
    """Render a :class:`MoveRecord` as SAN from scratch."""
    if record.is_castle_kingside:
        san = "O-O"
    elif record.is_castle_queenside:
        san = "O-O-O"
    else:
        san = ""
        if record.piece_type == PieceType.PAWN:
            if record.is_capture:
                san += record.from_sq.file_char
        else:
            san += SAN_PIECE_LETTERS[record.piece_type] + record.disambiguation
        if record.is_capture:
            san += "x"
        san += str(record.to_sq)
        if record.promoted_to is not None:
            san += "=" + SAN_PIECE_LETTERS[record.promoted_to]
    if record.gives_checkmate:
        san += "#"
    elif record.gives_check:
        san += "+"
    return san
