"""Notation package: SAN rendering/parsing and FEN position setup."""

from chessling.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chessling.core.notation.models import MoveRecord, record_to_san
from chessling.core.notation.san import (
    build_record,
    disambiguation,
    move_to_san,
    parse_san,
)

__all__ = [
    "STARTING_FEN",
    "MoveRecord",
    "position_from_fen",
    "position_to_fen",
    "build_record",
    "disambiguation",
    "move_to_san",
    "parse_san",
    "record_to_san",
]
