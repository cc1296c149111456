"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessling.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    print(sorted(map(str, gen.legal_destinations(parse_square("g1")))))
"""

from chessling.core.attacks import is_in_check, is_square_attacked
from chessling.core.board import Board
from chessling.core.enums import (
    PROMOTION_CHOICES,
    Color,
    GameStatus,
    MoveFlag,
    PieceType,
)
from chessling.core.move import Move, MoveDescriptor
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation import (
    STARTING_FEN,
    MoveRecord,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from chessling.core.piece import Piece
from chessling.core.position import Position
from chessling.core.rules import Rules
from chessling.core.types import Square, is_in_bounds, parse_square, square_name

__all__ = [
    # Enums
    "PROMOTION_CHOICES",
    "Color",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "is_in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveDescriptor",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "Rules",
    # Attacks
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
