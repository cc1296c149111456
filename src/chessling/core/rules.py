"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessling.core.enums import GameStatus
from chessling.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessling.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.has_legal_moves(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.evaluate(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.evaluate(position) == GameStatus.STALEMATE

    @staticmethod
    def evaluate(position: Position) -> GameStatus:
        """Status of the side to move: playing, check, checkmate or stalemate."""
        gen = MoveGenerator(position)
        color = position.side_to_move
        in_check = gen.is_in_check(color)

        if not gen.has_legal_moves(color):
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        return GameStatus.CHECK if in_check else GameStatus.PLAYING
