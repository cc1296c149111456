"""Game state machine: board, turn, status and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessling.core.enums import PROMOTION_CHOICES, Color, GameStatus, MoveFlag, PieceType
from chessling.core.move import Move
from chessling.core.move_generator import MoveGenerator
from chessling.core.notation import (
    STARTING_FEN,
    MoveRecord,
    build_record,
    position_from_fen,
)
from chessling.core.piece import Piece
from chessling.core.position import Position
from chessling.core.rules import Rules
from chessling.core.types import Square
from chessling.game.interfaces import TurnPhase

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move waiting for its promotion piece."""

    move: Move
    record: MoveRecord

    @property
    def square(self) -> Square:
        return self.move.to_sq


@dataclass
class GameState:
    """The single owned aggregate of one game.

    Holds the position, the four-way status of the side to move, a pending
    promotion (if any) and the append-only move history. Pure data/logic, no
    threading, no UI.
    """

    position: Position = field(default_factory=Position, init=False)
    status: GameStatus = field(default=GameStatus.PLAYING, init=False)
    pending_promotion: PendingPromotion | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game to *fen* or the starting position."""
        self.start_fen = fen or STARTING_FEN
        self.position = position_from_fen(self.start_fen)
        self.pending_promotion = None
        self.move_history.clear()
        self.status = Rules.evaluate(self.position)

    # ── Board query surface ──────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def phase(self) -> TurnPhase:
        if self.status.is_terminal:
            return TurnPhase.GAME_OVER
        if self.pending_promotion is not None:
            return TurnPhase.AWAITING_PROMOTION
        return TurnPhase.AWAITING_MOVE

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    def piece_at(self, sq: Square) -> Piece | None:
        if not sq.in_bounds:
            return None
        return self.position.board[sq]

    def legal_destinations(self, origin: Square) -> set[Square]:
        """Destinations for a current-turn piece on *origin*; empty otherwise."""
        if self.phase != TurnPhase.AWAITING_MOVE or not origin.in_bounds:
            return set()
        piece = self.position.board[origin]
        if piece is None or piece.color != self.side_to_move:
            return set()
        return MoveGenerator(self.position).legal_destinations(origin)

    def is_valid_move(self, origin: Square, destination: Square) -> bool:
        return destination in self.legal_destinations(origin)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self.position).generate_legal_moves()

    @property
    def ply_count(self) -> int:
        """Number of completed half-moves."""
        return len(self.move_history)

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        origin: Square,
        destination: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord | None:
        """Play a move for the side to move.

        Returns the finished history record, or ``None`` when the move is
        not legal or the turn is now waiting for :meth:`complete_promotion`.
        """
        if not self.is_valid_move(origin, destination):
            return None
        if promotion is not None and promotion not in PROMOTION_CHOICES:
            return None

        move = MoveGenerator(self.position).find_move(origin, destination)
        assert move is not None

        if move.flag == MoveFlag.PROMOTION:
            record = build_record(self.position, move)
            self.position.make_move(move, switch_turn=False)
            self.position.commit()
            self.pending_promotion = PendingPromotion(move, record)
            self.status = GameStatus.PROMOTING
            _LOGGER.debug("Promotion pending on %s", destination)
            if promotion is None:
                return None
            return self.complete_promotion(promotion)

        record = build_record(self.position, move)
        self.position.make_move(move)
        self.position.commit()
        return self._finish_turn(record)

    def complete_promotion(self, piece_type: PieceType) -> MoveRecord | None:
        """Supply the promotion piece and finish the suspended turn."""
        pending = self.pending_promotion
        if pending is None or piece_type not in PROMOTION_CHOICES:
            return None

        self.position.promote(pending.square, piece_type)
        self.position.pass_turn()
        self.pending_promotion = None

        record = pending.record
        record.promoted_to = piece_type
        return self._finish_turn(record)

    def flag_timeout(self, color: Color) -> None:
        """*color* ran out of time."""
        if self.is_game_over:
            return
        self.pending_promotion = None
        self.status = GameStatus.TIMEOUT
        _LOGGER.info("%s flagged", color)

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish_turn(self, record: MoveRecord) -> MoveRecord:
        self.status = Rules.evaluate(self.position)
        record.finalize(
            gives_check=self.status == GameStatus.CHECK,
            gives_checkmate=self.status == GameStatus.CHECKMATE,
        )
        self.move_history.append(record)
        _LOGGER.debug("%s played %s -> %s", record.color, record.notation, self.status.name)
        return record
