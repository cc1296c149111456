"""GameController: the host-facing orchestrator of a chess game.

Coordinates: GameState, the external clock, and event listeners.
Emits events via simple callbacks so the UI / network / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessling.core.enums import Color, GameStatus, PieceType
from chessling.core.move import MoveDescriptor
from chessling.core.notation import MoveRecord
from chessling.core.types import Square
from chessling.game.interfaces import IClock, TurnPhase
from chessling.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
StatusCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[TurnPhase], None]
PromotionCallback = Callable[[Square], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies move requests, drives the turn FSM, informs
    the clock and notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). Remote moves must be marshalled onto that thread
    before calling :meth:`submit_descriptor`.
    """

    __slots__ = ("_state", "_clock", "_phase", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._clock: IClock | None = None
        self._phase = TurnPhase.AWAITING_MOVE
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def clock(self) -> IClock | None:
        return self._clock

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def turn(self) -> Color:
        return self._state.side_to_move

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None, clock: IClock | None = None) -> None:
        """Set up a new game and clear the history."""
        self._clock = clock
        self._state = GameState()
        self._state.setup(fen)
        _LOGGER.debug("New game from %s", self._state.start_fen)
        self._emit_status(self._state.status)
        self._set_phase(self._state.phase)

    def submit_move(
        self,
        origin: Square,
        destination: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a move. Returns True if it was legal and applied.

        A pawn reaching the last rank without *promotion* is applied but the
        turn stays open until :meth:`promote` is called.
        """
        if self._phase != TurnPhase.AWAITING_MOVE:
            _LOGGER.warning(
                "Rejected %s%s: game is %s", origin, destination, self._phase.name
            )
            return False

        mover = self._state.side_to_move
        if not self._state.is_valid_move(origin, destination):
            _LOGGER.warning("Rejected illegal move %s%s", origin, destination)
            return False

        record = self._state.apply_move(origin, destination, promotion)
        if record is None:
            pending = self._state.pending_promotion
            if pending is None:
                _LOGGER.warning(
                    "Rejected %s%s: invalid promotion %r", origin, destination, promotion
                )
                return False
            self._emit_status(self._state.status)
            self._set_phase(TurnPhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion_required:
                cb(pending.square)
            return True

        self._complete_turn(mover, record)
        return True

    def submit_descriptor(self, descriptor: MoveDescriptor) -> bool:
        """Replay a move given as ``(fromRow, fromCol, toRow, toCol, promo)``."""
        if not (descriptor.from_sq.in_bounds and descriptor.to_sq.in_bounds):
            _LOGGER.warning("Rejected off-board move %s", tuple(descriptor))
            return False
        promotion = descriptor.promotion_piece
        if descriptor.promotion and promotion is None:
            _LOGGER.warning("Rejected unknown promotion piece %s", descriptor.promotion)
            return False
        return self.submit_move(descriptor.from_sq, descriptor.to_sq, promotion)

    def promote(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion with *piece_type*."""
        if self._phase != TurnPhase.AWAITING_PROMOTION:
            return False
        mover = self._state.side_to_move
        record = self._state.complete_promotion(piece_type)
        if record is None:
            _LOGGER.warning("Rejected promotion to %r", piece_type)
            return False
        self._complete_turn(mover, record)
        return True

    def poll_clock(self) -> bool:
        """Ask the clock for a fallen flag. Returns True if the game just ended."""
        if self._clock is None or self._state.is_game_over:
            return False
        color = self._clock.flagged()
        if color is None:
            return False
        self._state.flag_timeout(color)
        self._emit_status(self._state.status)
        self._set_phase(TurnPhase.GAME_OVER)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _complete_turn(self, mover: Color, record: MoveRecord) -> None:
        self._set_phase(TurnPhase.TURN_COMPLETE)
        if self._clock is not None:
            self._clock.switch_after_move(mover)
        for cb in self.events.on_move:
            cb(record)
        self._emit_status(self._state.status)
        self._set_phase(self._state.phase)

    def _set_phase(self, phase: TurnPhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_status(self, status: GameStatus) -> None:
        _LOGGER.debug("Status: %s", status.name)
        for cb in self.events.on_status_changed:
            cb(status)
