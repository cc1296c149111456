"""Qt bridge exposing a :class:`GameController` as signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessling.core.enums import GameStatus, PieceType
from chessling.core.move import MoveDescriptor
from chessling.core.notation import MoveRecord
from chessling.core.types import Square
from chessling.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class GameBridge(QObject):
    """Thread-affine adapter between the presentation layer and a game.

    Slots take plain ints so they can be wired to widgets or queued across
    threads; results come back through signals.
    """

    move_made = pyqtSignal(object)  # MoveRecord
    status_changed = pyqtSignal(int)  # GameStatus
    promotion_required = pyqtSignal(int, int)  # row, col
    move_rejected = pyqtSignal(int, int, int, int)

    __slots__ = ("_controller",)

    def __init__(self, controller: GameController | None = None) -> None:
        super().__init__()
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_status_changed.append(self._on_status)
        events.on_promotion_required.append(self._on_promotion)

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game(clock=self._controller.clock)

    @pyqtSlot(int, int, int, int, int)
    def submit_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int, promotion: int
    ) -> None:
        """Apply a move request and emit ``move_rejected`` if it is refused."""
        descriptor = MoveDescriptor(from_row, from_col, to_row, to_col, promotion)
        if not self._controller.submit_descriptor(descriptor):
            self.move_rejected.emit(from_row, from_col, to_row, to_col)

    @pyqtSlot(int)
    def promote(self, piece_type: int) -> None:
        try:
            choice = PieceType(piece_type)
        except ValueError:
            _LOGGER.warning("Ignoring unknown promotion piece %s", piece_type)
            return
        if not self._controller.promote(choice):
            _LOGGER.warning("Promotion to %s refused", choice.name)

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_move(self, record: MoveRecord) -> None:
        self.move_made.emit(record)

    def _on_status(self, status: GameStatus) -> None:
        self.status_changed.emit(int(status))

    def _on_promotion(self, sq: Square) -> None:
        self.promotion_required.emit(sq.row, sq.col)
