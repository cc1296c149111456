"""Abstract interfaces for the game layer.

The clock and the peer-to-peer transport live outside this package; the
controller and session only depend on these ABCs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessling.core.enums import Color
    from chessling.core.move import MoveDescriptor


# ── Turn FSM states ──────────────────────────────────────────────────────────


class TurnPhase(IntEnum):
    """Finite-state-machine states of a single turn."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn on the last rank, piece not chosen yet
    TURN_COMPLETE = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IClock(ABC):
    """What the controller needs from a chess clock."""

    @abstractmethod
    def switch_after_move(self, mover: Color) -> None:
        """*mover* finished a move (including a completed promotion)."""

    @abstractmethod
    def flagged(self) -> Color | None:
        """The side that ran out of time, if any."""


class IMoveTransport(ABC):
    """Outgoing half of a peer-to-peer connection."""

    @abstractmethod
    def send_move(self, descriptor: MoveDescriptor) -> None:
        """Transmit a locally played move to the remote peer."""
