"""Peer-to-peer move synchronisation on top of a :class:`GameController`.

The transport (connection set-up, NAT traversal, framing) is external; the
session only decides which moves go out and which incoming moves are
replayed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from chessling.core.enums import Color
from chessling.core.move import MoveDescriptor
from chessling.core.notation import MoveRecord
from chessling.game.controller import GameController
from chessling.game.interfaces import IClock, IMoveTransport

_LOGGER = logging.getLogger(__name__)


class MultiplayerRole(IntEnum):
    NONE = 0
    HOST = 1
    GUEST = 2


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Who we are in a networked game. The host plays White."""

    role: MultiplayerRole = MultiplayerRole.NONE

    @property
    def local_color(self) -> Color | None:
        if self.role == MultiplayerRole.HOST:
            return Color.WHITE
        if self.role == MultiplayerRole.GUEST:
            return Color.BLACK
        return None


class MultiplayerSession:
    """Sends local moves to the peer and replays the peer's moves.

    Without a role the session is inert: every turn is local and nothing is
    sent.
    """

    __slots__ = ("_controller", "_transport", "_config", "_replaying")

    def __init__(
        self,
        controller: GameController,
        transport: IMoveTransport,
        config: SessionConfig | None = None,
    ) -> None:
        self._controller = controller
        self._transport = transport
        self._config = config or SessionConfig()
        self._replaying = False
        controller.events.on_move.append(self._on_move)

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def is_active(self) -> bool:
        return self._config.local_color is not None

    def start(self, fen: str | None = None, clock: IClock | None = None) -> None:
        """Begin a fresh game once the connection is up."""
        _LOGGER.info(
            "Starting as %s (%s)", self._config.role.name, self._config.local_color
        )
        self._controller.new_game(fen, clock)

    def is_local_turn(self) -> bool:
        color = self._config.local_color
        if color is None:
            return True
        return self._controller.turn == color

    def receive(self, descriptor: MoveDescriptor) -> bool:
        """Replay a move sent by the peer. Returns True if it was applied."""
        if not self.is_active:
            return False
        if self.is_local_turn():
            _LOGGER.warning("Ignoring remote move %s: it is our turn", tuple(descriptor))
            return False

        _LOGGER.debug("Processing remote move %s", tuple(descriptor))
        self._replaying = True
        try:
            applied = self._controller.submit_descriptor(descriptor)
        finally:
            self._replaying = False
        if not applied:
            _LOGGER.warning("Remote move %s was invalid", tuple(descriptor))
        return applied

    def _on_move(self, record: MoveRecord) -> None:
        if not self.is_active or self._replaying:
            return
        if record.color != self._config.local_color:
            return
        self._transport.send_move(record.descriptor)
