"""Game management layer: state machine, controller, peer session.

Quick start::

    from chessling.core import parse_square
    from chessling.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
"""

from chessling.game.controller import GameController, GameEvents
from chessling.game.interfaces import IClock, IMoveTransport, TurnPhase
from chessling.game.session import MultiplayerRole, MultiplayerSession, SessionConfig
from chessling.game.state import GameState, PendingPromotion

__all__ = [
    # Interfaces
    "IClock",
    "IMoveTransport",
    "TurnPhase",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MultiplayerRole",
    "MultiplayerSession",
    "PendingPromotion",
    "SessionConfig",
]
