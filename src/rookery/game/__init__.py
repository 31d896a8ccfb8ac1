"""Game management layer - snapshot history, undo and move listeners.

Quick start::

    from rookery.game import GameSession

    session = GameSession()
    session.events.on_game_over.append(lambda state: print(state.status))
"""

from rookery.game.session import GameEvents, GameSession

__all__ = [
    "GameEvents",
    "GameSession",
]
