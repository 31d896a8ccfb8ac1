"""GameSession - caller-side owner of a game's snapshot history.

Snapshots are immutable, so undo is simply a matter of stepping back to the
previous one. Listeners subscribe through :class:`GameEvents`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.enums import Color, GameStatus
from rookery.core.errors import InvalidMoveError
from rookery.core.fen import state_from_fen
from rookery.core.move import Move
from rookery.core.rules import all_legal_moves, legal_moves
from rookery.core.state import GameState, create_initial_state
from rookery.core.transition import apply_validated_move
from rookery.core.types import Position

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]  # move, state after
GameOverCallback = Callable[[GameState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Holds the current snapshot plus every earlier one.

    Methods are meant to be called from a single thread; the snapshots they
    hand out are immutable and may be shared freely.
    """

    __slots__ = ("_states", "events")

    def __init__(self, fen: str | None = None) -> None:
        self._states: list[GameState] = []
        self.events = GameEvents()
        self.new_game(fen)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._states[-1]

    @property
    def history(self) -> tuple[GameState, ...]:
        """All snapshots from the start of the game up to the current one."""
        return tuple(self._states)

    @property
    def turn(self) -> Color:
        return self.state.turn

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_game_over(self) -> bool:
        return self.state.is_game_over

    @property
    def ply_count(self) -> int:
        """Number of half-moves played in this session."""
        return len(self._states) - 1

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from the standard position or from *fen*."""
        start = create_initial_state() if fen is None else state_from_fen(fen)
        self._states = [start]
        _LOGGER.info("New game (%s to move)", start.turn)

    def legal_moves(self, origin: Position | None = None) -> list[Move]:
        """Legal moves from *origin*, or for the whole side when omitted."""
        if origin is None:
            return all_legal_moves(self.state)
        return legal_moves(self.state, origin)

    def submit_move(self, move: Move) -> bool:
        """Apply *move* if legal. Returns True if applied."""
        try:
            next_state = apply_validated_move(self.state, move)
        except InvalidMoveError as exc:
            _LOGGER.warning("Rejected move: %s", exc)
            return False

        self._states.append(next_state)
        _LOGGER.debug("Applied %s (ply %d)", move, self.ply_count)
        self._emit_move(move, next_state)

        if next_state.is_game_over:
            _LOGGER.info(
                "Game over: %s, winner %s", next_state.status, next_state.winner
            )
            self._emit_game_over(next_state)
        return True

    def undo_move(self) -> Move | None:
        """Step back one ply. Returns the undone Move, or None if at the start."""
        if len(self._states) <= 1:
            return None
        undone = self._states.pop()
        return undone.last_move

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, move: Move, state: GameState) -> None:
        for cb in self.events.on_move:
            cb(move, state)

    def _emit_game_over(self, state: GameState) -> None:
        for cb in self.events.on_game_over:
            cb(state)
