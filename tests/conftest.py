"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from rookery.core.move import Move
from rookery.core.rules import legal_moves
from rookery.core.state import GameState, create_initial_state
from rookery.core.transition import apply_move

PlayFn = Callable[..., GameState]


def resolve_move(state: GameState, text: str) -> Move:
    """Find the generated legal move matching UCI *text* (e.g. ``'e1g1'``)."""
    wanted = Move.from_uci(text)
    matches = [m for m in legal_moves(state, wanted.from_pos) if m.same_squares(wanted)]
    assert len(matches) == 1, f"{text} is not a legal move in this position"
    return matches[0]


@pytest.fixture
def initial_state() -> GameState:
    return create_initial_state()


@pytest.fixture
def play() -> PlayFn:
    """Apply a sequence of UCI moves, each resolved against the legal moves."""

    def _play(state: GameState, *moves: str) -> GameState:
        for text in moves:
            state = apply_move(state, resolve_move(state, text))
        return state

    return _play
