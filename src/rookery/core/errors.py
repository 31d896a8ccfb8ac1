"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all rules-engine errors."""


class InvariantViolation(ChessError, RuntimeError):
    """A snapshot breaks an engine invariant (e.g. a king is missing).

    Only reachable through external misuse; never recovered from.
    """


class OutOfBoundsError(ChessError, IndexError):
    """A position outside the 8x8 board was passed to a checked accessor."""


class InvalidMoveError(ChessError, ValueError):
    """A move is not legal in the given state."""


class GameOverError(InvalidMoveError):
    """A move was submitted to a state that has already ended."""


class FenError(ChessError, ValueError):
    """A FEN string could not be parsed into a valid state."""
