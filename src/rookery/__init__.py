"""Rookery - an immutable-snapshot chess rules engine."""

from rookery.core import (
    Board,
    CastlingRights,
    Color,
    GameState,
    GameStatus,
    Move,
    Piece,
    PieceKind,
    Position,
    apply_move,
    apply_validated_move,
    create_initial_state,
    legal_moves,
    piece_at,
    state_from_fen,
    state_to_fen,
)
from rookery.game import GameSession

__all__ = [
    "Board",
    "CastlingRights",
    "Color",
    "GameSession",
    "GameState",
    "GameStatus",
    "Move",
    "Piece",
    "PieceKind",
    "Position",
    "apply_move",
    "apply_validated_move",
    "create_initial_state",
    "legal_moves",
    "piece_at",
    "state_from_fen",
    "state_to_fen",
]
