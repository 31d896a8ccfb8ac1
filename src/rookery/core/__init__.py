"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import apply_move, create_initial_state, legal_moves, parse_square

    state = create_initial_state()
    moves = legal_moves(state, parse_square("e2"))
    state = apply_move(state, moves[-1])
"""

from rookery.core.board import Board
from rookery.core.enums import (
    PROMOTION_KINDS,
    CastlingRights,
    Color,
    GameStatus,
    PieceKind,
)
from rookery.core.errors import (
    ChessError,
    FenError,
    GameOverError,
    InvalidMoveError,
    InvariantViolation,
    OutOfBoundsError,
)
from rookery.core.fen import STARTING_FEN, state_from_fen, state_to_fen
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator, square_attacked_by
from rookery.core.piece import Piece
from rookery.core.rules import (
    Rules,
    all_legal_moves,
    has_any_legal_move,
    is_in_check,
    legal_moves,
    simulate_move,
)
from rookery.core.state import CapturedPieces, GameState, create_initial_state
from rookery.core.transition import apply_move, apply_validated_move
from rookery.core.types import Position, in_bounds, parse_square, square_name


def piece_at(board: Board, pos: Position) -> Piece | None:
    """Checked, read-only lookup of the piece on *pos*."""
    return board.piece_at(pos)


__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PROMOTION_KINDS",
    "PieceKind",
    # Types / helpers
    "Position",
    "in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CapturedPieces",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Errors
    "ChessError",
    "FenError",
    "GameOverError",
    "InvalidMoveError",
    "InvariantViolation",
    "OutOfBoundsError",
    # Operations
    "all_legal_moves",
    "apply_move",
    "apply_validated_move",
    "create_initial_state",
    "has_any_legal_move",
    "is_in_check",
    "legal_moves",
    "piece_at",
    "simulate_move",
    "square_attacked_by",
    # Notation
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
]
