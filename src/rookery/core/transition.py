"""State transition - advance one snapshot to the next."""

from __future__ import annotations

import logging
from dataclasses import replace

from rookery.core.enums import CastlingRights, PieceKind
from rookery.core.errors import GameOverError, InvalidMoveError
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.rules import (
    evaluate_status,
    has_any_legal_move,
    legal_moves,
    relocate_pieces,
)
from rookery.core.state import GameState
from rookery.core.types import Position, in_bounds

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Position, CastlingRights] = {
    Position(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(7, 7): CastlingRights.WHITE_KINGSIDE,
    Position(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Position(0, 7): CastlingRights.BLACK_KINGSIDE,
}


def _next_castling_rights(
    rights: CastlingRights, move: Move, piece: Piece
) -> CastlingRights:
    if piece.kind == PieceKind.KING:
        rights &= ~CastlingRights.both(piece.color)
    if piece.kind == PieceKind.ROOK and move.from_pos in _ROOK_CORNERS:
        rights &= ~_ROOK_CORNERS[move.from_pos]
    # Landing on a corner covers a rook captured where it stood.
    if move.to_pos in _ROOK_CORNERS:
        rights &= ~_ROOK_CORNERS[move.to_pos]
    return rights


def _next_en_passant_target(move: Move, piece: Piece) -> Position | None:
    if piece.kind == PieceKind.PAWN and abs(move.to_pos.row - move.from_pos.row) == 2:
        return Position((move.from_pos.row + move.to_pos.row) // 2, move.from_pos.col)
    return None


def apply_move(state: GameState, move: Move) -> GameState:
    """Return the snapshot that follows *state* after *move*.

    *move* must come from ``legal_moves(state, move.from_pos)``; it is not
    re-validated here. Use :func:`apply_validated_move` for untrusted input.
    """
    board = state.board.copy()
    captured = relocate_pieces(board, move)
    piece = state.board[move.from_pos]
    assert piece is not None

    captured_pieces = state.captured_pieces
    if captured is not None:
        captured_pieces = captured_pieces.with_capture(captured)

    next_turn = state.turn.opposite
    successor = GameState(
        board=board,
        turn=next_turn,
        castling_rights=_next_castling_rights(state.castling_rights, move, piece),
        en_passant_target=_next_en_passant_target(move, piece),
        captured_pieces=captured_pieces,
        move_history=state.move_history + (move,),
    )

    status, winner = evaluate_status(board, next_turn, has_any_legal_move(successor))
    _LOGGER.debug("%s %s -> %s to move, %s", state.turn, move, next_turn, status)
    return replace(successor, status=status, winner=winner)


def apply_validated_move(state: GameState, move: Move) -> GameState:
    """Like :func:`apply_move`, but rejects moves that are not legal.

    Raises:
        GameOverError: *state* is checkmate or stalemate.
        InvalidMoveError: *move* leaves the board or is not among the legal
            moves from its origin.
    """
    if state.is_game_over:
        raise GameOverError(f"Game is over ({state.status}); {move} not accepted")
    if not (in_bounds(move.from_pos) and in_bounds(move.to_pos)):
        raise InvalidMoveError(f"Move leaves the board: {move!r}")
    if move not in legal_moves(state, move.from_pos):
        raise InvalidMoveError(f"Illegal move {move} for {state.turn}")
    return apply_move(state, move)
