"""Legality filtering and check / checkmate / stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, GameStatus
from rookery.core.errors import InvariantViolation
from rookery.core.move_generator import MoveGenerator, square_attacked_by
from rookery.core.types import Position

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move
    from rookery.core.piece import Piece
    from rookery.core.state import GameState


# -- Board-level relocation -------------------------------------------------


def en_passant_victim(move: Move) -> Position:
    """Square of the pawn taken by an en-passant *move*."""
    return Position(move.from_pos.row, move.to_pos.col)


def castling_rook_squares(move: Move) -> tuple[Position, Position]:
    """(from, to) squares of the rook in a castling *move*."""
    row = move.from_pos.row
    if move.to_pos.col > move.from_pos.col:
        return Position(row, 7), Position(row, 5)
    return Position(row, 0), Position(row, 3)


def relocate_pieces(board: Board, move: Move) -> Piece | None:
    """Carry out *move* on *board* in place and return the captured piece.

    Handles en-passant removal, the castling rook and promotion. Only ever
    call this on a board you own.
    """
    piece = board[move.from_pos]
    if piece is None:
        raise InvariantViolation(f"No piece on {move.from_pos}")

    if move.is_en_passant:
        victim_sq = en_passant_victim(move)
        captured = board[victim_sq]
        board[victim_sq] = None
    else:
        captured = board[move.to_pos]

    if move.is_castling:
        rook_from, rook_to = castling_rook_squares(move)
        board[rook_to] = board[rook_from]
        board[rook_from] = None

    board[move.from_pos] = None
    board[move.to_pos] = (
        piece if move.promotion is None else piece.promoted(move.promotion)
    )
    return captured


def simulate_move(board: Board, move: Move) -> Board:
    """Board after *move*, on a fresh copy. Rights, turn and history untouched."""
    scratch = board.copy()
    relocate_pieces(scratch, move)
    return scratch


# -- Check detection ----------------------------------------------------------


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return square_attacked_by(board, board.find_king(color), color.opposite)


# -- Legal move generation ----------------------------------------------------


def legal_moves(state: GameState, origin: Position) -> list[Move]:
    """Moves for the piece on *origin* that do not leave its own king attacked.

    Order matches pseudo-legal generation order.
    """
    mover = state.turn
    return [
        move
        for move in MoveGenerator(state).pseudo_legal_moves(origin)
        if not is_in_check(simulate_move(state.board, move), mover)
    ]


def all_legal_moves(state: GameState) -> list[Move]:
    """Legal moves for every piece of the side to move, row-major by origin."""
    moves: list[Move] = []
    for pos, _ in state.board.all_pieces(state.turn):
        moves.extend(legal_moves(state, pos))
    return moves


def has_any_legal_move(state: GameState) -> bool:
    return any(legal_moves(state, pos) for pos, _ in state.board.all_pieces(state.turn))


def evaluate_status(
    board: Board, side_to_move: Color, has_move: bool
) -> tuple[GameStatus, Color | None]:
    """(status, winner) for *side_to_move*; winner is set only on checkmate."""
    in_check = is_in_check(board, side_to_move)
    if not has_move:
        if in_check:
            return GameStatus.CHECKMATE, side_to_move.opposite
        return GameStatus.STALEMATE, None
    if in_check:
        return GameStatus.CHECK, None
    return GameStatus.PLAYING, None


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return is_in_check(state.board, state.turn)

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        return Rules.is_in_check(state) and not has_any_legal_move(state)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        return not Rules.is_in_check(state) and not has_any_legal_move(state)

    @staticmethod
    def game_status(state: GameState) -> tuple[GameStatus, Color | None]:
        """Recompute (status, winner) from scratch for the side to move."""
        return evaluate_status(state.board, state.turn, has_any_legal_move(state))
