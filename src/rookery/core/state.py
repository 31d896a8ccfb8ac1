"""GameState - immutable snapshot of a game between two moves."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, GameStatus
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Position


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Pieces taken off the board, keyed by the captured piece's own color.

    ``white`` therefore holds the trophies won by black, in capture order.
    """

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def of_color(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def with_capture(self, piece: Piece) -> CapturedPieces:
        if piece.color == Color.WHITE:
            return CapturedPieces(self.white + (piece,), self.black)
        return CapturedPieces(self.white, self.black + (piece,))

    def __len__(self) -> int:
        return len(self.white) + len(self.black)


@dataclass(frozen=True, slots=True)
class GameState:
    """Full game snapshot: board, side to move, rights, captures, status.

    Snapshots are never modified after construction; transitions build a new
    one with its own board. ``winner`` is set if and only if ``status`` is
    :attr:`GameStatus.CHECKMATE`.
    """

    board: Board
    turn: Color = Color.WHITE
    castling_rights: CastlingRights = CastlingRights.ALL
    en_passant_target: Position | None = None
    captured_pieces: CapturedPieces = field(default_factory=CapturedPieces)
    status: GameStatus = GameStatus.PLAYING
    winner: Color | None = None
    move_history: tuple[Move, ...] = ()

    def piece_at(self, pos: Position) -> Piece | None:
        return self.board.piece_at(pos)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None


def create_initial_state() -> GameState:
    """Standard start: white to move, full rights, no captures."""
    return GameState(board=Board.initial())
