"""Pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rookery.core.enums import PROMOTION_KINDS, CastlingRights, Color, PieceKind
from rookery.core.move import Move
from rookery.core.types import ALL_POSITIONS, Position, in_bounds

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.state import GameState


Offsets = tuple[tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: Offsets = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
QUEEN_DIRS: Offsets = ROOK_DIRS + BISHOP_DIRS

_KING_HOME_COL = 4
_KINGSIDE_ROOK_COL = 7
_QUEENSIDE_ROOK_COL = 0


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: Offsets) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in ALL_POSITIONS:
        moves: list[Position] = []
        for dr, dc in offsets:
            to_pos = pos.offset(dr, dc)
            if in_bounds(to_pos):
                moves.append(to_pos)
        targets[pos] = tuple(moves)
    return targets


def _build_rays(
    directions: Offsets,
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for dr, dc in directions:
            ray: list[Position] = []
            to_pos = pos.offset(dr, dc)
            while in_bounds(to_pos):
                ray.append(to_pos)
                to_pos = to_pos.offset(dr, dc)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_ROOK_RAYS = _build_rays(ROOK_DIRS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_PieceGen = Callable[[Position, Color, list[Move]], None]

_ROOK_LIKE = (PieceKind.ROOK, PieceKind.QUEEN)
_BISHOP_LIKE = (PieceKind.BISHOP, PieceKind.QUEEN)


# -- Attack detection -------------------------------------------------------


def square_attacked_by(board: Board, pos: Position, by_color: Color) -> bool:
    """Is *pos* attacked by any piece of *by_color*?

    Occupancy of *pos* itself is irrelevant, so the same query serves check
    detection and castling-path safety.
    """
    # A pawn attacks diagonally forward, so an attacking pawn sits one row
    # *behind* pos from its own point of view.
    pawn_row = pos.row - by_color.forward
    for dc in (-1, 1):
        from_pos = Position(pawn_row, pos.col + dc)
        if in_bounds(from_pos):
            piece = board[from_pos]
            if (
                piece is not None
                and piece.color == by_color
                and piece.kind == PieceKind.PAWN
            ):
                return True

    for targets, kind in (
        (_KNIGHT_TARGETS[pos], PieceKind.KNIGHT),
        (_KING_TARGETS[pos], PieceKind.KING),
    ):
        for from_pos in targets:
            piece = board[from_pos]
            if piece is not None and piece.color == by_color and piece.kind == kind:
                return True

    for rays, kinds in (
        (_ROOK_RAYS[pos], _ROOK_LIKE),
        (_BISHOP_RAYS[pos], _BISHOP_LIKE),
    ):
        for ray in rays:
            for from_pos in ray:
                piece = board[from_pos]
                if piece is None:
                    continue
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break

    return False


# -- Generator ---------------------------------------------------------------


class MoveGenerator:
    """Generates pseudo-legal moves for pieces in a :class:`GameState`.

    Pseudo-legal moves obey piece movement and occupancy but may leave the
    mover's own king attacked; :mod:`rookery.core.rules` filters those out.
    The generator never mutates the state.
    """

    __slots__ = ("_state", "_board", "_dispatch")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._board = state.board
        self._dispatch: dict[PieceKind, _PieceGen] = {
            PieceKind.PAWN: self._gen_pawn,
            PieceKind.KNIGHT: self._gen_knight,
            PieceKind.BISHOP: self._gen_bishop,
            PieceKind.ROOK: self._gen_rook,
            PieceKind.QUEEN: self._gen_queen,
            PieceKind.KING: self._gen_king,
        }

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, origin: Position) -> list[Move]:
        """Pseudo-legal moves for the piece on *origin*.

        Empty when *origin* is empty or holds a piece of the side not to move.
        Raises OutOfBoundsError when *origin* is off the board.
        """
        piece = self._board.piece_at(origin)
        if piece is None or piece.color != self._state.turn:
            return []
        moves: list[Move] = []
        self._dispatch[piece.kind](origin, piece.color, moves)
        return moves

    def all_pseudo_legal_moves(self) -> list[Move]:
        """Pseudo-legal moves for every piece of the side to move."""
        moves: list[Move] = []
        for pos, _ in self._board.all_pieces(self._state.turn):
            moves.extend(self.pseudo_legal_moves(pos))
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Position, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward = color.forward
        promo_row = color.opposite.back_row

        one_step = sq.offset(forward, 0)
        if in_bounds(one_step) and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promo_row, moves)
            if sq.row == color.pawn_row:
                two_step = sq.offset(2 * forward, 0)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        ep_target = self._state.en_passant_target
        for dc in (-1, 1):
            cap_sq = sq.offset(forward, dc)
            if not in_bounds(cap_sq):
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promo_row, moves)
            elif cap_sq == ep_target and self._is_en_passant_victim(sq, cap_sq, color):
                moves.append(Move(sq, cap_sq, is_en_passant=True))

    def _is_en_passant_victim(
        self, sq: Position, cap_sq: Position, color: Color
    ) -> bool:
        victim = self._board[Position(sq.row, cap_sq.col)]
        return (
            victim is not None
            and victim.color != color
            and victim.kind == PieceKind.PAWN
        )

    @staticmethod
    def _add_pawn_move(
        sq: Position, to_sq: Position, promo_row: int, moves: list[Move]
    ) -> None:
        if to_sq.row == promo_row:
            for kind in PROMOTION_KINDS:
                moves.append(Move(sq, to_sq, promotion=kind))
        else:
            moves.append(Move(sq, to_sq))

    def _gen_knight(self, sq: Position, color: Color, moves: list[Move]) -> None:
        self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)

    def _gen_bishop(self, sq: Position, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)

    def _gen_rook(self, sq: Position, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)

    def _gen_queen(self, sq: Position, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)

    def _gen_steps(
        self,
        sq: Position,
        color: Color,
        targets: tuple[Position, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Position,
        color: Color,
        rays: tuple[tuple[Position, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_king(self, sq: Position, color: Color, moves: list[Move]) -> None:
        self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
        self._gen_castling(sq, color, moves)

    def _gen_castling(self, king_sq: Position, color: Color, moves: list[Move]) -> None:
        row = color.back_row
        if king_sq != Position(row, _KING_HOME_COL):
            return

        rights = self._state.castling_rights
        if rights & CastlingRights.kingside(color):
            self._try_castle(king_sq, color, _KINGSIDE_ROOK_COL, moves)
        if rights & CastlingRights.queenside(color):
            self._try_castle(king_sq, color, _QUEENSIDE_ROOK_COL, moves)

    def _try_castle(
        self, king_sq: Position, color: Color, rook_col: int, moves: list[Move]
    ) -> None:
        board = self._board
        row = king_sq.row
        rook = board[Position(row, rook_col)]
        if rook is None or rook.color != color or rook.kind != PieceKind.ROOK:
            return

        step = 1 if rook_col > king_sq.col else -1
        between = range(king_sq.col + step, rook_col, step)
        if any(not board.is_empty(Position(row, col)) for col in between):
            return

        # King's square, the square it crosses and its destination.
        opponent = color.opposite
        path = (king_sq.col, king_sq.col + step, king_sq.col + 2 * step)
        if any(square_attacked_by(board, Position(row, col), opponent) for col in path):
            return

        to_sq = Position(row, king_sq.col + 2 * step)
        moves.append(Move(king_sq, to_sq, is_castling=True))
