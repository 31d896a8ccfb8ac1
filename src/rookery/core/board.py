"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from rookery.core.enums import Color, PieceKind
from rookery.core.errors import InvariantViolation, OutOfBoundsError
from rookery.core.piece import Piece
from rookery.core.types import ALL_POSITIONS, BOARD_SIZE, Position, in_bounds

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """8x8 grid of optional pieces, stored row-major.

    A board held by a :class:`~rookery.core.state.GameState` is read-only;
    mutation happens only on a private :meth:`copy`.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        """Unchecked lookup; callers guarantee *pos* is on the board."""
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._grid[pos.row][pos.col] = piece

    def piece_at(self, pos: Position) -> Piece | None:
        """Checked lookup."""
        if not in_bounds(pos):
            raise OutOfBoundsError(f"Position off the board: {pos}")
        return self._grid[pos.row][pos.col]

    def set_at(self, pos: Position, piece: Piece | None) -> None:
        """Checked mutation. Only call on a board you own."""
        if not in_bounds(pos):
            raise OutOfBoundsError(f"Position off the board: {pos}")
        self._grid[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self._grid[pos.row][pos.col] is None

    # -- Query helpers ------------------------------------------------------

    def find_king(self, color: Color) -> Position:
        """Return the king square for *color*."""
        for pos in ALL_POSITIONS:
            piece = self._grid[pos.row][pos.col]
            if (
                piece is not None
                and piece.color == color
                and piece.kind == PieceKind.KING
            ):
                return pos
        raise InvariantViolation(f"No {color.name} king on board")

    def all_pieces(self, color: Color) -> list[tuple[Position, Piece]]:
        """All of *color*'s pieces with their squares, in row-major order."""
        found: list[tuple[Position, Piece]] = []
        for pos in ALL_POSITIONS:
            piece = self._grid[pos.row][pos.col]
            if piece is not None and piece.color == color:
                found.append((pos, piece))
        return found

    def count(self, color: Color, kind: PieceKind) -> int:
        return sum(1 for _, piece in self.all_pieces(color) if piece.kind == kind)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        """Deep, independent copy (pieces are immutable values)."""
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b[Position(Color.BLACK.back_row, col)] = Piece(Color.BLACK, kind)
            b[Position(Color.BLACK.pawn_row, col)] = Piece(Color.BLACK, PieceKind.PAWN)
            b[Position(Color.WHITE.pawn_row, col)] = Piece(Color.WHITE, PieceKind.PAWN)
            b[Position(Color.WHITE.back_row, col)] = Piece(Color.WHITE, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
