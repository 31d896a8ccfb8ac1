"""Board coordinates and naming helpers.

Grid layout (row 0 at the top, from white's point of view)::

    row 0 -> rank 8 (black's back rank)
    row 7 -> rank 1 (white's back rank)
    col 0 -> a-file, col 7 -> h-file
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """A square on the board, addressed by grid row and column."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Position:
        """Square displaced by (*d_row*, *d_col*); may be out of bounds."""
        return Position(self.row + d_row, self.col + d_col)

    @property
    def name(self) -> str:
        """Algebraic square name, e.g. Position(6, 4) -> 'e2'."""
        return square_name(self)

    def __str__(self) -> str:
        return self.name if in_bounds(self) else f"({self.row}, {self.col})"


def in_bounds(pos: Position) -> bool:
    """Whether *pos* lies on the 8x8 board."""
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. Position(7, 0) -> 'a1'."""
    return chr(ord("a") + pos.col) + str(BOARD_SIZE - pos.row)


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' -> Position(4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)
