"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import PieceKind
from rookery.core.types import Position, parse_square

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}
_PROMO_KINDS: dict[str, PieceKind] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Castling is a single king move flagged ``is_castling``; the rook is
    relocated when the move is executed.
    """

    from_pos: Position
    to_pos: Position
    promotion: PieceKind | None = None
    is_castling: bool = False
    is_en_passant: bool = False

    def __str__(self) -> str:
        base = f"{self.from_pos.name}{self.to_pos.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse coordinates like ``'e2e4'`` or ``'e7e8q'``.

        Castling and en-passant flags are not recoverable from the text alone;
        match the result against generated moves by squares and promotion.
        """
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid move text: {text!r}")
        promotion: PieceKind | None = None
        if len(text) == 5:
            try:
                promotion = _PROMO_KINDS[text[4]]
            except KeyError:
                raise ValueError(f"Invalid promotion in move text: {text!r}") from None
        return cls(parse_square(text[:2]), parse_square(text[2:4]), promotion)

    def same_squares(self, other: Move) -> bool:
        """Whether *other* moves between the same squares with the same promotion."""
        return (
            self.from_pos == other.from_pos
            and self.to_pos == other.to_pos
            and self.promotion == other.promotion
        )
