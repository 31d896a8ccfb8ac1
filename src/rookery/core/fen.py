"""FEN parsing and serialisation of :class:`GameState` snapshots."""

from __future__ import annotations

from dataclasses import replace

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceKind
from rookery.core.errors import FenError
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.core.types import BOARD_SIZE, Position, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _parse_placement(placement: str, fen: str) -> Board:
    rows = placement.split("/")
    if len(rows) != BOARD_SIZE:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board.empty()
    for row, row_text in enumerate(rows):
        col = 0
        for ch in row_text:
            if ch in "12345678":
                col += int(ch)
            else:
                if col >= BOARD_SIZE:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[Position(row, col)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise FenError(f"{exc}: {fen!r}") from None
                col += 1
            if col > BOARD_SIZE:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if col != BOARD_SIZE:
            raise FenError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        if board.count(color, PieceKind.KING) != 1:
            raise FenError(f"FEN must contain exactly one {color} king: {fen!r}")
    return board


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState`.

    The halfmove/fullmove clock fields are accepted but not tracked. Status
    and winner are derived from the position.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise FenError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Position | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FenError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        # Square behind the pawn that just double-pushed.
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise FenError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5-6. Clocks (optional, validated only)
    for text in parts[4:]:
        if not text.isdecimal():
            raise FenError(f"Invalid FEN clock field: {text!r}")

    state = GameState(
        board=board,
        turn=side,
        castling_rights=castling,
        en_passant_target=ep,
    )
    status, winner = Rules.game_status(state)
    return replace(state, status=status, winner=winner)


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    # 1. Board
    rows: list[str] = []
    for row in range(BOARD_SIZE):
        empty = 0
        text = ""
        for col in range(BOARD_SIZE):
            piece = state.board[Position(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.turn == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if state.castling_rights & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = state.en_passant_target
    ep_str = square_name(ep) if ep is not None else "-"

    fullmove = 1 + state.ply_count // 2
    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove}"
