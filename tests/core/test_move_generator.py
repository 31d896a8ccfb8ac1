"""Tests for pseudo-legal generation, attack detection and perft counts.

Perft reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookery.core.enums import Color, PieceKind
from rookery.core.errors import OutOfBoundsError
from rookery.core.fen import state_from_fen
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator, square_attacked_by
from rookery.core.rules import all_legal_moves
from rookery.core.state import GameState
from rookery.core.transition import apply_move
from rookery.core.types import Position, parse_square


def _targets(state: GameState, square: str) -> set[str]:
    moves = MoveGenerator(state).pseudo_legal_moves(parse_square(square))
    return {m.to_pos.name for m in moves}


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes at *depth* by chaining immutable snapshots."""
    if depth == 0:
        return 1
    moves = all_legal_moves(state)
    if depth == 1:
        return len(moves)
    return sum(perft(apply_move(state, move), depth - 1) for move in moves)


class TestOrigin:
    @pytest.mark.parametrize(
        "origin", [Position(-1, 4), Position(-2, 4), Position(8, 0), Position(3, 8)]
    )
    def test_off_board_origin_raises(
        self, initial_state: GameState, origin: Position
    ) -> None:
        with pytest.raises(OutOfBoundsError):
            MoveGenerator(initial_state).pseudo_legal_moves(origin)

    def test_empty_square_yields_nothing(self, initial_state: GameState) -> None:
        assert MoveGenerator(initial_state).pseudo_legal_moves(parse_square("e4")) == []

    def test_opponent_piece_yields_nothing(self, initial_state: GameState) -> None:
        assert MoveGenerator(initial_state).pseudo_legal_moves(parse_square("e7")) == []

    def test_start_position_count(self, initial_state: GameState) -> None:
        assert len(MoveGenerator(initial_state).all_pseudo_legal_moves()) == 20


class TestSliders:
    def test_rook_on_empty_board(self) -> None:
        state = state_from_fen("k7/8/8/8/3R4/8/8/7K w - - 0 1")
        assert len(_targets(state, "d4")) == 14

    def test_bishop_on_empty_board(self) -> None:
        state = state_from_fen("k7/8/8/8/3B4/8/8/7K w - - 0 1")
        assert len(_targets(state, "d4")) == 13

    def test_queen_on_empty_board(self) -> None:
        state = state_from_fen("k7/8/8/8/3Q4/8/8/7K w - - 0 1")
        assert len(_targets(state, "d4")) == 27

    def test_ray_stops_at_enemy_with_capture(self) -> None:
        state = state_from_fen("k7/8/3p4/8/3R4/8/8/7K w - - 0 1")
        targets = _targets(state, "d4")
        assert "d6" in targets
        assert "d7" not in targets
        assert "d5" in targets

    def test_ray_stops_before_friend(self) -> None:
        state = state_from_fen("k7/8/3P4/8/3R4/8/8/7K w - - 0 1")
        targets = _targets(state, "d4")
        assert "d5" in targets
        assert "d6" not in targets

    def test_start_position_sliders_blocked(self, initial_state: GameState) -> None:
        for square in ("a1", "c1", "d1", "f1", "h1"):
            assert _targets(initial_state, square) == set()


class TestLeapers:
    def test_knight_corner(self) -> None:
        state = state_from_fen("7k/8/8/8/8/8/8/N6K w - - 0 1")
        assert _targets(state, "a1") == {"b3", "c2"}

    def test_knight_center(self) -> None:
        state = state_from_fen("7k/8/8/8/3N4/8/8/7K w - - 0 1")
        assert len(_targets(state, "d4")) == 8

    def test_knight_from_start(self, initial_state: GameState) -> None:
        assert _targets(initial_state, "g1") == {"f3", "h3"}

    def test_king_never_steps_onto_friend(self) -> None:
        state = state_from_fen("7k/8/8/8/8/8/3PP3/3QK3 w - - 0 1")
        assert _targets(state, "e1") == {"f1", "f2"}


class TestPawns:
    def test_single_and_double_push_order(self, initial_state: GameState) -> None:
        moves = MoveGenerator(initial_state).pseudo_legal_moves(parse_square("e2"))
        assert [m.to_pos.name for m in moves] == ["e3", "e4"]

    def test_double_push_needs_both_squares_empty(self) -> None:
        state = state_from_fen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
        assert _targets(state, "e2") == {"e3"}
        state = state_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert _targets(state, "e2") == set()

    def test_double_push_only_from_start_row(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
        assert _targets(state, "e3") == {"e4"}

    def test_diagonal_only_as_capture(self) -> None:
        state = state_from_fen("4k3/8/8/3p1P2/4P3/8/8/4K3 w - - 0 1")
        assert _targets(state, "e4") == {"e5", "d5"}

    def test_black_pawn_moves_down_the_grid(self) -> None:
        state = state_from_fen("4k3/3p4/8/8/8/8/8/4K3 b - - 0 1")
        assert _targets(state, "d7") == {"d6", "d5"}

    def test_en_passant_flagged(self) -> None:
        state = state_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        moves = MoveGenerator(state).pseudo_legal_moves(parse_square("e5"))
        ep = [m for m in moves if m.is_en_passant]
        assert ep == [Move(parse_square("e5"), parse_square("d6"), is_en_passant=True)]

    def test_en_passant_requires_enemy_pawn_beside(self) -> None:
        state = state_from_fen("4k3/8/8/3NP3/8/8/8/4K3 w - d6 0 1")
        moves = MoveGenerator(state).pseudo_legal_moves(parse_square("e5"))
        assert not any(m.is_en_passant for m in moves)
        assert {m.to_pos.name for m in moves} == {"e6"}

    def test_promotion_emits_each_kind(self) -> None:
        state = state_from_fen("1r2k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = MoveGenerator(state).pseudo_legal_moves(parse_square("a7"))
        assert len(moves) == 8
        pushes = [m.promotion for m in moves if m.to_pos == parse_square("a8")]
        assert pushes == [
            PieceKind.QUEEN,
            PieceKind.ROOK,
            PieceKind.BISHOP,
            PieceKind.KNIGHT,
        ]


class TestSquareAttacked:
    def test_white_pawn_attacks_forward_diagonals(self) -> None:
        state = state_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1")
        board = state.board
        assert square_attacked_by(board, parse_square("d5"), Color.WHITE)
        assert square_attacked_by(board, parse_square("f5"), Color.WHITE)
        assert not square_attacked_by(board, parse_square("e5"), Color.WHITE)
        assert not square_attacked_by(board, parse_square("d3"), Color.WHITE)

    def test_black_pawn_attacks_forward_diagonals(self) -> None:
        state = state_from_fen("4k3/8/8/4p3/8/8/8/4K3 w - - 0 1")
        board = state.board
        assert square_attacked_by(board, parse_square("d4"), Color.BLACK)
        assert square_attacked_by(board, parse_square("f4"), Color.BLACK)
        assert not square_attacked_by(board, parse_square("d6"), Color.BLACK)

    def test_attack_independent_of_turn(self) -> None:
        white_to_move = state_from_fen("4k3/8/8/4p3/8/8/8/4K3 w - - 0 1")
        black_to_move = state_from_fen("4k3/8/8/4p3/8/8/8/4K3 b - - 0 1")
        sq = parse_square("d4")
        assert square_attacked_by(white_to_move.board, sq, Color.BLACK)
        assert square_attacked_by(black_to_move.board, sq, Color.BLACK)

    def test_knight_and_king(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
        board = state.board
        assert square_attacked_by(board, parse_square("b3"), Color.WHITE)
        assert square_attacked_by(board, parse_square("d2"), Color.WHITE)
        assert not square_attacked_by(board, parse_square("a2"), Color.WHITE)

    def test_ray_blocked_by_any_piece(self) -> None:
        state = state_from_fen("4k3/8/8/8/R7/n7/8/4K3 w - - 0 1")
        board = state.board
        assert square_attacked_by(board, parse_square("a3"), Color.WHITE)
        assert not square_attacked_by(board, parse_square("a2"), Color.WHITE)

    def test_diagonal_slider(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/2B1K3 w - - 0 1")
        board = state.board
        assert square_attacked_by(board, parse_square("h6"), Color.WHITE)
        assert not square_attacked_by(board, parse_square("c2"), Color.WHITE)

    def test_occupied_target_still_counts(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/3p4/R3K3 w - - 0 1")
        assert square_attacked_by(state.board, Position(6, 3), Color.WHITE)


class TestPerftStarting:
    def test_depth_1(self, initial_state: GameState) -> None:
        assert perft(initial_state, 1) == 20

    def test_depth_2(self, initial_state: GameState) -> None:
        assert perft(initial_state, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self, initial_state: GameState) -> None:
        assert perft(initial_state, 3) == 8_902


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(state_from_fen(KIWIPETE), 2) == 2_039


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS3), 2) == 191

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(state_from_fen(POS3), 3) == 2_812


# ── Position 4: many promotions, castling rights lost on both sides ─────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS4), 2) == 264


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(state_from_fen(POS5), 1) == 44

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(state_from_fen(POS5), 2) == 1_486
