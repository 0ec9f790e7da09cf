"""Tests for line extraction, pattern recognition and pattern scoring."""

import pytest

from heurigomoku.agent.patterns import (
    DIRECTIONS,
    FIVE_SCORE,
    WINDOW_SIZE,
    Segment,
    extract_line,
    find_patterns,
    pattern_score,
    score_for_player,
    score_patterns,
)
from heurigomoku.game.board import Board
from heurigomoku.game.types import Cell, InvalidCoordinateError, Player, Point

B = Player.BLACK
W = Player.WHITE
E = Cell.EMPTY
X = Cell.BOUNDARY


# ---------------------------------------------------------------------------
# Line extraction
# ---------------------------------------------------------------------------

class TestExtractLine:
    def test_window_width(self):
        line = extract_line(Board(), Point(7, 7), (0, 1), B)
        assert len(line) == WINDOW_SIZE == 9

    def test_center_is_hypothetical_stone(self):
        line = extract_line(Board(), Point(7, 7), (1, 1), W)
        assert line == [E, E, E, E, W, E, E, E, E]

    def test_reads_both_signs(self):
        b = Board()
        b.place(Point(7, 3), B)
        b.place(Point(7, 11), W)
        b.place(Point(7, 8), B)
        line = extract_line(b, Point(7, 7), (0, 1), B)
        assert line == [B, E, E, E, B, B, E, E, W]

    def test_vertical_and_anti_diagonal(self):
        b = Board()
        b.place(Point(9, 7), W)
        b.place(Point(8, 6), B)
        assert extract_line(b, Point(7, 7), (1, 0), B)[6] is W
        assert extract_line(b, Point(7, 7), (1, -1), B)[5] is B

    def test_boundary_past_edge(self):
        line = extract_line(Board(), Point(0, 1), (0, 1), B)
        assert line[:3] == [X, X, X]
        assert line[3] is E
        assert line[4] is B

    def test_corner_diagonal(self):
        line = extract_line(Board(), Point(14, 14), (1, 1), B)
        assert line == [E, E, E, E, B, X, X, X, X]

    def test_boundary_distinct_from_empty(self):
        line = extract_line(Board(5), Point(2, 2), (0, 1), B)
        assert line == [X, X, E, E, B, E, E, X, X]

    def test_off_grid_raises(self):
        with pytest.raises(InvalidCoordinateError):
            extract_line(Board(), Point(-1, 4), (0, 1), B)

    def test_does_not_mutate_board(self):
        b = Board()
        b.place(Point(7, 8), W)
        extract_line(b, Point(7, 7), (0, 1), B)
        assert b.is_empty(Point(7, 7))
        assert b.occupied_count == 1


# ---------------------------------------------------------------------------
# Pattern recognition
# ---------------------------------------------------------------------------

class TestFindPatterns:
    def test_single_open_stone(self):
        assert find_patterns([E, E, E, E, B, E, E, E, E], B) == [Segment(1, 2)]

    def test_open_three(self):
        assert find_patterns([E, E, E, B, B, B, E, E, E], B) == [Segment(3, 2)]

    def test_blocked_by_opponent(self):
        assert find_patterns([E, E, W, B, B, B, E, E, E], B) == [Segment(3, 1)]

    def test_blocked_by_boundary(self):
        assert find_patterns([X, X, X, X, B, B, E, E, E], B) == [Segment(2, 1)]

    def test_closed_both_ends(self):
        assert find_patterns([E, E, W, B, B, B, B, W, E], B) == [Segment(4, 0)]

    def test_two_runs_scored_separately(self):
        assert find_patterns([E, E, E, B, E, B, E, E, E], B) == [
            Segment(1, 2),
            Segment(1, 2),
        ]

    def test_run_at_window_start_is_closed_left(self):
        assert find_patterns([B, B, E, E, B, E, E, E, E], B) == [
            Segment(2, 1),
            Segment(1, 2),
        ]

    def test_run_at_window_end_is_closed_right(self):
        assert find_patterns([E, E, E, E, B, E, E, B, B], B) == [
            Segment(1, 2),
            Segment(2, 1),
        ]

    def test_five_run(self):
        assert find_patterns([W, B, B, B, B, B, W, E, E], B) == [Segment(5, 0)]

    def test_ignores_other_player(self):
        assert find_patterns([W, W, E, E, B, E, W, W, W], W) == [
            Segment(2, 1),
            Segment(3, 1),
        ]

    def test_no_runs(self):
        assert find_patterns([E, E, E, E, W, E, E, E, E], B) == []


# ---------------------------------------------------------------------------
# Pattern scoring
# ---------------------------------------------------------------------------

class TestPatternScore:
    def test_five_is_always_max(self):
        assert pattern_score(5, 0) == FIVE_SCORE
        assert pattern_score(5, 1) == FIVE_SCORE
        assert pattern_score(5, 2) == FIVE_SCORE
        assert pattern_score(9, 0) == FIVE_SCORE  # saturates

    def test_reference_weights(self):
        assert pattern_score(4, 2) == 10_000
        assert pattern_score(4, 1) == 1_000
        assert pattern_score(3, 2) == 1_000
        assert pattern_score(3, 1) == 100
        assert pattern_score(2, 2) == 100
        assert pattern_score(2, 1) == 10
        assert pattern_score(1, 2) == 10

    def test_unscored_patterns(self):
        assert pattern_score(1, 1) == 0
        assert pattern_score(1, 0) == 0
        assert pattern_score(2, 0) == 0
        assert pattern_score(4, 0) == 0

    def test_lone_open_stone_equals_blocked_pair(self):
        assert pattern_score(1, 2) == pattern_score(2, 1)

    def test_monotonic_in_length(self):
        assert pattern_score(4, 2) > pattern_score(3, 2) > pattern_score(2, 2)
        assert pattern_score(4, 1) > pattern_score(3, 1) > pattern_score(2, 1)

    def test_monotonic_in_open_ends(self):
        for length in range(1, 5):
            assert pattern_score(length, 2) >= pattern_score(length, 1) >= pattern_score(length, 0)

    def test_score_patterns_sums(self):
        assert score_patterns([Segment(3, 2), Segment(1, 2)]) == 1_010
        assert score_patterns([]) == 0

    def test_window_monotonicity(self):
        four = score_patterns(find_patterns([E, E, B, B, B, B, E, E, E], B))
        three = score_patterns(find_patterns([E, E, E, B, B, B, E, E, E], B))
        two = score_patterns(find_patterns([E, E, E, B, B, E, E, E, E], B))
        assert four > three > two


class TestScoreForPlayer:
    def test_isolated_point(self):
        # Lone open stone on each of the four axes
        assert score_for_player(Board(), Point(7, 7), B) == 4 * 10

    def test_corner_point(self):
        # All four axes have a boundary on at least one side
        assert score_for_player(Board(), Point(0, 0), B) == 0

    def test_completing_five(self):
        b = Board()
        for c in range(5, 9):
            b.place(Point(7, c), B)
        assert score_for_player(b, Point(7, 4), B) == FIVE_SCORE + 3 * 10

    def test_opponent_perspective(self):
        b = Board()
        for c in range(5, 8):
            b.place(Point(7, c), W)
        # Black at (7,4) touches the white three: blocked single + three lone open axes
        assert score_for_player(b, Point(7, 4), B) == 3 * 10
        # White at (7,4) makes an open four
        assert score_for_player(b, Point(7, 4), W) == 10_000 + 3 * 10

    def test_off_grid_raises(self):
        with pytest.raises(InvalidCoordinateError):
            score_for_player(Board(), Point(0, 15), B)

    def test_all_four_axes_counted(self):
        assert len(DIRECTIONS) == 4
        b = Board()
        b.place(Point(6, 7), B)
        b.place(Point(7, 6), B)
        b.place(Point(6, 6), B)
        b.place(Point(6, 8), B)
        # Open pair on each axis through (7,7)
        assert score_for_player(b, Point(7, 7), B) == 4 * 100
