"""
Tests for board topology.

Tests:
- Position validity and parsing
- Adjacency (symmetry, corners vs midpoints)
- Mill lines
"""

import pytest

from ..engine_core.topology import (
    ALL_MILLS,
    ALL_POSITIONS,
    Position,
    adjacent_positions,
    is_adjacent,
    mills_containing,
)


class TestPosition:
    """Tests for the Position value type."""

    def test_exactly_24_positions(self):
        """The board has 24 distinct positions."""
        assert len(ALL_POSITIONS) == 24
        assert len(set(ALL_POSITIONS)) == 24

    @pytest.mark.parametrize("ring,point", [(-1, 0), (3, 0), (0, 8), (0, -1)])
    def test_invalid_coordinates_rejected(self, ring, point):
        """Out-of-range coordinates cannot be built."""
        with pytest.raises(ValueError):
            Position(ring, point)

    def test_value_equality(self):
        """Positions compare and hash by value."""
        assert Position(1, 4) == Position(1, 4)
        assert len({Position(1, 4), Position(1, 4)}) == 1

    def test_parse_and_key(self):
        """Wire keys parse back to the same position."""
        assert Position.parse("2_5") == Position(2, 5)
        assert Position.parse("2,5") == Position(2, 5)
        assert Position(2, 5).key == "2_5"

    @pytest.mark.parametrize("text", ["", "1", "a_b", "1_2_3", "3_0"])
    def test_parse_rejects_garbage(self, text):
        """Malformed keys raise ValueError."""
        with pytest.raises(ValueError):
            Position.parse(text)


class TestAdjacency:
    """Tests for adjacent_positions."""

    def test_symmetric(self):
        """q adjacent to p implies p adjacent to q."""
        for p in ALL_POSITIONS:
            for q in adjacent_positions(p):
                assert p in adjacent_positions(q)

    def test_corner_has_two_neighbors(self):
        """Corners only connect within their ring."""
        assert set(adjacent_positions(Position(1, 3))) == {Position(1, 2), Position(1, 4)}

    def test_middle_ring_midpoint_has_four_neighbors(self):
        """Midpoints on ring 1 connect to both other rings."""
        assert set(adjacent_positions(Position(1, 0))) == {
            Position(1, 7), Position(1, 1), Position(0, 0), Position(2, 0),
        }

    def test_outer_midpoint_has_three_neighbors(self):
        """Ring 0 midpoints only connect inward."""
        assert set(adjacent_positions(Position(0, 6))) == {
            Position(0, 5), Position(0, 7), Position(1, 6),
        }

    def test_ring_wraps_around(self):
        """Point 7 and point 0 are neighbors."""
        assert is_adjacent(Position(2, 7), Position(2, 0))

    def test_corners_never_cross_rings(self):
        """No corner is adjacent to a position on another ring."""
        for p in ALL_POSITIONS:
            if p.point % 2 == 1:
                assert all(q.ring == p.ring for q in adjacent_positions(p))


class TestMills:
    """Tests for mill lines."""

    def test_sixteen_lines(self):
        """Four sides per ring plus four cross lines."""
        assert len(ALL_MILLS) == 16
        assert all(len(line) == 3 for line in ALL_MILLS)

    def test_every_position_on_two_lines(self):
        """Each position belongs to exactly two lines."""
        for p in ALL_POSITIONS:
            assert len(mills_containing(p)) == 2

    def test_midpoint_lines(self):
        """A midpoint has its side line and the cross-ring line."""
        lines = set(mills_containing(Position(0, 0)))
        assert frozenset({Position(0, 7), Position(0, 0), Position(0, 1)}) in lines
        assert frozenset({Position(0, 0), Position(1, 0), Position(2, 0)}) in lines

    def test_corner_lines_stay_in_ring(self):
        """A corner's lines are the two sides meeting there."""
        lines = set(mills_containing(Position(2, 3)))
        assert lines == {
            frozenset({Position(2, 1), Position(2, 2), Position(2, 3)}),
            frozenset({Position(2, 3), Position(2, 4), Position(2, 5)}),
        }

    def test_lines_contain_their_position(self):
        """mills_containing only returns lines through the position."""
        for p in ALL_POSITIONS:
            assert all(p in line for line in mills_containing(p))
