"""
Board Topology - static knowledge of the Nine Men's Morris board.

The board is three concentric squares (rings 0-2, outer to inner) with eight
points each. Points are numbered clockwise from the top midpoint:

    7 ---- 0 ---- 1
    |             |
    6             2
    |             |
    5 ---- 4 ---- 3

Even points are midpoints and connect across rings; odd points are corners
and never do. Lines and neighbors are precomputed once at import time.
"""

from __future__ import annotations
from dataclasses import dataclass

NUM_RINGS = 3
POINTS_PER_RING = 8

# Side lines within one ring, anchored at the midpoints
SIDE_LINES: tuple[tuple[int, int, int], ...] = (
    (7, 0, 1),
    (1, 2, 3),
    (3, 4, 5),
    (5, 6, 7),
)


@dataclass(frozen=True, order=True)
class Position:
    """A point on the board. Only the 24 valid coordinates can be built."""
    ring: int
    point: int

    def __post_init__(self):
        if not is_valid_coordinate(self.ring, self.point):
            raise ValueError(f"Invalid board position: ({self.ring}, {self.point})")

    @property
    def is_midpoint(self) -> bool:
        return self.point % 2 == 0

    @property
    def key(self) -> str:
        """Wire form used in snapshots: ``"ring_point"``."""
        return f"{self.ring}_{self.point}"

    @classmethod
    def parse(cls, text: str) -> Position:
        """Parse ``"ring_point"`` (``"ring,point"`` is accepted too)."""
        parts = text.strip().replace(",", "_").split("_")
        if len(parts) != 2:
            raise ValueError(f"Expected 'ring_point', got {text!r}")
        try:
            ring, point = int(parts[0]), int(parts[1])
        except ValueError as exc:
            raise ValueError(f"Expected 'ring_point', got {text!r}") from exc
        return cls(ring, point)

    def __str__(self) -> str:
        return self.key


Line = frozenset[Position]


def is_valid_coordinate(ring: int, point: int) -> bool:
    if not (isinstance(ring, int) and isinstance(point, int)):
        return False
    return 0 <= ring < NUM_RINGS and 0 <= point < POINTS_PER_RING


def _build_positions() -> tuple[Position, ...]:
    return tuple(
        Position(ring, point)
        for ring in range(NUM_RINGS)
        for point in range(POINTS_PER_RING)
    )


# Canonical order: ring-major, then point. The board key relies on it.
ALL_POSITIONS: tuple[Position, ...] = _build_positions()


def _build_adjacency() -> dict[Position, tuple[Position, ...]]:
    table = {}
    for pos in ALL_POSITIONS:
        neighbors = [
            Position(pos.ring, (pos.point - 1) % POINTS_PER_RING),
            Position(pos.ring, (pos.point + 1) % POINTS_PER_RING),
        ]
        if pos.is_midpoint:
            if pos.ring > 0:
                neighbors.append(Position(pos.ring - 1, pos.point))
            if pos.ring < NUM_RINGS - 1:
                neighbors.append(Position(pos.ring + 1, pos.point))
        table[pos] = tuple(neighbors)
    return table


def _build_lines() -> tuple[Line, ...]:
    lines = []
    for ring in range(NUM_RINGS):
        for side in SIDE_LINES:
            lines.append(frozenset(Position(ring, p) for p in side))
    for point in range(0, POINTS_PER_RING, 2):
        lines.append(frozenset(Position(ring, point) for ring in range(NUM_RINGS)))
    return tuple(lines)


ADJACENCY: dict[Position, tuple[Position, ...]] = _build_adjacency()
ALL_MILLS: tuple[Line, ...] = _build_lines()
MILLS_BY_POSITION: dict[Position, tuple[Line, ...]] = {
    pos: tuple(line for line in ALL_MILLS if pos in line) for pos in ALL_POSITIONS
}


def adjacent_positions(position: Position) -> tuple[Position, ...]:
    """Neighbors reachable by a single step along a board line."""
    return ADJACENCY[position]


def is_adjacent(a: Position, b: Position) -> bool:
    return b in ADJACENCY[a]


def mills_containing(position: Position) -> tuple[Line, ...]:
    """Every three-position line through ``position``.

    Each position lies on exactly two lines: a midpoint on its side line and
    the cross-ring line, a corner on the two side lines that meet there.
    """
    return MILLS_BY_POSITION[position]
