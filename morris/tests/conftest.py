"""
Pytest fixtures for Morris tests.
"""

import pytest

from ..config import EngineConfig
from ..engine_core.engine import MorrisEngine


def snapshot(white=(), black=(), current="white", phase="moving", **extra):
    """Wire snapshot with pieces given as "ring_point" keys."""
    board = {key: "white" for key in white}
    board.update({key: "black" for key in black})
    data = {
        "board": board,
        "currentPlayer": current,
        "gamePhase": phase,
        "gameState": "playing",
        "whitePiecesToPlace": 0 if phase == "moving" else 9,
        "blackPiecesToPlace": 0 if phase == "moving" else 9,
        "winner": None,
        "terminationReason": None,
        "noCaptureMoves": 0,
        "stateOccurrences": {},
    }
    data.update(extra)
    return data


@pytest.fixture
def engine() -> MorrisEngine:
    """Fresh engine with default rules."""
    return MorrisEngine()


@pytest.fixture
def engine_from():
    """Factory: engine loaded from a snapshot built with snapshot()."""
    def _make(config: EngineConfig | None = None, **kwargs) -> MorrisEngine:
        eng = MorrisEngine(config=config or EngineConfig())
        eng.load_from_snapshot(snapshot(**kwargs))
        return eng
    return _make


# White: ring 0 {0,1,4,5}, ring 1 {2,3,6,7}, ring 2 {0}
# Black: ring 0 {2,3,6,7}, ring 1 {0,1,4,5}, ring 2 {2}
# Neither color ever completes a line.
NO_MILL_WHITE = ["0_0", "0_1", "0_4", "0_5", "1_2", "1_3", "1_6", "1_7", "2_0"]
NO_MILL_BLACK = ["0_2", "0_3", "0_6", "0_7", "1_0", "1_1", "1_4", "1_5", "2_2"]


@pytest.fixture
def no_mill_placements() -> list[str]:
    """18 alternating placements (white first) that never form a mill."""
    order = []
    for w, b in zip(NO_MILL_WHITE, NO_MILL_BLACK):
        order.extend([w, b])
    return order
