"""
Engine Core - Nine Men's Morris rules and match state.

The engine is the runtime that:
1. Knows the board topology (positions, adjacency, mill lines)
2. Manages GameState
3. Generates legal actions
4. Applies actions via the reducer
5. Detects wins and draws
6. Exports/imports snapshots for peer sync
"""

from .topology import Position, ALL_POSITIONS, ALL_MILLS, adjacent_positions, mills_containing
from .state import GameState, GamePhase, GameStatus, PieceColor, TerminationReason
from .action import Action, ActionType, ActionResult, ErrorCode
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .draw_detector import DrawDetector, DrawProgress
from .snapshot import to_snapshot, from_snapshot
from .engine import MorrisEngine

__all__ = [
    "Position",
    "ALL_POSITIONS",
    "ALL_MILLS",
    "adjacent_positions",
    "mills_containing",
    "GameState",
    "GamePhase",
    "GameStatus",
    "PieceColor",
    "TerminationReason",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "DrawDetector",
    "DrawProgress",
    "to_snapshot",
    "from_snapshot",
    "MorrisEngine",
]
