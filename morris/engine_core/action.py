"""
Action System - Actions and results.

Actions represent the three rule-bearing things a player can do:
1. Place a piece (placing phase)
2. Move a piece (moving phase, flying when down to three pieces)
3. Capture an opponent piece (after forming a mill)

Humans, automated opponents, and replays all submit the same Action objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .topology import Position


class ActionType(Enum):
    """Types of actions in the system."""
    PLACE = "place"
    MOVE = "move"
    CAPTURE = "capture"


class ErrorCode(str, Enum):
    """Why an action was rejected."""
    GAME_OVER = "GAME_OVER"
    WRONG_PHASE = "WRONG_PHASE"
    INVALID_POSITION = "INVALID_POSITION"
    OCCUPIED = "OCCUPIED"
    EMPTY_POSITION = "EMPTY_POSITION"
    NOT_YOUR_PIECE = "NOT_YOUR_PIECE"
    OWN_PIECE = "OWN_PIECE"
    NO_PIECES_LEFT = "NO_PIECES_LEFT"
    NOT_ADJACENT = "NOT_ADJACENT"
    CAPTURE_PENDING = "CAPTURE_PENDING"
    MILL_PROTECTED = "MILL_PROTECTED"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    ``target`` is where the action lands: the placed square, the destination of
    a move, or the captured piece. ``origin`` is only set for moves.
    """
    action_type: ActionType
    target: Position
    origin: Position | None = None

    @classmethod
    def place(cls, position: Position) -> Action:
        """Factory for place action."""
        return cls(action_type=ActionType.PLACE, target=position)

    @classmethod
    def move(cls, origin: Position, target: Position) -> Action:
        """Factory for move action."""
        return cls(action_type=ActionType.MOVE, target=target, origin=origin)

    @classmethod
    def capture(cls, position: Position) -> Action:
        """Factory for capture action."""
        return cls(action_type=ActionType.CAPTURE, target=position)

    def __str__(self) -> str:
        if self.action_type is ActionType.MOVE:
            return f"move {self.origin}->{self.target}"
        return f"{self.action_type.value} {self.target}"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded (a failed action never changes state)
    - Error message and code (if failed)
    - Whether a mill was formed and a capture is now owed
    - Human-readable changes for UI/logging
    """
    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None

    mill_formed: bool = False
    captured: Position | None = None
    game_over: bool = False

    state_changes: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(
        cls,
        changes: list[str] | None = None,
        mill_formed: bool = False,
        captured: Position | None = None,
    ) -> ActionResult:
        """Create a success result."""
        return cls(
            success=True,
            mill_formed=mill_formed,
            captured=captured,
            state_changes=changes or [],
        )
