"""
Morris Engine - the match object callers hold.

Humans, automated opponents and network reconciliation all drive a match
through the same operations:

    engine = MorrisEngine()
    engine.place(Position(0, 0))      # -> True
    data = engine.to_snapshot()       # send to the peer
    other.load_from_snapshot(data)    # last write wins

The bool operations never raise for rule violations. Use ``apply`` for the
full ActionResult (error code, whether a mill was formed).
"""

from __future__ import annotations
from typing import Any, Mapping, Union

from ..api.schemas import SnapshotData
from ..config import EngineConfig, DEFAULT_CONFIG
from .action import Action, ActionResult, ErrorCode
from .action_generator import ActionGenerator
from .draw_detector import DrawProgress
from .reducer import Reducer
from .rules import find_formed_mill, is_in_mill
from .snapshot import from_snapshot, to_snapshot
from .state import GamePhase, GameState, GameStatus, PieceColor, TerminationReason
from .topology import Position

PositionLike = Union[Position, tuple[int, int], str]


def coerce_position(value: PositionLike | None) -> Position | None:
    """Accept a Position, a ``(ring, point)`` pair or ``"ring_point"``; None if invalid."""
    if isinstance(value, Position):
        return value
    try:
        if isinstance(value, str):
            return Position.parse(value)
        if isinstance(value, tuple) and len(value) == 2:
            return Position(*value)
    except (TypeError, ValueError):
        return None
    return None


class MorrisEngine:
    """Owns one GameState and exposes the rule operations on it."""

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        starting_player: PieceColor = PieceColor.WHITE,
    ) -> None:
        self.config = config
        self.starting_player = starting_player
        self._reducer = Reducer(config=config)
        self._generator = ActionGenerator(config=config)
        self._state = GameState.initial(config, starting_player)

    # -- read access -------------------------------------------------------

    @property
    def state(self) -> GameState:
        """A copy of the current state; mutating it does not affect the engine."""
        return self._state.clone()

    @property
    def board(self) -> dict[Position, PieceColor]:
        return self._state.board

    @property
    def current_player(self) -> PieceColor:
        return self._state.current_player

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def winner(self) -> PieceColor | None:
        return self._state.winner

    @property
    def termination_reason(self) -> TerminationReason | None:
        return self._state.termination_reason

    @property
    def waiting_for_capture(self) -> bool:
        return self._state.waiting_for_capture

    @property
    def selected_position(self) -> Position | None:
        return self._state.selected_position

    @property
    def no_capture_moves(self) -> int:
        return self._state.no_capture_moves

    def pieces_to_place(self, color: PieceColor) -> int:
        return self._state.to_place(color)

    def piece_count(self, color: PieceColor) -> int:
        return self._state.piece_count(color)

    def is_in_mill(self, position: PositionLike) -> bool:
        pos = coerce_position(position)
        return pos is not None and is_in_mill(self._state.board, pos)

    def find_formed_mill(self, position: PositionLike) -> frozenset[Position]:
        pos = coerce_position(position)
        if pos is None:
            return frozenset()
        return find_formed_mill(self._state.board, pos)

    def legal_actions(self) -> list[Action]:
        return self._generator.generate(self._state)

    def state_occurrences(self) -> dict[str, int]:
        return self._reducer.draw_detector.occurrences(self._state)

    def draw_progress(self) -> DrawProgress:
        return self._reducer.draw_detector.progress(self._state)

    def termination_details(self) -> dict[str, Any] | None:
        reason = self._state.termination_reason
        if reason is None:
            return None
        details: dict[str, Any] = {"reason": reason.value}
        if reason is TerminationReason.THREEFOLD_REPETITION:
            details["repeated_positions"] = self._reducer.draw_detector.repeated_positions(self._state)
        return details

    # -- rule operations ---------------------------------------------------

    def apply(self, action: Action) -> ActionResult:
        return self._reducer.apply(self._state, action)

    def place(self, position: PositionLike) -> bool:
        pos = coerce_position(position)
        if pos is None:
            return self._invalid(position).success
        return self.apply(Action.place(pos)).success

    def move(self, origin: PositionLike, target: PositionLike) -> bool:
        src, dst = coerce_position(origin), coerce_position(target)
        if src is None or dst is None:
            return self._invalid(origin if src is None else target).success
        return self.apply(Action.move(src, dst)).success

    def capture(self, position: PositionLike) -> bool:
        pos = coerce_position(position)
        if pos is None:
            return self._invalid(position).success
        return self.apply(Action.capture(pos)).success

    def forfeit(self, loser: PieceColor) -> bool:
        return self._reducer.forfeit(self._state, loser).success

    def select_position(self, position: PositionLike | None) -> None:
        """UI highlight hint; no rule effect."""
        self._state.selected_position = coerce_position(position)

    def reset(self) -> None:
        self._state = GameState.initial(self.config, self.starting_player)

    # -- snapshots ---------------------------------------------------------

    def to_snapshot(self) -> SnapshotData:
        return to_snapshot(self._state)

    def load_from_snapshot(self, data: SnapshotData | Mapping[str, Any]) -> None:
        """Replace the whole state with the snapshot's."""
        self._state = from_snapshot(data, self.config)

    @staticmethod
    def _invalid(value: Any) -> ActionResult:
        return ActionResult.failure(f"Invalid position: {value!r}", ErrorCode.INVALID_POSITION)
