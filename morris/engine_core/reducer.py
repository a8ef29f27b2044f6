"""
Reducer - Applies actions to game state.

The reducer is the single point of rule-driven state mutation.
All place/move/capture changes go through Reducer.apply().

Design principles:
- Validates before applying: a failed action leaves the state untouched
- Rule violations are results, never exceptions
- Every settled action (no capture owed) runs the termination checks:
  insufficient pieces and no moves first, then the draw detector
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..config import EngineConfig, DEFAULT_CONFIG
from .action import Action, ActionType, ActionResult, ErrorCode
from .draw_detector import DrawDetector
from .rules import forms_new_mill, has_legal_move, is_capture_protected, is_in_mill
from .state import GamePhase, GameState, PieceColor, TerminationReason
from .topology import is_adjacent

LOG = logging.getLogger("morris.engine")


@dataclass
class Reducer:
    """
    Reducer applies actions to a game state in place.

    Stateless - all match data is in GameState.
    Config provides the rule thresholds.
    """
    config: EngineConfig = DEFAULT_CONFIG
    draw_detector: DrawDetector = field(init=False)

    def __post_init__(self):
        self.draw_detector = DrawDetector(config=self.config)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult describing the outcome.
        """
        if state.is_over:
            result = ActionResult.failure("Game is over - no actions allowed", ErrorCode.GAME_OVER)
        else:
            handler = self._get_handler(action.action_type)
            result = handler(state, action)

        if not result.success:
            LOG.debug("Rejected %s for %s: %s", action, state.current_player.value, result.error_code)
            return result

        result.game_over = state.is_over
        if result.game_over:
            LOG.info(
                "Match ended: %s (winner: %s)",
                state.termination_reason.value,
                state.winner.value if state.winner else "none",
            )
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLACE: self._handle_place,
            ActionType.MOVE: self._handle_move,
            ActionType.CAPTURE: self._handle_capture,
        }
        return handlers[action_type]

    def _handle_place(self, state: GameState, action: Action) -> ActionResult:
        """Handle place action."""
        position = action.target
        player = state.current_player

        if state.phase is not GamePhase.PLACING:
            return ActionResult.failure("Placing phase is over", ErrorCode.WRONG_PHASE)
        if state.waiting_for_capture:
            return ActionResult.failure("A capture must be made first", ErrorCode.CAPTURE_PENDING)
        if not state.is_empty(position):
            return ActionResult.failure(f"{position} is occupied", ErrorCode.OCCUPIED)
        if state.to_place(player) <= 0:
            return ActionResult.failure(f"{player.value} has no pieces left to place", ErrorCode.NO_PIECES_LEFT)

        state.put_piece(position, player)
        state.consume_placement(player)
        changes = [f"{player.value} placed at {position}"]

        if is_in_mill(state.board, position):
            # Mill-forming actions never count toward inactivity
            self._await_capture(state)
            return ActionResult.ok(changes, mill_formed=True)

        state.switch_turn()
        self._update_phase(state)
        state.no_capture_moves += 1
        self._settle(state)
        return ActionResult.ok(changes)

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        """Handle move action (sliding, or flying with exactly three pieces)."""
        origin, target = action.origin, action.target
        player = state.current_player

        if state.phase is GamePhase.PLACING:
            return ActionResult.failure("Pieces cannot move while placing", ErrorCode.WRONG_PHASE)
        if state.waiting_for_capture:
            return ActionResult.failure("A capture must be made first", ErrorCode.CAPTURE_PENDING)
        if origin is None or state.piece_at(origin) is not player:
            return ActionResult.failure(f"No {player.value} piece at {origin}", ErrorCode.NOT_YOUR_PIECE)
        if not state.is_empty(target):
            return ActionResult.failure(f"{target} is occupied", ErrorCode.OCCUPIED)

        flying = state.piece_count(player) == self.config.flying_piece_count
        if not flying and not is_adjacent(origin, target):
            return ActionResult.failure(f"{target} is not adjacent to {origin}", ErrorCode.NOT_ADJACENT)

        state.relocate_piece(origin, target)
        changes = [f"{player.value} {'flew' if flying else 'moved'} {origin} -> {target}"]

        if forms_new_mill(state.board, origin, target):
            self._await_capture(state)
            return ActionResult.ok(changes, mill_formed=True)

        state.switch_turn()
        state.no_capture_moves += 1
        self._settle(state)
        return ActionResult.ok(changes)

    def _handle_capture(self, state: GameState, action: Action) -> ActionResult:
        """Handle capture action."""
        position = action.target
        player = state.current_player
        victim = state.piece_at(position)

        if victim is None:
            return ActionResult.failure(f"No piece at {position}", ErrorCode.EMPTY_POSITION)
        if victim is player:
            return ActionResult.failure("Cannot capture your own piece", ErrorCode.OWN_PIECE)
        if is_capture_protected(state.board, position):
            return ActionResult.failure(f"{position} is protected by a mill", ErrorCode.MILL_PROTECTED)

        state.remove_piece(position)
        state.waiting_for_capture = False
        state.no_capture_moves = 0
        state.switch_turn()
        if state.phase is GamePhase.PLACING:
            self._update_phase(state)
        self._settle(state)
        return ActionResult.ok([f"{player.value} captured {victim.value} at {position}"], captured=position)

    def forfeit(self, state: GameState, loser: PieceColor) -> ActionResult:
        """End the match in favor of ``loser``'s opponent."""
        if state.is_over:
            return ActionResult.failure("Game is over - no actions allowed", ErrorCode.GAME_OVER)
        state.end(TerminationReason.FORFEIT, winner=loser.opponent)
        LOG.info("Match ended: forfeit by %s", loser.value)
        result = ActionResult.ok([f"{loser.value} forfeited"])
        result.game_over = True
        return result

    def _await_capture(self, state: GameState) -> None:
        state.waiting_for_capture = True
        self.draw_detector.record(state)
        reason = self.draw_detector.check(state)
        if reason is not None:
            state.end(reason)

    def _update_phase(self, state: GameState) -> None:
        if state.white_to_place == 0 and state.black_to_place == 0:
            state.phase = GamePhase.MOVING

    def _settle(self, state: GameState) -> None:
        """Record the settled board and end the match if any condition applies."""
        self.draw_detector.record(state)
        if self._check_game_end(state):
            return
        reason = self.draw_detector.check(state)
        if reason is not None:
            state.end(reason)

    def _check_game_end(self, state: GameState) -> bool:
        if state.phase is GamePhase.PLACING:
            return False

        for color in (PieceColor.WHITE, PieceColor.BLACK):
            if state.piece_count(color) < self.config.minimum_pieces:
                state.end(TerminationReason.INSUFFICIENT_PIECES, winner=color.opponent)
                return True

        if not has_legal_move(state.board, state.current_player, self.config):
            state.end(TerminationReason.NO_MOVES, winner=state.current_player.opponent)
            return True

        return False


def apply_action(state: GameState, action: Action, config: EngineConfig = DEFAULT_CONFIG) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(config=config)
    return reducer.apply(state, action)
