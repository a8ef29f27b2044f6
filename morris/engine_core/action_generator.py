"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Automated opponents to enumerate candidate moves
2. UI to show available targets
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just target squares.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..config import EngineConfig, DEFAULT_CONFIG
from .action import Action
from .rules import can_fly, destinations, is_capture_protected
from .state import GameState, GamePhase


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the player to act.

    Mirrors the reducer's preconditions, so every generated action
    succeeds when applied to the same state.
    """
    config: EngineConfig = DEFAULT_CONFIG

    def generate(self, state: GameState) -> list[Action]:
        """Generate all legal actions for the current player."""
        if state.is_over:
            return []

        # After a mill only a capture is legal
        if state.waiting_for_capture:
            return self._generate_capture_actions(state)

        if state.phase is GamePhase.PLACING:
            return self._generate_place_actions(state)

        return self._generate_move_actions(state)

    def _generate_place_actions(self, state: GameState) -> list[Action]:
        if state.to_place(state.current_player) <= 0:
            return []
        return [Action.place(pos) for pos in state.empty_positions()]

    def _generate_move_actions(self, state: GameState) -> list[Action]:
        board = state.board
        player = state.current_player
        flying = can_fly(board, player, self.config)

        actions = []
        for origin in state.pieces_of(player):
            for target in destinations(board, origin, flying):
                actions.append(Action.move(origin, target))
        return actions

    def _generate_capture_actions(self, state: GameState) -> list[Action]:
        board = state.board
        return [
            Action.capture(pos)
            for pos in state.pieces_of(state.current_player.opponent)
            if not is_capture_protected(board, pos)
        ]


def legal_actions(state: GameState, config: EngineConfig = DEFAULT_CONFIG) -> list[Action]:
    """Convenience function to list every legal action in ``state``."""
    return ActionGenerator(config=config).generate(state)
