"""
Draw Detector - repetition and inactivity tracking.

Two draw conditions:
- Threefold repetition: the current canonical board key occurs
  ``repetition_threshold`` times within the tracked history window
- Inactivity: ``no_capture_threshold`` consecutive settled actions without a capture

The history and counter live on GameState so they survive snapshots; the
detector only reads and appends.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass

from ..config import EngineConfig, DEFAULT_CONFIG
from .state import GameState, TerminationReason


@dataclass
class DrawProgress:
    """How close the match is to a draw, for UI warnings."""
    no_capture_moves: int
    moves_until_no_capture_draw: int
    max_repetitions: int
    near_no_capture_draw: bool
    near_repetition_draw: bool


@dataclass
class DrawDetector:
    config: EngineConfig = DEFAULT_CONFIG

    def record(self, state: GameState) -> str:
        """Append the current board key, dropping the oldest past the window."""
        key = state.board_key()
        state.history.append(key)
        overflow = len(state.history) - self.config.history_window
        if overflow > 0:
            del state.history[:overflow]
        return key

    def occurrences(self, state: GameState) -> dict[str, int]:
        return dict(Counter(state.history))

    def repetitions(self, state: GameState, key: str | None = None) -> int:
        key = key if key is not None else state.board_key()
        return state.history.count(key)

    def check(self, state: GameState) -> TerminationReason | None:
        """Return the draw reason that applies to the current state, if any."""
        if self.repetitions(state) >= self.config.repetition_threshold:
            return TerminationReason.THREEFOLD_REPETITION
        if state.no_capture_moves >= self.config.no_capture_threshold:
            return TerminationReason.NO_CAPTURE_THRESHOLD
        return None

    def repeated_positions(self, state: GameState) -> list[dict[str, int | str]]:
        return [
            {"position_key": key, "count": count}
            for key, count in self.occurrences(state).items()
            if count >= self.config.repetition_threshold
        ]

    def progress(self, state: GameState) -> DrawProgress:
        remaining = max(0, self.config.no_capture_threshold - state.no_capture_moves)
        max_reps = max(self.occurrences(state).values(), default=0)
        return DrawProgress(
            no_capture_moves=state.no_capture_moves,
            moves_until_no_capture_draw=remaining,
            max_repetitions=max_reps,
            near_no_capture_draw=remaining <= self.config.no_capture_warning_threshold,
            near_repetition_draw=max_reps >= self.config.repetition_warning_threshold,
        )
