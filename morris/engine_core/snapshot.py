"""
Snapshot Codec - GameState to/from the serializable wire form.

Export writes occurrence counts per canonical board key rather than the
ordered history. Import rebuilds a history by repeating each key by its
count, so recency order is lost; repetition counting is unaffected.

Import repairs malformed input instead of rejecting it:
- board keys that are not a valid "ring_point", or colors other than
  white/black, are skipped
- missing/unknown phase -> placing ("flying" from older peers -> moving)
- missing/unknown status -> playing
- missing counters -> starting pieces, clamped to [0, starting pieces]
- occurrence counts are capped at the history window
"""

from __future__ import annotations
from typing import Any, Mapping
import logging

from ..api.schemas import SnapshotData
from ..config import EngineConfig, DEFAULT_CONFIG
from .draw_detector import DrawDetector
from .state import GamePhase, GameState, GameStatus, PieceColor, TerminationReason
from .topology import Position

LOG = logging.getLogger("morris.snapshot")

LEGACY_PHASES = {"flying": GamePhase.MOVING}


def to_snapshot(state: GameState) -> SnapshotData:
    """Export the full state."""
    return SnapshotData(
        board={pos.key: color.value for pos, color in sorted(state.board.items())},
        current_player=state.current_player.value,
        game_phase=state.phase.value,
        game_state=state.status.value,
        white_pieces_to_place=state.white_to_place,
        black_pieces_to_place=state.black_to_place,
        winner=state.winner.value if state.winner else None,
        termination_reason=state.termination_reason.value if state.termination_reason else None,
        no_capture_moves=state.no_capture_moves,
        state_occurrences=DrawDetector().occurrences(state),
        waiting_for_capture=state.waiting_for_capture,
    )


def from_snapshot(
    data: SnapshotData | Mapping[str, Any],
    config: EngineConfig = DEFAULT_CONFIG,
) -> GameState:
    """Build a new GameState from a snapshot (model or raw wire dict)."""
    if not isinstance(data, SnapshotData):
        data = SnapshotData.model_validate(dict(data))

    state = GameState(
        current_player=_color(data.current_player) or PieceColor.WHITE,
        phase=_phase(data.game_phase),
        status=_status(data.game_state),
        white_to_place=_counter(data.white_pieces_to_place, config),
        black_to_place=_counter(data.black_pieces_to_place, config),
        winner=_color(data.winner),
        termination_reason=_reason(data.termination_reason),
        no_capture_moves=max(0, data.no_capture_moves or 0),
        waiting_for_capture=data.waiting_for_capture,
    )

    for key, value in data.board.items():
        position = _position(key)
        color = _color(value)
        if position is None or color is None or not state.is_empty(position):
            LOG.warning("Skipping invalid board entry %r: %r", key, value)
            continue
        state.put_piece(position, color)

    history: list[str] = []
    for key, count in data.state_occurrences.items():
        history.extend([key] * min(count, config.history_window))
    state.history = history[-config.history_window:]

    return state


def _position(key: str) -> Position | None:
    try:
        return Position.parse(key)
    except ValueError:
        return None


def _color(value: str | None) -> PieceColor | None:
    try:
        return PieceColor(value)
    except ValueError:
        return None


def _phase(value: str | None) -> GamePhase:
    if value in LEGACY_PHASES:
        return LEGACY_PHASES[value]
    try:
        return GamePhase(value)
    except ValueError:
        if value is not None:
            LOG.warning("Unknown game phase %r, defaulting to placing", value)
        return GamePhase.PLACING


def _status(value: str | None) -> GameStatus:
    try:
        return GameStatus(value)
    except ValueError:
        if value is not None:
            LOG.warning("Unknown game state %r, defaulting to playing", value)
        return GameStatus.IN_PROGRESS


def _reason(value: str | None) -> TerminationReason | None:
    try:
        return TerminationReason(value)
    except ValueError:
        if value is not None:
            LOG.warning("Unknown termination reason %r", value)
        return None


def _counter(value: int | None, config: EngineConfig) -> int:
    if value is None:
        return config.starting_pieces
    return min(max(value, 0), config.starting_pieces)
