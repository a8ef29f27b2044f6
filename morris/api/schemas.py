"""
Pydantic Schemas - wire models for synchronizing two engine instances.

These models define the exact contract between peers. Field names are
snake_case in Python and camelCase on the wire (the schema peers exchange).

Import is lenient: partial or legacy payloads never fail validation. Bad
scalar values are coerced to None here and replaced with documented
defaults by the snapshot codec.
"""

from typing import Any, Optional
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


# =============================================================================
# Snapshot
# =============================================================================

class SnapshotData(BaseModel):
    """Full serializable match state."""
    model_config = ConfigDict(populate_by_name=True)

    board: dict[str, str] = Field(
        default_factory=dict,
        description='"ring_point" -> "white" | "black"',
    )
    current_player: Optional[str] = Field(None, alias="currentPlayer")
    game_phase: Optional[str] = Field(None, alias="gamePhase", description="placing, moving")
    game_state: Optional[str] = Field(None, alias="gameState", description="playing, gameOver")
    white_pieces_to_place: Optional[int] = Field(None, alias="whitePiecesToPlace")
    black_pieces_to_place: Optional[int] = Field(None, alias="blackPiecesToPlace")
    winner: Optional[str] = None
    termination_reason: Optional[str] = Field(None, alias="terminationReason")
    no_capture_moves: Optional[int] = Field(None, alias="noCaptureMoves")
    state_occurrences: dict[str, int] = Field(default_factory=dict, alias="stateOccurrences")
    waiting_for_capture: bool = Field(False, alias="waitingForCapture")

    @field_validator("board", mode="before")
    @classmethod
    def _lenient_board(cls, value: Any) -> dict[str, str]:
        if not isinstance(value, dict):
            return {}
        return {str(k): v for k, v in value.items() if isinstance(v, str)}

    @field_validator(
        "current_player", "game_phase", "game_state", "winner", "termination_reason",
        mode="before",
    )
    @classmethod
    def _lenient_str(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator(
        "white_pieces_to_place", "black_pieces_to_place", "no_capture_moves",
        mode="before",
    )
    @classmethod
    def _lenient_int(cls, value: Any) -> Optional[int]:
        return _to_int(value)

    @field_validator("state_occurrences", mode="before")
    @classmethod
    def _lenient_occurrences(cls, value: Any) -> dict[str, int]:
        if not isinstance(value, dict):
            return {}
        counts = {}
        for key, raw in value.items():
            count = _to_int(raw)
            if count is not None and count > 0:
                counts[str(key)] = count
        return counts

    @field_validator("waiting_for_capture", mode="before")
    @classmethod
    def _lenient_bool(cls, value: Any) -> bool:
        return value if isinstance(value, bool) else False

    def to_wire(self) -> dict[str, Any]:
        """Dump with the camelCase wire names."""
        return self.model_dump(by_alias=True)


# =============================================================================
# Sync envelope
# =============================================================================

class SyncMessage(BaseModel):
    """A snapshot stamped with the sender's match revision."""
    model_config = ConfigDict(populate_by_name=True)

    match_id: str = Field(alias="matchId")
    revision: int = Field(0, ge=0)
    snapshot: SnapshotData
    sent_at: Optional[float] = Field(None, alias="sentAt")
