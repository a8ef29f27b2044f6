"""
Session Manager - Creates and manages match sessions.

LIFECYCLE:
1. A player creates a match -> in-memory session with a fresh engine
2. During play:
   - Local actions go through MatchSession.play(), bumping the revision
   - After each settled local action the caller sends export() to the peer
   - Messages from the peer go through apply_remote()
3. Match ends -> session is ended and dropped

SYNC RULES:
- Each side runs its own engine; only snapshots cross the wire
- A newer revision replaces local state wholesale (last write wins)
- Stale or duplicate revisions are ignored; there is no merge
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..api.schemas import SyncMessage
from ..config import EngineConfig, DEFAULT_CONFIG
from ..engine_core.action import Action, ActionResult
from ..engine_core.engine import MorrisEngine
from ..engine_core.state import GameStatus, PieceColor

LOG = logging.getLogger("morris.session")


class SessionNotFoundError(KeyError):
    """No session with the given match id."""


class SessionState(Enum):
    """State of a match session."""
    ACTIVE = "active"
    FINISHED = "finished"  # Engine reached a terminal state
    ABANDONED = "abandoned"  # Ended before the match finished


@dataclass
class MatchSession:
    """
    One match as seen by one side.

    The session is destroyed when the match ends.
    State is NOT persisted.
    """
    match_id: str
    engine: MorrisEngine
    created_at: float
    updated_at: float
    revision: int = 0
    local_color: PieceColor | None = None
    state: SessionState = SessionState.ACTIVE

    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def is_local_turn(self) -> bool:
        if self.local_color is None:
            return True
        return self.engine.current_player is self.local_color

    def play(self, action: Action) -> ActionResult:
        """Apply a local action; a success bumps the revision."""
        result = self.engine.apply(action)
        if result.success:
            self._touch()
            if result.game_over:
                self.state = SessionState.FINISHED
        return result

    def forfeit(self, loser: PieceColor) -> bool:
        if not self.engine.forfeit(loser):
            return False
        self._touch()
        self.state = SessionState.FINISHED
        return True

    def export(self) -> SyncMessage:
        """Current state stamped with this side's revision."""
        return SyncMessage(
            match_id=self.match_id,
            revision=self.revision,
            snapshot=self.engine.to_snapshot(),
            sent_at=time.time(),
        )

    def apply_remote(self, message: SyncMessage) -> bool:
        """
        Replace local state with the peer's if its revision is newer.

        Returns True when the snapshot was applied.
        """
        if message.match_id != self.match_id:
            LOG.warning("Ignoring snapshot for match %s in session %s", message.match_id, self.match_id)
            return False
        if message.revision <= self.revision:
            LOG.debug("Ignoring stale revision %d (local %d)", message.revision, self.revision)
            return False

        self.engine.load_from_snapshot(message.snapshot)
        self.revision = message.revision
        self.updated_at = time.time()
        if self.engine.status is GameStatus.ENDED:
            self.state = SessionState.FINISHED
        return True

    def _touch(self) -> None:
        self.revision += 1
        self.updated_at = time.time()


class SessionManager:
    """
    Manages match sessions.

    Responsibilities:
    - Create sessions with a fresh engine
    - Route remote sync messages to their session
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self._sessions: dict[str, MatchSession] = {}

    def create_session(
        self,
        match_id: str | None = None,
        local_color: PieceColor | None = None,
        starting_player: PieceColor = PieceColor.WHITE,
    ) -> MatchSession:
        """
        Create a new match session.

        Args:
            match_id: Shared id both peers use; generated if not given
            local_color: Color this side plays; None for hot-seat play
            starting_player: Who places first

        Returns:
            New MatchSession ready to play
        """
        match_id = match_id or str(uuid.uuid4())
        now = time.time()
        session = MatchSession(
            match_id=match_id,
            engine=MorrisEngine(config=self.config, starting_player=starting_player),
            created_at=now,
            updated_at=now,
            local_color=local_color,
        )
        self._sessions[match_id] = session
        LOG.info("Created match %s", match_id)
        return session

    def get_session(self, match_id: str) -> MatchSession | None:
        """Get a session by ID."""
        return self._sessions.get(match_id)

    def require_session(self, match_id: str) -> MatchSession:
        session = self._sessions.get(match_id)
        if session is None:
            raise SessionNotFoundError(match_id)
        return session

    def receive(self, payload: str | bytes) -> bool:
        """Decode a JSON sync message and apply it to its session."""
        message = SyncMessage.model_validate_json(payload)
        return self.require_session(message.match_id).apply_remote(message)

    def end_session(self, match_id: str) -> None:
        """End a session and drop it from memory."""
        session = self._sessions.pop(match_id, None)
        if session and session.is_active():
            session.state = SessionState.ABANDONED

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            mid for mid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_finished(self) -> int:
        """Drop sessions whose match has ended; returns how many were removed."""
        finished = [mid for mid, s in self._sessions.items() if not s.is_active()]
        for match_id in finished:
            self._sessions.pop(match_id)
        return len(finished)


def encode_message(message: SyncMessage) -> str:
    """JSON wire form with camelCase field names."""
    return message.model_dump_json(by_alias=True)
