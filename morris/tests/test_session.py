"""
Session tests - two sides of one match kept in sync by snapshots.

Tests the flow:
1. Both peers create a session with the same match id
2. The side to move plays and exports
3. The other side applies the message (last write wins)
"""

import pytest

from ..api.schemas import SyncMessage
from ..engine_core.action import Action
from ..engine_core.state import GameStatus, PieceColor
from ..engine_core.topology import Position
from ..session import SessionManager, SessionNotFoundError, SessionState, encode_message


@pytest.fixture
def peers():
    """White and black sides of match "m1"."""
    white_side, black_side = SessionManager(), SessionManager()
    white = white_side.create_session("m1", local_color=PieceColor.WHITE)
    black = black_side.create_session("m1", local_color=PieceColor.BLACK)
    return white_side, white, black_side, black


class TestSessionLifecycle:
    """Tests for SessionManager bookkeeping."""

    def test_create_generates_id(self):
        """Sessions get a unique id when none is given."""
        manager = SessionManager()
        a = manager.create_session()
        b = manager.create_session()
        assert a.match_id != b.match_id
        assert set(manager.list_active_sessions()) == {a.match_id, b.match_id}

    def test_end_session(self):
        """Ended sessions are dropped and marked abandoned."""
        manager = SessionManager()
        session = manager.create_session("m1")
        manager.end_session("m1")
        assert manager.get_session("m1") is None
        assert session.state is SessionState.ABANDONED

    def test_require_unknown_session(self):
        """Looking up an unknown match raises."""
        with pytest.raises(SessionNotFoundError):
            SessionManager().require_session("nope")

    def test_cleanup_finished(self):
        """Finished sessions are removed by cleanup."""
        manager = SessionManager()
        done = manager.create_session("done")
        manager.create_session("live")
        assert done.forfeit(PieceColor.WHITE)
        assert manager.cleanup_finished() == 1
        assert manager.list_active_sessions() == ["live"]


class TestSync:
    """Tests for snapshot exchange between peers."""

    def test_local_play_bumps_revision(self, peers):
        """Only successful actions advance the revision."""
        _, white, _, _ = peers
        assert white.play(Action.place(Position(0, 0))).success
        assert white.revision == 1
        assert not white.play(Action.place(Position(0, 0))).success
        assert white.revision == 1

    def test_turn_ownership(self, peers):
        """Each side knows whose turn it is."""
        _, white, _, black = peers
        assert white.is_local_turn()
        assert not black.is_local_turn()

    def test_exchange_over_json(self, peers):
        """A move made on one side appears on the other."""
        _, white, black_side, black = peers
        white.play(Action.place(Position(0, 0)))

        assert black_side.receive(encode_message(white.export()))
        assert black.engine.board == {Position(0, 0): PieceColor.WHITE}
        assert black.is_local_turn()
        assert black.revision == 1

    def test_alternating_play(self, peers):
        """Both sides converge after several exchanges."""
        white_side, white, black_side, black = peers
        white.play(Action.place(Position(0, 0)))
        black_side.receive(encode_message(white.export()))
        black.play(Action.place(Position(2, 2)))
        white_side.receive(encode_message(black.export()))

        assert white.engine.to_snapshot() == black.engine.to_snapshot()
        assert white.revision == black.revision == 2

    def test_stale_message_ignored(self, peers):
        """Older or equal revisions do not overwrite local state."""
        _, white, _, black = peers
        stale = white.export()
        white.play(Action.place(Position(0, 0)))
        black.apply_remote(white.export())

        assert not black.apply_remote(stale)
        assert black.engine.board == {Position(0, 0): PieceColor.WHITE}

    def test_wrong_match_ignored(self, peers):
        """Messages for another match are not applied."""
        _, white, _, black = peers
        message = SyncMessage(match_id="other", revision=5, snapshot=white.export().snapshot)
        assert not black.apply_remote(message)
        assert black.revision == 0

    def test_remote_game_over_finishes_session(self, peers):
        """A terminal snapshot from the peer finishes the local session."""
        _, white, _, black = peers
        white.forfeit(PieceColor.WHITE)
        assert black.apply_remote(white.export())
        assert black.state is SessionState.FINISHED
        assert black.engine.status is GameStatus.ENDED
        assert black.engine.winner is PieceColor.BLACK

    def test_unknown_match_in_payload(self):
        """Receiving a message for an unknown match raises."""
        sender = SessionManager().create_session("ghost")
        with pytest.raises(SessionNotFoundError):
            SessionManager().receive(encode_message(sender.export()))
