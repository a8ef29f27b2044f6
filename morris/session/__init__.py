"""
Session Module - Manages ephemeral match sessions.

A session represents one match as seen by one side:
- Created when a player starts or joins a match
- Holds that side's engine and a sync revision
- Reconciles with the peer by exchanging snapshots
- Destroyed when the match ends
"""

from .manager import (
    SessionManager,
    MatchSession,
    SessionState,
    SessionNotFoundError,
    encode_message,
)

__all__ = [
    "SessionManager",
    "MatchSession",
    "SessionState",
    "SessionNotFoundError",
    "encode_message",
]
