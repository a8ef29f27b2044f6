"""
API Module - Wire models shared by peers.

Each side of a networked match runs its own engine and exchanges
snapshots. These pydantic models are the only thing that crosses the wire.
"""

from .schemas import SnapshotData, SyncMessage

__all__ = [
    "SnapshotData",
    "SyncMessage",
]
