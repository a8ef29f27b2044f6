"""
Engine configuration - rule thresholds for a Nine Men's Morris match.

Defaults follow the standard rules. Every value can be overridden from the
environment, e.g. ``MORRIS_NO_CAPTURE_THRESHOLD=50``.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import logging
import os

LOG = logging.getLogger("morris.config")

ENV_PREFIX = "MORRIS_"


@dataclass(frozen=True)
class EngineConfig:
    """Rule constants used by the reducer and the draw detector."""
    starting_pieces: int = 9
    minimum_pieces: int = 3
    flying_piece_count: int = 3

    # Draw detection
    no_capture_threshold: int = 40
    repetition_threshold: int = 3
    history_window: int = 200

    # Warn when within this many actions of the inactivity draw
    no_capture_warning_threshold: int = 10
    repetition_warning_threshold: int = 2

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from ``MORRIS_*`` environment variables."""
        overrides: dict[str, int] = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                overrides[f.name] = int(raw)
            except ValueError:
                LOG.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, f.name.upper(), raw)
        return cls(**overrides)


DEFAULT_CONFIG = EngineConfig()
