"""
Morris - Nine Men's Morris rule engine

A deterministic rule engine for Nine Men's Morris matches. Provides:
- Board topology (positions, adjacency, mill lines)
- Legal placement, movement, flying and capture
- Win and draw detection (repetition, inactivity)
- Snapshots for synchronizing two independent players
"""

__version__ = "0.1.0"
