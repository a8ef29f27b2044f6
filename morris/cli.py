"""
Morris CLI - Command-line interface for the engine.

Usage:
    morris play                  Hot-seat match in the terminal
    morris show <snapshot_file>  Render a snapshot JSON file

Coordinates are entered as ``ring_point`` (e.g. ``0_7``); moves as two
coordinates (``0_7 0_6``).
"""

import argparse
import json
import logging
import sys

from .config import EngineConfig
from .engine_core.engine import MorrisEngine, coerce_position
from .engine_core.state import GameStatus, PieceColor

# Grid cell for each (ring, point), on a 7x7 layout
_GRID_OFFSETS = {
    0: (0, 1), 1: (0, 2), 2: (1, 2), 3: (2, 2),
    4: (2, 1), 5: (2, 0), 6: (1, 0), 7: (0, 0),
}
_SYMBOLS = {None: ".", PieceColor.WHITE: "W", PieceColor.BLACK: "B"}


def render_board(engine: MorrisEngine) -> str:
    """Text drawing of the board, one cell per position."""
    grid = [[" "] * 7 for _ in range(7)]
    board = engine.board
    for ring in range(3):
        span = 3 - ring
        for point, (row, col) in _GRID_OFFSETS.items():
            r = ring + row * span
            c = ring + col * span
            grid[r][c] = _SYMBOLS[board.get(coerce_position((ring, point)))]
    return "\n".join(" ".join(row) for row in grid)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Morris - Nine Men's Morris rule engine",
        prog="morris",
    )
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    subparsers.add_parser("play", help="Hot-seat match in the terminal")

    # Show command
    show_parser = subparsers.add_parser("show", help="Render a snapshot JSON file")
    show_parser.add_argument("snapshot_file", help="Path to snapshot file")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "show":
        return cmd_show(args)
    else:
        parser.print_help()
        return 1


def cmd_show(args):
    """Render a snapshot file."""
    try:
        with open(args.snapshot_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.snapshot_file}")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}")
        return 1
    if not isinstance(data, dict):
        print(f"Error: Snapshot must be a JSON object: {args.snapshot_file}")
        return 1

    engine = MorrisEngine(config=EngineConfig.from_env())
    engine.load_from_snapshot(data)
    print(render_board(engine))
    _print_status(engine)
    return 0


def cmd_play(args):
    """Run a hot-seat match until it ends or a player quits."""
    engine = MorrisEngine(config=EngineConfig.from_env())
    print("Enter coordinates as ring_point (e.g. 0_7). Type 'q' to quit.")

    while engine.status is GameStatus.IN_PROGRESS:
        print()
        print(render_board(engine))
        _print_status(engine)

        player = engine.current_player.value
        if engine.waiting_for_capture:
            prompt = f"{player}: mill! capture which piece? "
        elif engine.pieces_to_place(engine.current_player) > 0:
            prompt = f"{player}: place at? "
        else:
            prompt = f"{player}: move from to? "

        try:
            line = input(prompt).strip()
        except EOFError:
            return 0
        if line.lower() in {"q", "quit", "exit"}:
            return 0

        if not _play_line(engine, line):
            print("Illegal action, try again.")

    print()
    print(render_board(engine))
    _print_status(engine)
    return 0


def _play_line(engine: MorrisEngine, line: str) -> bool:
    parts = line.split()
    if engine.waiting_for_capture and len(parts) == 1:
        return engine.capture(parts[0])
    if engine.pieces_to_place(engine.current_player) > 0 and len(parts) == 1:
        return engine.place(parts[0])
    if len(parts) == 2:
        return engine.move(parts[0], parts[1])
    return False


def _print_status(engine: MorrisEngine):
    if engine.status is GameStatus.ENDED:
        winner = engine.winner.value if engine.winner else "nobody (draw)"
        reason = engine.termination_reason.value if engine.termination_reason else "unknown"
        print(f"Game over: {reason}. Winner: {winner}")
        return
    white, black = PieceColor.WHITE, PieceColor.BLACK
    print(
        f"Phase: {engine.phase.value} | to move: {engine.current_player.value} | "
        f"to place W/B: {engine.pieces_to_place(white)}/{engine.pieces_to_place(black)} | "
        f"on board W/B: {engine.piece_count(white)}/{engine.piece_count(black)}"
    )


if __name__ == "__main__":
    sys.exit(main())
