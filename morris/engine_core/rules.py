"""Mill, capture and flying rules as pure functions over a board mapping."""

from __future__ import annotations
from typing import Mapping

from ..config import EngineConfig, DEFAULT_CONFIG
from .state import PieceColor
from .topology import ALL_POSITIONS, Line, Position, adjacent_positions, mills_containing

Board = Mapping[Position, PieceColor]


def is_complete_line(board: Board, line: Line, color: PieceColor) -> bool:
    return all(board.get(pos) is color for pos in line)


def completed_mills(board: Board, position: Position) -> list[Line]:
    """Lines through ``position`` fully held by the piece standing there."""
    color = board.get(position)
    if color is None:
        return []
    return [line for line in mills_containing(position) if is_complete_line(board, line, color)]


def is_in_mill(board: Board, position: Position) -> bool:
    return bool(completed_mills(board, position))


def find_formed_mill(board: Board, position: Position) -> frozenset[Position]:
    """The first completed line through ``position``, or an empty set."""
    mills = completed_mills(board, position)
    return mills[0] if mills else frozenset()


def is_rearrangement(board: Board, origin: Position, target: Position) -> bool:
    """
    True when the mill at ``target`` is the same line the piece left from.

    Checked on the board after the move: if any completed line through
    ``target`` also contains ``origin``, the piece only slid within that line
    and no new mill was formed.
    """
    return any(origin in line for line in completed_mills(board, target))


def forms_new_mill(board: Board, origin: Position, target: Position) -> bool:
    return is_in_mill(board, target) and not is_rearrangement(board, origin, target)


def all_pieces_in_mills(board: Board, color: PieceColor) -> bool:
    return all(is_in_mill(board, pos) for pos, c in board.items() if c is color)


def is_capture_protected(board: Board, position: Position) -> bool:
    """A piece in a mill is safe unless every piece of its color is in one."""
    color = board.get(position)
    if color is None:
        return False
    return is_in_mill(board, position) and not all_pieces_in_mills(board, color)


def can_fly(board: Board, color: PieceColor, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    count = sum(1 for c in board.values() if c is color)
    return count == config.flying_piece_count


def destinations(
    board: Board,
    origin: Position,
    flying: bool,
) -> list[Position]:
    """Empty squares the piece on ``origin`` may move to."""
    candidates = ALL_POSITIONS if flying else adjacent_positions(origin)
    return [pos for pos in candidates if pos not in board]


def has_legal_move(board: Board, color: PieceColor, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    flying = can_fly(board, color, config)
    return any(
        destinations(board, pos, flying)
        for pos, c in board.items()
        if c is color
    )
