"""
Game State - the mutable record of one Nine Men's Morris match.

Design principles:
- Exclusive ownership: the board mapping is private and only handed out as copies
- Mutated only by the reducer and by the snapshot codec's import path
- Serializable: every field has a wire form (see snapshot.py)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum

from ..config import EngineConfig, DEFAULT_CONFIG
from .topology import ALL_POSITIONS, Position


class PieceColor(Enum):
    """The two sides."""
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> PieceColor:
        return PieceColor.BLACK if self is PieceColor.WHITE else PieceColor.WHITE

    @property
    def symbol(self) -> str:
        return "W" if self is PieceColor.WHITE else "B"


class GamePhase(Enum):
    """Flying is not a phase: it is decided per move from the mover's piece count."""
    PLACING = "placing"
    MOVING = "moving"


class GameStatus(Enum):
    """Match status. Values are the wire strings."""
    IN_PROGRESS = "playing"
    ENDED = "gameOver"


class TerminationReason(Enum):
    """Why a match ended."""
    INSUFFICIENT_PIECES = "insufficient_pieces"
    NO_MOVES = "no_moves"
    THREEFOLD_REPETITION = "threefold_repetition"
    NO_CAPTURE_THRESHOLD = "no_capture_threshold"
    FORFEIT = "forfeit"

    @property
    def is_draw(self) -> bool:
        return self in {
            TerminationReason.THREEFOLD_REPETITION,
            TerminationReason.NO_CAPTURE_THRESHOLD,
        }


EMPTY_SYMBOL = "."


@dataclass
class GameState:
    """
    Complete match state at a point in time.

    ``history`` holds canonical board keys, oldest first, bounded by the
    config's history window. It is only used for repetition counting.
    """
    current_player: PieceColor = PieceColor.WHITE
    phase: GamePhase = GamePhase.PLACING
    status: GameStatus = GameStatus.IN_PROGRESS

    white_to_place: int = 9
    black_to_place: int = 9

    winner: PieceColor | None = None
    termination_reason: TerminationReason | None = None

    # Draw tracking
    no_capture_moves: int = 0
    history: list[str] = field(default_factory=list)

    # A mill was formed and the mover still owes a capture
    waiting_for_capture: bool = False

    # UI hint only
    selected_position: Position | None = None

    _board: dict[Position, PieceColor] = field(default_factory=dict, repr=False)

    @classmethod
    def initial(
        cls,
        config: EngineConfig = DEFAULT_CONFIG,
        starting_player: PieceColor = PieceColor.WHITE,
    ) -> GameState:
        """Fresh match: empty board, full placement queues."""
        return cls(
            current_player=starting_player,
            white_to_place=config.starting_pieces,
            black_to_place=config.starting_pieces,
        )

    @property
    def board(self) -> dict[Position, PieceColor]:
        """A copy of the board; writes to it never reach the state."""
        return dict(self._board)

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.ENDED

    def piece_at(self, position: Position) -> PieceColor | None:
        return self._board.get(position)

    def is_empty(self, position: Position) -> bool:
        return position not in self._board

    def pieces_of(self, color: PieceColor) -> list[Position]:
        return sorted(pos for pos, c in self._board.items() if c is color)

    def piece_count(self, color: PieceColor) -> int:
        return sum(1 for c in self._board.values() if c is color)

    def empty_positions(self) -> list[Position]:
        return [pos for pos in ALL_POSITIONS if pos not in self._board]

    def to_place(self, color: PieceColor) -> int:
        return self.white_to_place if color is PieceColor.WHITE else self.black_to_place

    def board_key(self) -> str:
        """Canonical board encoding: one symbol per position in board order."""
        return "".join(
            self._board[pos].symbol if pos in self._board else EMPTY_SYMBOL
            for pos in ALL_POSITIONS
        )

    # Mutators. Only the reducer and the snapshot codec call these.

    def put_piece(self, position: Position, color: PieceColor) -> None:
        assert position not in self._board, f"{position} is occupied"
        self._board[position] = color

    def remove_piece(self, position: Position) -> PieceColor:
        return self._board.pop(position)

    def relocate_piece(self, origin: Position, target: Position) -> None:
        assert target not in self._board, f"{target} is occupied"
        self._board[target] = self._board.pop(origin)

    def consume_placement(self, color: PieceColor) -> None:
        if color is PieceColor.WHITE:
            self.white_to_place -= 1
        else:
            self.black_to_place -= 1
        assert self.white_to_place >= 0 and self.black_to_place >= 0

    def switch_turn(self) -> None:
        self.current_player = self.current_player.opponent

    def end(self, reason: TerminationReason, winner: PieceColor | None = None) -> None:
        self.status = GameStatus.ENDED
        self.termination_reason = reason
        self.winner = winner
        self.waiting_for_capture = False

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
