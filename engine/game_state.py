"""
Game state for the N-in-a-row engine.
Marks, game modes, terminal results and the session snapshot that the
GameSession transitions pass around.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass, field

from .config import GameConfig, WinRule


class Mark(Enum):
    """The two players' symbols."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the opposite mark."""
        return Mark.O if self == Mark.X else Mark.X


class GameMode(Enum):
    """Who is playing."""
    HUMAN_VS_HUMAN = "hvh"
    HUMAN_VS_AUTOMATED = "ai"


class Phase(Enum):
    """Where the session is in its setup/play flow."""
    AWAITING_MODE = "awaiting_mode"
    AWAITING_BOARD = "awaiting_board"      # size (hvh) or difficulty (ai)
    AWAITING_SYMBOL = "awaiting_symbol"    # ai mode only
    PLAYING = "playing"
    TERMINAL = "terminal"


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


# A board is a row-major tuple of N*N cells, None means empty
Board = Tuple[Optional[Mark], ...]


@dataclass(frozen=True)
class TerminalResult:
    """
    Outcome of scanning a board.

    winning_line holds the L cell indices of the first run found, and is
    empty unless status is WON.
    """
    status: GameStatus
    winner: Optional[Mark] = None
    winning_line: Tuple[int, ...] = ()

    @classmethod
    def in_progress(cls) -> "TerminalResult":
        return cls(GameStatus.IN_PROGRESS)

    @classmethod
    def won(cls, mark: Mark, line: Tuple[int, ...]) -> "TerminalResult":
        return cls(GameStatus.WON, mark, tuple(line))

    @classmethod
    def draw(cls) -> "TerminalResult":
        return cls(GameStatus.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS


def empty_board(n: int) -> Board:
    """A fresh board with n*n empty cells."""
    return (None,) * (n * n)


def empty_cells(board: Board) -> Tuple[int, ...]:
    """Indices of all empty cells, ascending."""
    return tuple(i for i, cell in enumerate(board) if cell is None)


def place(board: Board, index: int, mark: Mark) -> Board:
    """Return a copy of the board with mark placed at index."""
    return board[:index] + (mark,) + board[index + 1:]


@dataclass(frozen=True)
class SessionState:
    """
    The complete state of one game session.

    Tracks:
    - Setup selections (mode, board choice, symbols)
    - The board and whose turn it is
    - The terminal result (with the winning line for highlighting)

    Every transition in game_session returns a new SessionState.
    """

    phase: Phase = Phase.AWAITING_MODE
    mode: Optional[GameMode] = None

    # Difficulty name ("hard") or size name ("4x4") the rule came from
    choice: Optional[str] = None
    rule: Optional[WinRule] = None

    board: Board = field(default_factory=tuple)
    current_turn: Mark = Mark.X

    # Only set in HUMAN_VS_AUTOMATED mode
    human_mark: Optional[Mark] = None
    automated_mark: Optional[Mark] = None

    result: TerminalResult = field(default_factory=TerminalResult.in_progress)

    # Tables the session was set up with; later transitions reuse them
    config: Optional[GameConfig] = field(default=None, compare=False, repr=False)

    @property
    def board_size(self) -> int:
        return self.rule.board_size if self.rule else 0

    @property
    def is_automated_turn(self) -> bool:
        return (
            self.mode == GameMode.HUMAN_VS_AUTOMATED
            and self.automated_mark is not None
            and self.current_turn == self.automated_mark
        )


def format_board(board: Board, n: int, highlight: Tuple[int, ...] = ()) -> str:
    """
    Render a board as text with column/row headers.
    Empty cells show their index; cells in highlight are wrapped in brackets.
    """
    width = len(str(n * n - 1)) + 2
    lines = ["   " + "".join(f"{col:^{width}}" for col in range(n))]
    separator = "   " + "+".join("-" * width for _ in range(n))

    for row in range(n):
        cells = []
        for col in range(n):
            index = row * n + col
            mark = board[index]
            text = mark.value if mark is not None else str(index)
            if index in highlight:
                text = f"[{text}]"
            cells.append(f"{text:^{width}}")
        lines.append(f"{row:<2} " + "|".join(cells))
        if row < n - 1:
            lines.append(separator)

    return "\n".join(lines)
