"""
Win checker for the N-in-a-row engine.
Checks if a player has won or if the game is a draw.
"""

from functools import lru_cache
from typing import Optional, List, Tuple

import numpy as np

from .game_state import Board, GameStatus, Mark, TerminalResult
from .geometry import index_grid


@lru_cache(maxsize=None)
def winning_lines(n: int, win_length: int) -> Tuple[Tuple[int, ...], ...]:
    """
    All runs of win_length cells on an n x n board, in scan order.

    Order:
    1. Rows, top to bottom, left to right
    2. Columns, top to bottom, left to right
    3. For each L x L window: its down-right diagonal, then its anti-diagonal

    The first run that matches is the one reported, so this order matters.
    """
    grid = index_grid(n)
    span = n - win_length + 1
    lines: List[Tuple[int, ...]] = []

    # Rows
    for i in range(n):
        for j in range(span):
            lines.append(tuple(int(x) for x in grid[i, j:j + win_length]))

    # Columns
    for i in range(span):
        for j in range(n):
            lines.append(tuple(int(x) for x in grid[i:i + win_length, j]))

    # Diagonals
    for i in range(span):
        for j in range(span):
            window = grid[i:i + win_length, j:j + win_length]
            lines.append(tuple(int(x) for x in np.diagonal(window)))
            lines.append(tuple(int(x) for x in np.diagonal(np.fliplr(window))))

    return tuple(lines)


class WinChecker:
    """
    Checks for win conditions on an N x N board.

    Win condition: win_length marks of the same player in a row
    (horizontally, vertically, or diagonally)
    """

    def evaluate(self, board: Board, n: int, win_length: int) -> TerminalResult:
        """
        Scan the board for a winner or a draw.

        Args:
            board: Row-major board of n*n cells.
            n: Board side length.
            win_length: Marks in a row needed to win.

        Returns:
            won(mark, line) for the first winning run, draw() for a full
            board with no run, otherwise in_progress().
        """
        for line in winning_lines(n, win_length):
            winner = self._check_line(board, line)
            if winner is not None:
                return TerminalResult.won(winner, line)

        if all(cell is not None for cell in board):
            return TerminalResult.draw()

        return TerminalResult.in_progress()

    def _check_line(self, board: Board, line: Tuple[int, ...]) -> Optional[Mark]:
        """
        Check if a single run has a winner.

        Returns:
            The Mark if every cell in the run holds it, None otherwise.
        """
        first = board[line[0]]
        if first is None:
            return None  # Empty cell, no winner on this line

        for index in line[1:]:
            if board[index] != first:
                return None

        return first

    def check_winner(self, board: Board, n: int, win_length: int) -> Optional[Mark]:
        """Get the winning mark, or None if no winner yet."""
        return self.evaluate(board, n, win_length).winner

    def check_draw(self, board: Board, n: int, win_length: int) -> bool:
        """True if the board is full and nobody has a run."""
        return self.evaluate(board, n, win_length).status == GameStatus.DRAW

    def get_winning_line(
        self,
        board: Board,
        n: int,
        win_length: int
    ) -> Optional[Tuple[int, ...]]:
        """Get the winning run's cell indices, or None."""
        result = self.evaluate(board, n, win_length)
        return result.winning_line if result.winner is not None else None
