"""
Positional heuristic for the AI.
Corners (and the centre on odd boards) are worth most, then edges, then
interior cells.
"""

from .game_state import Board, Mark
from .geometry import row_col


class PositionEvaluator:
    """Scores cells and non-terminal boards for the minimax search."""

    CORNER_OR_CENTER = 3
    EDGE = 2
    INTERIOR = 1

    def cell_weight(self, index: int, n: int) -> int:
        """
        Positional weight of one cell.

        Args:
            index: Cell index.
            n: Board side length.

        Returns:
            3 for a corner or the exact centre (odd n only), 2 for any
            other border cell, 1 for interior cells.
        """
        row, col = row_col(index, n)
        last = n - 1

        if row in (0, last) and col in (0, last):
            return self.CORNER_OR_CENTER
        if n % 2 == 1 and row == col == n // 2:
            return self.CORNER_OR_CENTER
        if row in (0, last) or col in (0, last):
            return self.EDGE
        return self.INTERIOR

    def score(self, board: Board, n: int, mark: Mark) -> int:
        """
        Static score of a non-terminal board from mark's point of view.

        Sum of the weights of mark's cells minus the opponent's.
        """
        total = 0
        for index, cell in enumerate(board):
            if cell is None:
                continue
            weight = self.cell_weight(index, n)
            total += weight if cell == mark else -weight
        return total
