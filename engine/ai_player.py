"""
AI player for the N-in-a-row engine.
Uses depth-limited Minimax to choose a move.
"""

from typing import Optional

from .config import GameConfig, WinRule
from .evaluator import PositionEvaluator
from .game_state import Board, Mark, empty_cells, place
from .win_checker import WinChecker


class AIPlayer:
    """
    An AI that plays N-in-a-row using depth-limited Minimax.

    It takes an immediate win, blocks a loss it can see within its depth,
    and otherwise prefers corners/centre, then edges. Depth is deliberately
    shallow on big boards, so it does not always play optimally there.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize the AI player.

        Args:
            config: Game configuration (win score, debug flag).
        """
        self.config = config or GameConfig()
        self.win_checker = WinChecker()
        self.evaluator = PositionEvaluator()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def choose_move(
        self,
        board: Board,
        rule: WinRule,
        automated_mark: Mark,
        max_depth: Optional[int] = None
    ) -> int:
        """
        Get the best move for automated_mark.

        Args:
            board: Current board, with automated_mark to move.
            rule: Board size, win length and default search depth.
            automated_mark: The mark the AI plays.
            max_depth: Plies to search; defaults to rule.search_depth.

        Returns:
            Index of the chosen cell.
        """
        valid_moves = empty_cells(board)
        assert valid_moves, "choose_move() called on a full board"

        if max_depth is None:
            max_depth = rule.search_depth
        assert max_depth is not None and max_depth >= 1, \
            f"Search depth must be at least 1, got {max_depth}"

        self.positions_evaluated = 0
        n = rule.board_size
        human_mark = automated_mark.opposite()

        best_move = valid_moves[0]
        best_score = None
        best_weight = None

        for index in valid_moves:
            new_board = place(board, index, automated_mark)

            # Each root child gets a full window so its value is exact
            score = self._minimax(
                new_board, rule, human_mark, automated_mark,
                depth=1, max_depth=max_depth
            )
            weight = self.evaluator.cell_weight(index, n)

            # Ties: higher positional weight, then lowest index
            if (best_score is None or score > best_score
                    or (score == best_score and weight > best_weight)):
                best_move = index
                best_score = score
                best_weight = weight

        if self.config.DEBUG_MODE:
            print(f"AI evaluated {self.positions_evaluated} positions. "
                  f"Best move: {best_move} (score: {best_score})")

        return best_move

    def _minimax(
        self,
        board: Board,
        rule: WinRule,
        to_move: Mark,
        automated_mark: Mark,
        depth: int,
        max_depth: int,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> int:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Position to evaluate.
            rule: Board size and win length.
            to_move: Mark whose turn it is at this node.
            automated_mark: The AI's mark (maximizing side).
            depth: Plies played since the root.
            max_depth: Depth at which the heuristic replaces search.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position from the AI's point of view.
        """
        self.positions_evaluated += 1
        n = rule.board_size

        # Terminal check comes before the depth cutoff
        result = self.win_checker.evaluate(board, n, rule.win_length)

        if result.winner == automated_mark:
            return self.config.WIN_SCORE
        elif result.winner is not None:
            return -self.config.WIN_SCORE
        elif result.is_terminal:
            return 0  # Draw

        if depth == max_depth:
            return self.evaluator.score(board, n, automated_mark)

        valid_moves = empty_cells(board)
        next_to_move = to_move.opposite()

        if to_move == automated_mark:
            max_score = float('-inf')
            for index in valid_moves:
                score = self._minimax(
                    place(board, index, to_move), rule, next_to_move,
                    automated_mark, depth + 1, max_depth, alpha, beta
                )
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            for index in valid_moves:
                score = self._minimax(
                    place(board, index, to_move), rule, next_to_move,
                    automated_mark, depth + 1, max_depth, alpha, beta
                )
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score
