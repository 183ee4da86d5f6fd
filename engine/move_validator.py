"""
Move validator for the N-in-a-row engine.
Validates that moves follow the rules.
"""

from typing import Optional, List
from dataclasses import dataclass

from .game_state import Phase, SessionState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates moves requested by the human side.

    Rules:
    1. Game must be in progress
    2. Index must be on the board
    3. Can only place on empty cells
    4. In AI mode, humans can't move on the AI's turn
    """

    def validate_move(self, state: SessionState, index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            state: Current session state.
            index: Cell to place the current mark on.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is running
        if state.phase != Phase.PLAYING:
            return ValidationResult(
                is_valid=False,
                error_message="Game is not in progress!"
            )

        # Check if index is in valid range
        cell_count = len(state.board)
        if not (0 <= index < cell_count):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{cell_count - 1}."
            )

        # Check if cell is empty
        if state.board[index] is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {state.board[index].value}"
            )

        # Check whose turn it is
        if state.is_automated_turn:
            return ValidationResult(
                is_valid=False,
                error_message=f"It's the AI's turn ({state.automated_mark.value})!"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, state: SessionState) -> List[int]:
        """
        Get all cells the human side may play right now.

        Returns:
            List of cell indices, ascending.
        """
        if state.phase != Phase.PLAYING or state.is_automated_turn:
            return []

        return [i for i, cell in enumerate(state.board) if cell is None]
