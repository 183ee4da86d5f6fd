"""
Game configuration for the N-in-a-row engine.
Board sizes, win lengths and AI search depths for every selectable option.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Optional


@dataclass(frozen=True)
class WinRule:
    """
    Board size and win condition for one game.
    Fixed once the game starts.
    """
    board_size: int                     # N (board is N x N)
    win_length: int                     # L marks in a row to win
    search_depth: Optional[int] = None  # AI plies, None for human-vs-human sizes


class GameConfig:
    """
    Configuration class for game settings.
    Pass a subclass or a modified instance to GameSession to change tables
    (tests do this).
    """

    # ==================== DIFFICULTY SETTINGS ====================
    # Used in human-vs-AI mode.
    # Depth stays shallow so the bigger boards answer instantly; the AI is
    # not meant to play perfectly on them.
    DIFFICULTIES = MappingProxyType({
        "easy": WinRule(board_size=3, win_length=3, search_depth=2),
        "medium": WinRule(board_size=3, win_length=3, search_depth=3),
        "hard": WinRule(board_size=4, win_length=4, search_depth=3),
        "expert": WinRule(board_size=5, win_length=5, search_depth=3),
        "extreme": WinRule(board_size=6, win_length=6, search_depth=2),
    })

    # ==================== BOARD SIZE SETTINGS ====================
    # Used in human-vs-human mode. Win length equals board size.
    BOARD_SIZES = MappingProxyType({
        "3x3": WinRule(board_size=3, win_length=3),
        "4x4": WinRule(board_size=4, win_length=4),
        "5x5": WinRule(board_size=5, win_length=5),
        "6x6": WinRule(board_size=6, win_length=6),
    })

    # ==================== SEARCH SETTINGS ====================
    # Terminal score; must stay above any positional score (a full 6x6 board weighs 60)
    WIN_SCORE = 1000

    # ==================== GAME SETTINGS ====================
    FIRST_MARK = "X"  # X always opens

    # ==================== DEBUG SETTINGS ====================
    DEBUG_MODE = False

    def rule_for(self, choice: str) -> WinRule:
        """
        Look up the rule for a difficulty name or board size name.

        Args:
            choice: e.g. "hard" or "4x4".

        Returns:
            The matching WinRule.

        Raises:
            ValueError: If the name is in neither table.
        """
        if choice in self.DIFFICULTIES:
            return self.DIFFICULTIES[choice]
        if choice in self.BOARD_SIZES:
            return self.BOARD_SIZES[choice]
        raise ValueError(
            f"Unknown board choice {choice!r}. "
            f"Expected one of {self.difficulty_names() + self.size_names()}"
        )

    def difficulty_names(self) -> List[str]:
        return list(self.DIFFICULTIES)

    def size_names(self) -> List[str]:
        return list(self.BOARD_SIZES)
