"""
N-in-a-row game engine.
Handles board geometry, win detection, the AI opponent and the game
session state machine.
"""

__version__ = "1.0.0"

from .config import GameConfig, WinRule
from .game_state import (
    GameMode, GameStatus, Mark, Phase, SessionState, TerminalResult
)
from .move_validator import MoveValidator
from .win_checker import WinChecker
from .evaluator import PositionEvaluator
from .ai_player import AIPlayer
from .game_session import (
    GameSession, apply_move, back, is_playable, new_session, reset,
    select_board, select_mode, select_symbol, valid_moves
)
