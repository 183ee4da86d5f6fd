"""
Game session state machine.

Flow:
    AWAITING_MODE -> AWAITING_BOARD -> AWAITING_SYMBOL (AI mode only)
    -> PLAYING -> TERMINAL

Every transition takes a SessionState and returns a new one. Invalid moves
from the player return the same state object unchanged. GameSession wraps
the functions for callers that prefer to hold one mutable object.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import (
    Board, GameMode, Mark, Phase, SessionState, TerminalResult,
    empty_board, place
)
from .move_validator import MoveValidator
from .win_checker import WinChecker


_win_checker = WinChecker()
_validator = MoveValidator()


def _require_phase(state: SessionState, phase: Phase, action: str):
    if state.phase != phase:
        raise RuntimeError(
            f"Cannot {action} in phase {state.phase.value} "
            f"(expected {phase.value})"
        )


def select_mode(state: SessionState, mode: GameMode) -> SessionState:
    """Pick human-vs-human or human-vs-AI."""
    _require_phase(state, Phase.AWAITING_MODE, "select a mode")
    return replace(state, phase=Phase.AWAITING_BOARD, mode=mode)


def select_board(
    state: SessionState,
    choice: str,
    config: Optional[GameConfig] = None
) -> SessionState:
    """
    Pick a difficulty ("easy"...) or board size ("3x3"...).

    AI mode needs a difficulty, since only those carry a search depth.

    Raises:
        ValueError: Unknown choice, or a plain size in AI mode.
    """
    _require_phase(state, Phase.AWAITING_BOARD, "select a board")
    config = _config_for(state, config)
    rule = config.rule_for(choice)
    state = replace(state, config=config)

    if state.mode == GameMode.HUMAN_VS_AUTOMATED:
        if rule.search_depth is None:
            raise ValueError(
                f"{choice!r} has no AI search depth; "
                f"pick one of {config.difficulty_names()}"
            )
        return replace(
            state,
            phase=Phase.AWAITING_SYMBOL,
            choice=choice,
            rule=rule,
            board=empty_board(rule.board_size),
        )

    return _start_game(replace(state, choice=choice, rule=rule), config)


def select_symbol(
    state: SessionState,
    human_mark: Mark,
    config: Optional[GameConfig] = None
) -> SessionState:
    """
    Pick the human's mark in AI mode. The AI takes the other one and, if
    that is the opening mark, moves straight away.
    """
    _require_phase(state, Phase.AWAITING_SYMBOL, "select a symbol")
    state = replace(
        state,
        human_mark=human_mark,
        automated_mark=human_mark.opposite(),
    )
    return _start_game(state, _config_for(state, config))


def new_session(
    mode: GameMode,
    choice: str,
    human_mark: Optional[Mark] = None,
    config: Optional[GameConfig] = None
) -> SessionState:
    """
    Run all setup steps at once.

    Args:
        mode: Game mode.
        choice: Difficulty or board size name.
        human_mark: Human's mark, AI mode only (defaults to X).
        config: Tables to use; defaults to GameConfig(). Kept on the
            returned state for every later transition.

    Returns:
        A session in PLAYING (or already TERMINAL, never in practice).
    """
    config = config or GameConfig()
    state = select_mode(SessionState(config=config), mode)
    state = select_board(state, choice, config)
    if mode == GameMode.HUMAN_VS_AUTOMATED:
        state = select_symbol(state, human_mark or Mark.X, config)
    return state


def apply_move(
    state: SessionState,
    index: int,
    config: Optional[GameConfig] = None
) -> SessionState:
    """
    Play the current mark at index for the human side.

    In AI mode the AI's reply is played before returning.

    A move after the game has ended counts as player input, not a
    programming error: the state comes back unchanged, same as for an
    occupied cell. Only moves before setup is finished raise.

    Returns:
        The new state, or the same state if the move is not allowed
        (bad index, occupied cell, AI's turn, game over).

    Raises:
        RuntimeError: The game has not been set up yet.
    """
    config = _config_for(state, config)

    if state.phase not in (Phase.PLAYING, Phase.TERMINAL):
        raise RuntimeError(
            f"Cannot apply a move in phase {state.phase.value}"
        )

    validation = _validator.validate_move(state, index)
    if not validation.is_valid:
        if config.DEBUG_MODE:
            print(f"Move {index} rejected: {validation.error_message}")
        return state

    return _play(state, index, config)


def reset(state: SessionState) -> SessionState:
    """Start over: clear every selection (the config stays)."""
    return SessionState(config=state.config)


def back(state: SessionState, config: Optional[GameConfig] = None) -> SessionState:
    """
    Go back one step.

    From TERMINAL this starts a fresh game with the same settings.
    Otherwise the last selection is undone (symbol, then board, then mode).
    """
    config = _config_for(state, config)

    if state.phase == Phase.TERMINAL:
        return _start_game(state, config)

    if state.phase == Phase.PLAYING:
        if state.mode == GameMode.HUMAN_VS_AUTOMATED:
            return replace(
                state,
                phase=Phase.AWAITING_SYMBOL,
                board=empty_board(state.board_size),
                current_turn=Mark(config.FIRST_MARK),
                human_mark=None,
                automated_mark=None,
                result=TerminalResult.in_progress(),
            )
        return _clear_board_choice(state)

    if state.phase == Phase.AWAITING_SYMBOL:
        return _clear_board_choice(state)

    if state.phase == Phase.AWAITING_BOARD:
        return SessionState(config=state.config)

    return state


def is_playable(state: SessionState, index: int) -> bool:
    """True if the human side may play index right now."""
    return _validator.validate_move(state, index).is_valid


def valid_moves(state: SessionState) -> List[int]:
    """Cells the human side may play right now; empty when it is not their move."""
    return _validator.get_valid_moves(state)


def _config_for(state: SessionState, config: Optional[GameConfig]) -> GameConfig:
    # explicit argument, then the session's own, then defaults
    return config or state.config or GameConfig()


def _clear_board_choice(state: SessionState) -> SessionState:
    return SessionState(
        phase=Phase.AWAITING_BOARD, mode=state.mode, config=state.config
    )


def _start_game(state: SessionState, config: GameConfig) -> SessionState:
    """Empty board, opening mark to move; the AI opens if it owns that mark."""
    state = replace(
        state,
        phase=Phase.PLAYING,
        board=empty_board(state.rule.board_size),
        current_turn=Mark(config.FIRST_MARK),
        result=TerminalResult.in_progress(),
    )
    if state.is_automated_turn:
        return _play_automated(state, config)
    return state


def _play(state: SessionState, index: int, config: GameConfig) -> SessionState:
    """Place the current mark, then settle the result or pass the turn."""
    rule = state.rule
    board = place(state.board, index, state.current_turn)
    result = _win_checker.evaluate(board, rule.board_size, rule.win_length)

    if result.is_terminal:
        if config.DEBUG_MODE:
            print(f"Game over: {result.status.value} "
                  f"(winner: {result.winner.value if result.winner else '-'})")
        return replace(state, phase=Phase.TERMINAL, board=board, result=result)

    state = replace(
        state,
        board=board,
        current_turn=state.current_turn.opposite(),
        result=result,
    )
    if state.is_automated_turn:
        return _play_automated(state, config)
    return state


def _play_automated(state: SessionState, config: GameConfig) -> SessionState:
    ai = AIPlayer(config)
    move = ai.choose_move(state.board, state.rule, state.automated_mark)
    return _play(state, move, config)


class GameSession:
    """
    Holds one SessionState and the injected config for a front end.

    Each method runs the matching transition and stores the new state.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.state = SessionState(config=self.config)

    def select_mode(self, mode: GameMode) -> SessionState:
        self.state = select_mode(self.state, mode)
        return self.state

    def select_board(self, choice: str) -> SessionState:
        self.state = select_board(self.state, choice, self.config)
        return self.state

    def select_symbol(self, human_mark: Mark) -> SessionState:
        self.state = select_symbol(self.state, human_mark, self.config)
        return self.state

    def apply_move(self, index: int) -> SessionState:
        self.state = apply_move(self.state, index, self.config)
        return self.state

    def reset(self) -> SessionState:
        self.state = reset(self.state)
        return self.state

    def back(self) -> SessionState:
        self.state = back(self.state, self.config)
        return self.state

    def is_playable(self, index: int) -> bool:
        return is_playable(self.state, index)

    def valid_moves(self) -> List[int]:
        return valid_moves(self.state)

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_turn(self) -> Mark:
        return self.state.current_turn

    @property
    def result(self) -> TerminalResult:
        return self.state.result

    @property
    def winning_line(self) -> Tuple[int, ...]:
        return self.state.result.winning_line
