"""Tests for the GameSession state machine."""

from dataclasses import replace
from types import MappingProxyType

import pytest

from engine.config import GameConfig, WinRule
from engine.game_session import (
    GameSession, apply_move, back, is_playable, new_session, reset,
    select_board, select_mode, select_symbol, valid_moves
)
from engine.game_state import GameMode, GameStatus, Mark, Phase, SessionState

HVH = GameMode.HUMAN_VS_HUMAN
AI = GameMode.HUMAN_VS_AUTOMATED


def play(state, *moves):
    for index in moves:
        state = apply_move(state, index)
    return state


class TestSetup:
    """Tests for the selection steps."""

    def test_hvh_goes_straight_to_playing(self) -> None:
        state = select_mode(SessionState(), HVH)
        assert state.phase == Phase.AWAITING_BOARD

        state = select_board(state, "4x4")
        assert state.phase == Phase.PLAYING
        assert state.board == (None,) * 16
        assert state.rule == WinRule(4, 4)
        assert state.current_turn == Mark.X

    def test_ai_mode_asks_for_symbol(self) -> None:
        state = select_board(select_mode(SessionState(), AI), "hard")
        assert state.phase == Phase.AWAITING_SYMBOL
        assert len(state.board) == 16

        state = select_symbol(state, Mark.X)
        assert state.phase == Phase.PLAYING
        assert state.human_mark == Mark.X
        assert state.automated_mark == Mark.O
        assert state.board == (None,) * 16

    def test_ai_opens_when_human_picks_o(self) -> None:
        state = new_session(AI, "easy", Mark.O)
        assert state.phase == Phase.PLAYING
        assert state.board.count(Mark.X) == 1
        assert state.board.count(Mark.O) == 0
        assert state.current_turn == Mark.O

    @pytest.mark.parametrize("difficulty,size,length", [
        ("easy", 3, 3),
        ("medium", 3, 3),
        ("hard", 4, 4),
        ("expert", 5, 5),
        ("extreme", 6, 6),
    ])
    def test_difficulty_table(self, difficulty: str, size: int, length: int) -> None:
        state = new_session(AI, difficulty, Mark.X)
        assert state.rule.board_size == size
        assert state.rule.win_length == length
        assert len(state.board) == size * size

    def test_size_needs_hvh(self) -> None:
        state = select_mode(SessionState(), AI)
        with pytest.raises(ValueError):
            select_board(state, "3x3")

    def test_unknown_choice(self) -> None:
        with pytest.raises(ValueError):
            new_session(HVH, "7x7")

    def test_out_of_order_selection(self) -> None:
        with pytest.raises(RuntimeError):
            select_symbol(SessionState(), Mark.X)
        with pytest.raises(RuntimeError):
            select_board(SessionState(), "3x3")

    def test_injected_config(self) -> None:
        class TinyConfig(GameConfig):
            DIFFICULTIES = MappingProxyType({
                "tiny": WinRule(board_size=3, win_length=2, search_depth=1),
            })

        state = new_session(AI, "tiny", Mark.X, TinyConfig())
        assert state.rule == WinRule(3, 2, 1)

        with pytest.raises(ValueError):
            new_session(AI, "easy", Mark.X, TinyConfig())

    def test_config_kept_after_setup(self) -> None:
        """Later transitions use the config given at setup, not the defaults."""
        class OFirst(GameConfig):
            FIRST_MARK = "O"

        config = OFirst()
        state = new_session(HVH, "3x3", config=config)
        assert state.current_turn == Mark.O

        state = play(state, 0, 3, 1, 4, 2)
        assert state.phase == Phase.TERMINAL
        assert state.result.winner == Mark.O

        state = back(state)
        assert state.phase == Phase.PLAYING
        assert state.current_turn == Mark.O
        assert state.config is config

        state = reset(state)
        assert state.config is config
        state = select_board(select_mode(state, HVH), "3x3")
        assert state.current_turn == Mark.O

    def test_config_kept_by_step_by_step_setup(self) -> None:
        class OFirst(GameConfig):
            FIRST_MARK = "O"

        state = select_mode(SessionState(), HVH)
        state = select_board(state, "4x4", OFirst())
        assert state.current_turn == Mark.O

        state = back(back(play(state, 5)))
        assert state.phase == Phase.AWAITING_MODE
        state = select_board(select_mode(state, HVH), "3x3")
        assert state.current_turn == Mark.O


class TestMoves:
    """Tests for apply_move."""

    def test_turns_alternate(self) -> None:
        state = play(new_session(HVH, "3x3"), 4)
        assert state.board[4] == Mark.X
        assert state.current_turn == Mark.O

        state = apply_move(state, 0)
        assert state.board[0] == Mark.O
        assert state.current_turn == Mark.X

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_out_of_range_is_ignored(self, index: int) -> None:
        state = play(new_session(HVH, "3x3"), 4)
        assert apply_move(state, index) is state

    def test_occupied_cell_is_ignored(self) -> None:
        state = play(new_session(HVH, "3x3"), 4)
        after = apply_move(state, 4)
        assert after is state
        assert after.board == state.board
        assert after.current_turn == state.current_turn
        assert after.result == state.result

    def test_ai_turn_is_ignored(self) -> None:
        state = new_session(AI, "easy", Mark.X)
        waiting = replace(state, current_turn=Mark.O)
        assert apply_move(waiting, 0) is waiting
        assert not is_playable(waiting, 0)

    def test_move_before_setup_fails(self) -> None:
        with pytest.raises(RuntimeError):
            apply_move(SessionState(), 0)

    def test_hvh_win(self) -> None:
        state = play(new_session(HVH, "3x3"), 0, 3, 1, 4, 2)
        assert state.phase == Phase.TERMINAL
        assert state.result.status == GameStatus.WON
        assert state.result.winner == Mark.X
        assert state.result.winning_line == (0, 1, 2)

    def test_hvh_draw(self) -> None:
        # X O X / X O O / O X X
        state = play(new_session(HVH, "3x3"), 0, 1, 2, 4, 3, 5, 7, 6, 8)
        assert state.phase == Phase.TERMINAL
        assert state.result.status == GameStatus.DRAW
        assert state.result.winning_line == ()

    def test_no_moves_after_game_over(self) -> None:
        state = play(new_session(HVH, "3x3"), 0, 3, 1, 4, 2)
        assert apply_move(state, 8) is state
        assert not is_playable(state, 8)

    def test_ai_replies_in_same_call(self) -> None:
        state = play(new_session(AI, "medium", Mark.X), 4)
        assert state.board[4] == Mark.X
        assert state.board.count(Mark.O) == 1
        assert state.board.index(Mark.O) in (0, 2, 6, 8)
        assert state.current_turn == Mark.X

    def test_ai_game_finishes(self) -> None:
        """Human always takes the lowest free cell; game must end cleanly."""
        state = new_session(AI, "medium", Mark.X)
        for _turn in range(9):
            if state.phase == Phase.TERMINAL:
                break
            state = apply_move(state, state.board.index(None))

        assert state.phase == Phase.TERMINAL
        if state.result.winner is not None:
            assert len(state.result.winning_line) == 3
            assert all(state.board[i] == state.result.winner for i in state.result.winning_line)

    def test_is_playable(self) -> None:
        state = play(new_session(HVH, "3x3"), 4)
        assert is_playable(state, 0)
        assert not is_playable(state, 4)
        assert not is_playable(state, 9)
        assert not is_playable(SessionState(), 0)


class TestValidMoves:
    """Tests for the list of cells the human side may play."""

    def test_empty_cells_while_playing(self) -> None:
        state = play(new_session(HVH, "3x3"), 4, 0)
        assert valid_moves(state) == [1, 2, 3, 5, 6, 7, 8]
        assert all(is_playable(state, i) for i in valid_moves(state))

    def test_ai_reply_already_removed(self) -> None:
        state = play(new_session(AI, "medium", Mark.X), 4)
        taken = {i for i, cell in enumerate(state.board) if cell is not None}
        assert len(taken) == 2
        assert valid_moves(state) == [i for i in range(9) if i not in taken]

    def test_none_on_ai_turn(self) -> None:
        state = new_session(AI, "easy", Mark.X)
        waiting = replace(state, current_turn=Mark.O)
        assert valid_moves(waiting) == []

    def test_none_after_game_over(self) -> None:
        state = play(new_session(HVH, "3x3"), 0, 3, 1, 4, 2)
        assert state.phase == Phase.TERMINAL
        assert valid_moves(state) == []

    def test_none_during_setup(self) -> None:
        assert valid_moves(SessionState()) == []
        assert valid_moves(select_board(select_mode(SessionState(), AI), "hard")) == []

    def test_session_object(self) -> None:
        session = GameSession()
        session.select_mode(HVH)
        session.select_board("4x4")
        assert session.valid_moves() == list(range(16))
        session.apply_move(0)
        assert session.valid_moves() == list(range(1, 16))


class TestNavigation:
    """Tests for back() and reset()."""

    def test_back_from_terminal_restarts(self) -> None:
        finished = play(new_session(HVH, "4x4"), 0, 4, 1, 5, 2, 6, 3)
        assert finished.phase == Phase.TERMINAL

        state = back(finished)
        assert state.phase == Phase.PLAYING
        assert state.board == (None,) * 16
        assert state.current_turn == Mark.X
        assert state.rule == finished.rule
        assert state.result.status == GameStatus.IN_PROGRESS

    def test_back_from_terminal_keeps_symbols(self) -> None:
        state = new_session(AI, "easy", Mark.O)
        while state.phase != Phase.TERMINAL:
            state = apply_move(state, state.board.index(None))

        state = back(state)
        assert state.phase == Phase.PLAYING
        assert state.human_mark == Mark.O
        assert state.board.count(Mark.X) == 1

    def test_ai_back_chain(self) -> None:
        state = new_session(AI, "hard", Mark.X)

        state = back(state)
        assert state.phase == Phase.AWAITING_SYMBOL
        assert state.human_mark is None and state.automated_mark is None
        assert state.choice == "hard"

        state = back(state)
        assert state.phase == Phase.AWAITING_BOARD
        assert state.choice is None and state.rule is None
        assert state.mode == AI

        state = back(state)
        assert state.phase == Phase.AWAITING_MODE
        assert state.mode is None

        assert back(state) == state

    def test_hvh_back_goes_to_size(self) -> None:
        state = back(play(new_session(HVH, "5x5"), 12))
        assert state.phase == Phase.AWAITING_BOARD
        assert state.mode == HVH
        assert state.board == ()

    def test_reset_clears_everything(self) -> None:
        state = reset(play(new_session(AI, "medium", Mark.O), 4))
        assert state == SessionState()


class TestGameSessionObject:
    """Tests for the GameSession wrapper."""

    def test_full_flow(self) -> None:
        session = GameSession()
        session.select_mode(HVH)
        session.select_board("3x3")
        assert session.phase == Phase.PLAYING
        assert session.is_playable(4)

        for index in (0, 3, 1, 4, 2):
            session.apply_move(index)

        assert session.result.winner == Mark.X
        assert session.winning_line == (0, 1, 2)

        session.back()
        assert session.board == (None,) * 9
        assert session.current_turn == Mark.X

        session.reset()
        assert session.phase == Phase.AWAITING_MODE

    def test_ai_flow(self) -> None:
        session = GameSession()
        session.select_mode(AI)
        session.select_board("medium")
        session.select_symbol(Mark.X)
        session.apply_move(4)
        assert session.board.count(Mark.O) == 1
        assert session.current_turn == Mark.X
