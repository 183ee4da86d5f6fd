"""
Console front end for the N-in-a-row engine.

Walks through the same steps a graphical front end would:
- Pick a mode (human vs human, or human vs AI)
- Pick a board size or difficulty
- Pick a symbol (AI mode)
- Play moves until someone wins or it's a draw

Run this script to play in a terminal!
"""

from typing import Optional

from engine.config import GameConfig
from engine.game_session import GameSession
from engine.game_state import GameMode, GameStatus, Mark, Phase, format_board
from engine.geometry import to_index


class ConsoleGame:
    """
    Text-mode controller around a GameSession.

    Commands while playing:
        <index> or <row>,<col>  place a mark
        b                       back one step
        r                       new game (start over)
        q                       quit
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.session = GameSession(config)
        self.is_running = False

    def start(
        self,
        mode: Optional[GameMode] = None,
        choice: Optional[str] = None,
        symbol: Optional[Mark] = None
    ):
        """Apply any choices given on the command line, then run the loop."""
        if mode is None and choice is not None:
            mode = infer_mode(self.session.config, choice)
        if mode is not None:
            self.session.select_mode(mode)
        if choice is not None:
            self.session.select_board(choice)
        if symbol is not None and self.session.phase == Phase.AWAITING_SYMBOL:
            self.session.select_symbol(symbol)

        self.is_running = True
        while self.is_running:
            self._step()

    def _step(self):
        """Prompt for whatever the current phase needs."""
        phase = self.session.phase

        if phase == Phase.AWAITING_MODE:
            answer = self._ask("Mode? [1] Player vs Player  [2] Player vs Computer: ")
            if answer == "1":
                self.session.select_mode(GameMode.HUMAN_VS_HUMAN)
            elif answer == "2":
                self.session.select_mode(GameMode.HUMAN_VS_AUTOMATED)

        elif phase == Phase.AWAITING_BOARD:
            config = self.session.config
            if self.session.state.mode == GameMode.HUMAN_VS_AUTOMATED:
                options = config.difficulty_names()
                prompt = "Difficulty"
            else:
                options = config.size_names()
                prompt = "Board size"
            answer = self._ask(f"{prompt}? {' / '.join(options)} (b = back): ")
            if not self.is_running:
                return
            if answer == "b":
                self.session.back()
            elif answer in options:
                self.session.select_board(answer)
                self._show_board()
            else:
                print(f"!! Unknown choice {answer!r}")

        elif phase == Phase.AWAITING_SYMBOL:
            answer = self._ask("Play as X or O? (b = back): ").upper()
            if answer == "B":
                self.session.back()
            elif answer in ("X", "O"):
                self.session.select_symbol(Mark(answer))
                self._show_board()

        elif phase == Phase.PLAYING:
            self._play_turn()

        elif phase == Phase.TERMINAL:
            self._show_game_result()
            answer = self._ask("Play again? [b] same settings  [r] new game  [q] quit: ")
            if answer == "b":
                self.session.back()
                self._show_board()
            elif answer == "r":
                self.session.reset()

    def _play_turn(self):
        """Read one move (or command) from the current player."""
        turn = self.session.current_turn.value
        free = " ".join(str(i) for i in self.session.valid_moves())
        print(f"Free cells: {free}")
        answer = self._ask(f"Your turn ({turn}). Cell index or row,col (b/r/q): ")

        if not self.is_running:
            return
        if answer == "b":
            self.session.back()
            return
        if answer == "r":
            self.session.reset()
            return

        index = self._parse_move(answer)
        if index is None:
            print("!! Invalid input. Enter a number (e.g. 4) or row,col (e.g. 1,1).")
            return

        if not self.session.is_playable(index):
            print(f"!! Cell {index} can't be played. Try again.")
            return

        self.session.apply_move(index)
        self._show_board()

    def _parse_move(self, text: str) -> Optional[int]:
        n = self.session.state.board_size
        try:
            if "," in text:
                row, col = (int(part) for part in text.split(",", 1))
                if not (0 <= row < n and 0 <= col < n):
                    return None
                return to_index(row, col, n)
            return int(text)
        except ValueError:
            return None

    def _ask(self, prompt: str) -> str:
        try:
            answer = input(prompt).strip().lower()
        except EOFError:
            answer = "q"
        if answer == "q":
            print("\nGame quit by user.")
            self.is_running = False
        return answer

    def _show_board(self):
        state = self.session.state
        if state.phase not in (Phase.PLAYING, Phase.TERMINAL):
            return
        print()
        print(format_board(state.board, state.board_size, state.result.winning_line))
        print()

    def _show_game_result(self):
        """Show the final game result."""
        state = self.session.state
        print("\n" + "=" * 40)
        print("   GAME OVER!")
        print("=" * 40)

        if state.result.status == GameStatus.DRAW:
            print("\nIt's a draw! Good game!")
        elif state.mode == GameMode.HUMAN_VS_AUTOMATED:
            if state.result.winner == state.human_mark:
                print("\nCongratulations! You won!")
            else:
                print("\nComputer wins! Better luck next time!")
        else:
            print(f"\n{state.result.winner.value} wins!")

        print("\n" + "=" * 40)


def infer_mode(config: GameConfig, choice: str) -> GameMode:
    """
    Pick the mode a board choice implies when --mode is left out.

    Difficulty names mean a game against the AI, size names a two-player game.

    Raises:
        ValueError: If the name is in neither table.
    """
    if choice in config.DIFFICULTIES:
        return GameMode.HUMAN_VS_AUTOMATED
    if choice in config.BOARD_SIZES:
        return GameMode.HUMAN_VS_HUMAN
    raise ValueError(
        f"Unknown board choice {choice!r}. "
        f"Expected one of {config.difficulty_names() + config.size_names()}"
    )


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="N-in-a-row (Tic Tac Toe) in the terminal")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        help="hvh = player vs player, ai = player vs computer"
    )
    parser.add_argument(
        "--board",
        help="Difficulty (ai mode: easy, medium, hard, expert, extreme) "
             "or size (hvh mode: 3x3, 4x4, 5x5, 6x6); "
             "sets the mode when --mode is not given"
    )
    parser.add_argument(
        "--symbol",
        choices=["X", "O"],
        help="Your symbol in ai mode (X moves first)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print AI search statistics"
    )

    args = parser.parse_args()

    config = GameConfig()
    config.DEBUG_MODE = args.debug

    game = ConsoleGame(config)
    mode = GameMode(args.mode) if args.mode else None

    try:
        game.start(
            mode=mode,
            choice=args.board,
            symbol=Mark(args.symbol) if args.symbol else None
        )
    except ValueError as e:
        print(f"ERROR: {e}")
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
