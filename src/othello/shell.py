"""
Text shell to play Othello against the AI.

Commands (case-insensitive, recognised by their first letter):
NEW, LEVEL lvl, MOVE row col, SWITCH, PRINT, UNDO, HELP, QUIT
"""
import sys
import argparse
from typing import Iterable, List, Optional, TextIO

from .config import Config, get_default_config
from .logger import Logger, setup_logger
from .game import OthelloGame, MoveOutcome, Player, SIZE, MIN_LEVEL, MAX_LEVEL

PROMPT = "othello> "

HELP_TEXT = (
    "Othello shell\n"
    "Following commands are available (in lower- and uppercase)\n"
    "NEW - starts a new game\n"
    "LEVEL lvl - sets the difficulty (1-5)\n"
    "MOVE row col - places a tile at the position (1-8)\n"
    "SWITCH - starts a new game and switches the player order\n"
    "PRINT - prints the board\n"
    "UNDO - takes back your last move\n"
    "HELP - this help text\n"
    "QUIT - ends the program"
)


class Shell:
    """Reads commands line by line and plays them on an OthelloGame."""

    def __init__(self, game: OthelloGame, out: TextIO = sys.stdout, logger: Optional[Logger] = None):
        self.game = game
        self.out = out
        self.logger = logger
        self.game_over = False
        self.move_number = 0

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def _error(self, message: str) -> None:
        self._print(f"Error! {message}")

    def _no_extra(self, args: List[str]) -> bool:
        if args:
            self._error("No additional parameters allowed")
            return False
        return True

    def _parse_ints(self, args: List[str], count: int) -> Optional[List[int]]:
        if len(args) < count:
            self._error("A number is needed for this command")
            return None
        try:
            values = [int(a) for a in args[:count]]
        except ValueError:
            self._error("A number is needed for this command")
            return None
        if not self._no_extra(args[count:]):
            return None
        return values

    # ---------- Commands ----------

    def cmd_new(self, args: List[str]) -> None:
        if self._no_extra(args):
            self.game.new_game()
            self._restarted()

    def cmd_switch(self, args: List[str]) -> None:
        if self._no_extra(args):
            self.game.switch()
            self._restarted()

    def cmd_level(self, args: List[str]) -> None:
        values = self._parse_ints(args, 1)
        if values is None:
            return
        level = values[0]
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            self._error("This level setting is not supported")
        else:
            self.game.set_level(level)

    def cmd_move(self, args: List[str]) -> None:
        if self.game_over:
            self._error("Can't execute a move on a finished game")
            return
        values = self._parse_ints(args, 2)
        if values is None:
            return
        row, col = values
        if not (1 <= row <= SIZE and 1 <= col <= SIZE):
            self._error("Parameters are not within the board")
            return
        self.human_turn(row - 1, col - 1)

    def cmd_print(self, args: List[str]) -> None:
        if self._no_extra(args):
            self._print(str(self.game.board))

    def cmd_undo(self, args: List[str]) -> None:
        if self._no_extra(args):
            if self.game.undo():
                self.game_over = self.game.is_over()
            else:
                self._error("Nothing to undo")

    def cmd_help(self, args: List[str]) -> None:
        self._print(HELP_TEXT)

    # ---------- Turns ----------

    def _restarted(self) -> None:
        self.game_over = False
        self.move_number = 0
        if self.game.ai_to_move():
            self.ai_turn()

    def human_turn(self, row: int, col: int) -> None:
        outcome = self.game.play(row, col)
        if outcome is MoveOutcome.RETRY:
            self._error(f"Invalid move at ({row + 1}, {col + 1})")
            return

        self.move_number += 1
        if outcome is MoveOutcome.PASSED:
            self._print("Human has to miss a turn")
        if self.game.is_over():
            self.win_message()
        elif self.game.ai_to_move():
            self.ai_turn()

    def ai_turn(self) -> None:
        outcome = self.game.machine_play()
        self.move_number += 1
        if self.logger is not None:
            human, ai = self.game.get_score()
            self.logger.log_metrics(
                {'outcome': outcome.value, 'human_tiles': human, 'ai_tiles': ai,
                 'level': self.game.level},
                self.move_number, prefix='ai/')

        if self.game.is_over():
            self.win_message()
        if outcome is MoveOutcome.PASSED:
            self._print("The bot has to miss a turn")

    def win_message(self) -> None:
        winner = self.game.winner()
        if winner is Player.HUMAN:
            self._print("You have won!")
        elif winner is Player.AI:
            self._print("Machine has won.")
        else:
            self._print("Tie game!")
        self.game_over = True

    # ---------- Loop ----------

    def execute(self, line: str) -> bool:
        """
        Run one command line.

        Returns:
            False when the shell should quit
        """
        tokens = line.split()
        if not tokens:
            self._error("No valid input!")
            return True

        command, args = tokens[0].lower(), tokens[1:]
        handlers = {
            'n': self.cmd_new,
            'l': self.cmd_level,
            'm': self.cmd_move,
            's': self.cmd_switch,
            'p': self.cmd_print,
            'u': self.cmd_undo,
            'h': self.cmd_help,
        }
        if command[0] == 'q':
            return not self._no_extra(args)
        handler = handlers.get(command[0])
        if handler is None:
            self._error("Invalid command")
        else:
            handler(args)
        return True

    def run(self, lines: Iterable[str]) -> None:
        if self.game.ai_to_move():
            self.ai_turn()
        self.out.write(PROMPT)
        self.out.flush()
        for line in lines:
            if not self.execute(line):
                break
            self.out.write(PROMPT)
            self.out.flush()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Play Othello against the computer')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a JSON config file')
    parser.add_argument('--level', type=int, default=None, choices=range(MIN_LEVEL, MAX_LEVEL + 1),
                        help='AI look-ahead depth (1-5)')
    parser.add_argument('--ai-first', action='store_true',
                        help='Let the computer make the opening move')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory to write log files to')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (DEBUG, INFO, WARNING, ...)')
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load the config file if given and apply command line overrides."""
    config = Config.load(args.config) if args.config else get_default_config()
    if args.level is not None:
        config.game.level = args.level
    if args.ai_first:
        config.game.first_player = "ai"
    if args.log_dir is not None:
        config.logging.log_dir = args.log_dir
    if args.log_level is not None:
        config.logging.log_level = args.log_level
    return config.validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = build_config(args)
    logger = setup_logger(config)
    try:
        game = OthelloGame(config.game.first_mover(), config.game.level)
        Shell(game, logger=logger).run(sys.stdin)
    finally:
        logger.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
