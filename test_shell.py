"""
Tests for the text shell.
"""
import io
import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.absolute() / 'src'))

from othello.game import Board, OthelloGame, Player
from othello.shell import Shell, parse_args, build_config


@pytest.fixture
def shell():
    return Shell(OthelloGame(Player.HUMAN, level=1), out=io.StringIO())


def output(shell):
    return shell.out.getvalue()


def test_move_gets_ai_reply(shell):
    assert shell.execute("move 3 4")
    board = shell.game.board
    assert board.get_slot(2, 3) is Player.HUMAN
    assert board.tile_count(Player.HUMAN) + board.tile_count(Player.AI) == 6
    assert board.to_move is Player.HUMAN
    assert "Error" not in output(shell)


def test_commands_are_case_insensitive(shell):
    shell.execute("PRINT")
    shell.execute("p")
    lines = output(shell).splitlines()
    assert lines[:8] == str(Board(Player.HUMAN)).splitlines()
    assert len(lines) == 16


def test_bad_moves(shell):
    shell.execute("move 9 1")
    shell.execute("move 1 1")
    shell.execute("move a b")
    shell.execute("move 3")
    shell.execute("move 3 4 5")
    text = output(shell)
    assert "Error! Parameters are not within the board" in text
    assert "Error! Invalid move at (1, 1)" in text
    assert text.count("Error! A number is needed for this command") == 2
    assert "Error! No additional parameters allowed" in text
    assert shell.game.board == Board(Player.HUMAN, level=1)


def test_level_command(shell):
    shell.execute("level 4")
    assert shell.game.board.level == 4
    shell.execute("level 0")
    assert "Error! This level setting is not supported" in output(shell)
    assert shell.game.board.level == 4


def test_switch_lets_ai_open(shell):
    shell.execute("switch")
    board = shell.game.board
    assert board.first_player is Player.AI
    assert board.tile_count(Player.AI) == 4
    assert board.to_move is Player.HUMAN


def test_undo_and_new(shell):
    shell.execute("undo")
    assert "Error! Nothing to undo" in output(shell)
    shell.execute("move 3 4")
    shell.execute("undo")
    assert shell.game.board == Board(Player.HUMAN, level=1)
    shell.execute("move 3 4")
    shell.execute("new")
    assert shell.game.board == Board(Player.HUMAN, level=1)


def test_human_pass_message(shell):
    shell.game.board = Board.from_string(
        "\n".join(["O X . . . . . ."] + [". . . . . . . ."] * 7), Player.HUMAN, level=1)
    shell.execute("move 8 8")
    text = output(shell)
    assert "Human has to miss a turn" in text
    # The AI takes the row and nobody can move any more
    assert "Machine has won." in text
    shell.execute("move 1 1")
    assert "Error! Can't execute a move on a finished game" in output(shell)


def test_unknown_and_quit(shell):
    assert shell.execute("xyzzy")
    assert shell.execute("   ")
    assert shell.execute("quit now")
    assert not shell.execute("QUIT")
    text = output(shell)
    assert "Error! Invalid command" in text
    assert "Error! No valid input!" in text
    assert "Error! No additional parameters allowed" in text


def test_run_reads_lines(shell):
    shell.run(["help\n", "quit\n", "print\n"])
    text = output(shell)
    assert "MOVE row col" in text
    assert text.count("othello> ") == 2


def test_command_line_overrides():
    config = build_config(parse_args(["--level", "2", "--ai-first", "--log-level", "DEBUG"]))
    assert config.game.level == 2
    assert config.game.first_mover() is Player.AI
    assert config.logging.log_level == "DEBUG"

    with pytest.raises(SystemExit):
        parse_args(["--level", "7"])
