"""Tests for the command-line interface."""
import random

import pytest

from nines.agents import RandomPlayer
from nines.cli import ask_move, build_parser, format_move_menu, main
from nines.game import Game
from nines.moves import TradeMove


def test_parse_play_defaults():
    args = build_parser().parse_args(["play"])
    assert args.difficulty == "expert"
    assert args.seed is None
    assert args.save is None
    assert args.verbose == 0


def test_parse_self_play():
    args = build_parser().parse_args(["-vv", "self-play", "--games", "5", "--players", "expert", "random", "cheating"])
    assert args.games == 5
    assert args.players == ["expert", "random", "cheating"]
    assert args.verbose == 2


def test_parse_rejects_unknown():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["play", "--difficulty", "godlike"])
    with pytest.raises(SystemExit):
        build_parser().parse_args(["resume"])
    with pytest.raises(SystemExit):
        build_parser().parse_args(["self-play", "--players", "human", "random", "random"])


def test_move_menu():
    moves = [TradeMove(0, False), TradeMove(0, True)]
    assert format_move_menu(moves) == "  1) Don't trade hand\n  2) Trade hand"


def test_ask_move_retries_until_valid(capsys):
    game = Game([RandomPlayer(), RandomPlayer(), RandomPlayer()], rng=random.Random(0))
    game.start()
    state = game.start_round()
    moves = state.legal_moves()
    answers = iter(["", "7", "two", "2"])
    move = ask_move(game, state.seat_to_move, moves, lambda prompt: next(answers))
    assert move == moves[1]
    assert "Enter a number between 1 and 2" in capsys.readouterr().out


def test_self_play_command(capsys):
    main(["self-play", "--games", "2", "--players", "random", "heuristic", "random", "--seed", "3"])
    out = capsys.readouterr().out
    assert "2 games" in out
    assert "HeuristicPlayer" in out


def test_play_command_saves(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "1")
    save = tmp_path / "game.json"
    main(["play", "--difficulty", "beginner", "--iteration-scale", "1", "--seed", "2", "--save", str(save)])
    assert save.exists()
    assert "Game over" in capsys.readouterr().out

    main(["resume", "--save", str(save)])
    assert "Resuming" in capsys.readouterr().out


def test_resume_missing_save(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main(["resume", "--save", str(tmp_path / "nope.json")])
    assert "Error" in capsys.readouterr().err
