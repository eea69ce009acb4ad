"""Tests for the self-play harness."""
import random

import pytest

from nines.agents import HeuristicPlayer, HumanPlayer, RandomPlayer
from nines.game import GameConfig
from nines.tournament import run_self_play


def _factory(rng):
    return [RandomPlayer(random.Random(rng.random())), HeuristicPlayer(), RandomPlayer(random.Random(rng.random()))]


def test_self_play_counts():
    result = run_self_play(_factory, 4, random.Random(0), GameConfig(start_score=3))
    assert result.games_played == 4
    assert sum(result.wins) == 4
    assert result.rounds_played > 0
    for i in range(3):
        assert sum(result.score_deltas[i].values()) == result.rounds_played
        assert all(-9 <= d <= 4 for d in result.score_deltas[i])
    assert result.names[1].startswith("HeuristicPlayer")
    assert "4 games" in result.summary()
    assert 0.0 <= result.win_rate(0) <= 1.0


def test_fresh_players_every_game():
    made = []

    def factory(rng):
        players = _factory(rng)
        made.extend(players)
        return players

    run_self_play(factory, 3, random.Random(1), GameConfig(start_score=2))
    assert len(made) == 9
    assert len({id(p) for p in made}) == 9


def test_no_games():
    result = run_self_play(_factory, 0, random.Random(0))
    assert result.games_played == 0
    assert result.win_rate(0) == 0.0


def test_bad_lineups():
    with pytest.raises(ValueError):
        run_self_play(lambda rng: [RandomPlayer(), RandomPlayer()], 1)
    with pytest.raises(ValueError):
        run_self_play(lambda rng: [HumanPlayer(), RandomPlayer(), RandomPlayer()], 1)
    with pytest.raises(ValueError):
        run_self_play(_factory, -1)
