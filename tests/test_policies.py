"""Tests for the searching players and the difficulty tiers."""
import random

import pytest

from nines.agents import HeuristicPlayer, HumanPlayer, RandomPlayer
from nines.game import Game
from nines.knowledge import Knowledge
from nines.moves import TradeMove
from nines.policies import (
    DIFFICULTY_PROFILES,
    CheatingPlayer,
    Difficulty,
    MctsPlayer,
    PLAYER_KINDS,
    make_player,
)
from nines.search import RolloutOracle
from nines.state import GameState


def _play_round(players, seed):
    game = Game(players, rng=random.Random(seed))
    game.start()
    game.start_round()
    while not game.state.is_done:
        state = game.state
        move = game.players[state.seat_to_move].find_move(state)
        assert move in state.legal_moves()
        game.do_move(move)
    game.end_round()
    return game


def test_difficulty_profiles():
    assert DIFFICULTY_PROFILES[Difficulty.BEGINNER].play_iterations == 0
    assert DIFFICULTY_PROFILES[Difficulty.EXPERT].forget_ratio == 0.0
    assert DIFFICULTY_PROFILES[Difficulty.EXPERT].remembers_suit_voids
    assert not DIFFICULTY_PROFILES[Difficulty.ADVANCED].remembers_suit_voids
    ratios = [DIFFICULTY_PROFILES[d].forget_ratio for d in Difficulty]
    assert ratios == sorted(ratios, reverse=True)


def test_make_player():
    assert isinstance(make_player("human"), HumanPlayer)
    assert isinstance(make_player("random"), RandomPlayer)
    assert isinstance(make_player("heuristic"), HeuristicPlayer)
    assert isinstance(make_player("cheating", iteration_scale=2), CheatingPlayer)
    player = make_player("Advanced", iteration_scale=3)
    assert isinstance(player, MctsPlayer)
    assert player.difficulty is Difficulty.ADVANCED
    assert player.iteration_scale == 3
    assert set(PLAYER_KINDS) >= {"beginner", "expert", "cheating"}
    with pytest.raises(ValueError):
        make_player("grandmaster")


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_mcts_player_makes_legal_moves(difficulty):
    players = [
        MctsPlayer(difficulty, rng=random.Random(1), iteration_scale=1),
        RandomPlayer(random.Random(2)),
        HeuristicPlayer(),
    ]
    game = _play_round(players, seed=4)
    assert sum(game.round_history[0].tricks_taken) == 13


def test_cheating_players_make_legal_moves():
    players = [CheatingPlayer(3, 3, rng=random.Random(i)) for i in range(3)]
    _play_round(players, seed=6)


def test_knowledge_is_reset_every_round():
    player = MctsPlayer(Difficulty.EXPERT, rng=random.Random(0), iteration_scale=1)
    state = GameState.new_round(2, None, random.Random(0))
    player.initialize(0, state)
    player.knowledge.mark_absent(1, 0)
    player.initialize(1, GameState.new_round(0, None, random.Random(1)))
    assert player.knowledge == Knowledge.for_hand(1, 1)


def test_mcts_player_tracks_its_trade():
    rng = random.Random(9)
    state = GameState.new_round(2, None, rng)
    player = MctsPlayer(Difficulty.INTERMEDIATE, rng=rng, iteration_scale=1)
    player.initialize(0, state)
    move = TradeMove(0, True)
    state.do_move(move)
    player.on_move(state, move)
    # intermediate players forget the hand they gave away
    assert player.knowledge.known_hand_ids() == [3]

    det = player.randomize(state)
    assert det.hand_of(0) == state.hand_of(0)


def test_clone_copies_knowledge():
    player = MctsPlayer(Difficulty.EXPERT, rng=random.Random(0))
    player.initialize(2, GameState.new_round(1, None, random.Random(0)))
    copy = player.clone()
    copy.knowledge.mark_absent(0, 1)
    assert player.knowledge.absent_suits == [0, 0, 0, 0]
    assert copy.seat == 2
    assert copy.difficulty is Difficulty.EXPERT


def test_clone_keeps_the_injected_oracle():
    oracle = RolloutOracle(seed=5)
    mcts = MctsPlayer(Difficulty.ADVANCED, oracle=oracle, rng=random.Random(0))
    cheating = CheatingPlayer(2, 2, oracle=oracle, rng=random.Random(1))
    assert mcts.clone().oracle is oracle
    assert cheating.clone().oracle is oracle
