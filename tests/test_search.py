"""Tests for the rollout search oracle."""
import random

import pytest

from nines.deck import Suit, make_deck_52, parse_card
from nines.errors import IllegalMoveError, PhaseError
from nines.hand import deal_hands
from nines.moves import PlayMove, TradeMove
from nines.search import RolloutOracle
from nines.state import GameState


def _state(seed=0):
    return GameState.new_round(0, Suit.DIAMONDS, random.Random(seed))


def test_simulate_returns_average_tricks():
    oracle = RolloutOracle(seed=1)
    state = _state()
    value = oracle.simulate(state, TradeMove(1, False), 20)
    assert 0.0 <= value <= 13.0
    assert state.trades_count == 0
    assert state.seat_to_move == 1


def test_simulate_rejects_illegal_moves():
    with pytest.raises(IllegalMoveError):
        RolloutOracle(seed=1).simulate(_state(), TradeMove(2, True), 5)


def test_search_returns_a_legal_move():
    oracle = RolloutOracle(seed=3)
    state = _state(3)
    while not state.is_done:
        move = oracle.search(state, 12)
        assert move in state.legal_moves()
        state.do_move(move)
    with pytest.raises(PhaseError):
        oracle.search(state, 12)


def test_search_uses_sampler():
    calls = []

    def sampler(state):
        calls.append(1)
        return state.clone()

    RolloutOracle(seed=0).search(_state(), 10, sampler)
    assert len(calls) == 10


def test_simulate_counts_a_certain_trick():
    # hand 0 spades, hand 1 hearts, hand 2 diamonds; hearts are trump
    state = GameState(2, Suit.HEARTS, deal_hands(deck=make_deck_52()))
    for seat in (0, 1, 2):
        state.do_move(TradeMove(seat, False))
    state.do_move(PlayMove(0, parse_card("2♠")))
    # seat 1 takes the trick with any heart; all of them win it
    value = RolloutOracle(seed=0).simulate(state, PlayMove(1, parse_card("2♥")), 30)
    assert value >= 1.0
