"""Tests for the round state machine."""
import random

import pytest

from nines.deck import Card, Suit, make_deck_52, parse_card
from nines.errors import IllegalMoveError, PhaseError
from nines.hand import deal_hands
from nines.moves import PlayMove, TradeMove
from nines.state import GameState, Phase


def _ordered_state(dealer=2, trump=None):
    # hand 0: spades, 1: hearts, 2: diamonds, extra: clubs
    return GameState(dealer, trump, deal_hands(deck=make_deck_52()))


def _skip_trades(state):
    while state.phase is Phase.TRADE:
        state.do_move(TradeMove(state.seat_to_move, False))


def test_new_round_starts_in_trade_phase():
    state = _ordered_state(dealer=2)
    assert state.phase is Phase.TRADE
    assert state.seat_to_move == 0
    assert state.legal_moves() == [TradeMove(0, False), TradeMove(0, True)]
    assert not state.is_done


def test_trade_sequence_swaps_hand_ids():
    state = _ordered_state(dealer=2)
    state.do_move(TradeMove(0, True))
    assert state.seat_hand_ids == [3, 1, 2]
    assert state.extra_hand_id == 0
    assert state.seat_to_move == 1

    state.do_move(TradeMove(1, False))
    assert state.phase is Phase.TRADE
    state.do_move(TradeMove(2, True))
    assert state.seat_hand_ids == [3, 1, 0]
    assert state.extra_hand_id == 2
    assert state.trades_count == 2

    # the dealer decides last, then the seat left of the dealer leads
    assert state.phase is Phase.PLAY
    assert state.seat_to_move == 0
    assert state.current_trick.leader == 0
    assert all(c.suit == Suit.CLUBS for c in state.hand_of(0))


def test_must_follow_suit_when_possible():
    rng = random.Random(3)
    for _ in range(30):
        state = GameState.new_round(rng.randrange(3), rng.choice([None, *Suit]), rng)
        while not state.is_done:
            moves = state.legal_moves()
            if state.phase is Phase.PLAY:
                hand = state.hand_of(state.seat_to_move)
                suit = state.current_trick.suit
                if suit is not None and hand.cards_of_suit(suit):
                    assert all(m.card.suit == suit for m in moves)
                else:
                    assert len(moves) == len(hand)
            state.do_move(rng.choice(moves))


def test_ruff_takes_the_trick():
    state = _ordered_state(dealer=2, trump=Suit.HEARTS)
    _skip_trades(state)
    state.do_move(PlayMove(0, parse_card("2♠")))
    # seat 1 holds only hearts, so every card is legal
    assert len(state.legal_moves()) == 13
    state.do_move(PlayMove(1, parse_card("3♥")))
    state.do_move(PlayMove(2, parse_card("A♦")))
    assert state.tricks_taken == [0, 1, 0]
    assert state.seat_to_move == 1
    assert state.current_trick.is_empty()
    assert state.last_trick().cards == [parse_card("2♠"), parse_card("3♥"), parse_card("A♦")]


def test_legal_moves_is_idempotent():
    rng = random.Random(7)
    state = GameState.new_round(0, Suit.SPADES, rng)
    for _ in range(20):
        before = state.clone()
        first = state.legal_moves()
        assert state.legal_moves() == first
        assert state.hands == before.hands
        state.do_move(rng.choice(first))


def test_illegal_moves_raise():
    state = _ordered_state(dealer=2)
    with pytest.raises(IllegalMoveError):
        state.do_move(TradeMove(1, True))
    with pytest.raises(IllegalMoveError):
        state.do_move(PlayMove(0, parse_card("2♠")))
    _skip_trades(state)
    with pytest.raises(IllegalMoveError):
        state.do_move(PlayMove(0, parse_card("2♥")))
    with pytest.raises(IllegalMoveError):
        state.do_move(TradeMove(0, False))
    assert state.tricks_taken == [0, 0, 0]


def test_random_rounds_take_thirteen_tricks():
    for seed in range(50):
        rng = random.Random(seed)
        state = GameState.new_round(rng.randrange(3), rng.choice([None, *Suit]), rng)
        while not state.is_done:
            state.do_move(state.random_move(rng))
        assert sum(state.result) == 13
        assert len(state.tricks_played) == 13
        assert all(len(state.hand_of(s)) == 0 for s in range(3))
        assert len(state.extra_hand) == 13
        assert len(set(state.played_cards())) == 39
        assert state.legal_moves() == []
        assert state.random_move(rng) is None
        with pytest.raises(PhaseError):
            state.do_move(PlayMove(state.seat_to_move, Card(Suit.SPADES, 2)))


def test_clone_is_independent():
    rng = random.Random(11)
    state = GameState.new_round(1, None, rng)
    copy = state.clone()
    while not copy.is_done:
        copy.do_move(copy.random_move(rng))
    assert state.phase is Phase.TRADE
    assert all(len(h) == 13 for h in state.hands.values())
    assert state.tricks_played == []
