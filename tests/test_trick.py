"""Tests for trick resolution."""
import random

import pytest

from nines.deck import Suit, parse_cards
from nines.state import GameState, Phase
from nines.trick import Trick


def _trick(text, trump=None, leader=0):
    return Trick(leader, trump, parse_cards(text))


def test_highest_of_led_suit_wins_without_trump():
    assert _trick("A♣ 5♣ Q♣").find_highest() == 0


def test_trump_beats_led_suit():
    assert _trick("A♣ 5♣ 5♠", trump=Suit.SPADES).find_highest() == 2


def test_off_suit_never_wins():
    assert _trick("5♣ A♥ 2♣").find_highest() == 0
    assert _trick("5♣ A♥ 2♣", trump=Suit.DIAMONDS).find_highest() == 0


def test_higher_trump_overtrumps():
    assert _trick("5♣ 2♠ 3♠", trump=Suit.SPADES).find_highest() == 2
    assert _trick("5♣ 3♠ 2♠", trump=Suit.SPADES).find_highest() == 1


def test_trump_led():
    assert _trick("4♥ K♥ A♠", trump=Suit.HEARTS).find_highest() == 1


def test_winner_is_absolute_seat():
    trick = _trick("2♦ 9♦ 3♦", leader=2)
    assert trick.find_highest() == 1
    assert trick.winner() == 0


def test_trick_bookkeeping():
    trick = Trick(1, None)
    assert trick.is_empty()
    assert trick.suit is None
    assert trick.next_seat() == 1
    with pytest.raises(ValueError):
        trick.find_highest()
    for card in parse_cards("2♦ 9♦ 3♦"):
        trick.add(card)
    assert trick.is_full()
    assert trick.suit == Suit.DIAMONDS
    with pytest.raises(ValueError):
        trick.add(parse_cards("4♦")[0])


def test_clone_is_independent():
    trick = _trick("2♦")
    copy = trick.clone()
    copy.add(parse_cards("3♦")[0])
    assert len(trick) == 1
    assert copy != trick


def test_no_later_card_beats_the_winner():
    for seed in range(20):
        rng = random.Random(seed)
        state = GameState.new_round(rng.randrange(3), rng.choice([None, *Suit]), rng)
        while not state.is_done:
            state.do_move(state.random_move(rng))
            if state.phase is Phase.PLAY and state.current_trick.is_empty() and state.tricks_played:
                trick = state.tricks_played[-1]
                best = trick.find_highest()
                for i in range(best + 1, 3):
                    assert Trick(trick.leader, trick.trump, trick.cards[: i + 1]).find_highest() == best
