"""Tests for cards, dealing and seat rotation."""
import random

import pytest

from nines.deck import Card, Suit, format_cards, make_deck_52, parse_card, parse_cards
from nines.hand import EXTRA_HAND_ID, deal_hands, first_to_play, next_dealer


def test_deck_52():
    deck = make_deck_52()
    assert len(deck) == 52
    assert len(set(deck)) == 52


def test_card_str_and_parse():
    assert str(Card(Suit.HEARTS, 10)) == "10♥"
    assert str(Card(Suit.CLUBS, 14)) == "A♣"
    assert parse_card("10♥") == Card(Suit.HEARTS, 10)
    assert parse_card("qs") == Card(Suit.SPADES, 12)
    assert parse_cards("A♣, 5♣ 5S") == [Card(Suit.CLUBS, 14), Card(Suit.CLUBS, 5), Card(Suit.SPADES, 5)]
    for card in make_deck_52():
        assert parse_card(str(card)) == card


@pytest.mark.parametrize("text", ["", "1♥", "Z♠", "10X", "15H"])
def test_parse_card_invalid(text):
    with pytest.raises(ValueError):
        parse_card(text)


def test_card_rank_validation():
    with pytest.raises(ValueError):
        Card(Suit.SPADES, 1)


def test_format_cards_sorted():
    cards = parse_cards("K♥ 2♠ 3♥")
    assert format_cards(cards) == "[2♠, 3♥, K♥]"


def test_deal_hands():
    rng = random.Random(42)
    deal = deal_hands(rng=rng)
    assert [h.id for h in deal.hands] == [0, 1, 2]
    assert deal.extra.id == EXTRA_HAND_ID
    all_cards = [c for h in [*deal.hands, deal.extra] for c in h]
    assert len(all_cards) == 52
    assert set(all_cards) == set(make_deck_52())


def test_deal_in_order():
    deal = deal_hands(deck=make_deck_52())
    assert all(c.suit == Suit.SPADES for c in deal.hands[0])
    assert all(c.suit == Suit.CLUBS for c in deal.extra)


def test_deal_requires_full_deck():
    with pytest.raises(ValueError):
        deal_hands(deck=make_deck_52()[:40])


def test_seat_rotation():
    assert first_to_play(0) == 1
    assert first_to_play(2) == 0
    assert next_dealer(2) == 0
