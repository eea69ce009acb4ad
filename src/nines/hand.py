"""
Hands and distribution (deal) for Nines.
Three seats and one extra hand, 13 cards each. Each hand gets a stable id at
deal time that it keeps for the whole round, even when traded between a seat
and the extra hand.
"""
from __future__ import annotations

import random
from typing import Iterable, NamedTuple

from .deck import Card, Suit, format_cards, shuffled_deck

SEAT_COUNT = 3
HAND_COUNT = SEAT_COUNT + 1
CARDS_PER_HAND = 13

NO_ID = -1
# Seat s is dealt hand id s; the extra hand always starts with the last id.
EXTRA_HAND_ID = SEAT_COUNT


class Hand:
    """A mutable multiset of cards identified by a stable id."""

    __slots__ = ("id", "cards")

    def __init__(self, hand_id: int, cards: Iterable[Card] = ()) -> None:
        self.id = hand_id
        self.cards: list[Card] = list(cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.id == other.id and sorted(self.cards) == sorted(other.cards)

    def remove(self, card: Card) -> None:
        self.cards.remove(card)

    def cards_of_suit(self, suit: Suit) -> list[Card]:
        return [c for c in self.cards if c.suit == suit]

    def clone(self) -> "Hand":
        return Hand(self.id, self.cards)

    def __str__(self) -> str:
        return format_cards(self.cards)

    def __repr__(self) -> str:
        return f"Hand(id={self.id}, cards={self})"


class Deal(NamedTuple):
    """Result of a deal: one hand per seat (index = seat) and the extra hand."""
    hands: list[Hand]
    extra: Hand


def deal_hands(rng: random.Random | None = None, deck: list[Card] | None = None) -> Deal:
    """
    Deal 13 cards to each seat and 13 to the extra hand.
    If ``deck`` is given it is dealt in order, otherwise a shuffled deck is used.
    """
    if deck is None:
        deck = shuffled_deck(rng)
    if len(deck) != HAND_COUNT * CARDS_PER_HAND:
        raise ValueError(f"Deck must contain {HAND_COUNT * CARDS_PER_HAND} cards")
    hands = [
        Hand(i, deck[i * CARDS_PER_HAND:(i + 1) * CARDS_PER_HAND])
        for i in range(HAND_COUNT)
    ]
    return Deal(hands=hands[:SEAT_COUNT], extra=hands[EXTRA_HAND_ID])


def next_seat(seat: int) -> int:
    """Play goes left: 0 -> 1 -> 2 -> 0."""
    return (seat + 1) % SEAT_COUNT


def first_to_play(dealer: int) -> int:
    """The seat left of the dealer trades first and leads the first trick."""
    return next_seat(dealer)


def next_dealer(dealer: int) -> int:
    return next_seat(dealer)
