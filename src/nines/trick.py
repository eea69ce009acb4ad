"""
Trick-taking: the current trick and its winner.
Trump beats every other suit; otherwise the highest card of the led suit wins.
Cards that are neither trump nor of the led suit never win.
"""
from __future__ import annotations

from typing import Iterable

from .deck import Card, Suit
from .hand import SEAT_COUNT


def card_beats(card: Card, highest: Card, trick_suit: Suit, trump: Suit | None) -> bool:
    """True if ``card`` takes the lead from the current ``highest`` card."""
    if trump is not None and card.suit == trump:
        return highest.suit != trump or card.rank > highest.rank
    return (
        card.suit == trick_suit
        and highest.suit == trick_suit
        and (trump is None or highest.suit != trump)
        and card.rank > highest.rank
    )


class Trick:
    """
    A trick of 0 to 3 cards, played in order starting from ``leader``.
    The trump suit in effect is kept with the trick so it can be resolved alone.
    """

    __slots__ = ("leader", "trump", "cards")

    def __init__(self, leader: int, trump: Suit | None, cards: Iterable[Card] = ()) -> None:
        self.leader = leader
        self.trump = trump
        self.cards: list[Card] = list(cards)

    @property
    def suit(self) -> Suit | None:
        """The required suit, or None if no card was played yet."""
        return self.cards[0].suit if self.cards else None

    def __len__(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def is_full(self) -> bool:
        return len(self.cards) == SEAT_COUNT

    def seat_at(self, index: int) -> int:
        """Seat that played (or will play) the card at ``index``."""
        return (self.leader + index) % SEAT_COUNT

    def next_seat(self) -> int:
        return self.seat_at(len(self.cards))

    def add(self, card: Card) -> None:
        if self.is_full():
            raise ValueError("Trick already has a card from every seat")
        self.cards.append(card)

    def find_highest(self) -> int:
        """Offset from the leader of the card currently winning the trick."""
        if not self.cards:
            raise ValueError("Cannot find the highest card of an empty trick")
        trick_suit = self.cards[0].suit
        highest_index = 0
        highest = self.cards[0]
        for i, card in enumerate(self.cards[1:], start=1):
            if card_beats(card, highest, trick_suit, self.trump):
                highest_index = i
                highest = card
        return highest_index

    def winner(self) -> int:
        """Absolute seat of the player winning the trick."""
        return self.seat_at(self.find_highest())

    def clone(self) -> "Trick":
        return Trick(self.leader, self.trump, self.cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trick):
            return NotImplemented
        return (self.leader, self.trump, self.cards) == (other.leader, other.trump, other.cards)

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self.cards) + "]"

    def __repr__(self) -> str:
        return f"Trick(leader={self.leader}, trump={self.trump}, cards={self})"
