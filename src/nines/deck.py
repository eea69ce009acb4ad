"""
Nines deck: a standard 52-card pack (4 suits x 13 ranks, 2 low .. Ace high).
Cards are immutable values compared by (suit, rank).
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class Suit(IntEnum):
    """Suit values double as bit positions in suit bitfields."""
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


SUIT_SYMBOLS = "♠♥♦♣"
ALL_SUITS_MASK = 0b1111

RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13
RANK_ACE = 14

_RANK_STR = {RANK_JACK: "J", RANK_QUEEN: "Q", RANK_KING: "K", RANK_ACE: "A"}
_STR_RANK = {v: k for k, v in _RANK_STR.items()}


@dataclass(frozen=True, order=True)
class Card:
    """A single playing card. Rank goes from 2 to 14 (Ace)."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not 2 <= self.rank <= RANK_ACE:
            raise ValueError(f"Card rank must be between 2 and {RANK_ACE}, got {self.rank}")
        if not isinstance(self.suit, Suit):
            object.__setattr__(self, "suit", Suit(self.suit))

    def is_ace(self) -> bool:
        return self.rank == RANK_ACE

    def __str__(self) -> str:
        rank_str = _RANK_STR.get(self.rank) or str(self.rank)
        return f"{rank_str}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)


def parse_card(text: str) -> Card:
    """
    Parse a card from its short form, e.g. ``"A♣"``, ``"10♥"`` or ``"QS"``.
    Suit letters S/H/D/C are accepted as well as the symbols.
    """
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card: {text!r}")
    rank_str, suit_str = text[:-1], text[-1]
    if suit_str in SUIT_SYMBOLS:
        suit = Suit(SUIT_SYMBOLS.index(suit_str))
    elif suit_str.upper() in "SHDC":
        suit = Suit("SHDC".index(suit_str.upper()))
    else:
        raise ValueError(f"Invalid card suit: {text!r}")
    rank_str = rank_str.upper()
    if rank_str in _STR_RANK:
        rank = _STR_RANK[rank_str]
    elif rank_str.isdigit():
        rank = int(rank_str)
    else:
        raise ValueError(f"Invalid card rank: {text!r}")
    return Card(suit, rank)


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace or comma separated list of cards."""
    return [parse_card(part) for part in text.replace(",", " ").split()]


def format_cards(cards: Iterable[Card]) -> str:
    """Cards sorted by suit then rank, for display."""
    return "[" + ", ".join(str(c) for c in sorted(cards)) + "]"


def make_deck_52() -> list[Card]:
    """Build a full 52-card deck in suit/rank order."""
    return [Card(suit, rank) for suit in Suit for rank in range(2, RANK_ACE + 1)]


def shuffled_deck(rng: random.Random | None = None) -> list[Card]:
    if rng is None:
        rng = random.Random()
    deck = make_deck_52()
    rng.shuffle(deck)
    return deck
