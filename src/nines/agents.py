"""
Players and the simple baseline agents.

A ``Player`` controls one seat. The game calls ``initialize`` at the start of
each round, ``on_move`` after every move (from any seat), and ``find_move`` when
a computer player has to move. Moves returned by ``find_move`` always come from
``state.legal_moves()``.
"""
from __future__ import annotations

import random
from typing import Sequence

from .deck import RANK_ACE, RANK_JACK, RANK_KING, RANK_QUEEN, Card, Suit
from .moves import Move, PlayMove, TradeMove
from .state import GameState, Phase
from .trick import Trick


class Player:
    """Controller of one seat."""

    kind = "player"
    is_ai = False

    def __init__(self) -> None:
        self.seat = -1

    def initialize(self, seat: int, state: GameState) -> None:
        """Called when a round is dealt, before any move."""
        self.seat = seat

    def on_move(self, state: GameState, move: Move) -> None:
        """Called after ``move`` (by any seat) has been applied to ``state``."""

    def find_move(self, state: GameState) -> Move:
        raise NotImplementedError

    def clone(self) -> "Player":
        player = type(self).__new__(type(self))
        player.__dict__.update(self.__dict__)
        return player

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seat={self.seat})"


class HumanPlayer(Player):
    """Seat whose moves are supplied from outside (terminal, UI)."""

    kind = "human"

    def find_move(self, state: GameState) -> Move:
        raise NotImplementedError("Human moves are supplied by the caller, not computed")


class RandomPlayer(Player):
    """Plays a uniformly random legal move."""

    kind = "random"
    is_ai = True

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__()
        self.rng = rng if rng is not None else random.Random()

    def find_move(self, state: GameState) -> Move:
        move = state.random_move(self.rng)
        if move is None:
            raise ValueError("No legal moves available for RandomPlayer")
        return move

    def clone(self) -> "RandomPlayer":
        player = RandomPlayer(random.Random(self.rng.random()))
        player.seat = self.seat
        return player


class HeuristicPlayer(Player):
    """
    Computer player using hardcoded strategies.

    Strategy:
    - Trade when the hand score is below a threshold that drops as more seats
      have traded, since the extra hand gets worse with each trade.
    - Leading: play an ace. Second: play an ace, else ruff with the lowest trump.
    - Last: play the lowest card that takes the trick.
    - Otherwise discard the lowest card of the shortest non-trump suit, to get
      void and ruff later.
    """

    kind = "heuristic"
    is_ai = True

    TRADE_THRESHOLDS = (4.0, 3.0, 2.5)

    def find_move(self, state: GameState) -> Move:
        moves = state.legal_moves()
        if len(moves) == 1:
            return moves[0]

        if state.phase is Phase.TRADE:
            score = hand_score(state.hand_of(self.seat).cards, state.trump)
            count = state.trades_count
            threshold = self.TRADE_THRESHOLDS[count] if count < len(self.TRADE_THRESHOLDS) else 0.0
            return TradeMove(self.seat, score < threshold)

        cards = [m.card for m in moves if isinstance(m, PlayMove)]
        card = choose_card(cards, state.current_trick)
        return PlayMove(self.seat, card)


def hand_score(cards: Sequence[Card], trump: Suit | None) -> float:
    """Approximate number of tricks a hand can take."""
    score = 0.0
    for card in cards:
        if trump is not None and card.suit == trump:
            score += 1.0 if card.is_ace() else max(0.5, (card.rank - 2) / 12.0)
        else:
            score += _HONOR_POINTS.get(card.rank, 0.0)
    return score


_HONOR_POINTS = {RANK_ACE: 1.0, RANK_KING: 0.8, RANK_QUEEN: 0.6, RANK_JACK: 0.4}


def choose_card(cards: Sequence[Card], trick: Trick) -> Card:
    """Pick a card from the legal ``cards`` following the heuristic ladder."""
    card: Card | None = None
    position = len(trick.cards)
    if position == 0:
        card = _find_ace(cards)
    elif position == 1:
        card = _find_ace(cards) or find_lowest_trump(cards, trick.trump)
    else:
        card = find_lowest_to_win(cards, trick)
    if card is None:
        card = find_lowest_in_shortest_suit(cards, trick.trump)
    return card


def _find_ace(cards: Sequence[Card]) -> Card | None:
    return next((c for c in cards if c.is_ace()), None)


def find_lowest_to_win(cards: Sequence[Card], trick: Trick) -> Card | None:
    """Lowest card that would take ``trick`` if played now, or None."""
    trick_suit = trick.suit
    position = len(trick.cards)
    lowest: Card | None = None
    for card in cards:
        # Only trump or the required suit can win.
        if card.suit != trick.trump and card.suit != trick_suit:
            continue
        attempt = trick.clone()
        attempt.add(card)
        if attempt.find_highest() == position and (lowest is None or card.rank < lowest.rank):
            lowest = card
    return lowest


def find_lowest_trump(cards: Sequence[Card], trump: Suit | None) -> Card | None:
    if trump is None:
        return None
    trumps = [c for c in cards if c.suit == trump]
    return min(trumps, key=lambda c: c.rank) if trumps else None


def find_lowest_in_shortest_suit(cards: Sequence[Card], trump: Suit | None) -> Card:
    """
    Lowest card of the suit with the fewest cards, trump excluded.
    Ties between suits go to the one with the lower lowest card.
    If only trump is left, the lowest trump.
    """
    if not cards:
        raise ValueError("No card to choose from")
    by_suit: dict[Suit, list[Card]] = {}
    for card in cards:
        by_suit.setdefault(card.suit, []).append(card)

    candidates = [s for s in by_suit if s != trump] or list(by_suit)
    best = min(
        candidates,
        key=lambda s: (len(by_suit[s]), min(c.rank for c in by_suit[s]), s),
    )
    return min(by_suit[best], key=lambda c: c.rank)


__all__ = [
    "Player",
    "HumanPlayer",
    "RandomPlayer",
    "HeuristicPlayer",
    "hand_score",
    "choose_card",
    "find_lowest_to_win",
    "find_lowest_trump",
    "find_lowest_in_shortest_suit",
]
