"""
Round state machine: trade phase, then 13 tricks of play.

Hands live in a map keyed by their stable id; a seat only references the id
of the hand it currently holds, so trading is a swap of ids and cloning never
shares card lists between states.
"""
from __future__ import annotations

import random
from enum import Enum

from .deck import Card, Suit
from .errors import IllegalMoveError, PhaseError
from .hand import CARDS_PER_HAND, SEAT_COUNT, Deal, Hand, deal_hands, first_to_play, next_seat
from .moves import Move, PlayMove, TradeMove
from .trick import Trick


class Phase(Enum):
    TRADE = "trade"
    PLAY = "play"


class GameState:
    """Mutable state for one round. Done when ``result`` is set."""

    def __init__(self, dealer: int, trump: Suit | None, deal: Deal) -> None:
        if len(deal.hands) != SEAT_COUNT:
            raise ValueError(f"Nines is played with exactly {SEAT_COUNT} seats")
        self.dealer = dealer
        self.trump = trump
        self.phase = Phase.TRADE
        self.seat_to_move = first_to_play(dealer)
        self.hands: dict[int, Hand] = {h.id: h for h in [*deal.hands, deal.extra]}
        self.seat_hand_ids: list[int] = [h.id for h in deal.hands]
        self.extra_hand_id: int = deal.extra.id
        self.trades_count = 0
        self.current_trick = Trick(first_to_play(dealer), trump)
        self.tricks_played: list[Trick] = []
        self.tricks_taken: list[int] = [0] * SEAT_COUNT
        self.result: tuple[int, ...] | None = None

    @classmethod
    def new_round(cls, dealer: int, trump: Suit | None, rng: random.Random | None = None) -> "GameState":
        """Shuffle, deal and return the state at the start of the trade phase."""
        return cls(dealer, trump, deal_hands(rng))

    # ---- read-only views ----

    @property
    def is_done(self) -> bool:
        return self.result is not None

    @property
    def extra_hand(self) -> Hand:
        return self.hands[self.extra_hand_id]

    def hand_of(self, seat: int) -> Hand:
        return self.hands[self.seat_hand_ids[seat]]

    def played_cards(self) -> list[Card]:
        """Every card already played this round, in play order."""
        cards = [c for t in self.tricks_played for c in t.cards]
        cards.extend(self.current_trick.cards)
        return cards

    # ---- moves ----

    def legal_moves(self) -> list[Move]:
        """All moves the seat to move may make. Empty once the round is done."""
        if self.is_done:
            return []
        seat = self.seat_to_move
        if self.phase is Phase.TRADE:
            return [TradeMove(seat, False), TradeMove(seat, True)]
        return [PlayMove(seat, c) for c in self._playable_cards()]

    def random_move(self, rng: random.Random | None = None) -> Move | None:
        """A uniformly random legal move, or None if the round is done."""
        if self.is_done:
            return None
        if rng is None:
            rng = random.Random()
        seat = self.seat_to_move
        if self.phase is Phase.TRADE:
            return TradeMove(seat, rng.random() < 0.5)
        return PlayMove(seat, rng.choice(self._playable_cards()))

    def is_legal(self, move: Move) -> bool:
        if self.is_done or move.seat != self.seat_to_move:
            return False
        if isinstance(move, TradeMove):
            return self.phase is Phase.TRADE
        if self.phase is not Phase.PLAY:
            return False
        return move.card in self._playable_cards()

    def do_move(self, move: Move) -> None:
        if self.is_done:
            raise PhaseError("Round is already done")
        if not self.is_legal(move):
            raise IllegalMoveError(f"Illegal move {move!r}; legal moves are {self.legal_moves()}")

        if isinstance(move, TradeMove):
            self._do_trade(move)
        else:
            self._do_play(move)

    def _playable_cards(self) -> list[Card]:
        # Must follow the required suit if possible, otherwise anything goes.
        hand = self.hand_of(self.seat_to_move)
        trick_suit = self.current_trick.suit
        if trick_suit is not None:
            following = hand.cards_of_suit(trick_suit)
            if following:
                return following
        return list(hand.cards)

    def _do_trade(self, move: TradeMove) -> None:
        seat = move.seat
        if move.trade:
            self.seat_hand_ids[seat], self.extra_hand_id = self.extra_hand_id, self.seat_hand_ids[seat]
            self.trades_count += 1

        if seat == self.dealer:
            # Every seat had its chance to trade, the dealer deciding last.
            self.phase = Phase.PLAY
            self.seat_to_move = first_to_play(self.dealer)
            self.current_trick = Trick(self.seat_to_move, self.trump)
        else:
            self.seat_to_move = next_seat(seat)

    def _do_play(self, move: PlayMove) -> None:
        self.hand_of(move.seat).remove(move.card)
        self.current_trick.add(move.card)

        if not self.current_trick.is_full():
            self.seat_to_move = next_seat(move.seat)
            return

        winner = self.current_trick.winner()
        self.tricks_taken[winner] += 1
        self.tricks_played.append(self.current_trick)
        self.current_trick = Trick(winner, self.trump)
        self.seat_to_move = winner

        if len(self.tricks_played) == CARDS_PER_HAND:
            self.result = tuple(self.tricks_taken)

    def last_trick(self) -> Trick | None:
        """The trick the last card was played in (closed or not)."""
        if not self.current_trick.is_empty():
            return self.current_trick
        return self.tricks_played[-1] if self.tricks_played else None

    # ---- copies ----

    def clone(self) -> "GameState":
        """Deep copy; moves on the clone never affect this state."""
        state = GameState.__new__(GameState)
        state.dealer = self.dealer
        state.trump = self.trump
        state.phase = self.phase
        state.seat_to_move = self.seat_to_move
        state.hands = {hid: h.clone() for hid, h in self.hands.items()}
        state.seat_hand_ids = list(self.seat_hand_ids)
        state.extra_hand_id = self.extra_hand_id
        state.trades_count = self.trades_count
        state.current_trick = self.current_trick.clone()
        state.tricks_played = [t.clone() for t in self.tricks_played]
        state.tricks_taken = list(self.tricks_taken)
        state.result = self.result
        return state

    def __str__(self) -> str:
        trump = self.trump.symbol if self.trump is not None else "none"
        return (
            f"[seat_to_move: {self.seat_to_move}, tricks_played: {len(self.tricks_played)}, "
            f"phase: {self.phase.value}, trump: {trump}, current_trick: {self.current_trick}]"
        )


__all__ = ["Phase", "GameState"]
