"""
What a computer player legitimately knows about a round, and determinization:
rebuilding a complete round state consistent with that knowledge.

Knowledge is kept as small bitfields indexed by hand id (not by seat), since
hands move between seats and the extra hand during the trade phase:

- ``known_hands``: bit ``h`` is set if the player held or saw hand ``h``.
- ``absent_suits[h]``: bit ``s`` is set once the seat holding hand ``h`` was
  seen failing to follow suit ``s``. These bits are never cleared in a round.

Unknown hands are redistributed either naively (shuffle and deal) or under the
void constraints, as a minimum-cost assignment of unseen cards to hand slots
solved with ``scipy.optimize.linear_sum_assignment``.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from scipy.optimize import linear_sum_assignment

from .deck import ALL_SUITS_MASK, Card, Suit
from .errors import DeterminizationError, KnowledgeDesyncError
from .hand import HAND_COUNT, Hand
from .moves import Move, PlayMove, TradeMove
from .state import GameState

logger = logging.getLogger(__name__)


def _no_absent_suits() -> list[int]:
    return [0] * HAND_COUNT


@dataclass
class Knowledge:
    """Per-player knowledge of one round."""

    seat: int
    known_hands: int = 0
    absent_suits: list[int] = field(default_factory=_no_absent_suits)

    @classmethod
    def for_hand(cls, seat: int, hand_id: int) -> "Knowledge":
        """Knowledge at the start of a round: only the dealt hand is known."""
        return cls(seat=seat, known_hands=1 << hand_id)

    def knows_hand(self, hand_id: int) -> bool:
        return bool(self.known_hands & (1 << hand_id))

    def add_known_hand(self, hand_id: int) -> None:
        self.known_hands |= 1 << hand_id

    def forget_hand(self, hand_id: int) -> None:
        self.known_hands &= ~(1 << hand_id)

    def mark_absent(self, hand_id: int, suit: Suit) -> None:
        self.absent_suits[hand_id] |= 1 << suit

    def is_absent(self, hand_id: int, suit: Suit) -> bool:
        return bool(self.absent_suits[hand_id] & (1 << suit))

    def allowed_suits(self, hand_id: int) -> int:
        """Bitfield of the suits hand ``hand_id`` may still contain."""
        return ALL_SUITS_MASK & ~self.absent_suits[hand_id]

    def known_hand_ids(self) -> list[int]:
        return [h for h in range(HAND_COUNT) if self.knows_hand(h)]

    def observe(
        self,
        state: GameState,
        move: Move,
        *,
        remember_traded_hand: bool = True,
        track_suit_voids: bool = True,
    ) -> None:
        """
        Update knowledge after ``move`` was applied to ``state``.

        A trade by this player makes the received hand known; the hand given
        away stays known only if ``remember_traded_hand``. A card played off
        the required suit marks that suit absent from the mover's hand.
        """
        if isinstance(move, TradeMove):
            if move.seat == self.seat and move.trade:
                self.add_known_hand(state.seat_hand_ids[self.seat])
                if not remember_traded_hand:
                    self.forget_hand(state.extra_hand_id)
        elif isinstance(move, PlayMove) and track_suit_voids:
            trick = state.last_trick()
            if trick is None or trick.suit is None:
                raise KnowledgeDesyncError(f"Move {move} observed but no trick holds it")
            if trick.cards[-1].suit != trick.suit:
                self.mark_absent(state.seat_hand_ids[move.seat], trick.suit)

    def clone(self) -> "Knowledge":
        return Knowledge(self.seat, self.known_hands, list(self.absent_suits))

    def to_dict(self) -> dict:
        return {
            "seat": self.seat,
            "known_hands": self.known_hands,
            "absent_suits": list(self.absent_suits),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Knowledge":
        absent = [int(x) for x in d.get("absent_suits", _no_absent_suits())]
        if len(absent) != HAND_COUNT:
            raise ValueError(f"absent_suits must have {HAND_COUNT} entries")
        return cls(seat=int(d["seat"]), known_hands=int(d["known_hands"]), absent_suits=absent)


def assign_naive(cards: Sequence[Card], slot_count: int, rng: random.Random) -> list[int]:
    """Shuffle the cards and deal them in order: slot ``j`` gets ``cards[result[j]]``."""
    if len(cards) != slot_count:
        raise KnowledgeDesyncError(f"{len(cards)} unseen cards for {slot_count} slots")
    order = list(range(len(cards)))
    rng.shuffle(order)
    return order


def assign_constrained(
    cards: Sequence[Card],
    slot_suits: Sequence[int],
    rng: random.Random,
) -> list[int]:
    """
    Assign every card to exactly one slot so that each slot only gets a card of
    a suit allowed by its bitfield in ``slot_suits``. Among valid assignments,
    random costs make the chosen one random. Slot ``j`` gets ``cards[result[j]]``.

    Raises DeterminizationError if no valid assignment exists.
    """
    n = len(cards)
    if n != len(slot_suits):
        raise KnowledgeDesyncError(f"{n} unseen cards for {len(slot_suits)} slots")
    if n == 0:
        return []

    card_bits = np.array([1 << c.suit for c in cards], dtype=np.int64)
    slot_masks = np.array(slot_suits, dtype=np.int64)
    allowed = (card_bits[:, None] & slot_masks[None, :]) != 0

    np_rng = np.random.default_rng(rng.getrandbits(64))
    cost = np.where(allowed, np_rng.random((n, n)), np.inf)

    try:
        rows, cols = linear_sum_assignment(cost)
    except ValueError as e:
        raise DeterminizationError("No assignment of unseen cards respects the known void suits") from e
    if not np.isfinite(cost[rows, cols]).all():
        raise DeterminizationError("No assignment of unseen cards respects the known void suits")

    result = [0] * n
    for card_index, slot in zip(rows, cols):
        result[int(slot)] = int(card_index)
    return result


def unknown_hands(state: GameState, knowledge: Knowledge) -> list[Hand]:
    """Hands (seat hands and extra hand) the player has never seen, by id order."""
    for hand_id in knowledge.known_hand_ids():
        if hand_id not in state.hands:
            raise KnowledgeDesyncError(f"Known hand id {hand_id} is not part of the round")
    own = state.seat_hand_ids[knowledge.seat]
    if not knowledge.knows_hand(own):
        raise KnowledgeDesyncError(f"Seat {knowledge.seat} does not know its own hand {own}")
    return [h for hid, h in sorted(state.hands.items()) if not knowledge.knows_hand(hid)]


def determinize(
    state: GameState,
    knowledge: Knowledge,
    rng: random.Random | None = None,
    *,
    forget_ratio: float = 0.0,
    constrained: bool = True,
) -> GameState:
    """
    Return a copy of ``state`` where the cards of every hand unknown to the
    player are redistributed at random among those hands.

    Known hands, the current trick, trick counts and hand sizes are left as is.
    With ``forget_ratio`` > 0, that fraction of the cards in completed tricks is
    forgotten: those cards join the unseen pool and the history positions they
    leave are refilled from the pool too, so the set of cards never changes.
    With ``constrained``, no hand receives a suit it is known to be void in.
    """
    if rng is None:
        rng = random.Random()
    if not 0.0 <= forget_ratio <= 1.0:
        raise ValueError(f"forget_ratio must be in [0, 1], got {forget_ratio}")

    det = state.clone()
    hands = unknown_hands(det, knowledge)

    pool: list[Card] = []
    slot_hands: list[Hand | None] = []
    slot_suits: list[int] = []
    for hand in hands:
        pool.extend(hand.cards)
        slot_hands.extend([hand] * len(hand))
        slot_suits.extend([knowledge.allowed_suits(hand.id)] * len(hand))

    history = [
        (ti, ci)
        for ti, trick in enumerate(det.tricks_played)
        for ci in range(len(trick.cards))
    ]
    forgotten = rng.sample(history, round(forget_ratio * len(history))) if forget_ratio > 0 else []
    for ti, ci in forgotten:
        pool.append(det.tricks_played[ti].cards[ci])
        slot_hands.append(None)
        slot_suits.append(ALL_SUITS_MASK)

    logger.debug(
        "Determinizing for seat %d: unknown hands %s, %d unseen cards, %d forgotten",
        knowledge.seat, [h.id for h in hands], len(pool), len(forgotten),
    )

    if constrained:
        assignment = assign_constrained(pool, slot_suits, rng)
    else:
        assignment = assign_naive(pool, len(slot_hands), rng)

    for hand in hands:
        hand.cards.clear()
    history_slots = iter(forgotten)
    for slot, hand in enumerate(slot_hands):
        card = pool[assignment[slot]]
        if hand is not None:
            hand.cards.append(card)
        else:
            ti, ci = next(history_slots)
            det.tricks_played[ti].cards[ci] = card
    return det


__all__ = [
    "Knowledge",
    "assign_naive",
    "assign_constrained",
    "unknown_hands",
    "determinize",
]
