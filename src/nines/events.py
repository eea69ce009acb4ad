"""
Game events, appended to ``Game.events`` and sent to listeners.
Moves (``TradeMove``, ``PlayMove``) are events too.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .deck import Suit
from .hand import Hand
from .moves import Move
from .scoring import score_deltas
from .trick import Trick


@dataclass(frozen=True)
class StartEvent:
    pass


@dataclass(frozen=True)
class EndEvent:
    winner: int | None = None


@dataclass(frozen=True)
class RoundStartEvent:
    """Trump suit and copies of the hands as dealt (seat hands, then the extra hand)."""

    round: int
    dealer: int
    trump: Suit | None
    hands: list[Hand] = field(default_factory=list)


@dataclass(frozen=True)
class RoundEndEvent:
    """Tricks taken per seat and the tricks played in the round."""

    round: int
    tricks_taken: tuple[int, ...]
    tricks: list[Trick] = field(default_factory=list)

    @property
    def score_deltas(self) -> tuple[int, ...]:
        return score_deltas(self.tricks_taken)


GameEvent = Union[StartEvent, EndEvent, RoundStartEvent, RoundEndEvent, Move]

__all__ = ["StartEvent", "EndEvent", "RoundStartEvent", "RoundEndEvent", "GameEvent"]
