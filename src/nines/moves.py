"""Moves: a seat either decides on a hand trade or plays a card."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .deck import Card


@dataclass(frozen=True)
class TradeMove:
    """Trade phase decision: swap hands with the extra hand or keep the dealt one."""

    seat: int
    trade: bool

    def __str__(self) -> str:
        return "Trade hand" if self.trade else "Don't trade hand"


@dataclass(frozen=True)
class PlayMove:
    seat: int
    card: Card

    def __str__(self) -> str:
        return f"Play {self.card}"


Move = Union[TradeMove, PlayMove]

__all__ = ["TradeMove", "PlayMove", "Move"]
