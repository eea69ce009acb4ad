"""
Nines scoring: scores count down from the starting score.
Each round a seat's score changes by ``4 - tricks taken``; lowest score wins.
"""
from __future__ import annotations

from typing import Sequence

# A seat taking exactly this many tricks keeps its score.
PAR_TRICKS = 4


def score_deltas(tricks_taken: Sequence[int]) -> tuple[int, ...]:
    """Score change per seat for a finished round."""
    return tuple(PAR_TRICKS - n for n in tricks_taken)


def leader_seat(scores: Sequence[int]) -> int | None:
    """Seat with the unique lowest score, or None if the lowest score is tied."""
    lowest = min(scores)
    seats = [i for i, s in enumerate(scores) if s == lowest]
    return seats[0] if len(seats) == 1 else None


def winner_seat(scores: Sequence[int]) -> int | None:
    """
    Seat that won the game after a round, or None if the game goes on.
    The game ends only when exactly one seat is at zero or below; if several
    seats reach zero together, play continues until that tie is broken.
    """
    finished = [i for i, s in enumerate(scores) if s <= 0]
    if len(finished) != 1:
        return None
    # A lone seat at or below zero is necessarily the unique leader.
    return finished[0]


__all__ = ["PAR_TRICKS", "score_deltas", "leader_seat", "winner_seat"]
