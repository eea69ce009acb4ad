"""
Move search used by the computer players.

The ``SearchOracle`` protocol is the contract the players rely on:

- ``simulate(state, move, iterations)`` returns the average result of playing
  ``move`` and finishing the round ``iterations`` times;
- ``search(state, iterations)`` returns one of ``state.legal_moves()``.

Results are from the point of view of the seat making the move: the number of
tricks it ends the round with (more is better, since scores count down).

An optional ``sampler`` builds the state each simulation starts from; computer
players pass a determinizer there so every simulation sees a different
plausible deal. Without it, simulations run on clones of ``state``.

``RolloutOracle`` is a flat Monte Carlo implementation: uniformly random
playouts, iterations split evenly between the candidate moves.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .errors import IllegalMoveError, PhaseError
from .moves import Move
from .state import GameState

StateSampler = Callable[[GameState], GameState]


class SearchOracle(Protocol):
    def simulate(
        self,
        state: GameState,
        move: Move,
        iterations: int,
        sampler: Optional[StateSampler] = None,
    ) -> float:
        """Average result for the mover of playing ``move`` from ``state``."""

    def search(
        self,
        state: GameState,
        iterations: int,
        sampler: Optional[StateSampler] = None,
    ) -> Move:
        """Best move found for the seat to move; always one of ``state.legal_moves()``."""


@dataclass
class RolloutOracle:
    """
    Flat Monte Carlo search with random playouts.

    Usage:
        oracle = RolloutOracle(seed=42)
        move = oracle.search(state, iterations=200)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def simulate(
        self,
        state: GameState,
        move: Move,
        iterations: int,
        sampler: Optional[StateSampler] = None,
    ) -> float:
        if move not in state.legal_moves():
            raise IllegalMoveError(f"Cannot simulate illegal move {move!r}")
        iterations = max(1, iterations)
        total = 0.0
        for _ in range(iterations):
            sim = sampler(state) if sampler is not None else state.clone()
            sim.do_move(move)
            self.playout(sim)
            total += sim.result[move.seat]
        return total / iterations

    def search(
        self,
        state: GameState,
        iterations: int,
        sampler: Optional[StateSampler] = None,
    ) -> Move:
        moves = state.legal_moves()
        if not moves:
            raise PhaseError("No move to search for: round is done")
        if len(moves) == 1:
            return moves[0]
        per_move = max(1, iterations // len(moves))
        return max(moves, key=lambda m: self.simulate(state, m, per_move, sampler))

    def playout(self, state: GameState) -> None:
        """Finish the round in place with uniformly random moves."""
        while not state.is_done:
            state.do_move(state.random_move(self._rng))


__all__ = ["SearchOracle", "RolloutOracle", "StateSampler"]
