"""
Computer players that search for moves, and the difficulty tiers.

- ``CheatingPlayer`` searches directly on the true round state.
- ``MctsPlayer`` only searches on determinized states built from what it has
  legitimately seen (see ``nines.knowledge``). Its difficulty controls the
  number of simulations, how much of the played history it forgets, whether
  it remembers the hand it gave away in a trade, and whether it tracks the
  suits opponents are void in.

``make_player`` builds any player from a short name (used by the CLI, the
self-play harness and save files).
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .agents import HeuristicPlayer, HumanPlayer, Player, RandomPlayer
from .knowledge import Knowledge, determinize
from .moves import Move
from .search import RolloutOracle, SearchOracle
from .state import GameState, Phase

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


@dataclass(frozen=True)
class DifficultyProfile:
    """Tuning constants of one difficulty tier. Iterations are multiplied by the player's scale."""

    trade_iterations: int
    play_iterations: int
    forget_ratio: float
    remembers_traded_hand: bool
    remembers_suit_voids: bool


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.BEGINNER: DifficultyProfile(2, 0, 1.0, False, False),
    Difficulty.INTERMEDIATE: DifficultyProfile(3, 5, 0.8, False, False),
    Difficulty.ADVANCED: DifficultyProfile(6, 10, 0.4, True, False),
    Difficulty.EXPERT: DifficultyProfile(50, 50, 0.0, True, True),
}

DEFAULT_ITERATION_SCALE = 10


class AiPlayer(Player):
    """Computer player backed by a search oracle."""

    is_ai = True

    def __init__(self, oracle: SearchOracle | None = None, rng: random.Random | None = None) -> None:
        super().__init__()
        self.rng = rng if rng is not None else random.Random()
        self.oracle = oracle if oracle is not None else RolloutOracle(seed=self.rng.getrandbits(32))

    def _best_trade(self, state: GameState, iterations: int, sampler=None) -> Move:
        # Both options get the same number of simulations.
        moves = state.legal_moves()
        return max(moves, key=lambda m: self.oracle.simulate(state, m, iterations, sampler))


class CheatingPlayer(AiPlayer):
    """Searches on the true state: a perfect-information baseline."""

    kind = "cheating"

    def __init__(
        self,
        trade_iterations: int = 500,
        play_iterations: int = 500,
        oracle: SearchOracle | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(oracle, rng)
        self.trade_iterations = trade_iterations
        self.play_iterations = play_iterations

    def find_move(self, state: GameState) -> Move:
        if state.phase is Phase.TRADE:
            return self._best_trade(state, self.trade_iterations)
        return self.oracle.search(state, self.play_iterations)

    def clone(self) -> "CheatingPlayer":
        player = CheatingPlayer(
            self.trade_iterations,
            self.play_iterations,
            oracle=self.oracle,
            rng=random.Random(self.rng.random()),
        )
        player.seat = self.seat
        return player


class MctsPlayer(AiPlayer):
    """
    Searches on determinized states consistent with its own knowledge.
    The knowledge is reset every round in ``initialize``.
    """

    kind = "mcts"

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EXPERT,
        oracle: SearchOracle | None = None,
        rng: random.Random | None = None,
        iteration_scale: int = DEFAULT_ITERATION_SCALE,
    ) -> None:
        super().__init__(oracle, rng)
        self.difficulty = Difficulty(difficulty)
        self.iteration_scale = iteration_scale
        self.knowledge = Knowledge(seat=-1)

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self.difficulty]

    def initialize(self, seat: int, state: GameState) -> None:
        super().initialize(seat, state)
        self.knowledge = Knowledge.for_hand(seat, state.seat_hand_ids[seat])

    def on_move(self, state: GameState, move: Move) -> None:
        self.knowledge.observe(
            state,
            move,
            remember_traded_hand=self.profile.remembers_traded_hand,
            track_suit_voids=self.profile.remembers_suit_voids,
        )

    def randomize(self, state: GameState) -> GameState:
        """A determinized copy of ``state`` from this player's point of view."""
        return determinize(
            state,
            self.knowledge,
            self.rng,
            forget_ratio=self.profile.forget_ratio,
            constrained=self.profile.remembers_suit_voids,
        )

    def find_move(self, state: GameState) -> Move:
        moves = state.legal_moves()
        if len(moves) == 1:
            return moves[0]
        if state.phase is Phase.TRADE:
            iterations = self.profile.trade_iterations * self.iteration_scale
            if iterations <= 0:
                return self.rng.choice(moves)
            return self._best_trade(state, iterations, self.randomize)

        iterations = self.profile.play_iterations * self.iteration_scale
        if iterations <= 0:
            return self.rng.choice(moves)
        logger.debug("Seat %d (%s) searching %d iterations", self.seat, self.difficulty.value, iterations)
        return self.oracle.search(state, iterations, self.randomize)

    def clone(self) -> "MctsPlayer":
        player = MctsPlayer(
            self.difficulty,
            oracle=self.oracle,
            rng=random.Random(self.rng.random()),
            iteration_scale=self.iteration_scale,
        )
        player.seat = self.seat
        player.knowledge = self.knowledge.clone()
        return player

    def __repr__(self) -> str:
        return f"MctsPlayer(seat={self.seat}, difficulty={self.difficulty.value})"


PLAYER_KINDS = ("human", "random", "heuristic", "cheating") + tuple(d.value for d in Difficulty)


def make_player(
    kind: str,
    rng: random.Random | None = None,
    iteration_scale: int = DEFAULT_ITERATION_SCALE,
) -> Player:
    """
    Build a player from its short name: ``human``, ``random``, ``heuristic``,
    ``cheating`` or a difficulty name (``beginner`` .. ``expert``) for an MctsPlayer.
    """
    kind = kind.lower()
    if kind == "human":
        return HumanPlayer()
    if kind == "random":
        return RandomPlayer(rng)
    if kind == "heuristic":
        return HeuristicPlayer()
    if kind == "cheating":
        return CheatingPlayer(
            trade_iterations=5 * iteration_scale, play_iterations=5 * iteration_scale, rng=rng
        )
    try:
        difficulty = Difficulty(kind)
    except ValueError:
        raise ValueError(f"Unknown player kind {kind!r}; expected one of {', '.join(PLAYER_KINDS)}") from None
    return MctsPlayer(difficulty, rng=rng, iteration_scale=iteration_scale)


__all__ = [
    "Difficulty",
    "DifficultyProfile",
    "DIFFICULTY_PROFILES",
    "AiPlayer",
    "CheatingPlayer",
    "MctsPlayer",
    "PLAYER_KINDS",
    "make_player",
]
