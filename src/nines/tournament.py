"""
Self-play harness: many independent games between the same line-up.

Seats are shuffled every game and every game gets fresh player instances, so
results are reported per line-up index rather than per seat.
"""
from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from .agents import Player
from .game import Game, GameConfig, play_game
from .hand import SEAT_COUNT

logger = logging.getLogger(__name__)

PlayersFactory = Callable[[random.Random], Sequence[Player]]


@dataclass
class SelfPlayResult:
    """Outcome of a self-play run, indexed by position in the line-up."""

    names: List[str]
    games_played: int = 0
    rounds_played: int = 0
    wins: List[int] = field(default_factory=lambda: [0] * SEAT_COUNT)
    # score delta -> number of rounds it happened, per line-up index
    score_deltas: List[Counter] = field(default_factory=lambda: [Counter() for _ in range(SEAT_COUNT)])

    def win_rate(self, index: int) -> float:
        return self.wins[index] / self.games_played if self.games_played else 0.0

    def mean_delta(self, index: int) -> float:
        counts = self.score_deltas[index]
        total = sum(counts.values())
        return sum(d * n for d, n in counts.items()) / total if total else 0.0

    def summary(self) -> str:
        lines = [f"{self.games_played} games, {self.rounds_played} rounds"]
        for i, name in enumerate(self.names):
            dist = ", ".join(f"{d:+d}: {n}" for d, n in sorted(self.score_deltas[i].items()))
            lines.append(
                f"  {i} {name:<12} wins {self.wins[i]:>4} ({self.win_rate(i):.1%}), "
                f"mean delta {self.mean_delta(i):+.2f}  [{dist}]"
            )
        return "\n".join(lines)


def run_self_play(
    players_factory: PlayersFactory,
    games: int,
    rng: random.Random | None = None,
    config: GameConfig | None = None,
) -> SelfPlayResult:
    """
    Play ``games`` complete games. ``players_factory(rng)`` must return three
    new computer players each time it is called.
    """
    if games < 0:
        raise ValueError("games must be non-negative")
    if rng is None:
        rng = random.Random()

    names: List[str] | None = None
    result: SelfPlayResult | None = None
    for n in range(games):
        lineup = list(players_factory(rng))
        if len(lineup) != SEAT_COUNT:
            raise ValueError(f"players_factory must return {SEAT_COUNT} players, got {len(lineup)}")
        if any(not p.is_ai for p in lineup):
            raise ValueError("Self-play needs computer players only")
        if result is None:
            names = [repr(p) for p in lineup]
            result = SelfPlayResult(names)

        order = list(range(SEAT_COUNT))
        rng.shuffle(order)
        # seat s is played by lineup[order[s]]
        game = Game([lineup[i] for i in order], config, random.Random(rng.random()))
        play_game(game)

        assert game.winner is not None
        result.games_played += 1
        result.wins[order[game.winner]] += 1
        for record in game.round_history:
            result.rounds_played += 1
            for seat, delta in enumerate(record.score_deltas):
                result.score_deltas[order[seat]][delta] += 1
        logger.info("Game %d/%d won by %s after %d rounds", n + 1, games, names[order[game.winner]], game.round)

    if result is None:
        result = SelfPlayResult(names or [])
    return result


__all__ = ["PlayersFactory", "SelfPlayResult", "run_self_play"]
