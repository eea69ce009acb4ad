"""
Game session: rounds are dealt and played until one seat's score reaches zero.

Score, dealer and trump bookkeeping across rounds; the event log; the driver
loop asking each seat's player for moves.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from .agents import Player
from .deck import Suit
from .errors import PhaseError
from .events import EndEvent, GameEvent, RoundEndEvent, RoundStartEvent, StartEvent
from .hand import SEAT_COUNT, next_dealer
from .moves import Move
from .scoring import leader_seat, score_deltas, winner_seat
from .state import GameState

logger = logging.getLogger(__name__)

DEFAULT_TRUMP_CYCLE: tuple[Suit | None, ...] = (
    Suit.HEARTS,
    Suit.SPADES,
    Suit.DIAMONDS,
    Suit.CLUBS,
    None,
)


@dataclass
class GameConfig:
    """Settings of a game, fixed when the game is created."""

    start_score: int = 9
    # Trump suit of round n is trump_cycle[(n - 1) % len]; None is no trump.
    trump_cycle: tuple[Suit | None, ...] = DEFAULT_TRUMP_CYCLE

    def __post_init__(self) -> None:
        if self.start_score <= 0:
            raise ValueError("start_score must be positive")
        if not self.trump_cycle:
            raise ValueError("trump_cycle must not be empty")
        self.trump_cycle = tuple(Suit(s) if s is not None else None for s in self.trump_cycle)


@dataclass
class RoundRecord:
    """Summary of a finished round, kept for display."""

    round: int
    dealer: int
    trump: Suit | None
    tricks_taken: tuple[int, ...]
    score_deltas: tuple[int, ...]
    scores: tuple[int, ...] = field(default_factory=tuple)


class GamePhase(Enum):
    # Game has not started or is done.
    ENDED = "ended"
    # Game is started, no round in progress.
    GAME_STARTED = "game_started"
    # A round is being played.
    ROUND_STARTED = "round_started"


EventListener = Callable[[GameEvent], None]
HumanMoveFn = Callable[["Game", int, list[Move]], Move]


class Game:
    """
    A Nines game for three players.

    Listeners are called after an event happened, so the game and round state
    already reflect it.
    """

    def __init__(
        self,
        players: Sequence[Player],
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if len(players) != SEAT_COUNT:
            raise ValueError(f"Nines needs exactly {SEAT_COUNT} players, got {len(players)}")
        self.players: list[Player] = list(players)
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random()

        self.phase = GamePhase.ENDED
        self.round = 0
        self.dealer = -1
        self.scores: list[int] = [self.config.start_score] * SEAT_COUNT
        self.state: GameState | None = None
        self.winner: int | None = None
        self.events: list[GameEvent] = []
        self.round_history: list[RoundRecord] = []
        self.listeners: list[EventListener] = []

    @property
    def trump(self) -> Suit | None:
        """Trump suit of the current (or first) round."""
        cycle = self.config.trump_cycle
        return cycle[max(0, self.round - 1) % len(cycle)]

    @property
    def leader_seat(self) -> int | None:
        """Seat with the lowest score, or None on a tie."""
        return leader_seat(self.scores)

    @property
    def is_done(self) -> bool:
        return self.winner is not None

    def start(self) -> None:
        """Start or restart the game."""
        if self.phase is not GamePhase.ENDED:
            raise PhaseError("Game has already started")
        self.phase = GamePhase.GAME_STARTED
        self.round = 0
        self.state = None
        self.scores = [self.config.start_score] * SEAT_COUNT
        self.dealer = self.rng.randrange(SEAT_COUNT)
        self.winner = None
        self.events.clear()
        self.round_history.clear()
        self._emit(StartEvent())

    def end(self) -> None:
        """End the game. A round in progress is abandoned."""
        if self.phase is GamePhase.ENDED:
            raise PhaseError("Game has already ended")
        self.phase = GamePhase.ENDED
        self.state = None
        self._emit(EndEvent(self.winner))

    def start_round(self) -> GameState:
        if self.phase is not GamePhase.GAME_STARTED:
            raise PhaseError("Round has already started or game has not started")
        self.phase = GamePhase.ROUND_STARTED
        self.round += 1

        state = GameState.new_round(self.dealer, self.trump, self.rng)
        self.state = state
        for seat, player in enumerate(self.players):
            player.initialize(seat, state)

        logger.info(
            "Round %d started, dealer: %d, trump: %s",
            self.round, self.dealer, self.trump.symbol if self.trump is not None else "none",
        )
        hands = [state.hand_of(s).clone() for s in range(SEAT_COUNT)] + [state.extra_hand.clone()]
        self._emit(RoundStartEvent(self.round, self.dealer, self.trump, hands))
        return state

    def do_move(self, move: Move) -> None:
        """Apply ``move`` to the round and notify every player."""
        if self.phase is not GamePhase.ROUND_STARTED or self.state is None:
            raise PhaseError("No round in progress")
        state = self.state
        state.do_move(move)
        for player in self.players:
            player.on_move(state, move)
        logger.debug("Seat %d did: %s, trick: %s", move.seat, move, state.last_trick())
        self._emit(move)

    def end_round(self) -> None:
        if self.phase is not GamePhase.ROUND_STARTED or self.state is None:
            raise PhaseError("Round has already ended or game has not started")
        state = self.state
        if state.result is None:
            raise PhaseError("Round is not done yet")
        self.phase = GamePhase.GAME_STARTED

        deltas = score_deltas(state.result)
        self.scores = [s + d for s, d in zip(self.scores, deltas)]
        self.round_history.append(
            RoundRecord(self.round, self.dealer, state.trump, state.result, deltas, tuple(self.scores))
        )
        logger.info(
            "Round %d ended, tricks: %s, diff: %s, scores: %s",
            self.round, list(state.result), list(deltas), self.scores,
        )
        self.state = None
        self.dealer = next_dealer(self.dealer)
        self.winner = winner_seat(self.scores)
        self._emit(RoundEndEvent(self.round, state.result, list(state.tricks_played)))

        if self.winner is not None:
            logger.info("Game ended after %d rounds, scores: %s, winner: %d", self.round, self.scores, self.winner)
            self.end()

    def _emit(self, event: GameEvent) -> None:
        self.events.append(event)
        for listener in list(self.listeners):
            listener(event)

    def __str__(self) -> str:
        trump = self.trump.symbol if self.trump is not None else "none"
        return (
            f"[{len(self.events)} events, phase: {self.phase.value}, round: {self.round}, "
            f"dealer: {self.dealer}, trump: {trump}, scores: {self.scores}]"
        )


def play_game(game: Game, human_move: HumanMoveFn | None = None) -> Game:
    """
    Play ``game`` until a seat wins. Computer players are asked with
    ``find_move``; human seats through ``human_move(game, seat, legal_moves)``.
    A game restored in the middle of a round continues from there.
    """
    if game.phase is GamePhase.ENDED:
        if game.is_done:
            return game
        game.start()

    while not game.is_done:
        if game.phase is GamePhase.GAME_STARTED:
            game.start_round()
        state = game.state
        assert state is not None
        while not state.is_done:
            seat = state.seat_to_move
            player = game.players[seat]
            if player.is_ai:
                move = player.find_move(state)
            elif human_move is not None:
                move = human_move(game, seat, state.legal_moves())
            else:
                raise ValueError(f"Seat {seat} is human but no human_move callback was given")
            game.do_move(move)
        game.end_round()
    return game


__all__ = [
    "DEFAULT_TRUMP_CYCLE",
    "GameConfig",
    "RoundRecord",
    "GamePhase",
    "Game",
    "play_game",
]
