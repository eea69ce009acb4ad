"""
Game save/load.

A game is saved as a single JSON document holding the configuration, scores,
the round in progress (hands by id, tricks), each computer player's knowledge
bitfields and the event log, so a game resumes exactly where it was left.
Cards are written in their short form (``"10♥"``).
"""
from __future__ import annotations

import json
import random
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .agents import Player
from .deck import Card, Suit, parse_card
from .errors import GameLoadError
from .events import EndEvent, GameEvent, RoundEndEvent, RoundStartEvent, StartEvent
from .game import Game, GameConfig, GamePhase, RoundRecord
from .hand import Hand
from .knowledge import Knowledge
from .moves import PlayMove, TradeMove
from .policies import CheatingPlayer, MctsPlayer, make_player
from .state import GameState, Phase
from .trick import Trick

SCHEMA_VERSION = 1


def _suit_to_json(suit: Suit | None) -> int | None:
    return int(suit) if suit is not None else None


def _suit_from_json(value: Any) -> Suit | None:
    return Suit(int(value)) if value is not None else None


def _cards_to_json(cards: List[Card]) -> List[str]:
    return [str(c) for c in cards]


def _cards_from_json(values: List[str]) -> List[Card]:
    return [parse_card(v) for v in values]


def _hand_to_dict(hand: Hand) -> Dict[str, Any]:
    return {"id": hand.id, "cards": _cards_to_json(hand.cards)}


def _hand_from_dict(d: Dict[str, Any]) -> Hand:
    return Hand(int(d["id"]), _cards_from_json(d["cards"]))


def _trick_to_dict(trick: Trick) -> Dict[str, Any]:
    return {
        "leader": trick.leader,
        "trump": _suit_to_json(trick.trump),
        "cards": _cards_to_json(trick.cards),
    }


def _trick_from_dict(d: Dict[str, Any]) -> Trick:
    return Trick(int(d["leader"]), _suit_from_json(d["trump"]), _cards_from_json(d["cards"]))


def state_to_dict(state: GameState) -> Dict[str, Any]:
    return {
        "dealer": state.dealer,
        "trump": _suit_to_json(state.trump),
        "phase": state.phase.value,
        "seat_to_move": state.seat_to_move,
        "hands": [_hand_to_dict(h) for _, h in sorted(state.hands.items())],
        "seat_hand_ids": list(state.seat_hand_ids),
        "extra_hand_id": state.extra_hand_id,
        "trades_count": state.trades_count,
        "current_trick": _trick_to_dict(state.current_trick),
        "tricks_played": [_trick_to_dict(t) for t in state.tricks_played],
        "tricks_taken": list(state.tricks_taken),
        "result": list(state.result) if state.result is not None else None,
    }


def state_from_dict(d: Dict[str, Any]) -> GameState:
    state = GameState.__new__(GameState)
    state.dealer = int(d["dealer"])
    state.trump = _suit_from_json(d["trump"])
    state.phase = Phase(d["phase"])
    state.seat_to_move = int(d["seat_to_move"])
    state.hands = {h.id: h for h in (_hand_from_dict(x) for x in d["hands"])}
    state.seat_hand_ids = [int(x) for x in d["seat_hand_ids"]]
    state.extra_hand_id = int(d["extra_hand_id"])
    state.trades_count = int(d["trades_count"])
    state.current_trick = _trick_from_dict(d["current_trick"])
    state.tricks_played = [_trick_from_dict(t) for t in d["tricks_played"]]
    state.tricks_taken = [int(x) for x in d["tricks_taken"]]
    state.result = tuple(int(x) for x in d["result"]) if d.get("result") is not None else None

    ids = sorted([*state.seat_hand_ids, state.extra_hand_id])
    if ids != sorted(state.hands):
        raise ValueError(f"Hand ids {ids} do not match the saved hands {sorted(state.hands)}")
    return state


def player_to_dict(player: Player) -> Dict[str, Any]:
    d: Dict[str, Any] = {"kind": player.kind, "seat": player.seat}
    if isinstance(player, MctsPlayer):
        d["difficulty"] = player.difficulty.value
        d["iteration_scale"] = player.iteration_scale
        d["knowledge"] = player.knowledge.to_dict()
    elif isinstance(player, CheatingPlayer):
        d["trade_iterations"] = player.trade_iterations
        d["play_iterations"] = player.play_iterations
    return d


def player_from_dict(d: Dict[str, Any], rng: random.Random | None = None) -> Player:
    kind = d["kind"]
    if kind == "mcts":
        player: Player = MctsPlayer(d["difficulty"], rng=rng, iteration_scale=int(d.get("iteration_scale", 10)))
        player.knowledge = Knowledge.from_dict(d["knowledge"])
    elif kind == "cheating":
        player = CheatingPlayer(int(d["trade_iterations"]), int(d["play_iterations"]), rng=rng)
    else:
        player = make_player(kind, rng=rng)
    player.seat = int(d.get("seat", -1))
    return player


def event_to_dict(event: GameEvent) -> Dict[str, Any]:
    if isinstance(event, StartEvent):
        return {"type": "start"}
    if isinstance(event, EndEvent):
        return {"type": "end", "winner": event.winner}
    if isinstance(event, RoundStartEvent):
        return {
            "type": "round_start",
            "round": event.round,
            "dealer": event.dealer,
            "trump": _suit_to_json(event.trump),
            "hands": [_hand_to_dict(h) for h in event.hands],
        }
    if isinstance(event, RoundEndEvent):
        return {
            "type": "round_end",
            "round": event.round,
            "tricks_taken": list(event.tricks_taken),
            "tricks": [_trick_to_dict(t) for t in event.tricks],
        }
    if isinstance(event, TradeMove):
        return {"type": "trade", "seat": event.seat, "trade": event.trade}
    if isinstance(event, PlayMove):
        return {"type": "play", "seat": event.seat, "card": str(event.card)}
    raise TypeError(f"Unknown event type: {type(event).__name__}")


def event_from_dict(d: Dict[str, Any]) -> GameEvent:
    kind = d["type"]
    if kind == "start":
        return StartEvent()
    if kind == "end":
        return EndEvent(d.get("winner"))
    if kind == "round_start":
        return RoundStartEvent(
            int(d["round"]),
            int(d["dealer"]),
            _suit_from_json(d["trump"]),
            [_hand_from_dict(h) for h in d["hands"]],
        )
    if kind == "round_end":
        return RoundEndEvent(
            int(d["round"]),
            tuple(int(x) for x in d["tricks_taken"]),
            [_trick_from_dict(t) for t in d["tricks"]],
        )
    if kind == "trade":
        return TradeMove(int(d["seat"]), bool(d["trade"]))
    if kind == "play":
        return PlayMove(int(d["seat"]), parse_card(d["card"]))
    raise ValueError(f"Unknown event type: {kind!r}")


def _config_to_dict(cfg: GameConfig) -> Dict[str, Any]:
    d = asdict(cfg)
    d["trump_cycle"] = [_suit_to_json(s) for s in cfg.trump_cycle]
    return d


def _config_from_dict(d: Dict[str, Any]) -> GameConfig:
    return GameConfig(
        start_score=int(d.get("start_score", 9)),
        trump_cycle=tuple(_suit_from_json(s) for s in d["trump_cycle"]),
    )


def _record_to_dict(record: RoundRecord) -> Dict[str, Any]:
    d = asdict(record)
    d["trump"] = _suit_to_json(record.trump)
    return d


def _record_from_dict(d: Dict[str, Any]) -> RoundRecord:
    return RoundRecord(
        round=int(d["round"]),
        dealer=int(d["dealer"]),
        trump=_suit_from_json(d["trump"]),
        tricks_taken=tuple(d["tricks_taken"]),
        score_deltas=tuple(d["score_deltas"]),
        scores=tuple(d.get("scores", ())),
    )


def game_to_dict(game: Game) -> Dict[str, Any]:
    """Serialize a Game to a JSON-compatible dict."""
    return {
        "schema_version": SCHEMA_VERSION,
        "saved_at": datetime.now(timezone.utc).isoformat(),
        "config": _config_to_dict(game.config),
        "phase": game.phase.value,
        "round": game.round,
        "dealer": game.dealer,
        "winner": game.winner,
        "scores": list(game.scores),
        "players": [player_to_dict(p) for p in game.players],
        "state": state_to_dict(game.state) if game.state is not None else None,
        "events": [event_to_dict(e) for e in game.events],
        "round_history": [_record_to_dict(r) for r in game.round_history],
    }


def game_from_dict(d: Dict[str, Any], rng: random.Random | None = None) -> Game:
    """
    Restore a Game from a dict produced by ``game_to_dict``.
    Raises GameLoadError if the snapshot cannot be used.
    """
    try:
        version = d["schema_version"]
        if version != SCHEMA_VERSION:
            raise GameLoadError(f"Save version mismatch: file is {version}, current is {SCHEMA_VERSION}")
        if rng is None:
            rng = random.Random()
        players = [player_from_dict(p, random.Random(rng.random())) for p in d["players"]]
        game = Game(players, _config_from_dict(d["config"]), rng)
        game.phase = GamePhase(d["phase"])
        game.round = int(d["round"])
        game.dealer = int(d["dealer"])
        game.winner = d.get("winner")
        game.scores = [int(s) for s in d["scores"]]
        game.state = state_from_dict(d["state"]) if d.get("state") is not None else None
        game.events = [event_from_dict(e) for e in d.get("events", [])]
        game.round_history = [_record_from_dict(r) for r in d.get("round_history", [])]
    except GameLoadError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise GameLoadError(f"Corrupt game save: {e}") from e
    if game.phase is GamePhase.ROUND_STARTED and game.state is None:
        raise GameLoadError("Corrupt game save: round in progress without a state")
    return game


def game_to_json(game: Game) -> str:
    return json.dumps(game_to_dict(game), indent=2, ensure_ascii=False)


def game_from_json(s: str, rng: random.Random | None = None) -> Game:
    try:
        data = json.loads(s)
    except json.JSONDecodeError as e:
        raise GameLoadError(f"Game save is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GameLoadError("Game save must be a JSON object")
    return game_from_dict(data, rng)


def save_game(game: Game, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(game_to_json(game), encoding="utf-8")
    return path


def load_game(path: str | Path, rng: random.Random | None = None) -> Game:
    """Load a saved game. Raises GameLoadError if it cannot be resumed."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise GameLoadError(f"Could not read game save {path}: {e}") from e
    return game_from_json(text, rng)


__all__ = [
    "SCHEMA_VERSION",
    "state_to_dict",
    "state_from_dict",
    "player_to_dict",
    "player_from_dict",
    "event_to_dict",
    "event_from_dict",
    "game_to_dict",
    "game_from_dict",
    "game_to_json",
    "game_from_json",
    "save_game",
    "load_game",
]
