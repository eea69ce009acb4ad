"""
Command-line interface for playing Nines and running self-play.

Usage examples (after ``pip install -e .``):

    nines play --difficulty expert --seed 1 --save saves/game.json
    nines resume --save saves/game.json
    nines self-play --games 20 --players expert advanced heuristic
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from .errors import GameLoadError
from .events import GameEvent, RoundEndEvent, RoundStartEvent
from .game import Game, play_game
from .moves import Move, PlayMove
from .persistence import load_game, save_game
from .policies import DEFAULT_ITERATION_SCALE, PLAYER_KINDS, Difficulty, make_player
from .tournament import run_self_play

HUMAN_SEAT = 0


def _add_play_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "play",
        help="Play a game against two computer players.",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        default=Difficulty.EXPERT.value,
        choices=[d.value for d in Difficulty],
        help="Difficulty of both computer opponents.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for dealing and the computer players.",
    )
    parser.add_argument(
        "--iteration-scale",
        type=int,
        default=DEFAULT_ITERATION_SCALE,
        help="Multiplier applied to the simulation counts of the difficulty tiers.",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Save the game to this JSON file after every round.",
    )
    parser.set_defaults(func=_cmd_play)


def _add_resume_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "resume",
        help="Continue a saved game.",
    )
    parser.add_argument(
        "--save",
        type=str,
        required=True,
        help="Path of the saved game.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the rest of the game.",
    )
    parser.set_defaults(func=_cmd_resume)


def _add_self_play_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "self-play",
        help="Play many games between computer players and print the results.",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=10,
        help="Number of games to play.",
    )
    parser.add_argument(
        "--players",
        nargs=3,
        default=["expert", "advanced", "heuristic"],
        choices=[k for k in PLAYER_KINDS if k != "human"],
        help="The three players of the line-up.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for dealing and the players.",
    )
    parser.add_argument(
        "--iteration-scale",
        type=int,
        default=DEFAULT_ITERATION_SCALE,
        help="Multiplier applied to the simulation counts of the difficulty tiers.",
    )
    parser.set_defaults(func=_cmd_self_play)


def format_move_menu(moves: List[Move]) -> str:
    return "\n".join(f"  {i}) {m}" for i, m in enumerate(moves, start=1))


def ask_move(game: Game, seat: int, moves: List[Move], input_fn=None) -> Move:
    """Print the round state and a numbered menu of ``moves``, read a choice."""
    if input_fn is None:
        input_fn = input
    state = game.state
    assert state is not None
    trick = state.current_trick
    if not trick.is_empty():
        print(f"Trick: {trick}")
    print(f"Your hand: {state.hand_of(seat)}")
    if not isinstance(moves[0], PlayMove):
        print(f"Trades so far: {state.trades_count}")
    print(format_move_menu(moves))
    while True:
        answer = input_fn("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(moves):
            return moves[int(answer) - 1]
        print(f"Enter a number between 1 and {len(moves)}.")


def _print_event(game: Game, event: GameEvent) -> None:
    if isinstance(event, RoundStartEvent):
        trump = event.trump.symbol if event.trump is not None else "no trump"
        print(f"\n=== Round {event.round}, dealer: seat {event.dealer}, trump: {trump} ===")
    elif isinstance(event, RoundEndEvent):
        print(f"Tricks taken: {list(event.tricks_taken)}, score changes: {list(event.score_deltas)}")
        print(f"Scores: {game.scores}")
    elif isinstance(event, PlayMove) and event.seat != HUMAN_SEAT:
        print(f"Seat {event.seat} plays {event.card}")


def _run_interactive(game: Game, save_path: Optional[Path]) -> None:
    def listener(event: GameEvent) -> None:
        _print_event(game, event)
        if save_path is not None and isinstance(event, RoundEndEvent):
            save_game(game, save_path)

    game.listeners.append(listener)
    try:
        play_game(game, ask_move)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted.")
        if save_path is not None:
            save_game(game, save_path)
            print(f"Saved game to {save_path.resolve()}")
        return
    finally:
        game.listeners.remove(listener)

    if save_path is not None:
        save_game(game, save_path)
    who = "You win!" if game.winner == HUMAN_SEAT else f"Seat {game.winner} wins."
    print(f"\nGame over after {game.round} rounds. {who}")


def _cmd_play(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    players = [make_player("human")] + [
        make_player(args.difficulty, random.Random(rng.random()), args.iteration_scale) for _ in range(2)
    ]
    game = Game(players, rng=rng)
    _run_interactive(game, Path(args.save) if args.save else None)


def _cmd_resume(args: argparse.Namespace) -> None:
    path = Path(args.save)
    try:
        game = load_game(path, random.Random(args.seed))
    except GameLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from e
    print(f"Resuming {game}")
    _run_interactive(game, path)


def _cmd_self_play(args: argparse.Namespace) -> None:
    kinds = list(args.players)

    def factory(rng: random.Random):
        return [make_player(k, random.Random(rng.random()), args.iteration_scale) for k in kinds]

    result = run_self_play(factory, args.games, random.Random(args.seed))
    print(result.summary())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nines", description="Nines card game for three players.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log round summaries (-v) or every move and search (-vv).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_play_parser(subparsers)
    _add_resume_parser(subparsers)
    _add_self_play_parser(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args.func(args)


if __name__ == "__main__":
    main()
