"""Nines card game engine for three players, with computer opponents."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_52, parse_card, parse_cards
from .hand import Hand, Deal, deal_hands, SEAT_COUNT, CARDS_PER_HAND
from .trick import Trick, card_beats
from .moves import Move, TradeMove, PlayMove
from .errors import (
    NinesError,
    IllegalMoveError,
    PhaseError,
    DeterminizationError,
    KnowledgeDesyncError,
    GameLoadError,
)
from .state import GameState, Phase
from .scoring import score_deltas, leader_seat, winner_seat
from .knowledge import Knowledge, determinize
from .search import RolloutOracle, SearchOracle
from .agents import Player, HumanPlayer, RandomPlayer, HeuristicPlayer
from .policies import Difficulty, DifficultyProfile, CheatingPlayer, MctsPlayer, make_player
from .game import Game, GameConfig, GamePhase, play_game
from .persistence import save_game, load_game
from .tournament import run_self_play, SelfPlayResult
