"""
Exceptions raised by the engine.

All of them except ``GameLoadError`` signal a caller or bookkeeping bug and are
never caught inside the library.
"""
from __future__ import annotations


class NinesError(Exception):
    """Base class for engine errors."""


class IllegalMoveError(NinesError, ValueError):
    """A move that is not in the state's legal moves was attempted."""


class PhaseError(NinesError, RuntimeError):
    """An operation was called out of sequence (e.g. a move on a finished round)."""


class DeterminizationError(NinesError, RuntimeError):
    """The constrained redistribution of unseen cards has no solution."""


class KnowledgeDesyncError(NinesError, RuntimeError):
    """A player's knowledge does not match the hands of the state it observes."""


class GameLoadError(NinesError):
    """A saved game could not be resumed (corrupt file or version mismatch)."""


__all__ = [
    "NinesError",
    "IllegalMoveError",
    "PhaseError",
    "DeterminizationError",
    "KnowledgeDesyncError",
    "GameLoadError",
]
