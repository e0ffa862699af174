"""Abstract base class for Wordle strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wordle_env import GuessResult


class InvalidFeedbackError(ValueError):
    """A strategy was handed a result the engine marked as invalid."""


class NoCandidatesError(RuntimeError):
    """No dictionary word is consistent with the feedback seen so far."""


class Strategy(ABC):
    """Interface that every Wordle strategy must implement.

    A driver calls :meth:`reset` once per game, then
    :meth:`pick_next_guess` repeatedly, feeding back the engine's result
    for the previous guess (``GuessResult.initial()`` on round one).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable strategy name (used in reports)."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Forget the previous game and start from the full dictionary."""
        ...

    @abstractmethod
    def pick_next_guess(self, previous: GuessResult) -> str:
        """Return the next guess given the result of the previous one.

        Raises
        ------
        InvalidFeedbackError
            If *previous* is marked invalid.
        NoCandidatesError
            If no word is left to guess.
        """
        ...
