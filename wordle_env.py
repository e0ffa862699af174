"""Wordle environment: feedback scoring and a single-game engine."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class LetterStatus(Enum):
    """Per-position feedback for one guessed letter."""

    CORRECT = "correct"      # right letter, right position
    MISPLACED = "misplaced"  # in the word, but not here
    UNUSED = "unused"        # not present, or already consumed by the others


@dataclass(frozen=True)
class GuessResult:
    """Outcome of one round, as handed back to a strategy.

    Attributes
    ----------
    word : str
        The word that was guessed (empty before the first guess).
    letter_statuses : tuple[LetterStatus, ...]
        One status per position of *word*.
    guesses : tuple[str, ...]
        Every guess made so far this game, *word* included.  Empty on
        round one.
    is_valid : bool
        False when the engine rejected the guess (wrong length, not a
        dictionary word).  Strategies must not consume invalid results.
    """

    word: str
    letter_statuses: tuple[LetterStatus, ...]
    guesses: tuple[str, ...]
    is_valid: bool = True

    @classmethod
    def initial(cls) -> GuessResult:
        """The result a driver passes in before anything was guessed."""
        return cls(word="", letter_statuses=(), guesses=())

    @classmethod
    def invalid(cls, word: str, guesses: Iterable[str] = ()) -> GuessResult:
        return cls(word=word, letter_statuses=(), guesses=tuple(guesses), is_valid=False)

    @property
    def is_correct(self) -> bool:
        return bool(self.letter_statuses) and all(
            s is LetterStatus.CORRECT for s in self.letter_statuses
        )


def feedback(secret: str, guess: str) -> tuple[LetterStatus, ...]:
    """Return the feedback for *guess* against *secret*."""
    n = len(secret)
    if len(guess) != n:
        raise ValueError(
            f"guess length ({len(guess)}) != secret length ({n})"
        )

    secret = secret.lower()
    guess = guess.lower()

    pat = [LetterStatus.UNUSED] * n
    remaining = Counter(secret)

    # Pass 1 – greens
    for i, (s, g) in enumerate(zip(secret, guess)):
        if g == s:
            pat[i] = LetterStatus.CORRECT
            remaining[g] -= 1

    # Pass 2 – yellows, left to right from what the greens left over
    for i, g in enumerate(guess):
        if pat[i] is LetterStatus.CORRECT:
            continue
        if remaining[g] > 0:
            pat[i] = LetterStatus.MISPLACED
            remaining[g] -= 1

    return tuple(pat)


class WordleEnv:
    """A single Wordle game.

    Parameters
    ----------
    vocabulary : Iterable[str]
        Valid words (all must have the same length).  Guesses outside of
        it come back as invalid results.
    word_length : int
        Expected word length (validated against vocabulary).
    max_guesses : int
        Maximum allowed guesses before the game is lost.
    """

    def __init__(
        self,
        vocabulary: Iterable[str],
        word_length: int = 5,
        max_guesses: int = 6,
    ) -> None:
        vocabulary = list(vocabulary)
        bad = [w for w in vocabulary if len(w) != word_length]
        if bad:
            raise ValueError(
                f"Words with wrong length (expected {word_length}): {bad[:5]}"
            )
        if max_guesses < 1:
            raise ValueError(f"max_guesses must be positive, got {max_guesses}")
        self._vocab = vocabulary
        self._vocab_set = set(vocabulary)
        self._word_length = word_length
        self._max_guesses = max_guesses

        # Game state (set by reset)
        self._secret: str | None = None
        self._history: list[GuessResult] = []
        self._solved = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reset(self, secret: str | None = None, rng: random.Random | None = None) -> None:
        """Start a new game. Random secret if *secret* is None."""
        if secret is not None:
            secret = secret.lower()
            if secret not in self._vocab_set:
                raise ValueError(f"secret {secret!r} is not in vocabulary")
        else:
            secret = (rng or random).choice(self._vocab)
        self._secret = secret
        self._history = []
        self._solved = False

    def guess(self, word: str) -> GuessResult:
        """Submit a guess and receive its result.

        A word of the wrong length or outside the vocabulary is answered
        with an invalid result and does not use up a turn.

        Raises
        ------
        RuntimeError
            If no game was started or the game is over.
        """
        if self._secret is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        word = word.strip().lower()
        previous = tuple(r.word for r in self._history)
        if len(word) != self._word_length or word not in self._vocab_set:
            return GuessResult.invalid(word, previous)

        result = GuessResult(
            word=word,
            letter_statuses=feedback(self._secret, word),
            guesses=previous + (word,),
        )
        self._history.append(result)
        if word == self._secret:
            self._solved = True
        return result

    def is_solved(self) -> bool:
        return self._solved

    def remaining_guesses(self) -> int:
        return self._max_guesses - len(self._history)

    def game_over(self) -> bool:
        return self._solved or len(self._history) >= self._max_guesses

    @property
    def history(self) -> list[GuessResult]:
        return list(self._history)

    @property
    def secret(self) -> str:
        """Reveal the secret word (only after game over)."""
        if self._secret is None:
            raise RuntimeError("No game in progress")
        if not self.game_over():
            raise RuntimeError("Game is still in progress")
        return self._secret
