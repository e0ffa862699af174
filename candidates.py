"""Candidate bookkeeping: which dictionary words are still possible."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from lexicon import Lexicon
from wordle_env import LetterStatus


def is_consistent(
    candidate: str,
    guess: str,
    statuses: Sequence[LetterStatus],
) -> bool:
    """Could *candidate* be the secret, given one guess and its feedback?

    An UNUSED letter only rules its letter out of the whole word when it
    is UNUSED everywhere it appears in the guess.  If another copy of it
    came back CORRECT or MISPLACED, the UNUSED copy just means "no more
    of these" and the candidate is not rejected for containing it.
    Remaining per-letter counts are not tracked beyond that.
    """
    for i, status in enumerate(statuses):
        g = guess[i]
        if status is LetterStatus.CORRECT:
            if candidate[i] != g:
                return False
        elif status is LetterStatus.MISPLACED:
            if candidate[i] == g or g not in candidate:
                return False
        else:
            used_elsewhere = any(
                c == g and s is not LetterStatus.UNUSED
                for c, s in zip(guess, statuses)
            )
            if not used_elsewhere and g in candidate:
                return False
    return True


def filter_candidates(
    candidates: Iterable[str],
    guess: str,
    statuses: Sequence[LetterStatus],
) -> list[str]:
    """Keep only candidates consistent with the observed *statuses*."""
    return [w for w in candidates if is_consistent(w, guess, statuses)]


class CandidateSet:
    """The words still consistent with every guess of the current game.

    Owned by exactly one strategy instance; the lexicon it is built from
    is shared and never modified.
    """

    def __init__(self, lexicon: Lexicon) -> None:
        self._lexicon = lexicon
        self._words: list[str] = []

    def reset(self) -> None:
        """Start over from the full dictionary."""
        self._words = list(self._lexicon.words)

    def prune(self, guess: str, statuses: Sequence[LetterStatus]) -> int:
        """Drop every word inconsistent with *guess*/*statuses*.

        The set is swapped in one assignment once filtering is done.
        Returns how many words were removed.  An empty result is left
        in place; selecting from it raises later.
        """
        if len(statuses) != len(guess):
            raise ValueError(
                f"{len(statuses)} statuses for a {len(guess)}-letter guess"
            )
        kept = filter_candidates(self._words, guess, statuses)
        removed = len(self._words) - len(kept)
        self._words = kept
        return removed

    def remove(self, word: str) -> None:
        if word in self._words:
            self._words.remove(word)

    @property
    def words(self) -> tuple[str, ...]:
        return tuple(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._words))

    def __len__(self) -> int:
        return len(self._words)

    def __bool__(self) -> bool:
        return bool(self._words)
