"""Letter-frequency strategy: prune on feedback, guess the best-covering word."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from candidates import CandidateSet
from lexicon import Lexicon
from strategy import InvalidFeedbackError, NoCandidatesError, Strategy
from wordle_env import GuessResult

OPENING_WORD = "arose"


def letter_frequencies(words: Iterable[str]) -> Counter:
    """Count, per letter, how many words contain it at least once."""
    counts: Counter = Counter()
    for w in words:
        counts.update(set(w))
    return counts


def score_word(word: str, frequencies: Counter) -> int:
    return sum(frequencies[c] for c in set(word))


def choose_best(words: Sequence[str]) -> str:
    """Highest-scoring word; ties go to the alphabetically first one."""
    if not words:
        raise NoCandidatesError("No remaining words to choose from")
    freq = letter_frequencies(words)
    return min(words, key=lambda w: (-score_word(w, freq), w))


class FrequencyStrategy(Strategy):
    """Open with a fixed word, then pick the candidate covering the most
    common letters among the words still possible.

    Parameters
    ----------
    lexicon : Lexicon
        Shared dictionary; never modified.
    opening_word : str
        First guess of every game.  Must be in *lexicon*.
    """

    def __init__(self, lexicon: Lexicon, opening_word: str = OPENING_WORD) -> None:
        opening_word = opening_word.lower()
        if opening_word not in lexicon:
            raise ValueError(f"opening word {opening_word!r} is not in the lexicon")
        self._opening = opening_word
        self._candidates = CandidateSet(lexicon)
        self._ready = False

    @property
    def name(self) -> str:
        return "Frequency"

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates.words

    def reset(self) -> None:
        self._candidates.reset()
        self._ready = True

    def pick_next_guess(self, previous: GuessResult) -> str:
        if not previous.is_valid:
            raise InvalidFeedbackError(
                "pick_next_guess called with an invalid previous result"
            )
        if not self._ready:
            raise RuntimeError("Call reset() before picking a guess")

        if not previous.guesses:
            self._candidates.remove(self._opening)
            return self._opening

        self._candidates.prune(previous.word, previous.letter_statuses)
        choice = choose_best(self._candidates.words)
        self._candidates.remove(choice)
        return choice
