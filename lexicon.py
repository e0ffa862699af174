"""Word-list loading.

The dictionary is a plain-text file, one word per line.  Lines are
trimmed and lower-cased, only ``word_length``-letter alphabetic words
are kept, and duplicates are dropped (first occurrence wins).  The
resulting :class:`Lexicon` is loaded once and shared read-only by every
game and strategy instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator


_DIR = Path(__file__).resolve().parent
_DATA = _DIR / "data"

DEFAULT_WORDS = _DATA / "wordle.txt"
MINI_WORDS = _DATA / "mini_wordle.txt"


# ------------------------------------------------------------------
# Lexicon dataclass
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Lexicon:
    """An immutable, deduplicated word list.

    Every word must be exactly ``word_length`` lowercase letters and
    appear once; anything else raises ``ValueError``.
    """
    words: tuple[str, ...]
    word_length: int = 5
    _word_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        words = tuple(self.words)
        pattern = _word_pattern(self.word_length)
        bad = [w for w in words if not pattern.fullmatch(w)]
        if bad:
            raise ValueError(
                f"Words that are not {self.word_length} lowercase letters: {bad[:5]}"
            )
        word_set = frozenset(words)
        if len(word_set) != len(words):
            dupes = sorted(w for w in word_set if words.count(w) > 1)
            raise ValueError(f"Duplicate words: {dupes[:5]}")
        object.__setattr__(self, "words", words)
        object.__setattr__(self, "_word_set", word_set)

    @classmethod
    def from_words(cls, words: Iterable[str], word_length: int = 5) -> Lexicon:
        """Normalize raw lines (trim, lower-case, filter, dedupe) into a Lexicon."""
        return cls(words=tuple(_normalize(words, word_length)), word_length=word_length)

    def __contains__(self, word: object) -> bool:
        return word in self._word_set

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)


# ------------------------------------------------------------------
# Loading
# ------------------------------------------------------------------

def _word_pattern(word_length: int) -> re.Pattern[str]:
    return re.compile(rf"[a-z]{{{word_length}}}")


def _normalize(lines: Iterable[str], word_length: int) -> list[str]:
    pattern = _word_pattern(word_length)
    seen: set[str] = set()
    words: list[str] = []
    for raw in lines:
        w = raw.strip().lower()
        if not w or w in seen:
            continue
        if pattern.fullmatch(w):
            seen.add(w)
            words.append(w)
    return words


def load_lexicon(path: str | Path | None = None, word_length: int = 5) -> Lexicon:
    """Load and validate the word list.

    Parameters
    ----------
    path : str, Path or None
        Plain-text file with one word per line.  None falls back to
        ``data/wordle.txt`` if it exists, else the bundled
        ``data/mini_wordle.txt``.
    word_length : int
        Only keep words of this exact length.

    Raises
    ------
    FileNotFoundError
        The word list does not exist.
    ValueError
        The file holds no usable words.
    """
    if path is not None:
        src = Path(path)
    elif DEFAULT_WORDS.exists():
        src = DEFAULT_WORDS
    else:
        src = MINI_WORDS

    if not src.is_file():
        raise FileNotFoundError(f"Word list not found: {src}")

    lex = Lexicon.from_words(src.read_text(encoding="utf-8").splitlines(), word_length)
    if not lex:
        raise ValueError(f"No {word_length}-letter words found in {src}")
    return lex
