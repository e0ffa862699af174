import pytest

from lexicon import Lexicon
from strategies.frequency_strat import FrequencyStrategy
from tests.helpers import WORDS
from wordle_env import WordleEnv


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def lexicon(words):
    return Lexicon(words=tuple(words))


@pytest.fixture
def small_lexicon():
    return Lexicon(words=("apple", "alloy", "allot"))


@pytest.fixture
def strategy(lexicon):
    strat = FrequencyStrategy(lexicon)
    strat.reset()
    return strat


@pytest.fixture
def env(lexicon):
    return WordleEnv(lexicon.words)
